"""
Flask application factory.

Responsibilities:
- Jinja2 SSR of the resource listing page and its filter panel.
- Proxy to FastAPI for filter metadata, narrowed options and rows.
"""

from flask import Flask, redirect, url_for

from dependent_filter.core.config import settings
from dependent_filter.core.logging import configure_logging


def create_flask_app() -> Flask:
    """Application factory for Flask."""
    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE or None)

    app = Flask(
        __name__,
        template_folder="templates",
    )

    app.config["SECRET_KEY"] = settings.FLASK_SECRET_KEY
    app.config["DEBUG"] = settings.DEBUG
    app.config["API_BASE_URL"] = settings.API_BASE_URL

    # ── Blueprints ───────────────────────────────────────────
    from dependent_filter.routes.resources import resources_bp

    app.register_blueprint(resources_bp)

    # ── Root redirect ────────────────────────────────────────
    @app.route("/")
    def index():
        return redirect(url_for("resources.show", resource_key="time-entries"))

    # ── Error handlers ───────────────────────────────────────
    @app.errorhandler(404)
    def not_found(e):
        return _render_error(404, "Page not found"), 404

    @app.errorhandler(500)
    def server_error(e):
        return _render_error(500, "Internal server error"), 500

    return app


def _render_error(code: int, message: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>Error {code}</title>
</head>
<body>
  <h1>{code}</h1>
  <p>{message}</p>
  <a href="/">Back to start</a>
</body>
</html>"""
