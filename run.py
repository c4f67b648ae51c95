"""
Dependent Filter — Application Runner.

Usage:
    python run.py          → Both servers (API + Web)
    python run.py both     → Both servers (API + Web)
    python run.py api      → Only FastAPI  (API_PORT, default 8000)
    python run.py web      → Only Flask    (FLASK_PORT, default 5000)
    python run.py seed     → Create the schema and insert demo data
"""

import asyncio
import signal
import subprocess
import sys
import time

import uvicorn

from dependent_filter.core.config import settings
from dependent_filter.core.logging import configure_logging


def run_fastapi() -> None:
    """Start the FastAPI options API."""
    print(f"🚀 FastAPI → http://localhost:{settings.API_PORT}")
    uvicorn.run(
        "dependent_filter.main:create_fastapi_app",
        factory=True,
        host="0.0.0.0",
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )


def run_flask() -> None:
    """Start the Flask SSR frontend."""
    print(f"🌐 Flask   → http://localhost:{settings.FLASK_PORT}")
    from dependent_filter.flask_app import create_flask_app

    app = create_flask_app()
    app.run(host="0.0.0.0", port=settings.FLASK_PORT, debug=settings.DEBUG)


def run_seed() -> None:
    """Insert the demo clients / projects / users / time entries."""
    from dependent_filter.models.seed import seed_demo_data

    configure_logging(settings.LOG_LEVEL)
    inserted = asyncio.run(seed_demo_data())
    print("✅ Demo data inserted" if inserted else "ℹ️  Demo data already present")


def run_both() -> None:
    """Launch FastAPI as a subprocess, Flask in the main process."""
    sep = "=" * 60
    print(sep)
    print(f"  {settings.APP_NAME} — Starting both servers")
    print(f"  API:  http://localhost:{settings.API_PORT}  (FastAPI)")
    print(f"  Web:  http://localhost:{settings.FLASK_PORT}  (Flask)")
    print(sep)

    api_proc = subprocess.Popen(
        [sys.executable, sys.argv[0], "api"],
        stdout=sys.stdout,
        stderr=sys.stderr,
    )
    time.sleep(2)

    def cleanup(signum=None, frame=None):
        print("\n🛑 Shutting down both servers …")
        api_proc.terminate()
        try:
            api_proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            api_proc.kill()
        sys.exit(0)

    signal.signal(signal.SIGINT, cleanup)
    signal.signal(signal.SIGTERM, cleanup)

    try:
        run_flask()
    finally:
        cleanup()


if __name__ == "__main__":
    mode = sys.argv[1].lower() if len(sys.argv) > 1 else "both"
    runners = {"api": run_fastapi, "web": run_flask, "both": run_both, "seed": run_seed}
    runner = runners.get(mode)
    if runner is None:
        print(f"Unknown mode '{mode}'. Use: api | web | both | seed")
        sys.exit(1)
    runner()
