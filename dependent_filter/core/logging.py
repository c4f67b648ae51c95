"""
Logging setup shared by the FastAPI and Flask processes.

Modules never configure handlers themselves; they only do::

    logger = logging.getLogger(__name__)

and the runner calls ``configure_logging()`` once at startup.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
_MARKER = "_dependent_filter_handler"


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Attach a stream handler (and a rotating file handler when *log_file*
    is set) to the root logger.

    Calling it twice does not duplicate handlers.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    if any(getattr(h, _MARKER, False) for h in root.handlers):
        return

    formatter = logging.Formatter(_FORMAT)

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    setattr(stream, _MARKER, True)
    root.addHandler(stream)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        setattr(file_handler, _MARKER, True)
        root.addHandler(file_handler)
