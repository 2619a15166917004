"""
Logging setup for the AnimeForge API.

setup_logging() runs once when the FastAPI app is built. Modules get their
own logger with ``logging.getLogger(__name__)``.
"""

import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger and quiet noisy third-party loggers."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="[%(name)s] %(message)s",
        stream=sys.stdout,
        force=True,
    )

    for name in (
        "httpx",
        "httpcore",
        "openai",
        "urllib3",
        "uvicorn.access",
        "sqlalchemy.engine",
    ):
        logging.getLogger(name).setLevel(logging.WARNING)
