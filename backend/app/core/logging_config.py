"""
Process-wide logging setup. Modules log through logging.getLogger(__name__).
"""
import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    numeric_level = getattr(logging, (level or settings.LOG_LEVEL or "INFO").upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    root_logger = logging.getLogger()
    # Only install a handler if nobody (uvicorn, pytest) already did.
    if not root_logger.handlers:
        logging.basicConfig(format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    root_logger.setLevel(numeric_level)
