import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] jobboard %(name)s: %(message)s"

# Third-party loggers that drown out lifecycle events at INFO
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "sqlalchemy.pool", "httpx", "multipart")


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        from app.config import settings

        level = settings.log_level
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def setup_logging(level: int | str | None = None) -> None:
    """Send every app logger to stdout with one format; lifecycle modules log at INFO."""
    level = _resolve_level(level)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        root.handlers.clear()
    root.addHandler(handler)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
