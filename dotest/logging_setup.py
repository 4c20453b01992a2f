from __future__ import annotations
import logging

# Libraries that are chatty at DEBUG
_QUIET_LOGGERS = ("sqlalchemy.engine", "httpx", "multipart")


def level_from_name(name: str | None, default: int = logging.INFO) -> int:
    """Map a level name such as "debug" to its logging constant."""
    if not name:
        return default
    value = logging.getLevelName(name.strip().upper())
    return value if isinstance(value, int) else default


def setup_console_logging(level: int | str = logging.INFO) -> None:
    """
    Call once at process start (server, CLI or script).
    Accepts a level constant or a name like "DEBUG".
    """
    if isinstance(level, str):
        level = level_from_name(level)

    root = logging.getLogger()
    root.setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    if root.handlers:
        # pytest or uvicorn installed handlers already
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] %(levelname)s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root.addHandler(handler)
