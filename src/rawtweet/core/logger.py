import logging
import sys

_HANDLER_NAME = "rawtweet"


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _level(level: str) -> int:
    return getattr(logging, level.upper(), logging.WARNING)


def configure_root_logger(level: str = "WARNING") -> None:
    """
    Configure the root logger and the rawtweet-specific logger.

    Logs go to stderr; stdout is reserved for the response body.
    Root stays at WARNING to suppress library noise (httpx, httpcore).
    Only the rawtweet namespace is set to the requested level.

    Safe to call multiple times; it will not duplicate handlers (idempotent).
    """
    root = logging.getLogger()

    for h in root.handlers:
        if h.get_name() == _HANDLER_NAME:
            # Already configured; just update rawtweet logger level
            logging.getLogger("rawtweet").setLevel(_level(level))
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(_build_formatter())
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("rawtweet").setLevel(_level(level))


def get_logger(name: str = "rawtweet") -> logging.Logger:
    """Get a module-specific logger; level and handlers come from the rawtweet root."""
    return logging.getLogger(name)
