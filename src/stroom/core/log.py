import logging
import sys
from typing import TYPE_CHECKING, Any, Optional

import structlog

if TYPE_CHECKING:
    from ..config import Config

_HANDLER_NAME = "stroom_handler"

_configured = False


def configure_logging(level: str = "INFO", renderer: str = "json") -> None:
    """
    Configures structlog to render events through the stdlib root logger.

    Calling it again replaces the level and renderer but never installs a
    second handler.

    :param level: A stdlib level name such as 'DEBUG' or 'INFO'.
    :param renderer: 'json' for one JSON object per line, 'console' for
        human-readable output.
    """
    global _configured

    if renderer not in ("json", "console"):
        raise ValueError(f"Unknown log renderer '{renderer}', expected 'json' or 'console'")

    root_logger = logging.getLogger()
    if _HANDLER_NAME not in [h.get_name() for h in root_logger.handlers]:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler.set_name(_HANDLER_NAME)
        root_logger.addHandler(handler)
    root_logger.setLevel(level.upper())

    final_processor: Any
    if renderer == "json":
        final_processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            final_processor,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    _configured = True


def configure_logging_from(config: Optional["Config"]) -> None:
    """Applies the `logging.level` and `logging.renderer` keys of a Config."""
    if config is None:
        return
    level = config.get("logging.level")
    renderer = config.get("logging.renderer")
    if level is None and renderer is None:
        return
    configure_logging(level=level or "INFO", renderer=renderer or "json")


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Returns a structlog logger for the given name.

    If neither the application nor stroom has configured structlog yet, a
    JSON configuration writing to stderr is installed first.
    """
    if not _configured and not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)
