"""Logging setup: stdlib loggers rendered through rich."""

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

_HANDLER_NAME = "shop_smoke.rich"


def setup_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a rich console handler to the package logger. Safe to call twice."""
    logger = logging.getLogger("shop_smoke")
    logger.setLevel(level if isinstance(level, int) else level.upper())
    
    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = RichHandler(
            console=console,
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(handler)
    
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a module logger under the package namespace."""
    if not name.startswith("shop_smoke"):
        name = f"shop_smoke.{name}"
    return logging.getLogger(name)
