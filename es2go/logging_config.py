"""Logging setup shared by the es2go modules.

Every module obtains its logger through :func:`get_logger` so that all
records end up under the ``es2go`` hierarchy and can be routed by a single
handler installed with :func:`configure_logging`.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "es2go"


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the ``es2go`` hierarchy."""
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: int | str = logging.WARNING, console: Console | None = None
) -> logging.Logger:
    """Install a rich handler on the package logger.

    Calling this more than once replaces the previous handler instead of
    stacking a new one.

    Args:
        level: Logging level name or number.
        console: Console to write to (defaults to stderr).

    Returns:
        The configured package logger.
    """
    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        if getattr(handler, "_es2go_handler", False):
            root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler._es2go_handler = True

    root.addHandler(handler)
    root.setLevel(level)
    return root
