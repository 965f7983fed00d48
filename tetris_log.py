"""Logging setup; the terminal belongs to the renderer so logs go to a file"""
import logging
from typing import Optional, Union

FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

_handler: Optional[logging.Handler] = None


def setup_logging(path: Optional[str] = None, level: Union[int, str] = logging.INFO) -> logging.Handler:
    """Attach a file handler to the root logger, or a NullHandler when no path is given.

    Calling it again replaces the handler installed by the previous call.
    """
    global _handler
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"unknown log level {level!r}")
    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
        _handler.close()
    if path:
        _handler = logging.FileHandler(path, encoding="utf-8")
        _handler.setFormatter(logging.Formatter(FORMAT, datefmt="%H:%M:%S"))
    else:
        _handler = logging.NullHandler()
    root.setLevel(level)
    root.addHandler(_handler)
    return _handler
