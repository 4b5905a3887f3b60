import logging
import sys

from .errors import ConfigurationError


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the root logger with a single console handler."""
    level = level.strip().upper()
    # getLevelName maps known names to ints and anything else to "Level X"
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"Unknown log level {level!r}")

    handler = logging.StreamHandler(sys.stderr)
    fmt = "%(asctime)s %(levelname)s [%(name)s:%(module)s:%(lineno)d] %(message)s"
    handler.setFormatter(logging.Formatter(fmt, datefmt="%Y-%m-%dT%H:%M:%S%z"))

    root = logging.getLogger()
    root.setLevel(level)
    # don't stack handlers when called twice (tests, repeated CLI runs)
    for h in list(root.handlers):
        if getattr(h, "_smoke_alarm", False):
            root.removeHandler(h)
    handler._smoke_alarm = True
    root.addHandler(handler)
    return root
