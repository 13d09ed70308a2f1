"""
Logging configuration for the exswallow command line.

Library modules only create loggers; handlers are attached here, once,
by the CLI.
"""

import logging
import os
import sys

# EXSWALLOW_DEBUG=1 turns on debug output without --debug
_debug_env = os.getenv("EXSWALLOW_DEBUG")
DEBUG_ENV_ENABLED = _debug_env is not None and _debug_env not in ("", "0")

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class FlushingStreamHandler(logging.StreamHandler):
    """StreamHandler that flushes after every emit."""
    def emit(self, record):
        super().emit(record)
        try:
            self.flush()
        except Exception:
            self.handleError(record)


def _create_stderr_handler(level: int) -> logging.StreamHandler:
    handler = FlushingStreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT))
    return handler


def configure_logging(debug: bool = False) -> logging.Logger:
    """
    Attach a stderr handler to the package logger.

    Calling this again replaces the previous handler instead of stacking.
    """
    level = logging.DEBUG if (debug or DEBUG_ENV_ENABLED) else logging.WARNING

    package_logger = logging.getLogger("exswallow")
    for handler in list(package_logger.handlers):
        if isinstance(handler, FlushingStreamHandler):
            package_logger.removeHandler(handler)

    package_logger.addHandler(_create_stderr_handler(level))
    package_logger.setLevel(level)
    package_logger.propagate = False
    return package_logger
