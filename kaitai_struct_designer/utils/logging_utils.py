import logging
import sys
from typing import IO, Optional

CLI_FORMAT = "%(name)s - %(levelname)s - %(message)s"
SERVER_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class _LevelBelowFilter(logging.Filter):
    """Passes records strictly below a level."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self._level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self._level


def _reset_root(level: int) -> logging.Logger:
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    return root


def _stream_handler(stream: IO[str], level: int, formatter: logging.Formatter) -> logging.StreamHandler:
    handler = logging.StreamHandler(stream=stream)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_split_stream_logging(
    *,
    level: int = logging.INFO,
    stderr_level: int = logging.WARNING,
    formatter: Optional[logging.Formatter] = None,
) -> None:
    """Configure root logging for the command line tools.

    Records below ``stderr_level`` go to stdout, the rest to stderr, so lint
    output stays readable while problems loading files remain visible when
    stdout is redirected.
    """
    root = _reset_root(level)
    formatter = formatter or logging.Formatter(CLI_FORMAT)
    stderr_level = max(stderr_level, logging.DEBUG)

    stdout_handler = _stream_handler(sys.stdout, logging.DEBUG, formatter)
    stdout_handler.addFilter(_LevelBelowFilter(stderr_level))
    root.addHandler(stdout_handler)
    root.addHandler(_stream_handler(sys.stderr, stderr_level, formatter))


def configure_stderr_logging(
    *,
    level: int = logging.INFO,
    formatter: Optional[logging.Formatter] = None,
) -> None:
    """Configure root logging to write everything to stderr.

    The language server talks LSP over stdout, so nothing else may be written there.
    """
    root = _reset_root(level)
    root.addHandler(_stream_handler(sys.stderr, logging.DEBUG, formatter or logging.Formatter(SERVER_FORMAT)))
