"""
Log handler setup for programs that use argscan.

Library modules in this package only create loggers via ``logging.getLogger(__name__)``; handlers are configured by
the program that uses them, typically by calling :func:`init_logging` once at startup.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from logging import LogRecord, Logger, Filter, Formatter, StreamHandler
from typing import Optional, Union, Collection, TextIO

from tzlocal import get_localzone

from .color import colored

__all__ = ['init_logging', 'DatetimeFormatter', 'ColorLogFormatter', 'VERBOSE', 'ENTRY_FMT_DETAILED']
log = logging.getLogger(__name__)

VERBOSE = 19
ENTRY_FMT_DETAILED = '%(asctime)s %(levelname)s %(name)s %(lineno)d %(message)s'
LEVEL_COLORS = {logging.WARNING: 'yellow', logging.ERROR: 'red', logging.CRITICAL: 'red'}

_NotSet = object()

Verbosity = Union[int, bool, None]


def init_logging(
    verbosity: Verbosity = 0,
    *,
    names: Optional[Collection[str]] = _NotSet,
    entry_fmt: str = None,
    date_fmt: str = None,
    millis: bool = False,
    fix_sigpipe: bool = True,
):
    """
    Replaces the handlers on the given loggers with a stdout handler for messages below logging.WARNING and a stderr
    handler for logging.WARNING and above.  Output to a terminal is colorized by level.

    The verbosity argument controls the minimum level of messages written to stdout:
    - 0: 20 = logging.INFO (default)
    - 1: 19 = VERBOSE
    - 2: 10 = logging.DEBUG
    - 3+: 9 and below, with a more detailed message format

    :param verbosity: Higher values allow lower level messages to be written to stdout
    :param names: The names of the loggers that should be configured.  If None, then the root logger is configured.
      If not specified, then the ``argscan`` and ``__main__`` loggers are configured.
    :param entry_fmt: The message format to use.  Defaults to ``'%(message)s'``, or :data:`ENTRY_FMT_DETAILED` when
      verbosity > 2.
    :param date_fmt: The datetime format to use for ``%(asctime)s``
    :param millis: Include milliseconds in the default datetime format (ignored if ``date_fmt`` is specified)
    :param fix_sigpipe: Restore the default SIGPIPE handler so that writing to a closed pipe (such as when output is
      piped to ``head``) ends the program quietly.
    """
    if fix_sigpipe:
        import signal
        try:
            signal.signal(signal.SIGPIPE, signal.SIG_DFL)
        except (AttributeError, ValueError):
            pass  # Not available on Windows, or not called from the main thread

    if logging.getLevelName(VERBOSE) != 'VERBOSE':
        logging.addLevelName(VERBOSE, 'VERBOSE')

    entry_fmt = entry_fmt or (ENTRY_FMT_DETAILED if verbosity and verbosity > 2 else '%(message)s')
    date_fmt = date_fmt or ('%Y-%m-%d %H:%M:%S.%f %Z' if millis else '%Y-%m-%d %H:%M:%S %Z')
    handlers = (
        _stream_handler(sys.stdout, _stdout_level(verbosity), False, entry_fmt, date_fmt),
        _stream_handler(sys.stderr, logging.WARNING, True, entry_fmt, date_fmt),
    )
    for logger in _get_loggers(names):
        logger.setLevel(logging.NOTSET)  # Levels are enforced by the handlers
        logger.handlers = list(handlers)

    log.debug(f'Initialized logging with verbosity={verbosity}')


def _stdout_level(verbosity: Verbosity) -> int:
    if not verbosity:
        return logging.INFO
    elif verbosity == 1:
        return VERBOSE
    return max(logging.DEBUG + 2 - verbosity, logging.NOTSET)


def _stream_handler(stream: TextIO, level: int, warnings: bool, entry_fmt: str, date_fmt: str) -> StreamHandler:
    handler = StreamHandler(stream)
    handler.name = 'stderr' if warnings else 'stdout'
    handler.setLevel(level)
    handler.addFilter(_WarningFilter(warnings))
    is_tty = getattr(stream, 'isatty', None)
    formatter_cls = ColorLogFormatter if is_tty is not None and is_tty() else DatetimeFormatter
    handler.setFormatter(formatter_cls(entry_fmt, date_fmt))
    return handler


def _get_loggers(names: Optional[Collection[str]]) -> list[Logger]:
    if names is _NotSet:
        names = (__name__.split('.')[0], '__main__')
    elif names is None:
        return [logging.getLogger()]
    elif isinstance(names, str):
        names = (names,)
    return [logging.getLogger(name) for name in names]


class _WarningFilter(Filter):
    """Accepts only records with level >= logging.WARNING, or only records below it"""

    def __init__(self, warnings: bool):
        super().__init__()
        self.warnings = warnings

    def filter(self, record: LogRecord) -> bool:
        return (record.levelno >= logging.WARNING) == self.warnings


class DatetimeFormatter(Formatter):
    """Renders ``%(asctime)s`` in the local timezone, and enables use of ``%f`` (microseconds) in datetime formats."""

    _local_tz = get_localzone()

    def formatTime(self, record: LogRecord, datefmt: str = None) -> str:
        dt = datetime.fromtimestamp(record.created, self._local_tz)
        if datefmt:
            return dt.strftime(datefmt)
        return dt.isoformat(sep=' ', timespec='milliseconds')


class ColorLogFormatter(DatetimeFormatter):
    """
    Colorizes warnings and errors.  A specific color may be used for a given message via the ``extra`` parameter when
    logging, for example::\n
        log.info('Finished', extra={'color': 'green'})
    """

    def format(self, record: LogRecord) -> str:
        formatted = super().format(record)
        color = getattr(record, 'color', None) or LEVEL_COLORS.get(record.levelno)
        return colored(formatted, color) if color else formatted
