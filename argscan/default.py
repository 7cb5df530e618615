"""
Module-level functions that operate on a process-wide default :class:`~argscan.scanner.LineScanner`, for small scripts
that do not need more than one scanner::

    from argscan import default as argf

    while argf.scan():
        print(argf.text())
    if error := argf.error():
        print(error)
        sys.exit(1)

Without calling :func:`init`, the default scanner initializes itself from ``sys.argv[1:]`` the first time :func:`scan`
is called.
"""

from __future__ import annotations

import logging
from typing import Optional

from .scanner import LineScanner, Sources

__all__ = ['init', 'scan', 'text', 'line_bytes', 'error', 'get_default_scanner', 'reset_default_scanner']
log = logging.getLogger(__name__)

_default_scanner: Optional[LineScanner] = None


def get_default_scanner() -> LineScanner:
    global _default_scanner
    if _default_scanner is None:
        _default_scanner = LineScanner()
    return _default_scanner


def reset_default_scanner():
    """Close and discard the default scanner so that the next call to any function in this module creates a new one."""
    global _default_scanner
    if _default_scanner is not None:
        log.debug(f'Discarding default scanner={_default_scanner!r}')
        _default_scanner.close()
        _default_scanner = None


def init(sources: Sources):
    """
    Initialize the default scanner with the given file paths.  Should be called at most once, before :func:`scan`, e.g.
    with the positional arguments that remain after parsing flags.
    """
    get_default_scanner().init(sources)


def scan() -> bool:
    return get_default_scanner().scan()


def text() -> str:
    return get_default_scanner().text()


def line_bytes() -> bytes:
    return get_default_scanner().line_bytes()


def error() -> Optional[OSError]:
    return get_default_scanner().error()
