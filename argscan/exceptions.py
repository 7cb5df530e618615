"""
Exceptions raised by the argscan package

Errors encountered while opening or reading input are not represented here: the :class:`OSError` raised by the I/O
layer is stored by the scanner as-is and returned by :meth:`LineScanner.error()
<argscan.scanner.LineScanner.error>`.
"""

__all__ = ['ScannerException', 'ScannerUsageError', 'AlreadyInitializedError']


class ScannerException(Exception):
    """Base exception for errors raised by argscan itself"""


class ScannerUsageError(ScannerException):
    """Exception to be raised when a scanner is used incorrectly by the calling code"""


class AlreadyInitializedError(ScannerUsageError):
    """Exception to be raised when a scanner's sources are initialized more than once"""

    def __init__(self, scanner):
        self.scanner = scanner

    def __str__(self) -> str:
        return f'{self.scanner!r} was already initialized - sources may only be provided once, before scanning'
