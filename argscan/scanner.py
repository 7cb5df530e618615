"""
Line-by-line reading from either files given as command-line arguments or, if none were given, from stdin.

Example implementation of the Unix utility ``cat``::

    scanner = LineScanner.from_process_arguments()
    while scanner.scan():
        print(scanner.text())
    if error := scanner.error():
        print(error, file=sys.stderr)
        sys.exit(1)

If flags are required, create the scanner with the non-flag arguments that remain after parsing them, e.g.
``LineScanner(args.paths)``.

Scanners are not thread-safe.  Use one scanner per thread.
"""

from __future__ import annotations

import logging
import os
import sys
from collections import deque
from io import TextIOBase
from typing import BinaryIO, TextIO, Iterable, Iterator, Optional, Sequence, Union

from .config import ScannerConfig
from .exceptions import ScannerUsageError, AlreadyInitializedError

__all__ = ['LineScanner', 'process_arguments', 'strip_line_ending', 'STDIN_NAME']
log = logging.getLogger(__name__)

STDIN_NAME = '<stdin>'

PathLike = Union[str, os.PathLike]
Sources = Union[PathLike, Iterable[PathLike], None]


class LineScanner:
    """
    Reads lines from a sequence of files, one after another, as if they were a single stream.  If no files are
    provided, then lines are read from stdin instead.

    :param sources: The paths of files that should be read, in order.  An empty sequence indicates that stdin should be
      read.  If None (the default), then the scanner is initialized from ``sys.argv[1:]`` the first time :meth:`.scan`
      is called, unless :meth:`.init` is called first.
    :param stdin: A stream to use instead of ``sys.stdin`` when no files are provided.  Binary streams are read
      directly; text streams without an underlying binary buffer are re-encoded line by line using the configured
      encoding.
    :param config: A :class:`~argscan.config.ScannerConfig` controlling how lines are decoded by :meth:`.text`
    :param config_kwargs: Keyword arguments used to initialize a ScannerConfig, if ``config`` was not provided
    """

    def __init__(
        self, sources: Sources = None, *, stdin: BinaryIO = None, config: ScannerConfig = None, **config_kwargs
    ):
        self.config = config if config is not None else ScannerConfig(config_kwargs)
        self._stdin = stdin
        self._initialized = False
        self._use_stdin = False
        self._pending: deque[str] = deque()
        self._current: Optional[BinaryIO] = None
        self._current_name: Optional[str] = None
        self._stdin_exhausted = False
        self._line: Optional[bytes] = None
        self._text: Optional[str] = None
        self._error: Optional[Exception] = None
        self._scanned = False
        self._success = False
        self._closed = False
        self._line_num = 0
        self._file_line_num = 0
        if sources is not None:
            self.init(sources)

    @classmethod
    def from_process_arguments(cls, argv: Sequence[str] = None, **kwargs) -> LineScanner:
        """
        :param argv: The full argument list of the program, including the program name (default: ``sys.argv``)
        :param kwargs: Keyword arguments to pass to :class:`LineScanner`
        :return: A LineScanner initialized with every argument except the program name
        """
        return cls(process_arguments(argv), **kwargs)

    def __repr__(self) -> str:
        if not self._initialized:
            state = 'uninitialized'
        elif self._closed:
            state = 'closed'
        elif self._use_stdin:
            state = 'stdin, exhausted' if self._stdin_exhausted else 'stdin'
        else:
            state = f'current={self._current_name!r}, pending={len(self._pending)}'
        return f'<{self.__class__.__name__}[{state}]>'

    def __enter__(self) -> LineScanner:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __iter__(self) -> Iterator[str]:
        while self.scan():
            yield self.text()

    # region Initialization

    def init(self, sources: Sources):
        """
        Initialize the sources that this scanner will read.  If ``sources`` is empty, then stdin will be read instead
        of files for the lifetime of this scanner.

        :param sources: The paths of files that should be read, in order
        :raises: :class:`~argscan.exceptions.AlreadyInitializedError` if this scanner was already initialized, or
          :class:`~argscan.exceptions.ScannerUsageError` if stdin should be read, but it is not available
        """
        if self._initialized:
            raise AlreadyInitializedError(self)

        if isinstance(sources, (str, os.PathLike)):
            sources = [sources]
        sources = [os.fspath(src) for src in sources]
        if sources:
            log.debug(f'Initialized {self.__class__.__name__} with {len(sources)} file source(s)')
            self._pending.extend(sources)
        else:
            stream = self._stdin if self._stdin is not None else sys.stdin
            if stream is None:
                raise ScannerUsageError(f'No file sources were provided, and stdin is not available for {self!r}')
            log.debug(f'Initialized {self.__class__.__name__} with no file sources - reading from stdin')
            self._use_stdin = True
            self._current = _binary_stream(stream, self.config.encoding, self.config.errors)
            self._current_name = STDIN_NAME
        self._initialized = True

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def use_stdin(self) -> bool:
        return self._use_stdin

    @property
    def pending(self) -> tuple[str, ...]:
        """The sources that have not been opened yet"""
        return tuple(self._pending)

    # endregion

    # region Scanning

    def scan(self) -> bool:
        """
        Reads the next line from either stdin or the current file.  If the current file has been exhausted, then the
        next file is opened, if there is one.

        :return: True if a line was read, False if all input was exhausted or an error was encountered.  Use
          :meth:`.error` to distinguish between the two.
        """
        self._scanned = True
        self._success = False
        if self._error is not None or self._closed:
            return False
        elif not self._initialized:
            self.init(process_arguments())

        while True:
            if self._current is None and not self._open_next():
                return False
            try:
                line = self._current.readline()
            except OSError as e:
                log.debug(f'Error reading {self._current_name}: {e}')
                self._error = e
                self._release_current()
                return False
            if line:
                break

            log.debug(f'Done reading {self._current_name}')
            if self._use_stdin:
                self._stdin_exhausted = True
            self._release_current()

        self._line = strip_line_ending(line)
        self._text = None
        self._line_num += 1
        self._file_line_num += 1
        self._success = True
        return True

    def _open_next(self) -> bool:
        if self._use_stdin or not self._pending:
            return False

        self._current_name = path = self._pending.popleft()
        self._file_line_num = 0
        try:
            self._current = open(path, 'rb')
        except (OSError, ValueError) as e:  # ValueError: the path contains a null byte
            log.debug(f'Error opening {path!r}: {e}')
            self._error = e
            return False

        log.debug(f'Opened {path}')
        return True

    def _release_current(self):
        if not self._use_stdin:
            self._current.close()
        self._current = None

    def close(self):
        """
        Stop scanning.  Closes the file that is currently open (stdin is never closed) and discards any sources that
        have not been opened yet.  Subsequent calls to :meth:`.scan` will return False.
        """
        if self._current is not None:
            log.debug(f'Closing {self._current_name}')
            self._release_current()
        self._pending.clear()
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    # endregion

    # region Results

    def text(self) -> str:
        """
        :return: The current line as a string, without its trailing newline.  Returns the same value each time until
          the next call to :meth:`.scan`.
        :raises: :class:`~argscan.exceptions.ScannerUsageError` unless preceded by a call to :meth:`.scan` that returned
          True
        """
        self._require_line('text')
        if self._text is None:
            self._text = self._line.decode(self.config.encoding, self.config.errors)
        return self._text

    def line_bytes(self) -> bytes:
        """
        :return: The current line as bytes, without its trailing newline.  Returns the same value each time until the
          next call to :meth:`.scan`.
        :raises: :class:`~argscan.exceptions.ScannerUsageError` unless preceded by a call to :meth:`.scan` that returned
          True
        """
        self._require_line('line_bytes')
        return self._line

    def error(self) -> Optional[Exception]:
        """
        :return: The error that caused :meth:`.scan` to return False, or None if it returned False because all input
          was exhausted.  This is usually an :class:`OSError`, but it will be a :class:`ValueError` if a path could
          not be opened because it contained a null byte.
        :raises: :class:`~argscan.exceptions.ScannerUsageError` if :meth:`.scan` was never called
        """
        if not self._scanned:
            raise ScannerUsageError(f'error() called before scan() on {self!r}')
        return self._error

    def _require_line(self, accessor: str):
        if not self._scanned:
            raise ScannerUsageError(f'{accessor}() called before scan() on {self!r}')
        elif not self._success:
            raise ScannerUsageError(f'{accessor}() called after scan() returned False on {self!r}')

    @property
    def filename(self) -> Optional[str]:
        """
        The name of the source that the current line was read from.  After a failure to open a file, this is the path
        of the file that could not be opened.
        """
        return self._current_name

    @property
    def line_number(self) -> int:
        """The number of lines that have been read from all sources so far"""
        return self._line_num

    @property
    def file_line_number(self) -> int:
        """The number of lines that have been read from the current source so far"""
        return self._file_line_num

    # endregion


def strip_line_ending(line: bytes) -> bytes:
    """Strip one trailing ``\\n``, and one ``\\r`` immediately before it, if present"""
    if line.endswith(b'\n'):
        line = line[:-1]
        if line.endswith(b'\r'):
            line = line[:-1]
    return line


def process_arguments(argv: Sequence[str] = None) -> list[str]:
    """
    :param argv: The full argument list of the program (default: ``sys.argv``)
    :return: The arguments, excluding the program name
    """
    if argv is None:
        argv = sys.argv
    return list(argv[1:])


def _binary_stream(stream: Union[BinaryIO, TextIO], encoding: str, errors: str) -> BinaryIO:
    if isinstance(stream, TextIOBase):
        if (buffer := getattr(stream, 'buffer', None)) is not None:
            return buffer
        return _EncodingReader(stream, encoding, errors)  # noqa
    return stream


class _EncodingReader:
    """Provides lines from a text stream that has no underlying binary buffer (such as a StringIO) as bytes"""

    __slots__ = ('stream', 'encoding', 'errors')

    def __init__(self, stream: TextIO, encoding: str, errors: str):
        self.stream = stream
        self.encoding = encoding
        self.errors = errors

    def readline(self) -> bytes:
        return self.stream.readline().encode(self.encoding, self.errors)
