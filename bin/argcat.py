#!/usr/bin/env python

import codecs
import logging
import sys

from cli_command_parser import Command, Positional, Option, Flag, Counter, main

from argscan.__version__ import __author_email__, __version__  # noqa

log = logging.getLogger(__name__)


class ArgCat(Command, description='Concatenate files (or stdin, if no files are specified) and print them'):
    paths = Positional(nargs='*', help='The files to read (default: read from stdin)')
    number = Flag('-n', help='Number all output lines')
    encoding = Option(
        '-e', help='The encoding of input files; lines are re-encoded if stdout uses another encoding (default: utf-8)'
    )
    config = Option('-c', metavar='PATH', help='A YAML file containing scanner config')
    verbose = Counter('-v', help='Increase logging verbosity (can specify multiple times)')

    def _init_command_(self):
        from argscan.logging import init_logging

        init_logging(self.verbose)

    def main(self):
        from argscan.config import ScannerConfig
        from argscan.scanner import LineScanner

        config = ScannerConfig.from_file(self.config) if self.config else ScannerConfig()
        if self.encoding:
            config.update(encoding=self.encoding)

        out = sys.stdout.buffer
        out_encoding = sys.stdout.encoding or 'utf-8'
        # Bytes are written unchanged unless the input encoding differs from the output encoding
        transcode = codecs.lookup(config.encoding).name != codecs.lookup(out_encoding).name
        log.debug(f'Reading with {config}; output encoding={out_encoding!r}, {transcode=}')

        with LineScanner(self.paths or [], config=config) as scanner:
            while scanner.scan():
                if transcode:
                    line = scanner.text().encode(out_encoding, 'surrogateescape')
                else:
                    line = scanner.line_bytes()
                if self.number:
                    out.write(b'%6d\t' % scanner.line_number)
                out.write(line + b'\n')

            out.flush()
            if error := scanner.error():
                log.error(f'Error reading {scanner.filename}: {getattr(error, "strerror", None) or error}')
                sys.exit(1)


if __name__ == '__main__':
    main()
