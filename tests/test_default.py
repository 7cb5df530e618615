#!/usr/bin/env python

from io import BytesIO
from unittest.mock import patch

from argscan import default as argf
from argscan.exceptions import ScannerUsageError, AlreadyInitializedError
from argscan.test_common import TestCaseBase, main


class DefaultScannerTest(TestCaseBase):
    def setUp(self):
        super().setUp()
        argf.reset_default_scanner()
        self.addCleanup(argf.reset_default_scanner)

    def test_init_and_scan(self):
        paths = self.make_files(**{'a.txt': b'1\n2', 'b.txt': b'3\n'})
        argf.init([paths['a.txt'], paths['b.txt']])
        lines = []
        while argf.scan():
            lines.append((argf.text(), argf.line_bytes()))
        self.assertEqual([('1', b'1'), ('2', b'2'), ('3', b'3')], lines)
        self.assertIsNone(argf.error())

    def test_scan_without_init_uses_argv(self):
        paths = self.make_files(**{'a.txt': b'x\r\n'})
        with patch('sys.argv', ['prog', paths['a.txt']]):
            self.assertTrue(argf.scan())
        self.assertEqual('x', argf.text())
        self.assertFalse(argf.scan())
        self.assertIsNone(argf.error())

    def test_scan_without_args_uses_stdin(self):
        with patch('sys.argv', ['prog']), patch('sys.stdin', BytesIO(b'a\nb\nc')):
            lines = []
            while argf.scan():
                lines.append(argf.text())
        self.assertEqual(['a', 'b', 'c'], lines)
        self.assertIsNone(argf.error())

    def test_open_error(self):
        argf.init([self.missing_path()])
        self.assertFalse(argf.scan())
        self.assertIsInstance(argf.error(), FileNotFoundError)
        with self.assertRaises(ScannerUsageError):
            argf.text()

    def test_usage_errors(self):
        for func in (argf.text, argf.line_bytes, argf.error):
            with self.subTest(func=func.__name__), self.assertRaises(ScannerUsageError):
                func()

    def test_init_twice(self):
        argf.init(['a.txt'])
        with self.assertRaises(AlreadyInitializedError):
            argf.init(['b.txt'])

    def test_reset_closes_default_scanner(self):
        paths = self.make_files(**{'a.txt': b'1\n2\n'})
        argf.init([paths['a.txt']])
        self.assertTrue(argf.scan())
        scanner = argf.get_default_scanner()
        f = scanner._current
        argf.reset_default_scanner()
        self.assertTrue(f.closed)
        self.assertTrue(scanner.closed)
        self.assertIsNot(scanner, argf.get_default_scanner())


if __name__ == '__main__':
    main()
