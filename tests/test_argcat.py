#!/usr/bin/env python

import os
import sys
from pathlib import Path
from subprocess import run, CompletedProcess

from argscan.test_common import TestCaseBase, main

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ARGCAT = PROJECT_ROOT.joinpath('bin', 'argcat.py')


class ArgCatTest(TestCaseBase):
    def argcat(self, *args: str, stdin: bytes = b'') -> CompletedProcess:
        env = {**os.environ, 'PYTHONIOENCODING': 'utf-8'}
        env['PYTHONPATH'] = os.pathsep.join(filter(None, (PROJECT_ROOT.as_posix(), env.get('PYTHONPATH'))))
        return run([sys.executable, ARGCAT.as_posix(), *args], input=stdin, capture_output=True, env=env, timeout=60)

    def test_files_are_concatenated(self):
        paths = self.make_files(**{'a.txt': b'1\n2', 'b.txt': b'3\r\n'})
        result = self.argcat(paths['a.txt'], paths['b.txt'])
        self.assertEqual(0, result.returncode, result.stderr)
        self.assertEqual(b'1\n2\n3\n', result.stdout)

    def test_invalid_utf8_is_passed_through(self):
        paths = self.make_files(**{'a.bin': b'ok\n\xff\xfe\n'})
        result = self.argcat(paths['a.bin'])
        self.assertEqual(0, result.returncode, result.stderr)
        self.assertEqual(b'ok\n\xff\xfe\n', result.stdout)

    def test_stdin(self):
        result = self.argcat(stdin=b'x\n\xe9\n')
        self.assertEqual(0, result.returncode, result.stderr)
        self.assertEqual(b'x\n\xe9\n', result.stdout)

    def test_numbered_lines(self):
        paths = self.make_files(**{'a.txt': b'a\nb\n'})
        result = self.argcat('-n', paths['a.txt'])
        self.assertEqual(0, result.returncode, result.stderr)
        self.assertEqual(b'     1\ta\n     2\tb\n', result.stdout)

    def test_input_encoding(self):
        paths = self.make_files(**{'a.txt': 'café\n'.encode('latin-1')})
        result = self.argcat('-e', 'latin-1', paths['a.txt'])
        self.assertEqual(0, result.returncode, result.stderr)
        self.assertEqual('café\n'.encode('utf-8'), result.stdout)

    def test_missing_file(self):
        paths = self.make_files(**{'a.txt': b'a\n', 'c.txt': b'c\n'})
        missing = self.missing_path()
        result = self.argcat(paths['a.txt'], missing, paths['c.txt'])
        self.assertEqual(1, result.returncode)
        self.assertEqual(b'a\n', result.stdout)
        self.assertIn(f'Error reading {missing}: No such file or directory', result.stderr.decode('utf-8'))


if __name__ == '__main__':
    main()
