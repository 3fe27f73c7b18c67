"""Test log."""

import argparse
import logging
import unittest

from .context import gridresults  # noqa: F401

from gridresults import log  # noqa: I100


class TestLog(unittest.TestCase):
    def test_syslog_levels(self):
        for level, priority in [
            (logging.DEBUG, 7),
            (logging.INFO, 6),
            (logging.WARNING, 4),
            (logging.ERROR, 3),
            (logging.CRITICAL, 2),
            (logging.CRITICAL + 10, 1),
        ]:
            with self.subTest(level=level):
                self.assertEqual(priority, log.logging_level_to_syslog(level))

    def test_syslog_formatter(self):
        formatter = log.SyslogFormatter('%(message)s')
        record = logging.LogRecord('x', logging.WARNING, 'f.py', 1, 'Matrix %s', ('m1',), None)
        self.assertEqual('<4>Matrix m1', formatter.format(record))

    def test_setup(self):
        root = logging.getLogger()
        saved = root.handlers[:], root.level
        root.handlers = []
        try:
            log.setup(argparse.Namespace(debug=False, verbose=True, level_prefix=True), 'prog')
            self.assertEqual(logging.INFO, root.level)
            self.assertIsInstance(root.handlers[0].formatter, log.SyslogFormatter)
        finally:
            root.handlers, level = saved
            root.setLevel(level)
