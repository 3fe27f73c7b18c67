"""Test argparsing."""

import argparse
import os
import tempfile
import unittest

from .context import gridresults  # noqa: F401

from gridresults import argparsing  # noqa: I100
from gridresults import config


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser()
    argparsing.arguments_logging(parser)
    argparsing.arguments_config(parser)
    argparsing.arguments_run(parser)
    return parser


class TestShardChunksFile(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.fn = os.path.join(self.tmpdir.name, 'chunks.json')

    def tearDown(self):
        self.tmpdir.cleanup()
        super().tearDown()

    def write(self, contents: str):
        with open(self.fn, 'w') as f:
            f.write(contents)

    def test_valid(self):
        self.write('[["T1", "T2"], ["T3"], []]')
        self.assertEqual([['T1', 'T2'], ['T3'], []], argparsing.shard_chunks_file(self.fn))

    def test_not_json(self):
        self.write('[["T1"')
        with self.assertRaises(argparse.ArgumentTypeError):
            argparsing.shard_chunks_file(self.fn)

    def test_wrong_shape(self):
        for contents in ('{"T1": 1}', '["T1", "T2"]', '[[1, 2]]'):
            with self.subTest(contents=contents):
                self.write(contents)
                with self.assertRaises(argparse.ArgumentTypeError):
                    argparsing.shard_chunks_file(self.fn)

    def test_missing(self):
        with self.assertRaises(argparse.ArgumentTypeError):
            argparsing.shard_chunks_file(os.path.join(self.tmpdir.name, 'nonexistent.json'))


class TestArguments(unittest.TestCase):
    def tearDown(self):
        config.overrides.clear()
        config.get.cache_clear()
        config.expand.cache_clear()
        super().tearDown()

    def test_defaults(self):
        args = make_parser().parse_args(['run1'])
        self.assertEqual('run1', args.run_path)
        self.assertEqual('android', args.platform)
        self.assertEqual(0, args.flaky_test_attempts)
        self.assertIsNone(args.test_shard_chunks)
        self.assertIsNone(args.timing_path)
        self.assertFalse(args.verbose)

    def test_debug_implies_verbose(self):
        args = make_parser().parse_args(['--debug', 'run1'])
        self.assertTrue(args.debug)
        self.assertTrue(args.verbose)

    def test_files_to_download(self):
        args = make_parser().parse_args(['run1', '--files-to-download', r'.*\.mp4$', 'logcat'])
        self.assertEqual([r'.*\.mp4$', 'logcat'], args.files_to_download)

    def test_set_override(self):
        make_parser().parse_args(['--set', 'http_timeout=5', 'run1'])
        self.assertEqual(5, config.get('http_timeout'))

    def test_set_missing_equals(self):
        with self.assertRaises(argparse.ArgumentTypeError):
            make_parser().parse_args(['--set', 'http_timeout', 'run1'])
