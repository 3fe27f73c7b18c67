"""Functions to set up common argument parsers."""

import argparse
import ast
import json
import os
from typing import Optional

from gridresults import config

KNOWN_PLATFORMS = ['android', 'ios']


class ExpandUserFileName:
    """argparsing type that checks if a file has the desired permisssions.

    User directories with tildes (e.g. ~user/foo) are expanded first.
    The file name is returned rather than an open file (unlike argparse.FileType) so the file
    can be opened only when it's needed.
    """

    def __init__(self, mode: str = 'r'):
        self.mode = mode

    def __call__(self, filename: str):
        fn = os.path.expanduser(filename)
        modebits = ((os.R_OK if 'r' in self.mode or '+' in self.mode else 0)
                    | (os.W_OK if 'w' in self.mode or 'x' in self.mode or 'a' in self.mode
                       or '+' in self.mode else 0))
        if not os.access(fn, modebits):
            raise argparse.ArgumentTypeError(f'{fn} does not exist or have permission')
        return fn


def shard_chunks_file(filename: str) -> list[list[str]]:
    """argparsing type that reads the test names run by each shard from a JSON file.

    The file holds a list with one list of test names per shard.
    """
    fn = ExpandUserFileName('r')(filename)
    try:
        with open(fn) as f:
            chunks = json.load(f)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f'{fn} is not valid JSON: {e}') from e
    if (not isinstance(chunks, list)
            or not all(isinstance(c, list) and all(isinstance(t, str) for t in c)
                       for c in chunks)):
        raise argparse.ArgumentTypeError(f'{fn} must hold a list of lists of test names')
    return chunks


class StoreMultipleConstAction(argparse.Action):
    """Store the value of the const to multiple attributes.

    const holds the value to store (defaults to True) and attrs is an iterable
    of attribute names to store the value, in addition to dest.
    """

    def __init__(self,
                 option_strings,
                 dest: str,
                 const: bool = True,
                 attrs: Optional[list[str]] = None,
                 default=None,
                 required: bool = False,
                 help=None,     # noqa: A002
                 metavar=None):
        super().__init__(
            option_strings=option_strings,
            dest=dest,
            nargs=0,
            const=const,
            default=default,
            required=required,
            help=help)
        self.attrs = attrs if attrs else []

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, self.const)
        for attr in self.attrs:
            setattr(namespace, attr, self.const)


class OverrideConfigAction(argparse.Action):
    """argparsing action that adds a configuration override."""
    def __init__(self,
                 option_strings,
                 dest: str,
                 default=None,
                 required: bool = False,
                 help=None):     # noqa: A002
        super().__init__(
            option_strings=option_strings,
            dest=dest,
            nargs=1,
            default=default,
            required=required,
            metavar='NAME=VALUE',
            help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        for assignment in values:
            try:
                name, rawval = assignment.split('=', 1)
            except ValueError as e:
                raise argparse.ArgumentTypeError(f'Missing = in {assignment}') from e
            # Let any exceptions through here since they provide detail about the problem
            val = ast.literal_eval(rawval) if rawval else ''
            config.add_override(name, val)


def arguments_config(parser: argparse.ArgumentParser):
    """Add arguments needed for manipulating the configuration."""
    parser.add_argument(
        '--set',
        action=OverrideConfigAction,
        help='Override a config value')


def arguments_logging(parser: argparse.ArgumentParser):
    """Add arguments needed for logging."""
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show more log messages')
    parser.add_argument(
        '--debug',
        action=StoreMultipleConstAction,
        attrs=['verbose'],
        help='Show debug level log messages')
    parser.add_argument(
        '--level-prefix',
        action='store_true',
        help='Include syslog priority level in log message as <N> prefix')


def arguments_run(parser: argparse.ArgumentParser):
    """Add arguments describing the test run whose results are to be merged."""
    parser.add_argument(
        'run_path',
        help='Run directory, or its name under the local results directory')
    parser.add_argument(
        '--platform',
        choices=KNOWN_PLATFORMS,
        default='android',
        help='Platform on which the tests ran, which determines the result file format')
    parser.add_argument(
        '--flaky-test-attempts',
        type=int,
        default=0,
        help='Number of times failed shards were rerun; enables flaky test reconciliation')
    parser.add_argument(
        '--files-to-download',
        nargs='*',
        metavar='REGEX',
        help='Patterns of additional artifact file names to collect '
             '(default: the files_to_download config value)')
    parser.add_argument(
        '--test-shard-chunks',
        type=shard_chunks_file,
        metavar='FILE',
        help='JSON file listing the test names run in each shard, for shard efficiency')
    parser.add_argument(
        '--timing-path',
        help='File or http(s) URL of the historical timing baseline')
