"""Utility functions used in multiple tests."""

import os
from typing import Optional
from unittest.mock import patch

from gridresults import config
from gridresults.resultdef import TestCase, TestResult, TestSuite
from gridresults.testcasedef import TestOutcome


# Directory holding test data files
DATADIR = 'data'


def data_file(fn: str) -> str:
    """Return the path to a given test data file."""
    return os.path.join(os.path.dirname(__file__), DATADIR, fn)


def read_data(fn: str) -> str:
    with open(data_file(fn)) as f:
        return f.read()


def write_tree(root: str, files: dict[str, str]):
    """Create files with the given contents below root, creating directories as needed."""
    for relpath, contents in files.items():
        path = os.path.join(root, relpath)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'w') as f:
            f.write(contents)


def suite_xml(name: str, cases: list[tuple[str, float, Optional[str]]]) -> str:
    """Return a JUnit document with one suite holding cases of (name, time, failure tag)."""
    lines = [f'<testsuite name="{name}">']
    for case, time, tag in cases:
        if tag:
            lines.append(f'  <testcase name="{case}" classname="c" time="{time}"><{tag}/></testcase>')
        else:
            lines.append(f'  <testcase name="{case}" classname="c" time="{time}"/>')
    lines.append('</testsuite>')
    return '\n'.join(lines) + '\n'


def make_result(suites: dict[str, dict[str, float]],
                outcome: TestOutcome = TestOutcome.PASS) -> TestResult:
    """Create a result tree from {suite: {test: time}}."""
    return TestResult([
        TestSuite(name, [TestCase(test, 'c', time, outcome) for test, time in cases.items()],
                  sum(cases.values()))
        for name, cases in suites.items()])


def patch_config_get(key: str, value):
    """Mock config.get() to return a specific value for a given key.

    All other keys return the originally-configured value. Multiple items can be overridden by
    calling this more than once, but it cannot be used as a decorator in that case; it must
    be called within the test (for example as a context manager) because each patch must have access
    to the mock installed by the previous call, which isn't the case when called as a decorator.
    """
    def side_effect(k: str):
        return value if k == key else orig_get(k)

    # Use the original (or the previously-patched) get() for unmatched keys
    orig_get = config.get
    return patch('gridresults.config.get', side_effect=side_effect)


def patch_config_expand(key: str, value: str):
    """Mock config.expand() to return a specific value for a given key.

    The same restrictions apply as for patch_config_get().
    """
    def side_effect(k: str):
        return value if k == key else orig_expand(k)

    orig_expand = config.expand
    return patch('gridresults.config.expand', side_effect=side_effect)
