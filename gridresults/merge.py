"""Merge the test results of every artifact in a run into one result tree.

Artifacts are merged strictly in the order given, which is the order in which they were found.
Suite and test case matching doesn't depend on that order, but the accumulated durations of
tests that appear more than once can differ in the last bits depending on the order in which the
floating point values are added.
"""

import functools
import logging
import os
from typing import Callable, Iterable

from gridresults.artifactdef import ArtifactPath, MalformedPathError
from gridresults.matrixdef import MatrixMap
from gridresults.resultdef import TestResult


def get_web_link(matrices: MatrixMap, path: str, results_root: str) -> str:
    """Find the console link of the matrix that produced an artifact.

    Returns an empty string if it can't be found.
    """
    try:
        artifact = ArtifactPath.decode(path, results_root)
    except MalformedPathError as e:
        logging.warning('Cannot determine matrix of artifact: %s', e)
        return ''
    matrix = matrices.find_by_path_suffix(artifact.matrix_path())
    if not matrix:
        logging.warning('Matrix path not found in matrix map: %s', artifact.matrix_path())
        return ''
    return matrix.web_link


def annotate(matrices: MatrixMap, path: str, results_root: str,
             parse: Callable[[str], TestResult]) -> TestResult:
    """Parse one artifact and point each of its test cases to its matrix."""
    logging.debug('Parsing %s', path)
    return parse(path).with_web_link(get_web_link(matrices, path, results_root))


def merge_results(results: Iterable[TestResult]) -> TestResult:
    """Merge trees in order, starting with an empty one."""
    return functools.reduce(TestResult.merge, results, TestResult())


def merge_artifacts(files: Iterable[str], parse: Callable[[str], TestResult],
                    matrices: MatrixMap, results_root: str) -> TestResult:
    """Parse and merge every artifact file.

    results_root is the directory holding the run directory, so that the artifact paths below
    it start with the run name. Parse errors are not caught since a merged result missing some
    artifacts would misreport the run.
    """
    files = list(files)
    if not files:
        logging.warning('No test result files found')
    merged = merge_results(annotate(matrices, fn, results_root, parse) for fn in files)
    logging.info('Merged %d files into %d test suites', len(files), len(merged.testsuites))
    return merged


def results_root_of(run_root: str) -> str:
    """Return the directory below which artifact paths begin with the run name."""
    return os.path.dirname(os.path.abspath(run_root))
