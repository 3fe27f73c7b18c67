"""Reconcile the results of flaky test reruns.

For each shard and its reruns, a test is considered to have passed if it succeeded in any run,
and to be flaky if its result was not the same in every run. These results are informational
only; they do not change the merged test report.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Protocol

from gridresults.rerun import RerunGroups
from gridresults.resultdef import TestResult


@dataclass(frozen=True)
class FlakyVerdict:
    """Combined outcome of all runs of one test within a shard group."""

    passed_at_least_once: bool
    is_flaky: bool


# test name: verdict
GroupVerdicts = dict[str, FlakyVerdict]


class FlakyObserver(Protocol):
    """Receives the results of reconciliation as they are determined."""

    def groups_found(self, groups: RerunGroups):
        ...

    def group_reconciled(self, key: str, verdicts: GroupVerdicts):
        ...


class LoggingObserver:
    """Writes reconciliation results to the log."""

    def groups_found(self, groups: RerunGroups):
        logging.info('Merging flaky test results in %d shard groups', len(groups))
        for key, paths in groups.items():
            logging.debug('Group %s: %s', key, ', '.join(paths))

    def group_reconciled(self, key: str, verdicts: GroupVerdicts):
        passed = sum(1 for v in verdicts.values() if v.passed_at_least_once)
        logging.info('Group %s: %d of %d tests passed at least once',
                     key, passed, len(verdicts))
        for name, verdict in verdicts.items():
            if verdict.is_flaky:
                logging.info('Group %s: flaky test %s', key, name)


def fold_outcomes(outcomes: dict[str, list[bool]]) -> GroupVerdicts:
    """Turn the list of successes of each test into a verdict."""
    return {name: FlakyVerdict(passed_at_least_once=any(results),
                               is_flaky=len(set(results)) > 1)
            for name, results in outcomes.items()}


def reconcile_group(paths: list[str], parse: Callable[[str], TestResult]) -> GroupVerdicts:
    """Parse every artifact in a group and combine the results of each test by name."""
    outcomes = {}  # type: dict[str, list[bool]]
    for path in paths:
        for testcase in parse(path).testcases():
            outcomes.setdefault(testcase.name, []).append(testcase.successful())
    return fold_outcomes(outcomes)


def reconcile(groups: RerunGroups, parse: Callable[[str], TestResult],
              observer: FlakyObserver) -> dict[str, GroupVerdicts]:
    """Reconcile every group of reruns.

    Returns: dict of shard key to the verdicts for each test in that shard
    """
    observer.groups_found(groups)
    results = {}
    for key, paths in groups.items():
        results[key] = reconcile_group(paths, parse)
        observer.group_reconciled(key, results[key])
    return results
