"""Type definitions of parsed test result trees.

A TestResult holds TestSuites which hold TestCases, mirroring the structure of a JUnit XML
document. Trees are treated as values: the merge operations return new trees and never modify
their inputs.
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Iterator, Optional

from gridresults.testcasedef import TestOutcome


@dataclass
class TestCase:
    """Class to hold the result of a single test."""
    __test__ = False

    name: str                                # test name
    classname: str = ''                      # class or module holding the test
    time: float = 0.0                        # test duration in seconds
    outcome: TestOutcome = TestOutcome.PASS  # test result
    message: str = ''                        # failure or skip reason (if any)
    web_link: str = ''                       # link to the device run in the test grid console
    flaky: int = 0                           # number of additional runs merged into this one

    def successful(self) -> bool:
        return self.outcome.successful()

    def identity(self) -> tuple[str, str]:
        return (self.classname, self.name)

    def merge(self, other: 'TestCase') -> 'TestCase':
        """Combine another run of the same test case into this one.

        Durations and rerun counts accumulate; the other (later) run supplies the outcome.
        """
        return dataclasses.replace(
            other,
            time=self.time + other.time,
            flaky=self.flaky + other.flaky + 1)


@dataclass
class TestSuite:
    """Class to hold a named, ordered set of test cases."""
    __test__ = False

    name: str
    testcases: list[TestCase] = field(default_factory=list)
    time: float = 0.0

    @property
    def tests(self) -> int:
        return len(self.testcases)

    @property
    def failures(self) -> int:
        return sum(1 for tc in self.testcases if tc.outcome == TestOutcome.FAIL)

    @property
    def errors(self) -> int:
        return sum(1 for tc in self.testcases if tc.outcome == TestOutcome.ERROR)

    @property
    def skipped(self) -> int:
        return sum(1 for tc in self.testcases if tc.outcome == TestOutcome.SKIP)

    def copy(self) -> 'TestSuite':
        return TestSuite(self.name, [dataclasses.replace(tc) for tc in self.testcases], self.time)

    def find_case(self, classname: str, name: str) -> Optional[TestCase]:
        for testcase in self.testcases:
            if testcase.classname == classname and testcase.name == name:
                return testcase
        return None

    def merge(self, other: 'TestSuite') -> 'TestSuite':
        """Merge the test cases of a suite with the same name into a copy of this one."""
        if self.name != other.name:
            raise ValueError(f'Attempted to merge suite {other.name} into {self.name}')
        merged = self.copy()
        merged.time += other.time
        index = {}
        for i, testcase in enumerate(merged.testcases):
            index.setdefault(testcase.identity(), i)
        for testcase in other.testcases:
            i = index.get(testcase.identity())
            if i is None:
                index[testcase.identity()] = len(merged.testcases)
                merged.testcases.append(dataclasses.replace(testcase))
            else:
                merged.testcases[i] = merged.testcases[i].merge(testcase)
        return merged

    def merge_test_times(self, old: 'TestSuite') -> 'TestSuite':
        """Return a copy of this suite suitable for use as a timing baseline.

        Skipped cases are dropped. Successful cases keep their own time. A failed case takes the
        time of the first successful run of it in the old suite, or is dropped if there was none.
        """
        if self.name != old.name:
            raise ValueError(f'Attempted to merge times of suite {old.name} into {self.name}')
        testcases = []
        for testcase in self.testcases:
            if testcase.outcome == TestOutcome.SKIP:
                continue
            if testcase.successful():
                testcases.append(TestCase(testcase.name, testcase.classname, testcase.time))
                continue
            last_success = next((tc for tc in old.testcases
                                 if tc.successful()
                                 and tc.identity() == testcase.identity()), None)
            if last_success:
                testcases.append(TestCase(testcase.name, testcase.classname, last_success.time))
        return TestSuite(self.name, testcases, sum(tc.time for tc in testcases))


@dataclass
class TestResult:
    """Class to hold a whole test result tree, either for one artifact or for a merged run."""
    __test__ = False

    testsuites: list[TestSuite] = field(default_factory=list)

    def empty(self) -> bool:
        return not self.testsuites

    def find_suite(self, name: str) -> Optional[TestSuite]:
        for suite in self.testsuites:
            if suite.name == name:
                return suite
        return None

    def testcases(self) -> Iterator[TestCase]:
        """Iterate over every test case in every suite, in order."""
        for suite in self.testsuites:
            yield from suite.testcases

    def successful(self) -> bool:
        return all(tc.successful() for tc in self.testcases())

    def with_web_link(self, web_link: str) -> 'TestResult':
        """Return a copy of this tree with every test case pointing at the given web link."""
        return TestResult([
            TestSuite(suite.name,
                      [dataclasses.replace(tc, web_link=web_link) for tc in suite.testcases],
                      suite.time)
            for suite in self.testsuites])

    def merge(self, other: 'TestResult') -> 'TestResult':
        """Merge another tree into a copy of this one.

        Suites are matched by exact name; unmatched ones are appended in order.
        """
        merged = [suite.copy() for suite in self.testsuites]
        index = {}
        for i, suite in enumerate(merged):
            index.setdefault(suite.name, i)
        for suite in other.testsuites:
            i = index.get(suite.name)
            if i is None:
                index[suite.name] = len(merged)
                merged.append(suite.copy())
            else:
                merged[i] = merged[i].merge(suite)
        return TestResult(merged)

    def merge_test_times(self, old: Optional['TestResult']) -> 'TestResult':
        """Return a copy of this tree with failed test times filled in from an older run.

        Suites that don't exist in the old run are copied unchanged.
        """
        if old is None:
            return TestResult([suite.copy() for suite in self.testsuites])
        merged = []
        for suite in self.testsuites:
            old_suite = old.find_suite(suite.name)
            merged.append(suite.merge_test_times(old_suite) if old_suite else suite.copy())
        return TestResult(merged)
