"""Test case outcomes."""

from enum import IntEnum


class TestOutcome(IntEnum):
    """Enumeration of all possible outcomes of a single test case run."""
    __test__ = False

    PASS = 1        # test succeeded
    FAIL = 2        # test failed an assertion
    SKIP = 3        # test was skipped
    ERROR = 4       # test could not complete because of an error

    def successful(self) -> bool:
        """A skipped test counts as successful since it did not fail."""
        return self in (TestOutcome.PASS, TestOutcome.SKIP)
