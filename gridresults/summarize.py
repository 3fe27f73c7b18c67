"""Summarize the test cases in a result tree"""

import io

from gridresults.resultdef import TestResult
from gridresults.testcasedef import TestOutcome


def summarize_totals(result: TestResult, details: bool = False) -> list[str]:
    f = io.StringIO()
    testcases = list(result.testcases())
    print('OK:', len([1 for x in testcases if x.outcome == TestOutcome.PASS]), file=f)
    print('FAILED:', len([1 for x in testcases if x.outcome == TestOutcome.FAIL]), file=f)
    print('SKIPPED:', len([1 for x in testcases if x.outcome == TestOutcome.SKIP]), file=f)
    if match := [1 for x in testcases if x.outcome == TestOutcome.ERROR]:
        print('ERRORED:', len(match), file=f)
    if match := [1 for x in testcases if x.flaky]:
        print('RERUN:', len(match), file=f)
    print('TOTAL:', len(testcases), file=f)
    if details:
        # Display interesting test results
        for test in testcases:
            if not test.successful():
                print(f'{test.classname}#{test.name}: {test.outcome.name} {test.message}'.rstrip(),
                      file=f)
    f.seek(0)
    return f.readlines()
