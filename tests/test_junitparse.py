"""Test junitparse and junitwrite."""

import io
import os
import tempfile
import unittest

from .context import gridresults  # noqa: F401
from .util import data_file

from gridresults import junitparse  # noqa: I100
from gridresults import junitwrite
from gridresults.resultdef import TestCase, TestResult, TestSuite
from gridresults.testcasedef import TestOutcome


class TestParseOneSuite(unittest.TestCase):
    """Test junitparse.parse_one_suite_xml."""

    def test_android(self):
        result = junitparse.parse_one_suite_xml(data_file('android_result.xml'))
        self.assertEqual(1, len(result.testsuites))
        suite = result.testsuites[0]
        self.assertEqual('', suite.name)
        self.assertEqual(9.25, suite.time)
        self.assertEqual([
            TestCase('testLogin', 'com.example.app.LoginTest', 3.5, TestOutcome.PASS),
            TestCase('testLogout', 'com.example.app.LoginTest', 1250.0, TestOutcome.FAIL,
                     'java.lang.AssertionError: expected logged out\n'
                     '\tat com.example.app.LoginTest.testLogout(LoginTest.java:42)'),
            TestCase('testSignup', 'com.example.app.SignupTest', 0.0, TestOutcome.SKIP),
            TestCase('testCrash', 'com.example.app.SignupTest', 0.75, TestOutcome.ERROR,
                     'Instrumentation run failed', flaky=2),
        ], suite.testcases)

    def test_wrapped_single_suite(self):
        data = b'<testsuites><testsuite name="s"><testcase name="t"/></testsuite></testsuites>'
        result = junitparse.parse_one_suite_xml(io.BytesIO(data))
        self.assertEqual(TestResult([TestSuite('s', [TestCase('t')])]), result)

    def test_multiple_suites_rejected(self):
        with self.assertRaises(junitparse.ParseError):
            junitparse.parse_one_suite_xml(data_file('ios_result.xml'))

    def test_corrupt(self):
        with self.assertRaises(junitparse.ParseError):
            junitparse.parse_one_suite_xml(data_file('corrupt_result.xml'))

    def test_wrong_root(self):
        with self.assertRaises(junitparse.ParseError):
            junitparse.parse_one_suite_xml(io.BytesIO(b'<html><body/></html>'))


class TestParseAllSuites(unittest.TestCase):
    """Test junitparse.parse_all_suites_xml."""

    def test_ios(self):
        result = junitparse.parse_all_suites_xml(data_file('ios_result.xml'))
        self.assertEqual(['EarlGreyExampleSwiftTests', 'EarlGreyExampleTests'],
                         [s.name for s in result.testsuites])
        self.assertEqual(2.5, result.testsuites[0].time)
        # Missing suite time is the sum of its tests
        self.assertEqual(0.5, result.testsuites[1].time)
        self.assertEqual([TestOutcome.PASS, TestOutcome.FAIL, TestOutcome.PASS],
                         [tc.outcome for tc in result.testcases()])
        self.assertEqual('Failed to match', result.testsuites[0].testcases[1].message)

    def test_bare_suite(self):
        result = junitparse.parse_all_suites_xml(data_file('android_result.xml'))
        self.assertEqual(4, result.testsuites[0].tests)

    def test_empty_suites(self):
        self.assertEqual(TestResult(),
                         junitparse.parse_all_suites_xml(io.BytesIO(b'<testsuites/>')))


class TestWrite(unittest.TestCase):
    """Test junitwrite."""

    def test_write_and_parse(self):
        result = TestResult([
            TestSuite('s1', [
                TestCase('a', 'c', 1.5, TestOutcome.PASS, web_link='https://example.com/1'),
                TestCase('b', 'c', 0.25, TestOutcome.FAIL, 'assert 1 == 2', flaky=1),
                TestCase('c', 'c', 0.0, TestOutcome.SKIP),
                TestCase('d', 'c', 2.0, TestOutcome.ERROR, 'crash'),
            ], 3.75),
            TestSuite('s2 <&>', [TestCase('e&f', 'c', 1.0)], 1.0),
        ])
        with tempfile.TemporaryDirectory() as tmpdir:
            fn = os.path.join(tmpdir, 'JUnitReport.xml')
            junitwrite.write_xml(result, fn)
            self.assertEqual(result, junitparse.parse_all_suites_xml(fn))

    def test_counters(self):
        result = TestResult([TestSuite('s', [
            TestCase('a', outcome=TestOutcome.FAIL),
            TestCase('b', outcome=TestOutcome.SKIP),
        ], 0.0)])
        text = junitwrite.to_string(result)
        self.assertTrue(text.startswith("<?xml version='1.0' encoding='UTF-8'?>\n<testsuites>"))
        self.assertIn('<testsuite name="s" tests="2" failures="1" errors="0" skipped="1" '
                      'time="0.000">', text)

    def test_empty(self):
        self.assertEqual(TestResult(),
                         junitparse.parse_all_suites_xml(
                             io.BytesIO(junitwrite.to_string(TestResult()).encode())))
