"""Parses JUnit XML test result files.

Android runs produce one <testsuite> per file, while iOS runs produce a <testsuites> document
holding one suite per test target.
"""

import logging
import xml.etree.ElementTree as ET
from typing import BinaryIO, Optional, Union

from gridresults.resultdef import TestCase, TestResult, TestSuite
from gridresults.testcasedef import TestOutcome


ParseError = ET.ParseError

# File name or open binary file
XmlSource = Union[str, BinaryIO]


def parse_float(value: Optional[str]) -> float:
    """Convert a time attribute into seconds, treating missing or invalid values as 0."""
    if not value:
        return 0.0
    try:
        return float(value.replace(',', ''))
    except ValueError:
        logging.debug('Invalid time value %s', value)
        return 0.0


def parse_testcase(elem: ET.Element) -> TestCase:
    outcome = TestOutcome.PASS
    message = ''
    for tag, result in (('failure', TestOutcome.FAIL),
                        ('error', TestOutcome.ERROR),
                        ('skipped', TestOutcome.SKIP)):
        if (child := elem.find(tag)) is not None:
            outcome = result
            message = child.get('message') or (child.text or '').strip()
            break
    try:
        flaky = int(elem.get('flaky', '0'))
    except ValueError:
        flaky = 0
    return TestCase(name=elem.get('name', ''),
                    classname=elem.get('classname', ''),
                    time=parse_float(elem.get('time')),
                    outcome=outcome,
                    message=message,
                    web_link=elem.get('webLink', ''),
                    flaky=flaky)


def parse_testsuite(elem: ET.Element) -> TestSuite:
    testcases = [parse_testcase(tc) for tc in elem.findall('testcase')]
    if 'time' in elem.attrib:
        time = parse_float(elem.get('time'))
    else:
        time = sum(tc.time for tc in testcases)
    return TestSuite(elem.get('name', ''), testcases, time)


def parse_all_suites_xml(path: XmlSource) -> TestResult:
    """Parse a file holding any number of test suites.

    A bare <testsuite> root is accepted as a document with one suite.
    """
    root = ET.parse(path).getroot()
    if root.tag == 'testsuite':
        return TestResult([parse_testsuite(root)])
    if root.tag != 'testsuites':
        raise ParseError(f'Unexpected root element <{root.tag}> in {path}')
    return TestResult([parse_testsuite(s) for s in root.findall('testsuite')])


def parse_one_suite_xml(path: XmlSource) -> TestResult:
    """Parse a file holding a single test suite.

    A <testsuites> wrapper around the suite is tolerated.
    """
    root = ET.parse(path).getroot()
    if root.tag == 'testsuites':
        suites = root.findall('testsuite')
        if len(suites) != 1:
            raise ParseError(f'Expected one test suite in {path} but found {len(suites)}')
        root = suites[0]
    elif root.tag != 'testsuite':
        raise ParseError(f'Unexpected root element <{root.tag}> in {path}')
    return TestResult([parse_testsuite(root)])
