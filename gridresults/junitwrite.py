"""Writes test result trees as JUnit XML."""

import xml.etree.ElementTree as ET

from gridresults.resultdef import TestResult
from gridresults.testcasedef import TestOutcome


# Child element describing each unsuccessful outcome
OUTCOME_TAGS = {
    TestOutcome.FAIL: 'failure',
    TestOutcome.ERROR: 'error',
    TestOutcome.SKIP: 'skipped',
}

# Files are always written using this character map
XML_DECLARATION = "<?xml version='1.0' encoding='UTF-8'?>\n"


def format_time(seconds: float) -> str:
    return f'{seconds:.3f}'


def to_element(result: TestResult) -> ET.Element:
    root = ET.Element('testsuites')
    for suite in result.testsuites:
        suite_elem = ET.SubElement(root, 'testsuite', {
            'name': suite.name,
            'tests': str(suite.tests),
            'failures': str(suite.failures),
            'errors': str(suite.errors),
            'skipped': str(suite.skipped),
            'time': format_time(suite.time),
        })
        for testcase in suite.testcases:
            attrs = {
                'name': testcase.name,
                'classname': testcase.classname,
                'time': format_time(testcase.time),
            }
            if testcase.flaky:
                attrs['flaky'] = str(testcase.flaky)
            if testcase.web_link:
                attrs['webLink'] = testcase.web_link
            case_elem = ET.SubElement(suite_elem, 'testcase', attrs)
            if tag := OUTCOME_TAGS.get(testcase.outcome):
                child = ET.SubElement(case_elem, tag)
                if testcase.message:
                    child.set('message', testcase.message)
    return root


def to_string(result: TestResult) -> str:
    root = to_element(result)
    ET.indent(root)
    return XML_DECLARATION + ET.tostring(root, encoding='unicode') + '\n'


def write_xml(result: TestResult, path: str):
    with open(path, 'w', encoding='UTF-8') as f:
        f.write(to_string(result))
