"""Renderers for the merged results of a run."""

import logging
import os
import sys
import textwrap
from html import escape
from typing import Optional, Protocol, TextIO

import gridresults
from gridresults import config
from gridresults import junitwrite
from gridresults import summarize
from gridresults.matrixdef import MatrixMap, resolve_local_run_path
from gridresults.resultdef import TestResult


class Report(Protocol):
    """Creates one kind of report from the results of a run."""

    def run(self, matrices: MatrixMap, result: TestResult):
        ...


class MatrixResultsReport:
    """Shows the outcome of each matrix and the test totals."""

    def __init__(self, out: Optional[TextIO] = None):
        self.out = out

    def run(self, matrices: MatrixMap, result: TestResult):
        out = self.out or sys.stdout
        print('Matrix results:', file=out)
        for matrix in matrices.map.values():
            print(f'  {matrix.matrix_id}: {matrix.state} {matrix.outcome} {matrix.web_link}'
                  .rstrip(), file=out)
        print(''.join(summarize.summarize_totals(result, details=True)), end='', file=out)


class JUnitReport:
    """Writes the merged results as a JUnit XML file into the run directory."""

    def run(self, matrices: MatrixMap, result: TestResult):
        path = os.path.join(resolve_local_run_path(matrices), config.get('junit_report_file'))
        junitwrite.write_xml(result, path)
        logging.info('Wrote JUnit report %s', path)


class HtmlErrorReport:
    """Writes an HTML page listing the failed tests into the run directory."""

    def format_html(self, result: TestResult) -> str:
        rows = []
        for suite in result.testsuites:
            for testcase in suite.testcases:
                if testcase.successful():
                    continue
                name = escape(f'{testcase.classname}#{testcase.name}')
                if testcase.web_link:
                    name = f'<a href="{escape(testcase.web_link)}">{name}</a>'
                rows.append(f'<tr><td>{escape(suite.name)}</td><td>{name}</td>'
                            f'<td>{escape(testcase.outcome.name)}</td>'
                            f'<td><pre>{escape(testcase.message)}</pre></td></tr>')
        return textwrap.dedent(f"""\
            <!DOCTYPE html>
            <html><head><title>Test Failures</title>
            <meta name="generator" content="gridresults {gridresults.__version__}">
            </head>
            <body>
            <h1>Test Failures</h1>
            <table>
            <tr><th>Suite</th><th>Test</th><th>Result</th><th>Message</th></tr>
            """) + '\n'.join(rows) + '\n</table>\n</body></html>\n'

    def run(self, matrices: MatrixMap, result: TestResult):
        path = os.path.join(resolve_local_run_path(matrices),
                            config.get('html_error_report_file'))
        with open(path, 'w', encoding='UTF-8') as f:
            f.write(self.format_html(result))
        logging.info('Wrote error report %s', path)
