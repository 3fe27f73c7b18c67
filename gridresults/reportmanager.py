"""Generate all the reports for a completed run."""

import argparse
import logging
import os
from typing import Callable, Iterable, Optional

from gridresults import artifacts
from gridresults import config
from gridresults import efficiency
from gridresults import flaky
from gridresults import junitparse
from gridresults import merge
from gridresults import reports
from gridresults import rerun
from gridresults.matrixdef import ExitCode, MatrixMap, resolve_local_run_path
from gridresults.resultdef import TestResult
from gridresults.timingstore import TimingStore


# Platforms whose test results hold all test suites in a single file
MULTI_SUITE_PLATFORMS = frozenset(('ios',))


def select_parser(platform: str) -> Callable[[str], TestResult]:
    if platform in MULTI_SUITE_PLATFORMS:
        return junitparse.parse_all_suites_xml
    return junitparse.parse_one_suite_xml


def parse_test_suite(matrices: MatrixMap, args: argparse.Namespace,
                     observer: Optional[flaky.FlakyObserver] = None) -> TestResult:
    """Find, parse and merge the test results of every shard and device in the run."""
    run_root = resolve_local_run_path(matrices)
    results_root = merge.results_root_of(run_root)
    parse = select_parser(args.platform)
    files_to_download = args.files_to_download
    if files_to_download is None:
        files_to_download = config.get('files_to_download')
    found = artifacts.find_artifacts(run_root, artifacts.regex_list(files_to_download))
    result_re = artifacts.test_result_regex()
    result_files = [fn for fn in found if result_re.match(os.path.basename(fn))]
    if len(found) > len(result_files):
        logging.info('Found %d additional artifacts', len(found) - len(result_files))

    if args.flaky_test_attempts > 0:
        # Informational only; the merged result is not affected
        flaky.reconcile(rerun.group_reruns(result_files, results_root, enabled=True), parse,
                        observer or flaky.LoggingObserver())

    return merge.merge_artifacts(result_files, parse, matrices, results_root)


def process_junit_xml(new_result: TestResult, args: argparse.Namespace, store: TimingStore):
    """Update the timing baseline with this run and show how well the shards were balanced."""
    if new_result.empty():
        logging.info('No test results; leaving the timing baseline unchanged')
        return

    old_result = store.download()
    baseline = new_result.merge_test_times(old_result)

    if old_result is None:
        logging.info('No historical timing data; skipping shard efficiency')
    elif args.test_shard_chunks:
        efficiencies = efficiency.create_shard_efficiency_list(
            old_result, baseline, args.test_shard_chunks)
        print(efficiency.format_shard_efficiency(efficiencies))

    store.upload(baseline)


def generate(matrices: MatrixMap, args: argparse.Namespace,
             store: Optional[TimingStore] = None,
             renderers: Optional[Iterable[reports.Report]] = None) -> ExitCode:
    """Merge the results of a run, write the reports and return the exit code of the run."""
    result = parse_test_suite(matrices, args)

    if renderers is None:
        renderers = [reports.MatrixResultsReport(), reports.JUnitReport()]
        if not matrices.all_successful():
            renderers.append(reports.HtmlErrorReport())
    for renderer in renderers:
        renderer.run(matrices, result)

    process_junit_xml(result, args, store or TimingStore(args.timing_path))

    return matrices.exit_code()
