"""Compare how long each shard actually took with how long it was expected to take.

The expected time of a shard is the sum of the durations of its tests in the previous run.
"""

from dataclasses import dataclass
from typing import Iterable

from gridresults.resultdef import TestResult


# List of test names run by each shard, in shard order
TestShardChunks = list[list[str]]


@dataclass(frozen=True)
class ShardEfficiency:
    shard: str
    expected_time: float
    final_time: float
    time_diff: float


def create_time_map(result: TestResult) -> dict[str, float]:
    """Map each test name to its duration. A later test with the same name wins."""
    return {tc.name: tc.time for tc in result.testcases()}


def create_shard_efficiency_list(old_result: TestResult, new_result: TestResult,
                                 test_shard_chunks: Iterable[Iterable[str]]
                                 ) -> list[ShardEfficiency]:
    """Return the expected and actual times of every shard.

    Tests missing from a run count as taking no time in it.
    """
    old_times = create_time_map(old_result)
    new_times = create_time_map(new_result)

    efficiencies = []
    for index, tests in enumerate(test_shard_chunks):
        expected_time = 0.0
        final_time = 0.0
        for name in tests:
            expected_time += old_times.get(name, 0.0)
            final_time += new_times.get(name, 0.0)
        efficiencies.append(ShardEfficiency(
            f'Shard {index}', expected_time, final_time, final_time - expected_time))
    return efficiencies


def format_shard_efficiency(efficiencies: Iterable[ShardEfficiency]) -> str:
    return 'Actual shard times:\n' + '\n'.join(
        f'  {e.shard}: Expected: {round(e.expected_time)}s, Actual: {round(e.final_time)}s, '
        f'Diff: {round(e.time_diff)}s'
        for e in efficiencies)
