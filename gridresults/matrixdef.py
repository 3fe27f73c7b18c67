"""Type definitions of the test matrices run by the test grid.

The matrix map is written into the run directory by the program that ran the tests, as a JSON
object of matrix ID to matrix details, e.g.
    {"matrix-1": {"matrixId": "matrix-1", "state": "FINISHED",
                  "gcsPath": "bucket/2024-01-02_run/shard_0",
                  "webLink": "https://console.example.com/matrices/1", "outcome": "success"}}
"""

import json
import logging
import os
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from gridresults import config


class ExitCode(IntEnum):
    """Process exit status of a report run."""

    SUCCESS = 0           # every matrix passed
    TEST_FAILURES = 1     # at least one matrix had a test failure
    INCONCLUSIVE = 2      # at least one matrix didn't finish or had no definite outcome
    GENERAL_FAILURE = 3   # the report could not be generated


# Matrix outcome values
OUTCOME_SUCCESS = 'success'
OUTCOME_FAILURE = 'failure'
OUTCOME_INCONCLUSIVE = 'inconclusive'
OUTCOME_SKIPPED = 'skipped'

STATE_FINISHED = 'FINISHED'


class MalformedMatrixMapError(ValueError):
    """The matrix map file does not hold an object of matrix details."""


@dataclass
class SavedMatrix:
    """The saved state of a single test matrix."""

    matrix_id: str
    state: str = ''
    gcs_path: str = ''    # results bucket path of the matrix's shard directory
    web_link: str = ''    # link to the matrix in the test grid console
    outcome: str = ''

    def failed(self) -> bool:
        return self.outcome == OUTCOME_FAILURE

    def finished(self) -> bool:
        return self.state == STATE_FINISHED and self.outcome != OUTCOME_INCONCLUSIVE


@dataclass
class MatrixMap:
    """All the matrices making up a single run."""

    map: dict[str, SavedMatrix]  # noqa: A003
    run_path: str

    @classmethod
    def load(cls, run_path: str) -> 'MatrixMap':
        """Load the matrix map stored in a run directory.

        run_path is either a directory or the name of a run below the local results directory.
        """
        fn = os.path.join(local_run_path(run_path), config.get('matrix_ids_file'))
        logging.debug('Loading matrix map %s', fn)
        with open(fn) as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise MalformedMatrixMapError(f'{fn} does not hold an object of matrices')
        matrices = {}
        for matrix_id, details in raw.items():
            if not isinstance(details, dict):
                raise MalformedMatrixMapError(f'{fn}: matrix {matrix_id} is not an object')
            matrices[matrix_id] = SavedMatrix(
                matrix_id=details.get('matrixId', matrix_id),
                state=details.get('state', ''),
                gcs_path=details.get('gcsPath', ''),
                web_link=details.get('webLink', ''),
                outcome=details.get('outcome', ''))
        return cls(matrices, run_path)

    def all_successful(self) -> bool:
        return not any(m.failed() for m in self.map.values())

    def exit_code(self) -> ExitCode:
        if not all(m.finished() for m in self.map.values()):
            return ExitCode.INCONCLUSIVE
        if not self.all_successful():
            return ExitCode.TEST_FAILURES
        return ExitCode.SUCCESS

    def find_by_path_suffix(self, suffix: str) -> Optional[SavedMatrix]:
        """Return the first matrix whose results path ends with the given path.

        Only whole path segments match, so run1/shard_0 doesn't match xrun1/shard_0.
        """
        for matrix in self.map.values():
            path = matrix.gcs_path.rstrip('/')
            if path == suffix or path.endswith('/' + suffix):
                return matrix
        return None


def local_run_path(run_path: str) -> str:
    """Return the local directory of a run given as a directory or a run name."""
    if os.path.isdir(run_path):
        return run_path
    return os.path.join(config.expand('local_result_dir'), run_path)


def resolve_local_run_path(matrices: MatrixMap) -> str:
    """Return the local directory holding the run's artifacts."""
    return local_run_path(matrices.run_path)
