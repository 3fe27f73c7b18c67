"""Find test artifacts in a downloaded run directory."""

import logging
import os
import re
from typing import Iterable, Pattern

from gridresults import config


class MissingRunRootError(RuntimeError):
    """The run directory to search does not exist or cannot be read."""


def test_result_regex() -> Pattern[str]:
    return re.compile(config.get('test_result_pattern'))


def regex_list(files_to_download: Iterable[str] = ()) -> list[Pattern[str]]:
    """Return the patterns matching every artifact of interest.

    This is the test results plus any extra files requested by the user.
    """
    return [test_result_regex()] + [re.compile(p) for p in files_to_download]


def find_artifacts(root: str, patterns: Iterable[Pattern[str]]) -> list[str]:
    """Return the paths of all regular files below root whose name matches any pattern.

    Directories and files are visited in sorted order so the result is the same every time the
    same tree is searched.
    """
    if not os.path.isdir(root) or not os.access(root, os.R_OK | os.X_OK):
        raise MissingRunRootError(f'Run directory {root} does not exist or cannot be read')

    def walk_error(err: OSError):
        logging.warning('Cannot search %s: %s', err.filename, err.strerror)

    patterns = list(patterns)
    found = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=walk_error):
        dirnames.sort()
        for fn in sorted(filenames):
            path = os.path.join(dirpath, fn)
            if not os.path.isfile(path):
                continue
            if any(p.match(fn) for p in patterns):
                found.append(path)
    logging.debug('Found %d artifacts in %s', len(found), root)
    return found
