"""Group test artifacts of the same shard with those of its reruns.

A rerun of a shard is stored in a sibling directory with a -rerun suffix, e.g.
    run/shard_2/device/test_result_1.xml
    run/shard_2-rerun/device/test_result_1.xml
These both belong to the group shard_2. Only the shard directory directly below the run
directory is considered; directories above the run have no bearing on the group.
"""

import logging
import os
import re
from typing import Iterable, NamedTuple, Optional, Union

from gridresults.artifactdef import ArtifactPath, MalformedPathError


RERUN_SEGMENT_RE = re.compile(r'^(shard.*?)-rerun')
SHARD_SEGMENT_RE = re.compile(r'^shard')


class BaseShard(NamedTuple):
    """An artifact from the original run of a shard."""
    key: str


class RerunShard(NamedTuple):
    """An artifact from a rerun of a shard."""
    key: str


ShardKind = Union[BaseShard, RerunShard]

# shard key: artifact paths
RerunGroups = dict[str, list[str]]


def classify_shard(shard_name: str) -> Optional[ShardKind]:
    if r := RERUN_SEGMENT_RE.search(shard_name):
        return RerunShard(r.group(1))
    if SHARD_SEGMENT_RE.search(shard_name):
        return BaseShard(shard_name)
    return None


def classify(path: str, results_root: str) -> Optional[ShardKind]:
    """Determine the shard to which an artifact belongs.

    results_root is the directory holding the run directory. Symbolic links are resolved
    first. Returns None if the path has no shard directory.
    """
    try:
        artifact = ArtifactPath.decode(os.path.realpath(path), os.path.realpath(results_root))
    except MalformedPathError as e:
        logging.debug('Cannot determine shard of artifact: %s', e)
        return None
    return classify_shard(artifact.shard_name)


def group_reruns(paths: Iterable[str], results_root: str, enabled: bool) -> RerunGroups:
    """Group XML artifacts by shard, combining each shard with its reruns.

    Returns an empty mapping when not enabled. Groups and their members keep the order in
    which they are first seen.
    """
    groups = {}  # type: RerunGroups
    if not enabled:
        return groups

    for path in paths:
        if not os.path.realpath(path).endswith('.xml'):
            continue
        kind = classify(path, results_root)
        if not kind:
            logging.debug('No shard found in path %s', path)
            continue
        groups.setdefault(kind.key, []).append(path)
    return groups
