"""Type definitions of test artifact paths.

Artifacts are laid out below a results root as object/shard/device/.../file, e.g.
    2024-01-02_03-04-05.123456_abcd/shard_0/NexusLowRes-28-en-portrait/test_result_1.xml
where the object is the run name.
"""

import os
import posixpath
from dataclasses import dataclass


class MalformedPathError(ValueError):
    """An artifact path does not have the object/shard/device structure."""


@dataclass(frozen=True)
class ArtifactPath:
    """The meaningful parts of a test artifact path."""

    file_name: str    # base name of the artifact
    object_name: str  # run name
    shard_name: str   # shard folder, one per matrix
    device_name: str  # device configuration folder

    @classmethod
    def decode(cls, path: str, root: str) -> 'ArtifactPath':
        """Decode a path lying below root.

        Raises MalformedPathError if there are fewer than three path segments below root.
        A file lying directly in the shard directory also gives the device name.
        """
        rel = os.path.relpath(path, root)
        segments = [s for s in rel.replace(os.sep, '/').split('/') if s and s != '.']
        if '..' in segments:
            raise MalformedPathError(f'{path} is not below {root}')
        if len(segments) < 3:
            raise MalformedPathError(f'{rel} needs object and shard directories above the file')
        return cls(file_name=segments[-1],
                   object_name=segments[0],
                   shard_name=segments[1],
                   device_name=segments[2])

    def matrix_path(self) -> str:
        """Return the part of the path that identifies the matrix in the results bucket."""
        return posixpath.join(self.object_name, self.shard_name)

    def relpath(self) -> str:
        if self.device_name == self.file_name:
            return posixpath.join(self.object_name, self.shard_name, self.file_name)
        return posixpath.join(self.object_name, self.shard_name, self.device_name, self.file_name)
