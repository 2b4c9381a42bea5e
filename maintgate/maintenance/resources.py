"""File access policies used by the maintenance interceptor.

A ``LoadOnceResource`` is read when it is created and never touched again,
so later edits on disk are invisible until restart. A ``PolledResource`` goes
back to the filesystem on every access, which is what lets an operator flip
maintenance mode by creating or deleting a marker file.
"""

import os
from pathlib import Path

from maintgate.maintenance.errors import ConfigurationError, NotFoundError


class LoadOnceResource:
    __slots__ = ("path", "_content")

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        try:
            self._content = self.path.read_bytes()
        except (OSError, ValueError) as exc:
            raise ConfigurationError(f"Unable to read {self.path}.") from exc

    @property
    def content(self) -> bytes:
        return self._content


class PolledResource:
    __slots__ = ("path",)

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        # Any stat failure, permission errors included, counts as absent.
        try:
            os.stat(self.path)
        except (OSError, ValueError):
            return False
        return True

    def read(self) -> bytes:
        try:
            return self.path.read_bytes()
        except (OSError, ValueError) as exc:
            raise NotFoundError(f"Unable to read {self.path}.") from exc
