#
# Copyright (c) 2025 broomd0g <broomd0g@wreckinglabs.org>
#
# This software is released under the MIT License.
# See the LICENSE file for more details.

"""
A path which gets automatically deleted when it goes out of scope.

    with AutoDeletePath.temp() as tmp_path:
        os.mkdir(tmp_path)
        (tmp_path / "subfile").touch()
    # the directory and its contents are gone here

Deletion happens when the `with` block is left, whichever way it is left. A
handle that never enters a `with` block is deleted when it is garbage
collected, or at interpreter exit at the latest.
"""

import os
import shutil
import weakref

from pathlib import Path
from typing import Union

from autodelpath.paths import next_path_in, next_path_in_default_temp_dir


class OwnershipError(RuntimeError):
    """Raised when a handle is used after it gave up its path."""


def _remove_entry(path: Path):
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path, ignore_errors=True)
        else:
            os.unlink(path)
    except (OSError, ValueError):
        # Missing, protected or unrepresentable entries are left behind silently
        pass


class AutoDeletePath:
    """Owns a filesystem path and deletes the file or directory tree behind it
    exactly once.

    Constructing a handle never touches the filesystem; creating something at
    the path is up to the caller. Only one handle owns a given deletion: use
    `transfer()` to hand it over and `release()` to give it up.
    """

    def __init__(self, path: Union[str, os.PathLike]):
        self._path = Path(path)
        self._entered = False
        self._finalizer = weakref.finalize(self, _remove_entry, self._path)

    @classmethod
    def temp(cls) -> "AutoDeletePath":
        """Create a handle on a fresh path in the default temp directory."""
        return cls(next_path_in_default_temp_dir())

    @classmethod
    def temp_in(cls, directory: Union[str, os.PathLike]) -> "AutoDeletePath":
        """Create a handle on a fresh path under `directory`."""
        return cls(next_path_in(directory))

    @property
    def path(self) -> Path:
        return self._path

    @property
    def alive(self) -> bool:
        """Whether this handle still owns a pending deletion."""
        return self._finalizer.alive

    def delete(self):
        """Delete the entry now. Later calls, and leaving the scope, do nothing."""
        self._finalizer()

    def release(self) -> Path:
        """Give up ownership and return the bare path, which is then kept."""
        self._ensure_alive("release")
        self._finalizer.detach()
        return self._path

    def transfer(self) -> "AutoDeletePath":
        """Move ownership to a new handle, this one is disarmed."""
        return type(self)(self.release())

    def _ensure_alive(self, action: str):
        if not self.alive:
            raise OwnershipError(
                f"Cannot {action} {self._path}: handle no longer owns it")

    def __enter__(self) -> "AutoDeletePath":
        self._ensure_alive("enter")
        if self._entered:
            raise OwnershipError(f"{self._path} is already in use as a scope")
        self._entered = True
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.delete()

    def __fspath__(self) -> str:
        return str(self._path)

    def __str__(self) -> str:
        return str(self._path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._path)!r})"

    def __truediv__(self, other) -> Path:
        return self._path / other

    def __eq__(self, other):
        if isinstance(other, AutoDeletePath):
            return self._path == other._path
        return NotImplemented

    def __hash__(self):
        return hash(self._path)

    def __copy__(self):
        raise OwnershipError(
            f"{type(self).__name__} cannot be copied, use transfer()")

    def __deepcopy__(self, memo):
        return self.__copy__()
