"""Small queries about files that never raise."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


def get_file_mod_time(path: PathLike) -> datetime | None:
    """Return the modification time in UTC, or None if the path cannot be read."""
    try:
        mtime = os.stat(path).st_mtime
    except OSError:
        return None
    return datetime.fromtimestamp(mtime, tz=timezone.utc)


def file_exists(path: PathLike) -> bool:
    """True if anything exists at ``path``."""
    try:
        os.stat(path)
    except OSError:
        return False
    return True


def dir_exists(path: PathLike) -> bool:
    """True if ``path`` is an existing directory."""
    return os.path.isdir(path)


def get_file_size(path: PathLike) -> int:
    """Return the size in bytes, or 0 if the path cannot be read."""
    try:
        return os.stat(path).st_size
    except OSError:
        return 0