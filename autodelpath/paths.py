#
# Copyright (c) 2025 broomd0g <broomd0g@wreckinglabs.org>
#
# This software is released under the MIT License.
# See the LICENSE file for more details.

"""
Process-wide generator of temporary path names.
"""

import os
import tempfile
import threading

from pathlib import Path
from typing import Union


PATH_PREFIX = "rustytemp-"
COUNTER_WIDTH = 16

_COUNTER_MASK = (1 << COUNTER_WIDTH) - 1

_counter = 1
_counter_lock = threading.Lock()


def _next_count() -> int:
    global _counter

    with _counter_lock:
        count = _counter
        # Wraps to 0 after 65535, collisions past that point are not guarded
        _counter = (_counter + 1) & _COUNTER_MASK

    return count


def next_path_in(directory: Union[str, os.PathLike]) -> Path:
    """Return the next temporary path under `directory`.

    The directory is neither validated nor created.
    """
    return Path(f"{os.fsdecode(directory)}/{PATH_PREFIX}{_next_count()}")


def next_path_in_default_temp_dir() -> Path:
    return next_path_in(tempfile.gettempdir())
