#
# Copyright (c) 2025 broomd0g <broomd0g@wreckinglabs.org>
#
# This software is released under the MIT License.
# See the LICENSE file for more details.

from autodelpath.include import include_to_auto_delete_path, write_to_auto_delete_path
from autodelpath.path import AutoDeletePath, OwnershipError
from autodelpath.paths import next_path_in, next_path_in_default_temp_dir

__all__ = [
    "AutoDeletePath",
    "OwnershipError",
    "include_to_auto_delete_path",
    "next_path_in",
    "next_path_in_default_temp_dir",
    "write_to_auto_delete_path",
]
