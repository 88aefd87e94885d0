#
# Copyright (c) 2025 broomd0g <broomd0g@wreckinglabs.org>
#
# This software is released under the MIT License.
# See the LICENSE file for more details.

"""
Write bundled bytes to a fresh AutoDeletePath. Useful for test fixtures.
"""

from importlib import resources
from types import ModuleType
from typing import Union

from autodelpath.path import AutoDeletePath


def write_to_auto_delete_path(data: Union[bytes, str]) -> AutoDeletePath:
    """Create a temp file holding `data` and return its handle.

    `str` data is encoded as UTF-8. Any error creating or writing the file is
    raised to the caller once the partial file has been removed.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")

    tmp_path = AutoDeletePath.temp()
    try:
        with open(tmp_path, "wb") as fh:
            fh.write(data)
    except BaseException:
        tmp_path.delete()
        raise

    return tmp_path


def include_to_auto_delete_path(resource: str, anchor: Union[str, ModuleType]) -> AutoDeletePath:
    """Copy a resource bundled with the `anchor` package into a new temp file.

    `resource` is a relative, "/" separated path inside the package, e.g.:

        tmp_path = include_to_auto_delete_path("test-resources/test-include.txt", "tests")
        assert Path(tmp_path).read_text() == "Included file!\\n"

    Raises FileNotFoundError when the resource is not part of the package and
    OSError when the temp file cannot be written.
    """
    traversable = resources.files(anchor)
    for part in resource.split("/"):
        traversable = traversable.joinpath(part)

    return write_to_auto_delete_path(traversable.read_bytes())
