#
# Copyright (c) 2025 broomd0g <broomd0g@wreckinglabs.org>
#
# This software is released under the MIT License.
# See the LICENSE file for more details.

"""
Run a command with a temporary path that is deleted once the command exits.

Every "{}" in the command arguments is replaced with the path, which is also
exported to the command as $AUTODELPATH.
"""

import argparse
import os
import shutil
import subprocess
import sys
import tempfile

from importlib.metadata import metadata
from pathlib import Path
from rich.console import Console
from typing import List, Optional

from autodelpath.path import AutoDeletePath
from autodelpath.paths import COUNTER_WIDTH


EX_NOINPUT = 66
EX_UNAVAILABLE = 69
EX_OSERR = 71
EX_CANTCREAT = 73

PLACEHOLDER = "{}"
PATH_ENV_VAR = "AUTODELPATH"
BASE_DIR_ENV_VAR = "AUTODELPATH_DIR"

MAX_CLAIM_ATTEMPTS = 1 << COUNTER_WIDTH


console = Console(file=sys.__stderr__, log_path=False)


def GetParser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter
    )

    pkg_meta = metadata("autodelpath")
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"autodelpath v{pkg_meta['Version']} by {pkg_meta['Author']} <{pkg_meta['Author-email']}>",
        help="show version information",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="print verbose information messages",
    )

    parser.add_argument("command")
    parser.add_argument("args", nargs=argparse.REMAINDER)

    path_group = parser.add_argument_group("Path options")

    path_group.add_argument(
        "-b",
        "--base-dir",
        default=None,
        type=Path,
        help=f"create the temporary path under BASE_DIR (default: ${BASE_DIR_ENV_VAR} or the system temp directory)",
    )

    content_group = path_group.add_mutually_exclusive_group()

    content_group.add_argument(
        "-D",
        "--directory",
        action="store_true",
        default=False,
        help="create an empty directory at the temporary path",
    )

    content_group.add_argument(
        "-s",
        "--source",
        default=None,
        type=Path,
        help="copy SOURCE (file or directory) to the temporary path",
    )

    path_group.add_argument(
        "-k",
        "--keep",
        action="store_true",
        default=False,
        help="keep the temporary path and print it once the command exits",
    )

    return parser


def log_error(message: str):
    console.log(f"[bold red]ERROR:[/] {message}")


def log_warning(message: str):
    console.log(f"[bold yellow]WARNING:[/] {message}")


def ResolveBaseDir(base_dir: Optional[Path]) -> Path:
    if base_dir is not None:
        return Path(os.path.normpath(base_dir))

    env_dir = os.environ.get(BASE_DIR_ENV_VAR)
    if env_dir:
        return Path(os.path.normpath(env_dir))

    return Path(tempfile.gettempdir())


def Populate(tmp_path: AutoDeletePath, source: Optional[Path], directory: bool):
    if directory:
        os.mkdir(tmp_path)
    elif source is not None:
        if source.is_dir():
            shutil.copytree(source, tmp_path, symlinks=True)
        else:
            # Create exclusively first, copy2 would overwrite an existing file
            with open(tmp_path, "xb"):
                pass
            shutil.copy2(source, tmp_path)


def ClaimTempPath(base_dir: Path, source: Optional[Path], directory: bool) -> AutoDeletePath:
    """Draw temporary paths under `base_dir` until one is free, then populate it.

    Entries that already exist belong to someone else (every process starts
    counting at 1), so they are skipped and never deleted.
    """
    for _ in range(MAX_CLAIM_ATTEMPTS):
        tmp_path = AutoDeletePath.temp_in(base_dir)

        if os.path.lexists(tmp_path):
            tmp_path.release()
            log_warning(f"{tmp_path} already exists, skipping")
            continue

        try:
            Populate(tmp_path, source, directory)
        except FileExistsError:
            # Created by someone else since the check above
            tmp_path.release()
            continue
        except BaseException:
            # A failed mkdir leaves nothing of ours behind
            if directory:
                tmp_path.release()
            else:
                tmp_path.delete()
            raise

        return tmp_path

    raise FileExistsError(f"No free temporary path left under {base_dir}")


def BuildCommand(command: str, args: List[str], tmp_path: AutoDeletePath) -> List[str]:
    return [x.replace(PLACEHOLDER, str(tmp_path)) for x in [command, *args]]


def main(options=None) -> Optional[int]:
    if options is None:
        parser = GetParser()
        options = parser.parse_args(sys.argv[1:])

    base_dir = ResolveBaseDir(options.base_dir)

    if not base_dir.is_dir():
        log_error(f"Base directory {base_dir} does not exist")
        return EX_CANTCREAT

    if options.source is not None and not options.source.exists():
        log_error(f"Source {options.source} does not exist")
        return EX_NOINPUT

    try:
        tmp_path = ClaimTempPath(
            base_dir, options.source, options.directory)
    except OSError as e:
        log_error(f"Creating temporary path under {base_dir}")
        log_error(f"{e}")
        return EX_CANTCREAT

    with tmp_path:
        if options.verbose:
            console.log(f"Using temporary path [bold]{tmp_path}[/bold]")

        if options.verbose and options.source is not None:
            console.log(f"Copied {options.source} to [bold]{tmp_path}[/bold]")

        cmd = BuildCommand(options.command, options.args, tmp_path)
        env = dict(os.environ, **{PATH_ENV_VAR: str(tmp_path)})

        if options.verbose:
            console.log(f"Running {cmd}")

        try:
            result = subprocess.run(cmd, env=env)
        except FileNotFoundError as e:
            log_error(f"Command {options.command} not found")
            log_error(f"{e}")
            return EX_UNAVAILABLE
        except OSError as e:
            log_error(f"Running {options.command}")
            log_error(f"{e}")
            return EX_OSERR

        if options.verbose:
            console.log(f"Command exited with {result.returncode}")

        if options.keep:
            console.log(f"Keeping [bold]{tmp_path.release()}[/bold]")
            print(tmp_path)
        elif options.verbose:
            console.log(f"[red]Removing [bold]{tmp_path}[/bold]")

    if result.returncode < 0:
        # Killed by a signal, report it the way shells do
        return 128 - result.returncode

    return result.returncode


if __name__ == "__main__":
    sys.exit(main())
