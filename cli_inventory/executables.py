"""
Executable discovery across search-path directories.

Filesystem calls are blocking, so each listing and each stat is pushed to a
worker thread and awaited; the checks of one directory run concurrently and
directories are fanned out under a bound.
"""

from __future__ import annotations

import asyncio
import os
import stat
import sys
from dataclasses import dataclass

from .common import gather_bounded, is_windows, normalize_path, vlog
from .config import DEFAULT_MAX_WORKERS
from .environment import ScanEnvironment, detect_environment
from .search_path import parse_path


# Extensions treated as runnable on Windows
EXECUTABLE_EXTENSIONS = (".exe", ".cmd", ".bat", ".com", ".ps1")

_ANY_EXECUTE_BIT = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


@dataclass(frozen=True)
class ExecutableInfo:
    """
    One runnable file found on the search path.

    Attributes:
        name: Lower-cased command name (Windows extension stripped)
        path: Normalized absolute path of the file
        directory: Normalized absolute path of the containing directory
    """
    name: str
    path: str
    directory: str

    @property
    def key(self) -> str:
        """Identity key used for de-duplication."""
        return f"{self.name}:{self.path}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "path": self.path,
            "directory": self.directory,
        }


def _check_executable(file_path: str, platform: str) -> bool:
    try:
        st = os.stat(file_path)
    except (OSError, ValueError):
        return False

    if not stat.S_ISREG(st.st_mode):
        return False

    if is_windows(platform):
        return os.path.splitext(file_path)[1].lower() in EXECUTABLE_EXTENSIONS

    return bool(st.st_mode & _ANY_EXECUTE_BIT)


async def is_executable(file_path: str, platform: str | None = None) -> bool:
    """
    Decide whether a file is an executable artifact.

    Windows: regular file with an allow-listed extension.
    POSIX: regular file with any execute permission bit set.
    Missing files, broken symlinks and permission errors give False.

    Args:
        file_path: Path to the file
        platform: Platform whose policy applies (default: current)

    Returns:
        True if the file is executable
    """
    return await asyncio.to_thread(_check_executable, file_path, platform or sys.platform)


def command_name(file_name: str, platform: str | None = None) -> str:
    """
    Derive the lower-cased command name for a file name.

    On Windows an allow-listed executable extension is stripped first.
    """
    name = file_name
    if is_windows(platform):
        base, ext = os.path.splitext(file_name)
        if ext.lower() in EXECUTABLE_EXTENSIONS:
            name = base
    return name.lower()


async def _list_directory(directory: str, verbose: bool = False) -> list[str] | None:
    try:
        return await asyncio.to_thread(os.listdir, directory)
    except OSError as e:
        vlog(f"Skipping {directory}: {e.strerror or e}", verbose)
        return None


async def scan_directory(
    directory: str,
    env: ScanEnvironment | None = None,
    verbose: bool = False,
) -> list[ExecutableInfo]:
    """
    Scan one directory (non-recursively) for executables.

    Missing or inaccessible directories yield an empty list. The result
    follows the directory listing order.

    Args:
        directory: The directory to scan
        env: Scan environment (default: detected from the process)
        verbose: Enable verbose logging

    Returns:
        List of ExecutableInfo for the executables found
    """
    if env is None:
        env = detect_environment()

    entries = await _list_directory(directory, verbose)
    if not entries:
        return []

    paths = [os.path.join(directory, entry) for entry in entries]
    checks = await asyncio.gather(*(is_executable(p, env.platform) for p in paths))

    normalized_dir = normalize_path(directory)
    executables = []
    for entry, file_path, is_exec in zip(entries, paths, checks):
        if is_exec:
            executables.append(ExecutableInfo(
                name=command_name(entry, env.platform),
                path=normalize_path(file_path),
                directory=normalized_dir,
            ))

    vlog(f"{normalized_dir}: {len(executables)} executable(s) of {len(entries)} entries", verbose)
    return executables


async def scan_all_path_directories(
    env: ScanEnvironment | None = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
    verbose: bool = False,
) -> list[ExecutableInfo]:
    """
    Scan every search-path directory and merge the findings.

    Directories are scanned concurrently; findings are merged in search-path
    order so the first directory wins when the same (name, path) shows up
    again, e.g. through a repeated PATH entry.

    Args:
        env: Scan environment (default: detected from the process)
        max_workers: Maximum number of directories scanned at once
        verbose: Enable verbose logging

    Returns:
        De-duplicated list of ExecutableInfo
    """
    if env is None:
        env = detect_environment()

    directories = parse_path(env)
    vlog(f"Scanning {len(directories)} search-path directories", verbose)

    results = await gather_bounded(
        (scan_directory(d, env, verbose) for d in directories),
        max_workers,
    )

    seen: set[str] = set()
    all_executables = []
    for executables in results:
        for info in executables:
            if info.key in seen:
                continue
            seen.add(info.key)
            all_executables.append(info)

    return all_executables
