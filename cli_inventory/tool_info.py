"""
Per-tool detail: installed paths, version, provenance and removal steps.

The fast lookup, the command runner and the version parser are passed in as
callables so callers (and tests) can swap them; the defaults are the
implementations in executor.py and version.py.
"""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence

from .common import gather_bounded, is_windows, normalize_path, vlog
from .config import DEFAULT_MAX_WORKERS
from .environment import ScanEnvironment, detect_environment
from .executables import is_executable
from .executor import CommandResult, execute_safe, get_all_tool_paths
from .install_method import InstallMethod, identify_install_method
from .search_path import parse_path
from .uninstall import generate_uninstall_instructions
from .version import ParsedVersion, get_version_output, parse_version

WhichFunc = Callable[[str], Awaitable[Sequence[str]]]
ExecuteFunc = Callable[[Sequence[str]], Awaitable[CommandResult]]
ParseFunc = Callable[[str], ParsedVersion]


@dataclass(frozen=True)
class ExtendedToolInfo:
    """
    Everything known about one tool for a single query.

    Attributes:
        name: Tool name as requested
        display_name: Name shown to users
        version: Parsed version, None if the probe gave nothing usable
        path: Primary installation (first entry of all_paths)
        is_installed: A path was found and the version probe succeeded
        install_method: Provenance of the primary installation
        all_paths: Every distinct installation path, lookup order
        uninstall_instructions: Removal commands and comments, primary first
        category: Record kind
    """
    name: str
    display_name: str
    version: str | None
    path: str | None
    is_installed: bool
    install_method: InstallMethod
    all_paths: tuple[str, ...] = ()
    uninstall_instructions: tuple[str, ...] = ()
    category: str = "tool"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "displayName": self.display_name,
            "version": self.version,
            "path": self.path,
            "isInstalled": self.is_installed,
            "installMethod": self.install_method.value,
            "category": self.category,
            "allPaths": list(self.all_paths),
            "uninstallInstructions": list(self.uninstall_instructions),
        }


def _unique_paths(paths: Sequence[str]) -> list[str]:
    unique: list[str] = []
    for p in paths:
        if not p:
            continue
        normalized = normalize_path(p)
        if normalized not in unique:
            unique.append(normalized)
    return unique


def _default_which(env: ScanEnvironment, timeout: float | None, verbose: bool) -> WhichFunc:
    async def which(name: str) -> Sequence[str]:
        return await get_all_tool_paths(name, env=env, timeout=timeout, verbose=verbose)
    return which


def _default_execute(env: ScanEnvironment, timeout: float | None, verbose: bool) -> ExecuteFunc:
    child_env = {**os.environ, "PATH": env.path_value}

    async def execute(command: Sequence[str]) -> CommandResult:
        return await execute_safe(command, timeout=timeout, env=child_env, platform=env.platform, verbose=verbose)
    return execute


async def get_extended_tool_info(
    tool_name: str,
    env: ScanEnvironment | None = None,
    timeout: float | None = None,
    which: WhichFunc | None = None,
    execute: ExecuteFunc | None = None,
    parse: ParseFunc | None = None,
    verbose: bool = False,
) -> ExtendedToolInfo:
    """
    Assemble extended information for one tool.

    The path lookup and the `<tool> --version` probe are independent and run
    concurrently. A failing probe is not an error: the tool is then reported
    with is_installed=False even when paths were found (broken install).

    Args:
        tool_name: The name of the tool
        env: Scan environment (default: detected from the process)
        timeout: Timeout for lookup and probe
        which: Fast path lookup (default: get_all_tool_paths)
        execute: Command runner (default: execute_safe)
        parse: Version parser (default: parse_version)
        verbose: Enable verbose logging

    Returns:
        ExtendedToolInfo
    """
    if env is None:
        env = detect_environment()
    which = which or _default_which(env, timeout, verbose)
    execute = execute or _default_execute(env, timeout, verbose)
    parse = parse or parse_version

    found_paths, version_result = await asyncio.gather(
        which(tool_name),
        execute([tool_name, "--version"]),
    )

    all_paths = _unique_paths(found_paths)
    version = parse(get_version_output(version_result)).version

    primary_path = all_paths[0] if all_paths else None
    install_method = identify_install_method(primary_path or "", env.platform)
    uninstall_instructions = generate_uninstall_instructions(
        tool_name,
        install_method,
        primary_path or "",
        env.platform,
    )

    if not version_result.success:
        vlog(f"Version probe failed for {tool_name}: {version_result.error or version_result.returncode}", verbose)

    return ExtendedToolInfo(
        name=tool_name,
        display_name=tool_name,
        version=version,
        path=primary_path,
        is_installed=bool(all_paths) and version_result.success,
        install_method=install_method,
        all_paths=tuple(all_paths),
        uninstall_instructions=tuple(uninstall_instructions),
    )


def _matches_tool(file_name: str, tool_name: str, platform: str) -> bool:
    if is_windows(platform):
        base = os.path.splitext(file_name)[0]
    else:
        base = file_name
    return base.lower() == tool_name.lower()


async def _find_in_directory(
    directory: str,
    tool_name: str,
    platform: str,
    verbose: bool,
) -> list[str]:
    try:
        entries = await asyncio.to_thread(os.listdir, directory)
    except OSError as e:
        vlog(f"Skipping {directory}: {e.strerror or e}", verbose)
        return []

    candidates = [os.path.join(directory, e) for e in entries if _matches_tool(e, tool_name, platform)]
    checks = await asyncio.gather(*(is_executable(c, platform) for c in candidates))
    return [normalize_path(c) for c, ok in zip(candidates, checks) if ok]


async def find_all_installations(
    tool_name: str,
    env: ScanEnvironment | None = None,
    timeout: float | None = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
    which: WhichFunc | None = None,
    verbose: bool = False,
) -> list[str]:
    """
    Find every executable location of a tool.

    Seeds with the fast lookup, then sweeps each search-path directory for
    entries whose name (extension stripped on Windows) matches the tool,
    case-insensitively. Treat the result as a set; order is not significant.

    Args:
        tool_name: The name of the tool to find
        env: Scan environment (default: detected from the process)
        timeout: Timeout for the fast lookup
        max_workers: Maximum number of directories swept at once
        which: Fast path lookup (default: get_all_tool_paths)
        verbose: Enable verbose logging

    Returns:
        Distinct absolute paths where the tool is installed
    """
    if not tool_name:
        return []

    if env is None:
        env = detect_environment()
    which = which or _default_which(env, timeout, verbose)

    paths = list(await which(tool_name))

    results = await gather_bounded(
        (_find_in_directory(d, tool_name, env.platform, verbose) for d in parse_path(env)),
        max_workers,
    )
    for found in results:
        paths.extend(found)

    return _unique_paths(paths)


async def detect_cli_tools(
    tool_names: Sequence[str],
    env: ScanEnvironment | None = None,
    timeout: float | None = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
    which: WhichFunc | None = None,
    execute: ExecuteFunc | None = None,
    parse: ParseFunc | None = None,
    verbose: bool = False,
) -> list[ExtendedToolInfo]:
    """
    Assemble extended information for several tools.

    Args:
        tool_names: Names of the tools to detect
        env: Scan environment (default: detected from the process)
        timeout: Timeout for each lookup and probe
        max_workers: Maximum number of tools probed at once
        which: Fast path lookup
        execute: Command runner
        parse: Version parser
        verbose: Enable verbose logging

    Returns:
        One ExtendedToolInfo per name, in input order
    """
    if env is None:
        env = detect_environment()

    return await gather_bounded(
        (
            get_extended_tool_info(
                name,
                env=env,
                timeout=timeout,
                which=which,
                execute=execute,
                parse=parse,
                verbose=verbose,
            )
            for name in tool_names
        ),
        max_workers,
    )
