"""
Error-tolerant external command execution and fast tool lookup.
"""

from __future__ import annotations

import asyncio
import os
import shlex
import shutil
from dataclasses import dataclass
from typing import Mapping, Sequence

from .common import is_windows, normalize_path, vlog
from .config import DEFAULT_TIMEOUT_SECONDS
from .environment import ScanEnvironment, detect_environment


@dataclass(frozen=True)
class CommandResult:
    """
    Outcome of one external command.

    Attributes:
        success: True only if the process started and exited with status 0
        stdout: Captured standard output
        stderr: Captured standard error
        returncode: Exit status, None if the process never ran to completion
        error: Why the command failed to run (not found, timeout, ...)
    """
    success: bool
    stdout: str = ""
    stderr: str = ""
    returncode: int | None = None
    error: str | None = None


def split_command(command: str | Sequence[str], platform: str | None = None) -> list[str]:
    """Split a command line into arguments (Windows quoting rules on Windows)."""
    if isinstance(command, str):
        return shlex.split(command, posix=not is_windows(platform))
    return list(command)


async def execute_safe(
    command: str | Sequence[str],
    timeout: float | None = None,
    env: Mapping[str, str] | None = None,
    platform: str | None = None,
    verbose: bool = False,
) -> CommandResult:
    """
    Run one command with captured output; never raises.

    stdin is closed and TERM=dumb keeps color codes out of the output.
    A missing binary, an OS error or a timeout all come back as an
    unsuccessful CommandResult; a timed-out child is killed.

    Args:
        command: Command line string or argument sequence
        timeout: Seconds to wait (default: CLI_INVENTORY_TIMEOUT_SECONDS)
        env: Environment for the child (default: os.environ)
        platform: Quoting rules for a string command (default: current)
        verbose: Enable verbose logging

    Returns:
        CommandResult
    """
    try:
        args = split_command(command, platform)
    except ValueError as e:
        return CommandResult(success=False, error=f"Invalid command line: {e}")

    if not args:
        return CommandResult(success=False, error="Empty command")

    timeout = timeout or DEFAULT_TIMEOUT_SECONDS
    child_env = {**(env if env is not None else os.environ), "TERM": "dumb"}

    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=child_env,
        )
    except OSError as e:
        vlog(f"Could not run {args[0]}: {e}", verbose)
        return CommandResult(success=False, error=str(e))

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout)
    except asyncio.TimeoutError:
        try:
            proc.kill()
        except ProcessLookupError:
            pass
        await proc.wait()
        vlog(f"Command timed out after {timeout}s: {' '.join(args)}", verbose)
        return CommandResult(success=False, error=f"Command timed out: {' '.join(args)}")

    return CommandResult(
        success=proc.returncode == 0,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
        returncode=proc.returncode,
    )


def _existing_files(lines: Sequence[str]) -> list[str]:
    return [line for line in lines if line and os.path.isfile(line)]


async def get_all_tool_paths(
    tool_name: str,
    env: ScanEnvironment | None = None,
    timeout: float | None = None,
    verbose: bool = False,
) -> list[str]:
    """
    Find the paths a tool name resolves to, like `which -a` / `where`.

    Only the environment's search path is consulted; a blank search path
    finds nothing.

    Args:
        tool_name: Command name to look up
        env: Scan environment (default: detected from the process)
        timeout: Lookup timeout in seconds
        verbose: Enable verbose logging

    Returns:
        Normalized absolute paths, first match first; empty when not found
    """
    if not tool_name or not tool_name.strip():
        return []

    if env is None:
        env = detect_environment()

    if not env.path_value.strip():
        vlog(f"Lookup {tool_name}: empty search path", verbose)
        return []

    paths: list[str] = []

    # Fast path: shutil.which against the captured search path
    first = await asyncio.to_thread(shutil.which, tool_name, path=env.path_value)
    if first:
        paths.append(normalize_path(first))

    # The lookup binary itself is resolved on the process PATH, the tool on the injected one
    if is_windows(env.platform):
        lookup = await asyncio.to_thread(shutil.which, "where")
        command = [lookup or "where", tool_name]
    else:
        lookup = await asyncio.to_thread(shutil.which, "which")
        command = [lookup or "which", "-a", tool_name]

    child_env = {**os.environ, "PATH": env.path_value}
    result = await execute_safe(command, timeout=timeout, env=child_env, platform=env.platform, verbose=verbose)
    if result.success:
        lines = [line.strip() for line in result.stdout.splitlines()]
        for line in await asyncio.to_thread(_existing_files, lines):
            candidate = normalize_path(line)
            if candidate not in paths:
                paths.append(candidate)

    vlog(f"Lookup {tool_name}: {len(paths)} path(s)", verbose)
    return paths
