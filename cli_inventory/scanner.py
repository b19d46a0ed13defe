"""
PathScanner: discovery operations bound to one environment and settings.
"""

from __future__ import annotations

import asyncio
from typing import Sequence

from .config import Config, DEFAULT_MAX_WORKERS
from .environment import ScanEnvironment, detect_environment, get_environment_from_config
from .executables import ExecutableInfo, scan_all_path_directories, scan_directory
from .install_method import InstallMethod, identify_install_method
from .search_path import parse_path
from .tool_info import (
    ExecuteFunc,
    ExtendedToolInfo,
    ParseFunc,
    WhichFunc,
    detect_cli_tools,
    find_all_installations,
    get_extended_tool_info,
)
from .uninstall import generate_uninstall_instructions


class PathScanner:
    """
    Stateless facade over the discovery functions.

    Holds only its inputs (environment, limits, collaborators); every call
    starts from scratch, so one instance can be reused or shared.
    """

    def __init__(
        self,
        env: ScanEnvironment | None = None,
        timeout: float | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        which: WhichFunc | None = None,
        execute: ExecuteFunc | None = None,
        parse: ParseFunc | None = None,
        verbose: bool = False,
    ):
        self.env = env or detect_environment(verbose=verbose)
        self.timeout = timeout
        self.max_workers = max_workers
        self.which = which
        self.execute = execute
        self.parse = parse
        self.verbose = verbose

    @classmethod
    def from_config(cls, config: Config, verbose: bool = False, **kwargs) -> PathScanner:
        """Build a scanner from loaded configuration."""
        return cls(
            env=get_environment_from_config(config, verbose=verbose),
            timeout=config.preferences.timeout_seconds,
            max_workers=config.preferences.max_workers,
            verbose=verbose,
            **kwargs,
        )

    def parse_path(self) -> list[str]:
        return parse_path(self.env)

    async def scan_directory(self, directory: str) -> list[ExecutableInfo]:
        return await scan_directory(directory, self.env, self.verbose)

    async def scan_all_path_directories(self) -> list[ExecutableInfo]:
        return await scan_all_path_directories(self.env, self.max_workers, self.verbose)

    async def get_extended_tool_info(self, tool_name: str) -> ExtendedToolInfo:
        return await get_extended_tool_info(
            tool_name,
            env=self.env,
            timeout=self.timeout,
            which=self.which,
            execute=self.execute,
            parse=self.parse,
            verbose=self.verbose,
        )

    async def find_all_installations(self, tool_name: str) -> list[str]:
        return await find_all_installations(
            tool_name,
            env=self.env,
            timeout=self.timeout,
            max_workers=self.max_workers,
            which=self.which,
            verbose=self.verbose,
        )

    async def detect_cli_tools(self, tool_names: Sequence[str]) -> list[ExtendedToolInfo]:
        return await detect_cli_tools(
            tool_names,
            env=self.env,
            timeout=self.timeout,
            max_workers=self.max_workers,
            which=self.which,
            execute=self.execute,
            parse=self.parse,
            verbose=self.verbose,
        )

    def identify_install_method(self, tool_path: str) -> InstallMethod:
        return identify_install_method(tool_path, self.env.platform)

    def generate_uninstall_instructions(
        self,
        tool_name: str,
        install_method: InstallMethod | str,
        tool_path: str,
    ) -> list[str]:
        return generate_uninstall_instructions(tool_name, install_method, tool_path, self.env.platform)

    # Blocking wrappers for synchronous callers such as the CLI

    def scan(self) -> list[ExecutableInfo]:
        """Run scan_all_path_directories to completion."""
        return asyncio.run(self.scan_all_path_directories())

    def info(self, tool_names: Sequence[str]) -> list[ExtendedToolInfo]:
        """Run detect_cli_tools to completion."""
        return asyncio.run(self.detect_cli_tools(tool_names))

    def where(self, tool_name: str) -> list[str]:
        """Run find_all_installations to completion."""
        return asyncio.run(self.find_all_installations(tool_name))
