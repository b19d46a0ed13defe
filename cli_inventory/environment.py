"""
Environment inputs for discovery.

The search-path value and the platform identifier are captured once into a
ScanEnvironment and passed explicitly to every discovery function, so a
scan never reads process-global state halfway through.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping

from .common import vlog

if TYPE_CHECKING:
    from .config import Config


VALID_PLATFORMS = {"linux", "darwin", "win32"}


@dataclass(frozen=True)
class ScanEnvironment:
    """
    Inputs a discovery run depends on.

    Attributes:
        platform: sys.platform-style identifier ('linux', 'darwin', 'win32', ...)
        path_value: Raw value of the executable search-path variable
        override: Whether platform was explicitly set instead of detected
    """
    platform: str
    path_value: str = ""
    override: bool = False

    def __str__(self) -> str:
        override_str = " (override)" if self.override else ""
        return f"{self.platform}{override_str}"


def read_path_variable(environ: Mapping[str, str] | None = None) -> str:
    """
    Read the search-path variable with a capitalization fallback.

    Tries PATH, then Path (Windows convention), then any key that matches
    case-insensitively. Returns "" when none is set.
    """
    if environ is None:
        environ = os.environ

    for key in ("PATH", "Path"):
        value = environ.get(key)
        if value:
            return value

    for key, value in environ.items():
        if key.lower() == "path" and value:
            return value

    return ""


def detect_environment(
    override_platform: str | None = None,
    environ: Mapping[str, str] | None = None,
    verbose: bool = False,
) -> ScanEnvironment:
    """
    Capture the current discovery environment.

    Args:
        override_platform: Explicit platform ('linux', 'darwin', 'win32', 'auto' or None)
        environ: Environment mapping to read (default: os.environ)
        verbose: Enable verbose logging

    Returns:
        ScanEnvironment with the search path and platform

    Raises:
        ValueError: If override_platform is not valid
    """
    path_value = read_path_variable(environ)

    if override_platform and override_platform != "auto":
        if override_platform not in VALID_PLATFORMS:
            raise ValueError(
                f"Invalid platform override: {override_platform}. "
                f"Must be one of: {', '.join(sorted(VALID_PLATFORMS | {'auto'}))}"
            )
        vlog(f"Platform explicitly set to: {override_platform}", verbose)
        return ScanEnvironment(platform=override_platform, path_value=path_value, override=True)

    return ScanEnvironment(platform=sys.platform, path_value=path_value)


def get_environment_from_config(config: Config | None, verbose: bool = False) -> ScanEnvironment:
    """
    Get the scan environment honoring the config's platform setting.

    Args:
        config: Loaded configuration (None behaves like 'auto')
        verbose: Enable verbose logging

    Returns:
        ScanEnvironment (auto triggers detection, others are explicit)
    """
    platform = config.platform if config is not None else "auto"
    return detect_environment(override_platform=platform, verbose=verbose)
