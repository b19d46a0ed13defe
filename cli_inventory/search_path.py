"""
Executable search-path parsing.
"""

from __future__ import annotations

from .common import is_windows, normalize_path
from .environment import ScanEnvironment, detect_environment


def get_path_separator(platform: str | None = None) -> str:
    """Get the search-path separator (';' on Windows, ':' elsewhere)."""
    return ";" if is_windows(platform) else ":"


def parse_path(env: ScanEnvironment | None = None) -> list[str]:
    """
    Split the search-path value into normalized directories.

    Order is preserved (it is the search priority) and duplicates are kept;
    empty and whitespace-only segments are discarded.

    Args:
        env: Scan environment (default: detected from the process)

    Returns:
        List of absolute directory paths, empty if the variable is unset
    """
    if env is None:
        env = detect_environment()

    separator = get_path_separator(env.platform)
    segments = (segment.strip() for segment in env.path_value.split(separator))
    return [normalize_path(segment) for segment in segments if segment]
