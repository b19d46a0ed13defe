"""
Uninstall instruction synthesis.

Produces text only; nothing here runs a command.
"""

from __future__ import annotations

from .common import is_windows
from .install_method import InstallMethod


def generate_uninstall_instructions(
    tool_name: str,
    install_method: InstallMethod | str | None,
    tool_path: str | None = "",
    platform: str | None = None,
) -> list[str]:
    """
    Generate uninstall instructions for a tool.

    The primary command comes first, alternatives and comments after.
    Unknown methods are handled like manual installs.

    Args:
        tool_name: The name of the tool
        install_method: The installation method
        tool_path: The installation path, if known
        platform: Platform for manual-removal wording (default: current)

    Returns:
        Ordered list of commands and '#' comment lines
    """
    method = InstallMethod.coerce(install_method)

    if method is InstallMethod.HOMEBREW:
        return [
            f"brew uninstall {tool_name}",
            f"# Or force uninstall: brew uninstall --force {tool_name}",
        ]

    if method is InstallMethod.CHOCOLATEY:
        return [
            f"choco uninstall {tool_name}",
            f"# Or force uninstall: choco uninstall {tool_name} --force",
        ]

    if method is InstallMethod.APT:
        return [
            f"sudo apt remove {tool_name}",
            f"# Or purge (remove config): sudo apt purge {tool_name}",
        ]

    if method is InstallMethod.NPM:
        return [f"npm uninstall -g {tool_name}"]

    if method is InstallMethod.PIP:
        return [
            f"pip uninstall {tool_name}",
            f"# Or: pip3 uninstall {tool_name}",
        ]

    if not tool_path:
        return [
            "# Unable to determine uninstall method",
            "# Please check your system's package manager",
        ]

    if is_windows(platform):
        return [
            "# Manual removal required",
            f"# Delete file: {tool_path}",
            "# Or check Programs and Features in Control Panel",
        ]

    return [
        "# Manual removal required",
        f"sudo rm {tool_path}",
        "# Or check if installed via system package manager",
    ]
