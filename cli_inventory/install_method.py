"""
Installation method classification from path shape.

Classification never touches the filesystem and never queries a package
manager: the same path string on the same platform always yields the same
method.
"""

from __future__ import annotations

from enum import Enum

from .common import is_linux


class InstallMethod(str, Enum):
    """How a tool most likely got onto the machine."""
    HOMEBREW = "homebrew"
    CHOCOLATEY = "chocolatey"
    APT = "apt"
    NPM = "npm"
    PIP = "pip"
    MANUAL = "manual"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def coerce(cls, value: InstallMethod | str | None) -> InstallMethod:
        """Convert a method name to InstallMethod, unknown names become MANUAL."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.MANUAL


# Ordered rules: first match wins. A path can match several rules
# (e.g. an npm prefix under Homebrew); the order is the tie-break.
HOMEBREW_MARKERS = ("/opt/homebrew", "/usr/local/cellar", "homebrew")
CHOCOLATEY_MARKERS = ("chocolatey", "choco")
APT_MARKERS = ("/usr/bin",)
NPM_MARKERS = ("node_modules", "npm")
PIP_MARKERS = ("site-packages", "pip", "python")


def identify_install_method(tool_path: str | None, platform: str | None = None) -> InstallMethod:
    """
    Identify the installation method of a tool from its path.

    Rules, in order:
    1. Homebrew prefixes or 'homebrew' anywhere -> homebrew
    2. 'chocolatey' or 'choco' -> chocolatey
    3. '/usr/bin', only on Linux -> apt
    4. 'node_modules' or 'npm' -> npm
    5. 'site-packages', 'pip' or 'python' -> pip
    6. otherwise -> manual

    Args:
        tool_path: The installation path (empty or None gives manual)
        platform: Platform identifier, gates rule 3 (default: current)

    Returns:
        The detected InstallMethod
    """
    if not tool_path:
        return InstallMethod.MANUAL

    lower_path = tool_path.lower()

    if any(marker in lower_path for marker in HOMEBREW_MARKERS):
        return InstallMethod.HOMEBREW

    if any(marker in lower_path for marker in CHOCOLATEY_MARKERS):
        return InstallMethod.CHOCOLATEY

    if any(marker in lower_path for marker in APT_MARKERS) and is_linux(platform):
        return InstallMethod.APT

    if any(marker in lower_path for marker in NPM_MARKERS):
        return InstallMethod.NPM

    if any(marker in lower_path for marker in PIP_MARKERS):
        return InstallMethod.PIP

    return InstallMethod.MANUAL
