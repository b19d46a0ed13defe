"""
Version text extraction from `--version` style output.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from packaging.version import InvalidVersion, Version

from .executor import CommandResult


ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")
VERSION_RE = re.compile(r"(?<![\d.])v?(\d+(?:\.\d+)+)([-+][0-9A-Za-z.\-+]*[0-9A-Za-z])?")
DATE_VERSION_RE = re.compile(r"\b(\d{8})\b")


@dataclass(frozen=True)
class ParsedVersion:
    """Version found in a tool's output; version is None when nothing matched."""
    version: str | None
    raw: str = ""


def get_version_output(result: CommandResult) -> str:
    """
    Pick the usable text of a version probe.

    Prefers stdout and falls back to stderr, since some tools print their
    banner to the error stream.
    """
    if result.stdout and result.stdout.strip():
        return result.stdout
    if result.stderr and result.stderr.strip():
        return result.stderr
    return ""


def parse_version(text: str | None) -> ParsedVersion:
    """
    Extract a version string from command output.

    The first dotted numeric token whose release part is a valid version
    wins, keeping any pre-release/build suffix ('1.2.3-beta.1'). A leading
    'v' and zero-padding in release numbers are dropped.
    Date-style versions ('20231122') are the fallback.

    Args:
        text: Raw command output

    Returns:
        ParsedVersion (version None if no version-like token was found)
    """
    if not text:
        return ParsedVersion(version=None, raw="")

    cleaned = ANSI_ESCAPE_RE.sub("", text)

    for match in VERSION_RE.finditer(cleaned):
        release, suffix = match.group(1), match.group(2) or ""
        try:
            parts = Version(release).release
        except InvalidVersion:
            continue
        # "7.28.00" -> "7.28.0"
        normalized = ".".join(str(p) for p in parts)
        return ParsedVersion(version=normalized + suffix, raw=text)

    m = DATE_VERSION_RE.search(cleaned)
    if m:
        return ParsedVersion(version=m.group(1), raw=text)

    return ParsedVersion(version=None, raw=text)
