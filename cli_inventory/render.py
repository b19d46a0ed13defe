"""
Output rendering and formatting.

Columns are aligned by terminal display width, so wide characters in tool
names or paths do not break the layout.
"""

from __future__ import annotations

import os
import re
import sys
from typing import Any, Sequence, TextIO

from wcwidth import wcswidth

from .executables import ExecutableInfo
from .install_method import InstallMethod
from .tool_info import ExtendedToolInfo


USE_COLOR = os.environ.get("CLI_INVENTORY_COLOR", "1") == "1"

# ANSI color codes
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
RED = "\033[31m"
DIM = "\033[2m"
RESET = "\033[0m"

ANSI_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")

METHOD_COLORS = {
    InstallMethod.HOMEBREW: YELLOW,
    InstallMethod.CHOCOLATEY: YELLOW,
    InstallMethod.APT: BLUE,
    InstallMethod.NPM: GREEN,
    InstallMethod.PIP: GREEN,
    InstallMethod.MANUAL: DIM,
}


def colorize(text: str, color: str, stream: TextIO | None = None) -> str:
    """Apply color to text when colors are enabled and the stream is a terminal."""
    stream = stream or sys.stdout
    if not USE_COLOR or not text or not stream.isatty():
        return text
    return f"{color}{text}{RESET}"


def display_width(text: str) -> int:
    """Terminal column width of text, ignoring ANSI escapes."""
    plain = ANSI_RE.sub("", text)
    width = wcswidth(plain)
    # Non-printable characters make wcswidth give up
    return width if width >= 0 else len(plain)


def format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> list[str]:
    """
    Lay out rows as left-aligned columns separated by two spaces.

    Args:
        headers: Column titles
        rows: Cell strings (may contain ANSI color codes)

    Returns:
        Output lines, header first
    """
    widths = [display_width(h) for h in headers]
    for row in rows:
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], display_width(cell))

    def _line(cells: Sequence[str]) -> str:
        padded = [
            cell + " " * (widths[idx] - display_width(cell))
            for idx, cell in enumerate(cells)
        ]
        return "  ".join(padded).rstrip()

    return [_line(headers)] + [_line(row) for row in rows]


def render_executables(executables: Sequence[ExecutableInfo], stream: TextIO | None = None) -> None:
    """Print discovered executables as a table."""
    stream = stream or sys.stdout
    rows = [(info.name, info.directory, info.path) for info in executables]
    for line in format_table(("name", "directory", "path"), rows):
        print(line, file=stream)


def render_tool_infos(infos: Sequence[ExtendedToolInfo], stream: TextIO | None = None) -> None:
    """Print extended tool records, one block per tool."""
    stream = stream or sys.stdout
    rows = []
    for info in infos:
        state = colorize("installed", GREEN, stream) if info.is_installed else colorize("missing", RED, stream)
        method = colorize(info.install_method.value, METHOD_COLORS[info.install_method], stream)
        rows.append((info.display_name, state, info.version or "-", method, info.path or "-"))

    for line in format_table(("tool", "state", "version", "method", "path"), rows):
        print(line, file=stream)

    for info in infos:
        if len(info.all_paths) > 1:
            print(f"\n{info.display_name}: {len(info.all_paths)} installations", file=stream)
            for path in info.all_paths:
                print(f"  {path}", file=stream)
        if info.path:
            print(f"\nUninstall {info.display_name}:", file=stream)
            for instruction in info.uninstall_instructions:
                print(f"  {instruction}", file=stream)


def render_installations(tool_name: str, paths: Sequence[str], stream: TextIO | None = None) -> None:
    """Print every installation path of one tool."""
    stream = stream or sys.stdout
    if not paths:
        print(f"{tool_name}: not found", file=stream)
        return
    for path in paths:
        print(path, file=stream)


def render_classification(
    tool_path: str,
    install_method: InstallMethod,
    instructions: Sequence[str],
    stream: TextIO | None = None,
) -> None:
    """Print the install method of a path and how to remove it."""
    stream = stream or sys.stdout
    print(f"{tool_path}: {install_method.value}", file=stream)
    for instruction in instructions:
        print(f"  {instruction}", file=stream)


def print_summary(kind: str, items: Sequence[Any], installed: int | None = None) -> None:
    """Print a one-line summary to stderr."""
    parts = [f"{len(items)} {kind}"]
    if installed is not None:
        parts.append(f"{installed} installed")
        parts.append(f"{len(items) - installed} missing or broken")
    print(f"\nSummary: {', '.join(parts)}", file=sys.stderr)
