"""
Tests for output rendering (cli_inventory/render.py).
"""

import io

from cli_inventory.executables import ExecutableInfo
from cli_inventory.install_method import InstallMethod
from cli_inventory.render import (
    colorize,
    display_width,
    format_table,
    render_classification,
    render_executables,
    render_installations,
    render_tool_infos,
)
from cli_inventory.tool_info import ExtendedToolInfo


class TestDisplayWidth:
    """Tests for display_width()."""

    def test_ascii(self):
        assert display_width("abc") == 3

    def test_wide_characters(self):
        assert display_width("工具") == 4

    def test_ansi_ignored(self):
        assert display_width("\033[32mok\033[0m") == 2


class TestFormatTable:
    """Tests for format_table()."""

    def test_alignment(self):
        lines = format_table(("name", "path"), [("rg", "/usr/bin/rg"), ("ripgrep", "/x")])
        assert lines == [
            "name     path",
            "rg       /usr/bin/rg",
            "ripgrep  /x",
        ]

    def test_wide_cells_aligned(self):
        lines = format_table(("a", "b"), [("工具", "x"), ("ab", "y")])
        assert lines[1] == "工具  x"
        assert lines[2] == "ab    y"


class TestRenderers:
    """Tests for the table and block renderers."""

    def test_colorize_non_tty(self):
        assert colorize("text", "\033[31m", io.StringIO()) == "text"

    def test_render_executables(self):
        out = io.StringIO()
        render_executables([ExecutableInfo(name="rg", path="/usr/bin/rg", directory="/usr/bin")], out)
        lines = out.getvalue().splitlines()
        assert lines[0].split() == ["name", "directory", "path"]
        assert lines[1].split() == ["rg", "/usr/bin", "/usr/bin/rg"]

    def test_render_tool_infos(self):
        info = ExtendedToolInfo(
            name="foo",
            display_name="foo",
            version="1.2.3",
            path="/usr/bin/foo",
            is_installed=True,
            install_method=InstallMethod.APT,
            all_paths=("/usr/bin/foo", "/usr/local/bin/foo"),
            uninstall_instructions=("sudo apt remove foo",),
        )
        missing = ExtendedToolInfo(
            name="bar",
            display_name="bar",
            version=None,
            path=None,
            is_installed=False,
            install_method=InstallMethod.MANUAL,
        )
        out = io.StringIO()

        render_tool_infos([info, missing], out)
        text = out.getvalue()

        assert "installed" in text
        assert "missing" in text
        assert "foo: 2 installations" in text
        assert "  sudo apt remove foo" in text
        assert "Uninstall bar" not in text

    def test_render_installations_none(self):
        out = io.StringIO()
        render_installations("foo", [], out)
        assert out.getvalue() == "foo: not found\n"

    def test_render_classification(self):
        out = io.StringIO()
        render_classification("/opt/homebrew/bin/foo", InstallMethod.HOMEBREW, ["brew uninstall foo"], out)
        assert out.getvalue().splitlines() == ["/opt/homebrew/bin/foo: homebrew", "  brew uninstall foo"]
