#!/usr/bin/env python3
"""
CLI Inventory - which command-line tools are installed, where, and how.

Usage:
    inventory.py scan                 # List every executable on PATH
    inventory.py info [NAME ...]      # Version, provenance and removal steps
    inventory.py where NAME           # Every installation of one tool
    inventory.py classify PATH        # Install method of a path
"""

import argparse
import json
import ntpath
import os
import sys

# Add current directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from cli_inventory.common import is_windows
from cli_inventory.config import Config, Preferences, load_config, validate_config
from cli_inventory.executables import command_name
from cli_inventory.logging_config import setup_logging, get_logger
from cli_inventory.render import (
    print_summary,
    render_classification,
    render_executables,
    render_installations,
    render_tool_infos,
)
from cli_inventory.scanner import PathScanner


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inventory.py",
        description="Discover command-line tools on the search path and how they were installed.",
    )
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of a table")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="No console logging (log file only)")
    parser.add_argument("--log-file", help="Write a debug log to this file")
    parser.add_argument("--config", help="Path to a configuration file")
    parser.add_argument(
        "--platform",
        choices=("auto", "linux", "darwin", "win32"),
        help="Apply another platform's rules (default: from config, else auto)",
    )
    parser.add_argument("--timeout", type=int, help="Seconds per version probe / lookup")
    parser.add_argument("--max-workers", type=int, help="Directories or tools processed at once")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("scan", help="List every executable on the search path")

    info = sub.add_parser("info", help="Extended info for tools (default: configured tools)")
    info.add_argument("names", nargs="*")

    where = sub.add_parser("where", help="All installations of one tool")
    where.add_argument("name")

    classify = sub.add_parser("classify", help="Install method and removal steps for a path")
    classify.add_argument("path")
    classify.add_argument("--name", help="Tool name used in the instructions (default: file name)")

    return parser


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Layer command-line flags over the loaded configuration."""
    preferences = Preferences(
        timeout_seconds=args.timeout if args.timeout is not None else config.preferences.timeout_seconds,
        max_workers=args.max_workers if args.max_workers is not None else config.preferences.max_workers,
    )
    return Config(
        version=config.version,
        platform=args.platform or config.platform,
        tools=config.tools,
        preferences=preferences,
        source=config.source,
    )


def default_tool_name(tool_path: str, platform: str) -> str:
    """Tool name for a path: its file name without the extension."""
    if is_windows(platform):
        return command_name(ntpath.basename(tool_path), platform)
    return os.path.splitext(os.path.basename(tool_path))[0]


def emit_json(data) -> None:
    print(json.dumps(data, indent=2, sort_keys=False))


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(log_file=args.log_file, verbose=args.verbose, quiet=args.quiet)
    logger = get_logger("cli")

    try:
        config = apply_overrides(load_config(args.config, verbose=args.verbose), args)
    except (ValueError, TypeError) as e:
        logger.error(str(e))
        return 2

    for warning in validate_config(config):
        logger.warning(warning)

    scanner = PathScanner.from_config(config, verbose=args.verbose)
    logger.debug(f"Platform: {scanner.env}, config: {config.source or 'defaults'}")

    if args.command == "scan":
        executables = scanner.scan()
        if args.json:
            emit_json([e.to_dict() for e in executables])
        else:
            render_executables(executables)
            print_summary("executables", executables)

    elif args.command == "info":
        names = args.names or list(config.tools)
        infos = scanner.info(names)
        if args.json:
            emit_json([i.to_dict() for i in infos])
        else:
            render_tool_infos(infos)
            print_summary("tools", infos, installed=sum(1 for i in infos if i.is_installed))

    elif args.command == "where":
        paths = scanner.where(args.name)
        if args.json:
            emit_json({"name": args.name, "paths": paths})
        else:
            render_installations(args.name, paths)

    elif args.command == "classify":
        name = args.name or default_tool_name(args.path, scanner.env.platform)
        method = scanner.identify_install_method(args.path)
        instructions = scanner.generate_uninstall_instructions(name, method, args.path)
        if args.json:
            emit_json({
                "name": name,
                "path": args.path,
                "installMethod": method.value,
                "uninstallInstructions": instructions,
            })
        else:
            render_classification(args.path, method, instructions)

    return 0


if __name__ == "__main__":
    sys.exit(main())
