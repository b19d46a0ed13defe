"""
CLI Inventory - discover installed command-line tools and how to remove them.

Core Modules:
- Search path: parse the executable search path
- Executables: platform-aware executability checks and directory scans
- Install method: provenance from path shape
- Uninstall: removal instructions per install method
- Tool info: per-tool paths, version, provenance and instructions
- Foundation: environment capture, config, logging, process execution
"""

__version__ = "1.0.0"
__author__ = "CLI Inventory Contributors"

VERSION = __version__

# Discovery
from .search_path import get_path_separator, parse_path
from .executables import (
    EXECUTABLE_EXTENSIONS,
    ExecutableInfo,
    command_name,
    is_executable,
    scan_directory,
    scan_all_path_directories,
)
from .install_method import InstallMethod, identify_install_method
from .uninstall import generate_uninstall_instructions
from .tool_info import (
    ExtendedToolInfo,
    get_extended_tool_info,
    find_all_installations,
    detect_cli_tools,
)
from .scanner import PathScanner

# Collaborators
from .common import is_windows, normalize_path
from .executor import CommandResult, execute_safe, get_all_tool_paths
from .version import ParsedVersion, parse_version, get_version_output

# Foundation
from .environment import ScanEnvironment, detect_environment, get_environment_from_config
from .config import Config, Preferences, load_config, load_config_file, validate_config
from .logging_config import setup_logging, get_logger

__all__ = [
    # Version
    "__version__",
    "VERSION",
    # Discovery
    "get_path_separator",
    "parse_path",
    "EXECUTABLE_EXTENSIONS",
    "ExecutableInfo",
    "command_name",
    "is_executable",
    "scan_directory",
    "scan_all_path_directories",
    "InstallMethod",
    "identify_install_method",
    "generate_uninstall_instructions",
    "ExtendedToolInfo",
    "get_extended_tool_info",
    "find_all_installations",
    "detect_cli_tools",
    "PathScanner",
    # Collaborators
    "is_windows",
    "normalize_path",
    "CommandResult",
    "execute_safe",
    "get_all_tool_paths",
    "ParsedVersion",
    "parse_version",
    "get_version_output",
    # Foundation
    "ScanEnvironment",
    "detect_environment",
    "get_environment_from_config",
    "Config",
    "Preferences",
    "load_config",
    "load_config_file",
    "validate_config",
    "setup_logging",
    "get_logger",
]
