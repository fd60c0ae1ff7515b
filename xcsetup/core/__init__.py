"""
Core functionality for xcsetup.

This package contains the foundational modules that other components depend on:
process execution, downloads, the tool cache and the exception hierarchy.
"""

from .exceptions import (
    XCSetupError,
    InputError,
    ConfigError,
    InvalidCompilerError,
    UnsupportedCompilerError,
    CommandError,
    DownloadError,
    ToolCacheError,
    PrerequisiteInstallError,
    InstallerDownloadError,
    InstallationError,
    InstallationVerificationError,
)

from .process import CommandResult, run_command

from .tool_cache import ToolCache, get_default_tool_cache_dir

__all__ = [
    # Exceptions
    "XCSetupError",
    "InputError",
    "ConfigError",
    "InvalidCompilerError",
    "UnsupportedCompilerError",
    "CommandError",
    "DownloadError",
    "ToolCacheError",
    "PrerequisiteInstallError",
    "InstallerDownloadError",
    "InstallationError",
    "InstallationVerificationError",
    # Process execution
    "CommandResult",
    "run_command",
    # Tool cache
    "ToolCache",
    "get_default_tool_cache_dir",
]
