"""
Centralized exception hierarchy for xcsetup.

This module defines all custom exceptions used across the codebase so that
the orchestrator can catch them at a single boundary and report them as
human-readable failure messages.
"""

from typing import Optional, Sequence


# ============================================================================
# Base Exceptions
# ============================================================================


class XCSetupError(Exception):
    """Base exception for all xcsetup errors."""

    pass


# ============================================================================
# Input and Configuration Exceptions
# ============================================================================


class InputError(XCSetupError):
    """Raised when a required action input is missing."""

    pass


class ConfigError(XCSetupError):
    """Raised when the configuration file is invalid."""

    pass


class InvalidCompilerError(XCSetupError):
    """Raised when the requested compiler is not one of the supported ones."""

    def __init__(self, compiler: str, valid_compilers: Sequence[str]):
        self.compiler = compiler
        self.valid_compilers = tuple(valid_compilers)
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        return (
            f"Invalid compiler type: {self.compiler}. "
            f"Must be one of: {', '.join(self.valid_compilers)}"
        )


class UnsupportedCompilerError(InvalidCompilerError):
    """Raised when no installer is known for the requested compiler."""

    def _format_message(self) -> str:
        return (
            f"Unsupported compiler: {self.compiler}. "
            f"Must be one of: {', '.join(self.valid_compilers)}"
        )


# ============================================================================
# Infrastructure Exceptions
# ============================================================================


class CommandError(XCSetupError):
    """Raised when an external command fails to start or exits non-zero."""

    def __init__(
        self,
        message: str,
        command: Sequence[str] = (),
        exit_code: Optional[int] = None,
    ):
        self.command = list(command)
        self.exit_code = exit_code
        super().__init__(message)


class DownloadError(XCSetupError):
    """Raised when a file download fails."""

    pass


class ToolCacheError(XCSetupError):
    """Raised when the tool cache cannot be read or written."""

    pass


# ============================================================================
# Installation Exceptions
# ============================================================================


class PrerequisiteInstallError(XCSetupError):
    """Raised when the 32-bit prerequisite packages cannot be installed."""

    pass


class InstallerDownloadError(XCSetupError):
    """Raised when the compiler installer cannot be downloaded."""

    def __init__(self, url: str, compiler: str, version: str, cause: Exception):
        self.url = url
        self.compiler = compiler
        self.version = version
        super().__init__(
            f"Failed to download installer from {url}. "
            f"Please verify that version {version} exists for {compiler}. "
            f"Error: {cause}"
        )


class InstallationError(XCSetupError):
    """Raised when the vendor installer fails."""

    pass


class InstallationVerificationError(XCSetupError):
    """Raised when the installer finished but the bin directory is missing."""

    def __init__(self, bin_path):
        self.bin_path = bin_path
        super().__init__(
            f"Installation verification failed: bin directory not found at {bin_path}"
        )
