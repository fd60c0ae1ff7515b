"""
Microchip XC compiler identities, installer URLs and installation paths.

The installer file names follow the vendor's naming scheme, which is not
uniform: XC16 uses ``linux64`` where XC8 and XC32 use ``linux-x64``.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from xcsetup.config.parser import COMPILER_BASE_URL
from xcsetup.core.exceptions import InvalidCompilerError, UnsupportedCompilerError

SUPPORTED_COMPILERS = ("xc8", "xc16", "xc32")

_INSTALLER_NAMES = {
    "xc8": "xc8-v{version}-full-install-linux-x64-installer.run",
    "xc16": "xc16-v{version}-full-install-linux64-installer.run",
    "xc32": "xc32-v{version}-full-install-linux-x64-installer.run",
}


def normalize_compiler(compiler: str) -> str:
    """
    Return the canonical (lower-case) compiler identifier.

    Raises:
        InvalidCompilerError: If the compiler is not xc8, xc16 or xc32
    """
    compiler_lower = compiler.lower()
    if compiler_lower not in SUPPORTED_COMPILERS:
        raise InvalidCompilerError(compiler, SUPPORTED_COMPILERS)
    return compiler_lower


def get_download_url(
    compiler: str, version: str, base_url: str = COMPILER_BASE_URL
) -> str:
    """
    Construct the download URL of the Linux x64 unattended installer.

    Args:
        compiler: Compiler identifier, case-insensitive (e.g. "XC8")
        version: Version string, used verbatim (e.g. "3.10")
        base_url: Download location of the installers

    Returns:
        Installer URL

    Raises:
        UnsupportedCompilerError: If no installer is known for the compiler

    Example:
        >>> get_download_url("xc16", "2.10").rsplit("/", 1)[1]
        'xc16-v2.10-full-install-linux64-installer.run'
    """
    template = _INSTALLER_NAMES.get(compiler.lower())
    if template is None:
        raise UnsupportedCompilerError(compiler, SUPPORTED_COMPILERS)

    return f"{base_url}/{template.format(version=version)}"


def get_compiler_path(
    install_dir: Union[str, Path], compiler: str, version: str
) -> Path:
    """
    Get the installation directory for a compiler version.

    Example:
        >>> get_compiler_path("./microchip", "XC16", "2.10")
        PosixPath('microchip/xc16/v2.10')
    """
    return Path(install_dir) / compiler.lower() / f"v{version}"


def get_bin_path(compiler_path: Union[str, Path]) -> Path:
    """Get the bin directory of an installed compiler."""
    return Path(compiler_path) / "bin"


@dataclass(frozen=True)
class CompilerInstallation:
    """Where a compiler version is (or will be) installed."""

    compiler: str
    version: str
    install_dir: Path
    bin_dir: Path

    @classmethod
    def under(
        cls, base_dir: Union[str, Path], compiler: str, version: str
    ) -> "CompilerInstallation":
        install_dir = get_compiler_path(base_dir, compiler, version)
        return cls(
            compiler=compiler.lower(),
            version=version,
            install_dir=install_dir,
            bin_dir=get_bin_path(install_dir),
        )

    def is_installed(self) -> bool:
        return self.bin_dir.exists()
