"""
Compiler installation for xcsetup.

This package provides:
- Installer URL and installation path construction
- 32-bit prerequisite installation
- The setup workflow (cache lookup, download, install, verify, cache)
"""

from xcsetup.toolchain.compilers import (
    SUPPORTED_COMPILERS,
    CompilerInstallation,
    get_bin_path,
    get_compiler_path,
    get_download_url,
    normalize_compiler,
)
from xcsetup.toolchain.prerequisites import (
    PrerequisiteInstaller,
    install_prerequisites,
    is_package_installed,
)
from xcsetup.toolchain.installer import (
    CompilerSetup,
    SetupResult,
    setup_compiler,
)

__all__ = [
    # Compilers
    "SUPPORTED_COMPILERS",
    "CompilerInstallation",
    "get_bin_path",
    "get_compiler_path",
    "get_download_url",
    "normalize_compiler",
    # Prerequisites
    "PrerequisiteInstaller",
    "install_prerequisites",
    "is_package_installed",
    # Setup
    "CompilerSetup",
    "SetupResult",
    "setup_compiler",
]
