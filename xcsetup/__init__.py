"""
xcsetup - install Microchip XC compilers on CI runners.
"""

from xcsetup.toolchain import (
    CompilerSetup,
    SetupResult,
    get_bin_path,
    get_compiler_path,
    get_download_url,
    setup_compiler,
)

__all__ = [
    "CompilerSetup",
    "SetupResult",
    "get_bin_path",
    "get_compiler_path",
    "get_download_url",
    "setup_compiler",
]
