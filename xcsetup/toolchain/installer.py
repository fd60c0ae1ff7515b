"""
Compiler setup orchestration.

This module drives the complete setup of one XC compiler version:
1. Validate the requested compiler
2. Check the tool cache (a hit skips every later step)
3. Install the 32-bit prerequisites
4. Download the vendor installer
5. Run the installer in unattended mode
6. Verify the bin directory exists
7. Copy the installation into the tool cache

The outcome is returned as a SetupResult; the caller decides how to publish it.
"""

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from xcsetup.config.parser import SetupConfig, load_config
from xcsetup.core.download import DownloadProgress, download_file
from xcsetup.core.exceptions import (
    InstallationError,
    InstallationVerificationError,
    InstallerDownloadError,
)
from xcsetup.core.filesystem import ensure_directory, make_executable
from xcsetup.core.process import run_command
from xcsetup.core.tool_cache import ToolCache
from xcsetup.toolchain.compilers import (
    CompilerInstallation,
    get_bin_path,
    get_download_url,
    normalize_compiler,
)
from xcsetup.toolchain.prerequisites import PrerequisiteInstaller

logger = logging.getLogger(__name__)

INSTALLER_ARGS = ("--mode", "unattended", "--netservername", "localhost")


@dataclass
class SetupResult:
    """Result of a compiler setup run."""

    success: bool
    """Whether the compiler is ready to use"""

    compiler: str
    """Compiler as requested"""

    version: str
    """Version as requested"""

    install_dir: Optional[str] = None
    """Installation root of the compiler (cached path on a cache hit)"""

    compiler_path: Optional[str] = None
    """Directory containing the compiler executables"""

    from_cache: bool = False
    """Whether the compiler came from the tool cache"""

    error: Optional[str] = None
    """Failure message when success is False"""

    @classmethod
    def failed(cls, compiler: str, version: str, error: str) -> "SetupResult":
        return cls(success=False, compiler=compiler, version=version, error=error)


class CompilerSetup:
    """
    Installs an XC compiler, reusing the tool cache when possible.

    Example:
        >>> setup = CompilerSetup()
        >>> result = setup.run("xc8", "3.10")
        >>> if result.success:
        ...     print(f"Compiler at: {result.compiler_path}")
    """

    def __init__(
        self,
        config: Optional[SetupConfig] = None,
        tool_cache: Optional[ToolCache] = None,
        prerequisites: Optional[PrerequisiteInstaller] = None,
    ):
        """
        Initialize compiler setup.

        Args:
            config: Settings. If None, uses load_config().
            tool_cache: Tool cache. If None, uses config.tool_cache_dir.
            prerequisites: Prerequisite installer. If None, built from config.
        """
        self.config = config or load_config()
        self.tool_cache = tool_cache or ToolCache(self.config.tool_cache_dir)
        self.prerequisites = prerequisites or PrerequisiteInstaller(
            self.config.required_packages, self.config.privilege_command
        )

    def run(
        self, compiler: str, version: str, install_dir: Optional[str] = None
    ) -> SetupResult:
        """
        Set up a compiler version.

        Never raises; any error is reported through the returned result.

        Args:
            compiler: Compiler identifier, case-insensitive (xc8, xc16, xc32)
            version: Compiler version (e.g. "3.10")
            install_dir: Install root (default: config.default_install_dir)

        Returns:
            SetupResult describing the installation or the failure
        """
        try:
            return self._setup(compiler, version, install_dir)
        except Exception as e:
            logger.debug("Setup failed", exc_info=True)
            return SetupResult.failed(compiler, version, str(e))

    def _setup(
        self, compiler: str, version: str, install_dir: Optional[str]
    ) -> SetupResult:
        install_dir = install_dir or self.config.default_install_dir

        logger.info(f"Setting up {compiler} version {version}")
        logger.info(f"Installation directory: {install_dir}")

        compiler_id = normalize_compiler(compiler)

        cached_path = self.tool_cache.find(compiler_id, version)
        if cached_path:
            logger.info(f"Found cached compiler at {cached_path}")
            logger.info(f"{compiler} v{version} is ready (from cache)")
            return SetupResult(
                success=True,
                compiler=compiler,
                version=version,
                install_dir=cached_path,
                compiler_path=str(get_bin_path(cached_path)),
                from_cache=True,
            )

        self.prerequisites.install_prerequisites()

        installer_path = self._download_installer(compiler, version)

        installation = CompilerInstallation.under(install_dir, compiler_id, version)
        self._run_installer(installer_path, Path(install_dir), installation)

        if not installation.is_installed():
            raise InstallationVerificationError(installation.bin_dir)

        logger.info("Caching compiler for future runs...")
        cached_to = self.tool_cache.cache_dir(
            installation.install_dir, compiler_id, version
        )
        logger.info(f"Cached to: {cached_to}")

        logger.info(f"{compiler} v{version} installed successfully!")
        logger.info(f"   Install directory: {installation.install_dir}")
        logger.info(f"   Binary path: {installation.bin_dir}")

        return SetupResult(
            success=True,
            compiler=compiler,
            version=version,
            install_dir=str(installation.install_dir),
            compiler_path=str(installation.bin_dir),
        )

    def _download_installer(self, compiler: str, version: str) -> Path:
        url = get_download_url(compiler, version, self.config.base_url)
        logger.info(f"Download URL: {url}")

        destination = (
            self.config.temp_dir / uuid.uuid4().hex / url.rsplit("/", 1)[-1]
        )

        logger.info("Downloading installer...")
        try:
            installer_path = download_file(
                url,
                destination,
                progress_callback=_log_progress,
                timeout=self.config.download_timeout,
            )
        except Exception as e:
            raise InstallerDownloadError(url, compiler, version, e) from e

        logger.info(f"Downloaded to: {installer_path}")
        return installer_path

    def _run_installer(
        self,
        installer_path: Path,
        base_dir: Path,
        installation: CompilerInstallation,
    ) -> None:
        make_executable(installer_path)

        logger.info(f"Installing to: {installation.install_dir}")

        # The installer creates the compiler/version subdirectory itself
        if not base_dir.exists():
            ensure_directory(base_dir)

        logger.info("Running installer...")
        try:
            run_command(
                [installer_path, *INSTALLER_ARGS, "--prefix", installation.install_dir]
            )
        except Exception as e:
            raise InstallationError(
                "Installation failed. The installer may require sudo privileges or "
                f"the version may not be available. Error: {e}"
            ) from e

        logger.info("Installation completed")


def _log_progress(progress: DownloadProgress) -> None:
    logger.debug(f"Downloaded {progress}")


def setup_compiler(
    compiler: str,
    version: str,
    install_dir: Optional[str] = None,
    config: Optional[SetupConfig] = None,
) -> SetupResult:
    """
    Convenience function to set up a compiler.

    Example:
        >>> result = setup_compiler("xc32", "5.00", "/opt/microchip")
    """
    return CompilerSetup(config=config).run(compiler, version, install_dir)
