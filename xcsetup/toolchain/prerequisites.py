"""
32-bit library prerequisites for the XC installers.

The Microchip installers are 32-bit binaries, so on 64-bit Debian/Ubuntu hosts
they need the i386 variants of a handful of runtime libraries. This module
checks for them with dpkg and installs whatever is missing with apt-get.
"""

import logging
from typing import List, Optional, Sequence

from xcsetup.config.parser import REQUIRED_PACKAGES
from xcsetup.core.exceptions import PrerequisiteInstallError
from xcsetup.core.process import run_command

logger = logging.getLogger(__name__)

INSTALLED_STATE = "ii"


def _has_installed_row(dpkg_output: str) -> bool:
    """
    Check ``dpkg -l`` output for a row in the installed state.

    Rows start with a two-letter desired/status field ("ii" installed,
    "rc" removed with config files left, ...). Header lines never match.
    """
    for line in dpkg_output.splitlines():
        fields = line.split(maxsplit=1)
        if fields and fields[0] == INSTALLED_STATE:
            return True
    return False


class PrerequisiteInstaller:
    """
    Ensures the required OS packages are installed.

    Example:
        >>> installer = PrerequisiteInstaller()
        >>> installer.missing_packages()
        ['libx11-6:i386']
        >>> installer.install_prerequisites()
    """

    def __init__(
        self,
        required_packages: Sequence[str] = REQUIRED_PACKAGES,
        privilege_command: str = "sudo",
    ):
        """
        Initialize the prerequisite installer.

        Args:
            required_packages: Package names to check, in check order
            privilege_command: Command prefixed to package manager calls
                (empty string to run them directly, e.g. as root)
        """
        self.required_packages = tuple(required_packages)
        self.privilege_command = privilege_command

    def _elevated(self, *args: str) -> List[str]:
        if self.privilege_command:
            return [self.privilege_command, *args]
        return list(args)

    def is_package_installed(self, package_name: str) -> bool:
        """
        Check whether a package is installed.

        Never raises: a failing query, a non-zero exit code or any state
        other than "ii" all count as not installed.
        """
        try:
            result = run_command(
                ["dpkg", "-l", package_name], silent=True, ignore_return_code=True
            )
        except Exception as e:
            logger.debug(f"dpkg query for {package_name} failed: {e}")
            return False

        return result.exit_code == 0 and _has_installed_row(result.stdout)

    def missing_packages(self) -> List[str]:
        """Return the required packages that are not installed, in order."""
        return [
            pkg for pkg in self.required_packages if not self.is_package_installed(pkg)
        ]

    def install_prerequisites(self) -> None:
        """
        Install any missing required packages.

        Raises:
            PrerequisiteInstallError: If enabling i386, updating the package
                lists or installing fails. Earlier steps are not undone.
        """
        logger.info("Checking for required 32-bit libraries...")

        missing = self.missing_packages()
        if not missing:
            logger.info("All required packages are already installed")
            return

        logger.info(f"Installing missing packages: {', '.join(missing)}")

        try:
            logger.info("Enabling i386 architecture...")
            run_command(self._elevated("dpkg", "--add-architecture", "i386"), silent=True)

            logger.info("Updating package lists...")
            run_command(self._elevated("apt-get", "update", "-qq"), silent=True)

            logger.info("Installing 32-bit prerequisites...")
            run_command(self._elevated("apt-get", "install", "-y", "-qq", *missing))
        except Exception as e:
            raise PrerequisiteInstallError(
                f"Failed to install prerequisites: {e}"
            ) from e

        logger.info("Prerequisites installed successfully")


def is_package_installed(package_name: str) -> bool:
    """Convenience wrapper using the default package set."""
    return PrerequisiteInstaller().is_package_installed(package_name)


def install_prerequisites(
    required_packages: Optional[Sequence[str]] = None,
) -> None:
    """
    Convenience function to install the 32-bit prerequisites.

    Args:
        required_packages: Override the default package set
    """
    installer = PrerequisiteInstaller(required_packages or REQUIRED_PACKAGES)
    installer.install_prerequisites()
