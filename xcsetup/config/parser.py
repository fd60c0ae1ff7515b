"""
Configuration loading for xcsetup.

Settings come from three layers, later ones winning:

1. Built-in defaults (vendor URL, 32-bit package set, install root)
2. Optional YAML file (``--config`` or ``XCSETUP_CONFIG``)
3. Runner environment (``RUNNER_TOOL_CACHE``, ``RUNNER_TEMP``)

Example configuration file:

    base_url: https://mirror.example.com/microchip
    default_install_dir: /opt/microchip
    privilege_command: ""
    required_packages:
      - libc6:i386
      - libx11-6:i386
"""

import logging
import os
import tempfile
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from xcsetup.core.exceptions import ConfigError
from xcsetup.core.tool_cache import get_default_tool_cache_dir

logger = logging.getLogger(__name__)

COMPILER_BASE_URL = (
    "https://ww1.microchip.com/downloads/aemDocuments/documents/DEV/"
    "ProductDocuments/SoftwareTools"
)

DEFAULT_INSTALL_DIR = "/opt/microchip"

# 32-bit runtime libraries needed by the vendor installers on 64-bit hosts
# Source: https://developerhelp.microchip.com/xwiki/bin/view/software-tools/ides/x/archive/linux/
REQUIRED_PACKAGES: Tuple[str, ...] = (
    "libc6:i386",
    "libx11-6:i386",
    "libxext6:i386",
    "libstdc++6:i386",
    "libexpat1:i386",
)

CONFIG_ENV_VAR = "XCSETUP_CONFIG"


@dataclass(frozen=True)
class SetupConfig:
    """Immutable settings shared by every setup step."""

    base_url: str = COMPILER_BASE_URL
    """Base URL the installer file names are appended to"""

    required_packages: Tuple[str, ...] = REQUIRED_PACKAGES
    """OS packages checked before running an installer, in check order"""

    default_install_dir: str = DEFAULT_INSTALL_DIR
    """Install root used when the install-dir input is empty"""

    tool_cache_dir: Path = field(default_factory=get_default_tool_cache_dir)
    """Root of the tool cache"""

    temp_dir: Path = field(
        default_factory=lambda: Path(tempfile.gettempdir()) / "xcsetup"
    )
    """Directory installers are downloaded into"""

    privilege_command: str = "sudo"
    """Prefix for package manager commands; empty to run them directly"""

    download_timeout: int = 30
    """Socket timeout in seconds for installer downloads"""


def load_yaml_config(config_file: Path, required: bool = False) -> Dict[str, Any]:
    """
    Load and parse a YAML configuration file.

    Args:
        config_file: Path to YAML configuration file
        required: If True, raise error if file doesn't exist

    Returns:
        Configuration dictionary (empty dict if file doesn't exist and not required)

    Raises:
        ConfigError: If the file is required but missing, or YAML parsing fails
    """
    if not config_file.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {config_file}")
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(f"Configuration in {config_file} must be a mapping")
    return config


def _coerce(values: Dict[str, Any], source: str) -> Dict[str, Any]:
    known = {f.name for f in fields(SetupConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys in {source}: {', '.join(unknown)}")

    result = dict(values)
    if "required_packages" in result:
        packages = result["required_packages"]
        if not isinstance(packages, (list, tuple)) or not all(
            isinstance(p, str) and p for p in packages
        ):
            raise ConfigError("required_packages must be a list of package names")
        result["required_packages"] = tuple(packages)

    for key in ("tool_cache_dir", "temp_dir"):
        if key in result:
            result[key] = Path(os.path.expanduser(str(result[key])))

    if "download_timeout" in result:
        try:
            result["download_timeout"] = int(result["download_timeout"])
        except (TypeError, ValueError) as e:
            raise ConfigError("download_timeout must be an integer") from e

    for key in ("base_url", "default_install_dir", "privilege_command"):
        if key in result:
            result[key] = "" if result[key] is None else str(result[key])
    if "base_url" in result:
        result["base_url"] = result["base_url"].rstrip("/")

    return result


def load_config(config_file: Optional[Path] = None) -> SetupConfig:
    """
    Build the effective configuration.

    Args:
        config_file: Optional YAML file. Falls back to XCSETUP_CONFIG; an
            explicitly named file must exist.

    Returns:
        SetupConfig with file and environment overrides applied

    Raises:
        ConfigError: If the file is missing, malformed, or has unknown keys
    """
    config = SetupConfig()

    if config_file is None and os.environ.get(CONFIG_ENV_VAR):
        config_file = Path(os.environ[CONFIG_ENV_VAR])

    if config_file is not None:
        values = load_yaml_config(Path(config_file), required=True)
        config = replace(config, **_coerce(values, str(config_file)))
        logger.debug(f"Applied configuration from {config_file}")

    runner_temp = os.environ.get("RUNNER_TEMP")
    if runner_temp:
        config = replace(config, temp_dir=Path(runner_temp) / "xcsetup")

    runner_cache = os.environ.get("RUNNER_TOOL_CACHE")
    if runner_cache:
        config = replace(config, tool_cache_dir=Path(runner_cache))

    return config
