"""
Configuration for xcsetup.
"""

from xcsetup.config.parser import (
    COMPILER_BASE_URL,
    DEFAULT_INSTALL_DIR,
    REQUIRED_PACKAGES,
    SetupConfig,
    load_config,
    load_yaml_config,
)

__all__ = [
    "COMPILER_BASE_URL",
    "DEFAULT_INSTALL_DIR",
    "REQUIRED_PACKAGES",
    "SetupConfig",
    "load_config",
    "load_yaml_config",
]
