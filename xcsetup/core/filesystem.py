"""
File system helpers used by the tool cache and the installer.
"""

import os
import shutil
import stat
from pathlib import Path
from typing import Callable, Optional, Union


class FilesystemError(Exception):
    """Base exception for filesystem operations."""

    pass


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists (idempotent).

    Args:
        path: Directory path

    Returns:
        Path object

    Example:
        >>> ensure_directory('/opt/microchip')
        PosixPath('/opt/microchip')
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def make_executable(path: Union[str, Path]) -> Path:
    """Add execute permission for user, group and others (chmod +x)."""
    path = Path(path)
    if not path.is_file():
        raise FilesystemError(f"Not a file: {path}")

    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def safe_rmtree(path: Union[str, Path], require_prefix: Optional[Path] = None) -> None:
    """
    Remove a directory tree.

    Args:
        path: Directory to remove (missing directories are ignored)
        require_prefix: Refuse to delete anything outside this directory

    Raises:
        FilesystemError: If the path is outside require_prefix or removal fails
    """
    path = Path(path)
    if not path.exists():
        return

    if require_prefix is not None:
        resolved = path.resolve()
        prefix = Path(require_prefix).resolve()
        if resolved == prefix or prefix not in resolved.parents:
            raise FilesystemError(
                f"Refusing to remove '{path}': not inside '{require_prefix}'"
            )

    try:
        shutil.rmtree(path)
    except OSError as e:
        raise FilesystemError(f"Failed to remove directory '{path}': {e}") from e


def recursive_copy(
    source: Union[str, Path],
    destination: Union[str, Path],
    progress_callback: Optional[Callable[[Path], None]] = None,
) -> None:
    """
    Recursively copy a directory tree, preserving symlinks and file metadata.

    Args:
        source: Source directory
        destination: Destination directory
        progress_callback: Optional callback called for each copied item

    Example:
        >>> recursive_copy('/opt/microchip/xc8/v3.10', '/cache/xc8/3.10/x64')
    """
    source = Path(source)
    destination = Path(destination)

    if not source.exists():
        raise FilesystemError(f"Source does not exist: {source}")

    if not source.is_dir():
        raise FilesystemError(f"Source is not a directory: {source}")

    destination.mkdir(parents=True, exist_ok=True)

    for item in source.rglob("*"):
        dest_item = destination / item.relative_to(source)

        if item.is_symlink():
            # Installers ship relative symlinks (e.g. versioned driver names)
            if dest_item.exists() or dest_item.is_symlink():
                dest_item.unlink()
            dest_item.parent.mkdir(parents=True, exist_ok=True)
            os.symlink(os.readlink(item), dest_item)
        elif item.is_dir():
            dest_item.mkdir(parents=True, exist_ok=True)
        else:
            dest_item.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(item, dest_item)

        if progress_callback:
            progress_callback(item)
