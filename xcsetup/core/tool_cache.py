"""
Runner tool cache for installed compilers.

Mirrors the hosted-runner tool cache layout so that compilers installed by one
job can be reused by later jobs on the same machine (or restored with a cache
action):

    {root}/
        xc8/
            3.10/
                x64/            : Installed compiler tree
                x64.complete    : Marker written once the copy has finished

An entry without its ``.complete`` marker is treated as absent.
"""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Union

from filelock import FileLock, Timeout

from xcsetup.core.exceptions import ToolCacheError
from xcsetup.core.filesystem import FilesystemError, recursive_copy, safe_rmtree

logger = logging.getLogger(__name__)

DEFAULT_ARCH = "x64"


def get_default_tool_cache_dir() -> Path:
    """
    Get the tool cache root directory.

    Returns:
        RUNNER_TOOL_CACHE when set (hosted runners), otherwise
        ~/.xcsetup/tool-cache
    """
    runner_cache = os.environ.get("RUNNER_TOOL_CACHE")
    if runner_cache:
        return Path(runner_cache)
    return Path.home() / ".xcsetup" / "tool-cache"


class ToolCache:
    """
    Content store for installed tools keyed by (name, version, arch).

    Example:
        >>> cache = ToolCache(Path("/opt/hostedtoolcache"))
        >>> cache.find("xc8", "3.10")
        ''
        >>> cache.cache_dir("/opt/microchip/xc8/v3.10", "xc8", "3.10")
        '/opt/hostedtoolcache/xc8/3.10/x64'
    """

    def __init__(self, root: Optional[Path] = None, lock_timeout: int = 300):
        """
        Initialize tool cache.

        Args:
            root: Cache root (default: RUNNER_TOOL_CACHE or ~/.xcsetup/tool-cache)
            lock_timeout: Timeout in seconds for acquiring the promote lock
        """
        self.root = Path(root) if root else get_default_tool_cache_dir()
        self.lock_timeout = lock_timeout

        logger.debug(f"Initialized tool cache at {self.root}")

    def _tool_path(self, name: str, version: str, arch: str) -> Path:
        if not name:
            raise ToolCacheError("Tool name must be specified")
        if not version:
            raise ToolCacheError("Tool version must be specified")
        return self.root / name / version / arch

    @staticmethod
    def _marker_path(tool_path: Path) -> Path:
        return tool_path.parent / f"{tool_path.name}.complete"

    @contextmanager
    def _lock(self, tool_path: Path):
        """Hold an exclusive lock on one (name, version) entry."""
        lock_path = tool_path.parent / f"{tool_path.name}.lock"
        lock_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with FileLock(lock_path, timeout=self.lock_timeout):
                logger.debug(f"Acquired tool cache lock {lock_path}")
                yield
        except Timeout as e:
            raise ToolCacheError(
                f"Could not acquire tool cache lock within {self.lock_timeout} seconds"
            ) from e

    def find(self, name: str, version: str, arch: str = DEFAULT_ARCH) -> str:
        """
        Look up a cached tool.

        Args:
            name: Tool name (e.g. "xc8")
            version: Exact version string (e.g. "3.10")
            arch: Architecture directory

        Returns:
            Path to the cached tool, or an empty string on a miss
        """
        tool_path = self._tool_path(name, version, arch)

        if tool_path.is_dir() and self._marker_path(tool_path).exists():
            logger.debug(f"Found tool in cache {name} {version} {arch}")
            return str(tool_path)

        logger.debug(f"Tool not found in cache: {name} {version} {arch}")
        return ""

    def cache_dir(
        self,
        source: Union[str, Path],
        name: str,
        version: str,
        arch: str = DEFAULT_ARCH,
    ) -> str:
        """
        Copy a directory into the cache.

        An existing entry for the same key is replaced.

        Args:
            source: Installed tool directory
            name: Tool name
            version: Tool version
            arch: Architecture directory

        Returns:
            Canonical path of the cached copy

        Raises:
            ToolCacheError: If the source is missing or copying fails
        """
        source = Path(source)
        if not source.is_dir():
            raise ToolCacheError(f"Source directory not found: {source}")

        tool_path = self._tool_path(name, version, arch)
        marker = self._marker_path(tool_path)

        logger.debug(f"Caching tool {name} {version} {arch} from {source}")

        with self._lock(tool_path):
            try:
                marker.unlink(missing_ok=True)
                safe_rmtree(tool_path, require_prefix=self.root)
                recursive_copy(source, tool_path)
                marker.write_text("")
            except (FilesystemError, OSError) as e:
                raise ToolCacheError(f"Failed to cache {source}: {e}") from e

        return str(tool_path)
