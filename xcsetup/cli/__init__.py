"""
xcsetup command-line interface.
"""

from xcsetup.cli.parser import CLI, main, publish_result

__all__ = ["CLI", "main", "publish_result"]
