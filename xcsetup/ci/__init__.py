"""
CI runner integration for xcsetup.
"""

from xcsetup.ci.github import ActionsRuntime

__all__ = ["ActionsRuntime"]
