"""
Entry point for running the xcsetup CLI as a module.

Usage: python -m xcsetup.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
