"""
Entry point for running xcsetup as a module.

Usage: python -m xcsetup [command] [options]
"""

from xcsetup.cli.parser import main

if __name__ == "__main__":
    main()
