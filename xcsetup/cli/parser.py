"""
xcsetup CLI argument parser.

This module implements the command-line interface using argparse. It is also
the boundary between the setup logic and the GitHub Actions runner: results
are published as step outputs, PATH entries and failure annotations here.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from xcsetup.ci.github import ActionsRuntime
from xcsetup.config.parser import load_config
from xcsetup.core.exceptions import XCSetupError
from xcsetup.toolchain.compilers import SUPPORTED_COMPILERS, get_download_url
from xcsetup.toolchain.installer import CompilerSetup, SetupResult

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("xcsetup")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


def publish_result(result: SetupResult, runtime: ActionsRuntime) -> int:
    """
    Publish a setup result to the runner.

    Returns:
        Exit code (0 on success, 1 on failure)
    """
    if not result.success:
        runtime.set_failed(result.error or "Compiler setup failed")
        return 1

    try:
        runtime.add_path(result.compiler_path)
        logger.info(f"Added {result.compiler_path} to PATH")

        runtime.set_output("install-dir", result.install_dir)
        runtime.set_output("compiler-path", result.compiler_path)
    except OSError as e:
        runtime.set_failed(str(e))
        return 1
    return 0


class CLI:
    """xcsetup command-line interface."""

    def __init__(self, runtime: Optional[ActionsRuntime] = None):
        """
        Initialize CLI with argument parser.

        Args:
            runtime: Actions runtime for inputs and outputs (default: environment)
        """
        self.runtime = runtime or ActionsRuntime()
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="xcsetup",
            description="Install Microchip XC compilers on CI runners",
            epilog='Use "xcsetup COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        parser.add_argument(
            "--version", action="version", version=f"xcsetup {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to YAML configuration file (default: $XCSETUP_CONFIG)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_install_command(subparsers)
        self._add_url_command(subparsers)

        return parser

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        parser = subparsers.add_parser(
            "install",
            help="Install a compiler (or reuse it from the tool cache)",
            description=(
                "Install a compiler. Options not given on the command line are "
                "read from the action inputs (INPUT_COMPILER, INPUT_VERSION, "
                "INPUT_INSTALL-DIR)."
            ),
        )
        parser.add_argument(
            "--compiler",
            metavar="NAME",
            help=f"Compiler to install ({', '.join(SUPPORTED_COMPILERS)})",
        )
        parser.add_argument(
            "--version",
            dest="compiler_version",
            metavar="VERSION",
            help="Compiler version (e.g. 3.10)",
        )
        parser.add_argument(
            "--install-dir",
            metavar="PATH",
            help="Installation root [default: /opt/microchip]",
        )

    def _add_url_command(self, subparsers):
        """Add 'url' subcommand."""
        parser = subparsers.add_parser(
            "url",
            help="Print the installer download URL",
            description="Print the download URL of a compiler installer",
        )
        parser.add_argument("--compiler", required=True, metavar="NAME")
        parser.add_argument(
            "--version", dest="compiler_version", required=True, metavar="VERSION"
        )

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse command-line arguments.

        Args:
            args: Argument list (default: sys.argv[1:])

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with provided arguments.

        Args:
            args: Argument list (default: sys.argv[1:])

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags and RUNNER_DEBUG.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose or self.runtime.is_debug():
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        command_map = {
            "install": self._run_install,
            "url": self._run_url,
        }

        handler = command_map.get(args.command)
        if not handler:
            logger.error(f"Unknown command: {args.command}")
            return 1

        return handler(args)

    def _run_install(self, args) -> int:
        try:
            compiler = args.compiler or self.runtime.get_input("compiler", required=True)
            compiler_version = args.compiler_version or self.runtime.get_input(
                "version", required=True
            )
            install_dir = args.install_dir or self.runtime.get_input("install-dir")
            config = load_config(args.config)
        except XCSetupError as e:
            self.runtime.set_failed(str(e))
            return 1

        result = CompilerSetup(config=config).run(
            compiler, compiler_version, install_dir or None
        )
        return publish_result(result, self.runtime)

    def _run_url(self, args) -> int:
        try:
            config = load_config(args.config)
            url = get_download_url(args.compiler, args.compiler_version, config.base_url)
        except XCSetupError as e:
            logger.error(f"Error: {e}")
            return 1

        print(url)
        return 0


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
