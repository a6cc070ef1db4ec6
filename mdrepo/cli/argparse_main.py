##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
Main CLI parser setup for the mdrepo command-line interface.

This module defines the primary argument parser for the `mdrepo` CLI tool,
including custom error handling and integration of all available subcommands.
"""

import sys
from argparse import ArgumentParser, RawDescriptionHelpFormatter

from mdrepo import VERSION
from mdrepo.cli.commands import ALL_COMMANDS


DEFAULT_LOG_LEVEL = "INFO"

DESCRIPTION = "mdrepo: administration of a molecular dynamics data repository"


class HelpParser(ArgumentParser):
    """
    This class overrides the error message of the argument parser to
    print the help message when an error happens.

    Methods:
        error: Override the error message of the `ArgumentParser` class.
    """

    def error(self, message: str):
        """
        Override the error message of the `ArgumentParser` class.

        Args:
            message: The error message to log.
        """
        sys.stderr.write(f"error: {message}\n")
        self.print_help()
        sys.exit(2)


def build_main_parser() -> ArgumentParser:
    """
    Set up the command-line argument parser for the mdrepo package.

    Returns:
        An `ArgumentParser` object with every command defined in mdrepo's codebase.
    """
    parser = HelpParser(
        prog="mdrepo",
        description=DESCRIPTION,
        formatter_class=RawDescriptionHelpFormatter,
        epilog="See mdrepo <command> --help for more info",
    )
    parser.add_argument("-v", "--version", action="version", version=VERSION)
    parser.add_argument(
        "-lvl",
        "--level",
        type=str,
        default=DEFAULT_LOG_LEVEL,
        help="Set log level: DEBUG, INFO, WARNING, ERROR [Default: %(default)s]",
    )
    parser.add_argument(
        "-e",
        "--env-file",
        type=str,
        default=None,
        help="Path to the environment file with the database settings. "
        "By default ./.env and then ~/.mdrepo/.env are used.",
    )
    subparsers = parser.add_subparsers(dest="subparsers", required=True)

    for command in ALL_COMMANDS:
        command.add_parser(subparsers)

    return parser
