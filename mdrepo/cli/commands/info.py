##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
Implements the `info` command for the mdrepo CLI, which prints the active
configuration and checks the connection to the database.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from tabulate import tabulate

from mdrepo import VERSION
from mdrepo.cli.commands.command_entry_point import CommandEntryPoint
from mdrepo.config.configfile import get_active_config
from mdrepo.db_scripts.repository_db import RepositoryDatabase


LOG = logging.getLogger("mdrepo")


class InfoCommand(CommandEntryPoint):
    """
    Handles the `info` command.

    Methods:
        add_parser: Adds the `info` command parser to the CLI argument parser.
        process_command: Prints configuration and database details.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `info` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `info` command parser will be added.
        """
        info: ArgumentParser = subparsers.add_parser(
            "info",
            help="Print the configuration and check the connection to the database.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        info.set_defaults(func=self.process_command)

    def process_command(self, args: Namespace):
        """
        Print configuration and database details to the console.

        Args:
            args: Parsed CLI arguments from the user.
        """
        config = get_active_config()
        print(config)
        with RepositoryDatabase() as database:
            details = [
                ["mdrepo version", VERSION],
                ["Database type", database.get_db_type()],
                ["Database version", database.get_db_version()],
                ["Connection string", database.get_connection_string()],
            ]
        print(tabulate(details))
        LOG.info("Connection to the database is OK.")
