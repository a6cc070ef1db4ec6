##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
Implements the `publish` and `unpublish` commands for the mdrepo CLI.

Publishing a project makes it visible and assigns it an accession the first
time it is published. Unpublishing hides it again but keeps its accession, so
that re-publishing it later does not change the accession.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from mdrepo.cli.commands.command_entry_point import CommandEntryPoint
from mdrepo.cli.utils import get_identifier_resolver
from mdrepo.db_scripts.repository_db import RepositoryDatabase


LOG = logging.getLogger("mdrepo")


class PublishCommand(CommandEntryPoint):
    """
    Handles the `publish` command.

    Methods:
        add_parser: Adds the `publish` command parser to the CLI argument parser.
        process_command: Publishes the project given on the command line.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `publish` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `publish` command parser will be added.
        """
        publish: ArgumentParser = subparsers.add_parser(
            "publish",
            help="Publish and assign an accession (if not already existing) to the specified project.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        publish.set_defaults(func=self.process_command)
        publish.add_argument("id", type=str, help="ID of the project to publish.")

    def process_command(self, args: Namespace):
        """
        Publish a project.

        Args:
            args: Parsed CLI arguments from the user.
        """
        resolver = get_identifier_resolver()
        project_id = resolver.coerce_id(args.id)
        with RepositoryDatabase() as database:
            accession = database.publish(project_id, resolver)
        LOG.info(f"Project '{project_id}' is published as '{accession}'")


class UnpublishCommand(CommandEntryPoint):
    """
    Handles the `unpublish` command.

    Methods:
        add_parser: Adds the `unpublish` command parser to the CLI argument parser.
        process_command: Unpublishes the project given on the command line.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `unpublish` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `unpublish` command parser will be added.
        """
        unpublish: ArgumentParser = subparsers.add_parser(
            "unpublish",
            help="Unpublish the specified project. Its accession is kept.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        unpublish.set_defaults(func=self.process_command)
        unpublish.add_argument("id", type=str, help="ID or accession of the project to unpublish.")

    def process_command(self, args: Namespace):
        """
        Unpublish a project.

        Args:
            args: Parsed CLI arguments from the user.
        """
        identifier = get_identifier_resolver().resolve(args.id)
        with RepositoryDatabase() as database:
            project = database.unpublish(identifier)
        LOG.info(f"Project '{project['_id']}' is unpublished")
