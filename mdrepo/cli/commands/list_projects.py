##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
Implements the `list` command for the mdrepo CLI, which prints every project
in the database along with its publication status.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace
from typing import Any, Dict, List

from tabulate import tabulate

from mdrepo.cli.commands.command_entry_point import CommandEntryPoint
from mdrepo.db_scripts.repository_db import RepositoryDatabase


LOG = logging.getLogger("mdrepo")

HEADERS = ["ID", "Accession", "Name", "Published", "MDs"]


def format_project_rows(projects: List[Dict[str, Any]]) -> List[List[Any]]:
    """
    Turn project documents into table rows.

    Args:
        projects: Project documents as returned by `RepositoryDatabase.list_projects`.

    Returns:
        One row per project, matching `HEADERS`.
    """
    rows = []
    for project in projects:
        rows.append(
            [
                str(project["_id"]),
                project.get("accession") or "-",
                (project.get("metadata") or {}).get("NAME") or "-",
                "yes" if project.get("published") else "no",
                len(project.get("mds") or []),
            ]
        )
    return rows


class ListCommand(CommandEntryPoint):
    """
    Handles the `list` command.

    Methods:
        add_parser: Adds the `list` command parser to the CLI argument parser.
        process_command: Prints every project in the database.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `list` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `list` command parser will be added.
        """
        list_parser: ArgumentParser = subparsers.add_parser(
            "list",
            help="List all projects and their status.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        list_parser.set_defaults(func=self.process_command)
        list_parser.add_argument(
            "--published-only",
            action="store_true",
            help="Only list the published projects.",
        )

    def process_command(self, args: Namespace):
        """
        Print a table of every project in the database.

        Args:
            args: Parsed CLI arguments from the user.
        """
        with RepositoryDatabase() as database:
            projects = database.list_projects()

        if args.published_only:
            projects = [project for project in projects if project.get("published")]

        if not projects:
            LOG.info("No projects found.")
            return

        print(tabulate(format_project_rows(projects), headers=HEADERS))
        published = sum(1 for project in projects if project.get("published"))
        LOG.info(f"{len(projects)} projects listed, {published} published.")
