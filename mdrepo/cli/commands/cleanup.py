##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
Implements the `cleanup` command for the mdrepo CLI.

The command removes a single document (found by its id or accession in any
collection) together with the references the owning project keeps to it, or,
with `--delete-all-orphans`, every document whose project no longer exists.
There is no going back from a cleanup, so the operator is asked for
confirmation unless `--force` is given.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace
from collections import Counter

from mdrepo.cli.commands.command_entry_point import CommandEntryPoint
from mdrepo.cli.utils import confirm, get_identifier_resolver
from mdrepo.db_scripts.data_models import DeletionState
from mdrepo.db_scripts.deletion import DeletionDispatcher
from mdrepo.db_scripts.repository_db import RepositoryDatabase


LOG = logging.getLogger("mdrepo")


class CleanupCommand(CommandEntryPoint):
    """
    Handles the `cleanup` command and its aliases.

    Methods:
        add_parser: Adds the `cleanup` command parser to the CLI argument parser.
        process_command: Processes the CLI input and dispatches the appropriate deletion.
        _delete_document: Deletes the document owning an identifier.
        _delete_orphans: Deletes every orphan document.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `cleanup` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `cleanup` command parser will be added.
        """
        cleanup: ArgumentParser = subparsers.add_parser(
            "cleanup",
            aliases=["clean", "drop", "clear", "delete", "remove"],
            help="Clean up a document and its references to/from its project. Published projects "
            "must be unpublished first.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        cleanup.set_defaults(func=self.process_command)

        cleanup.add_argument(
            "-f",
            "--force",
            action="store_true",
            default=False,
            help="Force the data cleanup, so the user is never asked for confirmation.",
        )
        target = cleanup.add_mutually_exclusive_group(required=True)
        target.add_argument(
            "id",
            type=str,
            nargs="?",
            default=None,
            help="ID or accession of the document to clean up.",
        )
        target.add_argument(
            "--delete-all-orphans",
            action="store_true",
            default=False,
            help="Delete all analyses, topologies and files whose project no longer exists.",
        )

    def _delete_document(self, args: Namespace, database: RepositoryDatabase):
        """
        Delete the document owning the identifier given on the command line.

        Args:
            args: Parsed CLI arguments.
            database: The database handler.
        """
        identifier = get_identifier_resolver().resolve(args.id)
        LOG.info(f"== Deletion of '{identifier}'")
        dispatcher = DeletionDispatcher(database, confirm_fn=confirm)
        outcome = dispatcher.delete(identifier, force=args.force)
        if outcome.state is DeletionState.DELETED:
            LOG.info("Data deletion has been completed")

    def _delete_orphans(self, args: Namespace, database: RepositoryDatabase):
        """
        Delete every analysis, topology and file whose project no longer exists.

        Args:
            args: Parsed CLI arguments.
            database: The database handler.
        """
        orphans = database.find_orphans()
        if not orphans:
            LOG.info("No orphan documents found.")
            return

        counts = Counter(orphan.collection.label for orphan in orphans)
        summary = ", ".join(f"{count} {label}(s)" for label, count in counts.items())
        LOG.info(f"Found {len(orphans)} orphan documents: {summary}")

        if not args.force and not confirm(f"Confirm deletion of {len(orphans)} orphan documents"):
            LOG.info("Data deletion has been aborted")
            return

        for orphan in orphans:
            database.delete_orphan(orphan)
        LOG.info(f"Deleted {len(orphans)} orphan documents.")

    def process_command(self, args: Namespace):
        """
        Process the `cleanup` command using the provided CLI arguments.

        Args:
            args: Parsed CLI arguments from the user.
        """
        with RepositoryDatabase() as database:
            if args.delete_all_orphans:
                self._delete_orphans(args, database)
            else:
                self._delete_document(args, database)
