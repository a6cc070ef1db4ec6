##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
mdrepo CLI Commands Package.

Each module encapsulates the logic and argument parsing for a distinct mdrepo
command, following a consistent structure built around the
`CommandEntryPoint` interface.

Modules:
    command_entry_point: Defines the abstract base class `CommandEntryPoint` for all CLI commands.
    cleanup: Implements the `cleanup` command for deleting documents and orphans.
    info: Implements the `info` command for displaying configuration and database details.
    list_projects: Implements the `list` command for listing projects and their status.
    publish: Implements the `publish` and `unpublish` commands.
"""

from mdrepo.cli.commands.cleanup import CleanupCommand
from mdrepo.cli.commands.info import InfoCommand
from mdrepo.cli.commands.list_projects import ListCommand
from mdrepo.cli.commands.publish import PublishCommand, UnpublishCommand


# Keep these in alphabetical order
ALL_COMMANDS = [
    CleanupCommand(),
    InfoCommand(),
    ListCommand(),
    PublishCommand(),
    UnpublishCommand(),
]
