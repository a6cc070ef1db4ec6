##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
The command line interface of mdrepo.

Modules:
    argparse_main: Builds the main argument parser with every command registered.
    utils: Helpers shared by the commands (identifier resolution, confirmation prompt).
    commands: One module per command.
"""
