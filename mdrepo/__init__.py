##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
mdrepo: administration tooling for a molecular dynamics data repository.

This module contains the source code for the `mdrepo` command line tool.
"""

__version__ = "0.4.0"
VERSION = __version__
