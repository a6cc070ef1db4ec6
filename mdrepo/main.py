##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
Main entry point into mdrepo's codebase.
"""

import logging
import sys
import traceback

from mdrepo.cli.argparse_main import build_main_parser
from mdrepo.config.configfile import initialize_config
from mdrepo.log_formatter import setup_logging


LOG = logging.getLogger("mdrepo")


def main():
    """
    Entry point for the mdrepo command-line interface (CLI) operations.

    This function sets up the argument parser, initializes logging and the
    configuration, and executes the function of the requested command. Any
    exception escaping a command is logged and turned into a non-zero exit code.
    """
    parser = build_main_parser()
    if len(sys.argv) == 1:
        parser.print_help(sys.stdout)
        return 1
    args = parser.parse_args()

    setup_logging(logger=LOG, log_level=args.level.upper(), colors=True)

    try:
        initialize_config(args.env_file)
        args.func(args)
        # pylint complains that this exception is too broad - being at the literal top of the program stack, it's ok.
    except Exception as excpt:  # pylint: disable=broad-except
        LOG.debug(traceback.format_exc())
        LOG.error(str(excpt))
        sys.exit(1)

    sys.exit()


if __name__ == "__main__":
    main()
