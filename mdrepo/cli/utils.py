##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
Utility functions to support mdrepo CLI command handlers.
"""

import logging
from typing import Callable

from mdrepo.config.configfile import get_active_config
from mdrepo.db_scripts.identifiers import IdentifierResolver


LOG = logging.getLogger("mdrepo")

AFFIRMATIVE_ANSWERS = ("y", "yes")


def confirm(prompt: str, input_fn: Callable[[str], str] = input) -> bool:
    """
    Ask the operator a yes/no question on the terminal and block until it is answered.

    Only "y" or "yes" (in any case) count as an acceptance. Any other answer,
    including an empty one, is a refusal. If standard input is closed (e.g.
    the command is run unattended) the question is refused as well.

    Args:
        prompt: The question to ask.
        input_fn: Function writing the prompt to stdout and reading the answer.

    Returns:
        True if the operator accepted, False otherwise.
    """
    try:
        answer = input_fn(f"{prompt} [y/*]: ")
    except EOFError:
        LOG.warning("No answer could be read from standard input. Assuming 'no'.")
        return False
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS


def get_identifier_resolver() -> IdentifierResolver:
    """
    Build the identifier resolver from the active configuration.

    Returns:
        An `IdentifierResolver` using the configured accession prefix.
    """
    return IdentifierResolver.from_config(get_active_config())
