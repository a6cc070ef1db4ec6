##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
Module of all mdrepo-specific exception types.
"""

# Pylint complains that these exceptions are no different from Exception
# but we don't care, we just need new names for exceptions here
# pylint: disable=W0235

__all__ = (
    "ConfigurationError",
    "DocumentNotFoundError",
    "InvalidIdentifierError",
    "ProjectNotFoundError",
    "ProjectNotSyncedError",
    "UnsupportedCollectionError",
)


class ConfigurationError(Exception):
    """
    Exception to signal that a required configuration setting is missing
    or malformed.
    """


class InvalidIdentifierError(Exception):
    """
    Exception to signal that a user-supplied identifier is neither a valid
    database id nor a valid accession.

    Attributes:
        identifier: The original input that could not be resolved.
    """

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Invalid ID or accession: '{identifier}'")


class UnsupportedCollectionError(Exception):
    """
    Exception to signal that documents of a given collection cannot be
    deleted because no deletion protocol is registered for them.
    """


class ProjectNotFoundError(Exception):
    """
    Exception to signal that a project does not exist in the database.
    """


class DocumentNotFoundError(Exception):
    """
    Exception to signal that a document expected to exist in a collection
    could not be found.
    """


class ProjectNotSyncedError(Exception):
    """
    Exception to signal that a project-scoped mutation was requested before
    the owning project was synced into the database handler.
    """
