##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
Deletion of single documents from the repository database.

Every collection whose documents can be deleted registers a `DeletionProtocol`
in `DELETION_PROTOCOLS`. A protocol knows which project has to be synced
before deleting a document and which typed delete primitive of the database
handler removes it. Documents of collections without a registered protocol
are never deleted: the `DeletionDispatcher` raises an
`UnsupportedCollectionError` for them instead.

A deletion goes through the states `IDLE -> LOCATED -> CONFIRMED -> SYNCED ->
DELETED`, or stops early as `NOT_FOUND` or `ABORTED`. It is not
transactional: if the delete primitive fails after the project was synced, the
document is left in place and the error is propagated as is.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Tuple

from mdrepo.db_scripts.collections import CollectionKind
from mdrepo.db_scripts.data_models import DeletionOutcome, DeletionState, ResolvedTarget
from mdrepo.db_scripts.identifiers import Identifier
from mdrepo.db_scripts.repository_db import RepositoryDatabase
from mdrepo.exceptions import UnsupportedCollectionError


LOG = logging.getLogger("mdrepo")


class DeletionProtocol(ABC):
    """
    Abstract base class for the deletion protocol of one collection.

    Methods:
        project_of: Get the id of the project owning a document.
        delete: Delete a document using the typed primitive of the database handler.
    """

    @abstractmethod
    def project_of(self, document: Dict[str, Any]) -> Any:
        """
        Get the id of the project that must be synced before deleting `document`.

        Args:
            document: The document about to be deleted.

        Returns:
            The id of the owning project.
        """
        raise NotImplementedError("Subclasses of `DeletionProtocol` must implement a `project_of` method.")

    @abstractmethod
    def delete(self, database: RepositoryDatabase, document: Dict[str, Any]):
        """
        Delete `document` from the database.

        Args:
            database: The database handler, with the owning project already synced.
            document: The document to delete.
        """
        raise NotImplementedError("Subclasses of `DeletionProtocol` must implement a `delete` method.")


class AnalysisDeletionProtocol(DeletionProtocol):
    """Analyses are deleted by name and MD index."""

    def project_of(self, document: Dict[str, Any]) -> Any:
        return document["project"]

    @staticmethod
    def delete_arguments(document: Dict[str, Any]) -> Tuple[str, Optional[int]]:
        """Extract the `(name, md_index)` pair identifying an analysis."""
        return document["name"], document.get("md")

    def delete(self, database: RepositoryDatabase, document: Dict[str, Any]):
        name, md_index = self.delete_arguments(document)
        database.delete_analysis(name, md_index)


class FileDeletionProtocol(DeletionProtocol):
    """
    Files are deleted by filename and MD index, both read from the file
    metadata. GridFS keeps the filename at the top level of the document, so
    that one is used when the metadata has none.
    """

    def project_of(self, document: Dict[str, Any]) -> Any:
        return document["metadata"]["project"]

    @staticmethod
    def delete_arguments(document: Dict[str, Any]) -> Tuple[str, Optional[int]]:
        """Extract the `(filename, md_index)` pair identifying a file."""
        metadata = document["metadata"]
        filename = metadata.get("filename") or document["filename"]
        return filename, metadata.get("md")

    def delete(self, database: RepositoryDatabase, document: Dict[str, Any]):
        filename, md_index = self.delete_arguments(document)
        database.delete_file(filename, md_index)


DELETION_PROTOCOLS: Dict[CollectionKind, DeletionProtocol] = {
    CollectionKind.ANALYSIS: AnalysisDeletionProtocol(),
    CollectionKind.FILE: FileDeletionProtocol(),
}


class DeletionDispatcher:
    """
    Locates a document by id or accession and deletes it with the protocol
    registered for its collection.

    Attributes:
        database: The database handler used for every lookup, sync and delete.
        confirm_fn: Callable asking the operator for confirmation. It takes the
            prompt text and returns True if the operator accepted.
        protocols: Mapping of collections to their deletion protocols.

    Methods:
        get_protocol: Get the protocol for a collection, failing for unsupported ones.
        delete: Run a full deletion for an identifier.
    """

    def __init__(
        self,
        database: RepositoryDatabase,
        confirm_fn: Callable[[str], bool],
        protocols: Optional[Dict[CollectionKind, DeletionProtocol]] = None,
    ):
        self.database = database
        self.confirm_fn = confirm_fn
        self.protocols = DELETION_PROTOCOLS if protocols is None else protocols

    def get_protocol(self, target: ResolvedTarget) -> DeletionProtocol:
        """
        Get the deletion protocol of the collection owning `target`.

        Args:
            target: The located document.

        Returns:
            The registered deletion protocol.

        Raises:
            UnsupportedCollectionError: If no protocol is registered for the collection.
        """
        protocol = self.protocols.get(target.collection)
        if protocol is None:
            document_name = self.database.name_collection_document(target.collection)
            raise UnsupportedCollectionError(f"Deletion of {document_name} is not yet supported")
        return protocol

    def delete(self, identifier: Identifier, force: bool = False) -> DeletionOutcome:
        """
        Delete the document owning `identifier`.

        The project owning the document is always synced before the document
        is deleted.

        Args:
            identifier: A database id or an accession.
            force: If True the operator is never asked for confirmation.

        Returns:
            The outcome of the deletion. `NOT_FOUND` and `ABORTED` are normal outcomes.

        Raises:
            UnsupportedCollectionError: If the document belongs to a collection that
                has no deletion protocol. Nothing is synced or deleted in that case.
        """
        outcome = DeletionOutcome()

        target = self.database.find_id(identifier)
        if target is None:
            LOG.info(f"Nothing found for ID '{identifier}'")
            outcome.state = DeletionState.NOT_FOUND
            return outcome
        outcome.target = target
        outcome.state = DeletionState.LOCATED

        # Unsupported collections fail before the operator is prompted
        protocol = self.get_protocol(target)
        document_name = self.database.name_collection_document(target.collection)

        if not force:
            if not self.confirm_fn(f"Confirm deletion of {document_name} with id {identifier}"):
                LOG.info("Data deletion has been aborted")
                outcome.state = DeletionState.ABORTED
                return outcome
        outcome.state = DeletionState.CONFIRMED

        self.database.sync_project(protocol.project_of(target.document))
        outcome.state = DeletionState.SYNCED

        protocol.delete(self.database, target.document)
        outcome.state = DeletionState.DELETED
        LOG.info(f"Deleted {document_name} with id {identifier}")
        return outcome
