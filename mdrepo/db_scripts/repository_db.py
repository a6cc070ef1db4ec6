##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
This module contains the functionality necessary to interact with everything
stored in the repository database.

Documents of a project are spread over several collections: the project
document itself keeps, for each of its MDs, the list of files and analyses
that belong to it, while the file and analysis documents point back at the
project. Project-scoped deletions must therefore keep both sides in step,
which is why they operate on a project that has first been synced into the
handler with `sync_project`.
"""

import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId

from mdrepo.backends.mongo_backend import MongoBackend
from mdrepo.db_scripts.collections import PROJECT_SCOPED_FIELDS, CollectionKind
from mdrepo.db_scripts.data_models import ResolvedTarget
from mdrepo.db_scripts.identifiers import Identifier, IdentifierResolver
from mdrepo.exceptions import DocumentNotFoundError, ProjectNotFoundError, ProjectNotSyncedError
from mdrepo.utils import get_nested_value


LOG = logging.getLogger("mdrepo")

ACCESSION_COUNTER = "accession"


class RepositoryDatabase:
    """
    High-level interface for accessing the repository database.

    Attributes:
        backend (backends.mongo_backend.MongoBackend): The backend holding the connection.
        collections (Type[CollectionKind]): Identity tokens of every known collection.
        project (Optional[Dict]): The working view of the project last synced with
            `sync_project`, or None if no project has been synced yet.

    Methods:
        get_db_type: Retrieve the type of the backend being used.
        get_db_version: Retrieve the version of the backend.
        get_connection_string: Retrieve the backend connection string.
        find_id: Locate the document owning an id or accession, in any collection.
        name_collection_document: Human-readable label of a collection's documents.
        sync_project: Load a project into the working view of the handler.
        delete_analysis: Delete an analysis of the synced project.
        delete_file: Delete a file of the synced project.
        get_project: Get a project by id or accession.
        list_projects: Get every project.
        publish: Publish a project, assigning it an accession if needed.
        unpublish: Unpublish a project.
        find_orphans: Find project-scoped documents whose project no longer exists.
        delete_orphan: Delete one orphan document.
        close: Close the connection to the database.
    """

    collections = CollectionKind

    def __init__(self, backend: Optional[MongoBackend] = None):
        """
        Initialize a new RepositoryDatabase instance.

        Args:
            backend: The backend to use. If None, one is built from the active configuration.
        """
        if backend is None:
            from mdrepo.config.configfile import get_active_config  # pylint: disable=import-outside-toplevel

            backend = MongoBackend(get_active_config().database)
        self.backend: MongoBackend = backend
        self.project: Optional[Dict[str, Any]] = None

    def __enter__(self) -> "RepositoryDatabase":
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def get_db_type(self) -> str:
        """
        Retrieve the type of backend.

        Returns:
            The type of backend (e.g. mongodb).
        """
        return self.backend.get_name()

    def get_db_version(self) -> str:
        """
        Get the version of the backend.

        Returns:
            The version number of the backend.
        """
        return self.backend.get_version()

    def get_connection_string(self) -> str:
        """
        Get the connection string to the backend, with the password masked.

        Returns:
            The connection string to the backend.
        """
        return self.backend.get_connection_string()

    def find_id(self, identifier: Identifier) -> Optional[ResolvedTarget]:
        """
        Find the document owning `identifier`, no matter in which collection it is.

        Database ids are searched in every collection following
        `CollectionKind.lookup_order`; the first match wins. Accessions only
        exist on projects so only the projects collection is searched for them.

        Args:
            identifier: A database id or an accession.

        Returns:
            The located document tagged with its collection, or None if nothing was found.
        """
        if isinstance(identifier, ObjectId):
            for kind in self.collections.lookup_order():
                document = self.backend.find_one(kind, {"_id": identifier})
                if document is not None:
                    LOG.debug(f"Found '{identifier}' in the '{kind}' collection.")
                    return ResolvedTarget(collection=kind, document=document)
            return None

        document = self.backend.find_one(CollectionKind.PROJECT, {"accession": identifier})
        if document is None:
            return None
        return ResolvedTarget(collection=CollectionKind.PROJECT, document=document)

    def name_collection_document(self, kind: CollectionKind) -> str:
        """
        Get a human-readable name for the documents of a collection.

        Args:
            kind: The collection.

        Returns:
            The label of the collection's documents (e.g. "analysis").
        """
        return kind.label

    def sync_project(self, project_id: ObjectId):
        """
        Load the current state of a project into the working view of this handler.
        Calling this again with the same id simply refreshes the view.

        Args:
            project_id: The id of the project.

        Raises:
            ProjectNotFoundError: If the project does not exist.
        """
        document = self.backend.find_one(CollectionKind.PROJECT, {"_id": project_id})
        if document is None:
            raise ProjectNotFoundError(f"Project '{project_id}' does not exist.")
        self.project = document
        LOG.debug(f"Synced project '{project_id}'.")

    def _get_synced_project(self) -> Dict[str, Any]:
        """
        Get the working view of the synced project.

        Raises:
            ProjectNotSyncedError: If no project has been synced yet.
        """
        if self.project is None:
            raise ProjectNotSyncedError("A project must be synced before its data can be deleted.")
        return self.project

    def _get_reference_path(self, field: str, md_index: Optional[int]) -> str:
        """
        Get the path, inside the synced project document, of the list of
        references under `field` for a given MD (or the project itself if
        `md_index` is None).

        Raises:
            DocumentNotFoundError: If the project has no MD at `md_index`.
        """
        if md_index is None:
            return field
        mds = self.project.get("mds") or []
        if not 0 <= md_index < len(mds):
            raise DocumentNotFoundError(f"Project '{self.project['_id']}' has no MD with index {md_index}.")
        return f"mds.{md_index}.{field}"

    def _remove_project_reference(self, field: str, name: str, md_index: Optional[int]):
        """
        Remove the reference named `name` from the synced project and refresh
        the working view.
        """
        project_id = self.project["_id"]
        path = self._get_reference_path(field, md_index)
        modified = self.backend.update_one(CollectionKind.PROJECT, {"_id": project_id}, {"$pull": {path: {"name": name}}})
        if not modified:
            LOG.warning(f"Project '{project_id}' held no reference to '{name}' in '{path}'.")
        self.sync_project(project_id)

    def delete_analysis(self, name: str, md_index: Optional[int]):
        """
        Delete an analysis of the synced project and its reference in the project.

        Args:
            name: The name of the analysis (e.g. "rmsd").
            md_index: The index of the MD the analysis belongs to.

        Raises:
            ProjectNotSyncedError: If no project has been synced.
            DocumentNotFoundError: If the analysis does not exist.
        """
        project = self._get_synced_project()
        query = {"project": project["_id"], "name": name, "md": md_index}
        analysis = self.backend.find_one(CollectionKind.ANALYSIS, query)
        if analysis is None:
            raise DocumentNotFoundError(f"Analysis '{name}' of MD {md_index} not found in project '{project['_id']}'.")
        self._get_reference_path("analyses", md_index)

        self.backend.delete_one(CollectionKind.ANALYSIS, {"_id": analysis["_id"]})
        self._remove_project_reference("analyses", name, md_index)
        LOG.info(f"Deleted analysis '{name}' of MD {md_index}.")

    def delete_file(self, filename: str, md_index: Optional[int]):
        """
        Delete a file of the synced project from GridFS and its reference in the project.

        Args:
            filename: The name of the file (e.g. "trajectory.xtc").
            md_index: The index of the MD the file belongs to, or None for project files.

        Raises:
            ProjectNotSyncedError: If no project has been synced.
            DocumentNotFoundError: If the file does not exist.
        """
        project = self._get_synced_project()
        query = {
            "$or": [{"filename": filename}, {"metadata.filename": filename}],
            "metadata.project": project["_id"],
            "metadata.md": md_index,
        }
        file_document = self.backend.find_one(CollectionKind.FILE, query)
        if file_document is None:
            raise DocumentNotFoundError(f"File '{filename}' of MD {md_index} not found in project '{project['_id']}'.")
        self._get_reference_path("files", md_index)

        self.backend.delete_file(file_document["_id"])
        self._remove_project_reference("files", filename, md_index)
        LOG.info(f"Deleted file '{filename}' of MD {md_index}.")

    def get_project(self, identifier: Identifier) -> Dict[str, Any]:
        """
        Get a project by its id or accession.

        Args:
            identifier: A database id or an accession.

        Returns:
            The project document.

        Raises:
            ProjectNotFoundError: If the project does not exist.
        """
        field = "_id" if isinstance(identifier, ObjectId) else "accession"
        project = self.backend.find_one(CollectionKind.PROJECT, {field: identifier})
        if project is None:
            raise ProjectNotFoundError(f"No project found for '{identifier}'.")
        return project

    def list_projects(self) -> List[Dict[str, Any]]:
        """
        Get every project in the database.

        Returns:
            A list of project documents, restricted to the fields needed for listing.
        """
        projection = {"accession": 1, "published": 1, "mds.name": 1, "metadata.NAME": 1}
        return list(self.backend.find(CollectionKind.PROJECT, {}, projection))

    def _next_free_accession(self, resolver: IdentifierResolver) -> str:
        """
        Draw accession numbers from the counter until one not used by any project is found.
        """
        while True:
            accession = resolver.format_accession(self.backend.next_sequence(ACCESSION_COUNTER))
            if self.backend.find_one(CollectionKind.PROJECT, {"accession": accession}) is None:
                return accession
            LOG.debug(f"Accession '{accession}' is already taken.")

    def publish(self, project_id: ObjectId, resolver: IdentifierResolver) -> str:
        """
        Publish a project. Projects without an accession get the next free one.

        Args:
            project_id: The id of the project.
            resolver: The resolver used to format new accessions.

        Returns:
            The accession of the published project.

        Raises:
            ProjectNotFoundError: If the project does not exist.
        """
        project = self.get_project(project_id)
        accession = project.get("accession")
        if project.get("published") and accession:
            LOG.info(f"Project '{project_id}' is already published as '{accession}'.")
            return accession

        if not accession:
            accession = self._next_free_accession(resolver)
            LOG.info(f"Assigning accession '{accession}' to project '{project_id}'.")

        self.backend.update_one(
            CollectionKind.PROJECT, {"_id": project_id}, {"$set": {"accession": accession, "published": True}}
        )
        return accession

    def unpublish(self, identifier: Identifier) -> Dict[str, Any]:
        """
        Unpublish a project. Its accession is kept so it can be published again under the same name.

        Args:
            identifier: The id or accession of the project.

        Returns:
            The project document, as it was before being unpublished.

        Raises:
            ProjectNotFoundError: If the project does not exist.
        """
        project = self.get_project(identifier)
        if not project.get("published"):
            LOG.info(f"Project '{identifier}' is not published.")
            return project
        self.backend.update_one(CollectionKind.PROJECT, {"_id": project["_id"]}, {"$set": {"published": False}})
        return project

    def find_orphans(self) -> List[ResolvedTarget]:
        """
        Find project-scoped documents (analyses, topologies, files) pointing at a
        project that no longer exists.

        Returns:
            The orphan documents tagged with their collection.
        """
        project_ids = set(self.backend.distinct(CollectionKind.PROJECT, "_id"))
        orphans = []
        for kind, project_field in PROJECT_SCOPED_FIELDS.items():
            for document in self.backend.find(kind, {}):
                if get_nested_value(document, project_field) not in project_ids:
                    orphans.append(ResolvedTarget(collection=kind, document=document))
        return orphans

    def delete_orphan(self, orphan: ResolvedTarget):
        """
        Delete an orphan document. Files are removed from GridFS along with their chunks.

        Args:
            orphan: The orphan document to delete.
        """
        if orphan.collection is CollectionKind.FILE:
            self.backend.delete_file(orphan.id)
        else:
            self.backend.delete_one(orphan.collection, {"_id": orphan.id})
        LOG.debug(f"Deleted orphan {orphan.collection.label} '{orphan.id}'.")

    def close(self):
        """
        Close the connection to the database.
        """
        self.backend.close()
