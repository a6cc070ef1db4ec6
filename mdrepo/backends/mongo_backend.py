##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
MongoDB backend implementation for mdrepo.

This module defines the `MongoBackend` class, which owns the connection to the
repository's MongoDB server and exposes the handful of primitive operations the
rest of mdrepo builds upon: finding, updating and deleting documents in a
collection, and removing files stored in GridFS.
"""

import logging
from types import SimpleNamespace
from typing import Any, Dict, Iterator, List, Optional

import gridfs
from pymongo import MongoClient, ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database

from mdrepo.config.database import get_connection_string
from mdrepo.db_scripts.collections import CollectionKind
from mdrepo.exceptions import ConfigurationError


LOG = logging.getLogger("mdrepo")

COUNTERS_COLLECTION = "counters"


class MongoBackend:
    """
    A MongoDB-based backend for the repository database.

    Attributes:
        backend_name (str): The name of the backend ("mongodb").
        db_config (SimpleNamespace): The `database` section of the configuration.
        client (MongoClient): The client used for database operations.
        db (Database): The repository database.
        gridfs (gridfs.GridFS): GridFS interface over the repository database.

    Methods:
        get_name: Retrieve the name of the backend.
        get_version: Query the server for its version.
        get_connection_string: Retrieve the (masked) connection string.
        get_collection: Get the pymongo collection behind a `CollectionKind`.
        find_one: Find a single document in a collection.
        find: Iterate over the documents of a collection matching a query.
        distinct: Get the distinct values of a field in a collection.
        update_one: Update a single document in a collection.
        delete_one: Delete a single document from a collection.
        delete_file: Delete a file (and its chunks) from GridFS.
        next_sequence: Atomically increment and return a named counter.
        close: Close the client connection.
    """

    def __init__(self, db_config: SimpleNamespace, client: Optional[MongoClient] = None):
        """
        Initialize the `MongoBackend` instance, setting up the client connection.

        Args:
            db_config: The `database` section of the configuration.
            client: An already built client. Mostly useful for testing.

        Raises:
            ConfigurationError: If no database name is configured.
        """
        if db_config is None or not getattr(db_config, "name", None):
            raise ConfigurationError("No database name configured. Please set DB_NAME.")

        self.backend_name: str = "mongodb"
        self.db_config: SimpleNamespace = db_config
        if client is None:
            client = MongoClient(
                get_connection_string(db_config),
                serverSelectionTimeoutMS=db_config.timeout_ms,
            )
        self.client: MongoClient = client
        self.db: Database = self.client[db_config.name]
        self.gridfs: gridfs.GridFS = gridfs.GridFS(self.db)

    def get_name(self) -> str:
        """
        Get the name of the backend.

        Returns:
            The name of the backend.
        """
        return self.backend_name

    def get_version(self) -> str:
        """
        Query the MongoDB server for the current version.

        Returns:
            A string representing the current version of MongoDB.
        """
        server_info = self.client.server_info()
        return server_info.get("version", "N/A")

    def get_connection_string(self) -> str:
        """
        Query the backend for the connection string, with the password masked.

        Returns:
            A string representing the connection to the backend.
        """
        return get_connection_string(self.db_config, include_password=False)

    def get_collection(self, kind: CollectionKind) -> Collection:
        """
        Get the pymongo collection behind a collection kind.

        Args:
            kind: The collection to get.

        Returns:
            The corresponding pymongo collection.
        """
        return self.db[kind.collection_name]

    def find_one(self, kind: CollectionKind, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Find a single document matching `query` in the collection `kind`.

        Returns:
            The matching document or None.
        """
        LOG.debug(f"Querying '{kind}' with {query}.")
        return self.get_collection(kind).find_one(query)

    def find(
        self, kind: CollectionKind, query: Dict[str, Any], projection: Optional[Dict[str, Any]] = None
    ) -> Iterator[Dict[str, Any]]:
        """
        Iterate over every document matching `query` in the collection `kind`.
        """
        return self.get_collection(kind).find(query, projection)

    def distinct(self, kind: CollectionKind, key: str) -> List[Any]:
        """
        Get the distinct values stored under `key` in the collection `kind`.
        """
        return self.get_collection(kind).distinct(key)

    def update_one(self, kind: CollectionKind, query: Dict[str, Any], update: Dict[str, Any]) -> int:
        """
        Update a single document in the collection `kind`.

        Returns:
            The number of documents modified (0 or 1).
        """
        LOG.debug(f"Updating '{kind}' document matching {query} with {update}.")
        result = self.get_collection(kind).update_one(query, update)
        return result.modified_count

    def delete_one(self, kind: CollectionKind, query: Dict[str, Any]) -> int:
        """
        Delete a single document from the collection `kind`.

        Returns:
            The number of documents deleted (0 or 1).
        """
        LOG.debug(f"Deleting '{kind}' document matching {query}.")
        result = self.get_collection(kind).delete_one(query)
        return result.deleted_count

    def delete_file(self, file_id: Any):
        """
        Delete a file, along with all of its chunks, from GridFS.

        Args:
            file_id: The id of the file in `fs.files`.
        """
        LOG.debug(f"Deleting GridFS file {file_id}.")
        self.gridfs.delete(file_id)

    def next_sequence(self, name: str) -> int:
        """
        Atomically increment a named counter and return its new value.

        Args:
            name: The name of the counter.

        Returns:
            The value of the counter after the increment.
        """
        counter = self.db[COUNTERS_COLLECTION].find_one_and_update(
            {"_id": name},
            {"$inc": {"count": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return counter["count"]

    def close(self):
        """
        Close the connection to the MongoDB server.
        """
        self.client.close()
