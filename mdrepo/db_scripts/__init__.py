##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
The `db_scripts` package provides the database logic of mdrepo: how
identifiers are resolved, how documents are located across collections and
how they are deleted.

Modules:
    collections.py: Defines `CollectionKind`, the identity tokens of every known collection.
    data_models.py: Dataclasses describing located documents and deletion outcomes.
    deletion.py: The per-collection deletion protocols and the `DeletionDispatcher`.
    identifiers.py: The `IdentifierResolver` turning user input into ids or accessions.
    repository_db.py: Contains the `RepositoryDatabase` class, the central access point
        for database operations across the system.
"""
