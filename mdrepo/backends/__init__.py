##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
Backend infrastructure for mdrepo.

Modules:
    mongo_backend: Contains `MongoBackend`, which owns the MongoDB connection and
        exposes the primitive document and GridFS operations.
"""
