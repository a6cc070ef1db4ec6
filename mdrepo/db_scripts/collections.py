##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
This module defines the collections known to mdrepo.

Each member of `CollectionKind` is the stable identity token for one
collection of the repository database. The declaration order of the members
is the priority order used when looking up an identifier across collections.
"""
from enum import Enum
from typing import List


class CollectionKind(Enum):
    """
    Enum of the collections stored in the repository database.

    Each value is a `(collection_name, document_label)` pair. New collections
    only need a new member here; the order of the members defines the order in
    which collections are searched for a document id.

    Attributes:
        PROJECT: Projects (one document per uploaded simulation project).
        ANALYSIS: Analyses computed over a project's MDs.
        FILE: Files stored in GridFS (trajectories, structures, ...).
        TOPOLOGY: Topologies of a project.
        REFERENCE: Protein references shared between projects.
    """

    PROJECT = ("projects", "project")
    ANALYSIS = ("analyses", "analysis")
    FILE = ("fs.files", "file")
    TOPOLOGY = ("topologies", "topology")
    REFERENCE = ("references", "reference")

    def __init__(self, collection_name: str, label: str):
        self.collection_name = collection_name
        self.label = label

    @classmethod
    def lookup_order(cls) -> List["CollectionKind"]:
        """
        The fixed order in which collections are searched for a document id.

        Returns:
            Every collection kind, highest priority first.
        """
        return list(cls)

    def __str__(self) -> str:
        return self.collection_name


# Collections whose documents point at the project owning them,
# and the field holding that project id
PROJECT_SCOPED_FIELDS = {
    CollectionKind.ANALYSIS: "project",
    CollectionKind.TOPOLOGY: "project",
    CollectionKind.FILE: "metadata.project",
}
