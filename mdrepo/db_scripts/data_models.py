##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
This module houses dataclasses that describe the results of looking up and
deleting documents in the repository database.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from mdrepo.db_scripts.collections import CollectionKind


@dataclass(frozen=True)
class ResolvedTarget:
    """
    A document located in the repository database, tagged with the
    collection it was found in.

    Attributes:
        collection: The collection that owns the document.
        document: The full document as returned by the database.
    """

    collection: CollectionKind
    document: Dict[str, Any] = field(compare=True, hash=False)

    @property
    def id(self) -> Any:  # pylint: disable=invalid-name
        """The database id of the document."""
        return self.document.get("_id")


class DeletionState(Enum):
    """
    States of a single deletion.

    The happy path is `IDLE -> LOCATED -> CONFIRMED -> SYNCED -> DELETED`.
    `NOT_FOUND` and `ABORTED` are early exits. Unsupported collections raise
    an `UnsupportedCollectionError` instead of reaching a state.
    """

    IDLE = "idle"
    LOCATED = "located"
    CONFIRMED = "confirmed"
    SYNCED = "synced"
    DELETED = "deleted"
    NOT_FOUND = "not found"
    ABORTED = "aborted"


@dataclass
class DeletionOutcome:
    """
    The terminal state reached by a deletion and the target it acted on.

    Attributes:
        state: The last state reached.
        target: The located document, or None if nothing was found.
    """

    state: DeletionState = DeletionState.IDLE
    target: Optional[ResolvedTarget] = None
