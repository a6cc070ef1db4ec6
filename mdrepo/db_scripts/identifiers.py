##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
Resolution of user-supplied identifiers.

Users may refer to a document either by its raw database id (a MongoDB
`ObjectId`) or, for projects, by its accession: a deployment-specific prefix
followed by a fixed number of digits (e.g. `MCNS00042`). The
`IdentifierResolver` turns the strings typed on the command line into one of
those two shapes.
"""

import logging
import re
from typing import Optional, Union

from bson import ObjectId
from bson.errors import InvalidId

from mdrepo.config import Config
from mdrepo.exceptions import ConfigurationError, InvalidIdentifierError


LOG = logging.getLogger("mdrepo")

Identifier = Union[ObjectId, str]


class IdentifierResolver:
    """
    Normalizes raw strings into database ids or accessions.

    The accession pattern is compiled once, from the configured prefix, when
    the resolver is created.

    Attributes:
        accession_prefix: The deployment-specific accession prefix, upper case.
        accession_digits: The number of digits following the prefix.
        accession_format: The compiled accession pattern, or None if no prefix is configured.

    Methods:
        from_config: Build a resolver from the `accession` section of the configuration.
        coerce_id: Coerce a string into an `ObjectId`.
        coerce_accession: Coerce a string into a normalized accession.
        resolve: Coerce a string into an id, falling back to an accession.
    """

    def __init__(self, accession_prefix: Optional[str], accession_digits: int = 5):
        """
        Args:
            accession_prefix: The accession prefix used by this deployment. If None,
                only raw ids can be resolved.
            accession_digits: The fixed width of the numeric accession suffix.
        """
        self.accession_prefix = accession_prefix.strip().upper() if accession_prefix else None
        self.accession_digits = accession_digits
        self.accession_format = None
        if self.accession_prefix:
            self.accession_format = re.compile(rf"{re.escape(self.accession_prefix)}[0-9]{{{accession_digits}}}")

    @classmethod
    def from_config(cls, config: Config) -> "IdentifierResolver":
        """
        Build a resolver from the `accession` section of the configuration.

        Args:
            config: The active configuration.

        Returns:
            A new `IdentifierResolver`.
        """
        accession = getattr(config, "accession", None)
        if accession is None:
            return cls(None)
        return cls(accession.prefix, accession.digits)

    def format_accession(self, number: int) -> str:
        """
        Build the accession for a given accession number.

        Args:
            number: The numeric part of the accession.

        Returns:
            The accession string (e.g. `MCNS00042`).

        Raises:
            ConfigurationError: If no accession prefix is configured.
        """
        if not self.accession_prefix:
            raise ConfigurationError("ACCESSION_PREFIX is not set. Cannot generate accessions.")
        accession = f"{self.accession_prefix}{number:0{self.accession_digits}d}"
        if not self.accession_format.fullmatch(accession):
            raise ValueError(f"Accession number {number} does not fit in {self.accession_digits} digits.")
        return accession

    @staticmethod
    def coerce_id(raw: str) -> ObjectId:
        """
        Coerce a string into a database id.

        Args:
            raw: The string to coerce.

        Returns:
            The corresponding `ObjectId`.

        Raises:
            InvalidIdentifierError: If `raw` is not a valid id.
        """
        try:
            return ObjectId(raw.strip())
        except (InvalidId, TypeError, AttributeError) as exc:
            raise InvalidIdentifierError(raw) from exc

    def coerce_accession(self, raw: str) -> str:
        """
        Coerce a string into an accession: surrounding whitespace is removed and
        letters are upper cased before validation.

        Args:
            raw: The string to coerce.

        Returns:
            The normalized accession.

        Raises:
            InvalidIdentifierError: If `raw` is not a valid accession.
        """
        if self.accession_format is None:
            raise InvalidIdentifierError(raw)
        output = raw.strip().upper()
        if not self.accession_format.fullmatch(output):
            raise InvalidIdentifierError(raw)
        return output

    def resolve(self, raw: Optional[str]) -> Optional[Identifier]:
        """
        Coerce a string into a database id, or into an accession if it is not an id.

        Args:
            raw: The string to resolve. Empty or None means no identifier was given.

        Returns:
            An `ObjectId`, an accession string, or None when `raw` is empty.

        Raises:
            InvalidIdentifierError: If `raw` is neither a valid id nor a valid accession.
        """
        if not raw:
            return None
        try:
            return self.coerce_id(raw)
        except InvalidIdentifierError:
            LOG.debug(f"'{raw}' is not a database id. Trying it as an accession.")
        return self.coerce_accession(raw)
