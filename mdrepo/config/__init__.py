##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
Used to store the application configuration.

The `config` package loads the settings needed to reach the repository
database and to validate accessions. Settings are read from the process
environment, optionally pre-populated from a `.env` file.

Modules:
    configfile.py: Locates and loads the `.env` file and houses the `CONFIG` object.
    database.py: Builds (and masks) the MongoDB connection string.
"""
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

from mdrepo.config.database import mask_url_password
from mdrepo.utils import nested_dict_to_namespaces


class Config:  # pylint: disable=R0903
    """
    The Config class, meant to store all mdrepo config settings in one place.

    Attributes:
        database (Optional[SimpleNamespace]): Connection settings for the repository database.
        accession (Optional[SimpleNamespace]): Settings used to validate and generate accessions.

    Methods:
        __str__: Returns a formatted string representation of the Config instance.
        load_app_into_namespaces: Converts the provided configuration dictionary into namespaces
            and assigns them to the Config instance's attributes.
    """

    FIELDS: List[str] = ["database", "accession"]

    def __init__(self, app_dict: Dict):
        """
        Initializes the Config instance with configuration data from a dictionary.

        Args:
            app_dict: A dictionary containing configuration data for the application.
                The "database" and "accession" keys are converted into `SimpleNamespace`
                objects and assigned to the corresponding attributes.
        """
        self.database: Optional[SimpleNamespace] = None
        self.accession: Optional[SimpleNamespace] = None
        self.load_app_into_namespaces(app_dict)

    @staticmethod
    def _format_setting(key: str, value: Any) -> str:
        """
        Format a single setting for display, hiding the database password
        wherever it appears.
        """
        if key == "password" and value:
            return "******"
        if key == "url" and value:
            return repr(mask_url_password(value))
        return repr(value)

    def __str__(self) -> str:
        """
        Returns a formatted string representation of the Config instance.
        The database password is never included, not even when it is part of `url`.

        Returns:
            A string containing the values of each configuration section.
        """
        formatted_str = "config:"
        for name in self.FIELDS:
            attr = getattr(self, name)
            if attr is not None:
                items = (f"    {k}: {self._format_setting(k, v)}" for k, v in attr.__dict__.items())
                joined_items = "\n".join(items)
                formatted_str += f"\n  {name}:\n{joined_items}"
            else:
                formatted_str += f"\n  {name}:\n    None"
        return formatted_str

    def load_app_into_namespaces(self, app_dict: Dict):
        """
        Converts the provided application dictionary into namespaces and assigns them
        to the Config instance's attributes.

        Args:
            app_dict: A dictionary containing configuration data for the application.
        """
        for field in self.FIELDS:
            try:
                setattr(self, field, nested_dict_to_namespaces(app_dict[field]))
            except KeyError:
                # The sections are optional
                pass
