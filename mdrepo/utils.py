##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
Module for project-wide utility functions.
"""

import logging
from copy import deepcopy
from types import SimpleNamespace
from typing import Any, Dict


LOG = logging.getLogger("mdrepo")


def nested_dict_to_namespaces(dic: Dict) -> SimpleNamespace:
    """
    Convert a nested dictionary into a nested SimpleNamespace structure.

    Each key in the dictionary becomes an attribute of a SimpleNamespace,
    allowing for attribute-style access to the data.

    Args:
        dic: The nested dictionary to be converted.

    Returns:
        A SimpleNamespace object representing the nested structure of the input dictionary.

    Raises:
        TypeError: If the input is not a dictionary.
    """

    def recurse(dic):
        if not isinstance(dic, dict):
            return dic
        for key, val in list(dic.items()):
            dic[key] = recurse(val)
        return SimpleNamespace(**dic)

    if not isinstance(dic, dict):
        raise TypeError(f"{dic} is not a dict")

    new_dic = deepcopy(dic)
    return recurse(new_dic)


def get_nested_value(document: Dict, path: str, default: Any = None) -> Any:
    """
    Read a value out of a nested document using a dotted path
    (e.g. `metadata.project`).

    Args:
        document: The (possibly nested) dictionary to read from.
        path: Dot-separated keys leading to the value.
        default: Value returned when any key along the path is missing.

    Returns:
        The value found at `path`, or `default`.
    """
    current = document
    for key in path.split("."):
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current
