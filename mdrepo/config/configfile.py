##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
This module provides functionality for locating and loading the environment
file that configures mdrepo, and for turning the environment into a `Config`
object.

It houses the `CONFIG` object that's used throughout mdrepo's codebase.
"""
import logging
import os
from typing import Dict, Mapping, Optional

from dotenv import load_dotenv

from mdrepo.config import Config
from mdrepo.exceptions import ConfigurationError


LOG: logging.Logger = logging.getLogger("mdrepo")

ENV_FILENAME: str = ".env"
MDREPO_HOME: str = os.path.join(os.path.expanduser("~"), ".mdrepo")

DEFAULT_DB_SERVER: str = "localhost"
DEFAULT_DB_PORT: int = 27017
DEFAULT_DB_TIMEOUT_MS: int = 5000
DEFAULT_ACCESSION_DIGITS: int = 5

CONFIG: Optional[Config] = None


def find_env_file(path: Optional[str] = None) -> Optional[str]:
    """
    Locate the environment file (`.env`) holding mdrepo's settings.

    If `path` is given only that location is checked. Otherwise the fallback
    sequence is:
      1. `.env` in the current working directory.
      2. `.env` in the `MDREPO_HOME` directory.

    Args:
        path: A specific file, or a directory expected to contain a `.env` file.

    Returns:
        The full path to the environment file if found, otherwise `None`.
    """
    if path is not None:
        if os.path.isdir(path):
            path = os.path.join(path, ENV_FILENAME)
        return path if os.path.isfile(path) else None

    for directory in (os.getcwd(), MDREPO_HOME):
        candidate = os.path.join(directory, ENV_FILENAME)
        if os.path.isfile(candidate):
            return candidate

    return None


def load_env_file(path: Optional[str] = None) -> Optional[str]:
    """
    Load an environment file into `os.environ`. Variables already set in the
    environment take precedence over the ones in the file.

    Args:
        path: Optional explicit location of the environment file.

    Returns:
        The path of the file that was loaded, or `None` if no file was found.

    Raises:
        ConfigurationError: If `path` was given explicitly but does not exist.
    """
    env_file = find_env_file(path)
    if env_file is None:
        if path is not None:
            raise ConfigurationError(f"Cannot find environment file '{path}'.")
        LOG.debug("No environment file found. Using the process environment only.")
        return None

    LOG.debug(f"Reading environment from file {env_file}")
    load_dotenv(env_file, override=False)
    return env_file


def _get_int(environ: Mapping[str, str], key: str, default: int) -> int:
    """
    Read an integer setting from the environment.

    Raises:
        ConfigurationError: If the value is set but is not an integer.
    """
    value = environ.get(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(f"'{key}' must be an integer, got '{value}'.") from exc


def get_config(environ: Optional[Mapping[str, str]] = None) -> Dict:
    """
    Build the configuration dictionary from environment variables.

    Args:
        environ: Mapping to read settings from. Defaults to `os.environ`.

    Returns:
        A dictionary with a `database` and an `accession` section.
    """
    if environ is None:
        environ = os.environ

    return {
        "database": {
            "url": environ.get("DB_URL") or None,
            "server": environ.get("DB_SERVER", DEFAULT_DB_SERVER),
            "port": _get_int(environ, "DB_PORT", DEFAULT_DB_PORT),
            "name": environ.get("DB_NAME") or None,
            "username": environ.get("DB_AUTH_USER") or None,
            "password": environ.get("DB_AUTH_PASSWORD") or None,
            "authsource": environ.get("DB_AUTHSOURCE") or None,
            "timeout_ms": _get_int(environ, "DB_TIMEOUT_MS", DEFAULT_DB_TIMEOUT_MS),
        },
        "accession": {
            "prefix": environ.get("ACCESSION_PREFIX") or None,
            "digits": _get_int(environ, "ACCESSION_DIGITS", DEFAULT_ACCESSION_DIGITS),
        },
    }


def initialize_config(env_file: Optional[str] = None) -> Config:
    """
    Load the environment file (if any) and (re)build the global `CONFIG` object.

    Args:
        env_file: Optional explicit location of the environment file.

    Returns:
        The freshly built `Config` object.
    """
    global CONFIG  # pylint: disable=global-statement
    load_env_file(env_file)
    CONFIG = Config(get_config())
    LOG.debug(str(CONFIG))
    return CONFIG


def get_active_config() -> Config:
    """
    Return the global `CONFIG` object, initializing it on first use.

    Returns:
        The active `Config` object.
    """
    if CONFIG is None:
        return initialize_config()
    return CONFIG
