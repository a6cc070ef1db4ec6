##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
Fixtures for files in this `cli/` test directory.
"""

from argparse import ArgumentParser
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from mdrepo.cli.commands.command_entry_point import CommandEntryPoint
from mdrepo.config import Config
from tests.fixture_types import FixtureCallable


@pytest.fixture
def create_parser() -> FixtureCallable:
    """
    A fixture to help create a parser for any command.

    Returns:
        A function that creates a parser.
    """

    def _create_parser(cmd: CommandEntryPoint) -> ArgumentParser:
        """
        Returns an `ArgumentParser` configured with the `cmd` command.

        Returns:
            Parser with the `cmd` command registered.
        """
        parser = ArgumentParser()
        subparsers = parser.add_subparsers(dest="main_command")
        cmd.add_parser(subparsers)
        return parser

    return _create_parser


@pytest.fixture
def active_config(mocker: MockerFixture, app_config: Config) -> Config:
    """
    Make `app_config` the active configuration of the CLI.

    Args:
        mocker: PyTest mocker fixture.
        app_config: A full `Config` object.

    Returns:
        The active `Config` object.
    """
    mocker.patch("mdrepo.cli.utils.get_active_config", return_value=app_config)
    return app_config


@pytest.fixture
def patched_database(mocker: MockerFixture) -> FixtureCallable:
    """
    A fixture to replace `RepositoryDatabase` in a command module with a mock
    usable as a context manager.

    Args:
        mocker: PyTest mocker fixture.

    Returns:
        A function taking the dotted path of the command module and returning
            the mocked database instance.
    """

    def _patched_database(module: str) -> MagicMock:
        mock_class = mocker.patch(f"{module}.RepositoryDatabase")
        database = mock_class.return_value
        database.__enter__.return_value = database
        return database

    return _patched_database
