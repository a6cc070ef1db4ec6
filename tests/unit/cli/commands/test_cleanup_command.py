##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
Tests for the `cleanup.py` file of the `cli/commands` folder.
"""

import logging
from argparse import Namespace
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pytest_mock import MockerFixture

from mdrepo.cli.commands.cleanup import CleanupCommand
from mdrepo.config import Config
from mdrepo.db_scripts.collections import CollectionKind
from mdrepo.db_scripts.data_models import DeletionOutcome, DeletionState, ResolvedTarget
from mdrepo.exceptions import InvalidIdentifierError
from tests.fixture_types import FixtureCallable


# pylint: disable=redefined-outer-name

MODULE = "mdrepo.cli.commands.cleanup"


@pytest.fixture
def database(patched_database: FixtureCallable) -> MagicMock:
    """
    The mocked database handler used by the `cleanup` command.

    Args:
        patched_database: A fixture replacing `RepositoryDatabase` with a mock.

    Returns:
        The mocked database instance.
    """
    return patched_database(MODULE)


@pytest.fixture
def mock_dispatcher(mocker: MockerFixture) -> MagicMock:
    """
    Patch the deletion dispatcher used by the `cleanup` command.

    Args:
        mocker: PyTest mocker fixture.

    Returns:
        The patched `DeletionDispatcher` class.
    """
    mock_class = mocker.patch(f"{MODULE}.DeletionDispatcher")
    mock_class.return_value.delete.return_value = DeletionOutcome(state=DeletionState.DELETED)
    return mock_class


class TestParser:
    """Tests for the `cleanup` command parser."""

    def test_parser_sets_func(self, create_parser: FixtureCallable):
        """
        Ensure the `cleanup` command sets the correct default function and defaults.

        Args:
            create_parser: A fixture to help create a parser.
        """
        command = CleanupCommand()
        parser = create_parser(command)
        args = parser.parse_args(["cleanup", "5f2a0b6e9d1e4c3a2b1c0d9e"])
        assert args.func.__name__ == command.process_command.__name__
        assert args.id == "5f2a0b6e9d1e4c3a2b1c0d9e"
        assert args.force is False
        assert args.delete_all_orphans is False

    @pytest.mark.parametrize("alias", ["clean", "drop", "clear", "delete", "remove"])
    def test_aliases(self, create_parser: FixtureCallable, alias: str):
        """
        Ensure every alias runs the `cleanup` command.

        Args:
            create_parser: A fixture to help create a parser.
            alias: An alias of `cleanup`.
        """
        args = create_parser(CleanupCommand()).parse_args([alias, "-f", "MCNS00001"])
        assert args.force is True
        assert args.id == "MCNS00001"

    def test_orphans_flag(self, create_parser: FixtureCallable):
        """
        Ensure orphans can be deleted without an id.

        Args:
            create_parser: A fixture to help create a parser.
        """
        args = create_parser(CleanupCommand()).parse_args(["cleanup", "--delete-all-orphans"])
        assert args.delete_all_orphans is True
        assert args.id is None

    @pytest.mark.parametrize("argv", [["cleanup"], ["cleanup", "MCNS00001", "--delete-all-orphans"]])
    def test_exactly_one_target(self, create_parser: FixtureCallable, argv: list):
        """
        Ensure either an id or `--delete-all-orphans` must be given, but not both.

        Args:
            create_parser: A fixture to help create a parser.
            argv: Invalid command line arguments.
        """
        with pytest.raises(SystemExit):
            create_parser(CleanupCommand()).parse_args(argv)


class TestDeleteDocument:
    """Tests for deleting a single document with the `cleanup` command."""

    def test_resolves_and_dispatches(
        self, active_config: Config, database: MagicMock, mock_dispatcher: MagicMock, caplog: pytest.LogCaptureFixture
    ):
        """
        Ensure the identifier is resolved and passed, with the force flag, to the dispatcher.

        Args:
            active_config: The active `Config` object.
            database: The mocked database handler.
            mock_dispatcher: The patched `DeletionDispatcher` class.
            caplog: PyTest caplog fixture.
        """
        caplog.set_level(logging.INFO)
        args = Namespace(id=" mcns00001 ", force=True, delete_all_orphans=False)

        CleanupCommand().process_command(args)

        mock_dispatcher.assert_called_once()
        assert mock_dispatcher.call_args[0][0] is database
        mock_dispatcher.return_value.delete.assert_called_once_with("MCNS00001", force=True)
        assert "Data deletion has been completed" in caplog.text
        database.__exit__.assert_called_once()

    def test_raw_id(self, active_config: Config, database: MagicMock, mock_dispatcher: MagicMock):
        """
        Ensure raw ids are passed to the dispatcher as database ids.

        Args:
            active_config: The active `Config` object.
            database: The mocked database handler.
            mock_dispatcher: The patched `DeletionDispatcher` class.
        """
        args = Namespace(id="5f2a0b6e9d1e4c3a2b1c0d9e", force=False, delete_all_orphans=False)
        CleanupCommand().process_command(args)
        mock_dispatcher.return_value.delete.assert_called_once_with(
            ObjectId("5f2a0b6e9d1e4c3a2b1c0d9e"), force=False
        )

    def test_aborted_is_not_completed(
        self, active_config: Config, database: MagicMock, mock_dispatcher: MagicMock, caplog: pytest.LogCaptureFixture
    ):
        """
        Ensure nothing is reported as completed when the operator declines.

        Args:
            active_config: The active `Config` object.
            database: The mocked database handler.
            mock_dispatcher: The patched `DeletionDispatcher` class.
            caplog: PyTest caplog fixture.
        """
        caplog.set_level(logging.INFO)
        mock_dispatcher.return_value.delete.return_value = DeletionOutcome(state=DeletionState.ABORTED)
        CleanupCommand().process_command(Namespace(id="MCNS00001", force=False, delete_all_orphans=False))
        assert "has been completed" not in caplog.text

    def test_invalid_identifier(self, active_config: Config, database: MagicMock, mock_dispatcher: MagicMock):
        """
        Ensure malformed identifiers are rejected before anything is dispatched.

        Args:
            active_config: The active `Config` object.
            database: The mocked database handler.
            mock_dispatcher: The patched `DeletionDispatcher` class.
        """
        with pytest.raises(InvalidIdentifierError):
            CleanupCommand().process_command(Namespace(id="nope", force=True, delete_all_orphans=False))
        mock_dispatcher.assert_not_called()


class TestDeleteOrphans:
    """Tests for deleting orphans with the `cleanup` command."""

    @pytest.fixture
    def orphans(self) -> list:
        """
        One orphan analysis and two orphan files.

        Returns:
            A list of `ResolvedTarget` objects.
        """
        return [
            ResolvedTarget(collection=CollectionKind.ANALYSIS, document={"_id": ObjectId()}),
            ResolvedTarget(collection=CollectionKind.FILE, document={"_id": ObjectId()}),
            ResolvedTarget(collection=CollectionKind.FILE, document={"_id": ObjectId()}),
        ]

    def test_forced(self, database: MagicMock, orphans: list, caplog: pytest.LogCaptureFixture):
        """
        Ensure every orphan is deleted without confirmation when forced.

        Args:
            database: The mocked database handler.
            orphans: The orphan documents.
            caplog: PyTest caplog fixture.
        """
        caplog.set_level(logging.INFO)
        database.find_orphans.return_value = orphans

        CleanupCommand().process_command(Namespace(id=None, force=True, delete_all_orphans=True))

        assert [c.args[0] for c in database.delete_orphan.call_args_list] == orphans
        assert "1 analysis(s), 2 file(s)" in caplog.text

    def test_declined(self, mocker: MockerFixture, database: MagicMock, orphans: list):
        """
        Ensure nothing is deleted when the operator declines.

        Args:
            mocker: PyTest mocker fixture.
            database: The mocked database handler.
            orphans: The orphan documents.
        """
        database.find_orphans.return_value = orphans
        mock_confirm = mocker.patch(f"{MODULE}.confirm", return_value=False)

        CleanupCommand().process_command(Namespace(id=None, force=False, delete_all_orphans=True))

        mock_confirm.assert_called_once_with("Confirm deletion of 3 orphan documents")
        database.delete_orphan.assert_not_called()

    def test_no_orphans(self, mocker: MockerFixture, database: MagicMock, caplog: pytest.LogCaptureFixture):
        """
        Ensure the operator is not asked anything when there are no orphans.

        Args:
            mocker: PyTest mocker fixture.
            database: The mocked database handler.
            caplog: PyTest caplog fixture.
        """
        caplog.set_level(logging.INFO)
        database.find_orphans.return_value = []
        mock_confirm = mocker.patch(f"{MODULE}.confirm")

        CleanupCommand().process_command(Namespace(id=None, force=False, delete_all_orphans=True))

        mock_confirm.assert_not_called()
        assert "No orphan documents found." in caplog.text
