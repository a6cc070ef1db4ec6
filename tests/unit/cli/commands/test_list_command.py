##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other mdrepo
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to mdrepo.
##############################################################################

"""
Tests for the `list_projects.py` file of the `cli/commands` folder.
"""

import logging
from argparse import Namespace
from typing import Any

import pytest
from _pytest.capture import CaptureFixture
from bson import ObjectId

from mdrepo.cli.commands.list_projects import ListCommand, format_project_rows
from tests.fixture_types import FixtureCallable, FixtureDict


MODULE = "mdrepo.cli.commands.list_projects"


def test_parser_sets_func(create_parser: FixtureCallable):
    """
    Ensure the `list` command sets the correct default function.

    Args:
        create_parser: A fixture to help create a parser.
    """
    command = ListCommand()
    args = create_parser(command).parse_args(["list", "--published-only"])
    assert args.published_only is True
    assert args.func.__name__ == command.process_command.__name__


def test_format_project_rows(project_document: FixtureDict[str, Any]):
    """
    Ensure projects are turned into rows, with placeholders for missing values.

    Args:
        project_document: A project document.
    """
    bare = {"_id": ObjectId("5f2a0b6e9d1e4c3a2b1c0d9f"), "accession": "MCNS00002", "published": True}
    assert format_project_rows([project_document, bare]) == [
        ["5f2a0b6e9d1e4c3a2b1c0d9e", "-", "Spike protein", "no", 2],
        ["5f2a0b6e9d1e4c3a2b1c0d9f", "MCNS00002", "-", "yes", 0],
    ]


def test_prints_table(
    patched_database: FixtureCallable,
    project_document: FixtureDict[str, Any],
    capsys: CaptureFixture,
    caplog: pytest.LogCaptureFixture,
):
    """
    Ensure every project is printed in a table.

    Args:
        patched_database: A fixture replacing `RepositoryDatabase` with a mock.
        project_document: A project document.
        capsys: PyTest capsys fixture.
        caplog: PyTest caplog fixture.
    """
    caplog.set_level(logging.INFO)
    database = patched_database(MODULE)
    database.list_projects.return_value = [project_document]

    ListCommand().process_command(Namespace(published_only=False))

    output = capsys.readouterr().out
    assert "Accession" in output
    assert "Spike protein" in output
    assert "1 projects listed, 0 published." in caplog.text


def test_published_only(
    patched_database: FixtureCallable,
    project_document: FixtureDict[str, Any],
    capsys: CaptureFixture,
    caplog: pytest.LogCaptureFixture,
):
    """
    Ensure unpublished projects can be left out.

    Args:
        patched_database: A fixture replacing `RepositoryDatabase` with a mock.
        project_document: An unpublished project document.
        capsys: PyTest capsys fixture.
        caplog: PyTest caplog fixture.
    """
    caplog.set_level(logging.INFO)
    database = patched_database(MODULE)
    database.list_projects.return_value = [project_document]

    ListCommand().process_command(Namespace(published_only=True))

    assert "Spike protein" not in capsys.readouterr().out
    assert "No projects found." in caplog.text
