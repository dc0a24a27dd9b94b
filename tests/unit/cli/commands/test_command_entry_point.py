##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
Tests for the `command_entry_point.py` file.
"""

import os
from argparse import ArgumentParser, Namespace

import pytest
import yaml
from pytest_mock import MockerFixture

from mongostore.cli.commands.command_entry_point import CommandEntryPoint


def test_cannot_instantiate_abstract_class():
    """Ensure instantiating CommandEntryPoint directly raises TypeError."""
    with pytest.raises(TypeError):
        CommandEntryPoint()


def test_concrete_subclass_must_implement_add_parser_and_process_command():
    """Ensure subclass missing methods raises TypeError."""

    class IncompleteCommand(CommandEntryPoint):
        def add_parser(self, subparsers: ArgumentParser):
            pass

    with pytest.raises(TypeError):
        IncompleteCommand()


def test_add_config_arguments_defaults():
    """Test the defaults of the shared `--config` and `--store` options."""
    parser = ArgumentParser()
    CommandEntryPoint.add_config_arguments(parser)

    args = parser.parse_args([])
    assert args.config is None
    assert args.store == "mongo"

    args = parser.parse_args(["--config", "app.yaml", "--store", "audit"])
    assert args.config == "app.yaml"
    assert args.store == "audit"


def test_load_settings_from_given_file(tmp_path):
    """
    Test that `--config` selects the file and `--store` the section.

    Args:
        tmp_path: PyTest tmp_path fixture.
    """
    config_file = os.path.join(str(tmp_path), "app.yaml")
    with open(config_file, "w") as app_file:
        yaml.dump({"store": {"mongo": {"database": "app"}, "audit": {"database": "audit"}}}, app_file)

    assert CommandEntryPoint.load_settings(Namespace(config=config_file, store="audit")) == {"database": "audit"}


def test_load_settings_without_file(mocker: MockerFixture, caplog):
    """
    Test that no configuration file at all gives empty settings and a warning.

    Args:
        mocker: PyTest mocker fixture.
        caplog: PyTest caplog fixture.
    """
    mocker.patch("mongostore.cli.commands.command_entry_point.find_config_file", return_value=None)

    assert CommandEntryPoint.load_settings(Namespace(config=None, store="mongo")) == {}
    assert "No app.yaml found" in caplog.text
