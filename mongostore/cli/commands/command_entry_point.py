##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
Defines the abstract base class for Mongostore CLI commands.

Commands needing the store's settings share the `--config` and `--store`
options added by `add_config_arguments` and resolved by `load_settings`.
"""

import logging
from abc import ABC, abstractmethod
from argparse import ArgumentParser, Namespace
from typing import Any, Dict

from mongostore import PUBLIC_NAME
from mongostore.config.configfile import find_config_file, load_store_config


LOG = logging.getLogger("mongostore")


class CommandEntryPoint(ABC):
    """
    Abstract base class for a Mongostore CLI command entry point.

    Methods:
        add_parser: Adds the parser for a specific command to the main `ArgumentParser`.
        process_command: Executes the logic for this CLI command.
    """

    @abstractmethod
    def add_parser(self, subparsers: ArgumentParser):
        """Add the parser for this command to the main `ArgumentParser`."""
        raise NotImplementedError("Subclasses of `CommandEntryPoint` must implement an `add_parser` method.")

    @abstractmethod
    def process_command(self, args: Namespace):
        """Execute the logic for this CLI command."""
        raise NotImplementedError("Subclasses of `CommandEntryPoint` must implement an `process_command` method.")

    @staticmethod
    def add_config_arguments(parser: ArgumentParser):
        """
        Add the options selecting where the store settings are read from.

        Args:
            parser: The parser of the command.
        """
        parser.add_argument(
            "--config",
            type=str,
            default=None,
            help="Path to the app.yaml file holding the store settings. "
            "Default: ./app.yaml, then ~/.mongostore/app.yaml",
        )
        parser.add_argument(
            "--store",
            type=str,
            default=PUBLIC_NAME,
            help="Name of the store section to read under `store:` [Default: %(default)s]",
        )

    @staticmethod
    def load_settings(args: Namespace) -> Dict[str, Any]:
        """
        Read the store settings selected by `--config` and `--store`.

        Args:
            args: Parsed CLI arguments.

        Returns:
            The raw store settings. Empty if no configuration file was found.
        """
        config_file = args.config or find_config_file()
        if config_file is None:
            LOG.warning("No app.yaml found, using the default store settings.")
            return {}
        return load_store_config(config_file, name=args.store)
