##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
CLI module for printing the merged store configuration.

This shows exactly what a store would use after the defaults are merged in,
including the connection url derived from the structured fields.
"""

# pylint: disable=duplicate-code

import logging
from argparse import ArgumentParser, Namespace

from mongostore.cli.commands.command_entry_point import CommandEntryPoint
from mongostore.config.connection import get_connection_string
from mongostore.config.store_config import build_store_config
from mongostore.exceptions import MongoConnectionError


LOG = logging.getLogger("mongostore")


class ConfigCommand(CommandEntryPoint):
    """
    Handles `config` CLI command for viewing the merged store configuration.

    Methods:
        add_parser: Adds the `config` command to the CLI parser.
        process_command: Prints the merged configuration.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `config` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the `config` command parser will be added.
        """
        config: ArgumentParser = subparsers.add_parser(
            "config",
            help="Print the store configuration merged with the defaults.",
        )
        config.set_defaults(func=self.process_command)
        config.add_argument(
            "--show-password",
            action="store_true",
            help="Print the password instead of masking it.",
        )
        self.add_config_arguments(config)

    def process_command(self, args: Namespace):
        """
        CLI command to print the merged configuration.

        Args:
            args: Parsed CLI arguments.
        """
        store_config = build_store_config(self.load_settings(args))
        print(store_config.format(include_password=args.show_password))

        try:
            url = get_connection_string(store_config, include_password=args.show_password)
        except MongoConnectionError as exc:
            LOG.warning(f"No connection url can be derived: {exc}")
            return
        print(f"connection url: {url}")
