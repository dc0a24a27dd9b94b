##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
CLI module for checking that the store settings reach a Mongo server.
"""

# pylint: disable=duplicate-code

import asyncio
import logging
from argparse import ArgumentParser, Namespace

from mongostore.cli.commands.command_entry_point import CommandEntryPoint
from mongostore.store import MongoStore


LOG = logging.getLogger("mongostore")


async def ping_store(store: MongoStore):
    """
    Connect the store and close it again.

    Args:
        store: An initialized store.

    Raises:
        MongoConnectionError: If the server can't be reached.
    """
    await store.run()
    await store.close()


class PingCommand(CommandEntryPoint):
    """
    Handles `ping` CLI command for testing the connection settings.

    Methods:
        add_parser: Adds the `ping` command to the CLI parser.
        process_command: Connects with the configured settings and reports the outcome.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `ping` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the `ping` command parser will be added.
        """
        ping: ArgumentParser = subparsers.add_parser(
            "ping",
            help="Connect to the Mongo server with the store settings.",
        )
        ping.set_defaults(func=self.process_command)
        self.add_config_arguments(ping)

    def process_command(self, args: Namespace):
        """
        CLI command to connect to the Mongo server.

        Args:
            args: Parsed CLI arguments.
        """
        settings = self.load_settings(args)
        # Models are irrelevant to a connection check
        settings["path"] = {"models": []}

        store = MongoStore(name=args.store)
        store.init(settings)
        asyncio.run(ping_store(store))
        LOG.info(f"Store '{store.name}' reached the Mongo server.")
