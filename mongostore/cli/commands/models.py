##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
CLI module for checking model definition files.

This module defines the `ModelsCommand` class, which handles the `models`
subcommand. It loads model definitions the same way an application's store
would, without connecting, and prints the models that were registered.
Files that fail to load are reported in the log.
"""

# pylint: disable=duplicate-code

import logging
from argparse import ArgumentParser, Namespace

from tabulate import tabulate

from mongostore.cli.commands.command_entry_point import CommandEntryPoint
from mongostore.store import MongoStore


LOG = logging.getLogger("mongostore")


class ModelsCommand(CommandEntryPoint):
    """
    Handles `models` CLI command for listing the models found in model paths.

    Methods:
        add_parser: Adds the `models` command to the CLI parser.
        process_command: Processes the CLI input and prints the registered models.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `models` command parser to the CLI argument parser.

        Parameters:
            subparsers (ArgumentParser): The subparsers object to which the `models` command parser will be added.
        """
        models: ArgumentParser = subparsers.add_parser(
            "models",
            help="Load model definition files and list the models they register.",
        )
        models.set_defaults(func=self.process_command)
        models.add_argument(
            "paths",
            nargs="*",
            help="Model files or directories. Default: the model paths of the store settings.",
        )
        models.add_argument(
            "--root",
            type=str,
            default=None,
            help="Directory relative model paths are resolved against. Default: the current directory.",
        )
        self.add_config_arguments(models)

    def process_command(self, args: Namespace):
        """
        CLI command to load models and print them.

        Args:
            args: Parsed CLI arguments.
        """
        settings = self.load_settings(args)
        if args.paths:
            settings["path"] = {"models": args.paths}

        store = MongoStore(name=args.store, root=args.root)
        store.init(settings)

        models = store.get_models()
        if not models:
            LOG.warning("No models were registered.")
            return

        rows = [
            [name, model.collection_name, ", ".join(model.schema.field_names())] for name, model in models.items()
        ]
        print(tabulate(rows, headers=["Model", "Collection", "Fields"]))
