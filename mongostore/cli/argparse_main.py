##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
Top-level parser of the `mongostore` command line.

Global options control logging only; everything else belongs to the
subcommands listed in `mongostore.cli.commands.ALL_COMMANDS`.
"""

from argparse import ArgumentParser

from mongostore import VERSION
from mongostore.cli.commands import ALL_COMMANDS


DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
DESCRIPTION = "Load Mongo models, check connection settings and inspect the merged store configuration."


def build_main_parser() -> ArgumentParser:
    """
    Build the `mongostore` parser with every command registered.

    Returns:
        The parser. Parsed arguments carry the selected command's handler as `func`.
    """
    parser = ArgumentParser(
        prog="mongostore",
        description=DESCRIPTION,
        epilog="See mongostore <command> --help for more info",
    )
    parser.add_argument("-v", "--version", action="version", version=VERSION)
    parser.add_argument(
        "-lvl",
        "--level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=DEFAULT_LOG_LEVEL,
        help="Log level [Default: %(default)s]",
    )
    parser.add_argument("--no-color", action="store_true", help="Log without colors.")

    subparsers = parser.add_subparsers(dest="subparsers", metavar="command", required=True)
    for command in ALL_COMMANDS:
        command.add_parser(subparsers)

    return parser
