##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
Mongostore CLI Commands Package.

Each module encapsulates the logic and argument parsing of one command, built
around the `CommandEntryPoint` interface.

Modules:
    command_entry_point: Defines the abstract base class `CommandEntryPoint` for all CLI commands.
    config: Implements the `config` command printing the merged store configuration.
    models: Implements the `models` command loading and listing model definitions.
    ping: Implements the `ping` command checking the connection settings.
"""

from mongostore.cli.commands.config import ConfigCommand
from mongostore.cli.commands.models import ModelsCommand
from mongostore.cli.commands.ping import PingCommand


# Keep these in alphabetical order
ALL_COMMANDS = [
    ConfigCommand(),
    ModelsCommand(),
    PingCommand(),
]
