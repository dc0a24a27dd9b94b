##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""This module provides enumerations for the store and its transactions."""
from enum import Enum, IntEnum


__all__ = ("ReturnCode", "StoreState", "TransactionState")


class ReturnCode(IntEnum):
    """
    Enum for Mongostore CLI return codes.

    Attributes:
        OK (int): Indicates a successful operation. Numeric value: 0.
        ERROR (int): Indicates a general error occurred. Numeric value: 1.
    """

    OK: int = 0
    ERROR: int = 1


class StoreState(Enum):
    """
    Lifecycle of a `MongoStore`.

    Attributes:
        CONSTRUCTED (str): Created, no configuration yet. Model paths are queued.
        INITIALIZED (str): Configuration merged and model paths loaded.
        CONNECTED (str): A client is connected to the Mongo server.
        CLOSED (str): The client was closed. The store can be run again.
    """

    CONSTRUCTED = "constructed"
    INITIALIZED = "initialized"
    CONNECTED = "connected"
    CLOSED = "closed"


class TransactionState(Enum):
    """
    States a single transaction session moves through.

    `STARTING -> ACTIVE -> (COMMITTING | ROLLING_BACK) -> SETTLED`
    """

    STARTING = "starting"
    ACTIVE = "active"
    COMMITTING = "committing"
    ROLLING_BACK = "rolling_back"
    SETTLED = "settled"
