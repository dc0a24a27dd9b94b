##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
Module of all Mongostore-specific exception types.
"""

# Pylint complains that these exceptions are no different from Exception
# but we don't care, we just need new names for exceptions here
# pylint: disable=W0235

__all__ = (
    "STORE_NAMESPACE",
    "StoreError",
    "MongoConnectionError",
    "StoreNotConnectedError",
    "TransactionTimeoutError",
    "TransactionRolledBackError",
    "ModelLoadError",
)


STORE_NAMESPACE = "STORE.mongo"


class StoreError(Exception):
    """
    Base exception for every error raised by Mongostore.

    Attributes:
        ns (str): The namespace tag identifying this as a store error.
        code (str): A coarse classification of the error.
        store_code (str): Same as `code`, mirrors the tag `parse_error` puts on driver errors.
        source (Exception): The underlying exception that caused this one, if any.
    """

    default_code = "DATABASE_ERROR"

    def __init__(self, message: str, code: str = None, source: Exception = None):
        super().__init__(message)
        self.ns = STORE_NAMESPACE
        self.code = code or self.default_code
        self.source = source

    @property
    def store_code(self) -> str:
        """The coarse error code, under the name driver errors are tagged with."""
        return self.code


class MongoConnectionError(StoreError):
    """
    Exception to signal that a connection to the Mongo server could
    not be established, either because credentials are missing or the
    server refused us.
    """

    default_code = "MONGO.CONNECTION"


class StoreNotConnectedError(StoreError):
    """
    Exception to signal that the store was used before `run()` connected it.
    """

    default_code = "MONGO.CONNECTION"


class TransactionTimeoutError(StoreError):
    """
    Exception to signal that a unit-of-work ran longer than its transaction
    timeout and was rolled back.
    """

    default_code = "STORE.TRANSACTION_TIMEOUT"


class TransactionRolledBackError(StoreError):
    """
    Exception used when a transaction is rolled back explicitly without
    an error of its own.
    """

    default_code = "STORE.TRANSACTION_ROLLBACK"


class ModelLoadError(StoreError):
    """
    Exception for a model definition file that could not be turned into a model.
    Never leaves the loader; the file is logged and skipped.
    """

    default_code = "STORE.MODEL"
