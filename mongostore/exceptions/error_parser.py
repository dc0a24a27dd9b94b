##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
Normalizes errors coming out of the Mongo driver.

Host applications usually map errors to user-facing messages by a namespace
and a code. This module tags driver exceptions in place with `ns` and
`store_code` attributes, the same pair every `StoreError` exposes, so they
keep their identity and type while being recognizable as store errors.
"""

from pymongo.errors import OperationFailure, PyMongoError

from mongostore.exceptions import STORE_NAMESPACE, StoreError


# Server error codes, see https://www.mongodb.com/docs/manual/reference/error-codes/
DOCUMENT_VALIDATION_FAILURE = 121
DUPLICATE_KEY = 11000
WRITE_CONFLICT = 112

DATA_CODES = {DOCUMENT_VALIDATION_FAILURE, DUPLICATE_KEY}
DATA_VERSION_CODES = {WRITE_CONFLICT}


def classify_error(exc: Exception) -> str:
    """
    Map an exception to one of the coarse store error codes.

    Args:
        exc: The exception to classify. If it wraps another exception in a
            `source` attribute, the source is classified instead.

    Returns:
        `STORE.DATA`, `STORE.DATA_VERSION` or `DATABASE_ERROR`.
    """
    source = getattr(exc, "source", None) or exc
    if isinstance(source, OperationFailure):
        if source.code in DATA_CODES:
            return "STORE.DATA"
        if source.code in DATA_VERSION_CODES:
            return "STORE.DATA_VERSION"
    return "DATABASE_ERROR"


def parse_error(exc: Exception) -> bool:
    """
    Tag a store-originated exception with the store namespace and a coarse code.

    The exception is mutated in place. `StoreError` instances already carry
    their own code and only get their namespace confirmed.

    Args:
        exc: The exception to inspect.

    Returns:
        True if the exception came from the store and was tagged, False otherwise.
    """
    if isinstance(exc, StoreError):
        exc.ns = STORE_NAMESPACE
        return True
    if not isinstance(exc, PyMongoError):
        return False
    exc.ns = STORE_NAMESPACE
    exc.store_code = classify_error(exc)
    return True
