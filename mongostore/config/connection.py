##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
This module builds the connection string used to reach the Mongo server.

When the configuration has no explicit `url`, it's derived from the
structured fields:

    mongodb://[<user>[:<password>]@]<hostname>:<port>/<database>
"""
import logging
from urllib.parse import quote

from mongostore.config import MASKED_PASSWORD, StoreConfig
from mongostore.exceptions import MongoConnectionError


LOG = logging.getLogger(__name__)

URL_SCHEME = "mongodb"


def validate_connection_fields(config: StoreConfig):
    """
    Make sure the fields needed to derive a connection string are present.

    Args:
        config: The store configuration to check.

    Raises:
        MongoConnectionError: If `url` is missing and so is `database` or `hostname`.
    """
    if config.url:
        return
    if not config.database:
        raise MongoConnectionError("Missing database credentials")
    if not config.hostname:
        raise MongoConnectionError("Missing hostname")


def get_connection_string(config: StoreConfig, include_password: bool = True) -> str:
    """
    Return the url to connect with, deriving it from the structured fields if needed.

    User names and passwords are percent-escaped so characters like `@` or `:`
    survive in the url.

    Args:
        config: The store configuration.
        include_password: Whether to include the password in the connection string.
            If True, the password will be included; otherwise, it will be masked.

    Returns:
        The connection string.

    Raises:
        MongoConnectionError: If there's no `url` and `database` or `hostname` is missing.
    """
    if config.url:
        LOG.debug("Store connection: using the configured url.")
        return config.url

    validate_connection_fields(config)

    spass = ""
    if config.user:
        spass = quote(str(config.user), safe="")
        if config.password:
            password = quote(str(config.password), safe="") if include_password else MASKED_PASSWORD
            spass += f":{password}"
        spass += "@"
    else:
        LOG.debug("Store connection: no user configured, connecting without credentials.")

    return f"{URL_SCHEME}://{spass}{config.hostname}:{config.port}/{config.database}"
