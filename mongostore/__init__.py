##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
Mongostore: model registry and transaction coordinator for MongoDB.

This module contains the source code for Mongostore. The main entry point for
applications is the `MongoStore` class:

    from mongostore.store import MongoStore

    store = MongoStore()
    store.init({"database": "app", "path": {"models": "app/models"}})
    await store.run()
    user = store.model("user")
    await store.transaction(unit_of_work)
"""

__version__ = "1.0.0"
VERSION = __version__

# Name of the default store, its config is published under `store.mongo`
PUBLIC_NAME = "mongo"
