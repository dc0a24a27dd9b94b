##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
Compiled models: a schema bound to a name and to the store that serves it.
"""
from typing import TYPE_CHECKING

from pymongo.asynchronous.collection import AsyncCollection

from mongostore.models.schema import Schema


if TYPE_CHECKING:
    from mongostore.store import MongoStore


class Model:
    """
    A named handle on a collection, compiled from a schema description.

    Queries go through the driver collection returned by `collection`, passing
    the transaction session where needed:

        user = store.model("user")
        await user.collection.insert_one({"name": "John"}, session=session.driver_session)

    Attributes:
        name (str): The name the model is registered under.
        schema (Schema): The schema description the model was compiled from.
        collection_name (str): The collection documents of this model live in.
    """

    def __init__(self, name: str, schema: Schema, store: "MongoStore" = None):
        """
        Args:
            name: The name the model is registered under.
            schema: The schema description of the model.
            store: The store whose connection serves this model.
        """
        self.name = name
        self.schema = schema
        self.collection_name = schema.collection or name
        self._store = store

    @property
    def collection(self) -> AsyncCollection:
        """
        The driver collection backing this model.

        Raises:
            StoreNotConnectedError: If the store isn't connected yet.
            ValueError: If the model isn't bound to a store.
        """
        if self._store is None:
            raise ValueError(f"Model '{self.name}' is not bound to a store")
        return self._store.get_database()[self.collection_name]

    def __repr__(self) -> str:
        return f"Model(name={self.name!r}, collection={self.collection_name!r})"
