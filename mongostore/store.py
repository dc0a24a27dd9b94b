##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
The Mongo store: model registry, connection and transactions behind one handle.

Models are Python files stored under `app/models` by default. An example model
definition, `app/models/User.py`:

    def define(Schema, pymongo):
        return Schema({"name": str})

And the application using it:

    store = MongoStore()
    store.init({"hostname": "localhost", "database": "app"})
    await store.run()

    user = store.model("user")
    await user.collection.insert_one({"name": "John"})

A store moves through `CONSTRUCTED -> INITIALIZED -> CONNECTED -> CLOSED`.
Model paths added before `init` are queued, afterwards they load immediately.
"""

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional, Union

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError
from pymongo.read_concern import ReadConcern
from pymongo.write_concern import WriteConcern

from mongostore import PUBLIC_NAME
from mongostore.common.enums import StoreState
from mongostore.config import StoreConfig, publish_config
from mongostore.config.connection import get_connection_string
from mongostore.config.store_config import build_store_config
from mongostore.exceptions import MongoConnectionError, StoreNotConnectedError
from mongostore.exceptions.error_parser import parse_error
from mongostore.models.loader import ModelLoader
from mongostore.models.model import Model
from mongostore.models.registry import ModelRegistry
from mongostore.transaction import UnitOfWork, run_transaction


LOG = logging.getLogger(__name__)


class MongoStore:  # pylint: disable=too-many-instance-attributes
    """
    Owns the model registry and the connection to a Mongo server.

    Attributes:
        name (str): The public name of the store. Its config is published under `store.<name>`.
        root (str): The application root relative model paths are resolved against.
        state (StoreState): Where the store is in its lifecycle.

    Methods:
        add_model_path: Queue a model path, or load it right away once initialized.
        add_model: Register a compiled model.
        model: Look a model up by name.
        get_models: Return every registered model.
        load_model: Compile the models found at a path and register them.
        init: Merge the configuration and load every model path.
        run: Connect to the Mongo server.
        transaction: Run a unit-of-work inside a transaction.
        close: Close the connection.
    """

    type = "mongo"

    def __init__(self, name: str = PUBLIC_NAME, root: str = None):
        """
        Args:
            name: The public name of the store.
            root: The application root. Defaults to the current working directory.
        """
        self.name = name
        self.state = StoreState.CONSTRUCTED
        self._config: Optional[StoreConfig] = None
        self._registry = ModelRegistry()
        self._loader = ModelLoader(root=root, store=self)
        self._model_paths = []
        self._client: Optional[AsyncMongoClient] = None
        self._connecting: Optional[asyncio.Future] = None

    @property
    def root(self) -> str:
        """The directory relative model paths are resolved against."""
        return self._loader.root

    @property
    def logger(self) -> logging.Logger:
        """The logger of this store, named after it."""
        return logging.getLogger(f"mongostore.store.{self.name}")

    @property
    def initialized(self) -> bool:
        """Whether `init` was called."""
        return self.state != StoreState.CONSTRUCTED

    @property
    def connected(self) -> bool:
        """Whether the store holds a connected client."""
        return self._client is not None

    def get_config(self) -> Optional[StoreConfig]:
        """Return the merged configuration, or None before `init`."""
        return self._config

    def get_client(self) -> Optional[AsyncMongoClient]:
        """Return the driver client, or None if the store isn't connected."""
        return self._client

    def get_database(self) -> AsyncDatabase:
        """
        Return the driver handle of the configured database.

        Returns:
            The database named in the config, or the default database of the url.

        Raises:
            StoreNotConnectedError: If the store isn't connected.
        """
        if self._client is None:
            raise StoreNotConnectedError(f"Store '{self.name}' is not connected, call run() first")
        if self._config.database:
            return self._client[self._config.database]
        return self._client.get_default_database()

    def add_model_path(self, path: str) -> Union["MongoStore", bool]:
        """
        Add a file or directory of model definitions.

        Before `init` the path is queued and loaded with the configured paths.
        After `init` its models are loaded and registered right away.

        Args:
            path: A model definition file or a directory of them.

        Returns:
            False if `path` isn't a non-empty string or, after `init`, if no
            model could be registered from it. The store otherwise.
        """
        if not isinstance(path, str) or not path:
            return False
        if self.initialized:
            return self.load_model(path)
        self._model_paths.append(path)
        return self

    def add_model(self, model: Model) -> Union["MongoStore", bool]:
        """
        Register a compiled model.

        Args:
            model: The model to register.

        Returns:
            False if the model has no name or the name is taken, the store otherwise.
        """
        if not self._registry.add(model):
            return False
        return self

    def model(self, name: str) -> Optional[Model]:
        """
        Look a model up by name.

        Args:
            name: The model name, e.g. `user` for `User.py`.

        Returns:
            The model or None if there's no model with that name.
        """
        return self._registry.get(name)

    def get_models(self) -> Mapping[str, Model]:
        """
        Return every registered model.

        Returns:
            A read-only view of the name to model mapping. Use `add_model` to add to it.
        """
        return self._registry.all()

    def load_model(self, path: str) -> Union["MongoStore", bool]:
        """
        Compile the models found at `path` and register them.

        Args:
            path: A model definition file or a directory of them.

        Returns:
            The store if at least one model was registered, False otherwise.
        """
        registered = [self._registry.add(model) for model in self._loader.load(path)]
        if not any(registered):
            return False
        return self

    def init(self, store_config: Dict[str, Any] = None):
        """
        Merge the configuration and load every model path.

        Args:
            store_config: The caller's settings, see `mongostore.config.store_config`.
        """
        if self.initialized:
            self.logger.warning(f"Store '{self.name}' is already initialized, ignoring init()")
            return

        self._config = build_store_config(store_config, extra_model_paths=self._model_paths, root=self.root)
        publish_config(f"store.{self.name}", self._config)
        self.state = StoreState.INITIALIZED

        for model_path in self._config.model_paths:
            self.load_model(model_path)
        self.logger.debug(f"Store '{self.name}' initialized with models: {', '.join(self._registry.names())}")

    async def run(self):
        """
        Connect to the Mongo server. Does nothing if already connected.

        Overlapping calls share a single connection attempt and all see its
        outcome. A failed attempt can be retried by calling `run` again.

        Raises:
            MongoConnectionError: If credentials are missing, or the server
                can't be reached. Missing credentials are reported before any
                network call. Connecting isn't retried.
            StoreNotConnectedError: If `init` wasn't called.
        """
        if self._client is not None:
            return
        if self._config is None:
            raise StoreNotConnectedError(f"Store '{self.name}' must be initialized before it's run")

        if self._connecting is None:
            self._connecting = asyncio.ensure_future(self._connect())
            self._connecting.add_done_callback(self._clear_connecting)
        await asyncio.shield(self._connecting)

    def _clear_connecting(self, _: asyncio.Future):
        self._connecting = None

    async def _connect(self):
        """
        Create the client and check the server answers before keeping it.
        """
        self._config.url = get_connection_string(self._config)

        try:
            client = AsyncMongoClient(self._config.url, **self._config.options)
        except PyMongoError as exc:
            parse_error(exc)
            raise MongoConnectionError("Invalid Mongo connection settings", source=exc) from exc

        try:
            await client.admin.command("ping")
        except Exception as exc:
            await client.close()
            parse_error(exc)
            raise MongoConnectionError("Could not connect to mongo", source=exc) from exc

        self._client = client
        self.state = StoreState.CONNECTED
        self.logger.info("Connected to Mongo server")

    async def transaction(
        self,
        unit_of_work: UnitOfWork,
        read_concern: Union[str, Dict, ReadConcern, None] = None,
        write_concern: Union[str, int, Dict, WriteConcern, None] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Run `unit_of_work` inside a transaction.

        See `mongostore.transaction` for the settlement rules.

        Args:
            unit_of_work: Called with the `TransactionSession`. Its return value
                is what the transaction resolves with.
            read_concern: The read concern level, e.g. `"snapshot"`.
            write_concern: The write concern, e.g. `"majority"`.
            timeout: Seconds the unit-of-work may run before it's rolled back.
                Defaults to the `transaction_timeout` setting.

        Returns:
            The unit-of-work's return value, once committed.

        Raises:
            StoreNotConnectedError: If the store isn't connected.
            Exception: The error that rolled the transaction back or failed the commit.
        """
        if self._client is None:
            raise StoreNotConnectedError(f"Store '{self.name}' is not connected, call run() first")
        if timeout is None:
            timeout = self._config.transaction_timeout

        return await run_transaction(
            self._client, unit_of_work, read_concern=read_concern, write_concern=write_concern, timeout=timeout
        )

    async def close(self):
        """
        Close the connection to the Mongo server. Does nothing if not connected.
        """
        if self._client is None:
            return
        client, self._client = self._client, None
        await client.close()
        self.state = StoreState.CLOSED
        self.logger.info("Closed Mongo connection")
