##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
Registry of compiled models, keyed by name.

A name is registered once for the lifetime of the registry. A second model
with the same name is refused and the first one stays authoritative.
"""

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from mongostore.models.model import Model


LOG = logging.getLogger(__name__)


class ModelRegistry:
    """
    Maps model names to compiled models.

    Attributes:
        _models (Dict[str, Model]): Maps model names to the registered models.

    Methods:
        add: Register a model under its name.
        get: Look a model up by name.
        all: Return a read-only view of every registered model.
        names: List the registered names.
    """

    def __init__(self):
        self._models: Dict[str, Model] = {}

    def add(self, model: Model) -> bool:
        """
        Register a model under its name.

        Args:
            model: The compiled model to register.

        Returns:
            True if the model was registered, False if it has no name or the
            name is already taken.
        """
        if not isinstance(model, Model):
            LOG.debug(f"Refusing to register {model!r}: not a compiled model.")
            return False
        if not isinstance(model.name, str) or not model.name:
            LOG.debug(f"Refusing to register {model!r}: a model needs a non-empty name.")
            return False
        if model.name in self._models:
            LOG.error(f"Model {model.name} is already added")
            return False

        self._models[model.name] = model
        LOG.debug(f"Registered model: {model.name}")
        return True

    def get(self, name: str) -> Optional[Model]:
        """
        Look a model up by name.

        Args:
            name: The name of the model.

        Returns:
            The model, or None if no model has that name.
        """
        return self._models.get(name)

    def all(self) -> Mapping[str, Model]:
        """
        Return every registered model.

        Returns:
            A read-only view of the name to model mapping. It reflects later registrations.
        """
        return MappingProxyType(self._models)

    def names(self) -> List[str]:
        """
        List the registered model names.

        Returns:
            The names in registration order.
        """
        return list(self._models)

    def __contains__(self, name: str) -> bool:
        return name in self._models

    def __len__(self) -> int:
        return len(self._models)
