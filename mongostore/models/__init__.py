##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
The `models` package discovers, compiles and registers data models.

Modules:
    loader.py: Turns model definition files into compiled models.
    model.py: Defines `Model`, a named handle on a collection.
    registry.py: Defines `ModelRegistry`, the name to model mapping.
    schema.py: Defines `Schema` and the `SchemaProvider` interface model files use.
"""

from mongostore.models.model import Model
from mongostore.models.registry import ModelRegistry
from mongostore.models.schema import Schema, SchemaProvider


__all__ = ("Model", "ModelRegistry", "Schema", "SchemaProvider")
