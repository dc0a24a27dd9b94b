##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
Schema descriptions produced by model definition files.

A model definition file is a Python module exposing `define`, a callable that
receives the `Schema` class and the `pymongo` module and returns a `Schema`:

    def define(Schema, pymongo):
        return Schema({"name": str, "email": {"type": str, "unique": True}})

A module may instead expose a `SchemaProvider` instance as `define`.

A `Schema` is purely structural. It describes the fields of a model for the
code and people reading it; Mongostore does not validate documents against it.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class Schema:
    """
    Structural description of a model's fields.

    Attributes:
        fields (Dict[str, Any]): Field names mapped to a type or a dictionary of field options.
        options (Dict[str, Any]): Schema-wide options. `collection` overrides the
            name of the collection documents are stored in.

    Methods:
        add: Add or replace fields on this schema.
        field_names: List the names of every field.
    """

    def __init__(self, fields: Dict[str, Any] = None, **options):
        """
        Args:
            fields: Field names mapped to a type or a dictionary of field options.
            **options: Schema-wide options such as `collection`.
        """
        self.fields: Dict[str, Any] = dict(fields or {})
        self.options: Dict[str, Any] = options

    def add(self, fields: Dict[str, Any]) -> "Schema":
        """
        Add or replace fields on this schema.

        Args:
            fields: Field names mapped to a type or a dictionary of field options.

        Returns:
            This schema, so calls can be chained.
        """
        self.fields.update(fields)
        return self

    def field_names(self) -> List[str]:
        """
        List the names of every field in this schema.

        Returns:
            The field names in definition order.
        """
        return list(self.fields)

    @property
    def collection(self) -> Optional[str]:
        """The collection name set through the `collection` option, if any."""
        return self.options.get("collection")

    def __repr__(self) -> str:
        return f"Schema(fields={self.field_names()!r}, options={self.options!r})"


class SchemaProvider(ABC):
    """
    Interface for model definitions written as classes instead of a `define` function.

    Methods:
        build: Produce the schema description of the model.
    """

    @abstractmethod
    def build(self, schema_builder: type) -> Schema:
        """
        Produce the schema description of the model.

        Args:
            schema_builder: The `Schema` class.

        Returns:
            The schema description.
        """
        raise NotImplementedError("Subclasses of `SchemaProvider` must implement a `build` method.")
