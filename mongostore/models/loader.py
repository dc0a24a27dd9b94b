##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
Loader turning model definition files into compiled models.

Model files are authored independently of each other, so a broken file never
stops the others from loading: every failure is logged and the file skipped.
The model name is the file's base name with its first character lowercased,
i.e. `app/models/UserAccount.py` is registered as `userAccount`.
"""

import importlib.util
import logging
import os
import sys
import traceback
from types import ModuleType
from typing import TYPE_CHECKING, Any, List, Optional

import pymongo

from mongostore.exceptions import ModelLoadError
from mongostore.models.model import Model
from mongostore.models.schema import Schema, SchemaProvider
from mongostore.utils import decapitalize, read_directory, resolve_path


if TYPE_CHECKING:
    from mongostore.store import MongoStore


LOG = logging.getLogger(__name__)

MODEL_FILE_EXTENSION = ".py"
DEFINITION_ATTRIBUTE = "define"
MODEL_MODULE_PREFIX = "mongostore_model_"


def get_model_name(filepath: str) -> str:
    """
    Derive the model name of a definition file.

    Args:
        filepath: The path to the definition file.

    Returns:
        The file's base name without extension, first character lowercased.
    """
    base_name = os.path.splitext(os.path.basename(filepath))[0]
    return decapitalize(base_name)


class ModelLoader:
    """
    Resolves paths to model definition files and compiles them.

    Attributes:
        root (str): The directory relative model paths are resolved against.
        store (MongoStore): The store compiled models are bound to.

    Methods:
        load: Compile every model found at a file or directory path.
        get_candidate_files: Resolve a path to the definition files it holds.
        compile_file: Compile a single definition file.
    """

    def __init__(self, root: str = None, store: "MongoStore" = None):
        """
        Args:
            root: The directory relative model paths are resolved against.
                Defaults to the current working directory.
            store: The store compiled models are bound to.
        """
        self.root = root or os.getcwd()
        self.store = store

    def get_candidate_files(self, path: str) -> List[str]:
        """
        Resolve a path to the definition files it holds.

        Args:
            path: A definition file, or a directory that's searched recursively.

        Returns:
            The absolute paths of the candidate definition files.
        """
        path = resolve_path(path, self.root)
        if os.path.isfile(path):
            return [path]
        return read_directory(path, MODEL_FILE_EXTENSION)

    def load(self, path: str) -> List[Model]:
        """
        Compile every model found at `path`.

        Failures are logged and the offending file skipped.

        Args:
            path: A definition file or a directory of them.

        Returns:
            The compiled models, in file order.
        """
        models = []
        for filepath in self.get_candidate_files(path):
            try:
                model = self.compile_file(filepath)
            except ModelLoadError as exc:
                LOG.error(str(exc))
                continue
            if model is not None:
                models.append(model)
        LOG.debug(f"Loaded {len(models)} model(s) from {path}")
        return models

    def compile_file(self, filepath: str) -> Optional[Model]:
        """
        Compile a single definition file into a model.

        Args:
            filepath: The path to the definition file.

        Returns:
            The compiled model, or None if the file doesn't define one.

        Raises:
            ModelLoadError: If the file can't be imported, its definition isn't
                callable, or the definition doesn't produce a `Schema`.
        """
        model_name = get_model_name(filepath)
        module = self._import_file(model_name, filepath)

        definition = getattr(module, DEFINITION_ATTRIBUTE, None)
        if definition is None:
            LOG.debug(f"Model file [{filepath}] does not define a model, skipping it.")
            return None

        schema = self._build_schema(definition, filepath)
        return Model(model_name, schema, store=self.store)

    def _import_file(self, model_name: str, filepath: str) -> ModuleType:
        """
        Import a definition file as a standalone module.

        The module is registered in `sys.modules` as `mongostore_model_<name>`,
        so classes defined in model files can be pickled and introspected like
        any other. Loading another file for the same model name replaces the
        earlier module there.

        Args:
            model_name: The name of the model the file defines.
            filepath: The path to the definition file.

        Returns:
            The imported module.

        Raises:
            ModelLoadError: If the file could not be imported.
        """
        spec = importlib.util.spec_from_file_location(f"{MODEL_MODULE_PREFIX}{model_name}", filepath)
        if spec is None or spec.loader is None:
            raise ModelLoadError(f"Could not import model: [{filepath}]")

        module = importlib.util.module_from_spec(spec)
        sys.modules[spec.name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            sys.modules.pop(spec.name, None)
            LOG.debug(traceback.format_exc())
            raise ModelLoadError(f"Could not import model: [{filepath}]\n{exc!r}", source=exc) from exc
        return module

    def _build_schema(self, definition: Any, filepath: str) -> Schema:
        """
        Run a model definition and check it produced a schema.

        Args:
            definition: The `define` attribute of a model file.
            filepath: The path to the definition file, for error messages.

        Returns:
            The schema description.

        Raises:
            ModelLoadError: If the definition isn't usable or doesn't return a `Schema`.
        """
        try:
            if isinstance(definition, SchemaProvider):
                schema = definition.build(Schema)
            elif callable(definition):
                schema = definition(Schema, pymongo)
            else:
                raise ModelLoadError(
                    f"Model: [{filepath}] must define a function define(Schema, pymongo) that returns a schema object."
                )
        except ModelLoadError:
            raise
        except Exception as exc:  # pylint: disable=broad-exception-caught
            LOG.debug(traceback.format_exc())
            raise ModelLoadError(f"Model: [{filepath}] failed to build its schema\n{exc!r}", source=exc) from exc

        if not isinstance(schema, Schema):
            raise ModelLoadError(f"Model: [{filepath}] must return a schema object.")
        return schema
