##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
This module merges caller-supplied store options with the defaults.

The input follows the layout applications already use for their store section:

    {
        "url": None,              # the full connection string, OR
        "hostname": "localhost",
        "port": 27017,
        "user": None,
        "password": None,
        "database": None,
        "path": {"models": "app/models"},   # a string or a list
        "options": {...},         # keyword options for the Mongo client
        "transaction_timeout": None,
    }

Nothing is validated here. Missing connection fields are reported when the
store connects.
"""
import logging
import os
from typing import Any, Dict, List

from mongostore.config import StoreConfig
from mongostore.config.config_filepaths import DEFAULT_MODELS_DIR
from mongostore.utils import dict_deep_update


LOG = logging.getLogger(__name__)

# Used only when the caller gives no options at all, caller options replace these wholesale
DEFAULT_OPTIONS: Dict[str, Any] = {
    "maxPoolSize": 15,  # Maintain up to 15 socket connections
    "connectTimeoutMS": 10000,  # Give up initial connection after 10 seconds
    "socketTimeoutMS": 45000,  # Close sockets after 45 seconds of inactivity
    "serverSelectionTimeoutMS": 10000,  # If no server is reachable, fail instead of waiting
    "retryWrites": True,
}

CONNECTION_FIELDS = ("url", "hostname", "port", "user", "password", "database", "transaction_timeout")
KNOWN_KEYS = CONNECTION_FIELDS + ("path", "options")


def get_default_settings(root: str) -> Dict[str, Any]:
    """
    Build the default settings of a store.

    Args:
        root: The application root the default models directory lives under.

    Returns:
        A dictionary with every recognized key set to its default.
    """
    return {
        "url": None,
        "hostname": "localhost",
        "port": 27017,
        "user": None,
        "password": None,
        "database": None,
        "path": {"models": os.path.normpath(os.path.join(root, DEFAULT_MODELS_DIR))},
        "transaction_timeout": None,
    }


def normalize_model_paths(models: Any) -> List[str]:
    """
    Coerce the `path.models` setting into a list of paths.

    Args:
        models: A single path, a list/tuple of paths, or None.

    Returns:
        The list of non-empty paths.
    """
    if models is None:
        return []
    if not isinstance(models, (list, tuple)):
        models = [models]
    return [str(model_path) for model_path in models if model_path]


def build_store_config(
    store_config: Dict[str, Any] = None, extra_model_paths: List[str] = None, root: str = None
) -> StoreConfig:
    """
    Merge caller-supplied settings over the defaults into a `StoreConfig`.

    Args:
        store_config: The caller's settings. Nested dictionaries are merged
            over the defaults key by key, except `options` which replaces
            `DEFAULT_OPTIONS` entirely when given.
        extra_model_paths: Paths registered before initialization. They're
            appended after the configured model paths.
        root: The application root. Defaults to the current working directory.

    Returns:
        The merged configuration.
    """
    store_config = store_config or {}
    root = root or os.getcwd()

    unknown = [key for key in store_config if key not in KNOWN_KEYS]
    if unknown:
        LOG.warning(f"Ignoring unknown store settings: {', '.join(sorted(unknown))}")

    merged = dict_deep_update(get_default_settings(root), store_config)

    options = store_config.get("options")
    merged_options = dict(DEFAULT_OPTIONS) if options is None else dict(options)

    path_settings = merged.get("path") or {}
    model_paths = normalize_model_paths(path_settings.get("models"))
    model_paths += normalize_model_paths(extra_model_paths)

    return StoreConfig(
        **{key: merged[key] for key in CONNECTION_FIELDS},
        model_paths=model_paths,
        options=merged_options,
    )
