##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
This module locates and reads application configuration files.

Store settings live under the `store` key of an `app.yaml`, one section per
store name:

    store:
      mongo:
        hostname: localhost
        database: app
        path:
          models: app/models
"""
import logging
import os
from typing import Any, Dict

from mongostore import PUBLIC_NAME
from mongostore.config.config_filepaths import APP_FILENAME, MONGOSTORE_HOME
from mongostore.utils import get_yaml_var, load_yaml


LOG: logging.Logger = logging.getLogger(__name__)


def load_config(filepath: str) -> Dict:
    """
    Reads a YAML configuration file and returns its contents as a dictionary.

    Args:
        filepath (str): The path to the YAML configuration file.

    Returns:
        A dictionary containing the contents of the YAML file or None if file doesn't exist.
    """
    if not os.path.isfile(filepath):
        LOG.info(f"No app config file at {filepath}")
        return None
    LOG.info(f"Reading app config from file {filepath}")
    return load_yaml(filepath)


def find_config_file(path: str = None) -> str:
    """
    Locate the application configuration file (`app.yaml`).

    If no directory is provided, the current working directory is checked
    first and the `MONGOSTORE_HOME` directory second. If a `path` is
    explicitly provided, only that directory is checked.

    Args:
        path (str, optional): A specific directory to look for `app.yaml`.

    Returns:
        The full path to the `app.yaml` file if found, otherwise `None`.
    """
    if path is None:
        local_app = os.path.join(os.getcwd(), APP_FILENAME)
        if os.path.isfile(local_app):
            return local_app

        path_app = os.path.join(MONGOSTORE_HOME, APP_FILENAME)
        if os.path.isfile(path_app):
            return path_app

        return None

    app_path = os.path.join(path, APP_FILENAME)
    if os.path.exists(app_path):
        return app_path

    return None


def load_store_config(filepath: str, name: str = PUBLIC_NAME) -> Dict[str, Any]:
    """
    Read the settings of one store out of an `app.yaml` file.

    Args:
        filepath: The path to the YAML configuration file.
        name: The store whose section should be returned.

    Returns:
        The raw settings for the store, ready to be handed to `MongoStore.init`.
        An empty dictionary if the file or the section doesn't exist.
    """
    app_config = load_config(filepath)
    if not app_config:
        return {}

    store_settings = get_yaml_var(get_yaml_var(app_config, "store", {}), name, {})
    if not store_settings:
        LOG.warning(f"No 'store.{name}' section found in {filepath}")
        return {}
    return store_settings
