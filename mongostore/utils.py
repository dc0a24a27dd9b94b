##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
Module for project-wide utility functions.
"""
import logging
import os
from copy import deepcopy
from typing import Any, Dict, List

import yaml


LOG = logging.getLogger(__name__)

SKIPPED_DIRECTORIES = ("__pycache__",)


def load_yaml(filepath: str) -> Dict:
    """
    Safely read a YAML file and return its contents.

    Args:
        filepath: The file path to the YAML file to be read.

    Returns:
        A dict representing the contents of the YAML file.
    """
    with open(filepath, "r") as _file:
        return yaml.safe_load(_file)


def get_yaml_var(entry: Dict[str, Any], var: str, default: Any) -> Any:
    """
    Retrieve the value associated with a specified key from a YAML dictionary.

    Args:
        entry: A dictionary representing the contents of a YAML file.
        var: The key or attribute name to retrieve from the entry.
        default: The default value to return if the key or attribute is not found.

    Returns:
        The value associated with `var` in the entry, or `default` if not found.
    """
    try:
        return entry[var]
    except (TypeError, KeyError):
        try:
            return getattr(entry, var)
        except AttributeError:
            return default


def dict_deep_update(dict_a: Dict, dict_b: Dict) -> Dict:
    """
    Recursively merges `dict_b` into a copy of `dict_a`.

    Nested dictionaries are merged key by key. Any other value in `dict_b`
    replaces the one in `dict_a`, lists included. Neither argument is modified.

    Args:
        dict_a: The dictionary holding the base values.
        dict_b: The dictionary whose values win on conflict.

    Returns:
        A new dictionary holding the merge of both.
    """
    merged = deepcopy(dict_a)
    if not isinstance(dict_b, dict):
        LOG.warning(f"Problem with dict_deep_update: '{dict_b}' is not a dict. Ignoring this merge call.")
        return merged

    for key, val in dict_b.items():
        if isinstance(merged.get(key), dict) and isinstance(val, dict):
            merged[key] = dict_deep_update(merged[key], val)
        else:
            merged[key] = deepcopy(val)
    return merged


def resolve_path(path: str, root: str) -> str:
    """
    Expand a path and anchor it to `root` if it's relative.

    Args:
        path: The path to resolve. User directory shortcuts (`~`) and
            environment variables are expanded.
        root: The directory relative paths are resolved against.

    Returns:
        An absolute, normalized path.
    """
    path = os.path.expandvars(os.path.expanduser(path))
    if not os.path.isabs(path):
        path = os.path.join(root, path)
    return os.path.normpath(path)


def read_directory(dirpath: str, ext: str) -> List[str]:
    """
    Recursively list every file under `dirpath` with the given extension.

    Hidden directories, `__pycache__` and package `__init__` files are skipped.
    A directory that doesn't exist yields an empty list.

    Args:
        dirpath: The directory to walk.
        ext: The extension to match, with or without the leading dot.

    Returns:
        The sorted list of absolute file paths that were found.
    """
    if not ext.startswith("."):
        ext = f".{ext}"

    if not os.path.isdir(dirpath):
        LOG.debug(f"'{dirpath}' is not a directory, nothing to read.")
        return []

    found = []
    for root, dirs, files in os.walk(dirpath):
        dirs[:] = [d for d in dirs if not d.startswith(".") and d not in SKIPPED_DIRECTORIES]
        for filename in files:
            if filename.endswith(ext) and filename != f"__init__{ext}":
                found.append(os.path.join(root, filename))
    return sorted(found)


def decapitalize(name: str) -> str:
    """
    Lowercase the first character of `name`, leaving the rest untouched.

    Args:
        name: The string to decapitalize, e.g. `UserAccount`.

    Returns:
        The decapitalized string, e.g. `userAccount`.
    """
    return name[:1].lower() + name[1:]
