##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
Used to store the store configuration.

The `config` package merges caller-supplied connection options with the
documented defaults, builds Mongo connection strings, and reads the optional
`app.yaml` file operators can keep their settings in.

Modules:
    config_filepaths.py: Constants for the paths configuration files live at.
    configfile.py: Locates and reads `app.yaml` files.
    connection.py: Builds the Mongo connection string from structured fields.
    store_config.py: Holds the defaults and the merge logic producing a `StoreConfig`.
"""
import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import quote


LOG = logging.getLogger(__name__)

MASKED_PASSWORD = "******"

# Process-wide slots the merged configuration of each store is published under
_PUBLISHED_CONFIGS: Dict[str, "StoreConfig"] = {}


@dataclass
class StoreConfig:  # pylint: disable=R0902
    """
    The merged configuration of a single store.

    Either `url` is set, or `database` and `hostname` are used to derive it
    when the store connects. Apart from caching that derived url, a
    `StoreConfig` isn't modified once the store is initialized.

    Attributes:
        url: The full connection string, if the caller gave one.
        hostname: The Mongo server host.
        port: The Mongo server port.
        user: The user to authenticate as.
        password: The password of `user`.
        database: The database models are stored in.
        model_paths: Files or directories model definitions are loaded from.
        options: Keyword options handed to the Mongo client.
        transaction_timeout: Seconds a unit-of-work may run before it's rolled back.
            None means no limit.
    """

    url: Optional[str] = None
    hostname: Optional[str] = "localhost"
    port: int = 27017
    user: Optional[str] = None
    password: Optional[str] = None
    database: Optional[str] = None
    model_paths: List[str] = field(default_factory=list)
    options: Dict[str, Any] = field(default_factory=dict)
    transaction_timeout: Optional[float] = None

    def to_dict(self, include_password: bool = True) -> Dict[str, Any]:
        """
        Convert this config to a dictionary.

        Args:
            include_password: If False, the password is masked, both in the
                `password` field and inside `url`.

        Returns:
            A dictionary of every field in this config.
        """
        config_dict = asdict(self)
        if not include_password and self.password:
            config_dict["password"] = MASKED_PASSWORD
            if self.url:
                # A derived url holds the percent-escaped password
                url = self.url.replace(f":{self.password}@", f":{MASKED_PASSWORD}@")
                config_dict["url"] = url.replace(f":{quote(str(self.password), safe='')}@", f":{MASKED_PASSWORD}@")
        return config_dict

    def format(self, include_password: bool = False) -> str:
        """
        Returns a formatted string representation of the config.

        Args:
            include_password: If False, the password is masked.

        Returns:
            A string listing every field of this config.
        """
        items = (f"  {k}: {v!r}" for k, v in self.to_dict(include_password=include_password).items())
        return "config:\n" + "\n".join(items)

    def __str__(self) -> str:
        return self.format(include_password=False)


def publish_config(slot: str, config: StoreConfig):
    """
    Publish a merged config under a process-wide slot for introspection.

    Args:
        slot: The name of the slot, e.g. `store.mongo`.
        config: The config to publish. A previous config in the slot is replaced.
    """
    if slot in _PUBLISHED_CONFIGS:
        LOG.debug(f"Replacing the config published under '{slot}'.")
    _PUBLISHED_CONFIGS[slot] = config


def get_published_config(slot: str) -> Optional[StoreConfig]:
    """
    Retrieve the config published under `slot`.

    Args:
        slot: The name of the slot, e.g. `store.mongo`.

    Returns:
        The published config or None if nothing was published there.
    """
    return _PUBLISHED_CONFIGS.get(slot)
