import os
from collections.abc import Mapping

import yaml

from utils.logger import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Raised when a configuration file exists but cannot be parsed."""


class ConfigLoader:
    def __init__(self, config_file="settings.yaml"):
        self.config_file = config_file
        self.config = {}
        if config_file is not None and os.path.exists(config_file):
            with open(config_file, "r", encoding="utf-8") as f:
                try:
                    loaded = yaml.safe_load(f)
                except yaml.YAMLError as exc:
                    raise ConfigError(f"Invalid YAML in {config_file}: {exc}") from exc
            if loaded is None:
                loaded = {}
            if not isinstance(loaded, dict):
                logger.warning("Ignoring %s: top-level YAML value is not a mapping", config_file)
                loaded = {}
            self.config = loaded
        else:
            logger.info("Configuration file %s not found, using defaults", config_file)

    @classmethod
    def from_mapping(cls, mapping):
        """Build a loader around an already parsed mapping."""
        loader = cls(config_file=None)
        loader.config = dict(mapping or {})
        return loader

    def get(self, *keys, default=None):
        """
        Return the value found under the nested ``keys`` path.
        When part of the path is missing:
          - raise KeyError if no default was supplied
          - return the default otherwise
        """
        ref = self.config
        for key in keys:
            if isinstance(ref, Mapping) and key in ref:
                ref = ref[key]
            else:
                if default is not None:
                    return default
                raise KeyError(f"Configuration key {' -> '.join(keys)} not found and no default provided.")
        return ref

    def section(self, name):
        """Return ``name`` as a mapping, or an empty dict when absent or not a mapping."""
        value = self.config.get(name)
        return value if isinstance(value, Mapping) else {}
