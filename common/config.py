import json
from pathlib import Path
from typing import Dict, Any

from common.logging.logger import get_logger

logger = get_logger("config")

# Centralized default values for all config keys used across the codebase.
# Each entry: (type, default_value)
# Types: str, int, float, bool, None (any)
CONFIG_SCHEMA: Dict[str, tuple] = {
    # Paths
    "paths.logs_dir":                   (str,   "logs"),

    # Vote scoring
    "scoring.wilson_z":                 (float, 1.96),
    "scoring.prior_mean":               (float, 0.6),
    "scoring.prior_strength":           (int,   10),
    "scoring.min_stars":                (int,   1),
    "scoring.max_stars":                (int,   5),

    # Collection aggregation
    "aggregation.collection_weight":    (float, 0.7),

    # Ratings artifact
    "output.ratings_path":              (str,   "ratings.json"),
    "output.indent":                    (int,   2),

    # Display cache
    "cache.display_min_votes":          (int,   5),
}


class Config:
    _instance = None
    _config: Dict[str, Any] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _load_config(self):
        config_path = Path("config.json")
        if not config_path.exists():
            self._config = {}
            return

        with open(config_path, "r") as f:
            self._config = json.load(f)
        logger.info("Loaded configuration from config.json")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Gets a config value by dot-separated key.

        Lookup order:
        1. Value from config.json (if present and not None)
        2. Caller-provided default (if not None)
        3. Schema default from CONFIG_SCHEMA
        4. None
        """
        value = self._get_raw(key)

        # If found in config, return it
        if value is not None:
            return value

        # If caller provided an explicit default, use it
        if default is not None:
            return default

        # Fall back to schema default
        schema_entry = CONFIG_SCHEMA.get(key)
        if schema_entry is not None:
            return schema_entry[1]

        return None

    def validate(self) -> list:
        """
        Validates the loaded config against CONFIG_SCHEMA.

        Returns a list of warning strings for type mismatches.
        Does NOT raise -- config.json values always take precedence.
        """
        warnings = []
        for key, (expected_type, _default) in CONFIG_SCHEMA.items():
            if expected_type is None:
                continue
            value = self._get_raw(key)
            if value is None:
                continue
            # JSON has no int/float split; accept ints where floats are expected
            if expected_type is float and isinstance(value, int) and not isinstance(value, bool):
                continue
            if not isinstance(value, expected_type) or (
                expected_type is int and isinstance(value, bool)
            ):
                warnings.append(
                    f"Config '{key}': expected {expected_type.__name__}, "
                    f"got {type(value).__name__} ({value!r})"
                )
        if warnings:
            for w in warnings:
                logger.warning(w)
        return warnings

    def _get_raw(self, key: str) -> Any:
        """Gets value from config.json without schema fallback."""
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return None
            if value is None:
                return None
        return value


# Global accessor
config = Config()
