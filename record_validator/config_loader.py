"""Configuration loading: bundled YAML config, optional override file, schema check."""

import time
from pathlib import Path
from typing import Any, Dict, Optional
from importlib.resources import files

import yaml
from jsonschema import Draft7Validator

from .errors import ConfigError

CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "tag_key": {"type": "string", "minLength": 1},
        "log_level": {
            "type": "string",
            "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        },
        "record_types": {
            "type": "object",
            "additionalProperties": {
                "type": "string",
                "pattern": r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)+$",
            },
        },
    },
    "additionalProperties": False,
}

DEFAULTS: Dict[str, Any] = {
    "tag_key": "validate",
    "log_level": "WARNING",
    "record_types": {},
}


class ConfigLoader:
    """Loads and checks validator configuration."""

    BUNDLED_CONFIG = "validator-config.yaml"

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            config_path: Path to a YAML config file. When omitted, the
                validator-config.yaml bundled in the package is used.

        Raises:
            ConfigError: If the file cannot be read, is not valid YAML, or
                does not match CONFIG_SCHEMA
        """
        if config_path is None:
            config_file = files("record_validator").joinpath(self.BUNDLED_CONFIG)
            self.config_path = str(config_file)
            with config_file.open("r") as f:
                raw = self._parse(f.read(), self.config_path)
        else:
            self.config_path = str(config_path)
            raw = self._load_yaml(self.config_path)

        self._check(raw)
        self.config = {**DEFAULTS, **raw}
        self.loaded_at = time.time()

    def _load_yaml(self, path: str) -> Dict[str, Any]:
        """Load YAML file from disk."""
        try:
            content = Path(path).read_text()
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}")
        return self._parse(content, path)

    def _parse(self, content: str, source: str) -> Dict[str, Any]:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {source}: {e}")
        # An empty file means "all defaults"
        return data if data is not None else {}

    def _check(self, data: Any) -> None:
        errors = sorted(Draft7Validator(CONFIG_SCHEMA).iter_errors(data), key=lambda e: list(e.path))
        if errors:
            first = errors[0]
            location = " -> ".join(str(p) for p in first.path) if first.path else "root"
            raise ConfigError(
                f"Config {self.config_path} failed validation at {location}: {first.message}"
            )

    def get_tag_key(self) -> str:
        return self.config["tag_key"]

    def get_log_level(self) -> str:
        return self.config["log_level"]

    def get_record_types(self) -> Dict[str, str]:
        """Get mapping of record type name to dotted import path."""
        return dict(self.config["record_types"])

    def get_config_age(self) -> float:
        """Seconds since the config was loaded."""
        return time.time() - self.loaded_at
