"""Model configuration loading and schema checking."""

import json
import logging
from importlib.resources import files
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from jsonschema import ValidationError as SchemaError
from jsonschema import validate

from .validators import ModelDefinitionError

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Loads the model declarations and entry point settings."""

    CONFIG_FILENAME = "models.yaml"
    SCHEMA_FILENAME = "models.schema.json"

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize config loader.

        The bundled models.yaml is used unless an explicit path is given.

        Args:
            config_path: Optional path to an alternative YAML config file

        Raises:
            RuntimeError: If the config file cannot be read or parsed
            ModelDefinitionError: If the config does not match the schema
        """
        if config_path is None:
            config_file = files("badge_validator").joinpath(self.CONFIG_FILENAME)
        else:
            config_file = Path(config_path)
        self.config_path = str(config_file)

        self.config = self._load_yaml(config_file)
        self._check_schema(self.config)

        logger.info(
            f"Loaded {len(self.config['models'])} model(s) from {self.config_path}"
        )

    def _load_yaml(self, config_file) -> Dict[str, Any]:
        """Load YAML file from disk or package resources."""
        try:
            with config_file.open("r") as f:
                return yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise RuntimeError(f"Failed to load config from {config_file}: {e}") from e

    def _check_schema(self, config: Any) -> None:
        """Validate the parsed config against the bundled JSON schema."""
        schema_file = files("badge_validator").joinpath(self.SCHEMA_FILENAME)
        with schema_file.open("r") as f:
            schema = json.load(f)

        try:
            validate(instance=config, schema=schema)
        except SchemaError as e:
            error_path = " -> ".join(str(p) for p in e.path) if e.path else "root"
            raise ModelDefinitionError(
                f"Invalid model config {self.config_path} at {error_path}: {e.message}"
            ) from e

    def get_models_config(self) -> Dict[str, Dict[str, Any]]:
        """Get the model declarations: model name -> field name -> field config."""
        return self.config["models"]

    def get_entry_point_config(self) -> Dict[str, Any]:
        """Get entry point settings, with defaults applied."""
        return entry_point_settings(self.config)


def entry_point_settings(config: Dict[str, Any]) -> Dict[str, Any]:
    """Read entry point settings from a parsed config dict, with defaults."""
    entry_point = config.get("entry_point") or {}
    return {"evaluate_assertion": entry_point.get("evaluate_assertion", False)}

