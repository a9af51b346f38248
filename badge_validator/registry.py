"""
Model Registry - declared models, built once from configuration.

The registry reads the model declarations from models.yaml, turns each field
entry into a FieldDescriptor and each model into an immutable
ModelDefinition. Definitions are built once per process and never changed.

## Configuration Format

```yaml
models:
  Issuer:
    name:
      required: true
      validators:
        - max_length: 128
    contact:
      required: false
      validators: [email]
```

A validator entry is a bare registered name, or a single-key mapping of name
to constructor argument.

## Usage

```python
from badge_validator.registry import get_registry

badge = get_registry().get("badge")
errors = badge.errors({"name": "Cheese"})
```

**Testing:**
```python
from badge_validator.registry import reset_registry, ModelRegistry

reset_registry()
registry = ModelRegistry(ConfigLoader("test-models.yaml"))
```
"""

import logging
from typing import Any, Dict, List, Optional

from .config_loader import ConfigLoader, entry_point_settings
from .fields import FieldDescriptor
from .model import ModelDefinition
from .validators import ModelDefinitionError, Validator, build_validator

logger = logging.getLogger(__name__)


class UnknownModelError(KeyError):
    """Raised when looking up a model that was never declared."""


class ModelRegistry:
    """Maps model names to their ModelDefinitions."""

    def __init__(self, config):
        """
        Initialize model registry from configuration.

        Args:
            config: Either a dict (the parsed models.yaml) or a ConfigLoader

        Raises:
            ModelDefinitionError: If any declaration is invalid
        """
        if hasattr(config, "get_models_config"):
            models_config = config.get_models_config()
            self.entry_point = config.get_entry_point_config()
        elif isinstance(config, dict):
            models_config = config.get("models", {})
            self.entry_point = entry_point_settings(config)
        else:
            raise ValueError("config must be a dict or ConfigLoader instance")

        self._models: Dict[str, ModelDefinition] = {}
        self._lookup: Dict[str, str] = {}
        for model_name, fields_config in models_config.items():
            self._add(model_name, fields_config or {})

        logger.info(f"Model registry built: {', '.join(self._models) or 'no models'}")

    def _add(self, model_name: str, fields_config: Dict[str, Any]) -> None:
        key = model_name.lower()
        if key in self._lookup:
            raise ModelDefinitionError(f"Model '{model_name}' declared more than once")

        fields = {
            field_name: self._build_field(model_name, field_name, field_config)
            for field_name, field_config in fields_config.items()
        }
        self._models[model_name] = ModelDefinition(model_name, fields)
        self._lookup[key] = model_name

    def _build_field(
        self, model_name: str, field_name: str, field_config: Dict[str, Any]
    ) -> FieldDescriptor:
        validators = []
        for entry in field_config.get("validators") or []:
            try:
                validators.append(self._build_validator(entry))
            except ModelDefinitionError as e:
                raise ModelDefinitionError(f"{model_name}.{field_name}: {e}") from e
        return FieldDescriptor(bool(field_config.get("required")), tuple(validators))

    def _build_validator(self, entry: Any) -> Validator:
        if isinstance(entry, str):
            return build_validator(entry)
        if isinstance(entry, dict) and len(entry) == 1:
            (name, argument), = entry.items()
            return build_validator(name, argument)
        raise ModelDefinitionError(f"Invalid validator entry: {entry!r}")

    def get(self, name: str) -> ModelDefinition:
        """
        Look up a model by name (case-insensitive).

        Raises:
            UnknownModelError: If no model with that name is declared
        """
        model_name = self._lookup.get(name.lower())
        if model_name is None:
            raise UnknownModelError(
                f"Unknown model '{name}'. Declared models: {', '.join(self._models)}"
            )
        return self._models[model_name]

    def names(self) -> List[str]:
        """Return declared model names in declaration order."""
        return list(self._models)

    def describe(self) -> Dict[str, Dict[str, Any]]:
        """Return field metadata for every declared model."""
        return {name: model.describe() for name, model in self._models.items()}

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._lookup


_registry: Optional[ModelRegistry] = None


def get_registry(config_loader: Optional[ConfigLoader] = None) -> ModelRegistry:
    """Get or initialize the singleton ModelRegistry (bundled config by default)."""
    global _registry
    if _registry is None:
        _registry = ModelRegistry(config_loader or ConfigLoader())
    return _registry


def reset_registry():
    """Reset the singleton registry (for testing)."""
    global _registry
    _registry = None


Assertion = get_registry().get("Assertion")
Badge = get_registry().get("Badge")
Issuer = get_registry().get("Issuer")
