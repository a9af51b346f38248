"""
Public API for badge-validator

validate() is the single entry point for assertion records. ValidationService
gives direct access to every declared model.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from .config_loader import ConfigLoader
from .registry import ModelRegistry, get_registry

logger = logging.getLogger(__name__)

STATUS_OKAY = "okay"
STATUS_INVALID = "invalid"


class ValidationService:
    """
    Main validation service class.

    Example:
        from badge_validator import ValidationService

        service = ValidationService()
        errors = service.validate("badge", badge_data)
        for entry in errors:
            for field, kind in entry.items():
                print(f"{field}: {kind}")
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize validation service.

        Args:
            config_path: Optional alternative models.yaml. The bundled config
                and the process-wide registry are used when omitted.

        Raises:
            RuntimeError: If the config file cannot be loaded
            ModelDefinitionError: If the config declares invalid models
        """
        if config_path is None:
            self.registry = get_registry()
        else:
            self.registry = ModelRegistry(ConfigLoader(config_path))
        self.evaluate_assertion = self.registry.entry_point["evaluate_assertion"]

    def validate(
        self, model_name: str, record: Optional[Mapping[str, Any]]
    ) -> List[Dict[str, str]]:
        """
        Validate a record against a declared model.

        Args:
            model_name: Declared model name (case-insensitive, e.g. "badge")
            record: Mapping of field name to raw value

        Returns:
            List of {field: kind} entries; empty when the record is accepted

        Raises:
            UnknownModelError: If model_name is not declared
        """
        return self.registry.get(model_name).errors(record)

    def batch_validate(
        self, model_name: str, records: List[Optional[Mapping[str, Any]]]
    ) -> List[List[Dict[str, str]]]:
        """Validate several records against one model; results follow input order."""
        model = self.registry.get(model_name)
        return [model.errors(record) for record in records]

    def discover_models(self) -> Dict[str, Dict[str, Any]]:
        """
        Describe every declared model.

        Returns:
            Dict mapping model name to field name to
            {"required": bool, "validators": [{"validator": name, ...}]}
        """
        return self.registry.describe()

    def validate_assertion(self, record: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """
        Gate an assertion record.

        Unless entry_point.evaluate_assertion is enabled in the config, this
        always answers okay without looking at the record.

        Returns:
            {"status": "okay" | "invalid", "error": [{field: kind}, ...]}
        """
        if not self.evaluate_assertion:
            return {"status": STATUS_OKAY, "error": []}

        errors = self.registry.get("Assertion").errors(record)
        if errors:
            logger.debug(f"Assertion rejected: {errors}")
            return {"status": STATUS_INVALID, "error": errors}
        return {"status": STATUS_OKAY, "error": []}


_service: Optional[ValidationService] = None


def _get_service() -> ValidationService:
    global _service
    if _service is None:
        _service = ValidationService()
    return _service


def validate(assertion: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Validate an assertion record.

    Returns:
        {"status": str, "error": list}. With the bundled config this is always
        {"status": "okay", "error": []}.
    """
    return _get_service().validate_assertion(assertion)
