"""
badge-validator: Declarative field validation for badge records

This library provides:
- Composable validators (Pattern, MaxLength, ISODate, Email, URL)
- Field descriptors built with required() / optional()
- Immutable model definitions evaluated field by field
- The declared Assertion, Badge and Issuer models, loaded from models.yaml

Example:
    from badge_validator import Badge

    errors = Badge.errors({"name": "Cheese"})
    # [{"version": "missing"}, {"description": "missing"}, ...]
"""

from .api import ValidationService, validate
from .fields import FieldDescriptor, optional, required
from .model import ModelDefinition, evaluate
from .registry import Assertion, Badge, Issuer, UnknownModelError
from .validators import (
    URL,
    Email,
    ISODate,
    MaxLength,
    ModelDefinitionError,
    Pattern,
    ValidationError,
    Validator,
)

__version__ = "0.1.0"
__all__ = [
    "validate",
    "ValidationService",
    "evaluate",
    "ModelDefinition",
    "FieldDescriptor",
    "required",
    "optional",
    "Validator",
    "Pattern",
    "MaxLength",
    "ISODate",
    "Email",
    "URL",
    "ValidationError",
    "ModelDefinitionError",
    "UnknownModelError",
    "Assertion",
    "Badge",
    "Issuer",
]
