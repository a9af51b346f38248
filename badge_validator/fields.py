"""Field descriptors: a required flag plus an ordered tuple of validators."""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from .validators import Validator


@dataclass(frozen=True)
class FieldDescriptor:
    """Immutable rule set for one field of a model."""

    required: bool
    validators: Tuple[Validator, ...] = field(default_factory=tuple)

    def describe(self) -> Dict[str, Any]:
        return {
            "required": self.required,
            "validators": [v.describe() for v in self.validators],
        }


def required(*validators: Validator) -> FieldDescriptor:
    """Build a required field; validators run in the order given."""
    return FieldDescriptor(True, tuple(validators))


def optional(*validators: Validator) -> FieldDescriptor:
    """Build an optional field; validators run in the order given."""
    return FieldDescriptor(False, tuple(validators))
