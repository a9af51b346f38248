"""
Model definitions and the evaluation procedure.

A ModelDefinition is a named, ordered mapping of field name to FieldDescriptor.
evaluate() walks the declared fields against a record and returns one error
entry per failing field:

    [{"recipient": "missing"}, {"evidence": "regexp"}]

Entries follow the field declaration order. An empty list means the record
was accepted.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from .fields import FieldDescriptor
from .validators import FAIL, ValidationError

logger = logging.getLogger(__name__)

MISSING = "missing"


class ModelDefinition:
    """Immutable named collection of field rules."""

    __slots__ = ("_name", "_fields")

    def __init__(self, name: str, fields: Mapping[str, FieldDescriptor]):
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_fields", MappingProxyType(dict(fields)))

    def __setattr__(self, key, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def name(self) -> str:
        return self._name

    @property
    def fields(self) -> Mapping[str, FieldDescriptor]:
        """Read-only view of the field table, in declaration order."""
        return self._fields

    def errors(self, record: Optional[Mapping[str, Any]] = None) -> List[Dict[str, str]]:
        """Evaluate a record against this model. See evaluate()."""
        return evaluate(self, record)

    def describe(self) -> Dict[str, Any]:
        """Return field metadata: required flag and validator configuration."""
        return {name: descriptor.describe() for name, descriptor in self._fields.items()}

    def __repr__(self):
        return f"ModelDefinition({self._name!r}, fields={list(self._fields)})"


def evaluate(
    definition: ModelDefinition, record: Optional[Mapping[str, Any]] = None
) -> List[Dict[str, str]]:
    """
    Evaluate a record against a model definition.

    For each declared field, in declaration order:
    - a required field whose value is falsy (absent, "", 0, False, None) is
      reported as "missing" and its validators are not run;
    - an optional field that is absent (or None) is skipped;
    - otherwise every validator runs in order, and the last failing
      validator's kind is reported for the field. A validator that raises
      ValidationError counts as a failure of that kind.

    Optional fields that are present are validated even when their value is
    falsy, so an empty string can still fail.

    Args:
        definition: Model to evaluate against
        record: Mapping of field name to raw value; None means empty

    Returns:
        List of single-key dicts mapping field name to error kind
    """
    provided = record or {}
    errors = []

    for name, descriptor in definition.fields.items():
        value = provided.get(name)
        kind = None

        if descriptor.required and not value:
            kind = MISSING
        elif value is not None:
            for validator in descriptor.validators:
                try:
                    status, failure = validator.check(value)
                except ValidationError as e:
                    status, failure = FAIL, e.kind
                if status == FAIL:
                    kind = failure

        if kind:
            errors.append({name: kind})

    logger.debug(
        f"Evaluated {definition.name}: {len(errors)} error(s) across "
        f"{len(definition.fields)} field(s)"
    )
    return errors
