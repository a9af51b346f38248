"""
Field validators.

Each validator is an immutable value carrying its own configuration. A
validator can be used two ways:

- check(value) returns a (status, kind) tuple: ("PASS", "") when the value is
  accepted, ("FAIL", kind) when it is rejected. The model evaluation loop uses
  this form.
- Calling the validator directly returns None on success and raises
  ValidationError(kind) on failure.

Failure kinds: "regexp", "isodate", "length".
"""

import re
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any, Dict, Pattern as RePattern, Tuple, Union

PASS = "PASS"
FAIL = "FAIL"

# Registry of validator classes: configuration name -> class
VALIDATORS: Dict[str, type] = {}


class ValidationError(Exception):
    """Raised by a validator called directly when its value is rejected."""

    def __init__(self, kind: str):
        super().__init__(kind)
        self.kind = kind


class ModelDefinitionError(ValueError):
    """Raised when a model or validator declaration is invalid."""


def register(name: str):
    """Decorator to register a validator class under a configuration name."""
    def decorator(cls):
        VALIDATORS[name] = cls
        cls.name = name
        return cls
    return decorator


class Validator(ABC):
    """Abstract base class for all validators."""

    name = ""
    kind = ""

    @abstractmethod
    def check(self, value: Any) -> Tuple[str, str]:
        """
        Check a single raw value.

        Returns:
            ("PASS", "") if accepted, ("FAIL", kind) otherwise
        """

    def describe(self) -> Dict[str, Any]:
        """Return the validator name and its configuration."""
        return {"validator": self.name}

    def __call__(self, value: Any) -> None:
        status, kind = self.check(value)
        if status == FAIL:
            raise ValidationError(kind)

    def _config(self) -> tuple:
        return ()

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._config() == other._config()

    def __hash__(self):
        return hash((type(self), self._config()))

    def __repr__(self):
        args = ", ".join(repr(a) for a in self._config())
        return f"{type(self).__name__}({args})"

    def _fail(self) -> Tuple[str, str]:
        return (FAIL, self.kind)


@register("pattern")
class Pattern(Validator):
    """
    Accepts values whose string form contains a match for the regex.

    String patterns are compiled with re.ASCII, so \\d, \\w and case folding
    only cover ASCII characters.
    """

    kind = "regexp"

    def __init__(self, regex: Union[str, RePattern], flags: int = 0):
        if isinstance(regex, str):
            try:
                regex = re.compile(regex, flags | re.ASCII)
            except re.error as e:
                raise ModelDefinitionError(f"Invalid pattern {regex!r}: {e}") from e
        self._regex = regex

    @property
    def regex(self) -> RePattern:
        return self._regex

    def check(self, value: Any) -> Tuple[str, str]:
        if self._regex.search(str(value)) is None:
            return self._fail()
        return (PASS, "")

    def describe(self) -> Dict[str, Any]:
        return {"validator": self.name, "pattern": self._regex.pattern}

    def _config(self) -> tuple:
        return (self._regex.pattern, self._regex.flags)


@register("max_length")
class MaxLength(Validator):
    """
    Accepts strings no longer than the bound.

    The input must expose a length; values that don't (None, numbers) are
    rejected rather than raising.
    """

    kind = "length"

    def __init__(self, bound: int):
        if isinstance(bound, bool) or not isinstance(bound, int) or bound < 0:
            raise ModelDefinitionError(
                f"MaxLength bound must be a non-negative integer, got {bound!r}"
            )
        self._bound = bound

    @property
    def bound(self) -> int:
        return self._bound

    def check(self, value: Any) -> Tuple[str, str]:
        try:
            length = len(value)
        except TypeError:
            return self._fail()
        if length > self._bound:
            return self._fail()
        return (PASS, "")

    def describe(self) -> Dict[str, Any]:
        return {"validator": self.name, "max_length": self._bound}

    def _config(self) -> tuple:
        return (self._bound,)


@register("isodate")
class ISODate(Validator):
    """Accepts ISO-8601 dates (YYYY-MM-DD) and date-times."""

    kind = "isodate"

    def check(self, value: Any) -> Tuple[str, str]:
        if not isinstance(value, str):
            return self._fail()
        try:
            if "T" in value or " " in value:
                datetime.fromisoformat(value.replace("Z", "+00:00"))
            else:
                date.fromisoformat(value)
        except ValueError:
            return self._fail()
        return (PASS, "")


# More or less RFC 2822. The final label may be a single character.
EMAIL_PATTERN = (
    r"[a-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z0-9](?:[a-z0-9-]*[a-z0-9])?"
)


@register("email")
class Email(Pattern):
    """Accepts values containing an email-shaped address (case-insensitive)."""

    def __init__(self):
        super().__init__(EMAIL_PATTERN, re.IGNORECASE)

    def describe(self) -> Dict[str, Any]:
        return {"validator": self.name}

    def _config(self) -> tuple:
        return ()


ABSOLUTE_URL_PATTERN = r"^(https?)://[^\s/$.?#].[^\s]*\Z"
RELATIVE_URL_PATTERN = r"^/\S+\Z"


@register("url")
class URL(Validator):
    """Accepts absolute http(s) URLs, falling back to root-relative paths."""

    kind = "regexp"

    def __init__(self):
        self._absolute = Pattern(ABSOLUTE_URL_PATTERN)
        self._relative = Pattern(RELATIVE_URL_PATTERN)

    def check(self, value: Any) -> Tuple[str, str]:
        result = self._absolute.check(value)
        if result[0] == PASS:
            return result
        return self._relative.check(value)


def build_validator(name: str, argument: Any = None) -> Validator:
    """
    Construct a registered validator from its configuration entry.

    Args:
        name: Registered validator name (e.g. "max_length")
        argument: Constructor argument (pattern string, length bound); None
            for validators that take no configuration

    Returns:
        Configured Validator instance

    Raises:
        ModelDefinitionError: If the name is unknown or the argument invalid
    """
    cls = VALIDATORS.get(name)
    if cls is None:
        raise ModelDefinitionError(
            f"Unknown validator '{name}'. Known validators: {', '.join(sorted(VALIDATORS))}"
        )
    try:
        if argument is None:
            return cls()
        return cls(argument)
    except TypeError as e:
        raise ModelDefinitionError(f"Invalid configuration for validator '{name}': {e}") from e
