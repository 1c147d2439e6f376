"""Field metadata, loading policies and loaded configuration fields."""
from __future__ import annotations

import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

from config_loadr.errors import SchemaError
from config_loadr.value_types import ValueType, render_value, value_type

T = TypeVar("T")


class Policy(str, Enum):
    """How absence of an environment variable is handled."""

    REQUIRED = "required"
    DEFAULTED = "defaulted"
    OPTIONAL = "optional"


@dataclass(frozen=True)
class FieldMetadata:
    """Immutable description of one configuration field.

    ``example_or_default`` is illustrative for required and optional fields and
    is the actual fallback for defaulted ones.
    """

    key: str
    description: str
    policy: Policy
    example_or_default: Any = None
    value_type: ValueType[Any] = field(default_factory=lambda: value_type(str), compare=False)

    def __post_init__(self) -> None:
        if not self.key or not self.key.strip():
            raise SchemaError("configuration field key must be a non-empty string")
        if self.policy is Policy.DEFAULTED and self.example_or_default is None:
            raise SchemaError(f"{self.key}: defaulted fields must declare a default value")
        object.__setattr__(self, "description", self.description.strip())

    @property
    def required(self) -> bool:
        return self.policy is Policy.REQUIRED

    @property
    def has_default(self) -> bool:
        """``True`` when ``example_or_default`` is used as a runtime fallback."""

        return self.policy is Policy.DEFAULTED

    @property
    def default(self) -> Any:
        return self.example_or_default if self.has_default else None

    @property
    def default_or_example(self) -> str:
        """Example or default rendered as text, ``""`` when none was declared."""

        if self.example_or_default is None:
            return ""
        render = self.value_type.render if self.value_type else render_value
        return render(self.example_or_default)

    def as_assignment(self) -> Optional[str]:
        """Return ``KEY=value`` for the example/default, if any."""

        text = self.default_or_example
        if not text:
            return None
        return f"{self.key}={text}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "description": self.description,
            "default_or_example": self.default_or_example,
            "required": self.required,
            "policy": self.policy.value,
            "type": self.value_type.name,
        }


def _unwrap(other: Any) -> Any:
    return other._value if isinstance(other, ConfigField) else other


class ConfigField(Generic[T]):
    """A loaded configuration value together with its metadata.

    The field reads through to its value: equality and ordering, hashing,
    truthiness, formatting, arithmetic and numeric conversions (including use
    as an index) all behave as for the bare value.
    """

    __slots__ = ("_metadata", "_value")

    def __init__(self, metadata: FieldMetadata, value: T) -> None:
        object.__setattr__(self, "_metadata", metadata)
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ConfigField instances are read-only")

    @property
    def value(self) -> T:
        return self._value

    @property
    def metadata(self) -> FieldMetadata:
        return self._metadata

    @property
    def key(self) -> str:
        return self._metadata.key

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._value, name)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ConfigField):
            return self.key == other.key and self._value == other._value
        return self._value == other

    def __hash__(self) -> int:
        return hash(self._value)

    def __bool__(self) -> bool:
        return bool(self._value)

    def __str__(self) -> str:
        return str(self._value)

    def __format__(self, format_spec: str) -> str:
        return format(self._value, format_spec)

    def __lt__(self, other: Any) -> Any:
        return self._value < _unwrap(other)

    def __le__(self, other: Any) -> Any:
        return self._value <= _unwrap(other)

    def __gt__(self, other: Any) -> Any:
        return self._value > _unwrap(other)

    def __ge__(self, other: Any) -> Any:
        return self._value >= _unwrap(other)

    def __int__(self) -> int:
        return int(self._value)  # type: ignore[call-overload]

    def __float__(self) -> float:
        return float(self._value)  # type: ignore[arg-type]

    def __index__(self) -> int:
        return operator.index(self._value)

    def __neg__(self) -> Any:
        return -self._value

    def __abs__(self) -> Any:
        return abs(self._value)

    def __add__(self, other: Any) -> Any:
        return self._value + _unwrap(other)

    def __radd__(self, other: Any) -> Any:
        return other + self._value

    def __sub__(self, other: Any) -> Any:
        return self._value - _unwrap(other)

    def __rsub__(self, other: Any) -> Any:
        return other - self._value

    def __mul__(self, other: Any) -> Any:
        return self._value * _unwrap(other)

    def __rmul__(self, other: Any) -> Any:
        return other * self._value

    def __truediv__(self, other: Any) -> Any:
        return self._value / _unwrap(other)

    def __rtruediv__(self, other: Any) -> Any:
        return other / self._value

    def __floordiv__(self, other: Any) -> Any:
        return self._value // _unwrap(other)

    def __rfloordiv__(self, other: Any) -> Any:
        return other // self._value

    def __mod__(self, other: Any) -> Any:
        return self._value % _unwrap(other)

    def __rmod__(self, other: Any) -> Any:
        return other % self._value

    def __repr__(self) -> str:
        return f"ConfigField(key={self.key!r}, value={self._value!r})"


__all__ = ["ConfigField", "FieldMetadata", "Policy"]
