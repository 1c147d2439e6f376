"""Value types that can be loaded from a raw environment string.

A value type pairs a ``parse`` callable (raw string to typed value, raising
``ValueError`` on bad input) with a ``render`` callable (typed value back to
the text shown in error reports and generated documentation). Both loading and
documentation go through the same ``render`` so they never disagree on how a
default looks.

Most Python types are supported out of the box through pydantic's lax-mode
validation. Lax mode is forgiving with environment text: ``int`` accepts
``" 8080 "``, ``"8_080"`` and ``"8080.0"``, and ``bool`` accepts ``yes``,
``on`` and ``1`` as well as ``true``. Strings pydantic cannot coerce exactly
(``"abc"``, ``"8080.5"``, ``"maybe"``) are rejected. Wrap the target in a
:class:`ValueType` with a stricter parser when that matters.

Classes exposing a ``parse(raw)`` classmethod (see
:class:`config_loadr.environment.Environment`) are used as-is.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Annotated, Any, Callable, Generic, Protocol, TypeVar, runtime_checkable

from pydantic import Field, TypeAdapter, ValidationError

T = TypeVar("T")

U16 = Annotated[int, Field(ge=0, le=65_535)]
"""Unsigned 16-bit integer, the usual type for TCP ports."""


@runtime_checkable
class Parseable(Protocol):
    """Classes that know how to build themselves from an environment string."""

    @classmethod
    def parse(cls, raw: str) -> Any:  # pragma: no cover - protocol definition
        ...


def render_value(value: Any) -> str:
    """Return the canonical text form of ``value``."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return str(value.value)
    if isinstance(value, PurePath):
        return value.as_posix()
    return str(value)


@dataclass(frozen=True)
class ValueType(Generic[T]):
    """Parse/render pair for one field value type."""

    name: str
    parse: Callable[[str], T] = field(repr=False)
    render: Callable[[T], str] = field(default=render_value, repr=False)


def _type_name(target: Any) -> str:
    name = getattr(target, "__name__", None)
    if name:
        return str(name)
    origin = getattr(target, "__origin__", None)
    if origin is not None and getattr(target, "__metadata__", None) is not None:
        return _type_name(origin)
    return str(target).replace("typing.", "")


def _first_error_message(error: ValidationError) -> str:
    records = error.errors()
    if not records:
        return str(error)
    return str(records[0].get("msg", "invalid value"))


def _pydantic_parser(target: Any) -> Callable[[str], Any]:
    adapter = TypeAdapter(target)

    def parse(raw: str) -> Any:
        try:
            return adapter.validate_python(raw)
        except ValidationError as exc:
            raise ValueError(_first_error_message(exc)) from exc

    return parse


def value_type(target: Any) -> ValueType[Any]:
    """Resolve ``target`` into a :class:`ValueType`.

    ``target`` may already be a ``ValueType``, a class implementing
    :class:`Parseable`, or anything pydantic can validate from a string
    (``int``, ``bool``, ``Path``, ``U16``, ``Literal[...]``, enums, ...).
    """

    if isinstance(target, ValueType):
        return target
    if isinstance(target, type) and isinstance(target, Parseable):
        return ValueType(name=target.__name__, parse=target.parse)
    return ValueType(name=_type_name(target), parse=_pydantic_parser(target))


__all__ = [
    "Parseable",
    "U16",
    "ValueType",
    "render_value",
    "value_type",
]
