"""Resolve individual configuration fields against an environment snapshot."""
from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from config_loadr.errors import InvalidValue, MissingEnvVar
from config_loadr.field import ConfigField, FieldMetadata, Policy
from config_loadr.logger import get_logger, mask
from config_loadr.snapshot import snapshot
from config_loadr.value_types import value_type

Lookup = Callable[[str], Optional[str]]

log = get_logger(__name__)


def lookup_from(environ: Optional[Mapping[str, str]] = None) -> Lookup:
    """Return a lookup function reading a frozen copy of ``environ``.

    ``None`` snapshots ``os.environ`` at call time.
    """

    frozen = snapshot(environ)
    return frozen.get


def load_field(metadata: FieldMetadata, lookup: Lookup) -> ConfigField[Any]:
    """Resolve one field according to ``metadata.policy``.

    Raises :class:`MissingEnvVar` when a required variable is absent and
    :class:`InvalidValue` when a present value fails to parse, whatever the
    policy and whatever exception the parser raised.
    """

    raw = lookup(metadata.key)
    if raw is None:
        if metadata.policy is Policy.REQUIRED:
            log.debug("{} is missing", metadata.key)
            raise MissingEnvVar(metadata)
        if metadata.policy is Policy.DEFAULTED:
            log.debug("{} not set, using default", metadata.key)
            return ConfigField(metadata, metadata.example_or_default)
        log.debug("{} not set, leaving empty", metadata.key)
        return ConfigField(metadata, None)

    try:
        value = metadata.value_type.parse(raw)
    except Exception as exc:
        # any parser failure, not just ValueError, marks the value invalid
        cause = str(exc) or type(exc).__name__
        log.debug(
            "{} has invalid value {!r}: {}", metadata.key, mask(metadata.key, raw), cause
        )
        raise InvalidValue(metadata, raw, cause) from exc
    log.debug("{} resolved from environment", metadata.key)
    return ConfigField(metadata, value)


def _metadata(
    policy: Policy,
    target: Any,
    key: str,
    description: str,
    example_or_default: Any,
) -> FieldMetadata:
    return FieldMetadata(
        key=key,
        description=description,
        policy=policy,
        example_or_default=example_or_default,
        value_type=value_type(target),
    )


def env_parse(
    target: Any,
    key: str,
    description: str,
    example: Any = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Any:
    """Parse ``key`` as ``target``, returning the bare value."""

    metadata = _metadata(Policy.REQUIRED, target, key, description, example)
    return load_field(metadata, lookup_from(environ)).value


def load_required(
    target: Any,
    key: str,
    description: str,
    example: Any,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> ConfigField[Any]:
    metadata = _metadata(Policy.REQUIRED, target, key, description, example)
    return load_field(metadata, lookup_from(environ))


def load_with_default(
    target: Any,
    key: str,
    description: str,
    default: Any,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> ConfigField[Any]:
    """Load ``key``, falling back to ``default`` only when it is unset."""

    metadata = _metadata(Policy.DEFAULTED, target, key, description, default)
    return load_field(metadata, lookup_from(environ))


def load_optional(
    target: Any,
    key: str,
    description: str,
    example: Any = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> ConfigField[Any]:
    """Load ``key`` as ``None`` when unset; a present but bad value still fails."""

    metadata = _metadata(Policy.OPTIONAL, target, key, description, example)
    return load_field(metadata, lookup_from(environ))


__all__ = [
    "Lookup",
    "env_parse",
    "load_field",
    "load_optional",
    "load_required",
    "load_with_default",
    "lookup_from",
]
