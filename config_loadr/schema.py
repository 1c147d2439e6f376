"""Assemble a whole configuration from field declarations.

Two authoring styles share one code path:

* :class:`ConfigBuilder`, where code registers fields one by one and then
  calls :meth:`ConfigBuilder.finish` (or ``validate``/``finish_or_exit``);
* :class:`ConfigSchema`, an ordered list of :class:`FieldSpec` records that
  is evaluated in a single pass by driving a ``ConfigBuilder``.

Every field is attempted even after an earlier one fails, so a single load
reports every misconfiguration at once.
"""
from __future__ import annotations

import os
from collections.abc import Mapping as MappingABC
from dataclasses import dataclass
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from config_loadr.collector import ErrorCollector
from config_loadr.docs import DEFAULT_TITLE, render_docs, write_docs
from config_loadr.errors import ConfigErrors, FieldError, SchemaError
from config_loadr.field import ConfigField, FieldMetadata, Policy
from config_loadr.loader import Lookup, load_field
from config_loadr.logger import get_logger, mask
from config_loadr.snapshot import snapshot
from config_loadr.value_types import value_type

log = get_logger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class MetadataSet(MappingABC):
    """Ordered mapping of environment key to :class:`FieldMetadata`."""

    def __init__(self, fields: Iterable[FieldMetadata] = ()) -> None:
        self._fields: Dict[str, FieldMetadata] = {}
        for field in fields:
            self._fields[field.key] = field

    def __getitem__(self, key: str) -> FieldMetadata:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"MetadataSet({list(self._fields)!r})"

    def required(self) -> List[FieldMetadata]:
        return [field for field in self._fields.values() if field.required]

    def optional(self) -> List[FieldMetadata]:
        return [field for field in self._fields.values() if not field.required]

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {key: field.to_dict() for key, field in self._fields.items()}

    def render_docs(self, title: str = DEFAULT_TITLE) -> str:
        return render_docs(self, title=title)

    def write_docs(self, path: PathLike, title: str = DEFAULT_TITLE) -> Any:
        return write_docs(self, path, title=title)


def check_declaration(metadata: FieldMetadata, *, allow_missing_docs: bool = False) -> None:
    """Reject declarations that would produce undocumented configuration."""

    if not metadata.description and not allow_missing_docs:
        raise SchemaError(
            f"{metadata.key}: fields must have a description "
            "(or pass allow_missing_docs=True)"
        )
    if metadata.policy is Policy.REQUIRED and metadata.example_or_default is None:
        raise SchemaError(f"{metadata.key}: required fields must declare an example")


@dataclass(frozen=True)
class FieldSpec:
    """Declaration of one field in a :class:`ConfigSchema`."""

    name: str
    key: str
    description: str
    value_type: Any
    policy: Policy
    example_or_default: Any = None

    def metadata(self) -> FieldMetadata:
        return FieldMetadata(
            key=self.key,
            description=self.description,
            policy=self.policy,
            example_or_default=self.example_or_default,
            value_type=value_type(self.value_type),
        )


def required_field(
    key: str,
    target: Any,
    description: str = "",
    *,
    example: Any,
    name: Optional[str] = None,
) -> FieldSpec:
    return FieldSpec(name or key.lower(), key, description, target, Policy.REQUIRED, example)


def default_field(
    key: str,
    target: Any,
    description: str = "",
    *,
    default: Any,
    name: Optional[str] = None,
) -> FieldSpec:
    return FieldSpec(name or key.lower(), key, description, target, Policy.DEFAULTED, default)


def optional_field(
    key: str,
    target: Any,
    description: str = "",
    *,
    example: Any = None,
    name: Optional[str] = None,
) -> FieldSpec:
    return FieldSpec(name or key.lower(), key, description, target, Policy.OPTIONAL, example)


class LoadedConfig:
    """Successfully loaded configuration.

    Attribute access by field name returns the bare value; use :meth:`field`
    for the :class:`ConfigField` with its metadata.
    """

    __slots__ = ("_name", "_fields", "_metadata")

    def __init__(
        self,
        name: str,
        fields: Mapping[str, ConfigField[Any]],
        metadata: MetadataSet,
    ) -> None:
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_fields", dict(fields))
        object.__setattr__(self, "_metadata", metadata)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("LoadedConfig instances are read-only")

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._fields[name].value
        except KeyError:
            raise AttributeError(f"{self._name} has no field {name!r}") from None

    def __getitem__(self, name: str) -> Any:
        return self._fields[name].value

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    @property
    def name(self) -> str:
        return self._name

    @property
    def metadata(self) -> MetadataSet:
        return self._metadata

    def field(self, name: str) -> ConfigField[Any]:
        return self._fields[name]

    def as_dict(self) -> Dict[str, Any]:
        return {name: field.value for name, field in self._fields.items()}

    def __repr__(self) -> str:
        parts = ", ".join(
            f"{name}={mask(field.key, repr(field.value))}"
            for name, field in self._fields.items()
        )
        return f"{self._name}({parts})"


class ConfigBuilder:
    """Register fields one at a time, collecting every error.

    The environment is snapshotted once, when the builder is created.
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        *,
        env_file: Optional[PathLike] = None,
        allow_missing_docs: bool = False,
    ) -> None:
        self._lookup: Lookup = snapshot(environ, env_file).get
        self._allow_missing_docs = allow_missing_docs
        self._collector = ErrorCollector()
        self._metadata: Dict[str, FieldMetadata] = {}
        self._fields: Dict[str, ConfigField[Any]] = {}

    def register(self, metadata: FieldMetadata) -> Optional[ConfigField[Any]]:
        """Record ``metadata`` and try to load it.

        Returns the loaded field, or ``None`` after collecting its error.
        """

        if metadata.key in self._metadata:
            raise SchemaError(f"{metadata.key}: declared more than once")
        check_declaration(metadata, allow_missing_docs=self._allow_missing_docs)
        self._metadata[metadata.key] = metadata
        try:
            loaded = load_field(metadata, self._lookup)
        except FieldError as exc:
            self._collector.push(exc)
            return None
        self._fields[metadata.key] = loaded
        return loaded

    def _register_value(
        self,
        policy: Policy,
        key: str,
        target: Any,
        description: str,
        example_or_default: Any,
    ) -> Any:
        metadata = FieldMetadata(
            key=key,
            description=description,
            policy=policy,
            example_or_default=example_or_default,
            value_type=value_type(target),
        )
        loaded = self.register(metadata)
        return loaded.value if loaded is not None else None

    def required(self, key: str, target: Any, description: str, example: Any) -> Any:
        return self._register_value(Policy.REQUIRED, key, target, description, example)

    def or_default(self, key: str, target: Any, description: str, default: Any) -> Any:
        """Load ``key``, using ``default`` when unset.

        Returns ``None`` and collects the error when the value is set but
        invalid.
        """

        return self._register_value(Policy.DEFAULTED, key, target, description, default)

    def optional(
        self, key: str, target: Any, description: str, example: Any = None
    ) -> Any:
        return self._register_value(Policy.OPTIONAL, key, target, description, example)

    @property
    def errors(self) -> Tuple[FieldError, ...]:
        return self._collector.errors

    def field(self, key: str) -> Optional[ConfigField[Any]]:
        return self._fields.get(key)

    def metadata(self) -> MetadataSet:
        return MetadataSet(self._metadata.values())

    def validate(self) -> None:
        """Raise :class:`ConfigErrors` if any field failed; the builder stays usable."""

        if self._collector.is_empty():
            return
        log.warning(
            "configuration failed with {} error(s): {}",
            len(self._collector),
            ", ".join(error.key for error in self._collector),
        )
        raise ConfigErrors(self._collector.errors, self.metadata())

    def finish(self) -> MetadataSet:
        """Return the metadata set, or raise :class:`ConfigErrors`."""

        self.validate()
        log.debug("loaded {} configuration field(s)", len(self._fields))
        return self.metadata()

    def finish_or_exit(self) -> MetadataSet:
        """Like :meth:`finish` but abort the process with the error report."""

        try:
            return self.finish()
        except ConfigErrors as exc:
            log.error("aborting: invalid configuration")
            raise SystemExit(exc.report()) from exc

    def render_docs(self, title: str = DEFAULT_TITLE) -> str:
        return render_docs(self.metadata(), title=title)

    def write_docs(self, path: PathLike, title: str = DEFAULT_TITLE) -> Any:
        return write_docs(self.metadata(), path, title=title)


class ConfigSchema:
    """Declarative, ordered list of configuration fields."""

    def __init__(
        self,
        name: str,
        fields: Sequence[FieldSpec],
        *,
        allow_missing_docs: bool = False,
    ) -> None:
        self.name = name
        self.fields: Tuple[FieldSpec, ...] = tuple(fields)
        self.allow_missing_docs = allow_missing_docs
        self._metadata = self._build_metadata()

    def _build_metadata(self) -> MetadataSet:
        names: set[str] = set()
        keys: set[str] = set()
        for spec in self.fields:
            if spec.name in names:
                raise SchemaError(f"{self.name}: field name {spec.name!r} declared twice")
            if spec.key in keys:
                raise SchemaError(f"{spec.key}: declared more than once")
            names.add(spec.name)
            keys.add(spec.key)
        collected = [spec.metadata() for spec in self.fields]
        for metadata in collected:
            check_declaration(metadata, allow_missing_docs=self.allow_missing_docs)
        return MetadataSet(collected)

    def metadata(self) -> MetadataSet:
        """Metadata for every field; does not read the environment."""

        return self._metadata

    def builder(
        self,
        environ: Optional[Mapping[str, str]] = None,
        *,
        env_file: Optional[PathLike] = None,
    ) -> ConfigBuilder:
        """Return a builder with every field of this schema registered."""

        builder = ConfigBuilder(
            environ, env_file=env_file, allow_missing_docs=self.allow_missing_docs
        )
        for metadata in self._metadata.values():
            builder.register(metadata)
        return builder

    def new(
        self,
        environ: Optional[Mapping[str, str]] = None,
        *,
        env_file: Optional[PathLike] = None,
    ) -> Tuple[LoadedConfig, MetadataSet]:
        """Load every field, raising :class:`ConfigErrors` with all failures."""

        builder = self.builder(environ, env_file=env_file)
        metadata = self._metadata
        try:
            builder.finish()
        except ConfigErrors as exc:
            raise ConfigErrors(exc.errors, metadata) from None
        # finish() succeeded, so every declared key was loaded
        loaded = {spec.name: builder._fields[spec.key] for spec in self.fields}
        return LoadedConfig(self.name, loaded, metadata), metadata

    def load(
        self,
        environ: Optional[Mapping[str, str]] = None,
        *,
        env_file: Optional[PathLike] = None,
    ) -> LoadedConfig:
        """Load every field or abort the process with the rendered report."""

        try:
            config, _metadata = self.new(environ, env_file=env_file)
        except ConfigErrors as exc:
            log.error("aborting: {} configuration is invalid", self.name)
            raise SystemExit(exc.report()) from exc
        return config

    def render_docs(self, title: str = DEFAULT_TITLE) -> str:
        return render_docs(self._metadata, title=title)

    def write_docs(self, path: PathLike, title: str = DEFAULT_TITLE) -> Any:
        return write_docs(self._metadata, path, title=title)

    def __repr__(self) -> str:
        return f"ConfigSchema({self.name!r}, fields={[spec.key for spec in self.fields]!r})"


__all__ = [
    "ConfigBuilder",
    "ConfigSchema",
    "FieldSpec",
    "LoadedConfig",
    "MetadataSet",
    "check_declaration",
    "default_field",
    "optional_field",
    "required_field",
]
