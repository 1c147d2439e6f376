"""Typed, self-documenting configuration loaded from environment variables.

Attributes are imported lazily so that packaging tools can read
``config_loadr.version`` without the runtime dependencies installed.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Iterable

_MODULE_ATTRS: Dict[str, Iterable[str]] = {
    "config_loadr.collector": ["ErrorCollector", "format_config_errors"],
    "config_loadr.docs": ["render_docs", "write_docs"],
    "config_loadr.environment": ["Environment"],
    "config_loadr.errors": [
        "ConfigError",
        "ConfigErrors",
        "FieldError",
        "InvalidValue",
        "MissingEnvVar",
        "SchemaError",
    ],
    "config_loadr.field": ["ConfigField", "FieldMetadata", "Policy"],
    "config_loadr.loader": [
        "env_parse",
        "load_field",
        "load_optional",
        "load_required",
        "load_with_default",
    ],
    "config_loadr.logger": ["configure_logging"],
    "config_loadr.schema": [
        "ConfigBuilder",
        "ConfigSchema",
        "FieldSpec",
        "LoadedConfig",
        "MetadataSet",
        "default_field",
        "optional_field",
        "required_field",
    ],
    "config_loadr.snapshot": ["snapshot"],
    "config_loadr.value_types": ["U16", "ValueType", "value_type"],
    "config_loadr.version": ["PROJECT_VERSION", "__version__"],
}

_ATTR_TO_MODULE: Dict[str, str] = {
    attribute: module for module, attributes in _MODULE_ATTRS.items() for attribute in attributes
}

__all__ = sorted(_ATTR_TO_MODULE)


def __getattr__(name: str) -> Any:
    module_name = _ATTR_TO_MODULE.get(name)
    if module_name is None:
        raise AttributeError(f"module 'config_loadr' has no attribute {name!r}")
    module = import_module(module_name)
    for attribute in _MODULE_ATTRS[module_name]:
        globals()[attribute] = getattr(module, attribute)
    return globals()[name]


def __dir__() -> list[str]:
    return sorted(set(globals()) | set(__all__))
