"""Error types raised while declaring or loading configuration."""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional

if TYPE_CHECKING:  # pragma: no cover - typing only
    from config_loadr.field import FieldMetadata
    from config_loadr.schema import MetadataSet


class SchemaError(ValueError):
    """Raised when a configuration schema declaration is invalid."""


class ConfigError(RuntimeError):
    """Base class for configuration loading failures."""


class FieldError(ConfigError):
    """Failure to resolve a single field."""

    kind = "field"

    def __init__(self, metadata: "FieldMetadata") -> None:
        self.metadata = metadata
        super().__init__(self.render())

    @property
    def key(self) -> str:
        return self.metadata.key

    @property
    def description(self) -> str:
        return self.metadata.description

    @property
    def example(self) -> Optional[str]:
        return self.metadata.default_or_example or None

    def reason(self) -> str:
        raise NotImplementedError

    def render(self) -> str:
        """Return the multi-line report entry for this error."""

        lines = [f"{self.key}: {self.reason()}", f"\tDescription: {self.description}"]
        assignment = self.metadata.as_assignment()
        if assignment:
            lines.append(f"\tExample: {assignment}")
        return "\n".join(lines)


class MissingEnvVar(FieldError):
    """A required environment variable is not set."""

    kind = "missing"

    def reason(self) -> str:
        return "Is missing from environment and is required"


class InvalidValue(FieldError):
    """An environment variable is set but cannot be parsed."""

    kind = "invalid"

    def __init__(self, metadata: "FieldMetadata", raw: str, cause: str) -> None:
        self.raw = raw
        self.cause = cause
        super().__init__(metadata)

    def reason(self) -> str:
        text = f"Invalid value '{self.raw}'"
        if self.cause:
            text += f" ({self.cause})"
        return text


class ConfigErrors(ConfigError):
    """Every field error collected during one load attempt."""

    def __init__(
        self,
        errors: Iterable[FieldError],
        metadata: Optional["MetadataSet"] = None,
    ) -> None:
        self.errors: tuple[FieldError, ...] = tuple(errors)
        self.metadata = metadata
        super().__init__(self.report())

    def report(self) -> str:
        from config_loadr.collector import format_config_errors

        return format_config_errors(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self):
        return iter(self.errors)


__all__ = [
    "ConfigError",
    "ConfigErrors",
    "FieldError",
    "InvalidValue",
    "MissingEnvVar",
    "SchemaError",
]
