"""Accumulate field errors and render them as one report."""
from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence

from config_loadr.errors import FieldError


def format_config_errors(errors: Sequence[FieldError]) -> str:
    """Render ``errors`` in order under a header stating their count."""

    entries = "\n".join(f"  - {error.render()}" for error in errors)
    header = f"Configuration failed with {len(errors)} error(s):"
    return f"{header}\n{entries}" if entries else header


class ErrorCollector:
    """Ordered, append-only list of field errors for one load pass."""

    def __init__(self, errors: Iterable[FieldError] = ()) -> None:
        self._errors: List[FieldError] = list(errors)

    def push(self, error: FieldError) -> None:
        self._errors.append(error)

    def extend(self, errors: Iterable[FieldError]) -> None:
        self._errors.extend(errors)

    def is_empty(self) -> bool:
        return not self._errors

    @property
    def errors(self) -> tuple[FieldError, ...]:
        return tuple(self._errors)

    def render(self) -> str:
        return format_config_errors(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[FieldError]:
        return iter(tuple(self._errors))

    def __repr__(self) -> str:
        keys = ", ".join(error.key for error in self._errors)
        return f"ErrorCollector([{keys}])"


__all__ = ["ErrorCollector", "format_config_errors"]
