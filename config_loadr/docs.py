"""Markdown reference generated from configuration field metadata."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Mapping, Union

from config_loadr.field import FieldMetadata
from config_loadr.logger import get_logger

log = get_logger(__name__)

DEFAULT_TITLE = "Configuration"

MetadataSource = Union[Mapping[str, FieldMetadata], Iterable[FieldMetadata]]


def _fields(metadata: MetadataSource) -> List[FieldMetadata]:
    if isinstance(metadata, Mapping):
        return list(metadata.values())
    return list(metadata)


def _escape_cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def _field_section(field: FieldMetadata) -> List[str]:
    lines = [f"### `{field.key}`", ""]
    if field.description:
        lines.extend([field.description, ""])
    assignment = field.as_assignment()
    if field.has_default:
        lines.extend([f"Default: `{field.default_or_example}`", ""])
    elif assignment:
        lines.extend([f"Example: `{assignment}`", ""])
    return lines


def _summary_table(fields: List[FieldMetadata]) -> List[str]:
    lines = [
        "## Environment Variables Summary",
        "",
        "| Variable | Required | Default/Example |",
        "|----------|----------|-----------------|",
    ]
    for field in fields:
        required = "Yes" if field.required else "No"
        shown = _escape_cell(field.default_or_example) or "-"
        lines.append(f"| `{field.key}` | {required} | {shown} |")
    return lines


def render_docs(metadata: MetadataSource, title: str = DEFAULT_TITLE) -> str:
    """Render ``metadata`` as a markdown document.

    Fields are split into required and optional/defaulted sections, keeping
    declaration order, followed by a summary table. The output depends on
    nothing but ``metadata`` and ``title``.
    """

    fields = _fields(metadata)
    required = [field for field in fields if field.required]
    optional = [field for field in fields if not field.required]

    lines = [f"# {title}", ""]
    for heading, group in (("Required Variables", required), ("Optional Variables", optional)):
        lines.extend([f"## {heading}", ""])
        if not group:
            lines.extend(["_None._", ""])
        for field in group:
            lines.extend(_field_section(field))
    lines.extend(_summary_table(fields))
    return "\n".join(lines) + "\n"


def write_docs(
    metadata: MetadataSource,
    path: Union[str, "os.PathLike[str]"],
    title: str = DEFAULT_TITLE,
) -> Path:
    """Write the rendered markdown to ``path``, replacing any existing file."""

    target = Path(path)
    content = render_docs(metadata, title=title)
    with target.open("w", encoding="utf-8", newline="\n") as handle:
        handle.write(content)
    log.info("wrote configuration reference to {}", target)
    return target


__all__ = ["DEFAULT_TITLE", "render_docs", "write_docs"]
