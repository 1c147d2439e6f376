from __future__ import annotations

from pathlib import Path

import pytest

from config_loadr.docs import render_docs, write_docs
from config_loadr.schema import ConfigSchema, default_field, optional_field, required_field
from config_loadr.value_types import U16

SCHEMA = ConfigSchema(
    "AppConfig",
    [
        default_field("PORT", U16, "Server port", default=8080),
        required_field("SECRET", str, "Signing secret", example="x"),
    ],
)

EXPECTED = (
    "# Configuration\n"
    "\n"
    "## Required Variables\n"
    "\n"
    "### `SECRET`\n"
    "\n"
    "Signing secret\n"
    "\n"
    "Example: `SECRET=x`\n"
    "\n"
    "## Optional Variables\n"
    "\n"
    "### `PORT`\n"
    "\n"
    "Server port\n"
    "\n"
    "Default: `8080`\n"
    "\n"
    "## Environment Variables Summary\n"
    "\n"
    "| Variable | Required | Default/Example |\n"
    "|----------|----------|-----------------|\n"
    "| `PORT` | No | 8080 |\n"
    "| `SECRET` | Yes | x |\n"
)


def test_render_matches_reference_layout() -> None:
    assert render_docs(SCHEMA.metadata()) == EXPECTED


def test_render_is_idempotent() -> None:
    metadata = SCHEMA.metadata()
    assert render_docs(metadata) == render_docs(metadata)


def test_optional_without_example_has_no_default_line() -> None:
    schema = ConfigSchema("Limits", [optional_field("LIMIT", U16, "Request limit")])
    text = schema.render_docs()
    optional_section = text.split("## Optional Variables", 1)[1]
    assert "### `LIMIT`" in optional_section
    assert "Default:" not in text
    assert "| `LIMIT` | No | - |" in text
    assert "## Required Variables\n\n_None._" in text


def test_optional_example_is_not_presented_as_default() -> None:
    schema = ConfigSchema(
        "Tracing",
        [optional_field("OTEL_ENDPOINT", str, "Collector URL", example="http://otel:4317")],
    )
    text = schema.render_docs(title="Tracing")
    assert text.startswith("# Tracing\n")
    assert "Default:" not in text
    assert "Example: `OTEL_ENDPOINT=http://otel:4317`" in text


def test_sections_preserve_declaration_order() -> None:
    schema = ConfigSchema(
        "Ordered",
        [
            required_field("Z_KEY", str, "Last letter", example="z"),
            default_field("B_KEY", int, "Second", default=2),
            required_field("A_KEY", str, "First letter", example="a"),
            optional_field("C_KEY", int, "Third"),
        ],
    )
    text = schema.render_docs()
    assert text.index("### `Z_KEY`") < text.index("### `A_KEY`")
    assert text.index("### `B_KEY`") < text.index("### `C_KEY`")
    table = text.split("## Environment Variables Summary", 1)[1]
    assert [line.split("|")[1].strip() for line in table.splitlines() if line.startswith("| `")] == [
        "`Z_KEY`",
        "`B_KEY`",
        "`A_KEY`",
        "`C_KEY`",
    ]


def test_table_cells_are_escaped() -> None:
    schema = ConfigSchema("Pipes", [default_field("SEPARATOR", str, "Column separator", default="|")])
    assert "| `SEPARATOR` | No | \\| |" in schema.render_docs()


def test_write_docs_overwrites_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "CONFIG.md"
    target.write_text("stale content that is much longer than nothing\n" * 50, encoding="utf-8")
    written = write_docs(SCHEMA.metadata(), target)
    assert written == target
    assert target.read_text(encoding="utf-8") == EXPECTED


def test_write_docs_reports_io_errors(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        SCHEMA.write_docs(tmp_path / "missing-dir" / "CONFIG.md")
