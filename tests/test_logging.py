"""Tests for loguru output of the loading engine."""

from __future__ import annotations

import io
from typing import Iterator

import pytest
from loguru import logger

from config_loadr.errors import ConfigErrors
from config_loadr.logger import MASK, configure_logging, is_secret, mask
from config_loadr.schema import ConfigSchema, default_field, required_field


@pytest.fixture()
def log_stream() -> Iterator[io.StringIO]:
    stream = io.StringIO()
    handler_id = configure_logging("DEBUG", sink=stream)
    try:
        yield stream
    finally:
        logger.remove(handler_id)
        logger.disable("config_loadr")


@pytest.mark.parametrize(
    ("key", "expected"),
    [("API_TOKEN", True), ("DB_PASSWORD", True), ("SECRET", True), ("PORT", False)],
)
def test_is_secret(key: str, expected: bool) -> None:
    assert is_secret(key) is expected


def test_mask() -> None:
    assert mask("API_TOKEN", "abc") == MASK
    assert mask("PORT", "8080") == "8080"
    assert mask("API_TOKEN", None) is None


def test_field_resolution_is_logged(log_stream: io.StringIO) -> None:
    schema = ConfigSchema("Logged", [default_field("PORT", int, "Server port", default=8080)])
    schema.new({})
    output = log_stream.getvalue()
    assert "PORT not set, using default" in output
    assert "config_loadr.loader" in output


def test_secret_values_are_masked_in_logs(log_stream: io.StringIO) -> None:
    schema = ConfigSchema(
        "Secrets",
        [required_field("API_TOKEN", int, "Numeric API token", example=1234)],
    )
    with pytest.raises(ConfigErrors) as excinfo:
        schema.new({"API_TOKEN": "hunter2"})
    assert "hunter2" not in log_stream.getvalue()
    assert MASK in log_stream.getvalue()
    assert "hunter2" in excinfo.value.report()
    assert "configuration failed with 1 error(s): API_TOKEN" in log_stream.getvalue()


def test_library_is_silent_by_default() -> None:
    records: list[str] = []
    handler_id = logger.add(records.append, level="DEBUG")
    try:
        schema = ConfigSchema("Quiet", [default_field("PORT", int, "Server port", default=8080)])
        schema.new({})
    finally:
        logger.remove(handler_id)
    assert records == []
