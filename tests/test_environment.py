from __future__ import annotations

import pytest

from config_loadr.environment import Environment


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("production", Environment.PRODUCTION),
        ("prod", Environment.PRODUCTION),
        ("PROD", Environment.PRODUCTION),
        ("  Production ", Environment.PRODUCTION),
        ("dev", Environment.DEVELOPMENT),
        ("development", Environment.DEVELOPMENT),
        ("stage", Environment.STAGING),
        ("Staging", Environment.STAGING),
        ("ci", Environment.TEST),
    ],
)
def test_parse_accepts_names_and_synonyms(raw: str, expected: Environment) -> None:
    assert Environment.parse(raw) is expected


def test_parse_rejects_unknown_values() -> None:
    with pytest.raises(ValueError) as excinfo:
        Environment.parse("qa-cluster")
    assert "development, staging, production, test" in str(excinfo.value)


def test_predicates() -> None:
    assert Environment.PRODUCTION.is_production
    assert not Environment.STAGING.is_production
    assert Environment.DEVELOPMENT.is_development
    assert Environment.STAGING.is_staging
    assert Environment.TEST.is_test


def test_display_uses_canonical_name() -> None:
    assert str(Environment.PRODUCTION) == "production"
    assert f"{Environment.DEVELOPMENT}" == "development"
