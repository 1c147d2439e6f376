"""Named runtime environment, ready to use as a field value type."""
from __future__ import annotations

from enum import Enum


class Environment(str, Enum):
    """Deployment environment the process runs in."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"

    @classmethod
    def parse(cls, raw: str) -> "Environment":
        """Parse ``raw`` case-insensitively, accepting common synonyms."""

        normalized = raw.strip().lower()
        try:
            return _ALIASES[normalized]
        except KeyError:
            accepted = ", ".join(member.value for member in cls)
            raise ValueError(f"environment must be one of: {accepted}") from None

    @property
    def is_production(self) -> bool:
        return self is Environment.PRODUCTION

    @property
    def is_staging(self) -> bool:
        return self is Environment.STAGING

    @property
    def is_development(self) -> bool:
        return self is Environment.DEVELOPMENT

    @property
    def is_test(self) -> bool:
        return self is Environment.TEST

    def __str__(self) -> str:
        return self.value


_ALIASES: dict[str, Environment] = {
    "development": Environment.DEVELOPMENT,
    "dev": Environment.DEVELOPMENT,
    "local": Environment.DEVELOPMENT,
    "staging": Environment.STAGING,
    "stage": Environment.STAGING,
    "stg": Environment.STAGING,
    "production": Environment.PRODUCTION,
    "prod": Environment.PRODUCTION,
    "prd": Environment.PRODUCTION,
    "live": Environment.PRODUCTION,
    "test": Environment.TEST,
    "testing": Environment.TEST,
    "ci": Environment.TEST,
}


__all__ = ["Environment"]
