"""Settings read from the process environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields


class ConfigError(Exception):
    """Raised when a required setting is missing."""


def _env_name(field_name: str) -> str:
    return field_name.upper().replace("DATABASE_", "DB_")


@dataclass(frozen=True)
class Config:
    """Everything the alerter needs to run once."""

    weather_api_key: str
    push_notification_topic: str
    database_url: str
    database_token: str
    location: str
    timezone: str

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Build a config from ``environ`` (the process environment by default)."""
        env = os.environ if environ is None else environ
        names = {f.name: _env_name(f.name) for f in fields(cls)}
        missing = [var for var in names.values() if var not in env]
        if missing:
            raise ConfigError(f"missing required value: {', '.join(missing)}")
        return cls(**{name: env[var] for name, var in names.items()})