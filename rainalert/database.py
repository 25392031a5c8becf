"""Threshold settings and notification history kept in a SQL database."""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable, Mapping
from typing import Any

log = logging.getLogger(__name__)

_MAX_AGE_SECONDS = 3600
_INTEGER = re.compile(r"[+-]?[0-9]+")


class DatabaseError(Exception):
    """Raised when the database cannot be read or written."""


def _parse_int(value: Any) -> int:
    if value is None:
        raise DatabaseError("scanning row: NULL value")
    text = str(value)
    if not _INTEGER.fullmatch(text):
        raise DatabaseError(f"conversion error: invalid syntax {text!r}")
    return int(text)


class Database:
    """Wraps an autocommitting DB-API connection that takes ``?`` parameters."""

    def __init__(self, connection: Any, *, clock: Callable[[], float] = time.time) -> None:
        self.connection = connection
        self._clock = clock

    def _query(self, sql: str, what: str, params: tuple = ()) -> Any:
        try:
            return self.connection.execute(sql, params)
        except Exception as exc:
            raise DatabaseError(f"{what}: {exc}") from exc

    def get_thresholds(self) -> dict[str, int]:
        """Return every configured threshold by name."""
        rows = self._query("SELECT config, value FROM weather_config", "querying config")
        return {str(name): _parse_int(value) for name, value in rows.fetchall()}

    def should_notify(self, thresholds: Mapping[str, int]) -> bool:
        """Decide from the last notification whether a new one may be sent."""
        row = self._query(
            "SELECT state, created_at FROM weather_notifications ORDER BY id DESC LIMIT 1",
            "querying last notification",
        ).fetchone()
        if row is None:
            return True
        state, created_at = row
        if state is None or created_at is None:
            raise DatabaseError("querying last notification: NULL value")
        if self._clock() - int(created_at) > _MAX_AGE_SECONDS:
            log.info("Last notification is older than 1 hour, ignoring previous state.")
            return True
        return int(state) <= thresholds.get("rainBeforeThreshold", 0)

    def record_notification(self, state: int) -> None:
        """Store a sent notification with the current time."""
        self._query(
            "INSERT INTO weather_notifications(state, created_at) VALUES (?, ?)",
            "inserting notification",
            (state, int(self._clock())),
        )