"""Command entry point: run one rain check from environment settings."""

from __future__ import annotations

import logging
import sqlite3
import sys
from collections.abc import Sequence
from contextlib import closing

import requests

from rainalert.alert import AlertError, Alerter
from rainalert.config import Config, ConfigError
from rainalert.database import Database, DatabaseError
from rainalert.ntfy import NtfyClient
from rainalert.weather import WeatherAPI

WEATHER_URL = "http://api.weatherapi.com/v1/forecast.json"
NTFY_URL = "https://ntfy.sh"


def _open_database(url: str) -> sqlite3.Connection:
    try:
        conn = sqlite3.connect(url.removeprefix("file:"), isolation_level=None)
    except sqlite3.Error as exc:
        raise DatabaseError(f"opening database: {exc}") from exc
    try:
        conn.execute("SELECT 1").fetchall()
    except sqlite3.Error as exc:
        conn.close()
        raise DatabaseError(f"pinging database: {exc}") from exc
    return conn


def run(config: Config) -> None:
    """Run one rain check with the given settings."""
    with requests.Session() as session, closing(_open_database(config.database_url)) as conn:
        Alerter(
            WeatherAPI(session, WEATHER_URL, config.weather_api_key),
            Database(conn),
            NtfyClient(session, NTFY_URL, config.push_notification_topic),
        ).check_and_alert(config.location, config.timezone)


def main(argv: Sequence[str] | None = None) -> int:
    """Load settings from the environment and run one check; return the exit status."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    try:
        run(Config.from_env())
    except (ConfigError, DatabaseError, AlertError) as exc:
        print(f"oh no {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())