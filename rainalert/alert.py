"""The rain check: forecast, thresholds, history and notification."""

from __future__ import annotations

import logging

from rainalert.database import Database, DatabaseError
from rainalert.ntfy import NotificationError, NtfyClient
from rainalert.weather import WeatherAPI, WeatherError

log = logging.getLogger(__name__)


class AlertError(Exception):
    """Raised when a step of the rain check fails."""


class Alerter:
    """Ties the forecast, the database and the notifier together."""

    def __init__(self, weather: WeatherAPI, db: Database, ntfy: NtfyClient) -> None:
        self.weather = weather
        self.db = db
        self.ntfy = ntfy

    def check_and_alert(self, location: str, timezone: str) -> bool:
        """Notify if rain is likely in the next hour; return whether a notification went out."""
        try:
            weather, hour = self.weather.get_next_hour_forecast(location, timezone)
        except WeatherError as exc:
            raise AlertError(f"getting forecast: {exc}") from exc

        try:
            thresholds = self.db.get_thresholds()
        except DatabaseError as exc:
            raise AlertError(f"getting thresholds: {exc}") from exc

        if hour.chance_of_rain < thresholds.get("drizzleThreshold", 0):
            log.info("Chance of rain (%d%%) too low, not notifying.", hour.chance_of_rain)
            return False

        try:
            notify = self.db.should_notify(thresholds)
        except DatabaseError as exc:
            raise AlertError(f"checking notification history: {exc}") from exc

        if not notify:
            log.info("Recent rain detected, skipping notification.")
            return False

        message = self.ntfy.generate_rain_message(
            weather.location_name, hour.time, hour.precip_mm, hour.chance_of_rain
        )
        try:
            self.ntfy.send("Rain Alert", message, "umbrella,robot")
        except NotificationError as exc:
            raise AlertError(f"sending notification: {exc}") from exc

        try:
            self.db.record_notification(hour.chance_of_rain)
        except DatabaseError as exc:
            raise AlertError(f"recording notification: {exc}") from exc
        return True