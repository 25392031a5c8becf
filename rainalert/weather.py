"""Hourly forecast lookup against a weatherapi.com style endpoint."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone as dt_timezone, tzinfo
from typing import Any
from zoneinfo import ZoneInfo

import requests

CHECK_AHEAD_HOURS = 1
USER_AGENT = "rain-alert/1.0"


class WeatherError(Exception):
    """Raised when a forecast cannot be fetched or used."""


@dataclass
class Hour:
    """Forecast for one hour of the day."""

    time: str = ""
    precip_mm: float = 0.0
    will_it_rain: int = 0
    chance_of_rain: int = 0


@dataclass
class ForecastDay:
    """One day of forecast with its hourly entries."""

    date: str = ""
    hours: list[Hour] = field(default_factory=list)


@dataclass
class WeatherResponse:
    """The parts of a forecast response the alerter uses."""

    location_name: str = ""
    tz_id: str = ""
    localtime: str = ""
    forecast_days: list[ForecastDay] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> WeatherResponse:
        """Build from decoded JSON; raises ValueError on malformed data."""
        try:
            loc = data.get("location") or {}
            days = [
                ForecastDay(
                    date=day.get("date") or "",
                    hours=[
                        Hour(
                            time=h.get("time") or "",
                            precip_mm=float(h.get("precip_mm") or 0.0),
                            will_it_rain=int(h.get("will_it_rain") or 0),
                            chance_of_rain=int(h.get("chance_of_rain") or 0),
                        )
                        for h in day.get("hour") or []
                    ],
                )
                for day in (data.get("forecast") or {}).get("forecastday") or []
            ]
            return cls(loc.get("name") or "", loc.get("tz_id") or "",
                       loc.get("localtime") or "", days)
        except (AttributeError, TypeError) as exc:
            raise ValueError(f"malformed forecast: {exc}") from exc


class WeatherAPI:
    """Client for the forecast endpoint."""

    def __init__(self, session: requests.Session, url: str, api_key: str, *,
                 clock: Callable[[tzinfo], datetime] = datetime.now) -> None:
        self.session = session
        self.url = url
        self.api_key = api_key
        self._clock = clock

    def get_next_hour_forecast(self, location: str, timezone: str) -> tuple[WeatherResponse, Hour]:
        """Fetch today's forecast and return it with the entry for the coming hour."""
        weather = self._fetch(location)
        return weather, self._next_hour(weather, timezone)

    def _fetch(self, location: str) -> WeatherResponse:
        params = {"aqi": "no", "alerts": "no", "days": "1", "key": self.api_key, "q": location}
        try:
            response = self.session.get(self.url, params=params,
                                        headers={"User-Agent": USER_AGENT}, timeout=30)
        except requests.RequestException as exc:
            raise WeatherError(f"making request: {exc}") from exc
        with response:
            if response.status_code != 200:
                raise WeatherError(f"unexpected response: {response.status_code} {response.reason}")
            try:
                return WeatherResponse.from_dict(response.json())
            except ValueError as exc:
                raise WeatherError(f"decoding response: {exc}") from exc

    def _next_hour(self, weather: WeatherResponse, timezone: str) -> Hour:
        if not weather.forecast_days:
            raise WeatherError("no forecast days found")
        hours = weather.forecast_days[0].hours
        if len(hours) < 24:
            raise WeatherError("hourly forecast incomplete")
        try:
            tz = dt_timezone.utc if timezone in ("", "UTC") else ZoneInfo(timezone)
        except (KeyError, ValueError, OSError) as exc:
            raise WeatherError(f"invalid timezone: {timezone}") from exc
        # Hour 23 wraps round to today's 00 entry.
        return hours[(self._clock(tz).hour + CHECK_AHEAD_HOURS) % 24]