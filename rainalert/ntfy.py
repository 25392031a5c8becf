"""Push notifications through an ntfy server."""

from __future__ import annotations

import logging
import random

import requests

log = logging.getLogger(__name__)

RAIN_MESSAGES = (
    "ALERT! Rain in %s at %s!\n%.2fmm expected.\nChance: %d%%\nGrab your umbrella or face the splash!",
    "SKY LEAK! %s, %s — %.2fmm incoming!\nWetness odds: %d%%",
    "RAIN TIME!\n%s, %s\n%.2fmm on the way.\nChance: %d%%\nRejoice or retreat!",
    "UMBRELLA ALERT!\n%s at %s\n%.2fmm forecasted.\nRain chance: %d%%",
    "NOT A DRILL!\nRain in %s at %s\n%.2fmm expected.\nChance: %d%%",
    "☁️ WET MODE ACTIVATED ☁️\n%s, %s\nRain: %.2fmm\nChance: %d%%",
    "MOISTURE INCOMING!\n%s, %s\n%.2fmm with %d%% chance\nGet poncho-ready!",
    "DRENCH MODE: ON 💦\n%s, %s\n%.2fmm rain\n%d%% chance",
    "DRYNESS ERROR!\n%s, %s\n%.2fmm of sogginess\nOdds: %d%%",
    "⚠️ RAIN WARNING ⚠️\n%s, %s\n%.2fmm\nChance: %d%%\nStay dry or embrace the drip.",
)


class NotificationError(Exception):
    """Raised when a notification is not accepted."""


class NtfyClient:
    """Posts messages to one ntfy topic."""

    def __init__(
        self,
        session: requests.Session,
        url: str,
        topic: str,
        *,
        rng: random.Random | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.session = session
        self.url = url
        self.topic = topic
        self._rng = rng if rng is not None else random.Random()
        self._timeout = timeout

    def send(self, title: str, message: str, tags: str) -> None:
        """Publish ``message``; the server must answer 200 or 202."""
        try:
            response = self.session.post(
                f"{self.url}/{self.topic}",
                data=message.encode("utf-8"),
                headers={"Title": title, "Tags": tags},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise NotificationError(f"sending notification: {exc}") from exc

        with response:
            if response.status_code not in (200, 202):
                raise NotificationError(
                    f"notification failed: {response.status_code} {response.reason}"
                )
        log.info("Notification sent: %s", message)

    def generate_rain_message(
        self, location: str, time_str: str, precip_mm: float, chance_of_rain: int
    ) -> str:
        """Pick one of the rain templates at random and fill it in."""
        template = self._rng.choice(RAIN_MESSAGES)
        return template % (location, time_str, precip_mm, chance_of_rain)