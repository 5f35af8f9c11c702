"""Delivering due reminders to users by direct message."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import httpx

from shibabot.reminders import Reminder

log = logging.getLogger(__name__)

API_BASE = "https://discord.com/api/v10"
REMINDER_EMBED_COLOR = 12957813
POLL_INTERVAL_SECONDS = 1


class DeliveryError(Exception):
    """Raised when a reminder cannot be delivered."""


class DiscordRest:
    """A small client for the chat service's REST API, authorised as a bot."""

    def __init__(self, token: str, client: httpx.Client | None = None) -> None:
        self._headers = {"Authorization": f"Bot {token}"}
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=10.0)

    def close(self) -> None:
        """Close the HTTP client if this object created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> DiscordRest:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _post(self, path: str, payload: dict[str, Any], what: str) -> httpx.Response:
        try:
            response = self._client.post(
                f"{API_BASE}{path}", json=payload, headers=self._headers
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            log.error("Failed to %s: %s", what, exc)
            raise DeliveryError(f"Failed to {what}: {exc}") from exc
        return response

    def open_dm(self, user_id: int) -> str:
        """Open (or reuse) a direct-message channel and return its identifier."""
        response = self._post(
            "/users/@me/channels",
            {"recipients": [str(user_id)]},
            "create DM channel",
        )
        try:
            data = response.json()
        except ValueError as exc:
            raise DeliveryError(f"Failed to get channel_id: {exc}") from exc
        channel_id = data.get("id") if isinstance(data, dict) else None
        if not isinstance(channel_id, str):
            raise DeliveryError("Failed to get channel_id")
        return channel_id.replace('"', "")

    def send_embed(self, channel_id: str, embed: dict[str, Any]) -> None:
        """Post a message holding a single embed to a channel."""
        self._post(
            f"/channels/{channel_id}/messages",
            {"content": None, "embeds": [embed]},
            "send reminder",
        )


def _pretty_utc(timestamp: int) -> str:
    moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return moment.strftime("%Y-%m-%d %H:%M:%S UTC")


def reminder_embed(reminder: Reminder) -> dict[str, Any]:
    """Build the embed sent to the user when a reminder is due."""
    return {
        "title": "Reminder",
        "description": reminder.message,
        "color": REMINDER_EMBED_COLOR,
        "footer": {
            "text": f"You asked to be reminded at {_pretty_utc(reminder.timestamp)}"
        },
    }


def deliver_reminder(reminder: Reminder, rest: DiscordRest, database: Any) -> None:
    """Send the reminder to its user and delete it from the database."""
    channel_id = rest.open_dm(reminder.user_id)
    rest.send_embed(channel_id, reminder_embed(reminder))
    database.remove_reminder(reminder)


def run_reminder(
    reminder: Reminder,
    rest: DiscordRest,
    database: Any,
    clock: Callable[[], float] = time.time,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Wait until the reminder is due, then deliver it."""
    while int(clock()) < reminder.timestamp:
        sleep(POLL_INTERVAL_SECONDS)
    deliver_reminder(reminder, rest, database)