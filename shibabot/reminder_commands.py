"""The logic behind the commands that add and remove reminders."""

from __future__ import annotations

import time
from typing import Any

from shibabot.reminders import Reminder, ReminderCache, parse_reminder_id
from shibabot.timeparse import Timestamp, Unit, parse_timestamp

INVALID_TIME_TITLE = "Error: Invalid time format"
INVALID_TIME_DESCRIPTION = (
    "Valid format is: **<number><unit>**.\n"
    "Valid units are: seconds, minutes, hours, days"
)
INVALID_TIME_FOOTER = "Examples: 10s, 10 seconds, 10 mins"


def describe_delay(timestamp: Timestamp, original: str) -> str:
    """Describe a parsed delay in its own unit, or echo the original text."""
    if timestamp.unit is Unit.SECONDS:
        return f"{timestamp.seconds} seconds"
    if timestamp.unit is Unit.MINUTES:
        return f"{timestamp.minutes} minutes"
    if timestamp.unit is Unit.HOURS:
        return f"{timestamp.hours} hours"
    if timestamp.unit is Unit.DAYS:
        return f"{timestamp.days} days"
    return original


def schedule_reminder(
    message: str, time_text: str, user_id: int, now: float | None = None
) -> tuple[Reminder, str]:
    """Create a reminder due after the delay in ``time_text``.

    Returns the reminder and the confirmation text shown to the user.
    Raises ``ValueError`` when the delay cannot be parsed.
    """
    parsed = parse_timestamp(time_text)
    current = int(time.time() if now is None else now)
    reminder = Reminder.new_random(message, user_id, current + parsed.seconds)
    confirmation = f"I'll check in on you in {describe_delay(parsed, time_text)}."
    return reminder, confirmation


def autocomplete_reminders(
    cache: ReminderCache, database: Any, user_id: int, partial: str
) -> list[str]:
    """Offer ``"message (ID: n)"`` choices for the user's reminders.

    The cache is used when it knows the user; otherwise the reminders are
    read from the database and cached.
    """
    prefix = partial.lower()
    cached = cache.get_reminders_of_user(user_id)
    if cached is None:
        reminders = database.get_reminders_of_user(user_id)
        cache.add_many(reminders)
    else:
        reminders = cached
    messages = {reminder.id: reminder.message for reminder in reminders}
    return [
        f"{message} (ID: {rid})"
        for rid, message in messages.items()
        if message.startswith(prefix)
    ]


def remove_reminder(cache: ReminderCache, database: Any, text: str) -> int:
    """Remove the reminder whose identifier appears in ``text``.

    Returns the identifier; raises ``ValueError`` if none can be read.
    """
    reminder_id = parse_reminder_id(text)
    cache.remove_by_id(reminder_id)
    database.remove_reminder_by_id(reminder_id)
    return reminder_id