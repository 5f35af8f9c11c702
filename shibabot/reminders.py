"""Reminders and the in-memory cache of pending reminders per user."""

from __future__ import annotations

import random
import re
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

_U64_MAX = 2**64 - 1
_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Reminder:
    """A message to deliver to a user at a Unix timestamp (seconds)."""

    message: str
    user_id: int
    timestamp: int
    id: int

    @classmethod
    def new_random(cls, message: str, user_id: int, timestamp: int) -> Reminder:
        """Create a reminder with a random 64-bit identifier."""
        return cls(message, user_id, timestamp, random.getrandbits(64))


class ReminderCache:
    """Pending reminders grouped by user; expired ones are pruned on access."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._by_user: dict[int, list[Reminder]] = {}

    def get_reminders_of_user(self, user_id: int) -> list[Reminder] | None:
        """Return the user's pending reminders, or ``None`` if none were cached."""
        self.prune()
        reminders = self._by_user.get(user_id)
        return None if reminders is None else list(reminders)

    def add(self, reminder: Reminder, update: bool = True) -> None:
        """Cache a reminder unless an equal one is already cached."""
        user_reminders = self._by_user.setdefault(reminder.user_id, [])
        if reminder not in user_reminders:
            user_reminders.append(reminder)
        if update:
            self.prune()

    def remove(self, reminder: Reminder) -> None:
        """Drop every cached reminder equal to ``reminder``."""
        user_reminders = self._by_user.get(reminder.user_id)
        if user_reminders is not None:
            user_reminders[:] = [r for r in user_reminders if r != reminder]

    def remove_by_id(self, reminder_id: int) -> None:
        """Drop every cached reminder with the given identifier."""
        for user_reminders in self._by_user.values():
            user_reminders[:] = [r for r in user_reminders if r.id != reminder_id]

    def add_many(self, reminders: Iterable[Reminder]) -> None:
        """Cache several reminders, then prune expired ones."""
        for reminder in reminders:
            self.add(reminder, update=False)
        self.prune()

    def prune(self) -> None:
        """Remove reminders whose time has come."""
        now = int(self._clock())
        for user_reminders in self._by_user.values():
            user_reminders[:] = [r for r in user_reminders if r.timestamp > now]


def parse_reminder_id(text: str) -> int:
    """Extract the reminder identifier from text such as ``"walk (ID: 42)"``.

    Every non-numeric character is treated as a blank; the rest must be a
    single unsigned 64-bit number, otherwise ``ValueError`` is raised.
    """
    number_str = "".join(c if c.isnumeric() else " " for c in text).strip()
    if not _DIGITS.fullmatch(number_str):
        raise ValueError(f"no reminder id in {text!r}")
    number = int(number_str)
    if number > _U64_MAX:
        raise ValueError(f"reminder id too large in {text!r}")
    return number