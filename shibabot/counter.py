"""Counting executed commands and routing component interactions."""

from __future__ import annotations

import logging
import threading

from shibabot.database.base import Database, DatabaseError

log = logging.getLogger(__name__)

TRUTH_OR_DARE_IDS = frozenset({"tod_truth", "tod_dare", "tod_random"})


class CommandCounter:
    """Keeps the total number of commands run, persisted in the database."""

    def __init__(self, database: Database) -> None:
        self._database = database
        self._count = 0
        self._lock = threading.Lock()

    def get(self) -> int:
        """Return the current count, reading it from the database if unknown.

        A failed read is logged and reported as zero.
        """
        with self._lock:
            return self._get_locked()

    def _get_locked(self) -> int:
        if self._count != 0:
            return self._count
        try:
            return self._database.get_command_count()
        except DatabaseError as exc:
            log.error("Failed to get command count: %s", exc)
            return 0

    def record(self) -> None:
        """Account for a command about to run.

        The first call only loads the stored count; later calls store the
        current count and then increase it. A failed store is logged and
        leaves the count unchanged.
        """
        with self._lock:
            if self._count == 0:
                self._count = self._get_locked()
                return
            try:
                self._database.update_command_count(self._count)
            except DatabaseError as exc:
                log.error("Failed to update command count: %s", exc)
                return
            self._count += 1


def route_interaction(custom_id: str) -> str | None:
    """Name the handler for a component interaction, or ``None`` if unhandled."""
    if custom_id in TRUTH_OR_DARE_IDS:
        return "truth_or_dare"
    log.warning("Unhandled interaction: %r", custom_id)
    return None