"""The storage interface shared by every database backend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from shibabot.reminders import Reminder


class WebhookFeed(Enum):
    """A daily feed that is posted to channels through webhooks."""

    QOTD = "qotd"
    FOTD = "fotd"

    @property
    def table(self) -> str:
        """Name of the table or collection holding this feed's webhooks."""
        return f"{self.value}_webhooks"


class DatabaseError(Exception):
    """Raised when the database cannot answer a request."""


class Database(ABC):
    """Persistent storage for counters, feed webhooks, reminders and actions."""

    @abstractmethod
    def get_command_count(self) -> int:
        """Return the total number of commands run."""

    @abstractmethod
    def update_command_count(self, count: int) -> None:
        """Store the total number of commands run."""

    @abstractmethod
    def add_webhook(self, feed: WebhookFeed, webhook: str, channel_id: int) -> None:
        """Register a webhook for a channel in the given feed."""

    @abstractmethod
    def channel_exists(self, feed: WebhookFeed, channel_id: int) -> bool:
        """Tell whether the channel already has a webhook in the feed."""

    @abstractmethod
    def get_webhook_by_channel(self, feed: WebhookFeed, channel_id: int) -> str:
        """Return the webhook registered for the channel."""

    @abstractmethod
    def get_all_webhooks(self, feed: WebhookFeed) -> list[str]:
        """Return every webhook registered in the feed."""

    @abstractmethod
    def remove_webhook(self, feed: WebhookFeed, webhook_url: str) -> None:
        """Remove a webhook from the feed by its URL."""

    @abstractmethod
    def remove_webhook_by_channel(self, feed: WebhookFeed, channel_id: int) -> None:
        """Remove the webhook registered for a channel."""

    @abstractmethod
    def add_reminder(self, reminder: Reminder) -> None:
        """Store a reminder."""

    @abstractmethod
    def remove_reminder(self, reminder: Reminder) -> None:
        """Delete a stored reminder."""

    @abstractmethod
    def remove_reminder_by_id(self, reminder_id: int) -> None:
        """Delete a stored reminder by its identifier."""

    @abstractmethod
    def get_all_reminders(self) -> list[Reminder]:
        """Return every stored reminder."""

    @abstractmethod
    def get_reminders_of_user(self, user_id: int) -> list[Reminder]:
        """Return the stored reminders of one user."""

    @abstractmethod
    def get_action_count(self, action: str, from_user_id: int, to_user_id: int) -> int:
        """Return how often one user performed an action on another.

        A missing entry is created on first use and reported as zero.
        """

    @abstractmethod
    def update_action_count(
        self, action: str, from_user_id: int, to_user_id: int, amount: int
    ) -> None:
        """Store how often one user performed an action on another."""