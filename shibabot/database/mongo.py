"""A database backend storing documents in MongoDB."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from typing import Any

import pymongo
from pymongo.errors import PyMongoError

from shibabot.database.base import Database, DatabaseError, WebhookFeed
from shibabot.reminders import Reminder

log = logging.getLogger(__name__)

DB_NAME = "ShibaBot"
URI_ENV = "MONGODB_URI"

_INFORMATION = "information"
_REMINDERS = "reminders"
_ACTIONS = "actions"


def _field(document: Mapping[str, Any] | None, key: str, what: str) -> Any:
    if document is None or key not in document:
        raise DatabaseError(f"Error when trying to get {what}.")
    return document[key]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class MongoDatabase(Database):
    """Storage in MongoDB collections.

    Identifiers are kept as strings, since the documents have no unsigned
    64-bit integer type.
    """

    def __init__(self, client: Any, db_name: str = DB_NAME) -> None:
        self.client = client
        self.db_name = db_name
        self._db = client[db_name]

    def close(self) -> None:
        """Close the underlying client if it can be closed."""
        closer = getattr(self.client, "close", None)
        if callable(closer):
            closer()

    def __enter__(self) -> MongoDatabase:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _call(self, collection: str, method: str, *args: Any) -> Any:
        try:
            result = getattr(self._db[collection], method)(*args)
            if method == "find":
                return list(result)
            return result
        except PyMongoError as exc:
            raise DatabaseError(str(exc)) from exc

    def get_command_count(self) -> int:
        document = self._call(_INFORMATION, "find_one", {})
        if document is None:
            raise DatabaseError("Error when trying to get command count.")
        value = document.get("total_commands")
        return value if _is_int(value) else 0

    def update_command_count(self, count: int) -> None:
        self._call(
            _INFORMATION, "update_one", {}, {"$set": {"total_commands": count}}
        )

    def add_webhook(self, feed: WebhookFeed, webhook: str, channel_id: int) -> None:
        self._call(
            feed.table,
            "insert_one",
            {"webhook": webhook, "channel_id": str(channel_id)},
        )

    def channel_exists(self, feed: WebhookFeed, channel_id: int) -> bool:
        document = self._call(feed.table, "find_one", {"channel_id": str(channel_id)})
        return document is not None

    def get_webhook_by_channel(self, feed: WebhookFeed, channel_id: int) -> str:
        document = self._call(feed.table, "find_one", {"channel_id": str(channel_id)})
        return str(_field(document, "webhook", "webhook"))

    def get_all_webhooks(self, feed: WebhookFeed) -> list[str]:
        return [
            str(_field(document, "webhook", "webhook"))
            for document in self._call(feed.table, "find", {})
        ]

    def remove_webhook(self, feed: WebhookFeed, webhook_url: str) -> None:
        self._call(feed.table, "delete_one", {"webhook": webhook_url})

    def remove_webhook_by_channel(self, feed: WebhookFeed, channel_id: int) -> None:
        self._call(feed.table, "delete_one", {"channel_id": str(channel_id)})

    def add_reminder(self, reminder: Reminder) -> None:
        self._call(
            _REMINDERS,
            "insert_one",
            {
                "reminder": reminder.message,
                "user_id": str(reminder.user_id),
                "timestamp": str(reminder.timestamp),
                "id": str(reminder.id),
            },
        )

    def remove_reminder(self, reminder: Reminder) -> None:
        self.remove_reminder_by_id(reminder.id)

    def remove_reminder_by_id(self, reminder_id: int) -> None:
        self._call(_REMINDERS, "delete_one", {"id": str(reminder_id)})

    @staticmethod
    def _to_reminders(
        documents: Iterable[Mapping[str, Any]], user_id: int | None = None
    ) -> list[Reminder]:
        reminders = []
        for document in documents:
            message = _field(document, "reminder", "reminder")
            owner = _field(document, "user_id", "reminder") if user_id is None else user_id
            timestamp = _field(document, "timestamp", "reminder")
            rid = _field(document, "id", "reminder")
            try:
                reminders.append(
                    Reminder(str(message), int(owner), int(timestamp), int(rid))
                )
            except (TypeError, ValueError) as exc:
                raise DatabaseError(f"malformed reminder document: {exc}") from exc
        return reminders

    def get_all_reminders(self) -> list[Reminder]:
        return self._to_reminders(self._call(_REMINDERS, "find", {}))

    def get_reminders_of_user(self, user_id: int) -> list[Reminder]:
        documents = self._call(_REMINDERS, "find", {"user_id": str(user_id)})
        return self._to_reminders(documents, user_id=user_id)

    @staticmethod
    def _action_filter(action: str, from_user_id: int, to_user_id: int) -> dict:
        return {
            "action": action,
            "from_user_id": str(from_user_id),
            "to_user_id": str(to_user_id),
        }

    def get_action_count(self, action: str, from_user_id: int, to_user_id: int) -> int:
        query = self._action_filter(action, from_user_id, to_user_id)
        documents = self._call(_ACTIONS, "find", query)
        if not documents:
            self._call(_ACTIONS, "insert_one", {**query, "amount": 0})
            return 0
        amount = _field(documents[0], "amount", "action count")
        if not _is_int(amount):
            raise DatabaseError("Error when trying to get action count.")
        return amount

    def update_action_count(
        self, action: str, from_user_id: int, to_user_id: int, amount: int
    ) -> None:
        self._call(
            _ACTIONS,
            "update_one",
            self._action_filter(action, from_user_id, to_user_id),
            {"$set": {"amount": amount}},
        )


def mongo_from_env(environ: Mapping[str, str] | None = None) -> MongoDatabase:
    """Open MongoDB at the URI held in ``MONGODB_URI``."""
    env = os.environ if environ is None else environ
    uri = env.get(URI_ENV)
    if not uri:
        raise DatabaseError(f"missing database setting: {URI_ENV}")
    try:
        client = pymongo.MongoClient(uri)
    except (PyMongoError, ValueError) as exc:
        raise DatabaseError(f"could not open MongoDB client: {exc}") from exc
    log.info("MongoDB client created.")
    return MongoDatabase(client, DB_NAME)