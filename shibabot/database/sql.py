"""A database backend over any DB-API connection, used with MySQL."""

from __future__ import annotations

import logging
import os
import re
import time
from collections.abc import Callable, Mapping
from contextlib import closing
from typing import Any

import pymysql

from shibabot.database.base import Database, DatabaseError, WebhookFeed
from shibabot.reminders import Reminder

log = logging.getLogger(__name__)

RECONNECT_AFTER_SECONDS = 25200
_PLACEHOLDER = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")
_PARAMSTYLES = ("named", "qmark", "format", "pyformat")
_ENV_KEYS = ("SQL_HOST", "SQL_PORT", "SQL_USER", "SQL_PASSWORD", "SQL_DATABASE")


def _bind(sql: str, params: Mapping[str, Any], paramstyle: str) -> tuple[str, Any]:
    if paramstyle == "named":
        return sql, dict(params)
    names = _PLACEHOLDER.findall(sql)
    if paramstyle == "qmark":
        return _PLACEHOLDER.sub("?", sql), tuple(params[n] for n in names)
    if paramstyle == "format":
        return _PLACEHOLDER.sub("%s", sql), tuple(params[n] for n in names)
    return _PLACEHOLDER.sub(r"%(\1)s", sql), dict(params)


class SqlDatabase(Database):
    """Storage in SQL tables, reconnecting once the connection gets old.

    ``connect`` opens a new DB-API connection; queries are written with
    ``:name`` placeholders and rewritten for ``paramstyle``.
    """

    def __init__(
        self,
        connect: Callable[[], Any],
        paramstyle: str = "pyformat",
        max_age: float = RECONNECT_AFTER_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if paramstyle not in _PARAMSTYLES:
            raise ValueError(f"unsupported paramstyle {paramstyle!r}")
        self._connect = connect
        self._paramstyle = paramstyle
        self._max_age = max_age
        self._clock = clock
        self._conn: Any = None
        self._opened_at = 0.0
        self._open()
        log.info("Connection to database successfully established.")

    def _open(self) -> None:
        try:
            self._conn = self._connect()
        except Exception as exc:
            raise DatabaseError(f"could not connect to the database: {exc}") from exc
        self._opened_at = self._clock()

    def _connection(self) -> Any:
        if self._clock() - self._opened_at > self._max_age:
            log.info("The DB connection has grown old. Reconnecting...")
            self.close()
            self._open()
            log.info("New connection to database successfully established.")
        if self._conn is None:
            raise DatabaseError("Error when trying to get DB connection.")
        return self._conn

    def close(self) -> None:
        """Close the current connection."""
        if self._conn is not None:
            try:
                self._conn.close()
            finally:
                self._conn = None

    def __enter__(self) -> SqlDatabase:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _query(self, sql: str, params: Mapping[str, Any] | None = None) -> list[tuple]:
        conn = self._connection()
        statement, args = _bind(sql, params or {}, self._paramstyle)
        try:
            with closing(conn.cursor()) as cursor:
                cursor.execute(statement, args)
                return [tuple(row) for row in cursor.fetchall()]
        except Exception as exc:
            raise DatabaseError(str(exc)) from exc

    def _execute(self, sql: str, params: Mapping[str, Any] | None = None) -> None:
        conn = self._connection()
        statement, args = _bind(sql, params or {}, self._paramstyle)
        try:
            with closing(conn.cursor()) as cursor:
                cursor.execute(statement, args)
            conn.commit()
        except Exception as exc:
            raise DatabaseError(str(exc)) from exc

    def get_command_count(self) -> int:
        rows = self._query("SELECT total_commands FROM information LIMIT 1")
        if not rows:
            raise DatabaseError("no command count stored")
        return int(rows[0][0])

    def update_command_count(self, count: int) -> None:
        self._execute(
            "UPDATE information SET total_commands = :count", {"count": count}
        )

    def add_webhook(self, feed: WebhookFeed, webhook: str, channel_id: int) -> None:
        if not self.channel_exists(feed, channel_id):
            self._execute(
                f"INSERT INTO {feed.table} (webhook, channel_id) "
                "VALUES (:webhook, :channel_id)",
                {"webhook": webhook, "channel_id": str(channel_id)},
            )

    def channel_exists(self, feed: WebhookFeed, channel_id: int) -> bool:
        rows = self._query(
            f"SELECT EXISTS(SELECT 1 FROM {feed.table} WHERE channel_id = :channel_id)",
            {"channel_id": str(channel_id)},
        )
        if not rows or rows[0][0] is None:
            raise DatabaseError(
                f"Error when checking if channel exists. ({feed.value})"
            )
        return bool(rows[0][0])

    def get_webhook_by_channel(self, feed: WebhookFeed, channel_id: int) -> str:
        rows = self._query(
            f"SELECT webhook FROM {feed.table} WHERE channel_id = :channel_id",
            {"channel_id": str(channel_id)},
        )
        if not rows:
            raise DatabaseError(f"Error when getting webhook by ID. ({feed.value})")
        return rows[0][0]

    def get_all_webhooks(self, feed: WebhookFeed) -> list[str]:
        return [row[0] for row in self._query(f"SELECT webhook FROM {feed.table}")]

    def remove_webhook(self, feed: WebhookFeed, webhook_url: str) -> None:
        self._execute(
            f"DELETE FROM {feed.table} WHERE webhook = :webhook_url",
            {"webhook_url": webhook_url},
        )

    def remove_webhook_by_channel(self, feed: WebhookFeed, channel_id: int) -> None:
        self._execute(
            f"DELETE FROM {feed.table} WHERE channel_id = :channel_id",
            {"channel_id": str(channel_id)},
        )

    def add_reminder(self, reminder: Reminder) -> None:
        self._execute(
            "INSERT INTO reminders (reminder, user_id, timestamp, id) "
            "VALUES (:reminder, :user_id, :timestamp, :id)",
            {
                "reminder": reminder.message,
                "user_id": str(reminder.user_id),
                "timestamp": reminder.timestamp,
                "id": reminder.id,
            },
        )

    def remove_reminder(self, reminder: Reminder) -> None:
        self._execute(
            "DELETE FROM reminders WHERE reminder = :reminder AND user_id = :user_id "
            "AND timestamp = :timestamp AND id = :id",
            {
                "reminder": reminder.message,
                "user_id": str(reminder.user_id),
                "timestamp": reminder.timestamp,
                "id": reminder.id,
            },
        )

    def remove_reminder_by_id(self, reminder_id: int) -> None:
        self._execute("DELETE FROM reminders WHERE id = :id", {"id": reminder_id})

    @staticmethod
    def _to_reminders(rows: list[tuple]) -> list[Reminder]:
        try:
            return [
                Reminder(str(message), int(user_id), int(timestamp), int(rid))
                for message, user_id, timestamp, rid in rows
            ]
        except (TypeError, ValueError) as exc:
            raise DatabaseError(f"malformed reminder row: {exc}") from exc

    def get_all_reminders(self) -> list[Reminder]:
        return self._to_reminders(
            self._query("SELECT reminder, user_id, timestamp, id FROM reminders")
        )

    def get_reminders_of_user(self, user_id: int) -> list[Reminder]:
        return self._to_reminders(
            self._query(
                "SELECT reminder, user_id, timestamp, id FROM reminders "
                "WHERE user_id = :user_id",
                {"user_id": str(user_id)},
            )
        )

    def get_action_count(self, action: str, from_user_id: int, to_user_id: int) -> int:
        params = {
            "action": action,
            "from_user_id": str(from_user_id),
            "to_user_id": str(to_user_id),
        }
        rows = self._query(
            "SELECT amount FROM actions WHERE action = :action "
            "AND from_user_id = :from_user_id AND to_user_id = :to_user_id",
            params,
        )
        if rows:
            return int(rows[0][0])
        self._execute(
            "INSERT INTO actions (action, from_user_id, to_user_id, amount) "
            "VALUES (:action, :from_user_id, :to_user_id, 1)",
            params,
        )
        return 0

    def update_action_count(
        self, action: str, from_user_id: int, to_user_id: int, amount: int
    ) -> None:
        self._execute(
            "UPDATE actions SET amount = :amount WHERE action = :action "
            "AND from_user_id = :from_user_id AND to_user_id = :to_user_id",
            {
                "action": action,
                "from_user_id": str(from_user_id),
                "to_user_id": str(to_user_id),
                "amount": amount,
            },
        )


def mysql_from_env(environ: Mapping[str, str] | None = None) -> SqlDatabase:
    """Connect to MySQL with the ``SQL_*`` settings from the environment."""
    env = os.environ if environ is None else environ
    missing = [key for key in _ENV_KEYS if key not in env]
    if missing:
        raise DatabaseError(f"missing database settings: {', '.join(missing)}")
    try:
        port = int(env["SQL_PORT"])
    except ValueError as exc:
        raise DatabaseError(f"invalid SQL_PORT {env['SQL_PORT']!r}") from exc

    def connect() -> Any:
        return pymysql.connect(
            host=env["SQL_HOST"],
            port=port,
            user=env["SQL_USER"],
            password=env["SQL_PASSWORD"],
            database=env["SQL_DATABASE"],
        )

    return SqlDatabase(connect, paramstyle="pyformat")