"""Logging to a coloured console, a log file and a chat webhook."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterable

import httpx

LOG_FILE = "shiba.log"
TIMESTAMP_FORMAT = "%d-%m-%Y %H:%M:%S"
LEVEL_ENV = "LOG_LEVEL"
MENTIONS_ENV = "LOGGING_MENTIONS"

_RESET = "\x1b[0m"
_GREY = (131, 141, 140)
_LEVEL_COLORS = {
    "ERROR": (255, 0, 0),
    "WARN": (255, 255, 0),
    "INFO": (79, 184, 150),
    "DEBUG": (0, 255, 255),
    "TRACE": (0, 0, 255),
}
_QUIET_LOGGERS = ("httpx", "httpcore")


def _fg(rgb: tuple[int, int, int]) -> str:
    r, g, b = rgb
    return f"\x1b[38;2;{r};{g};{b}m"


def _level_name(levelno: int) -> str:
    if levelno >= logging.ERROR:
        return "ERROR"
    if levelno >= logging.WARNING:
        return "WARN"
    if levelno >= logging.INFO:
        return "INFO"
    if levelno >= logging.DEBUG:
        return "DEBUG"
    return "TRACE"


class _BaseFormatter(logging.Formatter):
    def _message(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


class ConsoleFormatter(_BaseFormatter):
    """Coloured ``[timestamp LEVEL module] message`` lines for a terminal."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, TIMESTAMP_FORMAT)
        level = _level_name(record.levelno)
        grey = _fg(_GREY)
        return (
            f"{grey}[{_RESET}{timestamp}"
            f"{_fg(_LEVEL_COLORS[level])} {level} {_RESET}{record.name}"
            f"{grey}] {_RESET}{self._message(record)}"
        )


class PlainFormatter(_BaseFormatter):
    """Uncoloured lines for files and webhooks; errors can mention users."""

    def __init__(self, mentions: Iterable[int | str] = ()) -> None:
        super().__init__()
        self.mentions = tuple(str(m) for m in mentions)

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, TIMESTAMP_FORMAT)
        level = _level_name(record.levelno)
        text = f"[{timestamp} {level} {record.name}] {self._message(record)}"
        if level == "ERROR" and self.mentions:
            text += "".join(f" <@{m}>" for m in self.mentions)
        return text


class WebhookHandler(logging.Handler):
    """Post each formatted record as the content of a webhook message."""

    def __init__(self, url: str, client: httpx.Client | None = None) -> None:
        super().__init__()
        self.url = url
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=10.0)
        self.addFilter(lambda record: not record.name.startswith(_QUIET_LOGGERS))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            content = self.format(record)
            response = self._client.post(self.url, json={"content": content})
            response.raise_for_status()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
        super().close()


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = os.environ.get(LEVEL_ENV, "ERROR")
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    aliases = {"WARN": "WARNING", "TRACE": "DEBUG"}
    value = logging.getLevelName(aliases.get(name, name))
    if not isinstance(value, int):
        raise ValueError(f"unknown log level {level!r}")
    return value


def _mentions_from_env() -> tuple[str, ...]:
    raw = os.environ.get(MENTIONS_ENV, "")
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def setup_logging(
    level: int | str | None = None,
    log_file: str | os.PathLike[str] = LOG_FILE,
    webhook_url: str | None = None,
) -> logging.Logger:
    """Attach console, file and optional webhook handlers to the root logger.

    Without an explicit level the ``LOG_LEVEL`` variable is used, falling
    back to errors only.
    """
    root = logging.getLogger()
    root.setLevel(_resolve_level(level))
    mentions = _mentions_from_env()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(ConsoleFormatter())
    root.addHandler(console)

    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setFormatter(PlainFormatter(mentions))
    root.addHandler(file_handler)

    if webhook_url:
        webhook = WebhookHandler(webhook_url)
        webhook.setFormatter(PlainFormatter(mentions))
        root.addHandler(webhook)

    return root