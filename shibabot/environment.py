"""Loading ``KEY=value`` settings from a dotenv file."""

from __future__ import annotations

import os
from collections.abc import Iterator, MutableMapping
from pathlib import Path


def parse_env_text(text: str) -> list[tuple[str, str]]:
    """Parse dotenv text into ``(key, value)`` pairs.

    Lines starting with ``#`` are comments; double quotes are dropped and
    lines without ``=`` are ignored. Only the first ``=`` splits a line.
    """
    return list(_iter_pairs(text))


def _iter_pairs(text: str) -> Iterator[tuple[str, str]]:
    for line in text.splitlines():
        if line.startswith("#"):
            continue
        key, sep, value = line.replace('"', "").partition("=")
        if sep:
            yield key, value


def load_env(
    path: str | os.PathLike[str] = ".env",
    environ: MutableMapping[str, str] | None = None,
) -> dict[str, str]:
    """Read a dotenv file and store its values in ``environ``.

    Raises ``FileNotFoundError`` when the file is missing and ``ValueError``
    for an entry with an empty name. Returns the values that were set.
    """
    target = os.environ if environ is None else environ
    text = Path(path).read_text(encoding="utf-8")
    loaded: dict[str, str] = {}
    for key, value in parse_env_text(text):
        if not key:
            raise ValueError(f"empty variable name in {os.fspath(path)!r}")
        target[key] = value
        loaded[key] = value
    return loaded