"""Choosing and opening the configured database backend."""

from __future__ import annotations

import os
from collections.abc import Mapping

from shibabot.database.base import Database
from shibabot.database.mongo import mongo_from_env
from shibabot.database.sql import mysql_from_env

BACKEND_ENV = "DATABASE_BACKEND"
DEFAULT_BACKEND = "mysql"

_OPENERS = {
    "mysql": mysql_from_env,
    "mongodb": mongo_from_env,
}


def open_database(
    backend: str | None = None, environ: Mapping[str, str] | None = None
) -> Database:
    """Open the named backend (``mysql`` or ``mongodb``) from the environment.

    Without a name, ``DATABASE_BACKEND`` is consulted, defaulting to MySQL.
    Raises ``ValueError`` for an unknown backend.
    """
    env = os.environ if environ is None else environ
    name = (backend or env.get(BACKEND_ENV, DEFAULT_BACKEND)).strip().lower()
    opener = _OPENERS.get(name)
    if opener is None:
        known = ", ".join(sorted(_OPENERS))
        raise ValueError(f"unknown database backend {name!r}; expected one of {known}")
    return opener(env)