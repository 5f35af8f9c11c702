# shibabot

Building blocks for a chat bot, kept independent of any chat client library
so that each part can be used and tested on its own. The package is a
library: it has no command-line entry point.

## What is in it

- `shibabot.configuration` – the rotating presence activities.
  `ActivityKind` names the kind (playing, listening, watching, competing),
  `Activity.render(servers)` fills the `@` placeholder with a server count,
  and `random_activity(servers, rng)` picks one of `ACTIVITIES` at random.
- `shibabot.environment` – `.env` files. `parse_env_text(text)` returns
  `(key, value)` pairs, skipping lines that start with `#`, dropping double
  quotes and ignoring lines without `=`. `load_env(path, environ)` stores the
  values in `environ` (by default `os.environ`) and returns them; it raises
  `FileNotFoundError` for a missing file and `ValueError` for an empty name.
- `shibabot.timeparse` – `parse_timestamp(text)` turns `10s`, `5 minutes` or
  `2 days` into a frozen `Timestamp` (`seconds`, `minutes`, `hours`, `days`,
  `unit`). The unit is chosen by its first letter through
  `unit_from_text`; an unknown unit gives an all-zero timestamp with
  `Unit.UNKNOWN`, and text without exactly one number raises `ValueError`.
- `shibabot.sysinfo` – `get_os_string()` names the host system (Docker
  container, WSL, the os-release `ID`, a Windows caption, FreeBSD or
  `Unknown`); `get_version_string()` returns the short git revision of
  `main` by running `git`; `parse_os_release_id(text)` reads the `ID` entry.
- `shibabot.constants` – embed colours, emoji and image links.
- `shibabot.reminders` – the frozen `Reminder` record
  (`message`, `user_id`, `timestamp`, `id`; `Reminder.new_random` draws a
  random 64-bit id), the in-memory `ReminderCache` grouped by user that drops
  reminders whose time has come, and `parse_reminder_id(text)`, which reads
  the id out of text such as `"walk the dog (ID: 42)"`.
- `shibabot.reminder_commands` – `schedule_reminder` creates a reminder from
  a delay such as `10 mins` and returns it with the confirmation text;
  `describe_delay` phrases the delay; `autocomplete_reminders` offers
  `"message (ID: n)"` choices from the cache or, failing that, the database;
  `remove_reminder` removes a reminder from both by its id.
- `shibabot.delivery` – `DiscordRest` posts to the chat service's REST API
  with a bot token (`open_dm`, `send_embed`), raising `DeliveryError` on
  failure. `reminder_embed` builds the reminder message, `deliver_reminder`
  sends it and deletes the reminder from the database, and `run_reminder`
  waits, checking once a second, until the reminder is due.
- `shibabot.polls` – `poll_outcome(yes_votes, no_votes)` gives a
  `PollOutcome` (`YES`, `NO`, `TIE`); `poll_embed` builds the running or
  finished poll embed; `poll_finished_message` pings the poll's author.
- `shibabot.database` – storage.
  - `base`: the abstract `Database` interface, `WebhookFeed` (`QOTD`,
    `FOTD`, each with its own `<feed>_webhooks` table) and `DatabaseError`.
  - `sql`: `SqlDatabase` over any DB-API connection factory, with `:name`
    placeholders rewritten for the `named`, `qmark`, `format` or `pyformat`
    parameter style, and a reconnect once the connection is older than
    `max_age` (seven hours by default). `mysql_from_env(environ)` connects
    with PyMySQL using `SQL_HOST`, `SQL_PORT`, `SQL_USER`, `SQL_PASSWORD`
    and `SQL_DATABASE`.
  - `mongo`: `MongoDatabase` over a MongoDB client (database `ShibaBot`,
    identifiers stored as strings); `mongo_from_env(environ)` reads
    `MONGODB_URI`.
  - `factory`: `open_database(backend, environ)` opens `mysql` or
    `mongodb`, falling back to the `DATABASE_BACKEND` variable and then
    MySQL; any other name raises `ValueError`.
- `shibabot.counter` – `CommandCounter` keeps the total number of commands
  run: `get()` reads it (a failed read is logged and gives 0) and `record()`
  loads it on first use, then stores and increases it.
  `route_interaction(custom_id)` returns `"truth_or_dare"` for the
  `tod_truth`, `tod_dare` and `tod_random` buttons and logs anything else.
- `shibabot.logger` – `setup_logging(level, log_file, webhook_url)` adds a
  coloured console handler (`ConsoleFormatter`), an appending file handler
  (`PlainFormatter`, default file `shiba.log`) and, given a URL, a
  `WebhookHandler` to the root logger. Without a level, `LOG_LEVEL` is used,
  defaulting to errors only; `LOGGING_MENTIONS` (comma separated user ids)
  adds mentions to error lines in the file and webhook output.
- `shibabot.embeds` – embeds as plain dictionaries: `info_embed`,
  `host_stats_embed` (with `HostStats`, `collect_host_stats` via psutil and
  `bytes_to_gb`), `invite_embed`, `serverinfo_embed`, `userinfo_embed`,
  `purge_embed`, plus `purge_limit(amount)` (one extra message for the bot's
  own reply, at most 100) and `suggestion_text(user_id, text)` (10 to 1900
  characters, `@` defused).

## Examples

Parsing a delay:

```python
from shibabot.timeparse import parse_timestamp, Unit

stamp = parse_timestamp("10 minutes")
assert stamp.unit is Unit.MINUTES
assert stamp.seconds == 600
```

Loading settings and opening storage:

```python
import os
from shibabot.environment import load_env
from shibabot.database.factory import open_database

load_env(".env", os.environ)
database = open_database("mysql", os.environ)
```

Keeping reminders in memory:

```python
import time
from shibabot.reminders import Reminder, ReminderCache

cache = ReminderCache(time.time)
reminder = Reminder.new_random("water the plants", 42, int(time.time()) + 60)
cache.add(reminder, True)
print(cache.get_reminders_of_user(42))
```

Scoring a poll:

```python
from shibabot.polls import PollOutcome, poll_embed, poll_outcome

outcome = poll_outcome(yes_votes=3, no_votes=1)
assert outcome is PollOutcome.YES
embed = poll_embed("Pizza tonight?", 1_700_000_000, outcome, finished=True)
```

## What it does not do

- It does not connect to a chat gateway, register slash commands or run a
  bot; the embeds and texts it builds must be sent by the caller's client.
  Only reminder delivery talks to the chat service directly, through
  `DiscordRest`.
- It has no truth-or-dare, would-you-rather, action or daily question and
  fact features. `route_interaction` only names the truth-or-dare handler;
  `WebhookFeed` and the action-count methods only store data for them.
- The SQL back end does not create its tables (`information`,
  `qotd_webhooks`, `fotd_webhooks`, `reminders`, `actions`); they must
  already exist.

## Tests

The test suite uses pytest and is installed with the `test` extra.