import json

import httpx
import pytest

from shibabot.delivery import (
    API_BASE,
    REMINDER_EMBED_COLOR,
    DeliveryError,
    DiscordRest,
    deliver_reminder,
    reminder_embed,
    run_reminder,
)
from shibabot.reminders import Reminder


class _FakeDatabase:
    def __init__(self):
        self.removed = []

    def remove_reminder(self, reminder):
        self.removed.append(reminder)


def _rest(handler):
    requests = []

    def recording(request):
        requests.append(request)
        return handler(request)

    client = httpx.Client(transport=httpx.MockTransport(recording))
    return DiscordRest("token", client), requests


def _ok_handler(request):
    if request.url.path.endswith("/users/@me/channels"):
        return httpx.Response(200, json={"id": "555"})
    return httpx.Response(200, json={})


def test_open_dm_returns_channel_and_sends_recipient():
    rest, requests = _rest(_ok_handler)
    assert rest.open_dm(77) == "555"
    request = requests[0]
    assert str(request.url) == f"{API_BASE}/users/@me/channels"
    assert request.headers["Authorization"] == "Bot token"
    assert json.loads(request.content) == {"recipients": ["77"]}


def test_send_embed_posts_to_channel():
    rest, requests = _rest(_ok_handler)
    embed = {"title": "Reminder"}
    rest.send_embed("555", embed)
    request = requests[0]
    assert str(request.url) == f"{API_BASE}/channels/555/messages"
    assert json.loads(request.content) == {"content": None, "embeds": [embed]}


def test_open_dm_http_error_raises():
    rest, _ = _rest(lambda request: httpx.Response(500))
    with pytest.raises(DeliveryError):
        rest.open_dm(1)


def test_open_dm_missing_id_raises():
    rest, _ = _rest(lambda request: httpx.Response(200, json={}))
    with pytest.raises(DeliveryError):
        rest.open_dm(1)


def test_reminder_embed_fields():
    embed = reminder_embed(Reminder("feed the dog", 1, 0, 9))
    assert embed["title"] == "Reminder"
    assert embed["description"] == "feed the dog"
    assert embed["color"] == REMINDER_EMBED_COLOR == 12957813
    assert embed["footer"]["text"] == (
        "You asked to be reminded at 1970-01-01 00:00:00 UTC"
    )


def test_deliver_reminder_sends_and_removes():
    rest, requests = _rest(_ok_handler)
    database = _FakeDatabase()
    reminder = Reminder("stretch", 42, 100, 3)
    deliver_reminder(reminder, rest, database)
    assert database.removed == [reminder]
    assert len(requests) == 2
    body = json.loads(requests[1].content)
    assert body["embeds"][0]["description"] == "stretch"


def test_deliver_failure_keeps_reminder_in_database():
    rest, _ = _rest(lambda request: httpx.Response(403))
    database = _FakeDatabase()
    with pytest.raises(DeliveryError):
        deliver_reminder(Reminder("x", 1, 1, 1), rest, database)
    assert database.removed == []


def test_run_reminder_waits_until_due():
    rest, requests = _rest(_ok_handler)
    database = _FakeDatabase()
    now = [100.0]
    delivered_at = []

    def sleep(seconds):
        now[0] += seconds

    class _RecordingDatabase(_FakeDatabase):
        def remove_reminder(self, reminder):
            delivered_at.append(now[0])
            super().remove_reminder(reminder)

    database = _RecordingDatabase()
    reminder = Reminder("later", 5, 105, 8)
    run_reminder(reminder, rest, database, clock=lambda: now[0], sleep=sleep)
    assert database.removed == [reminder]
    assert delivered_at[0] >= reminder.timestamp
    assert len(requests) == 2


def test_run_reminder_due_immediately_does_not_sleep():
    rest, _ = _rest(_ok_handler)
    database = _FakeDatabase()
    sleeps = []
    reminder = Reminder("now", 5, 10, 8)
    run_reminder(reminder, rest, database, clock=lambda: 50.0, sleep=sleeps.append)
    assert sleeps == []
    assert database.removed == [reminder]