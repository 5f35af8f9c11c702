import pytest
from pymongo.errors import PyMongoError

from shibabot.database.base import DatabaseError, WebhookFeed
from shibabot.database.mongo import DB_NAME, MongoDatabase, mongo_from_env
from shibabot.reminders import Reminder


def _matches(document, query):
    return all(document.get(k) == v for k, v in query.items())


class FakeCollection:
    def __init__(self):
        self.docs = []
        self.fail = False

    def _check(self):
        if self.fail:
            raise PyMongoError("boom")

    def find_one(self, query):
        self._check()
        for doc in self.docs:
            if _matches(doc, query):
                return dict(doc)
        return None

    def find(self, query):
        self._check()
        return iter([dict(d) for d in self.docs if _matches(d, query)])

    def insert_one(self, document):
        self._check()
        self.docs.append(dict(document))

    def update_one(self, query, update):
        self._check()
        for doc in self.docs:
            if _matches(doc, query):
                doc.update(update["$set"])
                return

    def delete_one(self, query):
        self._check()
        for i, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[i]
                return


class FakeDb(dict):
    def __missing__(self, key):
        self[key] = FakeCollection()
        return self[key]


class FakeClient(dict):
    def __missing__(self, key):
        self[key] = FakeDb()
        return self[key]


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def db(client):
    return MongoDatabase(client, DB_NAME)


def test_command_count_round_trip(db, client):
    client[DB_NAME]["information"].docs.append({"total_commands": 3})
    db.update_command_count(10)
    assert db.get_command_count() == 10


def test_command_count_missing_document(db):
    with pytest.raises(DatabaseError):
        db.get_command_count()


def test_command_count_non_integer_is_zero(db, client):
    client[DB_NAME]["information"].docs.append({"total_commands": "x"})
    assert db.get_command_count() == 0


def test_webhooks_round_trip(db, client):
    db.add_webhook(WebhookFeed.QOTD, "https://example.com/a", 5)
    db.add_webhook(WebhookFeed.QOTD, "https://example.com/b", 6)
    assert client[DB_NAME]["qotd_webhooks"].docs[0]["channel_id"] == "5"
    assert db.channel_exists(WebhookFeed.QOTD, 5)
    assert not db.channel_exists(WebhookFeed.FOTD, 5)
    assert db.get_webhook_by_channel(WebhookFeed.QOTD, 6) == "https://example.com/b"
    assert db.get_all_webhooks(WebhookFeed.QOTD) == [
        "https://example.com/a",
        "https://example.com/b",
    ]
    db.remove_webhook(WebhookFeed.QOTD, "https://example.com/a")
    db.remove_webhook_by_channel(WebhookFeed.QOTD, 6)
    assert db.get_all_webhooks(WebhookFeed.QOTD) == []


def test_missing_webhook_raises(db):
    with pytest.raises(DatabaseError):
        db.get_webhook_by_channel(WebhookFeed.FOTD, 1)


def test_reminders_round_trip(db):
    first = Reminder("walk", 1, 100, 7)
    second = Reminder("feed", 2, 200, 8)
    db.add_reminder(first)
    db.add_reminder(second)
    assert db.get_all_reminders() == [first, second]
    assert db.get_reminders_of_user(2) == [second]
    db.remove_reminder(first)
    assert db.get_all_reminders() == [second]
    db.remove_reminder_by_id(8)
    assert db.get_all_reminders() == []


def test_malformed_reminder_raises(db, client):
    client[DB_NAME]["reminders"].docs.append(
        {"reminder": "x", "user_id": "abc", "timestamp": "1", "id": "2"}
    )
    with pytest.raises(DatabaseError):
        db.get_all_reminders()


def test_action_count_created_then_updated(db, client):
    assert db.get_action_count("hug", 1, 2) == 0
    assert len(client[DB_NAME]["actions"].docs) == 1
    db.update_action_count("hug", 1, 2, 4)
    assert db.get_action_count("hug", 1, 2) == 4
    assert db.get_action_count("hug", 2, 1) == 0


def test_driver_errors_are_wrapped(db, client):
    client[DB_NAME]["reminders"].fail = True
    with pytest.raises(DatabaseError):
        db.get_all_reminders()


def test_from_env_requires_uri():
    with pytest.raises(DatabaseError):
        mongo_from_env({})


def test_from_env_builds_database():
    db = mongo_from_env({"MONGODB_URI": "mongodb://localhost:27017"})
    try:
        assert db.db_name == DB_NAME
    finally:
        db.close()