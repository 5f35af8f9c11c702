import pytest

from shibabot.counter import CommandCounter, route_interaction
from shibabot.database.base import Database, DatabaseError


class FakeDb(Database):
    def __init__(self, count=0, fail_get=False, fail_update=False):
        self.count = count
        self.fail_get = fail_get
        self.fail_update = fail_update
        self.updates = []

    def get_command_count(self):
        if self.fail_get:
            raise DatabaseError("down")
        return self.count

    def update_command_count(self, count):
        if self.fail_update:
            raise DatabaseError("down")
        self.updates.append(count)

    def add_webhook(self, feed, webhook, channel_id):
        raise NotImplementedError

    def channel_exists(self, feed, channel_id):
        raise NotImplementedError

    def get_webhook_by_channel(self, feed, channel_id):
        raise NotImplementedError

    def get_all_webhooks(self, feed):
        raise NotImplementedError

    def remove_webhook(self, feed, webhook_url):
        raise NotImplementedError

    def remove_webhook_by_channel(self, feed, channel_id):
        raise NotImplementedError

    def add_reminder(self, reminder):
        raise NotImplementedError

    def remove_reminder(self, reminder):
        raise NotImplementedError

    def remove_reminder_by_id(self, reminder_id):
        raise NotImplementedError

    def get_all_reminders(self):
        raise NotImplementedError

    def get_reminders_of_user(self, user_id):
        raise NotImplementedError

    def get_action_count(self, action, from_user_id, to_user_id):
        raise NotImplementedError

    def update_action_count(self, action, from_user_id, to_user_id, amount):
        raise NotImplementedError


def test_get_reads_database_when_unknown():
    counter = CommandCounter(FakeDb(count=41))
    assert counter.get() == 41


def test_failed_read_reports_zero():
    counter = CommandCounter(FakeDb(fail_get=True))
    assert counter.get() == 0


def test_first_record_loads_then_stores_and_increments():
    db = FakeDb(count=41)
    counter = CommandCounter(db)
    counter.record()
    assert db.updates == []
    assert counter.get() == 41
    counter.record()
    assert db.updates == [41]
    assert counter.get() == 42


def test_failed_store_keeps_count():
    db = FakeDb(count=5)
    counter = CommandCounter(db)
    counter.record()
    db.fail_update = True
    counter.record()
    assert counter.get() == 5


@pytest.mark.parametrize("custom_id", ["tod_truth", "tod_dare", "tod_random"])
def test_truth_or_dare_ids_are_routed(custom_id):
    assert route_interaction(custom_id) == "truth_or_dare"


def test_unknown_interaction_is_unrouted():
    assert route_interaction("something_else") is None