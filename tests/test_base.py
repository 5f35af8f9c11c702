import pytest

from shibabot.database.base import Database, DatabaseError, WebhookFeed


@pytest.mark.parametrize(
    ("feed", "table"),
    [(WebhookFeed.QOTD, "qotd_webhooks"), (WebhookFeed.FOTD, "fotd_webhooks")],
)
def test_feed_table_names(feed, table):
    assert feed.table == table


def test_feed_lookup_by_value():
    assert WebhookFeed("qotd") is WebhookFeed.QOTD
    assert WebhookFeed("fotd") is WebhookFeed.FOTD


def test_unknown_feed_rejected():
    with pytest.raises(ValueError):
        WebhookFeed("weekly")


def test_database_cannot_be_instantiated():
    with pytest.raises(TypeError, match="abstract"):
        Database()


def test_database_error_carries_message():
    err = DatabaseError("no connection")
    assert str(err) == "no connection"
    assert err.args == ("no connection",)