from boostkit.options import OptionStore
from boostkit.options import SqlOptionStore


def test_get_returns_default_when_missing(session_factory):
    store = SqlOptionStore(session_factory)

    assert store.get("nope") is None
    assert store.get("nope", {"enabled": False}) == {"enabled": False}


def test_set_then_get_round_trips_mappings(session_factory):
    store = SqlOptionStore(session_factory)
    value = {"enabled": True, "display": {"mode": "all", "max_display": 2}, "show_on": ["top_cart"]}

    assert store.set("boostkit_feature_demo", value) is True
    assert store.get("boostkit_feature_demo") == value


def test_set_overwrites(session_factory):
    store = SqlOptionStore(session_factory)
    store.set("key", {"a": 1})
    store.set("key", {"b": 2})

    assert store.get("key") == {"b": 2}


def test_delete(session_factory):
    store = SqlOptionStore(session_factory)
    store.set("key", "value")

    assert store.delete("key") is True
    assert store.get("key") is None
    assert store.delete("key") is False


def test_write_failures_return_false(broken_session_factory):
    store = SqlOptionStore(broken_session_factory)

    assert store.set("key", {"a": 1}) is False
    assert store.delete("key") is False


def test_satisfies_protocol():
    assert isinstance(SqlOptionStore(), OptionStore)


def test_read_failure_returns_default(broken_session_factory):
    store = SqlOptionStore(broken_session_factory)

    assert store.get("key") is None
    assert store.get("key", {"enabled": False}) == {"enabled": False}
