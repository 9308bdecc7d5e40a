"""Unit tests for the tag-invalidated query cache."""

from feedback_app.client.query_cache import QueryCache


def test_fetch_loads_once():
    cache = QueryCache()
    calls = []

    def loader():
        calls.append(1)
        return ["form"]

    assert cache.fetch(("forms",), [("Forms", "LIST")], loader) == ["form"]
    assert cache.fetch(("forms",), [("Forms", "LIST")], loader) == ["form"]
    assert len(calls) == 1


def test_invalidate_drops_entries_providing_any_tag():
    cache = QueryCache()
    cache.provide(("forms",), [], [("Forms", "LIST")])
    cache.provide(("form", "1"), {}, [("Form", "1")])
    cache.provide(("responses", "1"), [], [("Responses", "1"), ("Responses", "LIST")])

    dropped = cache.invalidate([("Responses", "LIST"), ("Form", "1")])

    assert set(dropped) == {("form", "1"), ("responses", "1")}
    assert ("forms",) in cache
    assert len(cache) == 1


def test_cached_none_is_not_reloaded():
    cache = QueryCache()
    calls = []

    def loader():
        calls.append(1)
        return None

    cache.fetch(("thing",), [], loader)
    cache.fetch(("thing",), [], loader)
    assert len(calls) == 1


def test_subscribers_are_notified_until_unsubscribed():
    cache = QueryCache()
    cache.provide(("forms",), [], [("Forms", "LIST")])
    events = []
    unsubscribe = cache.subscribe(lambda tags, dropped: events.append((tags, dropped)))

    cache.invalidate([("Forms", "LIST")])
    unsubscribe()
    cache.invalidate([("Forms", "LIST")])

    assert events == [({("Forms", "LIST")}, [("forms",)])]


def test_clear():
    cache = QueryCache()
    cache.provide(("a",), 1, [("A", "1")])
    cache.provide(("b",), 2, [("B", "1")])

    cache.clear()

    assert len(cache) == 0
