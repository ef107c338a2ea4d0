# File: tests/test_registry.py
import pytest

from link_scout.crawler.registry import UrlRegistry


@pytest.fixture()
def registry() -> UrlRegistry:
    reg = UrlRegistry()
    reg.register_if_absent("https://x.test/a", "https://x.test")
    reg.register_if_absent("https://x.test/b", "https://x.test")
    return reg


def test_register_if_absent_keeps_first_discoverer(registry):
    registry.register_if_absent("https://x.test/a", "https://x.test/b")

    assert len(registry) == 2
    assert registry.get("https://x.test/a").referring_page == "https://x.test"


def test_new_record_defaults(registry):
    record = registry.get("https://x.test/a")
    assert record.visited is False
    assert record.broken is None
    assert record.status is None


def test_repeated_discovery_sequence_has_one_record_per_url():
    reg = UrlRegistry()
    events = [("/a", "p1"), ("/b", "p1"), ("/a", "p2"), ("/c", "p3"), ("/b", "p3"), ("/a", "p3")]
    for url, page in events:
        reg.register_if_absent(url, page)

    assert [r.url for r in reg.all_records()] == ["/a", "/b", "/c"]
    assert {r.url: r.referring_page for r in reg.all_records()} == {"/a": "p1", "/b": "p1", "/c": "p3"}


def test_mark_visited_is_idempotent(registry):
    registry.mark_visited("https://x.test/a")
    registry.mark_visited("https://x.test/a")

    assert registry.get("https://x.test/a").visited is True
    assert list(registry.unvisited_urls()) == ["https://x.test/b"]


def test_set_broken(registry):
    registry.set_broken("https://x.test/a", True, status=404)
    registry.set_broken("https://x.test/b", True, error="timeout")

    a, b = registry.all_records()
    assert (a.broken, a.status, a.error) == (True, 404, None)
    assert (b.broken, b.status, b.error) == (True, None, "timeout")


def test_mutating_unknown_url_raises(registry):
    with pytest.raises(KeyError):
        registry.mark_visited("https://x.test/unknown")
    with pytest.raises(KeyError):
        registry.set_broken("https://x.test/unknown", True)


def test_unvisited_urls_tolerates_growth(registry):
    seen = []
    for url in registry.unvisited_urls():
        seen.append(url)
        registry.mark_visited(url)
        registry.register_if_absent(url + "/child", url)

    assert seen == ["https://x.test/a", "https://x.test/b"]
    assert list(registry.unvisited_urls()) == ["https://x.test/a/child", "https://x.test/b/child"]


def test_draining_unvisited_urls_terminates(registry):
    # finite graph: every page links to a and b
    rounds = 0
    while not registry.is_complete:
        rounds += 1
        for url in registry.unvisited_urls():
            registry.mark_visited(url)
            registry.register_if_absent("https://x.test/a", url)
            registry.register_if_absent("https://x.test/b", url)
    assert rounds == 1
    assert len(registry) == 2


def test_contains(registry):
    assert "https://x.test/a" in registry
    assert "https://x.test/z" not in registry
    assert registry.get("https://x.test/z") is None
