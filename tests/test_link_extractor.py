# File: tests/test_link_extractor.py
import pytest

from link_scout.crawler.link_extractor import extract_links, is_followable, normalize_link

ORIGIN = "https://x.test"


def test_extract_links_filters_and_dedups(sample_html):
    assert extract_links(ORIGIN, sample_html, ORIGIN) == [f"{ORIGIN}/about"]


def test_extract_links_keeps_document_order():
    html = '<a href="/b">b</a><a href="/a">a</a><a href="/b/">b again</a><a href="/c">c</a>'
    assert extract_links(ORIGIN, html, ORIGIN) == [f"{ORIGIN}/b", f"{ORIGIN}/a", f"{ORIGIN}/c"]


@pytest.mark.parametrize(
    "href,expected",
    [
        ("/about", "https://x.test/about"),
        ("/about/", "https://x.test/about"),
        ("https://x.test/docs/", "https://x.test/docs"),
        ("  /padded ", "https://x.test/padded"),
        ("//x.test/proto-relative/", "https://x.test/proto-relative"),
        ("relative/page", "relative/page"),
        ("/", "https://x.test"),
    ],
)
def test_normalize_link(href, expected):
    assert normalize_link(href, ORIGIN) == expected


@pytest.mark.parametrize("url", ["https://x.test/foo/", "https://x.test/foo//", "/foo", "https://x.test"])
def test_normalize_link_is_idempotent(url):
    once = normalize_link(url, ORIGIN)
    assert normalize_link(once, ORIGIN) == once


def test_normalize_link_rejects_malformed_host():
    with pytest.raises(ValueError):
        normalize_link("http://[::1/broken", ORIGIN)


def test_malformed_href_is_skipped():
    html = '<a href="http://[::1/broken">bad</a><a href="/ok">ok</a>'
    assert extract_links(ORIGIN, html, ORIGIN) == [f"{ORIGIN}/ok"]


def test_self_link_suppression_uses_substring_match():
    page = f"{ORIGIN}/docs/guide"
    html = '<a href="/docs/guide">self</a><a href="/docs">parent</a><a href="/doc">prefix</a><a href="/docs/api">sibling</a>'
    assert extract_links(page, html, ORIGIN) == [f"{ORIGIN}/docs/api"]


def test_is_followable():
    page = f"{ORIGIN}/a"
    assert is_followable(f"{ORIGIN}/b", page, ORIGIN)
    assert not is_followable("https://other.test/b", page, ORIGIN)
    assert not is_followable(f"{ORIGIN}/cdn-cgi/l/email-protection", page, ORIGIN)
    assert not is_followable(f"{ORIGIN}/skip-me", page, ORIGIN, skip_marker="skip-me")
    assert not is_followable("mailto:foo@x.test", page, ORIGIN)


def test_non_anchor_links_are_ignored():
    html = '<link href="/style.css"><img src="/logo.png"><area href="/map"><a href="/real">r</a>'
    assert extract_links(ORIGIN, html, ORIGIN) == [f"{ORIGIN}/real"]


@pytest.mark.parametrize("body", ["", "<<<not html at all", "<a href='/x'", "\x00\x01\x02"])
def test_garbage_markup_does_not_raise(body):
    assert isinstance(extract_links(ORIGIN, body, ORIGIN), list)
