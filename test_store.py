"""
Tests for last-request-wins publication of article content.
"""

import threading

import pytest

from article_parser import ArticleContentStore, ArticleLoader, ArticleTransformer
from article_parser.schemas import CommonRun, HeaderBlock, ParagraphBlock


@pytest.fixture
def store():
    return ArticleContentStore()


@pytest.fixture
def loader(store):
    with ArticleLoader(store, transformer=ArticleTransformer(sink=lambda d: None), max_workers=2) as loader:
        yield loader


# --- Store ---

def test_publish_current_generation(store):
    generation = store.begin("42")
    assert store.is_loading

    assert store.publish(generation, [HeaderBlock(level=2, text="T")])
    assert store.snapshot() == (HeaderBlock(level=2, text="T"),)
    assert store.article_id == "42"
    assert not store.is_loading


def test_stale_result_is_discarded(store):
    old = store.begin("1")
    new = store.begin("2")

    assert not store.publish(old, [HeaderBlock(level=2, text="old")])
    assert store.snapshot() == ()
    assert store.is_loading

    assert store.publish(new, [HeaderBlock(level=2, text="new")])
    assert store.article_id == "2"
    assert store.snapshot() == (HeaderBlock(level=2, text="new"),)


def test_clear_discards_content_and_in_flight_requests(store):
    store.publish(store.begin("1"), [HeaderBlock(level=2, text="T")])
    pending = store.begin("2")
    store.clear()

    assert not store.publish(pending, [HeaderBlock(level=2, text="late")])
    assert store.snapshot() == ()
    assert store.article_id is None
    assert not store.is_loading


def test_fail_records_error_and_keeps_previous_content(store):
    store.publish(store.begin("1"), [HeaderBlock(level=2, text="T")])
    generation = store.begin("2")

    assert store.fail(generation, "timeout")
    assert store.last_error == "timeout"
    assert not store.is_loading
    assert store.snapshot() == (HeaderBlock(level=2, text="T"),)


# --- Loader ---

def test_load_html_publishes_blocks(store, loader):
    future = loader.load_html("7", "<p>Hello</p>")
    assert future.result(timeout=5)
    assert store.snapshot() == (ParagraphBlock(runs=[CommonRun(text="Hello")]),)
    assert store.article_id == "7"


def test_load_uses_fetcher(store, loader):
    bodies = {"99": "<h3>From network</h3>"}
    future = loader.load("99", bodies.__getitem__)
    assert future.result(timeout=5)
    assert store.snapshot() == (HeaderBlock(level=3, text="From network"),)


def test_slow_older_request_does_not_replace_newer_content(store, loader):
    release = threading.Event()

    def slow_fetch(article_id):
        release.wait(timeout=5)
        return "<h2>Old</h2>"

    slow = loader.load("old", slow_fetch)
    fast = loader.load_html("new", "<h2>New</h2>")
    assert fast.result(timeout=5)

    release.set()
    assert slow.result(timeout=5) is False
    assert store.article_id == "new"
    assert store.snapshot() == (HeaderBlock(level=2, text="New"),)


def test_fetch_failure_is_recorded_not_raised(store, loader):
    def broken_fetch(article_id):
        raise ConnectionError("network down")

    future = loader.load("1", broken_fetch)
    assert future.result(timeout=5) is False
    assert store.last_error == "network down"
    assert not store.is_loading


def test_transform_failure_is_recorded_not_raised(store):
    broken = ArticleTransformer(builder="regex", sink=lambda d: None)
    with ArticleLoader(store, transformer=broken, max_workers=1) as loader:
        future = loader.load_html("1", "<p>x</p>")
        assert future.result(timeout=5) is False
    assert "Unknown tree builder" in store.last_error
    assert not store.is_loading
