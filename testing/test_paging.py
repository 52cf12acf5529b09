#!/usr/bin/env python
"""
Tests for the paged fetch contract: windows, continuation keys and refresh keys.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

import pytest

from articlefeed.models import MIN_KEY, AnchorState
from articlefeed.paging import InvalidArgumentError, ensure_valid_key


def test_first_page_without_key(source):
    page = source.fetch_page(None, 50)

    assert [article.id for article in page.records] == list(range(0, 50))
    assert page.prev_key is None
    assert page.next_key == 50


def test_second_page(source):
    page = source.fetch_page(50, 50)

    assert [article.id for article in page.records] == list(range(50, 100))
    assert page.prev_key == 0
    assert page.next_key == 100


def test_prev_key_is_clamped_to_min_key(source):
    page = source.fetch_page(30, 50)

    assert page.prev_key == 0
    assert page.next_key == 80


def test_explicit_min_key_has_no_prev_key(source):
    page = source.fetch_page(MIN_KEY, 10)

    assert page.prev_key is None
    assert page.first_key == MIN_KEY


@pytest.mark.parametrize("start,page_size", [(1, 1), (7, 3), (100, 50), (12345, 20)])
def test_page_is_contiguous_window(source, start, page_size):
    page = source.fetch_page(start, page_size)

    assert len(page.records) == page_size
    assert [article.id for article in page.records] == list(range(start, start + page_size))
    assert page.next_key == start + page_size
    assert page.prev_key == max(MIN_KEY, start - page_size)


def test_next_key_chains_into_following_page(source):
    first = source.fetch_page(None, 25)
    second = source.fetch_page(first.next_key, 25)

    assert second.first_key == first.last_key + 1
    assert second.prev_key == first.first_key


def test_prev_key_uses_requested_page_size(source):
    # Page sizes differ between calls, so prev_key does not land on the earlier page's start
    page = source.fetch_page(60, 20)

    assert page.prev_key == 40


def test_fetch_page_is_idempotent(source):
    assert source.fetch_page(75, 30) == source.fetch_page(75, 30)
    assert source.fetch_page(75, 30).model_dump_json() == source.fetch_page(75, 30).model_dump_json()


@pytest.mark.parametrize("page_size", [0, -1, -50])
def test_non_positive_page_size_is_rejected(source, page_size):
    with pytest.raises(InvalidArgumentError):
        source.fetch_page(None, page_size)


def test_invalid_argument_is_a_value_error(source):
    with pytest.raises(ValueError):
        source.fetch_page(10, 0)


def test_refresh_key_without_anchor(source):
    assert source.compute_refresh_key(None) is None


def test_refresh_key_centres_on_anchor(source):
    assert source.compute_refresh_key(AnchorState(anchor_key=120, page_size=50)) == 95


def test_refresh_key_truncates_half_page(source):
    assert source.compute_refresh_key(AnchorState(anchor_key=100, page_size=25)) == 88


def test_refresh_key_is_clamped_to_min_key(source):
    assert source.compute_refresh_key(AnchorState(anchor_key=10, page_size=50)) == MIN_KEY
    assert source.compute_refresh_key(AnchorState(anchor_key=0, page_size=50)) == MIN_KEY


def test_refresh_key_feeds_back_into_fetch(source):
    key = source.compute_refresh_key(AnchorState(anchor_key=120, page_size=50))
    page = source.fetch_page(key, 50)

    assert page.first_key == 95
    assert 120 in [article.id for article in page.records]


def test_ensure_valid_key():
    assert ensure_valid_key(-5) == MIN_KEY
    assert ensure_valid_key(MIN_KEY) == MIN_KEY
    assert ensure_valid_key(17) == 17


def test_fetch_page_far_past_the_epoch(source):
    page = source.fetch_page(800_000, 2)

    assert [article.id for article in page.records] == [800_000, 800_001]
    assert page.records[0].created_at == datetime.min
    assert page.prev_key == 799_998
    assert page.next_key == 800_002


def test_concurrent_adjacent_windows_match_sequential(source):
    page_size = 25
    keys = [None] + [page_size * n for n in range(1, 16)]
    with ThreadPoolExecutor(max_workers=8) as executor:
        pages = list(executor.map(lambda key: source.fetch_page(key, page_size), keys))

    assert pages == [source.fetch_page(key, page_size) for key in keys]

    ids = [article.id for page in pages for article in page.records]
    assert ids == list(range(page_size * len(keys)))
    for page, following in zip(pages, pages[1:]):
        assert page.next_key == following.first_key
