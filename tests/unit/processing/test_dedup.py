"""Unit tests for deduplication, ordering and the collection helpers."""

import random

from xarchive.processing import deduplicate_and_sort, newest, oldest, search, truncate


def test_first_occurrence_wins(make_item):
    first = make_item("1", 10, text="first")
    repeat = make_item("1", 10, text="repeat")

    result = deduplicate_and_sort([first, make_item("2", 5), repeat])

    assert [item.id for item in result] == ["2", "1"]
    assert result[1].text == "first"


def test_idempotent(make_item):
    items = [make_item(str(n % 7), n % 4) for n in range(30)]
    once = deduplicate_and_sort(items)
    assert deduplicate_and_sort(once) == once


def test_sort_totality(make_item):
    rng = random.Random(7)
    items = [make_item(f"id-{rng.randrange(50)}", rng.randrange(5)) for _ in range(200)]

    result = deduplicate_and_sort(items)

    for a, b in zip(result, result[1:]):
        assert a.created_at <= b.created_at
        if a.created_at == b.created_at:
            assert a.id <= b.id


def test_empty_input():
    assert deduplicate_and_sort([]) == []


def test_truncate(make_item):
    items = [make_item(str(n), n) for n in range(5)]
    assert [item.id for item in truncate(items, 3)] == ["0", "1", "2"]
    assert truncate(items, 10) == items
    assert truncate(items, 0) == []


def test_oldest_and_newest(make_item):
    items = [make_item(str(n), n) for n in range(5)]
    assert [item.id for item in oldest(items, 2)] == ["0", "1"]
    assert [item.id for item in newest(items, 2)] == ["4", "3"]
    assert newest(items, 0) == []


def test_search_ignores_case(make_item):
    items = [make_item("1", text="Shipping the Release"), make_item("2", text="lunch")]
    assert [item.id for item in search(items, "release")] == ["1"]
    assert search(items, "missing") == []
