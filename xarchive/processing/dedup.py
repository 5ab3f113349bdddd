"""Deduplication and ordering of collected items."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..models import ItemRecord


def deduplicate_and_sort(items: Iterable[ItemRecord]) -> list[ItemRecord]:
    """Drop repeated identities and order by creation time ascending.

    The first occurrence of an identity in input order wins. Ties on the
    creation time are broken by the identity string, so the output order is
    total and the function is idempotent.

    Args:
        items: Items in accumulation order (may contain duplicates)

    Returns:
        New list of unique items sorted by (created_at, id)
    """
    seen: set[str] = set()
    unique: list[ItemRecord] = []
    for item in items:
        if item.id in seen:
            continue
        seen.add(item.id)
        unique.append(item)
    unique.sort(key=lambda item: item.sort_key)
    return unique


def truncate(items: Sequence[ItemRecord], target_count: int) -> list[ItemRecord]:
    """Keep the first ``target_count`` items of an already ordered collection."""
    if target_count <= 0:
        return []
    return list(items[:target_count])


def oldest(items: Sequence[ItemRecord], count: int = 10) -> list[ItemRecord]:
    """The ``count`` oldest items of a sorted collection, oldest first."""
    return truncate(items, count)


def newest(items: Sequence[ItemRecord], count: int = 10) -> list[ItemRecord]:
    """The ``count`` newest items of a sorted collection, newest first."""
    if count <= 0:
        return []
    return list(reversed(items[-count:]))


def search(items: Iterable[ItemRecord], term: str) -> list[ItemRecord]:
    """Items whose text contains ``term``, ignoring case."""
    needle = term.casefold()
    return [item for item in items if needle in item.text.casefold()]
