"""Post-processing of collected timeline items."""

from .dedup import deduplicate_and_sort, newest, oldest, search, truncate

__all__ = [
    "deduplicate_and_sort",
    "newest",
    "oldest",
    "search",
    "truncate",
]
