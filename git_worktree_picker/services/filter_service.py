"""Fuzzy filtering of picker entries."""

from typing import Callable, List, Sequence, TypeVar

from textual.fuzzy import Matcher

T = TypeVar("T")


def fuzzy_filter(query: str, items: Sequence[T], key: Callable[[T], str] = str) -> List[T]:
    """Items matching ``query``, best match first. An empty query keeps all items."""
    query = query.strip()
    if not query:
        return list(items)

    matcher = Matcher(query, case_sensitive=False)
    scored = [(matcher.match(key(item)), index, item) for index, item in enumerate(items)]
    scored = [entry for entry in scored if entry[0] > 0]
    scored.sort(key=lambda entry: (-entry[0], entry[1]))
    return [item for _, _, item in scored]
