"""Stable-position, last-write-wins deduplication.

Composed snippets, flag completions and catalog records are all
deduplicated by a name with the same rule: the entry produced last wins,
but it takes the list position where that name was first seen.
"""

from collections.abc import Callable, Iterable
from operator import attrgetter

by_name = attrgetter('name')


def deduplicate[T](items: Iterable[T], key: Callable[[T], str] = by_name) -> list[T]:
    """Collapse items sharing a key.

    Args:
        items: Items in production order.
        key: Function returning the deduplication key of an item.
            Defaults to the `name` attribute.

    Returns:
        One item per key, ordered by the first occurrence of each key
        and holding the last produced item for it.
    """
    positions: dict[str, int] = {}
    result: list[T] = []

    for item in items:
        name = key(item)
        if (position := positions.get(name)) is not None:
            result[position] = item
        else:
            positions[name] = len(result)
            result.append(item)

    return result
