"""Sorting and positioning of aggregated records.

Ties keep their input order: Python's sort is stable, also with
``reverse=True``.

Example:
    >>> ranked = rank_records(players, keys=("points", "games"))
    >>> [p.position for p in ranked]
    [1, 2, 3]
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import replace
from operator import attrgetter
from typing import TypeVar

R = TypeVar("R")


def _normalize_keys(keys: str | Sequence[str]) -> tuple[str, ...]:
    if isinstance(keys, str):
        keys = (keys,)
    keys = tuple(keys)
    if not keys:
        raise ValueError("At least one sort key is required")
    return keys


def sort_records(
    records: Iterable[R],
    keys: str | Sequence[str] = "points",
    descending: bool = True,
) -> list[R]:
    """Sort records by one or more attributes.

    Args:
        records: Records exposing the key attributes.
        keys: Attribute name, or names compared in order.
        descending: Sort direction for all keys.

    Returns:
        New sorted list. Records with equal keys keep their input order.

    Raises:
        ValueError: If no key is given.
        AttributeError: If a record lacks a key attribute.
    """
    getter = attrgetter(*_normalize_keys(keys))
    return sorted(records, key=getter, reverse=descending)


def assign_positions(records: Iterable[R]) -> list[R]:
    """Return copies of dataclass records with ``position = index + 1``."""
    positioned: list[R] = []
    for index, record in enumerate(records):
        positioned.append(replace(record, position=index + 1))  # type: ignore[type-var]
    return positioned


def rank_records(
    records: Iterable[R],
    keys: str | Sequence[str] = "points",
    descending: bool = True,
) -> list[R]:
    """Sort records and assign 1-based positions.

    Records must be dataclasses with a ``position`` field.
    """
    return assign_positions(sort_records(records, keys=keys, descending=descending))

