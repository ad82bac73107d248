"""Immutable set algebra over capability, requirement and state identifiers.

Sets are plain ``frozenset[str]`` values, so equality is structural and every
operation below returns a new value.
"""

from typing import Iterable, Mapping

EMPTY: frozenset[str] = frozenset()


def make_set(items: Iterable[str] | None = None) -> frozenset[str]:
    """Build a set from any iterable of identifiers."""
    if items is None:
        return EMPTY
    return frozenset(items)


def union(a: frozenset[str], b: frozenset[str]) -> frozenset[str]:
    return a | b


def intersection(a: frozenset[str], b: frozenset[str]) -> frozenset[str]:
    return a & b


def difference(a: frozenset[str], b: frozenset[str]) -> frozenset[str]:
    """Elements of ``a`` that are not in ``b``."""
    return a - b


def contains(a: frozenset[str], b: frozenset[str]) -> bool:
    """Check whether ``b`` is a subset of ``a``."""
    return b <= a


def equals(a: frozenset[str], b: frozenset[str]) -> bool:
    return a == b


def ordered(items: Iterable[str], order: Mapping[str, int]) -> list[str]:
    """Sort identifiers by their rank in ``order``.

    Identifiers missing from ``order`` go last, sorted by name.

    Args:
        items: The identifiers to sort.
        order: Rank of each known identifier, usually declaration order.

    Returns:
        A new list with a stable, process-independent ordering.
    """
    missing = len(order)
    return sorted(items, key=lambda item: (order.get(item, missing), item))
