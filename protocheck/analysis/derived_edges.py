"""Construction of the derived, requirement-monotone fault handling relation."""

from typing import Mapping, Sequence

from ..protocol.sets import contains, ordered


def derive_edges(
    reqs: Mapping[str, frozenset[str]],
    reachable: Mapping[str, frozenset[str]],
    top: Mapping[str, str],
    states: Sequence[str],
) -> dict[str, tuple[str, ...]]:
    """Build the derived fault handling edges.

    A state ``s`` gets an edge to every other state ``t`` in the closure of
    its top whose requirements are included in those of ``s``. Siblings with
    equal requirement sets therefore get edges in both directions; the
    determinism check reports them at their common top.

    Returns:
        Successors of every state, in enumeration order. States without
        successors map to an empty tuple.
    """
    order = {name: index for index, name in enumerate(states)}
    edges: dict[str, tuple[str, ...]] = {}

    for s in states:
        edges[s] = tuple(
            t
            for t in ordered(reachable.get(top[s], ()), order)
            if t != s and contains(reqs[s], reqs[t])
        )

    return edges
