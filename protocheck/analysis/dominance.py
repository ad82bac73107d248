"""Dominance selection over the fault handler closure."""

from typing import Mapping, Sequence

from ..protocol.sets import contains, ordered


def handler_top(
    reqs: Mapping[str, frozenset[str]],
    reachable: Mapping[str, frozenset[str]],
    states: Sequence[str],
) -> dict[str, str]:
    """Select, for every state, the outermost handler ancestor reaching it.

    Every state starts as its own top. Then, for every state ``t`` and every
    ``s`` reachable from ``t``, ``t`` becomes the top of ``s`` when the
    requirements of ``t`` include those of the current top of ``s``.

    Requirement sets are only partially ordered, so the outcome for
    incomparable ancestors depends on enumeration order. Both loops follow
    ``states`` so the result is stable for a given declaration order.

    Args:
        reqs: Requirement set of every state.
        reachable: Fault handler closure of every state.
        states: Every state, in enumeration order.

    Returns:
        Mapping from each state to its top.
    """
    order = {name: index for index, name in enumerate(states)}
    top = {s: s for s in states}

    for t in states:
        for s in ordered(reachable.get(t, ()), order):
            if contains(reqs[t], reqs[top[s]]):
                top[s] = t

    return top
