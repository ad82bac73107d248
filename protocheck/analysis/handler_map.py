"""Requirement to fault handler routing."""

from typing import Mapping

from ..protocol.sets import difference


def build_handler_map(
    reqs: Mapping[str, frozenset[str]],
    edges: Mapping[str, tuple[str, ...]],
) -> dict[str, dict[str, str]]:
    """Resolve which state to recover to when a requirement is lost.

    For every derived edge ``s -> t`` and every requirement dropped by moving
    to ``t``, ``t`` handles the loss of that requirement in ``s``. When several
    targets drop the same requirement, the one whose requirement set strictly
    includes the current choice replaces it, so the least degraded recovery
    wins. Equal or incomparable candidates keep the first one recorded.

    Args:
        reqs: Requirement set of every state.
        edges: Derived fault handling successors of every state.

    Returns:
        Mapping of state -> requirement -> handler state. Every state has an
        entry, possibly empty.
    """
    handlers: dict[str, dict[str, str]] = {s: {} for s in edges}

    for s, targets in edges.items():
        routes = handlers[s]
        for t in targets:
            for r in sorted(difference(reqs[s], reqs[t])):
                current = routes.get(r)
                if current is None or reqs[t] > reqs[current]:
                    routes[r] = t

    return handlers
