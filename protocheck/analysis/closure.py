"""Well-formedness guard and transitive closure over fault handler edges."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Sequence

from ..protocol.sets import contains, equals, ordered

logger = logging.getLogger(__name__)


class HandlerDefect(str, Enum):
    """Reasons a raw fault handler is rejected before closure."""

    INCREASES_CAPABILITIES = "increases capabilities"
    INCREASES_REQUIREMENTS = "increases requirements"
    PRESERVES_REQUIREMENTS = "preserves requirements"


def classify_handler(
    source_caps: frozenset[str],
    source_reqs: frozenset[str],
    target_caps: frozenset[str],
    target_reqs: frozenset[str],
) -> HandlerDefect | None:
    """Check a fault handler against the well-formedness guard.

    A handler must not add capabilities and must strictly shrink the
    requirement set. Defects are checked in a fixed order and only the first
    one found is returned.

    Returns:
        The defect, or None if the handler is well formed.
    """
    if not contains(source_caps, target_caps):
        return HandlerDefect.INCREASES_CAPABILITIES
    if not contains(source_reqs, target_reqs):
        return HandlerDefect.INCREASES_REQUIREMENTS
    if equals(source_reqs, target_reqs):
        return HandlerDefect.PRESERVES_REQUIREMENTS
    return None


class _Color(Enum):
    UNVISITED = 0
    IN_PROGRESS = 1
    DONE = 2


@dataclass
class Reachability:
    """Result of the fault handler closure.

    Attributes:
        reachable: States transitively reachable from each state.
        cycles: States at which a handler cycle closes, once per closing edge.
    """

    reachable: dict[str, frozenset[str]] = field(default_factory=dict)
    cycles: list[str] = field(default_factory=list)

    @property
    def has_cycles(self) -> bool:
        return len(self.cycles) > 0


def handler_reachability(
    direct: Mapping[str, frozenset[str]], states: Sequence[str]
) -> Reachability:
    """Compute the transitive closure of the direct handler relation.

    Uses an explicit-stack depth-first traversal. Each state's reachable set is
    extended with the reachable set of every successor once that successor is
    finished (post-order). Meeting a state that is still in progress closes a
    cycle: it is recorded and traversal continues with whatever partial
    closure that state has, so the walk always terminates.

    Args:
        direct: Valid direct handler targets of each state.
        states: Every state, in the enumeration order to use.

    Returns:
        The closure and the states where cycles were detected.
    """
    order = {name: index for index, name in enumerate(states)}
    reach: dict[str, set[str]] = {s: set(direct.get(s, ())) for s in states}
    color = {s: _Color.UNVISITED for s in states}
    cycles: list[str] = []

    for root in states:
        if color[root] is not _Color.UNVISITED:
            continue

        color[root] = _Color.IN_PROGRESS
        stack = [(root, iter(ordered(reach[root], order)))]

        while stack:
            current, successors = stack[-1]
            descended = False

            for succ in successors:
                if color[succ] is _Color.UNVISITED:
                    color[succ] = _Color.IN_PROGRESS
                    stack.append((succ, iter(ordered(reach[succ], order))))
                    descended = True
                    break
                if color[succ] is _Color.IN_PROGRESS:
                    logger.debug("Fault handler cycle closes at %s", succ)
                    cycles.append(succ)
                reach[current] |= reach[succ]

            if descended:
                continue

            stack.pop()
            color[current] = _Color.DONE
            if stack:
                parent = stack[-1][0]
                reach[parent] |= reach[current]

    return Reachability(
        reachable={s: frozenset(reach[s]) for s in states},
        cycles=cycles,
    )
