"""Fault handling verification: well-formedness, determinism and race freedom."""

import logging
from dataclasses import dataclass, field
from itertools import combinations
from typing import Mapping

from ..analysis.closure import (
    HandlerDefect,
    Reachability,
    classify_handler,
    handler_reachability,
)
from ..analysis.derived_edges import derive_edges
from ..analysis.dominance import handler_top
from ..analysis.handler_map import build_handler_map
from ..protocol.model import ProtocolModel
from ..protocol.sets import contains, equals, intersection, make_set, union
from .base import Category, ValidationResult

logger = logging.getLogger(__name__)

_DEFECT_CODES = {
    HandlerDefect.INCREASES_CAPABILITIES: "HANDLER_INCREASES_CAPABILITIES",
    HandlerDefect.INCREASES_REQUIREMENTS: "HANDLER_INCREASES_REQUIREMENTS",
    HandlerDefect.PRESERVES_REQUIREMENTS: "HANDLER_PRESERVES_REQUIREMENTS",
}


@dataclass
class FaultHandlingReport:
    """Everything derived from a component's fault handlers.

    Attributes:
        edges: Derived fault handling successors of every state.
        handlers: Requirement→handler map, state -> requirement -> state.
        top: Dominating handler ancestor of every state.
        reachable: Closure of the valid raw handlers.
        result: Issues found along the way.
    """

    edges: dict[str, tuple[str, ...]] = field(default_factory=dict)
    handlers: dict[str, dict[str, str]] = field(default_factory=dict)
    top: dict[str, str] = field(default_factory=dict)
    reachable: dict[str, frozenset[str]] = field(default_factory=dict)
    result: ValidationResult = field(default_factory=ValidationResult)


def filter_fault_handlers(
    protocol: ProtocolModel,
) -> tuple[dict[str, frozenset[str]], ValidationResult]:
    """Split raw fault handlers into valid direct edges and defects.

    Args:
        protocol: The protocol model.

    Returns:
        Valid direct targets of every state, and errors for rejected handlers.
    """
    result = ValidationResult()
    direct: dict[str, set[str]] = {name: set() for name in protocol.state_names()}

    for handler in protocol.fault_handlers():
        source = protocol.state(handler.source)
        target = protocol.state(handler.target)
        defect = classify_handler(
            source.capabilities,
            source.requirements,
            target.capabilities,
            target.requirements,
        )
        if defect is None:
            direct[handler.source].add(handler.target)
            continue

        result.add_error(
            Category.WELL_FORMEDNESS,
            code=_DEFECT_CODES[defect],
            message=f"Fault handler {handler.source} -> {handler.target} {defect.value}",
            component=protocol.component,
            state=handler.source,
            target=handler.target,
        )

    return {name: make_set(targets) for name, targets in direct.items()}, result


def check_cycles(component: str, reachability: Reachability) -> ValidationResult:
    """Report every fault handler cycle found during closure."""
    result = ValidationResult()

    for state in reachability.cycles:
        result.add_error(
            Category.WELL_FORMEDNESS,
            code="HANDLER_CYCLE",
            message=f"Cycle in fault handlers detected at {state}",
            component=component,
            state=state,
        )

    return result


def check_derived_capabilities(
    component: str,
    caps: Mapping[str, frozenset[str]],
    edges: Mapping[str, tuple[str, ...]],
) -> ValidationResult:
    """Check that no derived recovery gains capabilities.

    Raw handlers are guarded individually, but a derived edge between two
    handler targets of a common ancestor is not, so a sibling may offer
    capabilities its source never had.
    """
    result = ValidationResult()

    for s, targets in edges.items():
        for t in targets:
            gained = caps[t] - caps[s]
            if gained:
                result.add_error(
                    Category.WELL_FORMEDNESS,
                    code="DERIVED_HANDLER_INCREASES_CAPABILITIES",
                    message=(
                        f"Derived fault handler {s} -> {t} increases capabilities "
                        f"({', '.join(sorted(gained))})"
                    ),
                    component=component,
                    state=s,
                    target=t,
                )

    return result


def check_transitivity(
    component: str, edges: Mapping[str, tuple[str, ...]]
) -> ValidationResult:
    """Check that the derived edges are transitively closed.

    Derived edges are closed by construction, so a finding here is an engine
    defect rather than a problem with the protocol. It is logged as such and
    still reported so that nothing is hidden from the caller.
    """
    result = ValidationResult()

    for s, targets in edges.items():
        successors = set(targets)
        for s1 in targets:
            for s2 in edges.get(s1, ()):
                # Siblings with equal requirements link both ways; self edges are never derived
                if s2 == s or s2 in successors:
                    continue
                logger.error(
                    "Internal defect: derived fault handlers %s -> %s -> %s "
                    "are not transitive in %s",
                    s,
                    s1,
                    s2,
                    component,
                )
                result.add_error(
                    Category.RACE_FREEDOM,
                    code="NON_TRANSITIVE_HANDLERS",
                    message=f"Fault handlers {s} -> {s1} -> {s2} are not transitive",
                    component=component,
                    state=s,
                    internal=True,
                )

    return result


def check_determinism(
    component: str,
    reqs: Mapping[str, frozenset[str]],
    edges: Mapping[str, tuple[str, ...]],
) -> ValidationResult:
    """Check that no state has two recovery targets with equal requirements."""
    result = ValidationResult()

    for s, targets in edges.items():
        for s1, s2 in combinations(targets, 2):
            if equals(reqs[s1], reqs[s2]):
                result.add_error(
                    Category.DETERMINISM,
                    code="NONDETERMINISTIC_HANDLERS",
                    message=f"Fault handlers {s} -> {s1}/{s2} are not deterministic",
                    component=component,
                    state=s,
                    targets=[s1, s2],
                )

    return result


def check_co_transitivity(
    component: str,
    reqs: Mapping[str, frozenset[str]],
    edges: Mapping[str, tuple[str, ...]],
) -> ValidationResult:
    """Check that more specific recoveries are wired to less specific ones.

    For successors ``s1`` and ``s2`` of the same state, if ``s1`` requires
    everything ``s2`` does then ``s1 -> s2`` must be a derived edge.
    """
    result = ValidationResult()

    for s, targets in edges.items():
        for s1 in targets:
            wired = set(edges.get(s1, ()))
            for s2 in targets:
                if s1 == s2 or s2 in wired:
                    continue
                if contains(reqs[s1], reqs[s2]):
                    result.add_error(
                        Category.RACE_FREEDOM,
                        code="NON_CO_TRANSITIVE_HANDLERS",
                        message=f"Fault handlers {s} -> {s1} -?> {s2} are not co-transitive",
                        component=component,
                        state=s,
                        targets=[s1, s2],
                    )

    return result


def check_coverage(
    component: str,
    reqs: Mapping[str, frozenset[str]],
    edges: Mapping[str, tuple[str, ...]],
) -> ValidationResult:
    """Check that concurrent faults can be resolved together.

    For every pair of successors of a state there must be a successor that
    keeps the union of their requirements, and one that keeps no more than
    their intersection.
    """
    result = ValidationResult()

    for s, targets in edges.items():
        for s1, s2 in combinations(targets, 2):
            both = union(reqs[s1], reqs[s2])
            shared = intersection(reqs[s1], reqs[s2])

            if not any(contains(reqs[s3], both) for s3 in targets):
                result.add_error(
                    Category.RACE_FREEDOM,
                    code="MISSING_UNION",
                    message=f"Nondeterministic fault handlers {s} -> {s1}|{s2} (missing union)",
                    component=component,
                    state=s,
                    targets=[s1, s2],
                )
            if not any(contains(shared, reqs[s3]) for s3 in targets):
                result.add_error(
                    Category.RACE_FREEDOM,
                    code="MISSING_INTERSECTION",
                    message=f"Nondeterministic fault handlers {s} -> {s1}|{s2} (missing intersection)",
                    component=component,
                    state=s,
                    targets=[s1, s2],
                )

    return result


def analyze_fault_handling(protocol: ProtocolModel) -> FaultHandlingReport:
    """Run the full fault handling analysis of one component.

    The analysis never stops early: even with defective or cyclic handlers it
    returns every derived structure it could compute, along with the issues.

    Args:
        protocol: The protocol model.

    Returns:
        FaultHandlingReport with derived edges, handler map and issues.
    """
    component = protocol.component
    states = protocol.state_names()
    reqs = protocol.requirements_map()

    direct, result = filter_fault_handlers(protocol)

    reachability = handler_reachability(direct, states)
    result.merge(check_cycles(component, reachability))

    top = handler_top(reqs, reachability.reachable, states)
    edges = derive_edges(reqs, reachability.reachable, top, states)

    caps = {state.name: state.capabilities for state in protocol.states()}
    result.merge(check_derived_capabilities(component, caps, edges))
    result.merge(check_transitivity(component, edges))
    result.merge(check_determinism(component, reqs, edges))
    result.merge(check_co_transitivity(component, reqs, edges))
    result.merge(check_coverage(component, reqs, edges))

    handlers = build_handler_map(reqs, edges)

    logger.debug(
        "Fault handling analysis of %s: %d derived edges, %d issues",
        component,
        sum(len(targets) for targets in edges.values()),
        len(result.issues),
    )

    return FaultHandlingReport(
        edges=edges,
        handlers=handlers,
        top=top,
        reachable=reachability.reachable,
        result=result,
    )
