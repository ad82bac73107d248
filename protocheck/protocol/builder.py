"""Builder for converting ComponentSpec to ProtocolModel."""

import logging

from ..schema.errors import IngestionError
from ..schema.models import ComponentSpec, ProtocolDocument
from .model import FaultHandler, ProtocolModel, State, Transition
from .sets import EMPTY, make_set

logger = logging.getLogger(__name__)


def build_protocol(component: ComponentSpec) -> ProtocolModel:
    """Build a ProtocolModel from a ComponentSpec.

    Args:
        component: The parsed component description.

    Returns:
        A ProtocolModel for the component.

    Raises:
        IngestionError: If the description references undefined states or
            identifiers, or lacks a unique initial state.
    """
    name = component.name

    if not component.states:
        raise IngestionError(f"Component '{name}' defines no states", component=name)

    initial = [s.name for s in component.states if s.initial]
    if not initial:
        raise IngestionError(
            f"Component '{name}' has states but no initial state defined",
            component=name,
        )
    if len(initial) > 1:
        raise IngestionError(
            f"Component '{name}' has more than one initial state: {', '.join(initial)}",
            component=name,
        )

    capabilities = _vocabulary(
        component.capabilities, (s.capabilities for s in component.states)
    )
    requirements = _vocabulary(
        component.requirements,
        (s.requirements for s in component.states),
        (t.requires for t in component.transitions),
    )

    protocol = ProtocolModel(name, capabilities, requirements)

    for spec in component.states:
        state = State(
            name=spec.name,
            capabilities=make_set(spec.capabilities),
            requirements=make_set(spec.requirements),
            initial=spec.initial,
        )
        _check_declared(name, state.name, "capability", state.capabilities, capabilities)
        _check_declared(name, state.name, "requirement", state.requirements, requirements)
        protocol.add_state(state)

    for spec in component.transitions:
        guard = make_set(spec.requires)
        for from_state in spec.from_states:
            _check_declared(name, from_state, "requirement", guard, requirements)
            protocol.add_transition(
                Transition(
                    source=from_state,
                    target=spec.to,
                    interface=spec.interface,
                    operation=spec.operation,
                    requirements=guard,
                )
            )

    for spec in component.fault_handlers:
        for from_state in spec.from_states:
            protocol.add_fault_handler(FaultHandler(source=from_state, target=spec.to))

    logger.debug(
        "Built protocol for %s: %d states, %d fault handlers",
        name,
        len(component.states),
        len(protocol.fault_handlers()),
    )
    return protocol


def build_protocols(document: ProtocolDocument) -> dict[str, ProtocolModel]:
    """Build a ProtocolModel for every component of a document.

    Raises:
        IngestionError: On the first component that cannot be built.
    """
    return {
        name: build_protocol(component)
        for name, component in document.components.items()
    }


def _vocabulary(declared: list[str] | None, *used) -> frozenset[str]:
    """Declared vocabulary, or the union of everything used."""
    if declared is not None:
        return make_set(declared)
    vocabulary = EMPTY
    for group in used:
        for items in group:
            vocabulary = vocabulary | make_set(items)
    return vocabulary


def _check_declared(
    component: str,
    state: str,
    kind: str,
    used: frozenset[str],
    declared: frozenset[str],
) -> None:
    undeclared = used - declared
    if undeclared:
        raise IngestionError(
            f"State '{state}' uses undeclared {kind}(s): {', '.join(sorted(undeclared))}",
            component=component,
            state=state,
        )
