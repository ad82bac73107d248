"""Per-component summaries of operations and fault recovery."""

from dataclasses import dataclass, field

from .model import ProtocolModel


@dataclass
class OperationSummary:
    """Where an operation leads from a state, and the guards it may need."""

    target: str
    requirements: list[frozenset[str]] = field(default_factory=list)


@dataclass
class StateSummary:
    """Capabilities, requirements, operations and recovery routes of a state."""

    name: str
    alive: bool
    capabilities: frozenset[str]
    requirements: frozenset[str]
    operations: dict[str, OperationSummary] = field(default_factory=dict)
    handlers: dict[str, str] = field(default_factory=dict)


@dataclass
class NodeSummary:
    """Summary of one component, ready for topology-level composition."""

    component: str
    initial_state: str | None
    capabilities: frozenset[str]
    requirements: frozenset[str]
    operations: frozenset[str]
    states: dict[str, StateSummary] = field(default_factory=dict)
    ready_state: str | None = None


def build_node_summary(
    protocol: ProtocolModel,
    handlers: dict[str, dict[str, str]],
    is_valid: bool = True,
) -> NodeSummary:
    """Summarize a protocol together with its requirement→handler map.

    When one operation leads to different targets from the same state, the
    first declared target is kept; the conflict itself is reported by the
    operation determinism check.

    Args:
        protocol: The protocol model.
        handlers: Requirement→handler map from the fault handling analysis.
        is_valid: Whether analysis found no errors. Only a valid component
            exposes a ready state.

    Returns:
        The NodeSummary.
    """
    initial = protocol.initial_state()
    operations: set[str] = set()
    states: dict[str, StateSummary] = {}

    for state in protocol.states():
        state_ops: dict[str, OperationSummary] = {}
        for transition in protocol.outgoing_transitions(state.name):
            op_name = transition.operation_name
            operations.add(op_name)
            previous = state_ops.get(op_name)
            if previous is None:
                state_ops[op_name] = OperationSummary(
                    transition.target, [transition.requirements]
                )
            elif previous.target == transition.target:
                previous.requirements.append(transition.requirements)

        states[state.name] = StateSummary(
            name=state.name,
            alive=state.name != initial,
            capabilities=state.capabilities,
            requirements=state.requirements,
            operations=state_ops,
            handlers=dict(handlers.get(state.name, {})),
        )

    return NodeSummary(
        component=protocol.component,
        initial_state=initial,
        capabilities=protocol.capabilities(),
        requirements=protocol.requirements(),
        operations=frozenset(operations),
        states=states,
        ready_state=initial if is_valid else None,
    )
