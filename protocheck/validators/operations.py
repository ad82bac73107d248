"""Operation determinism validator."""

from ..protocol.model import ProtocolModel
from .base import Category, ValidationResult


def check_operation_determinism(protocol: ProtocolModel) -> ValidationResult:
    """Check that each operation leads to a single target from a state.

    The same operation may be declared several times from one state, for
    example with alternative guard requirements, but all of those transitions
    must agree on the target state.

    Args:
        protocol: The protocol model.

    Returns:
        ValidationResult with errors for nondeterministic operations.
    """
    result = ValidationResult()

    for state in protocol.states():
        targets: dict[str, str] = {}
        for transition in protocol.outgoing_transitions(state.name):
            op_name = transition.operation_name
            previous = targets.setdefault(op_name, transition.target)
            if previous != transition.target:
                result.add_error(
                    Category.DETERMINISM,
                    code="NONDETERMINISTIC_OPERATION",
                    message=(
                        f"Nondeterministic operation {state.name} -[{op_name}]-> "
                        f"{transition.target} / {previous}"
                    ),
                    component=protocol.component,
                    state=state.name,
                    operation=op_name,
                )

    return result
