"""State reachability validator."""

from ..protocol.model import ProtocolModel
from .base import Category, ValidationResult


def check_unreachable_states(protocol: ProtocolModel) -> ValidationResult:
    """Check for states that cannot be reached from the initial state.

    Both operations and fault handlers count as ways to reach a state. An
    unreachable state usually means a missing transition or a leftover state.

    Args:
        protocol: The protocol model.

    Returns:
        ValidationResult with warnings for unreachable states.
    """
    result = ValidationResult()

    initial = protocol.initial_state()
    if initial is None:
        return result

    reachable = protocol.reachable_states()
    for state_name in protocol.state_names():
        if state_name not in reachable:
            result.add_warning(
                Category.WELL_FORMEDNESS,
                code="UNREACHABLE_STATE",
                message=f"State '{state_name}' cannot be reached from initial state '{initial}'",
                component=protocol.component,
                state=state_name,
            )

    return result
