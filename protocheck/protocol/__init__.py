"""Protocol layer: states, transitions and fault handlers of a component."""

from .edge_types import EdgeType
from .model import FaultHandler, ProtocolModel, State, Transition
from .builder import build_protocol, build_protocols
from .summary import NodeSummary, OperationSummary, StateSummary, build_node_summary

__all__ = [
    "EdgeType",
    "FaultHandler",
    "ProtocolModel",
    "State",
    "Transition",
    "build_protocol",
    "build_protocols",
    "NodeSummary",
    "OperationSummary",
    "StateSummary",
    "build_node_summary",
]
