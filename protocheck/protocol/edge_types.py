"""Edge type definitions for the protocol graph."""

from enum import Enum


class EdgeType(str, Enum):
    """Types of edges between protocol states."""

    TRANSITION = "transition"  # Operation-driven
    FAULT_HANDLER = "fault_handler"  # Recovery when requirements are lost
