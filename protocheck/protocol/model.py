"""ProtocolModel wrapper around networkx for management protocols."""

from dataclasses import dataclass

import networkx as nx

from ..schema.errors import IngestionError
from .edge_types import EdgeType
from .sets import EMPTY


@dataclass(frozen=True)
class State:
    """A protocol state and the capabilities/requirements it exposes."""

    name: str
    capabilities: frozenset[str] = EMPTY
    requirements: frozenset[str] = EMPTY
    initial: bool = False


@dataclass(frozen=True)
class Transition:
    """A non-fault transition triggered by a management operation."""

    source: str
    target: str
    interface: str
    operation: str
    requirements: frozenset[str] = EMPTY

    @property
    def operation_name(self) -> str:
        """Qualified operation name, ``interface:operation``."""
        if self.interface:
            return f"{self.interface}:{self.operation}"
        return self.operation


@dataclass(frozen=True)
class FaultHandler:
    """A raw, author-supplied recovery edge."""

    source: str
    target: str


class ProtocolModel:
    """A graph representation of one component's management protocol.

    Wraps a networkx MultiDiGraph whose nodes are states and whose edges are
    typed as transitions or fault handlers. The model is filled once by the
    builder and only read afterwards.
    """

    def __init__(
        self,
        component: str,
        capabilities: frozenset[str] = EMPTY,
        requirements: frozenset[str] = EMPTY,
    ):
        self.component = component
        self._capabilities = capabilities
        self._requirements = requirements
        self._graph = nx.MultiDiGraph()
        self._fault_handlers: list[FaultHandler] = []

    @property
    def graph(self) -> nx.MultiDiGraph:
        """Get the underlying networkx graph."""
        return self._graph

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def add_state(self, state: State) -> None:
        """Add a state node.

        Raises:
            IngestionError: If a state with the same name already exists.
        """
        if self._graph.has_node(state.name):
            raise IngestionError(
                f"State '{state.name}' is defined more than once",
                component=self.component,
                state=state.name,
            )
        self._graph.add_node(state.name, state=state)

    def add_transition(self, transition: Transition) -> None:
        """Add a transition edge between two defined states.

        Raises:
            IngestionError: If either endpoint is undefined.
        """
        self._require_state(transition.source, "Transition")
        self._require_state(transition.target, "Transition")
        self._graph.add_edge(
            transition.source,
            transition.target,
            edge_type=EdgeType.TRANSITION,
            transition=transition,
        )

    def add_fault_handler(self, handler: FaultHandler) -> None:
        """Add a raw fault handler edge between two defined states.

        Raises:
            IngestionError: If either endpoint is undefined.
        """
        self._require_state(handler.source, "Fault handler")
        self._require_state(handler.target, "Fault handler")
        self._graph.add_edge(
            handler.source,
            handler.target,
            edge_type=EdgeType.FAULT_HANDLER,
            handler=handler,
        )
        self._fault_handlers.append(handler)

    def _require_state(self, name: str, kind: str) -> None:
        if not self._graph.has_node(name):
            raise IngestionError(
                f"{kind} references undefined state '{name}'",
                component=self.component,
                state=name,
            )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def states(self) -> list[State]:
        """Get all states in declaration order."""
        return [data["state"] for _, data in self._graph.nodes(data=True)]

    def state(self, name: str) -> State | None:
        """Get a state by name."""
        if self._graph.has_node(name):
            return self._graph.nodes[name]["state"]
        return None

    def state_names(self) -> list[str]:
        return list(self._graph.nodes)

    def state_order(self) -> dict[str, int]:
        """Rank of each state in declaration order."""
        return {name: index for index, name in enumerate(self._graph.nodes)}

    def initial_state(self) -> str | None:
        """Get the initial state name."""
        for state in self.states():
            if state.initial:
                return state.name
        return None

    def capabilities(self) -> frozenset[str]:
        """Capability vocabulary of the component."""
        return self._capabilities

    def requirements(self) -> frozenset[str]:
        """Requirement vocabulary of the component."""
        return self._requirements

    def requirements_map(self) -> dict[str, frozenset[str]]:
        """Requirement set of every state, keyed by state name."""
        return {state.name: state.requirements for state in self.states()}

    def outgoing_transitions(self, state_name: str) -> list[Transition]:
        """Get all operation transitions leaving a state."""
        if not self._graph.has_node(state_name):
            return []
        return [
            data["transition"]
            for _, _, data in self._graph.out_edges(state_name, data=True)
            if data.get("edge_type") == EdgeType.TRANSITION
        ]

    def fault_handlers(self) -> list[FaultHandler]:
        """Get all raw fault handlers in declaration order.

        Graph edges are grouped by source node, so the handlers are also kept
        in a list as they are added.
        """
        return list(self._fault_handlers)

    def reachable_states(self) -> set[str]:
        """Get all states reachable from the initial state.

        Both transitions and fault handlers are followed.
        """
        initial = self.initial_state()
        if initial is None:
            return set()
        return {initial} | nx.descendants(self._graph, initial)
