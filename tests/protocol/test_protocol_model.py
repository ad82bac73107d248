"""Tests for ProtocolModel."""

import pytest

from protocheck.protocol.edge_types import EdgeType
from protocheck.protocol.model import FaultHandler, ProtocolModel, State, Transition
from protocheck.protocol.sets import make_set
from protocheck.schema.errors import IngestionError


@pytest.fixture
def protocol():
    protocol = ProtocolModel("Server")
    protocol.add_state(State("stopped", initial=True))
    protocol.add_state(
        State("running", make_set(["endpoint"]), make_set(["host"]))
    )
    protocol.add_state(State("spare"))
    protocol.add_transition(
        Transition("stopped", "running", "lifecycle", "start", make_set(["host"]))
    )
    protocol.add_fault_handler(FaultHandler("running", "stopped"))
    return protocol


class TestConstruction:
    def test_duplicate_state_rejected(self, protocol):
        with pytest.raises(IngestionError) as exc_info:
            protocol.add_state(State("running"))

        assert exc_info.value.component == "Server"
        assert exc_info.value.state == "running"

    def test_transition_to_undefined_state_rejected(self, protocol):
        with pytest.raises(IngestionError) as exc_info:
            protocol.add_transition(Transition("running", "ghost", "lc", "stop"))

        assert "undefined state 'ghost'" in str(exc_info.value)

    def test_fault_handler_from_undefined_state_rejected(self, protocol):
        with pytest.raises(IngestionError) as exc_info:
            protocol.add_fault_handler(FaultHandler("ghost", "stopped"))

        assert exc_info.value.state == "ghost"

    def test_edges_are_typed(self, protocol):
        edge_types = {
            data["edge_type"] for _, _, data in protocol.graph.edges(data=True)
        }

        assert edge_types == {EdgeType.TRANSITION, EdgeType.FAULT_HANDLER}


class TestQueries:
    def test_states_in_declaration_order(self, protocol):
        assert protocol.state_names() == ["stopped", "running", "spare"]
        assert protocol.state_order() == {"stopped": 0, "running": 1, "spare": 2}

    def test_state_lookup(self, protocol):
        assert protocol.state("running").requirements == {"host"}
        assert protocol.state("ghost") is None

    def test_initial_state(self, protocol):
        assert protocol.initial_state() == "stopped"

    def test_outgoing_transitions(self, protocol):
        transitions = protocol.outgoing_transitions("stopped")

        assert len(transitions) == 1
        assert transitions[0].target == "running"
        assert transitions[0].operation_name == "lifecycle:start"
        assert protocol.outgoing_transitions("running") == []
        assert protocol.outgoing_transitions("ghost") == []

    def test_operation_name_without_interface(self):
        assert Transition("a", "b", "", "start").operation_name == "start"

    def test_fault_handlers(self, protocol):
        assert protocol.fault_handlers() == [FaultHandler("running", "stopped")]

    def test_fault_handlers_in_declaration_order(self, protocol):
        protocol.add_fault_handler(FaultHandler("spare", "running"))
        protocol.add_fault_handler(FaultHandler("stopped", "spare"))

        assert protocol.fault_handlers() == [
            FaultHandler("running", "stopped"),
            FaultHandler("spare", "running"),
            FaultHandler("stopped", "spare"),
        ]

    def test_rejected_fault_handler_not_recorded(self, protocol):
        with pytest.raises(IngestionError):
            protocol.add_fault_handler(FaultHandler("running", "ghost"))

        assert protocol.fault_handlers() == [FaultHandler("running", "stopped")]

    def test_requirements_map(self, protocol):
        assert protocol.requirements_map() == {
            "stopped": frozenset(),
            "running": frozenset({"host"}),
            "spare": frozenset(),
        }

    def test_reachable_states(self, protocol):
        assert protocol.reachable_states() == {"stopped", "running"}

    def test_no_initial_state_reaches_nothing(self):
        protocol = ProtocolModel("Empty")
        protocol.add_state(State("lonely"))

        assert protocol.initial_state() is None
        assert protocol.reachable_states() == set()
