"""Tests for requirement to handler routing."""

from protocheck.analysis.handler_map import build_handler_map


def fs(*items):
    return frozenset(items)


class TestBuildHandlerMap:
    def test_layered_chain(self):
        reqs = {"A": fs("r1", "r2"), "B": fs("r2"), "C": fs()}
        edges = {"A": ("B", "C"), "B": ("C",), "C": ()}

        handlers = build_handler_map(reqs, edges)

        assert handlers == {
            "A": {"r1": "B", "r2": "C"},
            "B": {"r2": "C"},
            "C": {},
        }

    def test_least_degraded_target_wins_regardless_of_order(self):
        reqs = {"A": fs("r1", "r2"), "B": fs("r2"), "C": fs()}

        forward = build_handler_map(reqs, {"A": ("B", "C")})
        backward = build_handler_map(reqs, {"A": ("C", "B")})

        assert forward["A"]["r1"] == "B"
        assert backward["A"]["r1"] == "B"

    def test_incomparable_targets_keep_first(self):
        reqs = {"A": fs("r", "x", "y"), "P": fs("x"), "Q": fs("y")}

        handlers = build_handler_map(reqs, {"A": ("P", "Q")})

        assert handlers["A"]["r"] == "P"

    def test_equal_targets_keep_first(self):
        reqs = {"A": fs("r", "x"), "P": fs("x"), "Q": fs("x")}

        handlers = build_handler_map(reqs, {"A": ("P", "Q")})

        assert handlers["A"]["r"] == "P"

    def test_handler_drops_requirement_and_shrinks(self):
        reqs = {"A": fs("r1", "r2", "r3"), "B": fs("r2", "r3"), "C": fs("r3"), "D": fs()}
        edges = {"A": ("B", "C", "D"), "B": ("C", "D"), "C": ("D",), "D": ()}

        handlers = build_handler_map(reqs, edges)

        for s, routes in handlers.items():
            for r, t in routes.items():
                assert r not in reqs[t]
                assert reqs[t] < reqs[s]

    def test_state_without_edges_has_empty_routes(self):
        handlers = build_handler_map({"A": fs("r")}, {"A": ()})

        assert handlers == {"A": {}}
