"""Fault handler closure, dominance, derived edges and handler routing."""

from .closure import HandlerDefect, Reachability, classify_handler, handler_reachability
from .derived_edges import derive_edges
from .dominance import handler_top
from .handler_map import build_handler_map

__all__ = [
    "HandlerDefect",
    "Reachability",
    "classify_handler",
    "handler_reachability",
    "derive_edges",
    "handler_top",
    "build_handler_map",
]
