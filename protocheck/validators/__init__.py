"""Validators for management protocol verification."""

from .base import Category, Issue, Severity, ValidationResult
from .fault_handling import (
    FaultHandlingReport,
    analyze_fault_handling,
    check_co_transitivity,
    check_coverage,
    check_derived_capabilities,
    check_cycles,
    check_determinism,
    check_transitivity,
    filter_fault_handlers,
)
from .operations import check_operation_determinism
from .reachability import check_unreachable_states
from .runner import (
    ComponentReport,
    DocumentReport,
    run_validators,
    verify_document,
    verify_file,
)

__all__ = [
    "Category",
    "Issue",
    "Severity",
    "ValidationResult",
    "FaultHandlingReport",
    "analyze_fault_handling",
    "check_co_transitivity",
    "check_coverage",
    "check_derived_capabilities",
    "check_cycles",
    "check_determinism",
    "check_transitivity",
    "filter_fault_handlers",
    "check_operation_determinism",
    "check_unreachable_states",
    "ComponentReport",
    "DocumentReport",
    "run_validators",
    "verify_document",
    "verify_file",
]
