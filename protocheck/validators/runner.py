"""Verification runner that orchestrates all validators."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..protocol.builder import build_protocol
from ..protocol.model import ProtocolModel
from ..protocol.summary import NodeSummary, build_node_summary
from ..schema.errors import IngestionError
from ..schema.loader import parse_document
from ..schema.models import ProtocolDocument
from .base import Category, ValidationResult
from .fault_handling import FaultHandlingReport, analyze_fault_handling
from .operations import check_operation_determinism
from .reachability import check_unreachable_states

logger = logging.getLogger(__name__)


@dataclass
class ComponentReport:
    """Verification outcome of a single component.

    ``fault_handling`` and ``summary`` are None when the component could not
    be ingested.
    """

    component: str
    result: ValidationResult = field(default_factory=ValidationResult)
    fault_handling: FaultHandlingReport | None = None
    summary: NodeSummary | None = None


@dataclass
class DocumentReport:
    """Verification outcome of every component in a document."""

    components: list[ComponentReport] = field(default_factory=list)

    @property
    def result(self) -> ValidationResult:
        """All issues of all components, in component order."""
        combined = ValidationResult()
        for report in self.components:
            combined.merge(report.result)
        return combined

    @property
    def has_errors(self) -> bool:
        return any(r.result.has_errors for r in self.components)

    @property
    def has_warnings(self) -> bool:
        return any(r.result.has_warnings for r in self.components)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    def get_component(self, name: str) -> ComponentReport | None:
        for report in self.components:
            if report.component == name:
                return report
        return None


def run_validators(protocol: ProtocolModel) -> ComponentReport:
    """Run all validators on one protocol.

    Args:
        protocol: The protocol model.

    Returns:
        ComponentReport with issues, fault handling analysis and summary.
    """
    result = ValidationResult()

    # Operations first, then fault handling
    result.merge(check_operation_determinism(protocol))

    fault_handling = analyze_fault_handling(protocol)
    result.merge(fault_handling.result)

    result.merge(check_unreachable_states(protocol))

    summary = build_node_summary(
        protocol, fault_handling.handlers, is_valid=result.is_valid
    )

    return ComponentReport(
        component=protocol.component,
        result=result,
        fault_handling=fault_handling,
        summary=summary,
    )


def verify_document(
    document: ProtocolDocument, components: list[str] | None = None
) -> DocumentReport:
    """Verify the components of a document independently.

    A component that cannot be ingested is reported with an INGESTION_ERROR
    issue; the remaining components are still verified.

    Args:
        document: The parsed document.
        components: Names of the components to verify, or None for all.

    Returns:
        DocumentReport with one ComponentReport per verified component.

    Raises:
        IngestionError: If a requested component is not in the document.
    """
    names = components if components is not None else document.get_component_names()
    report = DocumentReport()

    for name in names:
        spec = document.get_component(name)
        if spec is None:
            raise IngestionError(f"Unknown component '{name}'", component=name)

        try:
            protocol = build_protocol(spec)
        except IngestionError as e:
            logger.warning("Skipping analysis of %s: %s", name, e)
            failed = ComponentReport(component=name)
            failed.result.add_error(
                Category.WELL_FORMEDNESS,
                code="INGESTION_ERROR",
                message=str(e),
                component=name,
                state=e.state,
            )
            report.components.append(failed)
            continue

        report.components.append(run_validators(protocol))

    return report


def verify_file(
    path: str | Path, components: list[str] | None = None
) -> DocumentReport:
    """Load and verify a protocol document file.

    Raises:
        SchemaLoadError: If the file cannot be loaded.
        SchemaValidationError: If the document fails schema validation.
        IngestionError: If a requested component is not in the document.
    """
    document = parse_document(path)
    return verify_document(document, components)
