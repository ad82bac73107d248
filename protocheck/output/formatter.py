"""Output formatting for verification reports."""

import json
from typing import Literal

from ..validators.base import Issue, Severity
from ..validators.runner import ComponentReport, DocumentReport


def format_document_report(
    report: DocumentReport,
    format: Literal["text", "json"] = "text",
) -> str:
    """Format a document report for output.

    Args:
        report: The verification report to format.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_json(report)
    return _format_text(report)


def format_handler_table(
    report: ComponentReport,
    format: Literal["text", "json"] = "text",
) -> str:
    """Format the requirement→handler map of one component."""
    handlers = report.fault_handling.handlers if report.fault_handling else {}

    if format == "json":
        return json.dumps(
            {"component": report.component, "handlers": handlers}, indent=2
        )

    lines = [f"{report.component}:"]
    for state, routes in handlers.items():
        lines.append(f"  {state}:")
        if not routes:
            lines.append("    (no recovery routes)")
        for requirement, target in sorted(routes.items()):
            lines.append(f"    {requirement} -> {target}")
    return "\n".join(lines)


def _format_text(report: DocumentReport) -> str:
    """Format report as human-readable text."""
    lines: list[str] = []

    result = report.result
    errors = result.errors
    warnings = result.warnings

    lines.append("ERRORS:")
    if errors:
        for issue in errors:
            lines.append(f"  {_format_issue_text(issue)}")
    else:
        lines.append("  (none)")

    lines.append("")

    lines.append("WARNINGS:")
    if warnings:
        for issue in warnings:
            lines.append(f"  {_format_issue_text(issue)}")
    else:
        lines.append("  (none)")

    # Summary
    lines.append("")
    checked = len(report.components)
    if result.is_valid:
        if warnings:
            lines.append(
                f"Verification passed for {checked} component(s) "
                f"with {len(warnings)} warning(s)"
            )
        else:
            lines.append(f"Verification passed for {checked} component(s)")
    else:
        lines.append(
            f"Verification failed: {len(errors)} error(s), {len(warnings)} warning(s)"
        )

    return "\n".join(lines)


def _format_issue_text(issue: Issue) -> str:
    """Format a single issue as text."""
    location = ""
    if issue.component:
        location = f"[{issue.component}"
        if issue.state:
            location += f".{issue.state}"
        location += "] "

    if issue.severity == Severity.ERROR:
        symbol = "✘"
    elif issue.severity == Severity.WARNING:
        symbol = "⚠"
    else:
        symbol = "ℹ"

    return f"{symbol} {issue.code}: {location}{issue.category.value}: {issue.message}"


def _format_json(report: DocumentReport) -> str:
    """Format report as JSON."""
    result = report.result
    data = {
        "valid": result.is_valid,
        "error_count": len(result.errors),
        "warning_count": len(result.warnings),
        "issues": [
            {
                "category": issue.category.value,
                "code": issue.code,
                "message": issue.message,
                "severity": issue.severity.value,
                "component": issue.component,
                "state": issue.state,
                "details": issue.details,
            }
            for issue in result.issues
        ],
        "components": {
            component.component: _component_json(component)
            for component in report.components
        },
    }
    return json.dumps(data, indent=2)


def _component_json(report: ComponentReport) -> dict:
    data: dict = {"valid": report.result.is_valid}

    if report.fault_handling is not None:
        data["edges"] = {
            state: list(targets)
            for state, targets in report.fault_handling.edges.items()
        }
        data["handlers"] = report.fault_handling.handlers

    if report.summary is not None:
        data["initial_state"] = report.summary.initial_state
        data["ready_state"] = report.summary.ready_state
        data["operations"] = sorted(report.summary.operations)

    return data
