"""Tests for report formatting."""

import json

from protocheck.output.formatter import format_document_report, format_handler_table
from protocheck.validators.runner import verify_file


class TestTextFormat:
    def test_passing_report(self, examples_dir):
        report = verify_file(examples_dir / "web_stack.yaml")

        output = format_document_report(report)

        assert "ERRORS:\n  (none)" in output
        assert "WARNINGS:\n  (none)" in output
        assert output.endswith("Verification passed for 2 component(s)")

    def test_failing_report(self, examples_dir):
        report = verify_file(examples_dir / "invalid" / "racy_handlers.yaml")

        output = format_document_report(report, "text")

        assert "✘ MISSING_UNION: [Worker.working] Race freedom:" in output
        assert "Verification failed: 2 error(s), 0 warning(s)" in output

    def test_warnings_listed(self, examples_dir):
        report = verify_file(examples_dir / "invalid" / "bad_handlers.yaml")

        output = format_document_report(report)

        assert "⚠ UNREACHABLE_STATE: [Cache.orphan]" in output


class TestJsonFormat:
    def test_structure(self, examples_dir):
        report = verify_file(examples_dir / "web_stack.yaml")

        data = json.loads(format_document_report(report, "json"))

        assert data["valid"] is True
        assert data["error_count"] == 0
        assert data["issues"] == []
        web = data["components"]["WebServer"]
        assert web["edges"]["running"] == ["stopped", "degraded"]
        assert web["handlers"]["running"] == {"db": "degraded", "host": "stopped"}
        assert web["ready_state"] == "stopped"
        assert "lifecycle:start" in web["operations"]

    def test_issue_fields(self, examples_dir):
        report = verify_file(examples_dir / "invalid" / "racy_handlers.yaml")

        data = json.loads(format_document_report(report, "json"))

        issue = data["issues"][0]
        assert issue["category"] == "Race freedom"
        assert issue["severity"] == "error"
        assert issue["component"] == "Worker"
        assert issue["details"]["targets"] == ["queue_only", "store_only"]

    def test_failed_ingestion_component(self, examples_dir):
        report = verify_file(examples_dir / "invalid" / "broken_reference.yaml")

        data = json.loads(format_document_report(report, "json"))

        assert data["components"]["Queue"] == {"valid": False}


class TestHandlerTable:
    def test_text_table(self, examples_dir):
        report = verify_file(examples_dir / "web_stack.yaml", ["WebServer"])

        output = format_handler_table(report.components[0])

        assert output.splitlines()[0] == "WebServer:"
        assert "  stopped:\n    (no recovery routes)" in output
        assert "    db -> degraded" in output
        assert "    host -> stopped" in output

    def test_json_table(self, examples_dir):
        report = verify_file(examples_dir / "web_stack.yaml", ["Database"])

        data = json.loads(format_handler_table(report.components[0], "json"))

        assert data == {
            "component": "Database",
            "handlers": {"stopped": {}, "running": {"host": "stopped"}},
        }
