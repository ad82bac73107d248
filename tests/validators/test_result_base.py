"""Tests for issue and result types."""

from protocheck.validators.base import Category, Issue, Severity, ValidationResult


class TestValidationResult:
    def test_empty_result_is_valid(self):
        result = ValidationResult()

        assert result.is_valid
        assert not result.has_warnings

    def test_errors_and_warnings_split(self):
        result = ValidationResult()
        result.add_error(Category.DETERMINISM, "E1", "bad")
        result.add_warning(Category.WELL_FORMEDNESS, "W1", "meh")

        assert [i.code for i in result.errors] == ["E1"]
        assert [i.code for i in result.warnings] == ["W1"]
        assert not result.is_valid

    def test_details_collected_from_keywords(self):
        result = ValidationResult()
        result.add_error(Category.RACE_FREEDOM, "E", "m", "Svc", "A", targets=["B"])

        assert result.issues[0].details == {"targets": ["B"]}

    def test_by_category(self):
        result = ValidationResult()
        result.add_error(Category.DETERMINISM, "E1", "a")
        result.add_error(Category.RACE_FREEDOM, "E2", "b")

        assert [i.code for i in result.by_category(Category.RACE_FREEDOM)] == ["E2"]

    def test_merge_preserves_order(self):
        first = ValidationResult()
        first.add_error(Category.DETERMINISM, "E1", "a")
        second = ValidationResult()
        second.add_error(Category.DETERMINISM, "E2", "b")

        first.merge(second)

        assert [i.code for i in first.issues] == ["E1", "E2"]


class TestIssue:
    def test_str_with_location(self):
        issue = Issue(
            category=Category.DETERMINISM,
            code="NONDETERMINISTIC_HANDLERS",
            message="Fault handlers A -> B/C are not deterministic",
            severity=Severity.ERROR,
            component="Svc",
            state="A",
        )

        assert str(issue) == (
            "ERROR: Determinism NONDETERMINISTIC_HANDLERS [Svc.A] - "
            "Fault handlers A -> B/C are not deterministic"
        )

    def test_category_values(self):
        assert Category.WELL_FORMEDNESS.value == "Well-formedness"
        assert Category.RACE_FREEDOM.value == "Race freedom"
