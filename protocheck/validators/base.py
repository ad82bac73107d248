"""Base classes for verification results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Category(str, Enum):
    """Property family an issue belongs to."""

    WELL_FORMEDNESS = "Well-formedness"
    DETERMINISM = "Determinism"
    RACE_FREEDOM = "Race freedom"


class Severity(str, Enum):
    """Severity level of an issue."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class Issue:
    """A single violated property."""

    category: Category
    code: str
    message: str
    severity: Severity
    component: str | None = None
    state: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        location = ""
        if self.component:
            location = f" [{self.component}"
            if self.state:
                location += f".{self.state}"
            location += "]"
        return (
            f"{self.severity.value.upper()}: {self.category.value} {self.code}"
            f"{location} - {self.message}"
        )


@dataclass
class ValidationResult:
    """Issues collected by one or more checks."""

    issues: list[Issue] = field(default_factory=list)

    @property
    def errors(self) -> list[Issue]:
        """Get all error-level issues."""
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Issue]:
        """Get all warning-level issues."""
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def is_valid(self) -> bool:
        """Check if the protocol is valid (no errors)."""
        return not self.has_errors

    def by_category(self, category: Category) -> list[Issue]:
        """Get all issues of one category."""
        return [i for i in self.issues if i.category == category]

    def add_issue(self, issue: Issue) -> None:
        self.issues.append(issue)

    def add_error(
        self,
        category: Category,
        code: str,
        message: str,
        component: str | None = None,
        state: str | None = None,
        **details: Any,
    ) -> None:
        """Add an error issue."""
        self.issues.append(
            Issue(
                category=category,
                code=code,
                message=message,
                severity=Severity.ERROR,
                component=component,
                state=state,
                details=details,
            )
        )

    def add_warning(
        self,
        category: Category,
        code: str,
        message: str,
        component: str | None = None,
        state: str | None = None,
        **details: Any,
    ) -> None:
        """Add a warning issue."""
        self.issues.append(
            Issue(
                category=category,
                code=code,
                message=message,
                severity=Severity.WARNING,
                component=component,
                state=state,
                details=details,
            )
        )

    def merge(self, other: "ValidationResult") -> None:
        """Merge another result into this one."""
        self.issues.extend(other.issues)
