"""Abstract base class for all validation rules.

Every rule in the system implements this interface. Rules are:
- Self-contained: each checks one kind of constraint
- Composable: the validator runs every applicable rule and merges the results
- Conditional: each rule decides if it applies to the proposed change
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from shedcore.models import ChangeContext, Severity, ValidationResult


class ValidationRule(ABC):
    """
    Base class for all validation rules.

    Subclasses implement `applies()` and `check()`.
    The validator queries the registry, filters by `applies()`,
    sorts by `priority`, and calls `check()` in order.
    """

    # Lower priority = runs first. Default 100.
    priority: int = 100

    # IDs of rules that must run before this one.
    dependencies: list[str] = []

    @abstractmethod
    def get_id(self) -> str:
        """Unique identifier for this rule (e.g., 'feature.bounds')."""
        ...

    @abstractmethod
    def get_name(self) -> str:
        """Human-readable name (e.g., 'Feature Wall Bounds')."""
        ...

    @abstractmethod
    def applies(self, context: ChangeContext) -> bool:
        """Return True if this rule should judge the given change."""
        ...

    @abstractmethod
    def check(self, context: ChangeContext) -> ValidationResult:
        """
        Judge the proposed aggregate in the context.

        Errors reject the change; warnings are passed back to the caller
        alongside an accepted change.
        """
        ...


def warnings_only(result: ValidationResult) -> ValidationResult:
    """Copy of `result` keeping just its warnings."""
    out = ValidationResult()
    for issue in result.issues:
        if issue.severity == Severity.WARNING:
            out.add_warning(
                issue.kind, issue.message,
                subject=issue.subject, edge=issue.edge, magnitude=issue.magnitude,
            )
    return out
