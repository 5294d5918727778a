"""Footprint change rule, backed by the dimension lock coordinator."""

from __future__ import annotations

from shedcore.core.locks import DimensionLockCoordinator
from shedcore.models import ChangeContext, ChangeKind, IssueKind, Severity, ValidationResult
from shedcore.rules.base import ValidationRule


class DimensionLockRule(ValidationRule):
    """Rejects footprint changes that would invalidate existing features or skylights."""

    priority = 10

    def __init__(self, coordinator: DimensionLockCoordinator | None = None) -> None:
        self.coordinator = coordinator

    def get_id(self) -> str:
        return "dimensions.lock"

    def get_name(self) -> str:
        return "Dimension Change Lock"

    def applies(self, context: ChangeContext) -> bool:
        return context.kind == ChangeKind.UPDATE_DIMENSIONS

    def check(self, context: ChangeContext) -> ValidationResult:
        coordinator = self.coordinator or DimensionLockCoordinator(context.params)
        change = coordinator.check_dimension_change(context.current, context.proposed.footprint)

        result = ValidationResult()
        for issue in change.issues:
            if issue.severity == Severity.ERROR:
                result.add_error(IssueKind.DIMENSION_LOCK, issue.message, subject=issue.subject)
            else:
                result.add_warning(issue.kind, issue.message, subject=issue.subject)
        return result
