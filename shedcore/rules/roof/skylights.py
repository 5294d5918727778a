"""Skylight rules: panel bounds and overlap with other skylights."""

from __future__ import annotations

from shedcore.core.skylight_validation import (
    check_skylight_overlap, skylight_label, validate_skylight,
)
from shedcore.models import ChangeContext, IssueKind, ValidationResult
from shedcore.rules.base import ValidationRule


class SkylightBoundsRule(ValidationRule):
    """Skylight lies inside its panel, clear of the edge margin."""

    priority = 10

    def get_id(self) -> str:
        return "skylight.bounds"

    def get_name(self) -> str:
        return "Skylight Panel Bounds"

    def applies(self, context: ChangeContext) -> bool:
        return context.is_skylight_change and context.subject_skylight() is not None

    def check(self, context: ChangeContext) -> ValidationResult:
        skylight = context.subject_skylight()
        label = skylight_label(context.subject_index).capitalize()
        return validate_skylight(skylight, context.proposed.footprint, context.params, label=label)


class SkylightOverlapRule(ValidationRule):
    """Skylight does not overlap any other skylight on the roof plan."""

    priority = 20

    def get_id(self) -> str:
        return "skylight.overlap"

    def get_name(self) -> str:
        return "Skylight Overlap"

    def applies(self, context: ChangeContext) -> bool:
        return context.is_skylight_change and context.subject_skylight() is not None

    def check(self, context: ChangeContext) -> ValidationResult:
        result = ValidationResult()
        index = context.subject_index
        subject = context.subject_skylight()
        footprint = context.proposed.footprint

        for i, other in enumerate(context.proposed.skylights):
            if i == index:
                continue
            overlap = check_skylight_overlap(subject, other, footprint)
            if overlap.overlaps:
                first, second = sorted((i, index))
                result.add_error(
                    IssueKind.OVERLAP,
                    f"Skylights {first + 1} and {second + 1} overlap",
                    subject=skylight_label(index), magnitude=overlap.overlap_area,
                )
        return result
