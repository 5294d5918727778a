"""Change validator — runs the applicable rules over one proposed change."""

from __future__ import annotations

from shedcore.core.registry import RuleRegistry
from shedcore.models import ChangeContext, ValidationResult
from shedcore.utils.logging_config import get_logger

logger = get_logger(__name__)


class ChangeValidator:
    """
    Stateless change validator.

    Takes a change context, executes every applicable rule, and returns
    the merged verdict. Rules never stop early, so the caller sees every
    problem with the change at once.
    """

    def __init__(self, registry: RuleRegistry) -> None:
        self.registry = registry

    def validate(self, context: ChangeContext) -> ValidationResult:
        result = ValidationResult()

        rules = self.registry.get_applicable_rules(context)
        for rule in rules:
            verdict = rule.check(context)
            if not verdict.valid:
                logger.debug("Rule %s rejected %s: %s",
                             rule.get_id(), context.kind.value, "; ".join(verdict.errors))
            result.merge(verdict)

        return result
