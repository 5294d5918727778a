"""Rule registry — stores validation rules and orders them for a change."""

from __future__ import annotations

from shedcore.models import ChangeContext, RuleConfig
from shedcore.rules.base import ValidationRule
from shedcore.utils.logging_config import get_logger

logger = get_logger(__name__)


class RuleRegistry:
    """
    Central registry for all validation rules.

    Rules are registered once at startup under a unique id. For each
    proposed change the registry picks the enabled rules that apply to
    it and orders them by priority, with each rule's dependencies
    placed ahead of it.
    """

    def __init__(self) -> None:
        self._rules: dict[str, ValidationRule] = {}

    def register(self, rule: ValidationRule) -> None:
        """Register a validation rule. Ids must be unique."""
        rule_id = rule.get_id()
        if rule_id in self._rules:
            raise ValueError(f"Rule '{rule_id}' is already registered")
        self._rules[rule_id] = rule
        logger.debug("Registered rule %s (priority %d)", rule_id, rule.priority)

    def unregister(self, rule_id: str) -> None:
        self._rules.pop(rule_id, None)

    def get_rule(self, rule_id: str) -> ValidationRule | None:
        return self._rules.get(rule_id)

    def list_rules(self) -> list[ValidationRule]:
        """Return all registered rules in registration order."""
        return list(self._rules.values())

    @staticmethod
    def is_enabled(rule_id: str, config: RuleConfig) -> bool:
        """An explicit enabled list narrows the set; the disabled list always wins."""
        if config.enabled_rules and rule_id not in config.enabled_rules:
            return False
        return rule_id not in config.disabled_rules

    def get_applicable_rules(self, context: ChangeContext) -> list[ValidationRule]:
        """Enabled rules that apply to the change, in execution order."""
        applicable = [
            rule for rule in self._rules.values()
            if self.is_enabled(rule.get_id(), context.config) and rule.applies(context)
        ]
        applicable.sort(key=lambda r: r.priority)
        return self._resolve_order(applicable)

    def _resolve_order(self, rules: list[ValidationRule]) -> list[ValidationRule]:
        """
        Depth-first ordering over the priority-sorted rules.

        Dependencies that are not among `rules` (disabled, or not
        applicable to this change) are skipped. A cycle is a
        registration error.
        """
        by_id = {r.get_id(): r for r in rules}
        done: set[str] = set()
        in_progress: set[str] = set()
        ordered: list[ValidationRule] = []

        def place(rule: ValidationRule) -> None:
            rule_id = rule.get_id()
            if rule_id in done:
                return
            if rule_id in in_progress:
                raise ValueError(f"Dependency cycle through rule '{rule_id}'")
            in_progress.add(rule_id)
            for dep_id in rule.dependencies:
                dependency = by_id.get(dep_id)
                if dependency is not None:
                    place(dependency)
            in_progress.discard(rule_id)
            done.add(rule_id)
            ordered.append(rule)

        for rule in rules:
            place(rule)
        return ordered


def create_default_registry() -> RuleRegistry:
    """Registry holding the standard feature, skylight and dimension rules."""
    from shedcore.rules.building.dimensions import DimensionLockRule
    from shedcore.rules.roof.skylights import SkylightBoundsRule, SkylightOverlapRule
    from shedcore.rules.wall.features import (
        FeatureBoundsRule, FeaturePlacementRule, WallDensityRule,
    )

    registry = RuleRegistry()
    for rule_class in (
        FeaturePlacementRule, FeatureBoundsRule, WallDensityRule,
        SkylightBoundsRule, SkylightOverlapRule, DimensionLockRule,
    ):
        registry.register(rule_class())
    return registry
