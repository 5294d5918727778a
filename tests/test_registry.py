# File: tests/test_registry.py

"""Tests for the rule registry and the change validator."""

import pytest

from shedcore.core.registry import RuleRegistry, create_default_registry
from shedcore.core.validator import ChangeValidator
from shedcore.models import (
    Building, ChangeContext, ChangeKind, IssueKind, RuleConfig, ValidationResult,
)
from shedcore.rules.base import ValidationRule

from conftest import make_feature, make_skylight


class _Rule(ValidationRule):
    """Minimal rule that always applies and records a warning."""

    def __init__(self, rule_id, priority=100, dependencies=None):
        self._id = rule_id
        self.priority = priority
        self.dependencies = dependencies or []

    def get_id(self):
        return self._id

    def get_name(self):
        return self._id.title()

    def applies(self, context):
        return True

    def check(self, context):
        result = ValidationResult()
        result.add_warning(IssueKind.PROXIMITY, self._id)
        return result


def _feature_context(feature, current=None, config=None):
    current = current or Building()
    return ChangeContext(
        kind=ChangeKind.ADD_FEATURE,
        current=current,
        proposed=current.with_feature(feature),
        subject_id=feature.id,
        config=config or RuleConfig(),
    )


class TestDefaultRegistry:

    def test_rule_ids(self):
        ids = {r.get_id() for r in create_default_registry().list_rules()}
        assert ids == {
            "feature.placement", "feature.bounds", "wall.density",
            "skylight.bounds", "skylight.overlap", "dimensions.lock",
        }

    def test_feature_change_rules_in_priority_order(self):
        context = _feature_context(make_feature(feature_id="d1"))
        rules = create_default_registry().get_applicable_rules(context)
        assert [r.get_id() for r in rules] == ["feature.placement", "feature.bounds", "wall.density"]

    def test_skylight_change_rules(self):
        current = Building()
        context = ChangeContext(
            kind=ChangeKind.ADD_SKYLIGHT,
            current=current,
            proposed=current.with_skylight(make_skylight()),
            subject_index=0,
        )
        rules = create_default_registry().get_applicable_rules(context)
        assert [r.get_id() for r in rules] == ["skylight.bounds", "skylight.overlap"]

    def test_disabled_rules_are_skipped(self):
        config = RuleConfig(disabled_rules=["feature.bounds"])
        context = _feature_context(make_feature(feature_id="d1"), config=config)
        ids = [r.get_id() for r in create_default_registry().get_applicable_rules(context)]
        assert "feature.bounds" not in ids

    def test_enabled_rules_restrict_the_set(self):
        config = RuleConfig(enabled_rules=["feature.bounds"])
        context = _feature_context(make_feature(feature_id="d1"), config=config)
        ids = [r.get_id() for r in create_default_registry().get_applicable_rules(context)]
        assert ids == ["feature.bounds"]


class TestRuleOrdering:

    def test_dependencies_run_first(self):
        registry = RuleRegistry()
        registry.register(_Rule("late", priority=50))
        registry.register(_Rule("early", priority=10, dependencies=["late"]))
        context = _feature_context(make_feature(feature_id="d1"))
        assert [r.get_id() for r in registry.get_applicable_rules(context)] == ["late", "early"]

    def test_missing_dependency_is_skipped(self):
        registry = RuleRegistry()
        registry.register(_Rule("only", dependencies=["absent"]))
        context = _feature_context(make_feature(feature_id="d1"))
        assert [r.get_id() for r in registry.get_applicable_rules(context)] == ["only"]

    def test_dependency_cycle_raises(self):
        registry = RuleRegistry()
        registry.register(_Rule("a", dependencies=["b"]))
        registry.register(_Rule("b", dependencies=["a"]))
        with pytest.raises(ValueError, match="cycle"):
            registry.get_applicable_rules(_feature_context(make_feature(feature_id="d1")))

    def test_duplicate_id_raises(self):
        registry = RuleRegistry()
        registry.register(_Rule("a"))
        with pytest.raises(ValueError, match="already registered"):
            registry.register(_Rule("a"))

    def test_unregister(self):
        registry = RuleRegistry()
        registry.register(_Rule("a"))
        registry.unregister("a")
        assert registry.get_rule("a") is None
        assert registry.list_rules() == []


class TestChangeValidator:

    def test_merges_every_rule(self):
        registry = RuleRegistry()
        registry.register(_Rule("a"))
        registry.register(_Rule("b"))
        result = ChangeValidator(registry).validate(_feature_context(make_feature(feature_id="d1")))
        assert result.valid
        assert sorted(result.warnings) == ["a", "b"]

    def test_collects_errors_from_several_rules(self):
        existing = make_feature(feature_id="d1")
        current = Building(features=[existing])
        # Overlaps d1 and sits in the left corner zone
        candidate = make_feature(feature_id="d2", width=14, x_offset=-7)
        result = ChangeValidator(create_default_registry()).validate(
            _feature_context(candidate, current=current),
        )
        assert not result.valid
        assert result.issues_of(IssueKind.OVERLAP)
        assert result.issues_of(IssueKind.BOUNDS)
