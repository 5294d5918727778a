"""Building service. Owns the aggregate and gates every change through the validator."""

from __future__ import annotations
import threading
import uuid
from typing import Any

from pydantic import ValidationError

from shedcore.core.beams import generate_wall_beams
from shedcore.core.locks import DimensionLockCoordinator, changed_fields
from shedcore.core.policy import DEFAULT_POLICY, CorrectionPolicy
from shedcore.core.registry import RuleRegistry, create_default_registry
from shedcore.core.roof_lines import generate_roof_line_segments, validate_roof_line_segments
from shedcore.core.skylight_validation import suggest_valid_skylight_position
from shedcore.core.validator import ChangeValidator
from shedcore.core.wall_validation import suggest_valid_position
from shedcore.models import (
    BeamConfig, BeamLayout, Building, ChangeContext, ChangeKind, DimensionChangeResult,
    Feature, Footprint, Issue, IssueKind, MutationResult, RoofLineParams, RoofLineSegment,
    RoofLineValidation, RuleConfig, Severity, Skylight, ValidationParams,
    WallBoundsProtection, WallPosition,
)
from shedcore.utils.logging_config import get_logger

logger = get_logger(__name__)


def _error_messages(exc: ValidationError) -> list[str]:
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"])
        messages.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return messages


def _invalid(messages: list[str], subject: str = "") -> MutationResult:
    result = MutationResult()
    for message in messages:
        result.add_error(IssueKind.INVALID_INPUT, message, subject=subject)
    return result


def _merge_payload(current: dict[str, Any], changes: dict[str, Any]) -> dict[str, Any]:
    """Shallow merge, except nested dicts (a feature's position) are merged too."""
    merged = dict(current)
    for key, value in changes.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


class BuildingService:
    """
    Holds the single committed building.

    Every mutation is read, validate, swap under one lock: the proposed
    aggregate is built from the current snapshot, judged by the rule
    pipeline, and committed only if no rule reports an error. Readers
    get the immutable snapshot current at the time of the call.
    """

    def __init__(
        self,
        building: Building | None = None,
        registry: RuleRegistry | None = None,
        params: ValidationParams | None = None,
        beam_config: BeamConfig | None = None,
        roof_params: RoofLineParams | None = None,
        rule_config: RuleConfig | None = None,
        policy: CorrectionPolicy = DEFAULT_POLICY,
    ) -> None:
        self._building = building or Building()
        self._lock = threading.Lock()

        self.registry = registry or create_default_registry()
        self.validator = ChangeValidator(self.registry)
        self.params = params or ValidationParams()
        self.beam_config = beam_config or BeamConfig()
        self.roof_params = roof_params or RoofLineParams()
        self.rule_config = rule_config or RuleConfig()
        self.policy = policy
        self.coordinator = DimensionLockCoordinator(self.params)

    @property
    def building(self) -> Building:
        return self._building

    # ------------------------------------------------------------------
    # Features
    # ------------------------------------------------------------------

    def try_add_feature(self, payload: Feature | dict[str, Any]) -> MutationResult:
        """Add a wall feature, assigning an id when it has none."""
        try:
            if isinstance(payload, Feature):
                feature = payload
            else:
                feature = Feature.model_validate(payload)
        except ValidationError as exc:
            return _invalid(_error_messages(exc))

        if not feature.id:
            feature = feature.model_copy(update={"id": str(uuid.uuid4())})

        with self._lock:
            current = self._building
            if current.get_feature(feature.id) is not None:
                return _invalid([f"Feature {feature.id} already exists"], subject=feature.id)
            return self._commit_feature(ChangeKind.ADD_FEATURE, current, current.with_feature(feature), feature)

    def try_update_feature(self, feature_id: str, changes: dict[str, Any]) -> MutationResult:
        """Apply a partial update to an existing feature."""
        with self._lock:
            current = self._building
            existing = current.get_feature(feature_id)
            if existing is None:
                return _invalid([f"Feature {feature_id} not found"], subject=feature_id)

            data = _merge_payload(existing.model_dump(), changes)
            data["id"] = feature_id
            try:
                feature = Feature.model_validate(data)
            except ValidationError as exc:
                return _invalid(_error_messages(exc), subject=feature_id)

            return self._commit_feature(
                ChangeKind.UPDATE_FEATURE, current, current.replace_feature(feature), feature,
            )

    def remove_feature(self, feature_id: str) -> MutationResult:
        with self._lock:
            current = self._building
            if current.get_feature(feature_id) is None:
                return _invalid([f"Feature {feature_id} not found"], subject=feature_id)
            self._building = current.without_feature(feature_id)
            logger.info("Removed feature %s", feature_id)
            return MutationResult(building=self._building, subject_id=feature_id)

    def _commit_feature(
        self, kind: ChangeKind, current: Building, proposed: Building, feature: Feature,
    ) -> MutationResult:
        context = self._context(kind, current, proposed, subject_id=feature.id)
        result = MutationResult(subject_id=feature.id)
        result.merge(self.validator.validate(context))

        if not result.valid:
            if result.issues_of(IssueKind.HEIGHT) or any(i.edge == "bottom" for i in result.issues):
                result.suggestion = suggest_valid_position(
                    feature, proposed.footprint.height, self.policy,
                )
            logger.warning("Rejected %s for %s: %s", kind.value, feature.label, "; ".join(result.errors))
            return result

        self._building = proposed
        result.building = proposed
        logger.info("Committed %s for %s", kind.value, feature.label)
        return result

    # ------------------------------------------------------------------
    # Skylights
    # ------------------------------------------------------------------

    def try_add_skylight(self, payload: Skylight | dict[str, Any]) -> MutationResult:
        try:
            if isinstance(payload, Skylight):
                skylight = payload
            else:
                skylight = Skylight.model_validate(payload)
        except ValidationError as exc:
            return _invalid(_error_messages(exc))

        with self._lock:
            current = self._building
            index = len(current.skylights)
            return self._commit_skylight(
                ChangeKind.ADD_SKYLIGHT, current, current.with_skylight(skylight), skylight, index,
            )

    def try_update_skylight(self, index: int, changes: dict[str, Any]) -> MutationResult:
        with self._lock:
            current = self._building
            if not 0 <= index < len(current.skylights):
                return _invalid([f"Skylight {index + 1} not found"], subject=str(index))

            data = _merge_payload(current.skylights[index].model_dump(), changes)
            try:
                skylight = Skylight.model_validate(data)
            except ValidationError as exc:
                return _invalid(_error_messages(exc), subject=str(index))

            return self._commit_skylight(
                ChangeKind.UPDATE_SKYLIGHT, current, current.replace_skylight(index, skylight),
                skylight, index,
            )

    def remove_skylight(self, index: int) -> MutationResult:
        with self._lock:
            current = self._building
            if not 0 <= index < len(current.skylights):
                return _invalid([f"Skylight {index + 1} not found"], subject=str(index))
            self._building = current.without_skylight(index)
            logger.info("Removed skylight %d", index + 1)
            return MutationResult(building=self._building, subject_id=str(index))

    def _commit_skylight(
        self, kind: ChangeKind, current: Building, proposed: Building,
        skylight: Skylight, index: int,
    ) -> MutationResult:
        context = self._context(kind, current, proposed, subject_index=index)
        result = MutationResult(subject_id=str(index))
        result.merge(self.validator.validate(context))

        if not result.valid:
            if result.issues_of(IssueKind.BOUNDS):
                result.suggestion = suggest_valid_skylight_position(
                    skylight, proposed.footprint, self.params, self.policy,
                )
            logger.warning("Rejected %s for skylight %d: %s", kind.value, index + 1, "; ".join(result.errors))
            return result

        self._building = proposed
        result.building = proposed
        logger.info("Committed %s for skylight %d", kind.value, index + 1)
        return result

    # ------------------------------------------------------------------
    # Dimensions
    # ------------------------------------------------------------------

    def try_update_dimensions(self, changes: dict[str, Any]) -> DimensionChangeResult:
        """
        Change one or more footprint fields at once.

        The change is accepted whole or rejected whole; on acceptance the
        result carries the refreshed wall protection snapshot.
        """
        with self._lock:
            current = self._building
            try:
                footprint = Footprint.model_validate({**current.footprint.model_dump(), **changes})
            except ValidationError as exc:
                messages = _error_messages(exc)
                return DimensionChangeResult(
                    accepted=False,
                    restrictions=messages,
                    issues=[
                        Issue(kind=IssueKind.INVALID_INPUT, severity=Severity.ERROR, message=m)
                        for m in messages
                    ],
                )

            proposed = current.with_footprint(footprint)
            context = self._context(
                ChangeKind.UPDATE_DIMENSIONS, current, proposed,
                changed_fields=changed_fields(current.footprint, footprint),
            )
            verdict = self.validator.validate(context)

            if not verdict.valid:
                return DimensionChangeResult(
                    accepted=False,
                    restrictions=verdict.errors,
                    warnings=verdict.warnings,
                    issues=verdict.issues,
                )

            self._building = proposed
            return DimensionChangeResult(
                accepted=True,
                warnings=verdict.warnings,
                issues=verdict.issues,
                building=proposed,
                protection=self.coordinator.refresh(proposed),
            )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def roof_line_segments(self) -> list[RoofLineSegment]:
        building = self._building
        return generate_roof_line_segments(building.footprint, building.skylights, self.roof_params)

    def validate_roof_lines(self) -> RoofLineValidation:
        building = self._building
        segments = generate_roof_line_segments(building.footprint, building.skylights, self.roof_params)
        return validate_roof_line_segments(segments, building.skylights, building.footprint)

    def wall_beams(self, wall: WallPosition) -> BeamLayout:
        building = self._building
        return generate_wall_beams(
            building.wall_width(wall),
            building.footprint.height,
            building.features_on_wall(wall),
            self.beam_config,
        )

    def get_wall_protection_status(self, wall: WallPosition) -> WallBoundsProtection:
        return self.coordinator.get_wall_protection_status(self._building, wall)

    def list_rules(self) -> list[dict[str, str]]:
        return [
            {"id": r.get_id(), "name": r.get_name()}
            for r in self.registry.list_rules()
        ]

    def _context(
        self, kind: ChangeKind, current: Building, proposed: Building, **subject: Any,
    ) -> ChangeContext:
        return ChangeContext(
            kind=kind,
            current=current,
            proposed=proposed,
            params=self.params,
            config=self.rule_config,
            **subject,
        )
