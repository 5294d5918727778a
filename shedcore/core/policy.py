"""Auto-correction policies used by the suggestion helpers.

Suggestions are never applied automatically; a policy only decides how
far an oversized opening is shrunk before it is re-positioned.
"""

from __future__ import annotations
from abc import ABC, abstractmethod


class CorrectionPolicy(ABC):
    """Decides the corrected size of an opening that does not fit its surface."""

    @abstractmethod
    def get_id(self) -> str:
        ...

    @abstractmethod
    def feature_height(self, height: float, wall_height: float) -> float:
        """Replacement height for a feature taller than its wall."""
        ...

    @abstractmethod
    def skylight_size(self, size: float, max_size: float) -> float:
        """Replacement width/length for a skylight larger than its panel allows."""
        ...


class FixedRatioPolicy(CorrectionPolicy):
    """Shrink to a fixed fraction of the available space."""

    def __init__(self, feature_height_ratio: float = 0.8, skylight_size_ratio: float = 0.9) -> None:
        self.feature_height_ratio = feature_height_ratio
        self.skylight_size_ratio = skylight_size_ratio

    def get_id(self) -> str:
        return f"fixed_ratio({self.feature_height_ratio:g},{self.skylight_size_ratio:g})"

    def feature_height(self, height: float, wall_height: float) -> float:
        return wall_height * self.feature_height_ratio

    def skylight_size(self, size: float, max_size: float) -> float:
        return max(0.0, max_size * self.skylight_size_ratio)


DEFAULT_POLICY = FixedRatioPolicy()
