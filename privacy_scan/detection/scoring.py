from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from privacy_scan.config.settings import Settings


class RiskLevel(str, Enum):
    SAFE = "Safe"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True)
class RiskThresholds:
    """Lowest score of each non-safe level. Score 0 is always Safe."""

    low: int = 1
    medium: int = 3
    high: int = 5

    def __post_init__(self) -> None:
        if not 0 < self.low <= self.medium <= self.high:
            raise ValueError(
                f"thresholds must satisfy 0 < low <= medium <= high, "
                f"got {self.low}/{self.medium}/{self.high}"
            )

    def classify(self, score: int) -> RiskLevel:
        if score >= self.high:
            return RiskLevel.HIGH
        if score >= self.medium:
            return RiskLevel.MEDIUM
        if score >= self.low:
            return RiskLevel.LOW
        return RiskLevel.SAFE


DEFAULT_WEIGHTS: Mapping[str, int] = MappingProxyType({"PHONE": 4, "EMAIL": 4, "ADDRESS": 3})


@dataclass(frozen=True)
class ScoringConfig:
    """Single table of weights, score clamp and level thresholds.

    Detector and ReportBuilder both read from the same instance, so a scan's
    scores and risk levels can never disagree about the configuration.
    """

    weights: Mapping[str, int] = field(default_factory=lambda: DEFAULT_WEIGHTS)
    max_score: int = 10
    thresholds: RiskThresholds = field(default_factory=RiskThresholds)

    def __post_init__(self) -> None:
        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))

    def weight_for(self, label: str) -> int:
        return self.weights.get(label, DEFAULT_WEIGHTS.get(label, 0))

    @classmethod
    def default(cls) -> "ScoringConfig":
        return cls()

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ScoringConfig":
        return cls(
            weights={
                "PHONE": settings.phone_weight,
                "EMAIL": settings.email_weight,
                "ADDRESS": settings.address_weight,
            },
            max_score=settings.max_score,
            thresholds=RiskThresholds(
                low=settings.risk_low_threshold,
                medium=settings.risk_medium_threshold,
                high=settings.risk_high_threshold,
            ),
        )
