from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from privacy_scan.detection.models import Finding
from privacy_scan.detection.scoring import RiskLevel


@dataclass(frozen=True)
class TextFragment:
    """One unit of extracted free text and the file it came from."""

    text: str
    origin: str  # path inside the export, e.g. "posts/posts_1.json"


@dataclass(frozen=True)
class ScoredItem:
    """Detection outcome for one non-empty fragment."""

    origin: str
    snippet: str
    findings: tuple[Finding, ...]
    score: int
    risk_level: RiskLevel
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True)
class Summary:
    total_items: int
    counts_by_risk_level: Mapping[RiskLevel, int] = field(
        default_factory=lambda: MappingProxyType({level: 0 for level in RiskLevel})
    )

    @property
    def high_risk_count(self) -> int:
        return self.counts_by_risk_level.get(RiskLevel.HIGH, 0)


@dataclass(frozen=True)
class Report:
    """Scored result of one scan, fully determined by the input and rule table."""

    summary: Summary
    items: tuple[ScoredItem, ...] = ()
