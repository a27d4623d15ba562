from collections.abc import Sequence
from types import MappingProxyType
from typing import ClassVar

from privacy_scan.detection.models import DetectionResult
from privacy_scan.detection.scoring import RiskLevel, RiskThresholds
from privacy_scan.processor.models import Report, ScoredItem, Summary, TextFragment


class ReportBuilder:
    """Folds detection results into a Report, left to right.

    Item order is exactly the order of *detections*; nothing is re-sorted.
    """

    ELLIPSIS: ClassVar[str] = "..."

    def __init__(self, thresholds: RiskThresholds, snippet_length: int = 100) -> None:
        self._thresholds = thresholds
        self._snippet_length = snippet_length

    def build(self, detections: Sequence[tuple[TextFragment, DetectionResult]]) -> Report:
        items: list[ScoredItem] = []
        counts = {level: 0 for level in RiskLevel}
        for fragment, result in detections:
            level = self._thresholds.classify(result.score)
            counts[level] += 1
            items.append(
                ScoredItem(
                    origin=fragment.origin,
                    snippet=self.snippet(fragment.text),
                    findings=result.findings,
                    score=result.score,
                    risk_level=level,
                    recommendations=result.recommendations,
                )
            )
        summary = Summary(total_items=len(items), counts_by_risk_level=MappingProxyType(counts))
        return Report(summary=summary, items=tuple(items))

    def snippet(self, text: str) -> str:
        if len(text) <= self._snippet_length:
            return text
        return text[: self._snippet_length] + self.ELLIPSIS
