from typing import Any

from privacy_scan.detection.models import Finding
from privacy_scan.detection.scoring import RiskLevel
from privacy_scan.processor.models import Report, ScoredItem, Summary


class ReportSerializer:
    """Converts a Report to a JSON-serializable structure."""

    def serialize(self, report: Report) -> dict[str, Any]:
        """Transform a Report into plain dicts, lists and scalars.

        Returns:
            Dict with 'summary' and 'items' keys. Risk levels are emitted by
            name and every level appears in the summary counts.
        """
        return {
            "summary": self._summary_to_dict(report.summary),
            "items": [self._item_to_dict(item) for item in report.items],
        }

    def _summary_to_dict(self, summary: Summary) -> dict[str, Any]:
        return {
            "total_items": summary.total_items,
            "counts_by_risk_level": {
                level.value: summary.counts_by_risk_level.get(level, 0) for level in RiskLevel
            },
            "high_risk_count": summary.high_risk_count,
        }

    def _item_to_dict(self, item: ScoredItem) -> dict[str, Any]:
        return {
            "origin": item.origin,
            "snippet": item.snippet,
            "score": item.score,
            "risk_level": item.risk_level.value,
            "findings": [self._finding_to_dict(finding) for finding in item.findings],
            "recommendations": list(item.recommendations),
        }

    def _finding_to_dict(self, finding: Finding) -> dict[str, str | None]:
        return {
            "type": finding.type,
            "matched_excerpt": finding.matched_excerpt,
        }
