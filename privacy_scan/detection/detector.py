import unicodedata

from privacy_scan.detection.base import BaseDetector
from privacy_scan.detection.models import DetectionResult, Finding
from privacy_scan.detection.rules import RuleTable

_EMPTY = DetectionResult()


def detect(text: str, rule_table: RuleTable) -> DetectionResult:
    """Apply *rule_table* to *text*.

    Every rule is evaluated in table order; there is no early exit, so each
    rule contributes independently. The score is the sum of fired weights,
    clamped to ``rule_table.max_score``.
    """
    if not text or not text.strip():
        return _EMPTY

    normalized = unicodedata.normalize("NFC", text)
    findings: list[Finding] = []
    recommendations: list[str] = []
    total = 0
    for rule in rule_table.rules:
        excerpt = rule.matcher.search(normalized)
        if excerpt is None:
            continue
        findings.append(Finding(type=rule.label, matched_excerpt=excerpt))
        if rule.recommendation:
            recommendations.append(rule.recommendation)
        total += rule.weight

    return DetectionResult(
        findings=tuple(findings),
        score=min(total, rule_table.max_score),
        recommendations=tuple(recommendations),
    )


class Detector(BaseDetector):
    """Rule-based detector bound to one immutable rule table."""

    def __init__(self, rule_table: RuleTable) -> None:
        self._rule_table = rule_table

    @property
    def rule_table(self) -> RuleTable:
        return self._rule_table

    def detect(self, text: str) -> DetectionResult:
        return detect(text, self._rule_table)
