from privacy_scan.config.settings import Settings
from privacy_scan.detection.base import BaseDetector
from privacy_scan.detection.detector import Detector
from privacy_scan.detection.rules import RuleTable
from privacy_scan.detection.scoring import ScoringConfig


class DetectorFactory:
    """Creates the rule-based detector from settings."""

    @classmethod
    def create(cls, settings: Settings, scoring: ScoringConfig | None = None) -> BaseDetector:
        """Build a detector; pass *scoring* to share one table with the report builder."""
        config = scoring if scoring is not None else ScoringConfig.from_settings(settings)
        return Detector(RuleTable.from_config(config))
