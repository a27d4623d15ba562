from privacy_scan.detection.base import BaseDetector
from privacy_scan.detection.detector import Detector, detect
from privacy_scan.detection.factory import DetectorFactory
from privacy_scan.detection.models import DetectionResult, Finding
from privacy_scan.detection.rules import PiiType, Rule, RuleTable
from privacy_scan.detection.scoring import RiskLevel, RiskThresholds, ScoringConfig

__all__ = [
    "BaseDetector",
    "DetectionResult",
    "Detector",
    "DetectorFactory",
    "Finding",
    "PiiType",
    "RiskLevel",
    "RiskThresholds",
    "Rule",
    "RuleTable",
    "ScoringConfig",
    "detect",
]
