from abc import ABC, abstractmethod

from privacy_scan.detection.models import DetectionResult


class BaseDetector(ABC):
    """Contract for all fragment detectors."""

    @abstractmethod
    def detect(self, text: str) -> DetectionResult:
        """Evaluate every rule against one text fragment.

        Args:
            text: Free text extracted from an export file.

        Returns:
            DetectionResult with one Finding per fired rule (in rule order)
            and the summed weights clamped to the table's maximum score.
            Empty or whitespace-only text yields an empty result.
        """
