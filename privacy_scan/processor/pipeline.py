import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from privacy_scan.detection.models import DetectionResult
from privacy_scan.processor.models import Report, TextFragment


@dataclass(slots=True)
class ScanContext:
    call_id: int
    filename: str
    raw_bytes: bytes = b""
    cancel_event: threading.Event | None = None
    fragments: list[TextFragment] = field(default_factory=list)
    detections: list[tuple[TextFragment, DetectionResult]] = field(default_factory=list)
    report: Report | None = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: ScanContext) -> ScanContext:
        raise NotImplementedError
