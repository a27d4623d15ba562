import threading
from unittest.mock import MagicMock

import pytest

from privacy_scan.detection.base import BaseDetector
from privacy_scan.detection.detector import Detector
from privacy_scan.detection.models import DetectionResult, Finding
from privacy_scan.detection.rules import RuleTable
from privacy_scan.detection.scoring import RiskThresholds
from privacy_scan.processor.archive_walker import ArchiveWalker
from privacy_scan.processor.exceptions import ScanCancelledError
from privacy_scan.processor.models import TextFragment
from privacy_scan.processor.pipeline import ScanContext
from privacy_scan.processor.report_builder import ReportBuilder
from privacy_scan.processor.steps import BuildReportStep, DetectStep, ExtractFragmentsStep


def _context(**kwargs: object) -> ScanContext:
    return ScanContext(call_id=1, filename="export.zip", raw_bytes=b"zip-bytes", **kwargs)  # type: ignore[arg-type]


def _fragments(*texts: str) -> list[TextFragment]:
    return [TextFragment(text=text, origin=f"f{i}.json") for i, text in enumerate(texts)]


class TestExtractFragmentsStep:
    def test_delegates_to_walker(self) -> None:
        walker = MagicMock(spec=ArchiveWalker)
        walker.walk.return_value = _fragments("hello")
        cancel = threading.Event()

        context = ExtractFragmentsStep(walker).run(_context(cancel_event=cancel))

        walker.walk.assert_called_once_with(
            b"zip-bytes", "export.zip", call_id=1, cancel_event=cancel
        )
        assert context.fragments == _fragments("hello")


class TestDetectStep:
    def test_blank_fragments_dropped(self) -> None:
        detector = MagicMock(spec=BaseDetector)
        detector.detect.return_value = DetectionResult()
        context = _context(fragments=_fragments("first", "   ", "", "second"))

        context = DetectStep(detector).run(context)

        assert [fragment.text for fragment, _ in context.detections] == ["first", "second"]
        assert detector.detect.call_count == 2

    def test_pairs_fragments_with_results(self) -> None:
        detector = MagicMock(spec=BaseDetector)
        detector.detect.side_effect = lambda text: DetectionResult(
            findings=(Finding(type=text.upper()),), score=len(text)
        )
        context = DetectStep(detector).run(_context(fragments=_fragments("ab", "abc")))
        assert [(f.text, r.score) for f, r in context.detections] == [("ab", 2), ("abc", 3)]

    def test_parallel_workers_preserve_order(self) -> None:
        texts = [f"post {i} email{i}@example.com" if i % 3 else f"post {i}" for i in range(50)]
        detector = Detector(RuleTable.default())

        sequential = DetectStep(detector, workers=1).run(_context(fragments=_fragments(*texts)))
        parallel = DetectStep(detector, workers=4).run(_context(fragments=_fragments(*texts)))

        assert parallel.detections == sequential.detections

    def test_cancelled_before_detection(self) -> None:
        cancel = threading.Event()
        cancel.set()
        detector = MagicMock(spec=BaseDetector)
        with pytest.raises(ScanCancelledError):
            DetectStep(detector).run(_context(fragments=_fragments("x"), cancel_event=cancel))
        detector.detect.assert_not_called()


class TestBuildReportStep:
    def test_sets_report(self) -> None:
        fragment = TextFragment(text="hello", origin="a.json")
        context = _context(detections=[(fragment, DetectionResult())])

        context = BuildReportStep(ReportBuilder(RiskThresholds())).run(context)

        assert context.report is not None
        assert context.report.summary.total_items == 1
        assert context.report.items[0].origin == "a.json"
