from concurrent.futures import ThreadPoolExecutor

from privacy_scan.detection.base import BaseDetector
from privacy_scan.logging.logger import Log
from privacy_scan.processor.archive_walker import ArchiveWalker
from privacy_scan.processor.exceptions import ScanCancelledError
from privacy_scan.processor.pipeline import PipelineStep, ScanContext
from privacy_scan.processor.report_builder import ReportBuilder


class ExtractFragmentsStep(PipelineStep):
    def __init__(self, walker: ArchiveWalker) -> None:
        self._walker = walker

    def run(self, context: ScanContext) -> ScanContext:
        context.fragments = self._walker.walk(
            context.raw_bytes,
            context.filename,
            call_id=context.call_id,
            cancel_event=context.cancel_event,
        )
        Log.info(f"Scan {context.call_id}: extracted {len(context.fragments)} fragments")
        return context


class DetectStep(PipelineStep):
    """Drops blank fragments and runs the detector over the rest.

    With more than one worker the map runs on a thread pool; ``Executor.map``
    yields results in input order, so discovery order is preserved.
    """

    def __init__(self, detector: BaseDetector, workers: int = 1) -> None:
        self._detector = detector
        self._workers = workers

    def run(self, context: ScanContext) -> ScanContext:
        if context.cancel_event is not None and context.cancel_event.is_set():
            raise ScanCancelledError("scan cancelled before detection")

        fragments = [fragment for fragment in context.fragments if fragment.text.strip()]
        texts = [fragment.text for fragment in fragments]
        if self._workers > 1 and len(texts) > 1:
            with ThreadPoolExecutor(max_workers=self._workers) as pool:
                results = list(pool.map(self._detector.detect, texts))
        else:
            results = [self._detector.detect(text) for text in texts]

        context.detections = list(zip(fragments, results))
        dropped = len(context.fragments) - len(fragments)
        if dropped:
            Log.debug(f"Scan {context.call_id}: dropped {dropped} blank fragments")
        return context


class BuildReportStep(PipelineStep):
    def __init__(self, report_builder: ReportBuilder) -> None:
        self._report_builder = report_builder

    def run(self, context: ScanContext) -> ScanContext:
        context.report = self._report_builder.build(context.detections)
        return context
