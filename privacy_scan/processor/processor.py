import threading
from collections.abc import Sequence

from privacy_scan.config.settings import Settings
from privacy_scan.detection.factory import DetectorFactory
from privacy_scan.detection.scoring import ScoringConfig
from privacy_scan.logging.logger import Log
from privacy_scan.parsers.factory import DocumentParserFactory
from privacy_scan.processor.archive_walker import ArchiveWalker
from privacy_scan.processor.exceptions import ScanError
from privacy_scan.processor.models import Report
from privacy_scan.processor.pipeline import PipelineStep, ScanContext
from privacy_scan.processor.report_builder import ReportBuilder
from privacy_scan.processor.scratch import ScratchSpace, next_call_id
from privacy_scan.processor.steps import BuildReportStep, DetectStep, ExtractFragmentsStep


class Scanner:
    """Runs the scan pipeline: extract -> detect -> build report.

    Holds no per-call state, so one instance can serve concurrent scans.
    """

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = tuple(steps)

    def scan(
        self,
        content: bytes,
        filename: str,
        cancel_event: threading.Event | None = None,
    ) -> Report:
        """Scan one upload and return its report.

        Raises:
            ScanError: subclasses describe why the upload could not be scanned.
        """
        context = ScanContext(
            call_id=next_call_id(),
            filename=filename,
            raw_bytes=content,
            cancel_event=cancel_event,
        )
        Log.info(f"Scan {context.call_id} started for '{filename}' ({len(content)} bytes)")
        try:
            for step in self._steps:
                context = step.run(context)
        except ScanError as exc:
            Log.error(f"Scan {context.call_id} failed: {type(exc).__name__}: {exc}")
            raise
        except Exception:
            Log.exception(f"Scan {context.call_id} failed unexpectedly")
            raise

        if context.report is None:
            raise ValueError("ScanContext.report must be set by the pipeline")
        Log.info(
            f"Scan {context.call_id} finished: {context.report.summary.total_items} items, "
            f"{context.report.summary.high_risk_count} high risk"
        )
        return context.report


def build_scanner(settings: Settings) -> Scanner:
    """Build a Scanner with all components configured from *settings*."""
    scoring = ScoringConfig.from_settings(settings)
    walker = ArchiveWalker(
        parsers=DocumentParserFactory.create(settings),
        scratch=ScratchSpace(settings.scratch_root),
        max_archive_depth=settings.max_archive_depth,
        max_walk_depth=settings.max_walk_depth,
        max_extracted_bytes=settings.max_extracted_bytes,
    )
    return Scanner(
        steps=[
            ExtractFragmentsStep(walker),
            DetectStep(DetectorFactory.create(settings, scoring), workers=settings.detect_workers),
            BuildReportStep(ReportBuilder(scoring.thresholds, snippet_length=settings.snippet_length)),
        ]
    )


def scan(
    content: bytes,
    filename: str,
    settings: Settings | None = None,
    cancel_event: threading.Event | None = None,
) -> Report:
    """Scan *content* (declared as *filename*) with a freshly built scanner."""
    return build_scanner(settings or Settings()).scan(content, filename, cancel_event=cancel_event)
