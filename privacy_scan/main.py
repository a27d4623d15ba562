import argparse
import json
import sys
from pathlib import Path

from privacy_scan.config.settings import Settings
from privacy_scan.logging.logger import Log
from privacy_scan.processor.exceptions import ScanError
from privacy_scan.processor.processor import build_scanner
from privacy_scan.processor.report_serializer import ReportSerializer


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> scan one export file -> print JSON report."""
    parser = argparse.ArgumentParser(
        prog="privacy-scan",
        description="Scan a data export (.zip, .json, .csv, .html) for personal information",
    )
    parser.add_argument("path", type=Path, help="Export file to scan")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation (0 for compact)")
    args = parser.parse_args(argv)

    settings = Settings()
    Log.configure(settings.log_level, stream=sys.stderr)

    try:
        content = args.path.read_bytes()
    except OSError as exc:
        sys.stderr.write(f"Cannot read {args.path}: {exc}\n")
        return 2

    try:
        report = build_scanner(settings).scan(content, args.path.name)
    except ScanError as exc:
        sys.stderr.write(f"Scan failed: {exc}\n")
        return 1

    json.dump(
        ReportSerializer().serialize(report),
        sys.stdout,
        indent=args.indent or None,
        ensure_ascii=False,
    )
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
