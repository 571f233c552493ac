#!/usr/bin/env python3
"""
Scan medication label images from the command line.

Reads Azure and RxNav settings from the environment (or .env) and prints the
recognized medications as JSON.

Usage:
    python scripts/scan_labels.py label1.jpg label2.png
    python scripts/scan_labels.py bottle.pdf --log-level DEBUG
    python scripts/scan_labels.py *.jpg --json-logs --max-polling-seconds 90
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import List

from dotenv import load_dotenv

from medication_scan import SourceFile, create_analyzer
from medication_scan.config import OcrSettings
from medication_scan.utils import MedicationScanError, setup_logging


def load_files(paths: List[Path]) -> List[SourceFile]:
    return [SourceFile(data=path.read_bytes(), filename=path.name) for path in paths]


async def run(paths: List[Path], ocr_config: OcrSettings) -> dict:
    analyzer = create_analyzer(ocr_config=ocr_config)
    try:
        analysis = await analyzer.analyze_medication_images(load_files(paths))
    finally:
        await analyzer.close()
    return analysis.to_dict()


def main():
    parser = argparse.ArgumentParser(description="Extract medications from label images")
    parser.add_argument("files", nargs="+", type=Path, help="Images or PDFs to scan")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON")
    parser.add_argument("--max-polling-seconds", type=float, help="Override OCR polling budget per file")
    parser.add_argument("--max-retries", type=int, help="Override OCR retry count")
    args = parser.parse_args()

    # Export .env for anything that reads os.environ directly
    load_dotenv()

    setup_logging(level=args.log_level, format_json=args.json_logs)

    missing = [str(p) for p in args.files if not p.is_file()]
    if missing:
        print(f"File(s) not found: {', '.join(missing)}", file=sys.stderr)
        sys.exit(2)

    overrides = {}
    if args.max_polling_seconds is not None:
        overrides["OCR_MAX_POLLING_SECONDS"] = args.max_polling_seconds
    if args.max_retries is not None:
        overrides["OCR_MAX_RETRIES"] = args.max_retries
    ocr_config = OcrSettings(**overrides)

    try:
        result = asyncio.run(run(args.files, ocr_config))
    except MedicationScanError as e:
        print(f"Scan failed: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
