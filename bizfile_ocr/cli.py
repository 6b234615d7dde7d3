"""Command-line interface for BizFile analysis and CSV export.

Provides subcommands for re-parsing saved OCR results, analyzing a
single BizFile PDF, and processing folders of PDFs into a CSV summary.
"""

import argparse
import asyncio
import csv
import json
import sys
import time
from pathlib import Path

from bizfile_ocr.extraction.assembler import DocumentAssembler
from bizfile_ocr.extraction.records import CompanyRecord
from bizfile_ocr.ocr.document_analysis import (
    DocumentAnalysisError,
    DocumentAnalysisService,
)
from bizfile_ocr.ocr.models import RecognitionResult
from bizfile_ocr.utils.config import load_config
from bizfile_ocr.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

_SUPPORTED_EXTENSIONS = ("*.pdf",)
_META_COLUMNS = [
    "filename",
    "status",
    "processing_time_s",
    "error",
]
_SCALAR_COLUMNS = [
    "company_name",
    "uen",
    "incorporation_date",
    "company_type",
    "financial_year_end",
    "registered_address",
    "business_activity_primary",
    "business_activity_secondary",
]
_SECTION_COLUMNS = [
    "officers",
    "shareholders",
    "issued_share_capital",
    "paid_up_capital",
    "charges",
]


def _find_documents(input_dir: Path) -> list[Path]:
    """Find all BizFile PDFs in a directory.

    Args:
        input_dir: Directory to scan for documents.

    Returns:
        Sorted list of document file paths.
    """
    files: list[Path] = []
    for ext in _SUPPORTED_EXTENSIONS:
        files.extend(input_dir.glob(ext))
        files.extend(input_dir.glob(ext.upper()))
    return sorted(set(files))


def load_result(path: Path) -> RecognitionResult:
    """Load a saved OCR result from JSON.

    Accepts either the bare result or a ``/ocr`` API response, whose
    ``data`` key holds the result.

    Args:
        path: Path to the JSON file.

    Returns:
        Parsed recognition result.
    """
    data = json.loads(path.read_text())
    if isinstance(data, dict) and "payload" in data:
        data = data.get("data")
    return RecognitionResult.from_dict(data)


def parse_result_file(
    path: Path, assembler: DocumentAssembler | None = None
) -> CompanyRecord:
    """Assemble a company record from a saved OCR result file."""
    assembler = assembler or DocumentAssembler.from_config(load_config().extraction)
    return assembler.assemble(load_result(path))


async def _analyze_files(
    files: list[Path], service: DocumentAnalysisService
) -> list[tuple[RecognitionResult | Exception, float]]:
    """Analyze files one at a time, keeping each outcome and its duration."""
    outcomes: list[tuple[RecognitionResult | Exception, float]] = []
    async with service:
        for file_path in files:
            start_time = time.time()
            try:
                outcome: RecognitionResult | Exception = await service.analyze(
                    file_path.read_bytes()
                )
            except Exception as exc:
                outcome = exc
            outcomes.append((outcome, round(time.time() - start_time, 2)))
    return outcomes


def analyze_single(file_path: Path) -> dict[str, object]:
    """Analyze one BizFile PDF and return the record with the raw result.

    Args:
        file_path: Path to the PDF.

    Returns:
        Dictionary with filename, the extracted record and the raw result.
    """
    config = load_config()
    service = DocumentAnalysisService.from_config(config.document_analysis)
    ((outcome, _),) = asyncio.run(_analyze_files([file_path], service))
    if isinstance(outcome, Exception):
        raise outcome

    record = DocumentAssembler.from_config(config.extraction).assemble(outcome)
    record.file_path = str(file_path)
    return {"filename": file_path.name, "data": record.to_dict(), "raw": outcome.raw}


def _record_row(record: CompanyRecord) -> dict[str, object]:
    row: dict[str, object] = {name: getattr(record, name) for name in _SCALAR_COLUMNS}
    for name in _SECTION_COLUMNS:
        row[f"{name}_count"] = len(getattr(record, name))
    return row


def process_folder(
    input_dir: Path,
    output_csv: Path,
    verbose: bool = False,
) -> dict[str, int]:
    """Analyze all BizFile PDFs in a folder and export a CSV summary.

    Args:
        input_dir: Directory containing PDF files.
        output_csv: Path for the output CSV file.
        verbose: Whether to print per-file progress.

    Returns:
        Summary dict with total, successful, and failed counts.
    """
    files = _find_documents(input_dir)
    if not files:
        logger.warning("No documents found in %s", input_dir)
        return {"total": 0, "successful": 0, "failed": 0}

    logger.info("Found %d documents to process", len(files))

    config = load_config()
    service = DocumentAnalysisService.from_config(config.document_analysis)
    assembler = DocumentAssembler.from_config(config.extraction)

    outcomes = asyncio.run(_analyze_files(files, service))

    results: list[dict[str, object]] = []
    successful = 0
    failed = 0

    for i, (file_path, (outcome, elapsed)) in enumerate(zip(files, outcomes), 1):
        if verbose:
            print(f"Processed [{i}/{len(files)}]: {file_path.name}")

        if isinstance(outcome, Exception):
            logger.error("Failed to process %s: %s", file_path.name, outcome)
            results.append(
                {"filename": file_path.name, "status": "failed", "error": str(outcome)}
            )
            failed += 1
            continue

        row: dict[str, object] = {
            "filename": file_path.name,
            "status": "success",
            "processing_time_s": elapsed,
            "error": None,
        }
        row.update(_record_row(assembler.assemble(outcome)))
        results.append(row)
        successful += 1

    _write_csv(results, output_csv)
    logger.info("Results written to %s", output_csv)

    summary = {"total": len(files), "successful": successful, "failed": failed}
    _print_summary(summary, output_csv)
    return summary


def _write_csv(results: list[dict[str, object]], output_path: Path) -> None:
    """Write per-document results to a CSV file.

    Args:
        results: List of result dictionaries.
        output_path: Path for the output CSV file.
    """
    if not results:
        return

    all_keys: set[str] = set()
    for r in results:
        all_keys.update(r.keys())

    ordered = _META_COLUMNS + _SCALAR_COLUMNS + [f"{n}_count" for n in _SECTION_COLUMNS]
    columns = [c for c in ordered if c in all_keys]

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=columns, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(results)


def _print_summary(summary: dict[str, int], output_csv: Path) -> None:
    print(f"\n{'=' * 50}")
    print("BizFile Processing Complete")
    print(f"{'=' * 50}")
    print(f"Total:      {summary['total']}")
    print(f"Successful: {summary['successful']}")
    print(f"Failed:     {summary['failed']}")
    print(f"Output:     {output_csv}")


def _emit_json(result: dict[str, object], output: Path | None) -> None:
    output_str = json.dumps(result, indent=2, default=str)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(output_str)
        print(f"Output written to {output}")
    else:
        print(output_str)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate command.

    Args:
        argv: Command-line arguments (defaults to sys.argv).
    """
    parser = argparse.ArgumentParser(
        description="BizFile OCR Processor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser(
        "parse", help="Extract a record from a saved OCR result JSON"
    )
    parse_parser.add_argument("file", type=Path, help="OCR result JSON file")
    parse_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    analyze_parser = subparsers.add_parser(
        "analyze", help="Analyze a single BizFile PDF"
    )
    analyze_parser.add_argument("file", type=Path, help="BizFile PDF to process")
    analyze_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    batch_parser = subparsers.add_parser(
        "batch", help="Analyze a folder of BizFile PDFs"
    )
    batch_parser.add_argument("input_dir", type=Path, help="Input directory with PDFs")
    batch_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("results.csv"),
        help="Output CSV file (default: results.csv)",
    )
    batch_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output"
    )

    args = parser.parse_args(argv)

    setup_logging()

    if args.command == "parse":
        if not args.file.exists():
            print(f"Error: {args.file} does not exist", file=sys.stderr)
            sys.exit(1)
        try:
            record = parse_result_file(args.file)
        except ValueError as exc:
            print(
                f"Error: {args.file} is not a valid OCR result: {exc}",
                file=sys.stderr,
            )
            sys.exit(1)
        _emit_json({"filename": args.file.name, "data": record.to_dict()}, args.output)
    elif args.command == "analyze":
        if not args.file.exists():
            print(f"Error: {args.file} does not exist", file=sys.stderr)
            sys.exit(1)
        try:
            result = analyze_single(args.file)
        except DocumentAnalysisError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(1)
        _emit_json(result, args.output)
    elif args.command == "batch":
        if not args.input_dir.is_dir():
            print(f"Error: {args.input_dir} is not a directory", file=sys.stderr)
            sys.exit(1)
        try:
            process_folder(args.input_dir, args.output, args.verbose)
        except DocumentAnalysisError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
