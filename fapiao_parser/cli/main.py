"""CLI interface for batch invoice parsing and Excel export."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

# Chinese output on Windows consoles
if sys.platform == "win32":
    try:
        sys.stdout.reconfigure(encoding='utf-8')
    except (AttributeError, ValueError):
        pass

from ..batch.runner import InvoiceBatch, run_batch
from ..config import get_app_name, get_app_version, get_default_export_name, get_default_output_dir, get_profile, set_profile
from ..export.excel_export import export_invoices
from ..models.invoice import Invoice

logger = logging.getLogger(__name__)


def _parse_fields(value: Optional[str]) -> Optional[List[str]]:
    if not value:
        return None
    return [field.strip() for field in value.split(",") if field.strip()]


def write_invoices_json(invoices: List[Invoice], stats: Dict, json_path: Path) -> Path:
    """Write parsed records and batch stats as UTF-8 JSON."""
    json_path.parent.mkdir(parents=True, exist_ok=True)
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(
            {"invoices": [invoice.to_dict() for invoice in invoices], "stats": stats},
            f,
            ensure_ascii=False,
            indent=2
        )
    return json_path


def process_input(
    input_path: str,
    output_dir: str,
    export_name: Optional[str] = None,
    export_fields: Optional[List[str]] = None,
    with_details: Optional[bool] = None,
    json_path: Optional[str] = None,
    max_workers: int = 1,
    verbose: bool = False
) -> Dict:
    """Parse every source under input_path, export the batch, and summarise.

    Args:
        input_path: PDF / fragment JSON file, or a directory of them
        output_dir: Output directory for the Excel workbook
        export_name: Workbook name without extension (settings default if None)
        export_fields: Summary sheet field keys (all default columns if None)
        with_details: Add the per-item sheet (profile default if None)
        json_path: Optional path for a JSON dump of the records
        max_workers: Parse sources on a thread pool when > 1
        verbose: Log per-file progress

    Returns:
        Dict with stats, excel_path and json_path
    """
    source = Path(input_path)
    if not source.exists():
        raise ValueError(f"Input path does not exist: {input_path}")

    batch = run_batch(source, InvoiceBatch(), max_workers=max_workers, verbose=verbose)
    invoices = batch.invoices
    stats = batch.stats.to_dict()

    if with_details is None:
        with_details = bool(get_profile().export.get("with_details", False))

    excel_path = export_invoices(
        invoices,
        output_dir,
        filename=export_name or get_default_export_name(),
        export_fields=export_fields,
        with_details=with_details
    )

    written_json = None
    if json_path:
        written_json = write_invoices_json(invoices, stats, Path(json_path))

    return {
        **stats,
        "excel_path": str(excel_path),
        "json_path": str(written_json) if written_json else None
    }


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description=f"{get_app_name()} {get_app_version()} - Extract structured data from Chinese VAT e-invoices"
    )

    parser.add_argument(
        "--input",
        required=True,
        help="PDF or fragment JSON file, or a directory of them"
    )

    parser.add_argument(
        "--output",
        required=False,
        help="Output directory for the Excel workbook (default: FAPIAO_OUTPUT_DIR or ./out)"
    )

    parser.add_argument(
        "--export-name",
        required=False,
        help="Workbook name without .xlsx"
    )

    parser.add_argument(
        "--fields",
        required=False,
        help="Comma-separated summary columns, e.g. index,number,date,total_amount"
    )

    parser.add_argument(
        "--details",
        action="store_true",
        default=None,
        help="Also write the per-item sheet"
    )

    parser.add_argument(
        "--json",
        required=False,
        help="Also write parsed records to this JSON file"
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Parse sources on N threads (default: 1)"
    )

    parser.add_argument(
        "--profile",
        type=str,
        default="default",
        help="Tolerance profile name (default: default)"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with error code if any invoice failed to parse"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose debug output"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s"
    )

    output_dir = args.output
    if not output_dir:
        output_dir = str(get_default_output_dir())
        print(f"Using default output directory: {output_dir}")

    try:
        if args.profile != "default":
            set_profile(args.profile)

        results = process_input(
            args.input,
            output_dir,
            export_name=args.export_name,
            export_fields=_parse_fields(args.fields),
            with_details=args.details,
            json_path=args.json,
            max_workers=args.workers,
            verbose=args.verbose
        )

        print(
            f"\nDone: {results['invoice_count']} invoice(s). "
            f"normal={results['success_count']}, duplicate={results['duplicate_count']}, "
            f"failed={results['fail_count']}."
        )
        print(f"Total amount: {results['total_amount']}  Total tax: {results['total_tax']}")
        print(f"Excel: {results['excel_path']}")
        if results.get("json_path"):
            print(f"JSON: {results['json_path']}")

        exit_code = 0
        if args.strict and results["fail_count"] > 0:
            exit_code = 1
        sys.exit(exit_code)

    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
