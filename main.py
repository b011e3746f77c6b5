"""Main entry point for Tabulario"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from config import settings
from core.enums import Delimiter, ExportFormat, ImportFormat
from core.exceptions import TabularioError
from core.models import SchemaDescriptor, SchemaField
from core.themes import Theme
from exporter import DataExporter
from importer import DataImporter
from ui.progress import ConsoleProgress
from utils.logging_setup import setup_logging


def format_from_suffix(path: Path, enum_cls, explicit: Optional[str] = None):
    """Format from an explicit name or from the file extension"""
    name = explicit or path.suffix.lstrip(".").lower()
    try:
        return enum_cls(name.lower())
    except ValueError:
        supported = ", ".join(f.value for f in enum_cls)
        raise SystemExit(f"Error: Unsupported format '{name}'. Supported: {supported}")


def parse_widths(value: str) -> list[int]:
    try:
        widths = [int(w) for w in value.split(",") if w.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid widths: {value}")
    if not widths or any(w <= 0 for w in widths):
        raise argparse.ArgumentTypeError(f"Widths must be positive integers: {value}")
    return widths


def single_char(value: str) -> str:
    if len(value) != 1:
        raise argparse.ArgumentTypeError(f"Expected exactly one character, got {value!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Tabulario - Tabular data interchange",
        epilog="Formats: import txt/csv/xls/xlsx, export xlsx/txt/csv/html"
    )
    parser.add_argument("source", type=Path, help="File to import")
    parser.add_argument("dest", type=Path, help="File to export to")
    parser.add_argument("--from", dest="from_format", help="Source format (default: from extension)")
    parser.add_argument("--to", dest="to_format", help="Destination format (default: from extension)")
    parser.add_argument(
        "--separator",
        type=single_char,
        default=None,
        help="Field separator for text files (default: tab)"
    )
    parser.add_argument(
        "--fixed-width",
        type=parse_widths,
        default=None,
        metavar="W,W,...",
        help="Treat text files as fixed-width with these field widths"
    )
    parser.add_argument(
        "--filler",
        type=single_char,
        default=settings.DEFAULT_FILLER,
        help="Fixed-width filler character"
    )
    parser.add_argument("--no-header", action="store_true", help="Source has no header row; do not write one")
    parser.add_argument("--sheet", default=None, help="Worksheet to read (default: first)")
    parser.add_argument(
        "--theme",
        default=settings.DEFAULT_THEME,
        choices=[t.value for t in Theme],
        help="Colour theme for xlsx/html output"
    )
    parser.add_argument("--no-styles", action="store_true", help="Write xlsx without styling")
    parser.add_argument("--ignore", nargs="*", default=[], metavar="COL", help="Columns to leave out")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, help="Logging level")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, settings.LOG_DIR)

    if not args.source.exists():
        print(f"Error: File not found: {args.source}")
        return 1

    source_format = format_from_suffix(args.source, ImportFormat, args.from_format)
    dest_format = format_from_suffix(args.dest, ExportFormat, args.to_format)

    import_options = {
        "has_header": not args.no_header,
        "filler_char": args.filler,
        "sheet_name": args.sheet,
    }
    schema = None
    if args.fixed_width:
        import_options["delimiter"] = Delimiter.LENGTH
        schema = SchemaDescriptor(
            name="Table1",
            fields=tuple(
                SchemaField(name=f"Column{i}", length=w)
                for i, w in enumerate(args.fixed_width, 1)
            )
        )
    elif args.separator:
        import_options["delimiter"] = Delimiter.SEPARATOR
        import_options["separator_char"] = args.separator

    try:
        importer = DataImporter(source_format, ConsoleProgress("Import "), **import_options)
        result = importer.import_from_file(args.source, schema)

        for issue in result.errors:
            print(f"  ⚠ Line {issue}")

        if result.table is None:
            print(f"\n✗ Nothing imported from {args.source}")
            return 1

        export_options = {
            "write_headers": not args.no_header,
            "export_with_styles": not args.no_styles,
            "theme": args.theme,
            "ignored_columns": args.ignore,
        }
        if args.separator:
            export_options["separator"] = args.separator
        if args.fixed_width:
            export_options["delimited_by_length"] = True
            export_options["widths"] = args.fixed_width
            export_options["char_filler"] = args.filler

        exporter = DataExporter(dest_format, ConsoleProgress("Export "), **export_options)
        exporter.export_to_file(args.dest, result.table)

        print(f"\n✓ Converted {result.table.row_count:,} rows")
        if not importer.was_clean_execution:
            print(f"  {len(result.errors)} rows reported errors")
        return 0

    except TabularioError as e:
        print(f"\n✗ Conversion failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
