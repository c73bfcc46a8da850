#!/usr/bin/env python3
"""
pca2ics CLI - convert PCA journal exports into ICS journal rows.

Usage:
    pca2ics convert books.xlsx
    pca2ics convert books.xlsx --sheet 202509 --output ics.xlsx
    pca2ics sheets books.xlsx
    pca2ics init-tax-sheet books.xlsx
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pca2ics.core.config import ConverterConfig
from pca2ics.core.error_log import Severity
from pca2ics.core.exceptions import Pca2IcsError
from pca2ics.services.conversion_service import ConversionService
from pca2ics.workbook.reader import WorkbookReader
from pca2ics.workbook.sheets import candidate_source_sheets, find_latest_period_sheet, order_source_sheets


def setup_logging(verbose: bool = False, debug: bool = False):
    """Configure logging."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def load_config(config_path: Optional[str]) -> ConverterConfig:
    return ConverterConfig.load(Path(config_path)) if config_path else ConverterConfig()


# ============================================================================
# Command Handlers
# ============================================================================

def cmd_convert(args, config: ConverterConfig) -> int:
    """Handle convert command - convert one source sheet."""
    workbook = Path(args.workbook)
    if not workbook.exists():
        print(f"Error: File not found: {workbook}")
        return 1

    service = ConversionService(config)
    report = service.run(
        workbook,
        sheet_name=args.sheet,
        output_path=Path(args.output) if args.output else None,
    )

    print("\n" + "=" * 50)
    print("PCA -> ICS CONVERSION")
    print("=" * 50)
    print(report.summary())

    problems = [e for e in report.result.error_log.entries if e.severity is not Severity.INFO]
    if problems:
        print(f"\nProblems ({len(problems)}):")
        for entry in problems[:20]:
            voucher = f" [voucher {entry.voucher_number}]" if entry.voucher_number else ""
            print(f"  {entry.severity.value:5} {entry.operation}{voucher}: {entry.message}")
        if len(problems) > 20:
            print(f"  ... and {len(problems) - 20} more (see error log sheet)")

    return 0 if report.succeeded else 1


def cmd_sheets(args, config: ConverterConfig) -> int:
    """Handle sheets command - list candidate source sheets."""
    workbook = Path(args.workbook)
    if not workbook.exists():
        print(f"Error: File not found: {workbook}")
        return 1

    reader = WorkbookReader(workbook)
    candidates = order_source_sheets(candidate_source_sheets(reader.sheet_names, config.sheets))
    latest = find_latest_period_sheet(candidates)

    if not candidates:
        print("No source sheets found.")
        return 1

    print(f"\nSource sheets in {workbook.name}:")
    for name in candidates:
        marker = "  (latest)" if name == latest else ""
        print(f"  {name}{marker}")
    return 0


def cmd_init_tax_sheet(args, config: ConverterConfig) -> int:
    """Handle init-tax-sheet command - write the default tax mapping sheet."""
    service = ConversionService(config)
    if service.init_tax_sheet(Path(args.workbook), overwrite=args.overwrite):
        print(f"Created sheet {config.sheets.tax_mapping} in {args.workbook}")
        return 0
    print(f"Sheet {config.sheets.tax_mapping} already exists (use --overwrite to replace it)")
    return 1


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--config', '-c', help='JSON config file overriding the defaults')
    common.add_argument('--verbose', '-v', action='store_true', help='Verbose output')
    common.add_argument('--debug', action='store_true', help='Debug output')

    parser = argparse.ArgumentParser(
        prog='pca2ics',
        description='Convert PCA journal exports into ICS journal rows',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pca2ics convert books.xlsx
  pca2ics convert books.xlsx --sheet 202509 --output ics.xlsx -v
  pca2ics sheets books.xlsx
  pca2ics init-tax-sheet books.xlsx --overwrite
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='Command')

    # convert command
    convert_parser = subparsers.add_parser('convert', parents=[common],
                                           help='Convert a source sheet')
    convert_parser.add_argument('workbook', help='Workbook (.xlsx) with source and mapping sheets')
    convert_parser.add_argument('--sheet', '-s', help='Source sheet (default: latest YYYYMM sheet)')
    convert_parser.add_argument('--output', '-o', help='Output workbook (default: the input workbook)')

    # sheets command
    sheets_parser = subparsers.add_parser('sheets', parents=[common],
                                          help='List candidate source sheets')
    sheets_parser.add_argument('workbook', help='Workbook (.xlsx)')

    # init-tax-sheet command
    init_parser = subparsers.add_parser('init-tax-sheet', parents=[common],
                                        help='Write the default tax mapping sheet')
    init_parser.add_argument('workbook', help='Workbook (.xlsx), created if missing')
    init_parser.add_argument('--overwrite', action='store_true',
                             help='Replace an existing tax mapping sheet')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose, args.debug)

    handlers = {
        'convert': cmd_convert,
        'sheets': cmd_sheets,
        'init-tax-sheet': cmd_init_tax_sheet,
    }

    try:
        config = load_config(args.config)
        return handlers[args.command](args, config)
    except Pca2IcsError as e:
        print(f"\nError: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
