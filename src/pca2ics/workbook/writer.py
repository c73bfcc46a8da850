"""
Workbook writer.

Writes the ICS output sheet and appends to the error-log sheet with
openpyxl. The output sheet is replaced on every run; the error log keeps
growing across runs.
"""

from decimal import Decimal
from pathlib import Path
from typing import Any, Iterable, List, Sequence
import logging

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font, PatternFill

from pca2ics.core.config import SheetNames
from pca2ics.core.error_log import ERROR_LOG_HEADERS, ErrorLogEntry
from pca2ics.core.mapping import TaxCodeMapping
from pca2ics.convert.assembler import OUTPUT_HEADERS

logger = logging.getLogger(__name__)

HEADER_FONT = Font(bold=True)
ERROR_HEADER_FILL = PatternFill(start_color="F8D7DA", end_color="F8D7DA", fill_type="solid")
TAX_HEADER_FILL = PatternFill(start_color="E8F0FE", end_color="E8F0FE", fill_type="solid")


def _cell_value(value: Any) -> Any:
    """Cell value for the sheet: integral Decimal amounts are written as int, others as float."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


def _style_header(ws, width: int, fill: PatternFill = None) -> None:
    for cell in ws[1][:width]:
        cell.font = HEADER_FONT
        if fill is not None:
            cell.fill = fill
    ws.freeze_panes = "A2"


class WorkbookWriter:
    """
    Writes conversion results into an .xlsx workbook.

    The target workbook is created when it does not exist; other sheets in
    an existing workbook are left untouched.

    Usage:
        writer = WorkbookWriter(Path("pca2ics.xlsx"), config.sheets)
        writer.write(result.rows, result.error_log.entries)
    """

    def __init__(self, file_path: Path, sheets: SheetNames):
        self.file_path = Path(file_path)
        self.sheets = sheets

    def _open(self) -> Workbook:
        if self.file_path.exists():
            return load_workbook(self.file_path)
        wb = Workbook()
        wb.remove(wb.active)
        return wb

    def write(self, rows: Sequence[Sequence[Any]], entries: Iterable[ErrorLogEntry] = ()) -> Path:
        """Replace the output sheet with `rows` and append `entries` to the error log."""
        wb = self._open()
        self._write_output(wb, rows)
        self._append_error_log(wb, list(entries))

        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(self.file_path)
        logger.info(f"Wrote {len(rows)} rows to {self.file_path} [{self.sheets.output}]")
        return self.file_path

    def write_error_log(self, entries: Iterable[ErrorLogEntry]) -> Path:
        """Append entries to the error-log sheet only."""
        wb = self._open()
        self._append_error_log(wb, list(entries))
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(self.file_path)
        return self.file_path

    def write_tax_mapping_template(self, overwrite: bool = False) -> bool:
        """
        Create the tax mapping sheet filled with the built-in default table.

        Returns:
            False if the sheet already exists and overwrite is not set
        """
        wb = self._open()
        name = self.sheets.tax_mapping
        if name in wb.sheetnames:
            if not overwrite:
                return False
            wb.remove(wb[name])

        ws = wb.create_sheet(name)
        for row in TaxCodeMapping.default_rows():
            ws.append(row)
        _style_header(ws, 3, TAX_HEADER_FILL)
        ws.column_dimensions["A"].width = 16
        ws.column_dimensions["B"].width = 14
        ws.column_dimensions["C"].width = 40

        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(self.file_path)
        return True

    def _write_output(self, wb: Workbook, rows: Sequence[Sequence[Any]]) -> None:
        name = self.sheets.output
        if name in wb.sheetnames:
            wb.remove(wb[name])
        ws = wb.create_sheet(name)

        ws.append(list(OUTPUT_HEADERS))
        for row in rows:
            ws.append([_cell_value(v) for v in row])
        _style_header(ws, len(OUTPUT_HEADERS))

    def _append_error_log(self, wb: Workbook, entries: List[ErrorLogEntry]) -> None:
        if not entries:
            return

        name = self.sheets.error_log
        if name in wb.sheetnames:
            ws = wb[name]
        else:
            ws = wb.create_sheet(name)

        # A fresh sheet reports max_row == 1 with an empty A1
        if ws.max_row == 1 and ws["A1"].value is None:
            ws.append(list(ERROR_LOG_HEADERS))
            _style_header(ws, len(ERROR_LOG_HEADERS), ERROR_HEADER_FILL)

        for entry in entries:
            ws.append(entry.to_row())
