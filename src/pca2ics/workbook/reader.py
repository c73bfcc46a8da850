"""
Workbook reader.

Reads the PCA source sheet and the two mapping sheets from an Excel
workbook as raw grids (lists of row lists) using pandas.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional
import logging
import math

import pandas as pd

from pca2ics.core.config import ConverterConfig
from pca2ics.core.error_log import ErrorLog
from pca2ics.core.exceptions import SheetNotFoundError
from pca2ics.core.mapping import AccountCodeMapping, TaxCodeMapping

logger = logging.getLogger(__name__)


def _clean_cell(value: Any) -> Any:
    """Convert pandas/numpy cell values to plain Python values."""
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if hasattr(value, "item") and not isinstance(value, (str, bytes, datetime)):
        # numpy scalar
        value = value.item()
        if isinstance(value, float) and math.isnan(value):
            return None
    return value


def _is_blank_row(row: List[Any]) -> bool:
    return all(v is None or (isinstance(v, str) and not v.strip()) for v in row)


class WorkbookReader:
    """
    Reads sheets from a PCA/ICS conversion workbook.

    Usage:
        reader = WorkbookReader(Path("pca2ics.xlsx"))
        rows = reader.load_source_rows("202509", header_rows=2)
        accounts = reader.load_account_mapping("科目対応表")
    """

    def __init__(self, file_path: Path):
        self.file_path = Path(file_path)
        if not self.file_path.exists():
            raise FileNotFoundError(f"File not found: {self.file_path}")
        with pd.ExcelFile(self.file_path) as xls:
            self.sheet_names: List[str] = [str(n) for n in xls.sheet_names]

    def has_sheet(self, sheet_name: str) -> bool:
        return sheet_name in self.sheet_names

    def read_grid(self, sheet_name: str) -> List[List[Any]]:
        """All rows of a sheet as plain values; empty cells become None."""
        if not self.has_sheet(sheet_name):
            raise SheetNotFoundError(sheet_name)

        df = pd.read_excel(self.file_path, sheet_name=sheet_name, header=None, dtype=object)
        return [[_clean_cell(v) for v in row] for row in df.itertuples(index=False, name=None)]

    def load_source_rows(self, sheet_name: str, header_rows: int = 2) -> List[List[Any]]:
        """
        Data rows of the PCA source sheet.

        The first `header_rows` rows (version line and column header) and
        fully blank rows are dropped.
        """
        grid = self.read_grid(sheet_name)
        rows = [row for row in grid[header_rows:] if not _is_blank_row(row)]
        logger.info(f"Source data: {len(rows)} rows from sheet {sheet_name}")
        return rows

    def load_account_mapping(self, sheet_name: str) -> AccountCodeMapping:
        mapping = AccountCodeMapping.from_rows(self.read_grid(sheet_name))
        logger.info(f"Account mapping: {len(mapping)} codes")
        return mapping

    def load_tax_mapping(self, sheet_name: str, error_log: Optional[ErrorLog] = None) -> TaxCodeMapping:
        """Tax mapping sheet, or the built-in default table when the sheet is absent."""
        if not self.has_sheet(sheet_name):
            message = f'Tax mapping sheet "{sheet_name}" not found; using the default table'
            if error_log is not None:
                error_log.info("load_tax_mapping", message)
            else:
                logger.info(message)
            return TaxCodeMapping.default()

        mapping = TaxCodeMapping.from_rows(self.read_grid(sheet_name))
        logger.info(f"Tax mapping: {len(mapping)} codes")
        return mapping

    def load_all(self, config: ConverterConfig, error_log: Optional[ErrorLog] = None):
        """Source rows, account mapping and tax mapping for one run."""
        sheets = config.sheets
        rows = self.load_source_rows(sheets.source, config.source_header_rows)
        accounts = self.load_account_mapping(sheets.account_mapping)
        taxes = self.load_tax_mapping(sheets.tax_mapping, error_log)
        return rows, accounts, taxes
