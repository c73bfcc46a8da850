"""
Excel workbook adapters for pca2ics.

Supports:
- Reading the PCA source sheet and the account / tax mapping sheets (pandas)
- Writing the ICS output sheet and the error-log sheet (openpyxl)
- Choosing the source sheet (latest YYYYMM sheet)
"""

from pca2ics.workbook.reader import WorkbookReader
from pca2ics.workbook.writer import WorkbookWriter
from pca2ics.workbook.sheets import (
    extract_period,
    candidate_source_sheets,
    find_latest_period_sheet,
    order_source_sheets,
)

__all__ = [
    "WorkbookReader",
    "WorkbookWriter",
    "extract_period",
    "candidate_source_sheets",
    "find_latest_period_sheet",
    "order_source_sheets",
]
