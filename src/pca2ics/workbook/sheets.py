"""
Source sheet selection.

PCA exports are imported one month per sheet, named YYYYMM. Everything that
is not a mapping, output or error-log sheet is a candidate source.
"""

import re
from typing import Iterable, List, Optional

from pca2ics.core.config import SheetNames

_PERIOD_PATTERN = re.compile(r"^(\d{6})$")


def extract_period(sheet_name: str) -> Optional[str]:
    """YYYYMM period of a sheet name, None for non-period sheets."""
    match = _PERIOD_PATTERN.match(sheet_name.strip())
    return match.group(1) if match else None


def candidate_source_sheets(sheet_names: Iterable[str], sheets: SheetNames) -> List[str]:
    """Sheets that may hold source data, in workbook order."""
    reserved = set(sheets.reserved)
    return [name for name in sheet_names if name not in reserved]


def find_latest_period_sheet(sheet_names: Iterable[str]) -> Optional[str]:
    """Sheet with the most recent YYYYMM name, None if there is none."""
    latest_sheet = None
    latest_period = None

    for name in sheet_names:
        period = extract_period(name)
        if period and (latest_period is None or period > latest_period):
            latest_period = period
            latest_sheet = name

    return latest_sheet


def order_source_sheets(sheet_names: Iterable[str]) -> List[str]:
    """Period sheets newest first, then the remaining sheets alphabetically."""
    names = list(sheet_names)
    periods = sorted((n for n in names if extract_period(n)), key=extract_period, reverse=True)
    others = sorted(n for n in names if not extract_period(n))
    return periods + others
