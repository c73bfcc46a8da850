"""Group raw ledger rows by voucher number."""

from typing import Dict, Iterable, List

from pca2ics.core.cells import CellValue
from pca2ics.core.models import RawLedgerRow

VoucherGroups = Dict[str, List[RawLedgerRow]]


def voucher_number_of(row: RawLedgerRow, column: int) -> str:
    """Text form of a row's voucher number (1001, 1001.0 and "1001" agree)."""
    return CellValue.at(row, column).text()


def group_by_voucher(rows: Iterable[RawLedgerRow], voucher_column: int) -> VoucherGroups:
    """
    Partition rows by voucher number.

    Groups keep the order in which each voucher first appears, and rows keep
    their original order inside a group. No validation is done here.

    Args:
        rows: Raw source rows
        voucher_column: Zero-based column holding the voucher number

    Returns:
        Ordered dict of voucher number -> rows
    """
    groups: VoucherGroups = {}

    for row in rows:
        groups.setdefault(voucher_number_of(row, voucher_column), []).append(row)

    return groups
