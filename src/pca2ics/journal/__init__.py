"""
Journal decomposition for pca2ics.

- grouping: raw rows -> voucher groups
- builder: voucher rows -> CompoundJournal, special-account detection
- splitter: CompoundJournal -> SimpleJournal list (amount-split method)
"""

from pca2ics.journal.grouping import group_by_voucher, voucher_number_of, VoucherGroups
from pca2ics.journal.builder import (
    build_compound_journal,
    has_special_account,
    is_special_account,
    SPECIAL_ACCOUNT_CODES,
)
from pca2ics.journal.splitter import split_by_amount, SplitResult

__all__ = [
    "group_by_voucher",
    "voucher_number_of",
    "VoucherGroups",
    "build_compound_journal",
    "has_special_account",
    "is_special_account",
    "SPECIAL_ACCOUNT_CODES",
    "split_by_amount",
    "SplitResult",
]
