"""
Compound journal builder.

Splits the rows of one voucher into debit items and credit items, rejects
vouchers with an empty side, and detects the special accounts that change
tax-code resolution for the whole voucher.
"""

from typing import AbstractSet, Iterable, List, Sequence
import logging

from pca2ics.core.cells import normalize_code
from pca2ics.core.config import SourceColumns, TaxRules
from pca2ics.core.exceptions import UnbalancedVoucherError
from pca2ics.core.models import (
    CompoundJournal,
    LedgerItem,
    RawLedgerRow,
    Side,
    read_ledger_item,
)

logger = logging.getLogger(__name__)

SPECIAL_ACCOUNT_CODES = TaxRules().special_account_codes


def build_compound_journal(
    voucher_number: str,
    rows: Sequence[RawLedgerRow],
    columns: SourceColumns,
) -> CompoundJournal:
    """
    Build the compound journal for one voucher.

    A row contributes a debit item when its debit account is present and its
    debit amount is positive, and likewise a credit item; one row may
    contribute both.

    Args:
        voucher_number: Voucher the rows belong to
        rows: The voucher's rows in original order (non-empty)
        columns: Source column layout

    Returns:
        CompoundJournal whose base row is the voucher's first row

    Raises:
        UnbalancedVoucherError: If the voucher has no debit or no credit items
    """
    debit_items: List[LedgerItem] = []
    credit_items: List[LedgerItem] = []

    for row in rows:
        debit = read_ledger_item(row, Side.DEBIT, columns)
        if debit is not None:
            debit_items.append(debit)

        credit = read_ledger_item(row, Side.CREDIT, columns)
        if credit is not None:
            credit_items.append(credit)

    if not debit_items or not credit_items:
        raise UnbalancedVoucherError(voucher_number, len(debit_items), len(credit_items))

    logger.debug(
        f"Voucher {voucher_number}: {len(debit_items)} debit / {len(credit_items)} credit items"
    )

    return CompoundJournal(
        voucher_number=voucher_number,
        base_row=rows[0],
        debit_items=tuple(debit_items),
        credit_items=tuple(credit_items),
    )


def has_special_account(
    items: Iterable[LedgerItem],
    special_codes: AbstractSet[str] = SPECIAL_ACCOUNT_CODES,
) -> bool:
    """True if any item posts to one of the special accounts (335 / 191)."""
    return any(normalize_code(item.account_code) in special_codes for item in items)


def is_special_account(account_code: str, special_codes: AbstractSet[str] = SPECIAL_ACCOUNT_CODES) -> bool:
    return normalize_code(account_code) in special_codes
