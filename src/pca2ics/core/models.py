"""
Journal data models.

Dataclasses for ledger items read from PCA rows and for the compound and
simple journals built from them.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

from pca2ics.core.cells import CellValue, normalize_code, normalize_tax_code


RawLedgerRow = Sequence[Any]


class Side(Enum):
    """Which side of a source row an item was read from."""

    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


@dataclass(frozen=True)
class LedgerItem:
    """One side (debit or credit) of a source ledger row."""

    side: Side
    account_code: str
    amount: Decimal
    account_name: str = ""
    sub_account_code: str = ""
    sub_account_name: str = ""
    tax_amount: Decimal = field(default_factory=lambda: Decimal("0"))
    tax_code: Optional[str] = None
    department_code: str = ""

    def __post_init__(self):
        """Convert numeric types to Decimal."""
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))
        if not isinstance(self.tax_amount, Decimal):
            object.__setattr__(self, "tax_amount", Decimal(str(self.tax_amount or 0)))

    @property
    def has_tax_code(self) -> bool:
        return bool(self.tax_code)


@dataclass(frozen=True)
class CompoundJournal:
    """All debit and credit items of one voucher."""

    voucher_number: str
    base_row: RawLedgerRow
    debit_items: Tuple[LedgerItem, ...]
    credit_items: Tuple[LedgerItem, ...]

    @property
    def total_debit(self) -> Decimal:
        return sum((i.amount for i in self.debit_items), Decimal("0"))

    @property
    def total_credit(self) -> Decimal:
        return sum((i.amount for i in self.credit_items), Decimal("0"))

    @property
    def is_balanced(self) -> bool:
        return self.total_debit == self.total_credit

    @property
    def items(self) -> List[LedgerItem]:
        return [*self.debit_items, *self.credit_items]


@dataclass(frozen=True)
class SimpleJournal:
    """One debit item matched against one credit item for the same amount."""

    voucher_number: str
    base_row: RawLedgerRow
    debit_item: LedgerItem
    credit_item: LedgerItem
    amount: Decimal
    has_special_account: bool = False


def read_ledger_item(row: RawLedgerRow, side: Side, columns) -> Optional[LedgerItem]:
    """
    Extract one side of a source row.

    Returns None when the side has no account code or its amount is not
    strictly positive.

    Args:
        row: Raw source row
        side: Side.DEBIT or Side.CREDIT
        columns: SourceColumns giving the column positions
    """
    layout = columns.for_side(side)

    account = CellValue.at(row, layout.account)
    amount = CellValue.at(row, layout.amount).decimal()
    if account.is_empty or amount <= 0:
        return None

    return LedgerItem(
        side=side,
        account_code=normalize_code(account),
        amount=amount,
        account_name=CellValue.at(row, layout.name).text(),
        sub_account_code=CellValue.at(row, layout.sub_code).text(),
        sub_account_name=CellValue.at(row, layout.sub_name).text(),
        tax_amount=CellValue.at(row, layout.tax_amount).decimal(),
        tax_code=normalize_tax_code(CellValue.at(row, layout.tax_code)),
        department_code=CellValue.at(row, layout.department).text(),
    )
