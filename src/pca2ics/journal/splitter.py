"""
Amount-split decomposition of compound journals.

Debit items and credit items are consumed as two FIFO queues. Each step
matches the two heads: equal amounts settle both, otherwise the smaller
head is settled in full and the larger one is carried forward with the
remaining amount. The order of the emitted simple journals follows the
order in which matches happen.

Example:
    debits  [700, 300]
    credits [1000]
    -> (700 vs 1000 split to 700), (300 vs remaining 300)
"""

from collections import deque
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Deque, List, Tuple

from pca2ics.core.models import CompoundJournal, LedgerItem, SimpleJournal


@dataclass
class SplitResult:
    """Simple journals produced from one compound journal plus any leftovers."""

    journals: List[SimpleJournal] = field(default_factory=list)
    unmatched_debits: Tuple[LedgerItem, ...] = ()
    unmatched_credits: Tuple[LedgerItem, ...] = ()

    @property
    def residual_debit(self) -> Decimal:
        return sum((i.amount for i in self.unmatched_debits), Decimal("0"))

    @property
    def residual_credit(self) -> Decimal:
        return sum((i.amount for i in self.unmatched_credits), Decimal("0"))

    @property
    def has_residual(self) -> bool:
        return bool(self.unmatched_debits or self.unmatched_credits)

    @property
    def total_amount(self) -> Decimal:
        return sum((j.amount for j in self.journals), Decimal("0"))


def split_by_amount(journal: CompoundJournal, has_special_account: bool = False) -> SplitResult:
    """
    Decompose a compound journal into simple journals.

    Input items are never modified; partially consumed items are replaced
    by copies carrying the remaining amount.

    Args:
        journal: Compound journal with non-empty debit and credit items
        has_special_account: Flag copied onto every simple journal

    Returns:
        SplitResult. When the two sides' totals differ, the side with the
        larger total keeps its unconsumed items in unmatched_debits or
        unmatched_credits.
    """
    debits: Deque[LedgerItem] = deque(journal.debit_items)
    credits: Deque[LedgerItem] = deque(journal.credit_items)
    result = SplitResult()

    def emit(debit: LedgerItem, credit: LedgerItem, amount: Decimal) -> None:
        result.journals.append(SimpleJournal(
            voucher_number=journal.voucher_number,
            base_row=journal.base_row,
            debit_item=debit,
            credit_item=credit,
            amount=amount,
            has_special_account=has_special_account,
        ))

    while debits and credits:
        debit = debits[0]
        credit = credits[0]

        if debit.amount == credit.amount:
            emit(debit, credit, debit.amount)
            debits.popleft()
            credits.popleft()

        elif debit.amount < credit.amount:
            # Settle the debit in full against part of the credit
            emit(debit, replace(credit, amount=debit.amount), debit.amount)
            debits.popleft()
            remaining = credit.amount - debit.amount
            credits.popleft()
            if remaining != 0:
                credits.appendleft(replace(credit, amount=remaining))

        else:
            emit(replace(debit, amount=credit.amount), credit, credit.amount)
            credits.popleft()
            remaining = debit.amount - credit.amount
            debits.popleft()
            if remaining != 0:
                debits.appendleft(replace(debit, amount=remaining))

    result.unmatched_debits = tuple(debits)
    result.unmatched_credits = tuple(credits)
    return result
