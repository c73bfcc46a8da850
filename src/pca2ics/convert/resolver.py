"""
Code resolution for simple journals.

Maps PCA account codes and tax classifications to their ICS equivalents.

Tax code precedence:
1. Either side carries a tax amount      -> explicit tax code ("315")
2. Voucher touches a special account and
   this entry does not                   -> special voucher code ("311")
3. Otherwise the best source tax code is mapped through the tax table:
   the debit code unless it is "00", then the credit code unless it is
   "00", then "00" itself. A missing code on one side defers to the other.

Unmapped codes are logged as ERROR and resolve to "" (never guessed).
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from pca2ics.core.config import TaxRules
from pca2ics.core.error_log import ErrorLog
from pca2ics.core.exceptions import MappingNotFoundError
from pca2ics.core.mapping import AccountCodeMapping, TaxCodeMapping
from pca2ics.core.models import LedgerItem, SimpleJournal
from pca2ics.journal.builder import is_special_account


@dataclass(frozen=True)
class ResolvedAccount:
    code: str
    name: str


@dataclass(frozen=True)
class ResolvedJournal:
    """ICS codes for one simple journal."""

    debit: ResolvedAccount
    credit: ResolvedAccount
    tax_code: str
    tax_amount: Decimal


class CodeResolver:
    """
    Resolves account codes, names and tax codes for simple journals.

    Usage:
        resolver = CodeResolver(account_mapping, tax_mapping, error_log)
        resolved = resolver.resolve(simple_journal)
    """

    def __init__(
        self,
        account_mapping: AccountCodeMapping,
        tax_mapping: TaxCodeMapping,
        error_log: ErrorLog,
        rules: Optional[TaxRules] = None,
    ):
        self.account_mapping = account_mapping
        self.tax_mapping = tax_mapping
        self.error_log = error_log
        self.rules = rules or TaxRules()

    def resolve(self, journal: SimpleJournal) -> ResolvedJournal:
        voucher = journal.voucher_number
        return ResolvedJournal(
            debit=self.resolve_account(journal.debit_item, voucher),
            credit=self.resolve_account(journal.credit_item, voucher),
            tax_code=self.resolve_tax_code(journal),
            tax_amount=journal.debit_item.tax_amount or Decimal("0"),
        )

    def resolve_account(self, item: LedgerItem, voucher_number: str = "") -> ResolvedAccount:
        """
        Map an item's account to its ICS code and display name.

        The name comes from the mapping table (keyed by ICS code), falling
        back to the name on the source row.
        """
        code = self.convert_account_code(item.account_code, voucher_number)
        name = self.account_mapping.display_name(code) or item.account_name or ""
        return ResolvedAccount(code=code, name=name)

    def convert_account_code(self, source_code: str, voucher_number: str = "") -> str:
        target = self.account_mapping.target_code(source_code)
        if target is None:
            self.error_log.error(
                "convert_account_code",
                MappingNotFoundError("account", source_code).message,
                voucher_number=voucher_number,
            )
            return ""
        return target

    def convert_tax_code(self, source_code: str, voucher_number: str = "") -> str:
        target = self.tax_mapping.target_code(source_code)
        if target is None:
            self.error_log.error(
                "convert_tax_code",
                MappingNotFoundError("tax", source_code).message,
                voucher_number=voucher_number,
            )
            return ""
        return target

    def resolve_tax_code(self, journal: SimpleJournal) -> str:
        debit, credit = journal.debit_item, journal.credit_item

        if debit.tax_amount > 0 or credit.tax_amount > 0:
            return self.rules.explicit_tax_code

        if journal.has_special_account:
            touches_special = (
                is_special_account(debit.account_code, self.rules.special_account_codes)
                or is_special_account(credit.account_code, self.rules.special_account_codes)
            )
            if not touches_special:
                return self.rules.special_voucher_tax_code

        return self.select_best_tax_code(debit.tax_code, credit.tax_code, journal.voucher_number)

    def select_best_tax_code(
        self,
        debit_code: Optional[str],
        credit_code: Optional[str],
        voucher_number: str = "",
    ) -> str:
        """Pick the source tax code to map, preferring codes other than "00"."""
        neutral = self.rules.neutral_source_code

        if not debit_code and not credit_code:
            chosen = neutral
        elif not debit_code:
            chosen = credit_code
        elif not credit_code:
            chosen = debit_code
        elif debit_code != neutral:
            chosen = debit_code
        elif credit_code != neutral:
            chosen = credit_code
        else:
            chosen = neutral

        return self.convert_tax_code(chosen, voucher_number)
