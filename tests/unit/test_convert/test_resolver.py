"""
Unit tests for code resolution.

Tests account mapping with name fallback and the tax-code precedence rules.
"""

from decimal import Decimal

import pytest

from pca2ics.core.error_log import Severity
from pca2ics.core.models import LedgerItem, Side, SimpleJournal
from pca2ics.convert.resolver import CodeResolver


def simple(debit, credit, special=False, voucher="1"):
    """Simple journal from two LedgerItem keyword dicts."""
    debit_item = LedgerItem(side=Side.DEBIT, **debit)
    credit_item = LedgerItem(side=Side.CREDIT, **credit)
    return SimpleJournal(
        voucher_number=voucher,
        base_row=[],
        debit_item=debit_item,
        credit_item=credit_item,
        amount=debit_item.amount,
        has_special_account=special,
    )


@pytest.fixture
def resolver(account_mapping, tax_mapping, error_log):
    return CodeResolver(account_mapping, tax_mapping, error_log)


class TestAccountResolution:
    """Tests for account code and name resolution."""

    def test_mapped_account(self, resolver):
        """Test code and display name come from the mapping tables."""
        item = LedgerItem(Side.DEBIT, "100", 1000, account_name="ゲンキン")
        resolved = resolver.resolve_account(item, "1")

        assert resolved.code == "111"
        assert resolved.name == "現金"

    def test_name_falls_back_to_source(self, resolver, account_mapping):
        """Test the source name is used when the target has no display name."""
        account_mapping.name_map.pop("511")
        item = LedgerItem(Side.CREDIT, "200", 1000, account_name="売上")

        assert resolver.resolve_account(item).name == "売上"

    def test_unmapped_account(self, resolver, error_log):
        """Test code "7" resolves to blanks with one ERROR for the voucher."""
        item = LedgerItem(Side.DEBIT, "7", 1000)
        resolved = resolver.resolve_account(item, "55")

        assert resolved.code == ""
        assert resolved.name == ""
        errors = error_log.by_severity(Severity.ERROR)
        assert len(errors) == 1
        assert errors[0].operation == "convert_account_code"
        assert errors[0].voucher_number == "55"
        assert "7" in errors[0].message


class TestTaxCodeResolution:
    """Tests for the tax code precedence."""

    def test_debit_tax_amount_gives_explicit_code(self, resolver):
        """Test a debit tax amount of 500 forces "315"."""
        journal = simple(
            {"account_code": "400", "amount": 5500, "tax_amount": 500, "tax_code": "Q5"},
            {"account_code": "100", "amount": 5500},
        )
        assert resolver.resolve_tax_code(journal) == "315"

    def test_credit_tax_amount_gives_explicit_code(self, resolver):
        """Test a credit tax amount also forces "315"."""
        journal = simple(
            {"account_code": "100", "amount": 1100},
            {"account_code": "200", "amount": 1100, "tax_amount": 100, "tax_code": "B5"},
        )
        assert resolver.resolve_tax_code(journal) == "315"

    def test_explicit_tax_beats_special_voucher(self, resolver):
        """Test the tax amount rule comes before the special voucher rule."""
        journal = simple(
            {"account_code": "100", "amount": 1100, "tax_amount": 100},
            {"account_code": "200", "amount": 1100},
            special=True,
        )
        assert resolver.resolve_tax_code(journal) == "315"

    def test_special_voucher_entry_without_special_account(self, resolver):
        """Test an entry 100/200 in a voucher with 335 gives "311"."""
        journal = simple(
            {"account_code": "100", "amount": 1000},
            {"account_code": "200", "amount": 1000},
            special=True,
        )
        assert resolver.resolve_tax_code(journal) == "311"

    def test_special_voucher_entry_touching_special_account(self, resolver):
        """Test the entry posting to 335 itself is mapped normally."""
        journal = simple(
            {"account_code": "335", "amount": 100, "tax_code": "Q5"},
            {"account_code": "100", "amount": 100},
            special=True,
        )
        assert resolver.resolve_tax_code(journal) == "317"

    def test_plain_entry_uses_tax_table(self, resolver):
        """Test a non-special entry maps its source tax code."""
        journal = simple(
            {"account_code": "100", "amount": 1000, "tax_code": "00"},
            {"account_code": "200", "amount": 1000, "tax_code": "B5"},
        )
        assert resolver.resolve_tax_code(journal) == "317"

    def test_tax_amount_taken_from_debit(self, resolver):
        """Test the output tax amount is the debit item's."""
        journal = simple(
            {"account_code": "400", "amount": 5500, "tax_amount": 500},
            {"account_code": "100", "amount": 5500, "tax_amount": 20},
        )
        assert resolver.resolve(journal).tax_amount == Decimal("500")


class TestSelectBestTaxCode:
    """Tests for choosing between the debit and credit tax codes."""

    @pytest.mark.parametrize("debit,credit,expected", [
        ("A0", "B5", "02"),     # debit wins when not neutral
        ("00", "B5", "317"),    # neutral debit defers to credit
        ("B5", "00", "317"),
        ("00", "00", "04"),
        (None, None, "04"),     # nothing given -> neutral
        (None, "A0", "02"),
        ("A0", None, "02"),
    ])
    def test_select_best_tax_code(self, resolver, debit, credit, expected):
        """Test the debit/credit/neutral preference."""
        assert resolver.select_best_tax_code(debit, credit) == expected

    def test_unmapped_tax_code(self, resolver, error_log):
        """Test an unknown tax code resolves to "" with one ERROR."""
        assert resolver.select_best_tax_code("ZZ", None, "3") == ""

        errors = error_log.by_severity(Severity.ERROR)
        assert len(errors) == 1
        assert errors[0].operation == "convert_tax_code"
        assert errors[0].voucher_number == "3"
