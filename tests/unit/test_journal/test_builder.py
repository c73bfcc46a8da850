"""
Unit tests for the compound journal builder.

Tests validation of voucher sides and special-account detection.
"""

from decimal import Decimal

import pytest

from pca2ics.core.config import ConverterConfig
from pca2ics.core.exceptions import UnbalancedVoucherError
from pca2ics.core.models import LedgerItem, Side
from pca2ics.journal.builder import (
    SPECIAL_ACCOUNT_CODES,
    build_compound_journal,
    has_special_account,
    is_special_account,
)


class TestBuildCompoundJournal:
    """Tests for build_compound_journal."""

    def test_single_row_with_both_sides(self, make_row, columns):
        """Test one row contributing a debit and a credit item."""
        rows = [make_row("1", debit={"account": "100", "amount": 1000},
                         credit={"account": "200", "amount": 1000})]

        journal = build_compound_journal("1", rows, columns)

        assert len(journal.debit_items) == 1
        assert len(journal.credit_items) == 1
        assert journal.base_row is rows[0]
        assert journal.voucher_number == "1"

    def test_multi_row_voucher(self, make_row, columns):
        """Test items are collected across rows in order."""
        rows = [
            make_row("1", debit={"account": "100", "amount": 700}, credit={"account": "200", "amount": 1000}),
            make_row("1", debit={"account": "110", "amount": 300}),
        ]

        journal = build_compound_journal("1", rows, columns)

        assert [i.account_code for i in journal.debit_items] == ["100", "110"]
        assert journal.total_debit == Decimal("1000")
        assert journal.total_credit == Decimal("1000")

    def test_zero_amount_side_ignored(self, make_row, columns):
        """Test a side with amount 0 contributes nothing."""
        rows = [
            make_row("1", debit={"account": "100", "amount": 500}, credit={"account": "200", "amount": 0}),
            make_row("1", credit={"account": "200", "amount": 500}),
        ]

        journal = build_compound_journal("1", rows, columns)

        assert len(journal.credit_items) == 1

    def test_debit_only_voucher_raises(self, make_row, columns):
        """Test a voucher without credit items is rejected."""
        rows = [make_row("9", debit={"account": "100", "amount": 500})]

        with pytest.raises(UnbalancedVoucherError) as exc_info:
            build_compound_journal("9", rows, columns)

        error = exc_info.value
        assert error.voucher_number == "9"
        assert error.debit_count == 1
        assert error.credit_count == 0
        assert "debit: 1 items, credit: 0 items" in error.message

    def test_credit_only_voucher_raises(self, make_row, columns):
        """Test a voucher without debit items is rejected."""
        rows = [make_row("9", credit={"account": "200", "amount": 500})]

        with pytest.raises(UnbalancedVoucherError):
            build_compound_journal("9", rows, columns)


class TestSpecialAccounts:
    """Tests for special-account detection."""

    def test_has_special_account(self):
        """Test 335 and 191 mark a voucher as special."""
        plain = [LedgerItem(Side.DEBIT, "100", 100), LedgerItem(Side.CREDIT, "200", 100)]
        special = plain + [LedgerItem(Side.DEBIT, "335", 10)]

        assert not has_special_account(plain)
        assert has_special_account(special)

    def test_is_special_account_normalizes(self):
        """Test codes are compared in canonical form."""
        assert is_special_account("0335")
        assert is_special_account("191")
        assert not is_special_account("3350")

    def test_custom_special_codes(self):
        """Test detection with a configured code set."""
        items = [LedgerItem(Side.DEBIT, "500", 100)]
        assert has_special_account(items, frozenset({"500"}))

    def test_default_codes_match_config(self):
        """Test the module default is the configured default set."""
        assert SPECIAL_ACCOUNT_CODES == ConverterConfig().tax_rules.special_account_codes
        assert SPECIAL_ACCOUNT_CODES == frozenset({"335", "191"})
