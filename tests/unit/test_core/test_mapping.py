"""
Unit tests for the account and tax mapping tables.
"""

from pca2ics.core.mapping import (
    DEFAULT_TAX_MAPPING_ROWS,
    AccountCodeMapping,
    TaxCodeMapping,
)


class TestAccountCodeMapping:
    """Tests for AccountCodeMapping."""

    def test_from_rows_skips_header(self):
        """Test building from sheet rows (name, ICS code, PCA code)."""
        rows = [
            ["科目名", "ICSコード", "PCAコード"],
            ["現金", 111, 100],
            ["売上高", 511.0, "200"],
        ]
        mapping = AccountCodeMapping.from_rows(rows)

        assert len(mapping) == 2
        assert mapping.target_code("100") == "111"
        assert mapping.target_code("200") == "511"
        assert mapping.display_name("111") == "現金"

    def test_lookup_ignores_code_formatting(self):
        """Test "0100", 100 and 100.0 find the same entry."""
        mapping = AccountCodeMapping(code_map={"100": "111"})

        assert mapping.target_code("0100") == "111"
        assert mapping.target_code(100) == "111"
        assert mapping.target_code(100.0) == "111"

    def test_target_codes_are_padded(self):
        """Test short numeric target codes are zero-padded."""
        rows = [["header"], ["雑費", 11, 900]]
        mapping = AccountCodeMapping.from_rows(rows)

        assert mapping.target_code("900") == "011"
        assert mapping.display_name("011") == "雑費"
        assert mapping.display_name("11") == "雑費"

    def test_unmapped_and_empty_codes(self):
        """Test missing lookups return None."""
        mapping = AccountCodeMapping(code_map={"100": "111"})

        assert mapping.target_code("7") is None
        assert mapping.target_code("") is None
        assert mapping.display_name("") is None
        assert mapping.display_name("999") is None

    def test_rows_without_pca_code(self):
        """Test rows without a PCA code still register the display name."""
        rows = [["header"], ["預り金", 211, None]]
        mapping = AccountCodeMapping.from_rows(rows)

        assert len(mapping) == 0
        assert mapping.display_name("211") == "預り金"


class TestTaxCodeMapping:
    """Tests for TaxCodeMapping."""

    def test_default_table(self):
        """Test the built-in table."""
        mapping = TaxCodeMapping.default()

        assert len(mapping) == len(DEFAULT_TAX_MAPPING_ROWS)
        assert mapping.target_code("B5") == "317"
        assert mapping.target_code("Q4") == "217"
        assert mapping.target_code("00") == "04"

    def test_numeric_zero_matches_neutral_code(self):
        """Test 0 typed as a number finds the "00" entry."""
        assert TaxCodeMapping.default().target_code(0) == "04"

    def test_from_rows(self):
        """Test building from sheet rows (PCA code, ICS code, description)."""
        rows = [
            ["PCAコード", "ICSコード", "説明"],
            ["B5", 317, "課税売上10%"],
            [0, 4, "不課税"],
            ["", "", ""],
        ]
        mapping = TaxCodeMapping.from_rows(rows)

        assert len(mapping) == 2
        assert mapping.target_code("B5") == "317"
        assert mapping.target_code("00") == "4"

    def test_unmapped_tax_code(self):
        """Test unknown codes return None."""
        mapping = TaxCodeMapping.default()

        assert mapping.target_code("ZZ") is None
        assert mapping.target_code(None) is None

    def test_default_rows_have_header(self):
        """Test the template rows start with the header."""
        rows = TaxCodeMapping.default_rows()

        assert rows[0] == ["PCAコード", "ICSコード", "説明"]
        assert len(rows) == len(DEFAULT_TAX_MAPPING_ROWS) + 1
