"""
Shared pytest fixtures for pca2ics tests.

Provides configuration, mapping tables, the error log and a builder for
raw PCA ledger rows laid out at the default column positions.
"""

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from openpyxl import Workbook

from pca2ics.core.config import ConverterConfig
from pca2ics.core.error_log import ErrorLog
from pca2ics.core.mapping import AccountCodeMapping, TaxCodeMapping


# Width of a PCA export row (memo is the last column)
ROW_WIDTH = 27

# PCA code -> (ICS code, display name)
TEST_ACCOUNTS = {
    "100": ("111", "現金"),
    "110": ("131", "普通預金"),
    "200": ("511", "売上高"),
    "300": ("300", "買掛金"),
    "400": ("741", "消耗品費"),
    "335": ("335", "仮払消費税"),
    "191": ("191", "仮受消費税"),
}


def ledger_row(voucher, debit=None, credit=None, date=20250930, memo=""):
    """
    Build one raw PCA row.

    debit / credit are dicts with any of: account, amount, name, sub_code,
    sub_name, tax_code, tax_amount, department.
    """
    columns = ConverterConfig().source_columns
    row = [None] * ROW_WIDTH
    row[columns.date] = date
    row[columns.voucher_number] = voucher
    row[columns.memo] = memo

    for layout, values in ((columns.debit, debit), (columns.credit, credit)):
        for key, value in (values or {}).items():
            row[getattr(layout, key)] = value

    return row


@pytest.fixture
def config():
    """Provide the default configuration."""
    return ConverterConfig()


@pytest.fixture
def columns(config):
    """Provide the default source column layout."""
    return config.source_columns


@pytest.fixture
def account_mapping():
    """Provide an account mapping covering TEST_ACCOUNTS."""
    return AccountCodeMapping(
        code_map={pca: ics for pca, (ics, _) in TEST_ACCOUNTS.items()},
        name_map={ics: name for ics, name in TEST_ACCOUNTS.values()},
    )


@pytest.fixture
def tax_mapping():
    """Provide the built-in tax mapping."""
    return TaxCodeMapping.default()


@pytest.fixture
def error_log():
    """Provide an empty error log for source sheet 202509."""
    return ErrorLog(source="202509")


@pytest.fixture
def make_row():
    """Provide the ledger_row builder."""
    return ledger_row


def build_workbook(path, source_sheets, with_tax_sheet=False):
    """
    Save a conversion workbook.

    source_sheets maps sheet name -> list of data rows; the PCA version
    line and header row are added in front of each.
    """
    wb = Workbook()
    wb.remove(wb.active)

    for name, rows in source_sheets.items():
        ws = wb.create_sheet(name)
        ws.append(["PCA会計 仕訳データ Version 1"])
        ws.append(["伝票日付", "伝票番号"])
        for row in rows:
            ws.append(row)

    accounts = wb.create_sheet("科目対応表")
    accounts.append(["科目名", "ICSコード", "PCAコード"])
    for pca, (ics, name) in TEST_ACCOUNTS.items():
        accounts.append([name, int(ics), int(pca)])

    if with_tax_sheet:
        taxes = wb.create_sheet("税区分マッピング")
        for row in TaxCodeMapping.default_rows():
            taxes.append(row)

    wb.save(path)
    return path


@pytest.fixture
def sample_workbook(tmp_path):
    """
    Workbook with sheets 202508 and 202509.

    202509 holds a simple voucher (1), a compound voucher (2), a debit-only
    voucher (3) and a voucher with the unmapped account 7 (4).
    """
    september = [
        ledger_row(1, debit={"account": 100, "amount": 1100, "tax_code": "00"},
                   credit={"account": 200, "amount": 1100, "tax_code": "B5"}, memo="売上"),
        ledger_row(2, debit={"account": 100, "amount": 700}, credit={"account": 200, "amount": 1000}),
        ledger_row(2, debit={"account": 110, "amount": 300}),
        ledger_row(3, debit={"account": 400, "amount": 500}),
        ledger_row(4, debit={"account": 7, "amount": 200}, credit={"account": 100, "amount": 200}),
    ]
    august = [
        ledger_row(1, date=20250815, debit={"account": 100, "amount": 10},
                   credit={"account": 200, "amount": 10}),
    ]
    return build_workbook(tmp_path / "books.xlsx", {"202508": august, "202509": september})


@pytest.fixture
def workbook_factory(tmp_path):
    """Provide build_workbook writing into tmp_path."""
    def factory(source_sheets, name="books.xlsx", with_tax_sheet=False):
        return build_workbook(tmp_path / name, source_sheets, with_tax_sheet)
    return factory
