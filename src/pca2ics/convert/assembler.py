"""
ICS output row assembly.

One row per simple journal in the fixed 39-column ICS journal import
layout. Columns the PCA export never supplies are left blank.
"""

from datetime import date, datetime
from typing import Any, List

from pca2ics.core.cells import CellValue
from pca2ics.core.config import SourceColumns
from pca2ics.core.models import SimpleJournal
from pca2ics.convert.resolver import ResolvedJournal


# (field key, ICS header)
OUTPUT_COLUMNS = [
    ("date", "日付"),
    ("closing_flag", "決修"),
    ("voucher_number", "伝票番号"),
    ("debit_department", "借方部門コード"),
    ("debit_business_class", "借方事管区分"),
    ("debit_project", "借方工事コード"),
    ("debit_code", "借方コード"),
    ("debit_name", "借方名称"),
    ("debit_sub_code", "借方枝番"),
    ("debit_sub_name", "借方枝番摘要"),
    ("debit_sub_kana", "借方枝番カナ"),
    ("credit_department", "貸方部門コード"),
    ("credit_business_class", "貸方事管区分"),
    ("credit_project", "貸方工事コード"),
    ("credit_code", "貸方コード"),
    ("credit_name", "貸方名称"),
    ("credit_sub_code", "貸方枝番"),
    ("credit_sub_name", "貸方枝番摘要"),
    ("credit_sub_kana", "貸方枝番カナ"),
    ("amount", "金額"),
    ("memo", "摘要"),
    ("tax_code", "税区分"),
    ("consideration", "対価"),
    ("purchase_class", "仕入区分"),
    ("sales_industry_class", "売上業種区分"),
    ("journal_class", "仕訳区分"),
    ("specific_income_class", "特定収入区分"),
    ("dummy1", "ダミー1"),
    ("dummy2", "ダミー2"),
    ("dummy3", "ダミー3"),
    ("internal_transaction", "内部取引"),
    ("tax_amount", "税額"),
    ("voucher_reference", "証憑番号"),
    ("bill_number", "手形番号"),
    ("bill_due_date", "手形期日"),
    ("sticky_number", "付箋番号"),
    ("sticky_comment", "付箋コメント"),
    ("tax_exempt_business", "免税事業者等"),
    ("invoice_registration_number", "インボイス登録番号"),
]

OUTPUT_FIELDS = [key for key, _ in OUTPUT_COLUMNS]
OUTPUT_HEADERS = [header for _, header in OUTPUT_COLUMNS]


def format_date(value: Any) -> str:
    """
    Convert a PCA voucher date to ICS form.

    20250930 -> "2025/9/30". Date objects are formatted the same way; any
    other value is returned as text unchanged.
    """
    cell = value if isinstance(value, CellValue) else CellValue(value)
    if isinstance(cell.raw, datetime):
        d = cell.raw.date()
        return f"{d.year}/{d.month}/{d.day}"
    if isinstance(cell.raw, date):
        d = cell.raw
        return f"{d.year}/{d.month}/{d.day}"

    text = cell.text()
    if len(text) == 8 and text.isdigit():
        return f"{text[:4]}/{int(text[4:6])}/{int(text[6:8])}"
    return text


def assemble_row(journal: SimpleJournal, resolved: ResolvedJournal, columns: SourceColumns) -> List[Any]:
    """Build the ICS row for one simple journal, in OUTPUT_HEADERS order."""
    base = journal.base_row
    debit, credit = journal.debit_item, journal.credit_item

    values = dict.fromkeys(OUTPUT_FIELDS, "")
    values.update(
        date=format_date(CellValue.at(base, columns.date)),
        voucher_number=CellValue.at(base, columns.voucher_number).value(),
        debit_department=debit.department_code,
        debit_code=resolved.debit.code,
        debit_name=resolved.debit.name,
        debit_sub_code=debit.sub_account_code,
        debit_sub_name=debit.sub_account_name,
        credit_department=credit.department_code,
        credit_code=resolved.credit.code,
        credit_name=resolved.credit.name,
        credit_sub_code=credit.sub_account_code,
        credit_sub_name=credit.sub_account_name,
        amount=journal.amount,
        memo=CellValue.at(base, columns.memo).text(),
        tax_code=resolved.tax_code,
        tax_amount=resolved.tax_amount,
    )
    return [values[key] for key in OUTPUT_FIELDS]
