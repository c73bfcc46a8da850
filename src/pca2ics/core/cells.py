"""
Cell value normalization.

Source grids hold loosely typed values: strings, ints, floats (pandas turns
blanks into NaN), dates, or nothing at all. CellValue wraps one such value
with explicit emptiness so the rest of the package only sees normalized
text, codes and Decimal amounts.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_FLOOR
from typing import Any, Optional, Sequence
import math


@dataclass(frozen=True)
class CellValue:
    """A single raw cell from a source grid."""

    raw: Any = None

    @classmethod
    def at(cls, row: Sequence[Any], index: int) -> "CellValue":
        """Read column `index` of `row`; cells past the end are empty."""
        if index < 0 or index >= len(row):
            return cls(None)
        return cls(row[index])

    @property
    def is_empty(self) -> bool:
        value = self.raw
        if value is None:
            return True
        if isinstance(value, float) and math.isnan(value):
            return True
        if isinstance(value, str) and value.strip() == "":
            return True
        return False

    @property
    def is_number(self) -> bool:
        return isinstance(self.raw, (int, float, Decimal)) and not isinstance(self.raw, bool) \
            and not self.is_empty

    @property
    def is_date(self) -> bool:
        return isinstance(self.raw, (date, datetime))

    def text(self) -> str:
        """
        Plain text form of the cell.

        Integral floats lose their trailing ".0" so that 1001.0 read by
        pandas and "1001" typed by a user produce the same text.
        """
        if self.is_empty:
            return ""
        value = self.raw
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, Decimal) and value.is_finite() and value == value.to_integral_value():
            return str(value.quantize(Decimal("1")))
        return str(value).strip()

    def decimal(self) -> Decimal:
        """
        Numeric value of the cell.

        Empty, unparseable and non-finite values ("NaN", "Infinity") read
        as Decimal("0").
        """
        if self.is_empty:
            return Decimal("0")
        value = self.raw
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            result = Decimal(str(value))
        else:
            try:
                result = Decimal(str(value).replace(",", "").strip())
            except InvalidOperation:
                return Decimal("0")
        if not result.is_finite():
            return Decimal("0")
        return result

    def value(self) -> Any:
        """
        Cell value for output: "" when empty, integral floats as int,
        text stripped, anything else unchanged.
        """
        if self.is_empty:
            return ""
        value = self.raw
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            return value.strip()
        return value


def normalize_code(value: Any) -> str:
    """
    Canonical text form of an account code.

    Numeric codes are floored to an integer and lose leading zeros
    ("011", 11 and 11.0 all become "11"). Anything else is kept as
    stripped text. Empty cells give "".
    """
    cell = value if isinstance(value, CellValue) else CellValue(value)
    if cell.is_empty:
        return ""
    text = cell.text()
    try:
        number = Decimal(text.replace(",", ""))
    except InvalidOperation:
        return text
    if not number.is_finite():
        return text
    return str(int(number.to_integral_value(rounding=ROUND_FLOOR)))


def format_target_code(value: Any, width: int = 3) -> str:
    """Target account codes are written zero-padded when numeric ("11" -> "011")."""
    code = normalize_code(value)
    if code.isdigit():
        return code.zfill(width)
    return code


def normalize_tax_code(value: Any) -> Optional[str]:
    """
    Canonical text form of a tax classification code, None when absent.

    Tax codes are mostly alphanumeric ("B5", "Q5"). A numeric zero stands
    for the neutral code "00" because spreadsheets drop the leading zero.
    """
    cell = value if isinstance(value, CellValue) else CellValue(value)
    if cell.is_empty:
        return None
    if cell.is_number and cell.decimal() == 0:
        return "00"
    return cell.text()
