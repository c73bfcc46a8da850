"""
Account code and tax code mapping tables.

Both tables are loaded in full before a run starts. They can be built from
plain dicts or from the raw rows of a mapping sheet (header row first).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pca2ics.core.cells import CellValue, format_target_code, normalize_code, normalize_tax_code


@dataclass
class AccountCodeMapping:
    """
    PCA account code -> ICS account code, and ICS code -> display name.

    Keys of `code_map` are canonical source codes (see normalize_code);
    keys of `name_map` and values of `code_map` are zero-padded target codes.
    """

    code_map: Dict[str, str] = field(default_factory=dict)
    name_map: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Normalize keys so lookups do not depend on how codes were typed."""
        self.code_map = {
            normalize_code(src): format_target_code(dst)
            for src, dst in self.code_map.items()
            if normalize_code(src) and normalize_code(dst)
        }
        self.name_map = {
            format_target_code(code): str(name)
            for code, name in self.name_map.items()
            if normalize_code(code) and name
        }

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Any]], has_header: bool = True) -> "AccountCodeMapping":
        """
        Build from account mapping sheet rows.

        Columns: A = account name, B = ICS code, C = PCA code.
        """
        code_map: Dict[str, str] = {}
        name_map: Dict[str, str] = {}

        for i, row in enumerate(rows):
            if has_header and i == 0:
                continue
            name = CellValue.at(row, 0)
            ics_code = CellValue.at(row, 1)
            pca_code = CellValue.at(row, 2)

            if not pca_code.is_empty and not ics_code.is_empty:
                code_map[pca_code.text()] = ics_code.text()
            if not ics_code.is_empty and not name.is_empty:
                name_map[ics_code.text()] = name.text()

        return cls(code_map=code_map, name_map=name_map)

    def target_code(self, source_code: str) -> Optional[str]:
        """ICS code for a PCA code, None when unmapped."""
        code = normalize_code(source_code)
        if not code:
            return None
        return self.code_map.get(code)

    def display_name(self, target_code: str) -> Optional[str]:
        if not target_code:
            return None
        return self.name_map.get(format_target_code(target_code))

    def __len__(self) -> int:
        return len(self.code_map)


# Built-in PCA -> ICS tax classification table: (PCA code, ICS code, description)
DEFAULT_TAX_MAPPING_ROWS = [
    ("00", "04", "消費税に関係ない → 不課税"),
    ("99", "04", "不明 → 不課税"),
    ("A0", "02", "非課税売上"),
    ("B5", "317", "課税売上10%"),
    ("C5", "317", "課税売上返還10%"),
    ("D5", "317", "貸倒れ10%"),
    ("E5", "317", "貸倒れ回収10%"),
    ("Q5", "317", "課税仕入10%"),
    ("R5", "317", "課税仕入返還10%"),
    ("F0", "40", "輸出免税売上"),
    ("G0", "02", "非課税売上の返還"),
    ("H0", "40", "輸出免税売上の返還"),
    ("P0", "02", "非課税仕入"),
    ("W0", "02", "非課税仕入の返還"),
    ("B1", "20", "課税売上3%"),
    ("B3", "207", "課税売上5%"),
    ("B4", "217", "課税売上8%"),
    ("C1", "20", "課税売上返還3%"),
    ("C3", "207", "課税売上返還5%"),
    ("C4", "217", "課税売上返還8%"),
    ("Q1", "20", "課税仕入3%"),
    ("Q3", "207", "課税仕入5%"),
    ("Q4", "217", "課税仕入8%"),
    ("R1", "20", "課税仕入返還3%"),
    ("R3", "207", "課税仕入返還5%"),
    ("R4", "217", "課税仕入返還8%"),
]

TAX_MAPPING_HEADERS = ["PCAコード", "ICSコード", "説明"]


@dataclass
class TaxCodeMapping:
    """PCA tax classification code -> ICS tax code."""

    codes: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        normalized = {}
        for src, dst in self.codes.items():
            key = normalize_tax_code(src)
            value = CellValue(dst).text()
            if key and value:
                normalized[key] = value
        self.codes = normalized

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Any]], has_header: bool = True) -> "TaxCodeMapping":
        """
        Build from tax mapping sheet rows.

        Columns: A = PCA code, B = ICS code, C = description (ignored).
        """
        codes: Dict[str, str] = {}
        for i, row in enumerate(rows):
            if has_header and i == 0:
                continue
            pca_code = CellValue.at(row, 0)
            ics_code = CellValue.at(row, 1)
            if not pca_code.is_empty and not ics_code.is_empty:
                codes[pca_code.raw] = ics_code.raw
        return cls(codes=codes)

    @classmethod
    def default(cls) -> "TaxCodeMapping":
        """Built-in table used when a workbook has no tax mapping sheet."""
        return cls(codes={pca: ics for pca, ics, _ in DEFAULT_TAX_MAPPING_ROWS})

    @staticmethod
    def default_rows() -> List[List[str]]:
        """Default table as sheet rows, header first."""
        return [list(TAX_MAPPING_HEADERS)] + [list(r) for r in DEFAULT_TAX_MAPPING_ROWS]

    def target_code(self, source_code: str) -> Optional[str]:
        code = normalize_tax_code(source_code)
        if not code:
            return None
        return self.codes.get(code)

    def __len__(self) -> int:
        return len(self.codes)
