"""Converter configuration for pca2ics.

Provides data-driven configuration with sensible defaults: sheet names,
source column positions and the tax-code business rules.
"""

import copy
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from pca2ics.core.exceptions import ConfigError
from pca2ics.core.models import Side

logger = logging.getLogger(__name__)


# Default configuration (used when no config file overrides a value)
DEFAULT_CONFIG = {
    "$schema": "pca2ics_config_v1",
    "version": "1.0",

    "sheets": {
        "source": "",               # chosen at run time
        "account_mapping": "科目対応表",
        "tax_mapping": "税区分マッピング",
        "output": "ICS変換結果",
        "error_log": "エラーログ"
    },

    # Zero-based column positions in the PCA export
    "source_columns": {
        "date": 0,
        "voucher_number": 1,
        "debit": {
            "department": 5,
            "account": 7,
            "name": 8,
            "sub_code": 9,
            "sub_name": 10,
            "tax_code": 11,
            "amount": 13,
            "tax_amount": 14
        },
        "credit": {
            "department": 16,
            "account": 18,
            "name": 19,
            "sub_code": 20,
            "sub_name": 21,
            "tax_code": 22,
            "amount": 24,
            "tax_amount": 25
        },
        "memo": 26
    },

    # Line 1 is the PCA version line, line 2 the header
    "source_header_rows": 2,

    "tax_rules": {
        "explicit_tax_code": "315",
        "special_voucher_tax_code": "311",
        "neutral_source_code": "00",
        "special_account_codes": ["335", "191"]
    }
}


@dataclass(frozen=True)
class SideColumns:
    """Column positions for one side (debit or credit) of a source row."""
    department: int
    account: int
    name: int
    sub_code: int
    sub_name: int
    tax_code: int
    amount: int
    tax_amount: int


@dataclass(frozen=True)
class SourceColumns:
    """Column positions of the PCA journal export."""
    date: int
    voucher_number: int
    debit: SideColumns
    credit: SideColumns
    memo: int

    def for_side(self, side: Side) -> SideColumns:
        return self.debit if side is Side.DEBIT else self.credit


@dataclass
class SheetNames:
    """Workbook sheet names."""
    source: str = ""
    account_mapping: str = "科目対応表"
    tax_mapping: str = "税区分マッピング"
    output: str = "ICS変換結果"
    error_log: str = "エラーログ"

    @property
    def reserved(self) -> List[str]:
        """Sheets that never hold source data."""
        return [self.account_mapping, self.tax_mapping, self.output, self.error_log]


@dataclass(frozen=True)
class TaxRules:
    """Fixed tax codes and special accounts used by the code resolver."""
    explicit_tax_code: str = "315"
    special_voucher_tax_code: str = "311"
    neutral_source_code: str = "00"
    special_account_codes: frozenset = field(
        default_factory=lambda: frozenset(DEFAULT_CONFIG["tax_rules"]["special_account_codes"])
    )


def _side_columns(data: Dict[str, Any]) -> SideColumns:
    return SideColumns(**{name: int(data[name]) for name in SideColumns.__dataclass_fields__})


class ConverterConfig:
    """
    Configuration for one conversion run.

    Loads from a JSON file with fallback to defaults.

    Usage:
        config = ConverterConfig.load(Path("pca2ics.json"))
        columns = config.source_columns
        rules = config.tax_rules
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        """Initialize from configuration dictionary."""
        data = self._deep_merge(DEFAULT_CONFIG, data or {})
        self._raw = data

        try:
            sheets = data["sheets"]
            self.sheets = SheetNames(
                source=sheets.get("source", ""),
                account_mapping=sheets["account_mapping"],
                tax_mapping=sheets["tax_mapping"],
                output=sheets["output"],
                error_log=sheets["error_log"],
            )

            cols = data["source_columns"]
            self.source_columns = SourceColumns(
                date=int(cols["date"]),
                voucher_number=int(cols["voucher_number"]),
                debit=_side_columns(cols["debit"]),
                credit=_side_columns(cols["credit"]),
                memo=int(cols["memo"]),
            )

            self.source_header_rows = int(data.get("source_header_rows", 2))

            rules = data["tax_rules"]
            self.tax_rules = TaxRules(
                explicit_tax_code=str(rules["explicit_tax_code"]),
                special_voucher_tax_code=str(rules["special_voucher_tax_code"]),
                neutral_source_code=str(rules["neutral_source_code"]),
                special_account_codes=frozenset(str(c) for c in rules["special_account_codes"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "ConverterConfig":
        """
        Load configuration with fallback to defaults.

        Args:
            config_path: JSON file overriding parts of DEFAULT_CONFIG (optional)

        Returns:
            ConverterConfig instance

        Raises:
            ConfigError: If the file is missing or not valid JSON
        """
        if config_path is None:
            return cls()

        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")

        try:
            with open(config_path, encoding="utf-8") as f:
                user_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Failed to read config {config_path}: {e}") from e

        if not isinstance(user_data, dict):
            raise ConfigError(f"Config {config_path} must contain a JSON object")

        logger.debug(f"Loaded configuration from {config_path}")
        return cls(user_data)

    @staticmethod
    def _deep_merge(base: Dict, override: Dict) -> Dict:
        """Deep merge two dictionaries, override takes precedence."""
        result = copy.deepcopy(base)
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = ConverterConfig._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def with_source_sheet(self, sheet_name: str) -> "ConverterConfig":
        """Copy of this configuration with the source sheet set."""
        data = copy.deepcopy(self._raw)
        data["sheets"]["source"] = sheet_name
        return ConverterConfig(data)

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._raw)
