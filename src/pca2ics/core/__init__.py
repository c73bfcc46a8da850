"""
Core building blocks for pca2ics.

Cell normalization, journal data models, mapping tables, configuration and
the batch-scoped error log.
"""

from pca2ics.core.cells import CellValue, normalize_code, normalize_tax_code, format_target_code
from pca2ics.core.models import (
    Side,
    LedgerItem,
    CompoundJournal,
    SimpleJournal,
    RawLedgerRow,
    read_ledger_item,
)
from pca2ics.core.mapping import AccountCodeMapping, TaxCodeMapping, DEFAULT_TAX_MAPPING_ROWS
from pca2ics.core.error_log import ErrorLog, ErrorLogEntry, Severity, ERROR_LOG_HEADERS
from pca2ics.core.config import ConverterConfig, SourceColumns, SideColumns, SheetNames, TaxRules
from pca2ics.core.exceptions import (
    Pca2IcsError,
    UnbalancedVoucherError,
    MappingNotFoundError,
    MissingMappingTableError,
    SheetNotFoundError,
    ConfigError,
)

__all__ = [
    "CellValue",
    "normalize_code",
    "normalize_tax_code",
    "format_target_code",
    "Side",
    "LedgerItem",
    "CompoundJournal",
    "SimpleJournal",
    "RawLedgerRow",
    "read_ledger_item",
    "AccountCodeMapping",
    "TaxCodeMapping",
    "DEFAULT_TAX_MAPPING_ROWS",
    "ErrorLog",
    "ErrorLogEntry",
    "Severity",
    "ERROR_LOG_HEADERS",
    "ConverterConfig",
    "SourceColumns",
    "SideColumns",
    "SheetNames",
    "TaxRules",
    "Pca2IcsError",
    "UnbalancedVoucherError",
    "MappingNotFoundError",
    "MissingMappingTableError",
    "SheetNotFoundError",
    "ConfigError",
]
