"""
pca2ics - PCA to ICS journal conversion.

Decomposes compound PCA vouchers into simple debit/credit journals and
resolves ICS account and tax codes for each of them.
"""

from pca2ics.convert import ConversionResult, convert
from pca2ics.core import (
    AccountCodeMapping,
    TaxCodeMapping,
    ConverterConfig,
    ErrorLog,
    ErrorLogEntry,
    Severity,
    ERROR_LOG_HEADERS,
)
from pca2ics.convert.assembler import OUTPUT_HEADERS

__version__ = "0.1.0"

__all__ = [
    "convert",
    "ConversionResult",
    "AccountCodeMapping",
    "TaxCodeMapping",
    "ConverterConfig",
    "ErrorLog",
    "ErrorLogEntry",
    "Severity",
    "ERROR_LOG_HEADERS",
    "OUTPUT_HEADERS",
    "__version__",
]
