"""
Custom exceptions for the pca2ics package.

All package-specific exceptions inherit from Pca2IcsError for easy catching.
"""


class Pca2IcsError(Exception):
    """Base exception for all pca2ics errors."""

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        self.code = code


class UnbalancedVoucherError(Pca2IcsError):
    """Raised when a voucher has no debit items or no credit items."""

    def __init__(
        self,
        voucher_number: str,
        debit_count: int,
        credit_count: int,
        code: str = "VOUCHER_UNBALANCED"
    ):
        super().__init__(
            f"Debit and credit sides do not balance "
            f"(debit: {debit_count} items, credit: {credit_count} items)",
            code
        )
        self.voucher_number = voucher_number
        self.debit_count = debit_count
        self.credit_count = credit_count


class MappingNotFoundError(Pca2IcsError):
    """Raised when a code has no entry in a mapping table."""

    def __init__(self, kind: str, source_code: str, code: str = "MAPPING_NOT_FOUND"):
        super().__init__(f"No {kind} mapping found for code {source_code}", code)
        self.kind = kind
        self.source_code = source_code


class MissingMappingTableError(Pca2IcsError):
    """Raised when a required mapping table was not supplied."""

    def __init__(self, name: str, code: str = "MAPPING_TABLE_MISSING"):
        super().__init__(f"Required mapping table is missing: {name}", code)
        self.name = name


class SheetNotFoundError(Pca2IcsError):
    """Raised when a workbook sheet does not exist."""

    def __init__(self, sheet_name: str, code: str = "SHEET_NOT_FOUND"):
        super().__init__(f'Sheet "{sheet_name}" not found', code)
        self.sheet_name = sheet_name


class ConfigError(Pca2IcsError):
    """Configuration file could not be read or is malformed."""

    def __init__(self, message: str, code: str = "CONFIG_ERROR"):
        super().__init__(message, code)
