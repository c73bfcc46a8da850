"""
PCA -> ICS batch conversion.

Drives the whole core for one batch of source rows:

    rows -> group_by_voucher -> build_compound_journal -> has_special_account
         -> split_by_amount -> CodeResolver -> assemble_row

Failures are recovered at the narrowest boundary. Unmapped codes blank the
field (the row is still emitted), a bad voucher is skipped, and only a
missing mapping table aborts the run.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional
import logging
import traceback

from pca2ics.core.config import ConverterConfig
from pca2ics.core.error_log import ErrorLog
from pca2ics.core.exceptions import MissingMappingTableError, UnbalancedVoucherError
from pca2ics.core.mapping import AccountCodeMapping, TaxCodeMapping
from pca2ics.core.models import RawLedgerRow
from pca2ics.convert.assembler import assemble_row
from pca2ics.convert.resolver import CodeResolver
from pca2ics.journal.builder import build_compound_journal, has_special_account
from pca2ics.journal.grouping import group_by_voucher
from pca2ics.journal.splitter import split_by_amount

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Output rows plus the error log accumulated while producing them."""

    rows: List[List[Any]] = field(default_factory=list)
    error_log: ErrorLog = field(default_factory=ErrorLog)
    voucher_count: int = 0
    skipped_vouchers: List[str] = field(default_factory=list)
    aborted: bool = False

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def has_problems(self) -> bool:
        return self.error_log.problem_count > 0


def convert(
    rows: Iterable[RawLedgerRow],
    account_mapping: Optional[AccountCodeMapping],
    tax_mapping: Optional[TaxCodeMapping],
    error_log: Optional[ErrorLog] = None,
    config: Optional[ConverterConfig] = None,
) -> ConversionResult:
    """
    Convert PCA ledger rows into ICS journal rows.

    Args:
        rows: Source rows (header rows already removed)
        account_mapping: PCA -> ICS account code table
        tax_mapping: PCA -> ICS tax code table
        error_log: Accumulator owned by the caller; a new one is created if omitted
        config: Column layout and tax rules (defaults if omitted)

    Returns:
        ConversionResult with output rows in voucher order and the error log
    """
    config = config or ConverterConfig()
    if error_log is None:
        error_log = ErrorLog(source=config.sheets.source)
    result = ConversionResult(error_log=error_log)

    for table, name in ((account_mapping, "account code mapping"), (tax_mapping, "tax code mapping")):
        if table is None:
            error_log.error("convert", MissingMappingTableError(name).message)
            result.aborted = True
            return result

    columns = config.source_columns
    resolver = CodeResolver(account_mapping, tax_mapping, error_log, config.tax_rules)

    groups = group_by_voucher(rows, columns.voucher_number)
    result.voucher_count = len(groups)
    logger.info(f"Converting {result.voucher_count} vouchers")

    for voucher_number, voucher_rows in groups.items():
        try:
            journal = build_compound_journal(voucher_number, voucher_rows, columns)
            special = has_special_account(journal.items, config.tax_rules.special_account_codes)
            split = split_by_amount(journal, special)

            if split.has_residual:
                error_log.warn(
                    "split_by_amount",
                    f"Debit and credit totals differ; unmatched amount left "
                    f"(debit: {split.residual_debit}, credit: {split.residual_credit})",
                    voucher_number=voucher_number,
                )

            # A failure while resolving skips the whole voucher
            voucher_output = [
                assemble_row(simple, resolver.resolve(simple), columns)
                for simple in split.journals
            ]
            result.rows.extend(voucher_output)

        except UnbalancedVoucherError as e:
            error_log.warn("build_compound_journal", e.message, voucher_number=voucher_number)
            result.skipped_vouchers.append(voucher_number)

        except Exception as e:
            error_log.error(
                "convert",
                f"Failed to convert voucher: {e}",
                voucher_number=voucher_number,
                stack=traceback.format_exc(),
            )
            result.skipped_vouchers.append(voucher_number)

    logger.info(f"Converted to {result.row_count} rows")
    if error_log.problem_count:
        logger.warning(f"{error_log.problem_count} errors/warnings recorded")

    return result
