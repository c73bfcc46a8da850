"""
Workbook conversion service.

Runs one full conversion against an Excel workbook:

1. Pick the source sheet (explicit, or the latest YYYYMM sheet)
2. Load source rows and mapping tables
3. Convert (pca2ics.convert.convert)
4. Write the output sheet and append the error log

A failure in steps 1-3 aborts the run but the error log is still written,
together with whatever rows were converted before the failure.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging
import traceback

from pca2ics.core.config import ConverterConfig
from pca2ics.core.error_log import ErrorLog
from pca2ics.core.exceptions import Pca2IcsError, SheetNotFoundError
from pca2ics.convert.converter import ConversionResult, convert
from pca2ics.workbook.reader import WorkbookReader
from pca2ics.workbook.sheets import candidate_source_sheets, find_latest_period_sheet
from pca2ics.workbook.writer import WorkbookWriter

logger = logging.getLogger(__name__)


@dataclass
class ConversionReport:
    """Outcome of one workbook conversion."""

    source_sheet: str
    output_path: Optional[Path]
    result: ConversionResult

    @property
    def succeeded(self) -> bool:
        return not self.result.aborted

    def summary(self) -> str:
        lines = [
            f"Source sheet:  {self.source_sheet or '-'}",
            f"Output:        {self.output_path or '-'}",
            f"Rows written:  {self.result.row_count}",
        ]
        problems = self.result.error_log.problem_count
        lines.append(f"Warnings:      {problems}" if problems else "Warnings:      none")
        if self.result.aborted:
            lines.append("Status:        ABORTED (see error log)")
        return "\n".join(lines)


class ConversionService:
    """
    Converts the PCA data in a workbook into the ICS output sheet.

    Usage:
        service = ConversionService(ConverterConfig.load(config_path))
        report = service.run(Path("books.xlsx"), sheet_name="202509")
        print(report.summary())
    """

    def __init__(self, config: Optional[ConverterConfig] = None):
        self.config = config or ConverterConfig()

    def select_source_sheet(self, reader: WorkbookReader, sheet_name: Optional[str] = None) -> str:
        """
        Resolve the source sheet name.

        Raises:
            SheetNotFoundError: If the named sheet does not exist, or no
                sheet was named and the workbook has no candidate sheet
        """
        if sheet_name:
            if not reader.has_sheet(sheet_name):
                raise SheetNotFoundError(sheet_name)
            return sheet_name

        candidates = candidate_source_sheets(reader.sheet_names, self.config.sheets)
        latest = find_latest_period_sheet(candidates)
        if latest:
            return latest
        if len(candidates) == 1:
            return candidates[0]
        raise Pca2IcsError(
            "Could not choose a source sheet; pass one explicitly "
            f"(candidates: {', '.join(candidates) or 'none'})",
            code="SOURCE_SHEET_AMBIGUOUS",
        )

    def run(
        self,
        workbook_path: Path,
        sheet_name: Optional[str] = None,
        output_path: Optional[Path] = None,
    ) -> ConversionReport:
        """
        Convert one workbook.

        Args:
            workbook_path: Workbook holding the source and mapping sheets
            sheet_name: Source sheet (latest YYYYMM sheet if omitted)
            output_path: Workbook to write results to (defaults to workbook_path)
        """
        workbook_path = Path(workbook_path)
        output_path = Path(output_path) if output_path else workbook_path
        error_log = ErrorLog(source=sheet_name or "")
        result = ConversionResult(error_log=error_log)
        source = sheet_name or ""

        try:
            reader = WorkbookReader(workbook_path)
            source = self.select_source_sheet(reader, sheet_name)
            error_log.source = source
            config = self.config.with_source_sheet(source)

            logger.info(f"=== PCA -> ICS conversion: {workbook_path.name} [{source}] ===")
            rows, accounts, taxes = reader.load_all(config, error_log)
            result = convert(rows, accounts, taxes, error_log=error_log, config=config)

        except Exception as e:
            error_log.error("run", str(e), stack=traceback.format_exc())
            result.aborted = True

        if not workbook_path.exists() and output_path == workbook_path:
            logger.error(f"Nothing written: {workbook_path} does not exist")
            return ConversionReport(source_sheet=source, output_path=None, result=result)

        self._write(output_path, result)
        logger.info("=== Conversion finished ===")
        return ConversionReport(source_sheet=source, output_path=output_path, result=result)

    def _write(self, output_path: Path, result: ConversionResult) -> None:
        writer = WorkbookWriter(output_path, self.config.sheets)
        if result.aborted and not result.rows:
            # Keep the previous output sheet when nothing was converted
            writer.write_error_log(result.error_log.entries)
        else:
            writer.write(result.rows, result.error_log.entries)

    def init_tax_sheet(self, workbook_path: Path, overwrite: bool = False) -> bool:
        """Write the default tax mapping table into the workbook."""
        writer = WorkbookWriter(Path(workbook_path), self.config.sheets)
        created = writer.write_tax_mapping_template(overwrite=overwrite)
        if created:
            logger.info(f"Wrote default tax mapping to {workbook_path} [{self.config.sheets.tax_mapping}]")
        else:
            logger.warning(f"Sheet {self.config.sheets.tax_mapping} already exists; not overwritten")
        return created
