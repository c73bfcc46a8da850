"""
Batch-scoped error log.

ErrorLog collects the ERROR / WARN / INFO entries raised while converting
one batch. It is created by the caller, passed explicitly into every
conversion step and handed back at the end of the run. Each entry is also
mirrored to the standard logging module.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterator, List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    """Error log levels."""

    ERROR = "ERROR"
    WARN = "WARN"
    INFO = "INFO"


_LOG_LEVELS = {
    Severity.ERROR: logging.ERROR,
    Severity.WARN: logging.WARNING,
    Severity.INFO: logging.INFO,
}

ERROR_LOG_HEADERS = [
    "タイムスタンプ",
    "レベル",
    "処理名",
    "元シート",
    "伝票番号",
    "メッセージ",
    "スタックトレース",
]


@dataclass(frozen=True)
class ErrorLogEntry:
    """A single error log record."""

    severity: Severity
    operation: str
    message: str
    voucher_number: str = ""
    source: str = ""
    stack: str = ""
    timestamp: datetime = field(default_factory=datetime.now)

    def to_row(self) -> list:
        """Row in ERROR_LOG_HEADERS order."""
        return [
            self.timestamp,
            self.severity.value,
            self.operation,
            self.source,
            self.voucher_number,
            self.message,
            self.stack,
        ]


class ErrorLog:
    """
    Ordered, append-only log for one conversion run.

    Usage:
        log = ErrorLog(source="202509")
        log.warn("build_compound_journal", "unbalanced", voucher_number="12")
        entries = log.drain()
    """

    def __init__(self, source: str = ""):
        """
        Args:
            source: Name of the source sheet/batch stamped on every entry
        """
        self.source = source
        self._entries: List[ErrorLogEntry] = []

    def append(self, entry: ErrorLogEntry) -> ErrorLogEntry:
        self._entries.append(entry)
        suffix = f" (voucher {entry.voucher_number})" if entry.voucher_number else ""
        logger.log(_LOG_LEVELS[entry.severity], f"{entry.operation}: {entry.message}{suffix}")
        return entry

    def record(
        self,
        severity: Severity,
        operation: str,
        message: str,
        voucher_number: Optional[str] = None,
        stack: str = "",
    ) -> ErrorLogEntry:
        return self.append(ErrorLogEntry(
            severity=severity,
            operation=operation,
            message=message,
            voucher_number=voucher_number or "",
            source=self.source,
            stack=stack,
        ))

    def error(self, operation: str, message: str, voucher_number: Optional[str] = None,
              stack: str = "") -> ErrorLogEntry:
        return self.record(Severity.ERROR, operation, message, voucher_number, stack)

    def warn(self, operation: str, message: str, voucher_number: Optional[str] = None,
             stack: str = "") -> ErrorLogEntry:
        return self.record(Severity.WARN, operation, message, voucher_number, stack)

    def info(self, operation: str, message: str, voucher_number: Optional[str] = None) -> ErrorLogEntry:
        return self.record(Severity.INFO, operation, message, voucher_number)

    @property
    def entries(self) -> Tuple[ErrorLogEntry, ...]:
        return tuple(self._entries)

    def by_severity(self, severity: Severity) -> List[ErrorLogEntry]:
        return [e for e in self._entries if e.severity == severity]

    @property
    def problem_count(self) -> int:
        """Number of ERROR and WARN entries."""
        return sum(1 for e in self._entries if e.severity != Severity.INFO)

    def drain(self) -> List[ErrorLogEntry]:
        """Hand over all entries and reset the log."""
        entries, self._entries = self._entries, []
        return entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ErrorLogEntry]:
        return iter(list(self._entries))
