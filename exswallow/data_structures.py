"""
Data structures for exception-handler analysis.

All structures are immutable views over one parsed module.
"""
import ast
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

CHECK_ID = "EX9001"

SILENT_SWALLOW_MESSAGE = (
    "Except handler silently swallows exception without logging or error reporting. "
    "Add Logger.error/warning or ErrorReporter.report_exception, or re-raise."
)

DEFAULT_ACCEPTABLE_CALLS: Tuple[str, ...] = (
    "Logger.error",
    "Logger.warning",
    "Logger.warn",
    "Logger.info",
    "Logger.debug",
    "ErrorReporter.report_exception",
    "ErrorReporter.report_message",
    "Sentry.capture_exception",
    "Sentry.capture_message",
    "reraise",
    "raise",
)


@dataclass(frozen=True)
class RescueClause:
    """One `except` arm of a try statement."""

    pattern: Optional[ast.expr]  # None for a bare `except:`
    body: Tuple[ast.stmt, ...]
    line_no: int


@dataclass(frozen=True)
class Finding:
    """A single non-compliant handler."""

    line_no: int
    message: str


@dataclass(frozen=True)
class RuleConfiguration:
    """
    Parameters of the silent-swallow rule.

    acceptable_calls is kept as an ordered tuple so the configured order
    survives into `exswallow explain`; membership is exact and case-sensitive.
    """

    acceptable_calls: Tuple[str, ...] = DEFAULT_ACCEPTABLE_CALLS
    skip_test_files: bool = True


@dataclass(frozen=True)
class Issue:
    """A finding placed in a file, tagged the way the host reports it."""

    filename: str
    finding: Finding
    priority: str = "high"
    check_id: str = CHECK_ID

    @property
    def line_no(self) -> int:
        return self.finding.line_no

    @property
    def message(self) -> str:
        return self.finding.message


@dataclass(frozen=True)
class FileReport:
    """Outcome of checking one file. `error` is set when it could not be analyzed."""

    path: str
    issues: Tuple[Issue, ...] = ()
    error: Optional[str] = None
    skipped: bool = False


@dataclass(frozen=True)
class RunReport:
    """Outcome of checking a set of files."""

    files: Tuple[FileReport, ...] = field(default_factory=tuple)

    @property
    def issues(self) -> List[Issue]:
        return [issue for report in self.files for issue in report.issues]

    @property
    def errors(self) -> List[FileReport]:
        return [report for report in self.files if report.error is not None]

    @property
    def files_checked(self) -> int:
        return sum(1 for report in self.files if report.error is None and not report.skipped)
