"""
Explanation Layer

Turns a RunReport into text or JSON for the terminal and for CI.
"""
import json
from typing import Sequence

from .data_structures import DEFAULT_ACCEPTABLE_CALLS, Issue, RunReport

_PRIORITY_LABEL = {
    "high":   "H",
    "normal": "N",
    "low":    "L",
}

CHECK_EXPLANATION = """\
Except handlers should not silently swallow exceptions. Every caught
exception should be either:

  1. Logged (Logger.error, Logger.warning, ...)
  2. Reported to error monitoring (Sentry, ErrorReporter)
  3. Re-raised (bare `raise`) or converted (`raise NewError(...) from e`)

Silent exception handling hides bugs and makes debugging nearly impossible.
"""


def format_issue(issue: Issue) -> str:
    label = _PRIORITY_LABEL.get(issue.priority, "?")
    return f"{issue.filename}:{issue.line_no}: [{label}] {issue.check_id} {issue.message}"


def _summary_line(report: RunReport) -> str:
    issues = len(report.issues)
    noun = "issue" if issues == 1 else "issues"
    line = f"Checked {report.files_checked} file(s): {issues} {noun}"
    if report.errors:
        line += f", {len(report.errors)} file(s) could not be analyzed"
    return line + "."


def format_text(report: RunReport) -> str:
    lines = [format_issue(issue) for issue in report.issues]
    lines.extend(f"{r.path}: error: {r.error}" for r in report.errors)
    if lines:
        lines.append("")
    lines.append(_summary_line(report))
    return "\n".join(lines)


def _issue_dict(issue: Issue) -> dict:
    return {
        "filename": issue.filename,
        "line_no": issue.line_no,
        "check": issue.check_id,
        "priority": issue.priority,
        "message": issue.message,
    }


def format_json(report: RunReport) -> str:
    document = {
        "issues": [_issue_dict(issue) for issue in report.issues],
        "errors": [{"filename": r.path, "error": r.error} for r in report.errors],
        "summary": {
            "files_checked": report.files_checked,
            "issues": len(report.issues),
            "errors": len(report.errors),
        },
    }
    return json.dumps(document, indent=2)


def format_explanation(acceptable_calls: Sequence[str] = DEFAULT_ACCEPTABLE_CALLS) -> str:
    lines = [CHECK_EXPLANATION, "Acceptable calls:"]
    if acceptable_calls:
        lines.extend(f"  - {name}" for name in acceptable_calls)
    else:
        lines.append("  (none: only raise statements are accepted)")
    return "\n".join(lines)
