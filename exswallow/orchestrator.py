"""
Orchestrator

Glue layer. Wires discovery, the rule and issue tagging together.
No rule logic lives here.

Every file is analyzed on its own: a file that cannot be read or parsed
is recorded on its FileReport and the run continues.
"""
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from .config import HostSettings, LoadedConfig
from .data_structures import FileReport, Issue, RuleConfiguration, RunReport
from .discovery import discover_files
from .git_changes import changed_python_files
from .rule import analyze_source, is_test_file

logger = logging.getLogger(__name__)


def check_file(
    file_path: Path,
    config: RuleConfiguration,
    priority: str = "high",
) -> FileReport:
    path = str(file_path)

    if config.skip_test_files and is_test_file(file_path):
        logger.debug("Skipping test file %s", path)
        return FileReport(path=path, skipped=True)

    try:
        source = Path(file_path).read_text(encoding="utf-8")
        findings = analyze_source(source, filename=file_path, config=config)
    except SyntaxError as e:
        logger.warning("Cannot parse %s: line %s: %s", path, e.lineno, e.msg)
        return FileReport(path=path, error=f"syntax error at line {e.lineno}: {e.msg}")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read %s: %s", path, e)
        return FileReport(path=path, error=str(e))
    except (ValueError, RecursionError, MemoryError) as e:
        # null bytes, or nesting too deep for the parser
        logger.warning("Cannot parse %s: %s: %s", path, type(e).__name__, e)
        return FileReport(path=path, error=f"cannot parse: {type(e).__name__}")

    issues = tuple(
        Issue(filename=path, finding=finding, priority=priority)
        for finding in findings
    )
    logger.debug("%s: %d issue(s)", path, len(issues))
    return FileReport(path=path, issues=issues)


def _restrict_to_changed(files: List[Path], changed_since: str, repo_path: str) -> List[Path]:
    changed = {p.resolve() for p in changed_python_files(repo_path, changed_since)}
    logger.debug("%d Python file(s) changed since %s", len(changed), changed_since)
    return [f for f in files if f.resolve() in changed]


def check_paths(
    paths: Iterable,
    loaded: Optional[LoadedConfig] = None,
    changed_since: Optional[str] = None,
    repo_path: str = ".",
) -> RunReport:
    """
    Check files and directories.

    With changed_since, only files changed since that Git revision
    (plus untracked files) are checked.
    """
    if loaded is None:
        loaded = LoadedConfig(rule=RuleConfiguration(), settings=HostSettings())

    files = discover_files(paths, exclude=loaded.settings.exclude)
    if changed_since is not None:
        files = _restrict_to_changed(files, changed_since, repo_path)

    reports = [
        check_file(file_path, loaded.rule, priority=loaded.settings.priority)
        for file_path in files
    ]
    return RunReport(files=tuple(reports))
