"""
Silent exception swallowing rule.

Wires the detectors into findings for one module.
No I/O beyond what the caller hands in; every call is independent.
"""
import ast
from pathlib import PurePath
from typing import List, Optional, Union

from .data_structures import SILENT_SWALLOW_MESSAGE, Finding, RuleConfiguration
from .detectors import extract_rescue_clauses, has_acceptable_call, iter_try_rescue

_TEST_DIRS = {"test", "tests"}


def is_test_file(path: Union[str, PurePath]) -> bool:
    """
    Test-file convention.

    Matches:
    - any directory segment named test/ or tests/
    - test_*.py, *_test.py
    - conftest.py
    """
    pure = PurePath(str(path).replace("\\", "/"))
    if any(part in _TEST_DIRS for part in pure.parts[:-1]):
        return True

    name = pure.name
    if name == "conftest.py":
        return True
    return name.endswith(".py") and (name.startswith("test_") or name.endswith("_test.py"))


def analyze(
    root: ast.AST,
    config: Optional[RuleConfiguration] = None,
    filename: Optional[Union[str, PurePath]] = None,
) -> List[Finding]:
    """
    Report every except handler under root that neither logs, reports
    nor re-raises.

    One finding per offending handler, at the handler's line, in
    pre-order discovery order. When filename is given and names a test
    file, nothing is reported unless skip_test_files is disabled.
    """
    if config is None:
        config = RuleConfiguration()

    if filename is not None and config.skip_test_files and is_test_file(filename):
        return []

    acceptable_calls = frozenset(config.acceptable_calls)
    findings = []

    for node in iter_try_rescue(root):
        for clause in extract_rescue_clauses(node):
            if not has_acceptable_call(clause.body, acceptable_calls):
                findings.append(Finding(line_no=clause.line_no, message=SILENT_SWALLOW_MESSAGE))

    return findings


def analyze_source(
    source: str,
    filename: Union[str, PurePath] = "<unknown>",
    config: Optional[RuleConfiguration] = None,
) -> List[Finding]:
    """Parse source and analyze it. SyntaxError propagates to the caller."""
    if config is None:
        config = RuleConfiguration()

    if config.skip_test_files and is_test_file(filename):
        return []

    tree = ast.parse(source, filename=str(filename))
    return analyze(tree, config, filename=filename)
