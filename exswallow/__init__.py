"""
exswallow - find except handlers that silently swallow exceptions.

Example:
    tree = ast.parse(source)
    for finding in analyze(tree, RuleConfiguration()):
        print(finding.line_no, finding.message)
"""
from .data_structures import (
    CHECK_ID,
    DEFAULT_ACCEPTABLE_CALLS,
    SILENT_SWALLOW_MESSAGE,
    Finding,
    RescueClause,
    RuleConfiguration,
)
from .rule import analyze, analyze_source, is_test_file

__version__ = "0.1.0"

__all__ = [
    'CHECK_ID',
    'DEFAULT_ACCEPTABLE_CALLS',
    'SILENT_SWALLOW_MESSAGE',
    'Finding',
    'RescueClause',
    'RuleConfiguration',
    'analyze',
    'analyze_source',
    'is_test_file',
]
