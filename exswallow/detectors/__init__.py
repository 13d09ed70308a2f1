"""
AST Pattern Detectors for exception handling

Detectors answer: "Does this pattern exist here?"

Design principles:
- Pure functions over a read-only ast tree
- No configuration beyond what is passed in
- No logging, no I/O
- Purely syntactic: no alias, import or data-flow resolution

Ambiguity handling:
- A node that does not have the exact try/except shape is skipped
- A handler whose acceptability cannot be established is reported
"""
from .error import (
    extract_rescue_clauses,
    has_acceptable_call,
    is_try_rescue,
    iter_try_rescue,
)
from .utils import is_raise, is_reraise, iter_preorder, qualified_name

__all__ = [
    'extract_rescue_clauses',
    'has_acceptable_call',
    'is_try_rescue',
    'iter_try_rescue',
    'is_raise',
    'is_reraise',
    'iter_preorder',
    'qualified_name',
]
