"""
Error handling pattern detectors.

Detects try/except statements whose handlers discard the exception.

Pipeline over one module:
    iter_try_rescue -> extract_rescue_clauses -> has_acceptable_call

A handler is acceptable when its body, at any depth, does one of:
- calls a configured dotted name (Logger.error, Sentry.capture_exception, ...)
- re-raises with a bare `raise`
- raises a new exception
"""
import ast
from typing import Collection, Iterable, Iterator, List, Union

from ..data_structures import RescueClause
from .utils import is_call_to, is_raise, is_reraise, iter_preorder

TRY_NODES = tuple(
    node_type
    for node_type in (getattr(ast, "Try", None), getattr(ast, "TryStar", None))
    if node_type is not None
)


def is_try_rescue(node: ast.AST) -> bool:
    """
    Detect a try statement with an except section.

    `try/finally` without handlers is a try node too; it is still yielded
    by the walker and simply produces no clauses.
    """
    return isinstance(node, TRY_NODES) and isinstance(getattr(node, "handlers", None), list)


def iter_try_rescue(root: ast.AST) -> Iterator[ast.AST]:
    """
    Yield every try statement under root in pre-order.

    Traversal does not stop at a match: nested try statements in the
    protected body, in handlers, in else/finally sections, in functions,
    lambdas and classes are all yielded, outer before inner.
    """
    for node in iter_preorder(root):
        if is_try_rescue(node):
            yield node


def extract_rescue_clauses(node: ast.AST) -> List[RescueClause]:
    """
    Pair each handler of a try statement with its own body.

    Each clause carries the handler's line, not the try's line.
    Anything that is not an ExceptHandler with a statement list is skipped.
    """
    if not is_try_rescue(node):
        return []

    clauses = []
    for handler in node.handlers:
        if not isinstance(handler, ast.ExceptHandler):
            continue
        body = getattr(handler, "body", None)
        if not isinstance(body, list):
            continue
        clauses.append(
            RescueClause(
                pattern=getattr(handler, "type", None),
                body=tuple(body),
                line_no=getattr(handler, "lineno", None) or 0,
            )
        )

    return clauses


def is_acceptable_node(node: ast.AST, acceptable_calls: Collection[str]) -> bool:
    """Check a single node, without looking at its children."""
    if is_reraise(node) or is_raise(node):
        return True
    return is_call_to(node, acceptable_calls)


def has_acceptable_call(
    body: Union[ast.AST, Iterable[ast.AST]],
    acceptable_calls: Collection[str],
) -> bool:
    """
    Detect if a handler body logs, reports or propagates the exception.

    Searches the whole nested expansion of body (conditionals, loops,
    nested functions, comprehensions, call arguments) and stops at the
    first acceptable node.

    An empty acceptable_calls means only raise statements are accepted.
    """
    return any(is_acceptable_node(node, acceptable_calls) for node in iter_preorder(body))
