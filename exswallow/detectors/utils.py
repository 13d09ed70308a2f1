"""
Stateless utility functions for AST pattern detection.

These are pure helper functions, not class methods.
Detectors use these as needed but remain standalone.
"""
import ast
from typing import Iterable, Iterator, Optional, Union

# Traversal utilities

def iter_preorder(roots: Union[ast.AST, Iterable[ast.AST]]) -> Iterator[ast.AST]:
    """
    Yield every node under `roots`, each node before its children.

    Children are visited in source order. Unlike ast.walk (breadth-first),
    this keeps discoveries in top-down source order. An explicit stack is
    used so deeply nested modules do not hit the recursion limit.
    """
    if isinstance(roots, ast.AST):
        stack = [roots]
    else:
        stack = list(roots)
        stack.reverse()

    while stack:
        node = stack.pop()
        yield node
        children = list(ast.iter_child_nodes(node))
        children.reverse()
        stack.extend(children)


# Call detection utilities

def qualified_name(func: ast.AST) -> Optional[str]:
    """
    Resolve the dotted name a call is made through.

    Examples:
        Logger.error(...)          -> "Logger.error"
        MyApp.Handler.report(...)  -> "MyApp.Handler.report"
        reraise(...)               -> "reraise"
        get_logger().error(...)    -> None (dynamic qualifier)
        handlers[0].report(...)    -> None (dynamic qualifier)
    """
    parts = []
    current = func

    while isinstance(current, ast.Attribute):
        parts.append(current.attr)
        current = current.value

    if not isinstance(current, ast.Name):
        return None

    parts.append(current.id)
    parts.reverse()
    return ".".join(parts)


def is_call_to(node: ast.AST, target_names) -> bool:
    """
    Check if node is a call whose dotted name is one of target_names.

    Matching is exact and case-sensitive: no prefix, suffix or
    last-segment matching.
    """
    if not isinstance(node, ast.Call):
        return False

    name = qualified_name(node.func)
    return name is not None and name in target_names


# Raise detection utilities

def is_reraise(node: ast.AST) -> bool:
    """Bare `raise`: re-raises the exception being handled."""
    return isinstance(node, ast.Raise) and node.exc is None


def is_raise(node: ast.AST) -> bool:
    """`raise X` or `raise X from e`."""
    return isinstance(node, ast.Raise) and node.exc is not None
