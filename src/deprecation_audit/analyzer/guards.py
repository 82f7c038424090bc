"""Debug-guard classification for ``if`` statements.

A guard is any ``if`` whose test mentions the sentinel identifier, e.g.
``if (DEBUG)``, ``if (!DEBUG)`` or ``if (DEBUG && isEnabled())``. The check is
purely syntactic: the sentinel's value is never evaluated.
"""
from dataclasses import dataclass
from typing import Optional
from tree_sitter import Node

from .visitor import NodeHooks, walk

DEFAULT_SENTINEL = "DEBUG"


@dataclass
class SentinelSearch:
    """Accumulator for one sub-walk over a test expression."""
    name: str
    found: bool = False


def _check_identifier(node: Node, state: SentinelSearch) -> None:
    if node.text.decode('utf-8') == state.name:
        state.found = True


# Member properties and object keys are ``property_identifier`` nodes and
# never count. Shorthand `{ DEBUG }` reads the variable, so it does.
SENTINEL_VISITOR = {
    'identifier': NodeHooks(enter=_check_identifier),
    'shorthand_property_identifier': NodeHooks(enter=_check_identifier),
}


def unwrap_parentheses(node: Node) -> Node:
    """Strip ``parenthesized_expression`` wrappers around an expression."""
    while node.type == 'parenthesized_expression':
        inner = [child for child in node.named_children if child.type != 'comment']
        if len(inner) != 1:
            break
        node = inner[0]
    return node


def if_test(node: Node) -> Optional[Node]:
    """Return the test expression of an ``if_statement`` node."""
    condition = node.child_by_field_name('condition')
    if condition is None:
        return None
    return unwrap_parentheses(condition)


def references_sentinel(test: Node, sentinel: str = DEFAULT_SENTINEL) -> bool:
    """Decide whether a conditional test references the sentinel identifier.

    Args:
        test: The test expression node
        sentinel: Bare identifier name gating debug-only code

    Returns:
        True if the test is the sentinel itself or mentions it anywhere
    """
    if test.type == 'identifier' and test.text.decode('utf-8') == sentinel:
        return True

    search = walk(test, SENTINEL_VISITOR, SentinelSearch(sentinel))
    return search.found


def is_debug_guard(if_node: Node, sentinel: str = DEFAULT_SENTINEL) -> bool:
    """Classify an ``if_statement`` node as a debug guard."""
    test = if_test(if_node)
    if test is None:
        return False
    return references_sentinel(test, sentinel)
