"""Deprecation call-site matching and entry construction."""
from dataclasses import dataclass
from typing import Optional
from tree_sitter import Node

from .literals import find_deprecation_id
from .printer import print_node

DEFAULT_FUNCTION = "deprecate"


@dataclass(frozen=True)
class DeprecationEntry:
    """One ``deprecate(...)`` call site."""
    filename: str  # Relative to the scan root, POSIX separators
    line: Optional[int]  # First source line of the call (1-based)
    id: str  # Literal `id` option, or "???"
    code: str  # Canonical snippet of the whole call
    debug: bool  # Inside at least one sentinel-guarded `if`


def is_target_call(call: Node, function_name: str = DEFAULT_FUNCTION) -> bool:
    """True if ``call`` invokes ``function_name`` by its bare name.

    Qualified forms such as ``ns.deprecate()`` are member expressions and
    never match. Optional calls (``deprecate?.()``) do not match either.
    """
    callee = call.child_by_field_name('function')
    if any(child.type == 'optional_chain' for child in call.children):
        return False
    return (
        callee is not None
        and callee.type == 'identifier'
        and callee.text.decode('utf-8') == function_name
    )


def call_line(call: Node) -> Optional[int]:
    point = call.start_point
    if point is None:
        return None
    return point[0] + 1


def build_entry(call: Node, filename: str, debug: bool) -> DeprecationEntry:
    """Capture location, snippet, id and guard state for a matched call."""
    return DeprecationEntry(
        filename=filename,
        line=call_line(call),
        id=find_deprecation_id(call),
        code=print_node(call),
        debug=debug,
    )
