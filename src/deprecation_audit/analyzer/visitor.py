"""Handler-table traversal over tree-sitter nodes.

A walk takes a visitor (node type -> enter/exit hooks) and an explicit state
object that the hooks mutate. Hooks are free to start another walk on a
subtree with a state object of their own, so nested searches never share
mutable findings with the walk that launched them.
"""
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional
from tree_sitter import Node


Hook = Callable[[Node, Any], None]


@dataclass(frozen=True)
class NodeHooks:
    """Pre-order and post-order callbacks for one node type."""
    enter: Optional[Hook] = None
    exit: Optional[Hook] = None


Visitor = Mapping[str, NodeHooks]


def walk(node: Node, visitor: Visitor, state: Any) -> Any:
    """Visit ``node`` and all of its descendants in document order.

    ``enter`` hooks fire before a node's children are visited, ``exit`` hooks
    after all of them. Uses an explicit stack so long expression chains in
    minified sources do not hit the recursion limit.

    Args:
        node: Root of the subtree to walk
        visitor: Hooks keyed by tree-sitter node type
        state: Accumulator handed to every hook

    Returns:
        The ``state`` object, for convenience
    """
    # (node, exiting)
    stack = [(node, False)]

    while stack:
        current, exiting = stack.pop()
        hooks = visitor.get(current.type)

        if exiting:
            if hooks and hooks.exit:
                hooks.exit(current, state)
            continue

        if hooks and hooks.enter:
            hooks.enter(current, state)

        stack.append((current, True))
        stack.extend((child, False) for child in reversed(current.children))

    return state
