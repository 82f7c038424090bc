"""Identifier extraction from deprecation call arguments."""
import re
from dataclasses import dataclass
from tree_sitter import Node

from .guards import unwrap_parentheses
from .visitor import NodeHooks, walk

UNKNOWN_ID = "???"
ID_PROPERTY = "id"

_SIMPLE_ESCAPES = {
    'n': '\n', 't': '\t', 'r': '\r', 'b': '\b', 'f': '\f', 'v': '\v', '0': '\0',
}

_ESCAPE_RE = re.compile(
    r"\\(?:u\{([0-9a-fA-F]+)\}|u([0-9a-fA-F]{4})|x([0-9a-fA-F]{2})|(\r\n|[\n\r\u2028\u2029])|(.))",
    re.DOTALL,
)


def _replace_escape(match: re.Match) -> str:
    braced, unicode4, hex2, line_continuation, single = match.groups()
    if braced is not None:
        return chr(int(braced, 16))
    if unicode4 is not None:
        return chr(int(unicode4, 16))
    if hex2 is not None:
        return chr(int(hex2, 16))
    if line_continuation is not None:
        return ''
    return _SIMPLE_ESCAPES.get(single, single)


def unescape_js(raw: str) -> str:
    """Apply JavaScript string escape rules to the body of a literal."""
    return _ESCAPE_RE.sub(_replace_escape, raw)


def string_value(node: Node) -> str:
    """Return the cooked value of a ``string`` literal node.

    Args:
        node: tree-sitter ``string`` node, quotes included

    Returns:
        Literal value with escapes resolved
    """
    raw = node.text.decode('utf-8')
    return unescape_js(raw[1:-1])


@dataclass
class IdSearch:
    """Accumulator for one id sub-walk. The last property seen wins."""
    value: str = UNKNOWN_ID


def _key_is_id(key: Node) -> bool:
    return key is not None and key.type == 'property_identifier' and key.text == ID_PROPERTY.encode()


def _check_pair(node: Node, state: IdSearch) -> None:
    if not _key_is_id(node.child_by_field_name('key')):
        return

    value = node.child_by_field_name('value')
    if value is not None:
        value = unwrap_parentheses(value)

    if value is not None and value.type == 'string':
        state.value = string_value(value)
    else:
        state.value = UNKNOWN_ID


def _check_shorthand(node: Node, state: IdSearch) -> None:
    # `{ id }` binds a variable, never a literal
    if node.text == ID_PROPERTY.encode():
        state.value = UNKNOWN_ID


ID_VISITOR = {
    'pair': NodeHooks(enter=_check_pair),
    'pair_pattern': NodeHooks(enter=_check_pair),
    'shorthand_property_identifier': NodeHooks(enter=_check_shorthand),
    'shorthand_property_identifier_pattern': NodeHooks(enter=_check_shorthand),
}


def find_deprecation_id(call: Node) -> str:
    """Find the literal ``id`` property anywhere inside a call's subtree.

    Every ``id`` property encountered overwrites the previous result, which
    mirrors duplicate-key semantics of an object literal. A non-string value
    resets the result to ``UNKNOWN_ID``.
    """
    return walk(call, ID_VISITOR, IdSearch()).value
