"""Canonical re-serialization of tree-sitter subtrees.

tree-sitter keeps the original source text, not a printable AST, so snippets
are rebuilt from tokens: comments are dropped, whitespace is normalized, and
object literals and blocks are laid out one member per line. Two files that
differ only in formatting print the same snippet.
"""
from tree_sitter import Node

INDENT = '  '

# Printed verbatim from source
ATOMIC_TYPES = {
    'string', 'template_string', 'number', 'regex', 'string_fragment',
    'jsx_text', 'html_character_reference',
}

COMMENT_TYPES = {'comment', 'html_comment'}

# Members laid out one per line, comma separated
MULTILINE_LISTS = {'object', 'object_pattern', 'enum_body'}

# Statements laid out one per line
BLOCK_TYPES = {'statement_block', 'class_body', 'switch_body'}

# Children joined without spaces (apart from after commas)
TIGHT_TYPES = {
    'arguments', 'formal_parameters', 'array', 'array_pattern', 'parenthesized_expression',
    'member_expression', 'subscript_expression', 'call_expression', 'new_expression',
    'unary_expression', 'update_expression', 'non_null_expression', 'spread_element',
    'rest_pattern', 'type_arguments', 'type_parameters', 'computed_property_name',
    'template_substitution', 'nested_identifier', 'generic_type', 'array_type',
    'optional_chain', 'decorator', 'tuple_type', 'optional_parameter',
    'required_parameter', 'predefined_type', 'index_signature', 'lookup_type',
}

TERMINATED_STATEMENTS = {
    'expression_statement', 'lexical_declaration', 'variable_declaration',
    'return_statement', 'throw_statement', 'break_statement', 'continue_statement',
    'debugger_statement', 'public_field_definition', 'field_definition',
}

NO_SPACE_BEFORE = (')', ']', ',', ';', '.', '?.', ':')
NO_SPACE_AFTER = ('(', '[', '.', '?.', '...', '@')

# Keywords that keep a space before a following `(`
PAREN_KEYWORDS = {
    'if', 'for', 'while', 'switch', 'catch', 'function', 'return', 'await', 'yield',
    'typeof', 'in', 'of', 'instanceof', 'new', 'case', 'else', 'do', 'throw', 'async',
    'extends', 'void', 'delete', 'as', 'satisfies', 'keyof',
}


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char in '_$'


def _last_word(text: str) -> str:
    end = len(text)
    start = end
    while start > 0 and _is_word_char(text[start - 1]):
        start -= 1
    return text[start:end]


def _tight_separator(prev: str, text: str) -> str:
    if prev.endswith(',') or prev.endswith('=') or text == '=':
        return ' '
    if _is_word_char(prev[-1]) and _is_word_char(text[0]):
        return ' '
    # `- -x` must not collapse into `--x`
    if prev[-1] in '+-' and text[0] == prev[-1]:
        return ' '
    return ''


def _loose_separator(node_type: str, prev: str, text: str) -> str:
    if node_type in ('ternary_expression', 'conditional_type'):
        return ' '
    if node_type in ('pair', 'pair_pattern', 'property_signature', 'labeled_statement'):
        return '' if text == ':' else ' '
    if (text.startswith(NO_SPACE_BEFORE) and not text.startswith('...')) or prev.endswith(NO_SPACE_AFTER):
        return ''
    if text.startswith('(') and _is_word_char(prev[-1]) and _last_word(prev) not in PAREN_KEYWORDS:
        return ''
    if text.startswith('<') and node_type in ('function_declaration', 'function_expression',
                                              'class_declaration', 'method_definition',
                                              'interface_declaration', 'type_alias_declaration'):
        return ''
    return ' '


def _printed_children(node: Node) -> list[Node]:
    if node.type in MULTILINE_LISTS or node.type in BLOCK_TYPES:
        return [child for child in node.named_children if child.type not in COMMENT_TYPES]
    return [child for child in node.children if child.type not in COMMENT_TYPES]


def _join_list(level: int, texts: list[str]) -> str:
    if not texts:
        return '{}'

    pad = INDENT * (level + 1)
    return '{\n' + ',\n'.join(pad + text for text in texts) + '\n' + INDENT * level + '}'


def _join_block(level: int, statements: list[Node], texts: list[str]) -> str:
    if not texts:
        return '{}'

    pad = INDENT * (level + 1)
    lines = []
    for statement, text in zip(statements, texts):
        if statement.type in TERMINATED_STATEMENTS and not text.endswith(';'):
            text += ';'
        lines.append(pad + text)
    return '{\n' + '\n'.join(lines) + '\n' + INDENT * level + '}'


def _join_tokens(node: Node, texts: list[str]) -> str:
    tight = node.type in TIGHT_TYPES
    out = ''
    for text in texts:
        if not text:
            continue
        if text in (')', ']') and out.endswith(','):
            # trailing comma
            out = out[:-1]
        if out:
            out += _tight_separator(out, text) if tight else _loose_separator(node.type, out, text)
        out += text
    return out


def _join(node: Node, level: int, children: list[Node], texts: list[str]) -> str:
    if node.type in MULTILINE_LISTS:
        return _join_list(level, texts)
    if node.type in BLOCK_TYPES:
        return _join_block(level, children, texts)
    return _join_tokens(node, texts)


def print_node(node: Node) -> str:
    """Re-serialize a subtree to canonical text.

    Children are printed before their parent using an explicit stack, so
    long operator chains do not hit the recursion limit.

    Args:
        node: Any tree-sitter node

    Returns:
        Formatting-independent source text for the node
    """
    printed: list[str] = []
    # (node, indent level, children already printed)
    stack = [(node, 0, False)]

    while stack:
        current, level, ready = stack.pop()

        if not ready:
            if current.type in ATOMIC_TYPES or current.child_count == 0:
                printed.append(current.text.decode('utf-8'))
                continue
            nested = current.type in MULTILINE_LISTS or current.type in BLOCK_TYPES
            child_level = level + 1 if nested else level
            stack.append((current, level, True))
            stack.extend((child, child_level, False) for child in reversed(_printed_children(current)))
            continue

        children = _printed_children(current)
        start = len(printed) - len(children)
        texts = printed[start:]
        del printed[start:]
        printed.append(_join(current, level, children, texts))

    return printed[0]
