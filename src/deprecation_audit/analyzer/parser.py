"""Tree-sitter parser for JavaScript and TypeScript sources."""
from pathlib import Path
from typing import Optional
from tree_sitter import Language, Node, Parser, Tree
import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript

from .errors import ParseFailure


class LanguageParser:
    """Single-language parser using the tree-sitter v0.22+ API."""

    SUPPORTED_LANGUAGES = {
        '.js': 'javascript',
        '.jsx': 'javascript',
        '.mjs': 'javascript',
        '.cjs': 'javascript',
        '.ts': 'typescript',
        '.mts': 'typescript',
        '.cts': 'typescript',
        '.tsx': 'tsx',
    }

    def __init__(self, language: str):
        """Initialize parser for given language (javascript, typescript, tsx).

        Raises:
            ValueError: If language is not supported
        """
        self.language = language
        self.parser = self._create_parser()

    def _create_parser(self) -> Parser:
        if self.language == 'javascript':
            lang = Language(tsjavascript.language())
        elif self.language == 'typescript':
            lang = Language(tstypescript.language_typescript())
        elif self.language == 'tsx':
            lang = Language(tstypescript.language_tsx())
        else:
            raise ValueError(f"Unsupported language: {self.language}")

        return Parser(lang)

    def parse_source(self, source_code: bytes, path: Optional[str | Path] = None) -> Tree:
        """Parse source bytes into a syntax tree.

        tree-sitter always produces a tree and marks broken regions with
        ``ERROR`` or ``MISSING`` nodes. Such a tree is rejected here, since
        call sites inside a broken region cannot be trusted.

        Args:
            source_code: UTF-8 encoded source
            path: File path, for error messages only

        Returns:
            Parsed Tree without syntax errors

        Raises:
            ParseFailure: If the tree contains syntax errors
        """
        tree = self.parser.parse(source_code)
        if tree.root_node.has_error:
            error = first_error(tree.root_node)
            line, column = (error.start_point[0] + 1, error.start_point[1] + 1) if error else (None, None)
            raise ParseFailure(f"syntax error in {self.language} source", path, line, column)
        return tree

    def parse_file(self, file_path: str | Path) -> tuple[Tree, bytes]:
        """Read and parse a file.

        Returns:
            Tuple of (tree, source bytes)

        Raises:
            ParseFailure: If the file cannot be read, is not UTF-8, or fails to parse
        """
        file_path = Path(file_path)

        try:
            with open(file_path, 'rb') as f:
                source_code = f.read()
            source_code.decode('utf-8')
        except (UnicodeDecodeError, OSError) as e:
            raise ParseFailure(f"cannot read source: {e}", file_path) from e

        return self.parse_source(source_code, file_path), source_code


def first_error(root: Node) -> Optional[Node]:
    """Return the first ``ERROR`` or ``MISSING`` node in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None
