"""Per-file deprecation scan.

One call to ``scan_file`` parses a file, walks it once and returns every
``deprecate(...)`` call site it contains. Guarded ``if`` statements drive a
fresh ``GuardScope``; the scope must be back at zero when the walk ends.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional
from tree_sitter import Node, Tree

from .call_sites import DEFAULT_FUNCTION, DeprecationEntry, build_entry, is_target_call
from .errors import DepthImbalance, ParseFailure
from .guards import DEFAULT_SENTINEL, is_debug_guard
from .parser import LanguageParser
from .scope import GuardScope
from .visitor import NodeHooks, walk


@dataclass
class FileScanState:
    """Mutable state owned by a single file's walk."""
    filename: str
    scope: GuardScope = field(default_factory=GuardScope)
    entries: List[DeprecationEntry] = field(default_factory=list)


class DeprecationScanner:
    """Find deprecation call sites and their debug-guard status."""

    def __init__(self, sentinel: str = DEFAULT_SENTINEL, function_name: str = DEFAULT_FUNCTION):
        """Initialize scanner.

        Args:
            sentinel: Identifier gating debug-only branches (e.g. DEBUG)
            function_name: Bare name of the deprecation function
        """
        self.sentinel = sentinel
        self.function_name = function_name
        self._parsers: Dict[str, LanguageParser] = {}
        self.visitor = {
            'if_statement': NodeHooks(enter=self._enter_if, exit=self._exit_if),
            'call_expression': NodeHooks(enter=self._visit_call),
        }

    def _enter_if(self, node: Node, state: FileScanState) -> None:
        if is_debug_guard(node, self.sentinel):
            state.scope.enter()

    def _exit_if(self, node: Node, state: FileScanState) -> None:
        if is_debug_guard(node, self.sentinel):
            state.scope.exit()

    def _visit_call(self, node: Node, state: FileScanState) -> None:
        if is_target_call(node, self.function_name):
            state.entries.append(build_entry(node, state.filename, state.scope.active))

    def _parser_for(self, path: Path) -> LanguageParser:
        language = LanguageParser.SUPPORTED_LANGUAGES.get(path.suffix.lower())
        if language is None:
            raise ParseFailure(f"unsupported file extension '{path.suffix}'", path)

        if language not in self._parsers:
            self._parsers[language] = LanguageParser(language)
        return self._parsers[language]

    def scan_tree(self, tree: Tree, filename: str, path: Optional[str | Path] = None) -> List[DeprecationEntry]:
        """Walk an already parsed tree.

        Raises:
            DepthImbalance: If guard enter/exit calls did not pair up
        """
        state = walk(tree.root_node, self.visitor, FileScanState(filename))

        if not state.scope.balanced:
            raise DepthImbalance(state.scope.depth, path or filename)

        return state.entries

    def scan_source(self, source_code: bytes, filename: str, language: str = 'typescript') -> List[DeprecationEntry]:
        """Parse and scan in-memory source. Mostly useful for tests."""
        if language not in self._parsers:
            self._parsers[language] = LanguageParser(language)
        tree = self._parsers[language].parse_source(source_code, filename)
        return self.scan_tree(tree, filename)

    def scan_file(self, file_path: str | Path, root: Optional[str | Path] = None) -> List[DeprecationEntry]:
        """Parse and scan one file.

        Args:
            file_path: Source file to scan
            root: Directory entry filenames are made relative to

        Returns:
            Entries in source order

        Raises:
            ParseFailure: If the file cannot be read or parsed
            DepthImbalance: If the guard depth is nonzero after the walk
        """
        file_path = Path(file_path)
        tree, _ = self._parser_for(file_path).parse_file(file_path)
        return self.scan_tree(tree, relative_name(file_path, root), file_path)


def relative_name(file_path: Path, root: Optional[str | Path]) -> str:
    """POSIX path of ``file_path`` relative to ``root`` (or as given)."""
    if root is None:
        return file_path.as_posix()
    try:
        return file_path.resolve().relative_to(Path(root).resolve()).as_posix()
    except ValueError:
        return file_path.as_posix()
