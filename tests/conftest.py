"""Shared fixtures for deprecation-audit tests."""
from pathlib import Path
import pytest

from deprecation_audit.analyzer.parser import LanguageParser


FIXTURES_DIR = Path(__file__).parent / 'fixtures' / 'packages'


@pytest.fixture(scope='session')
def ts_parser():
    return LanguageParser('typescript')


@pytest.fixture
def parse(ts_parser):
    """Parse a TypeScript snippet and return the root node."""
    def _parse(code: str):
        return ts_parser.parse_source(code.encode('utf-8')).root_node
    return _parse


@pytest.fixture
def first_node(parse):
    """Parse a snippet and return the first node of a given type (pre-order)."""
    def _first(code: str, node_type: str):
        stack = [parse(code)]
        while stack:
            node = stack.pop()
            if node.type == node_type:
                return node
            stack.extend(reversed(node.children))
        raise AssertionError(f"no {node_type} node in {code!r}")
    return _first


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR
