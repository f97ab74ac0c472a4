"""Shared fixtures: a session-wide Go parser and snippet scorers.

Run pytest from this project's root; pythonpath in pyproject.toml puts
src/ on the import path.
"""

from collections.abc import Callable

import pytest

from ghost_linter.domain.rules import IgnoreDirectiveResolver, StatementComplexity
from ghost_linter.domain.syntax import SourceFile
from ghost_linter.infrastructure.gateways.tree_sitter_gateway import TreeSitterGoGateway


@pytest.fixture(scope="session")
def go_parser() -> TreeSitterGoGateway:
    return TreeSitterGoGateway()


@pytest.fixture
def parse_go(go_parser: TreeSitterGoGateway) -> Callable[..., SourceFile]:
    def _parse(source: str, path: str = "test.go") -> SourceFile:
        return go_parser.parse(path, source.encode("utf-8"))

    return _parse


@pytest.fixture
def line_complexity(parse_go: Callable[..., SourceFile]) -> Callable[[str], int]:
    """Score the single statement in ``func a() { <line> }``."""

    def _score(line: str) -> int:
        source_file = parse_go(f"package p\nfunc a() {{ {line} }}")
        statements = StatementComplexity(IgnoreDirectiveResolver(source_file.comments))
        return statements.evaluate(source_file.declarations[0].body[0])

    return _score


@pytest.fixture
def case_complexity(parse_go: Callable[..., SourceFile]) -> Callable[[str], int]:
    """Score the first case clause of ``switch { <clause> }``."""

    def _score(clause: str) -> int:
        source_file = parse_go(f"package p\nfunc a() {{ switch {{ {clause} }} }}")
        switch = source_file.declarations[0].body[0]
        statements = StatementComplexity(IgnoreDirectiveResolver(source_file.comments))
        return statements.evaluate(switch.body[0])

    return _score
