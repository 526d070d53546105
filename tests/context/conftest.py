"""Shared fixtures for context engine tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from tracemark.parsing import ParseResult, TreeSitterParser


@pytest.fixture(scope="module")
def parser() -> TreeSitterParser:
    """Create a TreeSitterParser instance."""
    return TreeSitterParser()


@pytest.fixture
def parse(parser: TreeSitterParser) -> Callable[[str, str], ParseResult]:
    """Parse an in-memory snippet as a file with the given extension."""

    def _parse(source: str, ext: str) -> ParseResult:
        return parser.parse(Path(f"snippet.{ext}"), source.encode())

    return _parse
