"""Tree-sitter parsing for the context engine.

This module turns a source file into a syntax tree plus the raw line array
the engine works against. It is the only place that talks to grammar
packages; everything downstream sees nodes through the small read-only
surface described in ``tracemark.context.nodes``.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tree_sitter

from tracemark.core.errors import ParseError
from tracemark.core.logging import get_logger
from tracemark.parsing.packs import LanguagePack, get_pack, get_pack_for_ext

log = get_logger("parsing")


@dataclass
class ParseResult:
    """Result of parsing a file."""

    tree: Any  # Tree-sitter Tree (not serializable)
    language: str
    root_node: Any  # Tree-sitter Node
    lines: list[str]
    error_count: int
    total_nodes: int


def split_lines(source: str) -> list[str]:
    """Split source into rows the way tree-sitter numbers them.

    Only ``\\n`` ends a row; a trailing ``\\r`` stays on the line and is
    removed by the engine's whitespace trimming.
    """
    return source.split("\n")


@dataclass
class TreeSitterParser:
    """
    Tree-sitter parser for the supported languages.

    Usage::

        parser = TreeSitterParser()
        result = parser.parse(Path("src/can_driver.c"))
        result.root_node, result.lines
    """

    _parser: Any = field(default=None, repr=False)
    _languages: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        """Initialize the parser."""
        self._parser = tree_sitter.Parser()
        self._languages = {}

    def _get_language(self, pack: LanguagePack) -> Any:
        """Get or load the Tree-sitter language for a pack."""
        if pack.name in self._languages:
            return self._languages[pack.name]

        try:
            mod = importlib.import_module(pack.grammar_module)
            lang_fn = getattr(mod, pack.language_func or "language")
        except (ImportError, AttributeError) as err:
            raise ParseError.grammar_unavailable(pack.name, pack.grammar_package) from err

        lang = tree_sitter.Language(lang_fn())
        self._languages[pack.name] = lang
        log.debug("grammar_loaded", language=pack.name, module=pack.grammar_module)
        return lang

    def detect_language(self, path: Path) -> LanguagePack | None:
        """Return the pack for a path's extension, or None."""
        return get_pack_for_ext(path.suffix)

    def parse(
        self,
        path: Path,
        content: bytes | None = None,
        *,
        language: str | None = None,
    ) -> ParseResult:
        """
        Parse a file with Tree-sitter.

        Args:
            path: Path to file (used for language detection)
            content: File content as bytes. If None, reads from path.
            language: Force a language pack instead of detecting by extension.

        Returns:
            ParseResult with tree, source lines and error info.

        Raises:
            ParseError: Unsupported extension, missing grammar, unreadable file.
        """
        pack = get_pack(language) if language else self.detect_language(path)
        if pack is None:
            raise ParseError.unsupported_language(str(path), path.suffix.lstrip("."))

        if content is None:
            try:
                content = path.read_bytes()
            except OSError as e:
                raise ParseError.unreadable(str(path), str(e)) from e

        self._parser.language = self._get_language(pack)
        tree = self._parser.parse(content)

        error_count = 0
        total_nodes = 0
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            total_nodes += 1
            if node.type == "ERROR" or node.is_missing:
                error_count += 1
            stack.extend(node.children)

        source = content.decode("utf-8", errors="replace")
        return ParseResult(
            tree=tree,
            language=pack.name,
            root_node=tree.root_node,
            lines=split_lines(source),
            error_count=error_count,
            total_nodes=total_nodes,
        )
