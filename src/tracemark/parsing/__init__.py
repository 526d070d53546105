"""Tree-sitter parsing for the context engine."""

from tracemark.parsing.packs import LanguagePack, get_pack, get_pack_for_ext
from tracemark.parsing.treesitter import ParseResult, TreeSitterParser, split_lines

__all__ = [
    "TreeSitterParser",
    "ParseResult",
    "LanguagePack",
    "get_pack",
    "get_pack_for_ext",
    "split_lines",
]
