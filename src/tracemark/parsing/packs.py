"""LanguagePack - single source of truth for grammar config.

Every language tracemark parses has exactly ONE LanguagePack holding:
- Grammar install metadata (package, module, loader function)
- File extension detection

Node-kind classification is NOT per pack: the context engine uses one flat
kind table shared by every grammar (see ``tracemark.context.kinds``).

The PACKS registry is the canonical lookup: ``PACKS["rust"]``.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LanguagePack:
    """Grammar configuration for a single language."""

    # -- Identity --
    name: str  # Canonical language name ("python", "typescript", ...)

    # -- Grammar install --
    grammar_package: str  # PyPI package ("tree-sitter-python")
    grammar_module: str  # Python import ("tree_sitter_python")
    # Non-standard function name (e.g. "language_typescript", "language_tsx")
    language_func: str | None = None

    # -- File detection --
    extensions: frozenset[str] = field(default_factory=frozenset)


# =========================================================================
# C family
# =========================================================================

C_PACK = LanguagePack(
    name="c",
    grammar_package="tree-sitter-c",
    grammar_module="tree_sitter_c",
    extensions=frozenset({"c", "h"}),
)

CPP_PACK = LanguagePack(
    name="cpp",
    grammar_package="tree-sitter-cpp",
    grammar_module="tree_sitter_cpp",
    extensions=frozenset({"cpp", "cc", "cxx", "hpp", "hxx", "hh"}),
)

RUST_PACK = LanguagePack(
    name="rust",
    grammar_package="tree-sitter-rust",
    grammar_module="tree_sitter_rust",
    extensions=frozenset({"rs"}),
)

# =========================================================================
# JavaScript / TypeScript
# =========================================================================

JAVASCRIPT_PACK = LanguagePack(
    name="javascript",
    grammar_package="tree-sitter-javascript",
    grammar_module="tree_sitter_javascript",
    extensions=frozenset({"js", "mjs", "cjs", "jsx"}),
)

TYPESCRIPT_PACK = LanguagePack(
    name="typescript",
    grammar_package="tree-sitter-typescript",
    grammar_module="tree_sitter_typescript",
    language_func="language_typescript",
    extensions=frozenset({"ts", "mts", "cts"}),
)

TSX_PACK = LanguagePack(
    name="tsx",
    grammar_package="tree-sitter-typescript",
    grammar_module="tree_sitter_typescript",
    language_func="language_tsx",
    extensions=frozenset({"tsx"}),
)

# =========================================================================
# Python / Go / Java
# =========================================================================

PYTHON_PACK = LanguagePack(
    name="python",
    grammar_package="tree-sitter-python",
    grammar_module="tree_sitter_python",
    extensions=frozenset({"py", "pyi", "pyw"}),
)

GO_PACK = LanguagePack(
    name="go",
    grammar_package="tree-sitter-go",
    grammar_module="tree_sitter_go",
    extensions=frozenset({"go"}),
)

JAVA_PACK = LanguagePack(
    name="java",
    grammar_package="tree-sitter-java",
    grammar_module="tree_sitter_java",
    extensions=frozenset({"java"}),
)


# =========================================================================
# Registry
# =========================================================================

_ALL_PACKS: tuple[LanguagePack, ...] = (
    C_PACK,
    CPP_PACK,
    RUST_PACK,
    JAVASCRIPT_PACK,
    TYPESCRIPT_PACK,
    TSX_PACK,
    PYTHON_PACK,
    GO_PACK,
    JAVA_PACK,
)

# name -> Pack
PACKS: dict[str, LanguagePack] = {pack.name: pack for pack in _ALL_PACKS}
PACKS["c++"] = CPP_PACK

# Extension -> Pack
_EXT_TO_PACK: dict[str, LanguagePack] = {}
for _pack in _ALL_PACKS:
    for _ext in _pack.extensions:
        _EXT_TO_PACK[_ext] = _pack


def get_pack_for_ext(ext: str) -> LanguagePack | None:
    """Get a LanguagePack for a file extension (with or without leading dot)."""
    return _EXT_TO_PACK.get(ext.lower().lstrip("."))


def get_pack(name: str) -> LanguagePack | None:
    """Get a LanguagePack by language name."""
    return PACKS.get(name)


def supported_extensions() -> frozenset[str]:
    """All file extensions with a registered pack."""
    return frozenset(_EXT_TO_PACK)
