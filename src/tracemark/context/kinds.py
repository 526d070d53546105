"""Node-kind classification shared by every supported grammar.

One flat table maps a tree-sitter kind label to its priority band and
whether it is a scope container. A kind present in the table is
"interesting" (worth reporting as the code a comment documents); a kind
absent from it is not interesting, not a scope, and ranks in the lowest
band. Adding a language means adding entries here, never new code paths.

The table is assembled from one section per language family. Grammars
share labels (``function_definition`` is both C and Python,
``call_expression`` is C, Rust, JavaScript and Go), so a label may appear in
several sections; every occurrence must carry the same classification or
the module fails to import.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType


class Band(IntEnum):
    """Priority bands used to pick one node when several start on a line."""

    FUNCTION = 100
    TYPE = 90
    IMPL = 85
    DECLARATION = 80
    ASSIGNMENT = 70
    CALL = 60
    RETURN = 50
    IMPORT = 45
    EXPRESSION = 30
    DECORATED = 25
    OTHER = 10


@dataclass(frozen=True, slots=True)
class KindSpec:
    band: Band
    scope: bool = False


_FUNCTION = KindSpec(Band.FUNCTION, scope=True)
_SIGNATURE = KindSpec(Band.FUNCTION)
_TYPE = KindSpec(Band.TYPE, scope=True)
_ALIAS = KindSpec(Band.TYPE)
_IMPL = KindSpec(Band.IMPL, scope=True)
_DECLARATION = KindSpec(Band.DECLARATION)
_ASSIGNMENT = KindSpec(Band.ASSIGNMENT)
_CALL = KindSpec(Band.CALL)
_RETURN = KindSpec(Band.RETURN)
_IMPORT = KindSpec(Band.IMPORT)
_EXPRESSION = KindSpec(Band.EXPRESSION)
_DECORATED = KindSpec(Band.DECORATED, scope=True)
_CLOSURE = KindSpec(Band.OTHER, scope=True)
_MODULE = KindSpec(Band.OTHER, scope=True)
_OTHER = KindSpec(Band.OTHER)


# =========================================================================
# C / C++ / Rust
# =========================================================================

_SYSTEMS: dict[str, KindSpec] = {
    "function_item": _FUNCTION,
    "function_definition": _FUNCTION,
    "function_signature_item": _SIGNATURE,
    "struct_item": _TYPE,
    "struct_definition": _TYPE,
    "struct_specifier": _TYPE,
    "union_item": _TYPE,
    "union_specifier": _TYPE,
    "enum_item": _TYPE,
    "enum_specifier": _TYPE,
    "class_specifier": _TYPE,
    "trait_item": _TYPE,
    "trait_definition": _TYPE,
    "type_item": _ALIAS,
    "type_alias": _ALIAS,
    "type_definition": _ALIAS,
    "impl_item": _IMPL,
    "let_declaration": _DECLARATION,
    "const_item": _DECLARATION,
    "static_item": _DECLARATION,
    "declaration": _DECLARATION,
    "field_declaration": _DECLARATION,
    "preproc_def": _DECLARATION,
    "assignment_expression": _ASSIGNMENT,
    "compound_assignment_expr": _ASSIGNMENT,
    "call_expression": _CALL,
    "method_call_expression": _CALL,
    "macro_invocation": _CALL,
    "return_statement": _RETURN,
    "return_expression": _RETURN,
    "use_declaration": _IMPORT,
    "preproc_include": _IMPORT,
    "expression_statement": _EXPRESSION,
    "closure_expression": _CLOSURE,
    "lambda_expression": _CLOSURE,
    "mod_item": _MODULE,
    "namespace_definition": _MODULE,
    "macro_definition": _OTHER,
    "preproc_function_def": _OTHER,
}

# =========================================================================
# JavaScript / TypeScript
# =========================================================================

_JS_TS: dict[str, KindSpec] = {
    "function_declaration": _FUNCTION,
    "generator_function_declaration": _FUNCTION,
    "method_definition": _FUNCTION,
    "function_signature": _SIGNATURE,
    "method_signature": _SIGNATURE,
    "class_declaration": _TYPE,
    "abstract_class_declaration": _TYPE,
    "class": _TYPE,
    "interface_declaration": _TYPE,
    "enum_declaration": _TYPE,
    "type_alias_declaration": _ALIAS,
    "lexical_declaration": _DECLARATION,
    "variable_declaration": _DECLARATION,
    "field_definition": _DECLARATION,
    "public_field_definition": _DECLARATION,
    "assignment_expression": _ASSIGNMENT,
    "augmented_assignment_expression": _ASSIGNMENT,
    "call_expression": _CALL,
    "new_expression": _CALL,
    "return_statement": _RETURN,
    "import_statement": _IMPORT,
    "expression_statement": _EXPRESSION,
    "arrow_function": _CLOSURE,
    "function_expression": _CLOSURE,
    "function": _CLOSURE,
    "generator_function": _CLOSURE,
    "internal_module": _MODULE,
    "variable_declarator": _OTHER,
}

# =========================================================================
# Python
# =========================================================================

_PYTHON: dict[str, KindSpec] = {
    "function_definition": _FUNCTION,
    "class_definition": _TYPE,
    "type_alias_statement": _ALIAS,
    "assignment": _ASSIGNMENT,
    "augmented_assignment": _ASSIGNMENT,
    "call": _CALL,
    "return_statement": _RETURN,
    "import_statement": _IMPORT,
    "import_from_statement": _IMPORT,
    "future_import_statement": _IMPORT,
    # Docstrings are string expression statements
    "expression_statement": _EXPRESSION,
    "decorated_definition": _DECORATED,
    "lambda": _CLOSURE,
}

# =========================================================================
# Go
# =========================================================================

_GO: dict[str, KindSpec] = {
    "function_declaration": _FUNCTION,
    "method_declaration": _FUNCTION,
    # Holds struct and interface bodies, so it is a scope unlike plain aliases
    "type_declaration": _TYPE,
    "var_declaration": _DECLARATION,
    "const_declaration": _DECLARATION,
    "short_var_declaration": _DECLARATION,
    "assignment_statement": _ASSIGNMENT,
    "call_expression": _CALL,
    "return_statement": _RETURN,
    "import_declaration": _IMPORT,
    "expression_statement": _EXPRESSION,
    "func_literal": _CLOSURE,
    "package_clause": _OTHER,
}

# =========================================================================
# Java
# =========================================================================

_JAVA: dict[str, KindSpec] = {
    "method_declaration": _FUNCTION,
    "constructor_declaration": _FUNCTION,
    "class_declaration": _TYPE,
    "interface_declaration": _TYPE,
    "enum_declaration": _TYPE,
    "record_declaration": _TYPE,
    "annotation_type_declaration": _TYPE,
    "field_declaration": _DECLARATION,
    "local_variable_declaration": _DECLARATION,
    "constant_declaration": _DECLARATION,
    "assignment_expression": _ASSIGNMENT,
    "method_invocation": _CALL,
    "object_creation_expression": _CALL,
    "return_statement": _RETURN,
    "import_declaration": _IMPORT,
    "expression_statement": _EXPRESSION,
    "lambda_expression": _CLOSURE,
    "module_declaration": _MODULE,
    "package_declaration": _OTHER,
    "variable_declarator": _OTHER,
}


def merge_sections(*sections: Mapping[str, KindSpec]) -> Mapping[str, KindSpec]:
    """Combine per-family sections into one read-only table.

    Raises:
        ValueError: A kind is classified differently by two sections.
    """
    merged: dict[str, KindSpec] = {}
    for section in sections:
        for kind, spec in section.items():
            existing = merged.get(kind)
            if existing is not None and existing != spec:
                raise ValueError(
                    f"Conflicting classification for node kind {kind!r}: {existing} vs {spec}"
                )
            merged[kind] = spec
    return MappingProxyType(merged)


KIND_TABLE: Mapping[str, KindSpec] = merge_sections(_SYSTEMS, _JS_TS, _PYTHON, _GO, _JAVA)

SCOPE_KINDS: frozenset[str] = frozenset(kind for kind, spec in KIND_TABLE.items() if spec.scope)


def classify(kind: str) -> KindSpec | None:
    return KIND_TABLE.get(kind)


def is_interesting(kind: str) -> bool:
    return kind in KIND_TABLE


def is_scope(kind: str) -> bool:
    return kind in SCOPE_KINDS


def priority(kind: str) -> int:
    """Priority band value; unclassified kinds rank in the lowest band."""
    spec = KIND_TABLE.get(kind)
    return int(spec.band) if spec is not None else int(Band.OTHER)
