"""Best-effort name extraction for classified nodes.

``extract_name`` dispatches on the node kind to a rule that knows which
field the grammar stores the interesting identifier under. Grammars disagree
(Python ``function_definition`` has a ``name`` field, the C node with the
same label reaches its identifier through a ``declarator`` chain), so each
rule tries the conventions in order. A kind without a rule, or a node
missing the expected field, yields ``None``.
"""

from __future__ import annotations

from collections.abc import Callable

from tracemark.context.nodes import SyntaxNode, first_line, node_text

NameRule = Callable[[SyntaxNode], str | None]

# C declarators nest (pointer -> array -> function -> identifier); real code
# stays far below this.
_MAX_DECLARATOR_DEPTH = 16

_DECLARATOR_KINDS = frozenset(
    {
        "variable_declarator",  # JavaScript, TypeScript, Java
        "var_spec",  # Go
        "const_spec",  # Go
        "type_spec",  # Go
        "type_alias",  # Go
    }
)


def _field_text(node: SyntaxNode, name: str) -> str | None:
    child = node.child_by_field_name(name)
    return node_text(child) if child is not None else None


def _first_field_line(node: SyntaxNode, *names: str) -> str | None:
    for name in names:
        child = node.child_by_field_name(name)
        if child is not None:
            return first_line(node_text(child))
    return None


def _declared_name(node: SyntaxNode) -> str | None:
    """``name`` field, else the identifier at the end of the ``declarator`` chain."""
    current = node
    for _ in range(_MAX_DECLARATOR_DEPTH):
        name = current.child_by_field_name("name")
        if name is not None:
            return node_text(name)
        inner = current.child_by_field_name("declarator")
        if inner is None:
            break
        current = inner
    if current is node:
        return None
    return first_line(node_text(current))


def _impl_target(node: SyntaxNode) -> str | None:
    return _first_field_line(node, "type", "trait")


def _let_pattern(node: SyntaxNode) -> str | None:
    return _field_text(node, "pattern")


def _first_declarator(node: SyntaxNode) -> str | None:
    """Name of the first declarator in a ``var``/``let``/``const`` list."""
    candidates = list(node.named_children)
    # Go groups its specs: var ( a = 1; b = 2 )
    for child in node.named_children:
        if child.type.endswith("_spec_list"):
            candidates.extend(child.named_children)
    for child in candidates:
        if child.type in _DECLARATOR_KINDS:
            name = _field_text(child, "name")
            if name is not None:
                return name
    return None


def _left_side(node: SyntaxNode) -> str | None:
    return _first_field_line(node, "left")


def _callee(node: SyntaxNode) -> str | None:
    return _first_field_line(node, "function", "callee", "constructor")


def _method_name(node: SyntaxNode) -> str | None:
    return _field_text(node, "name")


def _macro_name(node: SyntaxNode) -> str | None:
    return _field_text(node, "macro")


def _created_type(node: SyntaxNode) -> str | None:
    return _first_field_line(node, "type")


def _import_source(node: SyntaxNode) -> str | None:
    for name in ("source", "module_name", "name", "path"):
        text = _field_text(node, name)
        if text is not None:
            return text
    argument = _first_field_line(node, "argument")
    if argument is not None:
        return argument
    # Java and Go keep the imported path in an unlabelled child
    for child in node.named_children:
        if child.type == "import_spec_list":
            specs = [c for c in child.named_children if c.type == "import_spec"]
            if not specs:
                return None
            child = specs[0]
        if child.type == "import_spec":
            return _field_text(child, "path")
        return first_line(node_text(child))
    return None


def _first_named_child(node: SyntaxNode) -> str | None:
    for child in node.named_children:
        return first_line(node_text(child))
    return None


def _wrapped_definition(node: SyntaxNode) -> str | None:
    definition = node.child_by_field_name("definition")
    if definition is None:
        return None
    return _field_text(definition, "name")


def _field_member(node: SyntaxNode) -> str | None:
    return _field_text(node, "name") or _field_text(node, "property")


_RULES: dict[str, NameRule] = {
    # Named declarations: functions, types, modules, constants, macros
    **dict.fromkeys(
        (
            "function_item",
            "function_definition",
            "function_declaration",
            "function_signature_item",
            "function_signature",
            "generator_function_declaration",
            "method_definition",
            "method_declaration",
            "method_signature",
            "constructor_declaration",
            "function_expression",
            "function",
            "generator_function",
            "struct_item",
            "struct_definition",
            "struct_specifier",
            "union_item",
            "union_specifier",
            "enum_item",
            "enum_specifier",
            "enum_declaration",
            "class_specifier",
            "class_declaration",
            "abstract_class_declaration",
            "class_definition",
            "class",
            "interface_declaration",
            "record_declaration",
            "annotation_type_declaration",
            "trait_item",
            "trait_definition",
            "type_item",
            "type_alias",
            "type_alias_declaration",
            "type_definition",
            "const_item",
            "static_item",
            "mod_item",
            "namespace_definition",
            "internal_module",
            "module_declaration",
            "macro_definition",
            "preproc_def",
            "preproc_function_def",
            "variable_declarator",
            # Declarations whose identifier sits behind a declarator
            "declaration",
            "field_declaration",
            "local_variable_declaration",
            "constant_declaration",
        ),
        _declared_name,
    ),
    "field_definition": _field_member,
    "public_field_definition": _field_member,
    "impl_item": _impl_target,
    "let_declaration": _let_pattern,
    **dict.fromkeys(
        (
            "lexical_declaration",
            "variable_declaration",
            "var_declaration",
            "const_declaration",
            "type_declaration",
        ),
        _first_declarator,
    ),
    **dict.fromkeys(
        (
            "assignment",
            "augmented_assignment",
            "assignment_expression",
            "augmented_assignment_expression",
            "compound_assignment_expr",
            "assignment_statement",
            "short_var_declaration",
            "type_alias_statement",
        ),
        _left_side,
    ),
    "call_expression": _callee,
    "call": _callee,
    "new_expression": _callee,
    "method_call_expression": _method_name,
    "method_invocation": _method_name,
    "object_creation_expression": _created_type,
    "macro_invocation": _macro_name,
    **dict.fromkeys(
        (
            "import_statement",
            "import_from_statement",
            "future_import_statement",
            "import_declaration",
            "use_declaration",
            "preproc_include",
        ),
        _import_source,
    ),
    "package_clause": _first_named_child,
    "package_declaration": _first_named_child,
    "decorated_definition": _wrapped_definition,
}


def extract_name(node: SyntaxNode, kind: str | None = None) -> str | None:
    """Pull a human-readable name out of ``node``; ``None`` when there is none."""
    rule = _RULES.get(kind if kind is not None else node.type)
    if rule is None:
        return None
    return rule(node) or None
