"""Tests for context/finder.py - above/below/inline code context.

Covers:
- Real snippets across grammars (Rust, C, Python, JavaScript, Java)
- Per-line selection: priority, traversal-order ties, unknown fallback
- Comment line coverage and out-of-range lines
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from tracemark.context.finder import extract_block_context, index_lines
from tracemark.context.models import BlockContext, CodeContext
from tracemark.parsing import ParseResult

Parse = Callable[[str, str], ParseResult]


@dataclass
class FakeNode:
    """Minimal stand-in for a tree-sitter node."""

    type: str
    start_point: tuple[int, int]
    end_point: tuple[int, int]
    text: bytes = b""
    named_children: list[FakeNode] = field(default_factory=list)
    fields: dict[str, FakeNode] = field(default_factory=dict)

    def child_by_field_name(self, name: str) -> FakeNode | None:
        return self.fields.get(name)


def ident(name: str, row: int) -> FakeNode:
    return FakeNode("identifier", (row, 0), (row, len(name)), name.encode())


class TestRustContext:
    """Rust marker scenarios."""

    def test_function_below_marker(self, parse: Parse) -> None:
        """A marker directly above a function documents that function."""
        # Given
        result = parse(
            "// REQ-001: validate input\nfn check(x: i32) -> bool {\n    x > 0\n}\n",
            "rs",
        )

        # When
        ctx = extract_block_context(result.root_node, 0, result.lines)

        # Then
        assert ctx.below == CodeContext(
            kind="function_item",
            name="check",
            text="fn check(x: i32) -> bool {",
            line=2,
        )
        assert ctx.above is None
        assert ctx.inline is None

    def test_blank_lines_are_skipped_below(self, parse: Parse) -> None:
        """Blank lines between the block and the code are skipped."""
        result = parse("// REQ-010: config constant\n\nconst MAX: u32 = 8;\n", "rs")

        ctx = extract_block_context(result.root_node, 0, result.lines)

        assert ctx.below is not None
        assert ctx.below.kind == "const_item"
        assert ctx.below.name == "MAX"
        assert ctx.below.line == 3

    def test_two_line_block_then_blank_line(self, parse: Parse) -> None:
        """A two-line block separated by a blank line still reaches the code."""
        # Given
        source = "// REQ-011: retry limit\n// applies to every bus\n\nconst RETRIES: u8 = 3;\n"
        result = parse(source, "rs")

        # When
        ctx = extract_block_context(result.root_node, 0, result.lines)

        # Then
        assert ctx.below == CodeContext(
            kind="const_item",
            name="RETRIES",
            text="const RETRIES: u8 = 3;",
            line=4,
        )
        assert ctx.above is None
        assert ctx.inline is None

    def test_multi_line_block_uses_block_edges(self, parse: Parse) -> None:
        """Above/below are searched from the whole block, not the marker line."""
        # Given
        source = (
            "use std::fmt;\n"
            "/// Driver state.\n"
            "/// HLR-IMU-001: imu init\n"
            "/// More details.\n"
            "struct Imu {\n"
            "    rate: u32,\n"
            "}\n"
        )
        result = parse(source, "rs")

        # When
        ctx = extract_block_context(result.root_node, 2, result.lines)

        # Then
        assert ctx.below is not None
        assert (ctx.below.kind, ctx.below.name, ctx.below.line) == ("struct_item", "Imu", 5)
        assert ctx.above is not None
        assert (ctx.above.kind, ctx.above.name, ctx.above.line) == (
            "use_declaration",
            "std::fmt",
            1,
        )

    def test_attributes_are_not_code_context(self, parse: Parse) -> None:
        """Lines starting with '#' are treated like comments."""
        source = "// REQ-7\n#[derive(Debug)]\nstruct Frame;\n"
        result = parse(source, "rs")

        ctx = extract_block_context(result.root_node, 0, result.lines)

        assert ctx.below is not None
        assert ctx.below.kind == "struct_item"


class TestCContext:
    """C marker scenarios."""

    def test_block_comment_above_function(self, parse: Parse) -> None:
        """A /* */ block with the marker inside documents the next function."""
        # Given
        source = (
            "/*\n"
            " * SRS-CAN-003: CAN frame validation\n"
            " */\n"
            "static int can_validate(const struct frame *f)\n"
            "{\n"
            "    return f->len <= 8;\n"
            "}\n"
        )
        result = parse(source, "c")

        # When
        ctx = extract_block_context(result.root_node, 1, result.lines)

        # Then
        assert ctx.below is not None
        assert ctx.below.kind == "function_definition"
        assert ctx.below.name == "can_validate"
        assert ctx.below.line == 4
        assert ctx.above is None
        assert ctx.inline is None

    def test_trailing_marker_reports_inline_declaration(self, parse: Parse) -> None:
        """A marker after code on the same line reports that code inline."""
        source = "int limit = 5; // REQ-020: limit\n"
        result = parse(source, "c")

        ctx = extract_block_context(result.root_node, 0, result.lines)

        assert ctx.inline == CodeContext(
            kind="declaration", name="limit", text="int limit = 5;", line=1
        )
        assert ctx.above is None
        assert ctx.below is None

    def test_unstarred_marker_row_inside_block_comment(self, parse: Parse) -> None:
        """Prose on an interior comment row is never reported as code."""
        # Given
        source = "/*\n   REQ-001: validate\n*/\nint check(int x);\n"
        result = parse(source, "c")

        # When
        ctx = extract_block_context(result.root_node, 1, result.lines)

        # Then
        assert ctx.inline is None
        assert ctx.above is None
        assert ctx.below is not None
        assert (ctx.below.kind, ctx.below.name, ctx.below.line) == ("declaration", "check", 4)

    def test_unstarred_rows_below_marker_stay_in_block(self, parse: Parse) -> None:
        """Below skips the rest of the comment and finds the prototype."""
        # Given
        source = "/* REQ-001: validate\n   more words here\n*/\nint check(int x);\n"
        result = parse(source, "c")

        # When
        ctx = extract_block_context(result.root_node, 0, result.lines)

        # Then
        assert ctx.inline is None
        assert ctx.below is not None
        assert (ctx.below.kind, ctx.below.name, ctx.below.line) == ("declaration", "check", 4)


class TestPythonContext:
    """Python marker scenarios."""

    def test_marker_inside_method(self, parse: Parse) -> None:
        """Above finds the enclosing def, below the next statement."""
        # Given
        source = (
            "class Engine:\n"
            "    def start(self):\n"
            "        # REQ-002: start the engine\n"
            "        self.running = True\n"
        )
        result = parse(source, "py")

        # When
        ctx = extract_block_context(result.root_node, 2, result.lines)

        # Then
        assert ctx.below is not None
        assert (ctx.below.kind, ctx.below.name) == ("assignment", "self.running")
        assert ctx.below.text == "self.running = True"
        assert ctx.below.line == 4
        assert ctx.above is not None
        assert (ctx.above.kind, ctx.above.name, ctx.above.line) == (
            "function_definition",
            "start",
            2,
        )


class TestJavaScriptContext:
    """JavaScript marker scenarios."""

    def test_declaration_outranks_call(self, parse: Parse) -> None:
        """On a shared line the higher band wins over nested calls."""
        result = parse("// REQ-030: totals\nconst total = compute(a, b);\n", "js")

        ctx = extract_block_context(result.root_node, 0, result.lines)

        assert ctx.below is not None
        assert ctx.below.kind == "lexical_declaration"
        assert ctx.below.name == "total"
        assert ctx.below.text == "const total = compute(a, b);"


class TestJavaContext:
    """Java marker scenarios."""

    def test_call_statement_below(self, parse: Parse) -> None:
        """Method invocations outrank the expression statement wrapping them."""
        source = (
            "class Outer {\n"
            "    void run() {\n"
            "        // LLR-CAN-020: run loop\n"
            "        tick();\n"
            "    }\n"
            "}\n"
        )
        result = parse(source, "java")

        ctx = extract_block_context(result.root_node, 2, result.lines)

        assert ctx.below is not None
        assert (ctx.below.kind, ctx.below.name, ctx.below.text) == (
            "method_invocation",
            "tick",
            "tick()",
        )
        assert ctx.above is not None
        assert (ctx.above.kind, ctx.above.name) == ("method_declaration", "run")


class TestSelectionRule:
    """Per-line selection on synthetic trees."""

    def test_equal_priority_keeps_first_in_traversal(self) -> None:
        """Ties on a line go to the node visited first."""
        # Given
        comment = FakeNode("comment", (0, 0), (0, 8), b"// REQ-1")
        first = FakeNode(
            "call_expression", (1, 0), (1, 3), b"a()", fields={"function": ident("a", 1)}
        )
        second = FakeNode(
            "call_expression", (1, 4), (1, 7), b"b()", fields={"function": ident("b", 1)}
        )
        root = FakeNode("source_file", (0, 0), (2, 0), named_children=[comment, first, second])

        # When
        ctx = extract_block_context(root, 0, ["// REQ-1", "a() b()", ""])

        # Then
        assert ctx.below is not None
        assert ctx.below.name == "a"

    def test_unclassified_code_is_reported_as_unknown(self) -> None:
        """A code line with no classified node yields trimmed raw text."""
        comment = FakeNode("comment", (0, 0), (0, 8), b"// REQ-1")
        root = FakeNode("source_file", (0, 0), (2, 0), named_children=[comment])

        ctx = extract_block_context(root, 0, ["// REQ-1", "   weird_thing here  ", ""])

        assert ctx.below == CodeContext(kind="unknown", name=None, text="weird_thing here", line=2)

    def test_comment_only_neighbours_give_nothing(self) -> None:
        """Lines that open a comment never become unknown context."""
        comment = FakeNode("comment", (0, 0), (0, 8), b"// REQ-1")
        root = FakeNode("source_file", (0, 0), (2, 0), named_children=[comment])

        ctx = extract_block_context(root, 0, ["// REQ-1", "# not code", ""])

        assert ctx == BlockContext()
        assert ctx.is_empty

    def test_comment_ending_at_column_zero_excludes_last_row(self) -> None:
        """A line comment that swallows its newline covers only its own row."""
        comment = FakeNode("line_comment", (0, 0), (1, 0), b"// REQ-1\n")
        root = FakeNode("source_file", (0, 0), (2, 0), named_children=[comment])

        tables = index_lines(root)

        assert tables.comment_lines == {0}
        assert tables.continuation_lines == set()

    def test_block_comment_covers_every_row(self) -> None:
        comment = FakeNode("block_comment", (2, 4), (5, 3), b"/*\n *\n *\n */")
        root = FakeNode("source_file", (0, 0), (6, 0), named_children=[comment])

        tables = index_lines(root)

        assert tables.comment_lines == {2, 3, 4, 5}
        assert tables.continuation_lines == {3, 4, 5}


class TestDegenerateInput:
    """Inputs the engine answers with empty results."""

    def test_out_of_range_line(self, parse: Parse) -> None:
        result = parse("fn check() {}\n", "rs")

        assert extract_block_context(result.root_node, 99, result.lines).is_empty
        assert extract_block_context(result.root_node, -1, result.lines).is_empty

    def test_empty_file(self, parse: Parse) -> None:
        result = parse("", "rs")

        assert extract_block_context(result.root_node, 0, result.lines) == BlockContext()
