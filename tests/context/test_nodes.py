"""Tests for context/nodes.py - node surface helpers."""

from __future__ import annotations

import pytest

from tracemark.context.nodes import first_line, is_comment_kind


class TestFirstLine:
    """first_line() follows the parser's row model."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("fn check() {\n    x\n}", "fn check() {"),
            ("int x = 1;\r\nint y;", "int x = 1;"),
            ("single", "single"),
            ("", ""),
        ],
    )
    def test_splits_on_newline(self, text: str, expected: str) -> None:
        assert first_line(text) == expected

    @pytest.mark.parametrize("separator", ["\x0c", "\x1c", "\u2028"])
    def test_other_line_breaks_stay_on_the_row(self, separator: str) -> None:
        """Only newline ends a row; form feeds and Unicode separators do not."""
        text = f"let a = 1;{separator}let b = 2;\nnext"
        assert first_line(text) == f"let a = 1;{separator}let b = 2;"


class TestIsCommentKind:
    @pytest.mark.parametrize("kind", ["comment", "line_comment", "block_comment", "doc_comment"])
    def test_comment_kinds(self, kind: str) -> None:
        assert is_comment_kind(kind)

    def test_code_kind(self) -> None:
        assert not is_comment_kind("function_item")
