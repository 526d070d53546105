"""Comment block boundaries.

A block is the maximal run of comment-only lines around a marker line. A
line is comment-only when a comment node covers it and its trimmed text
opens with a comment token, is empty, or continues a multi-row comment.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence

# Line and block comment openers, block-comment continuations and docstring
# delimiters across the supported grammars. ``#`` also covers C
# preprocessor lines and Rust attributes, which never count as code context.
COMMENT_OPENERS: tuple[str, ...] = ("//", "#", "/*", "*", "'''", '"""')


def opens_comment(trimmed: str) -> bool:
    return trimmed.startswith(COMMENT_OPENERS)


def source_line(source_lines: Sequence[str], line: int) -> str | None:
    """Bounds-checked line access."""
    if 0 <= line < len(source_lines):
        return source_lines[line]
    return None


def is_comment_only_line(
    line: int,
    comment_lines: Collection[int],
    source_lines: Sequence[str],
    continuation_lines: Collection[int] = frozenset(),
) -> bool:
    if line not in comment_lines:
        return False
    if line in continuation_lines:
        return True
    src = source_line(source_lines, line)
    if src is None:
        return False
    trimmed = src.strip()
    return not trimmed or opens_comment(trimmed)


def resolve_block(
    comment_line: int,
    comment_lines: Collection[int],
    source_lines: Sequence[str],
    continuation_lines: Collection[int] = frozenset(),
) -> tuple[int, int]:
    """Inclusive ``(start, end)`` of the comment block containing ``comment_line``.

    Args:
        comment_line: 0-indexed line where the marker comment starts.
        comment_lines: Lines covered by a comment node.
        source_lines: Raw source lines.
        continuation_lines: Rows that open inside a multi-row comment; these
            count as comment-only whatever their text looks like.
    """
    start = comment_line
    line = comment_line - 1
    while line >= 0 and is_comment_only_line(
        line, comment_lines, source_lines, continuation_lines
    ):
        start = line
        line -= 1

    end = comment_line
    line = comment_line + 1
    while line < len(source_lines) and is_comment_only_line(
        line, comment_lines, source_lines, continuation_lines
    ):
        end = line
        line += 1

    return start, end
