"""The read-only node surface the context engine relies on.

Any object shaped like a py-tree-sitter ``Node`` works: a kind label
(``type``), 0-indexed ``start_point``/``end_point`` rows, raw ``text``,
``named_children`` and ``child_by_field_name``. The engine
borrows nodes for the duration of one call and never mutates them.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Protocol


class SyntaxNode(Protocol):
    """Structural type matched by ``tree_sitter.Node``."""

    @property
    def type(self) -> str: ...

    @property
    def start_point(self) -> tuple[int, int]: ...

    @property
    def end_point(self) -> tuple[int, int]: ...

    @property
    def text(self) -> bytes | str | None: ...

    @property
    def named_children(self) -> Sequence[SyntaxNode]: ...

    def child_by_field_name(self, name: str, /) -> SyntaxNode | None: ...


def walk(root: SyntaxNode) -> Iterator[SyntaxNode]:
    """Depth-first pre-order traversal of named nodes, without recursion.

    Anonymous tokens are skipped: their labels are literal keywords (``class``,
    ``function``, ``lambda``) that would collide with named kinds in the table.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.named_children))


def node_text(node: SyntaxNode) -> str:
    raw = node.text
    if raw is None:
        return ""
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw


def first_line(text: str) -> str:
    """First line of a possibly multi-line snippet."""
    # Rows end at "\n" only, as in the parser's line array
    return text.split("\n", 1)[0].rstrip("\r")


def start_line(node: SyntaxNode) -> int:
    return node.start_point[0]


def end_line(node: SyntaxNode) -> int:
    return node.end_point[0]


def is_comment_kind(kind: str) -> bool:
    """``comment``, ``line_comment``, ``block_comment``, ``doc_comment``..."""
    return "comment" in kind
