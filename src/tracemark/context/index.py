"""Per-file context index: one traversal, many marker lookups.

``extract_block_context`` and ``extract_hierarchy`` walk the whole tree on
every call. When a file carries many markers, build a ``FileContextIndex``
once and query it per marker; answers are identical to the stateless
functions. The index holds no reference to the tree, only plain records,
so it stays valid for as long as the source text it was built from.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from tracemark.context.blocks import resolve_block
from tracemark.context.finder import LineTables, context_for_block, index_node
from tracemark.context.hierarchy import ScopeSpan, frames_for_line, scope_span
from tracemark.context.models import BlockContext, ScopeFrame
from tracemark.context.nodes import SyntaxNode, walk


@dataclass(frozen=True)
class FileContextIndex:
    source_lines: tuple[str, ...]
    tables: LineTables
    scopes: tuple[ScopeSpan, ...]

    @classmethod
    def build(cls, root: SyntaxNode, source_lines: Sequence[str]) -> FileContextIndex:
        tables = LineTables()
        scopes: list[ScopeSpan] = []
        for order, node in enumerate(walk(root)):
            index_node(tables, node)
            span = scope_span(node, order)
            if span is not None:
                scopes.append(span)
        return cls(source_lines=tuple(source_lines), tables=tables, scopes=tuple(scopes))

    def block(self, comment_line: int) -> tuple[int, int]:
        tables = self.tables
        return resolve_block(
            comment_line, tables.comment_lines, self.source_lines, tables.continuation_lines
        )

    def block_context(self, comment_line: int) -> BlockContext:
        return context_for_block(comment_line, self.tables, self.source_lines)

    def hierarchy(self, target_line: int) -> list[ScopeFrame]:
        return frames_for_line(self.scopes, target_line)
