"""Find the code a comment block documents.

One DFS over the tree records, per 0-indexed line, the classified nodes
that start there and the lines covered by comment nodes. Three lookups
then share a single per-line rule:

- the highest-priority classified node starting on the line wins (ties go
  to the node met first in traversal order);
- otherwise non-empty text that neither opens a comment nor continues a
  multi-row one is reported as an ``unknown`` record;
- otherwise the line contributes nothing.

``inline`` applies the rule to the marker line, ``above`` and ``below``
scan outward from the block until some line yields a record.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from operator import attrgetter

from tracemark.context.blocks import opens_comment, resolve_block, source_line
from tracemark.context.kinds import is_interesting, priority
from tracemark.context.models import BlockContext, CodeContext, NodeInfo
from tracemark.context.names import extract_name
from tracemark.context.nodes import (
    SyntaxNode,
    end_line,
    first_line,
    is_comment_kind,
    node_text,
    start_line,
    walk,
)
from tracemark.core.logging import get_logger

log = get_logger("context")


@dataclass
class LineTables:
    """Line-indexed view of one tree."""

    nodes_by_line: dict[int, list[NodeInfo]] = field(default_factory=dict)
    comment_lines: set[int] = field(default_factory=set)
    # Rows after the first of a multi-row comment: they open inside the comment
    continuation_lines: set[int] = field(default_factory=set)


def _last_covered_line(node: SyntaxNode) -> int:
    # Line comments that swallow their newline end at column 0 of the next row
    first, last = start_line(node), end_line(node)
    if last > first and node.end_point[1] == 0:
        return last - 1
    return last


def index_node(tables: LineTables, node: SyntaxNode) -> None:
    """Record one node into ``tables``."""
    kind = node.type
    if is_comment_kind(kind):
        first, last = start_line(node), _last_covered_line(node)
        tables.comment_lines.update(range(first, last + 1))
        tables.continuation_lines.update(range(first + 1, last + 1))
    elif is_interesting(kind):
        info = NodeInfo(
            kind=kind,
            name=extract_name(node, kind),
            text=first_line(node_text(node)),
            priority=priority(kind),
        )
        tables.nodes_by_line.setdefault(start_line(node), []).append(info)


def index_lines(root: SyntaxNode) -> LineTables:
    tables = LineTables()
    for node in walk(root):
        index_node(tables, node)
    return tables


def context_on_line(
    line: int,
    tables: LineTables,
    source_lines: Sequence[str],
) -> CodeContext | None:
    """Apply the per-line selection rule."""
    nodes = tables.nodes_by_line.get(line)
    if nodes:
        # max() keeps the first of equal keys, i.e. traversal order
        return CodeContext.from_node(max(nodes, key=attrgetter("priority")), line)
    if line in tables.continuation_lines:
        return None

    src = source_line(source_lines, line)
    if src is None:
        return None
    trimmed = src.strip()
    if trimmed and not opens_comment(trimmed):
        return CodeContext.unknown(trimmed, line)
    return None


def find_inline_context(
    comment_line: int,
    tables: LineTables,
    source_lines: Sequence[str],
) -> CodeContext | None:
    return context_on_line(comment_line, tables, source_lines)


def find_context_above(
    block_start: int,
    tables: LineTables,
    source_lines: Sequence[str],
) -> CodeContext | None:
    line = min(block_start, len(source_lines)) - 1
    while line >= 0:
        found = context_on_line(line, tables, source_lines)
        if found is not None:
            return found
        line -= 1
    return None


def find_context_below(
    block_end: int,
    tables: LineTables,
    source_lines: Sequence[str],
) -> CodeContext | None:
    line = max(block_end, -1) + 1
    while line < len(source_lines):
        found = context_on_line(line, tables, source_lines)
        if found is not None:
            return found
        line += 1
    return None


def context_for_block(
    comment_line: int,
    tables: LineTables,
    source_lines: Sequence[str],
) -> BlockContext:
    """Resolve the block around ``comment_line`` and look around it."""
    if not 0 <= comment_line < len(source_lines):
        log.debug("comment_line_out_of_range", line=comment_line, total=len(source_lines))
        return BlockContext()

    block_start, block_end = resolve_block(
        comment_line, tables.comment_lines, source_lines, tables.continuation_lines
    )
    return BlockContext(
        above=find_context_above(block_start, tables, source_lines),
        below=find_context_below(block_end, tables, source_lines),
        inline=find_inline_context(comment_line, tables, source_lines),
    )


def extract_block_context(
    root: SyntaxNode,
    comment_line: int,
    source_lines: Sequence[str],
) -> BlockContext:
    """Describe the code around the comment starting on ``comment_line``.

    Stateless: walks the whole tree on every call. Callers handling many
    markers in one file should use ``FileContextIndex`` instead.

    Args:
        root: Tree root node.
        comment_line: 0-indexed line of the marker comment.
        source_lines: The file's raw lines.

    Returns:
        BlockContext with optional above/below/inline records.
    """
    return context_for_block(comment_line, index_lines(root), source_lines)
