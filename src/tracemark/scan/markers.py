"""Requirement marker detection inside comment nodes.

A marker is an identifier such as ``REQ-001`` or ``SRS-CAN-003``: a
configured prefix, optional uppercase segments, and a numeric tail, joined
by ``-``. Only text inside comment nodes is searched, one physical line at
a time, so a marker's line is always the row it is written on.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tracemark.context.nodes import SyntaxNode, is_comment_kind, node_text, start_line

if TYPE_CHECKING:
    from tracemark.config.models import ScanConfig

# Trailing block-comment closers and docstring quotes left after the marker text
_TRAILING_CLOSERS = ("*/", '"""', "'''")


@dataclass(frozen=True, slots=True)
class Marker:
    """A marker id found in a comment."""

    id: str
    text: str  # rest of the line after the id
    line: int  # 0-indexed


def _strip_remainder(rest: str) -> str:
    rest = rest.strip()
    for closer in _TRAILING_CLOSERS:
        if rest.endswith(closer):
            rest = rest[: -len(closer)].rstrip()
    return rest.lstrip(":").strip()


@dataclass(frozen=True)
class MarkerPattern:
    """Compiled marker regex. Group 1, when present, is the id."""

    regex: re.Pattern[str]

    @classmethod
    def from_prefixes(cls, prefixes: Iterable[str]) -> MarkerPattern:
        alternatives = "|".join(re.escape(p) for p in sorted(prefixes, key=len, reverse=True))
        return cls(re.compile(rf"\b((?:{alternatives})(?:-[A-Z0-9]+)*-\d+)\b"))

    @classmethod
    def from_regex(cls, pattern: str) -> MarkerPattern:
        return cls(re.compile(pattern))

    @classmethod
    def from_config(cls, config: ScanConfig) -> MarkerPattern:
        if config.marker_regex:
            return cls.from_regex(config.marker_regex)
        return cls.from_prefixes(config.marker_prefixes)

    def finditer(self, line: str) -> Iterator[tuple[str, str]]:
        """Yield ``(id, remainder)`` for each marker on one line."""
        matches = list(self.regex.finditer(line))
        for i, match in enumerate(matches):
            group = 1 if self.regex.groups else 0
            stop = matches[i + 1].start() if i + 1 < len(matches) else len(line)
            yield match.group(group), _strip_remainder(line[match.end() : stop])


def _comment_nodes(root: SyntaxNode) -> Iterator[SyntaxNode]:
    # Nested comment kinds (e.g. Rust doc_comment) sit inside their parent comment
    stack = [root]
    while stack:
        node = stack.pop()
        if is_comment_kind(node.type):
            yield node
            continue
        stack.extend(reversed(node.named_children))


def find_markers(root: SyntaxNode, pattern: MarkerPattern) -> list[Marker]:
    """Every marker in the tree's comments, in source order.

    Args:
        root: Tree root node.
        pattern: Marker regex to search with.

    Returns:
        Markers sorted by line, with the id and trailing description.
    """
    markers: list[Marker] = []
    for node in _comment_nodes(root):
        first = start_line(node)
        for offset, physical in enumerate(node_text(node).split("\n")):
            for marker_id, text in pattern.finditer(physical):
                markers.append(Marker(id=marker_id, text=text, line=first + offset))
    markers.sort(key=lambda m: m.line)
    return markers
