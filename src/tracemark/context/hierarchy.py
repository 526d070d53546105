"""Scope chain for a line: every scope node whose rows enclose it."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from tracemark.context.kinds import is_scope
from tracemark.context.models import ScopeFrame
from tracemark.context.names import extract_name
from tracemark.context.nodes import SyntaxNode, end_line, start_line, walk


@dataclass(frozen=True, slots=True)
class ScopeSpan:
    """A scope node's kind, name and 0-indexed row range."""

    kind: str
    name: str | None
    start: int
    end: int
    order: int  # DFS visit index

    def encloses(self, line: int) -> bool:
        return self.start <= line <= self.end


def scope_span(node: SyntaxNode, order: int) -> ScopeSpan | None:
    kind = node.type
    if not is_scope(kind):
        return None
    return ScopeSpan(
        kind=kind,
        name=extract_name(node, kind),
        start=start_line(node),
        end=end_line(node),
        order=order,
    )


def frames_for_line(spans: Iterable[ScopeSpan], target_line: int) -> list[ScopeFrame]:
    """Innermost-first frames for the spans enclosing ``target_line``.

    Spans sharing a start row keep the later-visited (nested) one first.
    """
    enclosing = sorted(
        (span for span in spans if span.encloses(target_line)),
        key=lambda span: (span.start, span.order),
        reverse=True,
    )
    return [ScopeFrame(kind=span.kind, name=span.name, line=span.start + 1) for span in enclosing]


def extract_hierarchy(root: SyntaxNode, target_line: int) -> list[ScopeFrame]:
    """Enclosing scopes of ``target_line`` (0-indexed), innermost first."""
    spans = (scope_span(node, order) for order, node in enumerate(walk(root)))
    return frames_for_line((span for span in spans if span is not None), target_line)
