"""Plain-data results of the context engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

UNKNOWN_KIND = "unknown"


@dataclass(frozen=True, slots=True)
class NodeInfo:
    """A classified node that starts on some line (transient, per call)."""

    kind: str
    name: str | None
    text: str  # first line of the node's text
    priority: int


@dataclass(frozen=True, slots=True)
class CodeContext:
    """Code found near a comment."""

    kind: str  # node kind, or "unknown" for unclassified code
    name: str | None
    text: str
    line: int  # 1-indexed

    @classmethod
    def from_node(cls, info: NodeInfo, line: int) -> CodeContext:
        return cls(kind=info.kind, name=info.name, text=info.text, line=line + 1)

    @classmethod
    def unknown(cls, text: str, line: int) -> CodeContext:
        return cls(kind=UNKNOWN_KIND, name=None, text=text, line=line + 1)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": self.kind}
        if self.name is not None:
            data["name"] = self.name
        data["text"] = self.text
        data["line"] = self.line
        return data


@dataclass(frozen=True, slots=True)
class ScopeFrame:
    """One enclosing construct in a scope chain."""

    kind: str
    name: str | None
    line: int  # 1-indexed start line

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": self.kind}
        if self.name is not None:
            data["name"] = self.name
        data["line"] = self.line
        return data


@dataclass(frozen=True, slots=True)
class BlockContext:
    """Code above, below and on the line of a comment block."""

    above: CodeContext | None = None
    below: CodeContext | None = None
    inline: CodeContext | None = None

    @property
    def is_empty(self) -> bool:
        return self.above is None and self.below is None and self.inline is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "above": self.above.to_dict() if self.above else None,
            "below": self.below.to_dict() if self.below else None,
            "inline": self.inline.to_dict() if self.inline else None,
        }
