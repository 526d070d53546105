"""Context extraction engine.

Given a syntax tree, the source lines and the line of a marker comment,
report the code the comment documents and the scopes that enclose it.
"""

from tracemark.context.blocks import resolve_block
from tracemark.context.finder import extract_block_context
from tracemark.context.hierarchy import extract_hierarchy
from tracemark.context.index import FileContextIndex
from tracemark.context.kinds import Band, is_interesting, is_scope, priority
from tracemark.context.models import BlockContext, CodeContext, ScopeFrame
from tracemark.context.names import extract_name

__all__ = [
    "extract_block_context",
    "extract_hierarchy",
    "extract_name",
    "resolve_block",
    "FileContextIndex",
    "BlockContext",
    "CodeContext",
    "ScopeFrame",
    "Band",
    "is_interesting",
    "is_scope",
    "priority",
]
