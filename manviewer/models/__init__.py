"""Data models shared by the ManViewer services."""

from .search import FilterLine, FindMatch
from .section import SectionAnchor, SectionNode
from .tokens import TokenKind, TokenSegment

__all__ = [
    "FilterLine",
    "FindMatch",
    "SectionAnchor",
    "SectionNode",
    "TokenKind",
    "TokenSegment",
]
