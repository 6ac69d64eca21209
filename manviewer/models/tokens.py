"""Token segments used for per-line highlighting."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    """Semantic categories assigned to spans of a displayed line."""

    PLAIN = "plain"
    HEADING = "heading"
    OPTION = "option"
    PATH = "path"
    ENV = "env"
    LITERAL = "literal"
    COMMAND = "command"


@dataclass(slots=True, frozen=True)
class TokenSegment:
    """Contiguous span of a line tagged with its :class:`TokenKind`."""

    text: str
    kind: TokenKind = TokenKind.PLAIN

    def to_dict(self) -> dict[str, str]:
        return {"text": self.text, "kind": self.kind.value}


__all__ = ["TokenKind", "TokenSegment"]
