"""Result records produced by the find and filter search workflows."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class FindMatch:
    """Single substring occurrence; ``end`` is exclusive."""

    line_index: int
    start: int
    end: int
    preview: str

    def to_dict(self) -> dict[str, object]:
        return {
            "line_index": self.line_index,
            "start": self.start,
            "end": self.end,
            "preview": self.preview,
        }


@dataclass(slots=True, frozen=True)
class FilterLine:
    """Distinct matching line together with its match count."""

    line_index: int
    text: str
    match_count: int

    def to_dict(self) -> dict[str, object]:
        return {
            "line_index": self.line_index,
            "text": self.text,
            "match_count": self.match_count,
        }


__all__ = ["FilterLine", "FindMatch"]
