"""Section anchors recovered from a rendered manual page."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class SectionAnchor:
    """Navigable heading with the inclusive line range it governs."""

    id: str
    title: str
    start_line: int
    end_line: int
    level: int = 1
    parent_id: str | None = None

    def contains(self, line_index: int) -> bool:
        """Return True when ``line_index`` falls inside this section."""

        return self.start_line <= line_index <= self.end_line

    def to_dict(self) -> dict[str, object]:
        """Return a serialisable representation of the anchor."""

        return {
            "id": self.id,
            "title": self.title,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "level": self.level,
            "parent_id": self.parent_id,
        }


@dataclass(slots=True)
class SectionNode:
    """Hierarchical outline node wrapping a :class:`SectionAnchor`."""

    anchor: SectionAnchor
    children: list["SectionNode"] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        payload = self.anchor.to_dict()
        payload["children"] = [child.to_dict() for child in self.children]
        return payload


__all__ = ["SectionAnchor", "SectionNode"]
