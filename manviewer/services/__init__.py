"""Pure document services: line normalisation, sections, tokens and search."""

from .lines import normalize_lines
from .search import build_filter_lines, find_matches
from .sections import build_section_tree, detect_sections
from .tokens import classify_tokens

__all__ = [
    "build_filter_lines",
    "build_section_tree",
    "classify_tokens",
    "detect_sections",
    "find_matches",
    "normalize_lines",
]
