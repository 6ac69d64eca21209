"""Print the detected section outline of a rendered manual page as JSON.

Usage::

    man ls | col -bx > ls.txt
    python scripts/section_report.py ls.txt
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from manviewer.services import build_section_tree, detect_sections, normalize_lines  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Report sections of a rendered man page.")
    parser.add_argument("path", type=Path, help="Plain-text manual page ('-' for stdin).")
    parser.add_argument("--tree", action="store_true", help="Emit the nested outline.")
    args = parser.parse_args(argv)

    if str(args.path) == "-":
        raw_text = sys.stdin.read()
    elif args.path.exists():
        raw_text = args.path.read_text(encoding="utf-8", errors="replace")
    else:
        raise SystemExit(f"Document not found: {args.path}")

    sections = detect_sections(normalize_lines(raw_text))
    if args.tree:
        payload = [node.to_dict() for node in build_section_tree(sections)]
    else:
        payload = [anchor.to_dict() for anchor in sections]

    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
