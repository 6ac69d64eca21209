"""Tests for the section report command line script."""

from __future__ import annotations

import importlib.util
import json
from pathlib import Path

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "section_report.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("section_report", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_section_report_prints_flat_and_nested_outline(tmp_path, capsys) -> None:
    page = tmp_path / "page.txt"
    page.write_text("NAME\n\nx\n\nOPTIONS\n   SEARCH\n       -x\n", encoding="utf-8")
    report = _load_script()

    assert report.main([str(page)]) == 0
    flat = json.loads(capsys.readouterr().out)
    assert [entry["id"] for entry in flat] == ["name", "options", "search"]

    assert report.main([str(page), "--tree"]) == 0
    tree = json.loads(capsys.readouterr().out)
    assert [node["id"] for node in tree] == ["name", "options"]
    assert tree[1]["children"][0]["title"] == "SEARCH"
