"""Completion tests for the codelabel shell."""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]
PYTHON_SRC = REPO_ROOT / "python"
if str(PYTHON_SRC) not in sys.path:
    sys.path.append(str(PYTHON_SRC))

from prompt_toolkit.document import Document

from codelabel.commands import build_registry
from codelabel.completion import LabelCompleter
from codelabel.context import LabelContext


def _complete(text: str, ctx: LabelContext | None = None) -> set:
    ctx = ctx or LabelContext()
    completer = LabelCompleter(ctx, build_registry())
    doc = Document(text, cursor_position=len(text))
    return {c.text for c in completer.get_completions(doc, None)}


def test_command_completion():
    results = _complete("de")
    assert {"decode", "del"} <= results
    assert "dump" not in results


def test_region_tag_completion_for_add():
    results = _complete("add GB")
    assert results == {"GBPRG", "GBWRAM", "GBSRAM", "GBHRAM", "GBBOOT", "GBREG"}


def test_region_and_cpu_option_completion():
    assert _complete("list --region SPC") == {"SPCRAM", "SPCROM"}
    assert _complete("list --cpu s") == {"spc", "sa1"}


def test_label_name_completion_for_show():
    ctx = LabelContext()
    ctx.store.load_lines(["PRG:8000:reset", "PRG:8100:rti_stub", "WORK:0000:counter"])
    assert _complete("show r", ctx) == {"reset", "rti_stub"}
    assert _complete("rm c", ctx) == {"counter"}


def test_no_completion_after_positional_arguments():
    assert _complete("add PRG 8000 ") == set()
