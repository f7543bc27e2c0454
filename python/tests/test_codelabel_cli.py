"""Tests for the codelabel entry point and script runner."""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]
PYTHON_SRC = REPO_ROOT / "python"
if str(PYTHON_SRC) not in sys.path:
    sys.path.append(str(PYTHON_SRC))

from codelabel.cli import _run_script, build_arg_parser, main
from codelabel.commands import build_registry
from codelabel.context import LabelContext


def _ctx_registry():
    return LabelContext(), build_registry()


def test_script_executes_commands(tmp_path):
    ctx, registry = _ctx_registry()
    script = tmp_path / "labels.txt"
    script.write_text("# setup\nadd PRG 8000 reset\n\nalias l list\n", encoding="utf-8")
    assert _run_script(ctx, registry, str(script)) == 0
    assert ctx.store.get_by_name("reset") is not None
    assert ctx.aliases.get("l") == "list"


def test_script_stops_on_failure(tmp_path):
    ctx, registry = _ctx_registry()
    script = tmp_path / "labels.txt"
    script.write_text("unknowncmd\nadd PRG 8000 reset\n", encoding="utf-8")
    assert _run_script(ctx, registry, str(script)) != 0
    assert len(ctx.store) == 0


def test_script_keeps_unicode_line_separator_inside_a_command(tmp_path):
    ctx, registry = _ctx_registry()
    script = tmp_path / "labels.txt"
    script.write_text("import 'PRG:8000:reset:a\u2028b'\r\nlist\r\n", encoding="utf-8")
    assert _run_script(ctx, registry, str(script)) == 0
    assert ctx.store.get_by_name("reset").comment == "a\u2028b"


def test_script_missing_file_returns_error(tmp_path):
    ctx, registry = _ctx_registry()
    assert _run_script(ctx, registry, str(tmp_path / "missing.txt")) != 0


def test_main_runs_commands_in_order(capsys):
    rc = main(["-c", "add PRG 8000-800F table", "-c", "add WORK 0 counter", "-c", "dump"])
    assert rc == 0
    out = capsys.readouterr().out.splitlines()
    assert out[-2:] == ["PRG:8000-800F:table", "WORK:0000:counter"]


def test_main_returns_command_failure_code(capsys):
    assert main(["-c", "decode ZZZZ:1000:foo"]) == 1
    assert main(["-c", "exit"]) == 0


def test_main_script_then_commands(tmp_path, capsys):
    script = tmp_path / "labels.txt"
    script.write_text("import PRG:8000:reset\n", encoding="utf-8")
    assert main(["--script", str(script), "-c", "dump"]) == 0
    assert capsys.readouterr().out.splitlines()[-1] == "PRG:8000:reset"


def test_arg_parser_reads_environment(monkeypatch, tmp_path):
    history = tmp_path / "hist"
    monkeypatch.setenv("CODELABEL_LOG", "DEBUG")
    monkeypatch.setenv("CODELABEL_HISTORY", str(history))
    args = build_arg_parser().parse_args([])
    assert args.log_level == "DEBUG"
    assert args.history == history
    assert args.json is False
