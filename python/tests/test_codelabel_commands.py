"""Unit tests for codelabel shell commands."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
PYTHON_SRC = REPO_ROOT / "python"
if str(PYTHON_SRC) not in sys.path:
    sys.path.append(str(PYTHON_SRC))

from codelabel.commands import build_registry
from codelabel.commands.add import AddCommand
from codelabel.commands.alias import AliasCommand
from codelabel.commands.exit import ExitCommand
from codelabel.commands.lines import ClearCommand, DecodeCommand, DumpCommand, EncodeCommand, ImportCommand
from codelabel.commands.listing import ListCommand
from codelabel.commands.remove import RemoveCommand
from codelabel.commands.show import ShowCommand
from codelabel.context import LabelContext, parse_address, parse_span
from codelabel.errors import LabelError
from codelabel.regions import MemoryRegion
from codelabel.repl import dispatch


def _ctx(**kwargs) -> LabelContext:
    return LabelContext(**kwargs)


def test_parse_address_accepts_common_hex_spellings():
    assert parse_address("8000") == 0x8000
    assert parse_address("$8000") == 0x8000
    assert parse_address("0x8000") == 0x8000
    with pytest.raises(LabelError):
        parse_address("zz")
    with pytest.raises(LabelError):
        parse_address("100000000")


def test_parse_span():
    assert parse_span("8000") == (0x8000, 1)
    assert parse_span("8000-800F") == (0x8000, 16)
    with pytest.raises(LabelError):
        parse_span("9000-8000")


def test_add_command_stores_label(capsys):
    ctx = _ctx()
    rc = AddCommand().run(ctx, ["prg", "8000-800f", "reset", "--comment", "entry\\npoint"])
    assert rc == 0
    label = ctx.store.get_by_name("reset")
    assert label.region is MemoryRegion.PRG_ROM
    assert label.length == 16
    assert label.comment == "entry\npoint"
    assert "Added PRG:8000-800F:reset:entry\\npoint" in capsys.readouterr().out


def test_add_command_reports_bad_input(capsys):
    ctx = _ctx()
    assert AddCommand().run(ctx, ["vram", "8000", "x"]) == 1
    assert AddCommand().run(ctx, ["prg", "8000", "bad name"]) == 1
    assert AddCommand().run(ctx, []) == 1
    out = capsys.readouterr().out
    assert "unknown memory region" in out
    assert "invalid label name" in out
    assert len(ctx.store) == 0


def test_add_command_json_output(capsys):
    ctx = _ctx(json_output=True)
    assert AddCommand().run(ctx, ["WORK", "0", "counter"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "ok"
    assert payload["result"]["line"] == "WORK:0000:counter"
    assert payload["result"]["change"] == "added"


def test_remove_command_by_name_and_address(capsys):
    ctx = _ctx()
    ctx.store.load_lines(["PRG:8000:reset", "WORK:0010-001F:buffer"])
    assert RemoveCommand().run(ctx, ["reset"]) == 0
    assert RemoveCommand().run(ctx, ["WORK:0018"]) == 0
    assert len(ctx.store) == 0
    assert RemoveCommand().run(ctx, ["missing"]) == 1
    out = capsys.readouterr().out
    assert "Removed PRG:8000:reset" in out
    assert "Removed WORK:0010-001F:buffer" in out
    assert "no label matches" in out


def test_list_command_filters(capsys):
    ctx = _ctx()
    ctx.store.load_lines(["PRG:8000:reset", "SPCRAM:0200:spc_main", "GBHRAM:FF80:dma_stub"])
    assert ListCommand().run(ctx, ["--cpu", "spc"]) == 0
    out = capsys.readouterr().out
    assert "spc_main" in out and "reset" not in out
    assert ListCommand().run(ctx, ["--region", "GBHRAM"]) == 0
    out = capsys.readouterr().out
    assert "dma_stub" in out and "spc_main" not in out
    assert ListCommand().run(ctx, ["--cpu", "z80"]) == 1


def test_list_command_json(capsys):
    ctx = _ctx(json_output=True)
    ctx.store.load_lines(["PRG:8000:reset"])
    assert ListCommand().run(ctx, []) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["result"]["labels"][0]["name"] == "reset"


def test_list_command_empty(capsys):
    assert ListCommand().run(_ctx(), []) == 0
    assert "(none)" in capsys.readouterr().out


def test_show_command_renders_multiline_comment(capsys):
    ctx = _ctx()
    ctx.store.load_lines(["PRG:8000-8003:vectors:first\\nsecond"])
    assert ShowCommand().run(ctx, ["vectors"]) == 0
    out = capsys.readouterr().out
    assert "region  : PRG (PRG_ROM)" in out
    assert "end     : 0x00008003" in out
    assert "first" in out and "second" in out
    assert ShowCommand().run(ctx, ["PRG:9000"]) == 1


def test_decode_command(capsys):
    ctx = _ctx()
    assert DecodeCommand().run(ctx, ["GBREG:FF40:lcdc:LCD control"]) == 0
    out = capsys.readouterr().out
    assert "GBREG" in out and "LCD control" in out
    assert DecodeCommand().run(ctx, ["PRG:2000-1000:foo"]) == 1
    assert "not a valid label line" in capsys.readouterr().out
    assert len(ctx.store) == 0


def test_encode_command_prints_line_without_storing(capsys):
    ctx = _ctx()
    assert EncodeCommand().run(ctx, ["PRG", "8000-800F", "table"]) == 0
    assert capsys.readouterr().out.strip() == "PRG:8000-800F:table"
    assert len(ctx.store) == 0


def test_import_dump_and_clear(capsys):
    ctx = _ctx()
    assert ImportCommand().run(ctx, ["PRG:8000:reset", "bogus", "WORK:0000:"]) == 0
    assert "Imported 2 label(s), skipped 1" in capsys.readouterr().out
    assert DumpCommand().run(ctx, []) == 0
    assert capsys.readouterr().out.splitlines() == ["PRG:8000:reset", "WORK:0000:"]
    assert ClearCommand().run(ctx, []) == 0
    assert "Removed 2 label(s)" in capsys.readouterr().out
    assert ImportCommand().run(ctx, ["bogus"]) == 1


def test_alias_command_and_dispatch(capsys):
    ctx = _ctx()
    registry = build_registry()
    assert AliasCommand().run(ctx, ["l", "list"]) == 0
    assert ctx.aliases == {"l": "list"}
    assert dispatch(ctx, registry, "add PRG 8000 reset") == 0
    assert dispatch(ctx, registry, "l") == 0
    assert "reset" in capsys.readouterr().out
    assert dispatch(ctx, registry, "nosuch") == 1
    assert "Unknown command: nosuch" in capsys.readouterr().out


def test_dispatch_reports_quote_errors(capsys):
    ctx = _ctx()
    assert dispatch(ctx, build_registry(), "decode 'PRG:8000:foo") == 1
    assert "Parse error" in capsys.readouterr().out


def test_dispatch_keeps_escaped_comment_in_single_quotes():
    ctx = _ctx()
    assert dispatch(ctx, build_registry(), "import 'PRG:8000:reset:a\\nb'") == 0
    assert ctx.store.get_by_name("reset").comment == "a\nb"


def test_help_lists_commands(capsys):
    registry = build_registry()
    assert dispatch(_ctx(), registry, "help") == 0
    out = capsys.readouterr().out
    for name in ("add", "remove", "list", "show", "decode", "encode", "import", "dump", "clear", "exit"):
        assert name in out
    assert dispatch(_ctx(), registry, "help rm") == 0
    assert capsys.readouterr().out.startswith("remove, rm, del")


def test_exit_command_raises_system_exit():
    with pytest.raises(SystemExit):
        ExitCommand().run(_ctx(), [])


def test_alias_validates_target_and_supports_removal(capsys):
    ctx = _ctx()
    registry = build_registry()
    assert dispatch(ctx, registry, "alias x nosuch") == 1
    assert "unknown command: nosuch" in capsys.readouterr().out
    assert dispatch(ctx, registry, "alias d dump") == 0
    assert dispatch(ctx, registry, "alias") == 0
    assert "d = dump" in capsys.readouterr().out
    assert dispatch(ctx, registry, "alias --remove d") == 0
    assert ctx.aliases == {}
    assert dispatch(ctx, registry, "alias --remove d") == 1


def test_help_for_one_command_shows_usage(capsys):
    registry = build_registry()
    assert dispatch(_ctx(), registry, "help add") == 0
    out = capsys.readouterr().out
    assert out.startswith("add, set")
    assert "usage: add" in out
    assert dispatch(_ctx(), registry, "help") == 0
    assert "regions: REG PRG WORK SAVE" in capsys.readouterr().out


def test_exit_reports_discarded_labels(capsys):
    ctx = _ctx()
    ctx.store.load_lines(["PRG:8000:reset", "WORK:0000:counter"])
    with pytest.raises(SystemExit):
        ExitCommand().run(ctx, [])
    assert "Discarding 2 label(s)" in capsys.readouterr().out
