"""codelabel shell entry point."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List

from .codec import split_lines
from .commands import CommandRegistry, build_registry
from .context import LabelContext
from .history import HistoryStore
from .parser import script_lines
from .repl import LabelREPL, dispatch

LOG = logging.getLogger("codelabel.cli")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Code label shell")
    parser.add_argument("--json", action="store_true", help="Emit JSON output when supported")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("CODELABEL_LOG", "WARNING"),
        help="Logging level (default WARNING)",
    )
    parser.add_argument(
        "-c",
        "--command",
        action="append",
        help="Execute a command non-interactively (repeatable; quote the command string)",
    )
    parser.add_argument("--script", type=Path, help="Execute commands from a file, one per line")
    parser.add_argument(
        "--history",
        type=Path,
        default=Path(os.environ.get("CODELABEL_HISTORY", Path.home() / ".codelabel-history")),
        help="Path to command history file",
    )
    parser.add_argument("--no-history", action="store_true", help="Do not read or write the history file")
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    ctx = LabelContext(json_output=args.json)
    registry = build_registry()
    if args.script:
        rc = _run_script(ctx, registry, str(args.script))
        if rc or not args.command:
            return rc
    if args.command:
        return _run_commands(ctx, registry, args.command)
    history = None if args.no_history else HistoryStore(str(args.history))
    repl = LabelREPL(ctx, registry, history_store=history)
    try:
        return repl.run()
    except SystemExit as exc:
        return int(exc.code or 0)
    except KeyboardInterrupt:
        print()
        return 0


def _run_commands(ctx: LabelContext, registry: CommandRegistry, commands: List[str]) -> int:
    for command_line in commands:
        try:
            rc = dispatch(ctx, registry, command_line)
        except SystemExit as exc:
            return int(exc.code or 0)
        if rc:
            return rc
    return 0


def _run_script(ctx: LabelContext, registry: CommandRegistry, path: str) -> int:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        print(f"error: cannot read script {path}: {exc}")
        return 1
    for lineno, line in enumerate(script_lines(split_lines(text)), start=1):
        try:
            rc = dispatch(ctx, registry, line)
        except SystemExit as exc:
            return int(exc.code or 0)
        if rc:
            LOG.error("script %s stopped at command %d: %s", path, lineno, line)
            return rc
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
