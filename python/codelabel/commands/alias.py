"""Alias management command."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING, List, Optional

from .base import Command
from ..context import LabelContext
from ..output import emit_error, emit_result

if TYPE_CHECKING:  # pragma: no cover
    from . import CommandRegistry


class AliasCommand(Command):
    def __init__(self) -> None:
        super().__init__("alias", "Show, define or remove command aliases")
        parser = argparse.ArgumentParser(prog="alias", add_help=False)
        parser.add_argument("name", nargs="?", help="Alias name")
        parser.add_argument("command", nargs="?", help="Command the alias runs")
        parser.add_argument("--remove", metavar="NAME", help="Forget one alias")
        parser.add_argument("--clear", action="store_true", help="Forget every alias")
        self._parser = parser
        self._registry: Optional["CommandRegistry"] = None

    def bind(self, registry: "CommandRegistry") -> None:
        self._registry = registry

    def run(self, ctx: LabelContext, argv: List[str]) -> int:
        try:
            args = self._parser.parse_args(argv)
        except SystemExit:
            return 1
        if args.clear:
            ctx.aliases.clear()
            emit_result(ctx, message="Aliases cleared", data={"aliases": {}})
            return 0
        if args.remove:
            if ctx.aliases.pop(args.remove, None) is None:
                emit_error(ctx, message=f"no alias named {args.remove!r}")
                return 1
            emit_result(ctx, message=f"Alias {args.remove} removed", data={"aliases": ctx.list_aliases()})
            return 0
        if args.name and args.command:
            if self._registry is not None and self._registry.get(args.command) is None:
                emit_error(ctx, message=f"unknown command: {args.command}")
                return 1
            ctx.set_alias(args.name, args.command)
            emit_result(ctx, message=f"{args.name} -> {args.command}", data={"aliases": ctx.list_aliases()})
            return 0
        if args.name:
            emit_error(ctx, message="alias needs both a name and a command")
            return 1
        aliases = ctx.list_aliases()
        if ctx.json_output:
            emit_result(ctx, message="aliases", data={"aliases": aliases})
        elif not aliases:
            print("No aliases defined")
        else:
            print("Aliases:")
            for alias, command in sorted(aliases.items()):
                print(f"  {alias} = {command}")
        return 0
