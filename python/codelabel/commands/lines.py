"""Line format commands: decode, encode, import, dump."""

from __future__ import annotations

import argparse
from typing import List

from .base import Command, add_label_arguments, label_from_args
from ..codec import decode_label, encode_label
from ..context import LabelContext
from ..output import emit_error, emit_result, render_label_detail


class DecodeCommand(Command):
    def __init__(self) -> None:
        super().__init__("decode", "Parse a label line and show its fields")
        parser = argparse.ArgumentParser(prog="decode", add_help=False)
        parser.add_argument("line", help="Label line, e.g. 'PRG:8000-800F:reset:entry point'")
        self._parser = parser

    def run(self, ctx: LabelContext, argv: List[str]) -> int:
        try:
            args = self._parser.parse_args(argv)
        except SystemExit:
            return 1
        label = decode_label(args.line, ctx.store.validator)
        if label is None:
            emit_error(ctx, message=f"not a valid label line: {args.line!r}")
            return 1
        if ctx.json_output:
            emit_result(ctx, message="label", data={"label": label.to_dict()})
        else:
            render_label_detail(label)
        return 0


class EncodeCommand(Command):
    def __init__(self) -> None:
        super().__init__("encode", "Print the line form of a label without storing it")
        parser = argparse.ArgumentParser(prog="encode", add_help=False)
        add_label_arguments(parser)
        self._parser = parser

    def run(self, ctx: LabelContext, argv: List[str]) -> int:
        try:
            args = self._parser.parse_args(argv)
        except SystemExit:
            return 1
        label = label_from_args(ctx, args)
        if label is None:
            return 1
        line = encode_label(label)
        emit_result(ctx, message=line, data={"line": line})
        return 0


class ImportCommand(Command):
    def __init__(self) -> None:
        super().__init__("import", "Decode label lines into the label list", aliases=("load",))
        parser = argparse.ArgumentParser(prog="import", add_help=False)
        parser.add_argument("lines", nargs="+", help="One or more label lines")
        self._parser = parser

    def run(self, ctx: LabelContext, argv: List[str]) -> int:
        try:
            args = self._parser.parse_args(argv)
        except SystemExit:
            return 1
        imported = ctx.store.load_lines(args.lines)
        skipped = len(args.lines) - imported
        emit_result(
            ctx,
            message=f"Imported {imported} label(s), skipped {skipped}",
            data={"imported": imported, "skipped": skipped},
        )
        return 0 if imported else 1


class DumpCommand(Command):
    def __init__(self) -> None:
        super().__init__("dump", "Print every label in line format")

    def run(self, ctx: LabelContext, argv: List[str]) -> int:
        lines = ctx.store.dump_lines()
        if ctx.json_output:
            emit_result(ctx, message="lines", data={"lines": lines})
            return 0
        for line in lines:
            print(line)
        return 0


class ClearCommand(Command):
    def __init__(self) -> None:
        super().__init__("clear", "Remove every label")

    def run(self, ctx: LabelContext, argv: List[str]) -> int:
        count = len(ctx.store)
        ctx.store.clear()
        emit_result(ctx, message=f"Removed {count} label(s)", data={"removed": count})
        return 0
