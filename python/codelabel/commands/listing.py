"""List labels."""

from __future__ import annotations

import argparse
from typing import List

from .base import Command
from ..context import LabelContext
from ..errors import LabelError
from ..output import emit_error, emit_result, render_label_table
from ..regions import CpuType, parse_region


class ListCommand(Command):
    def __init__(self) -> None:
        super().__init__("list", "List labels", aliases=("ls",))
        parser = argparse.ArgumentParser(prog="list", add_help=False)
        parser.add_argument("--region", help="Only labels in this region")
        parser.add_argument("--cpu", help="Only labels owned by this processor (cpu, spc, sa1, necdsp, gameboy)")
        self._parser = parser

    def run(self, ctx: LabelContext, argv: List[str]) -> int:
        try:
            args = self._parser.parse_args(argv)
        except SystemExit:
            return 1
        try:
            cpu_type = CpuType.from_any(args.cpu) if args.cpu else None
            region = parse_region(args.region) if args.region else None
        except LabelError as exc:
            emit_error(ctx, message=str(exc))
            return 1
        labels = ctx.store.labels(cpu_type)
        if region is not None:
            labels = [label for label in labels if label.region is region]
        if ctx.json_output:
            emit_result(ctx, message="labels", data={"labels": [label.to_dict() for label in labels]})
        else:
            render_label_table(labels)
        return 0
