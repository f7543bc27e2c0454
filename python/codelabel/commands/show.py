"""Show a single label."""

from __future__ import annotations

import argparse
from typing import List

from .base import Command
from ..codec import encode_label
from ..context import LabelContext
from ..output import emit_error, emit_result, render_label_detail


class ShowCommand(Command):
    def __init__(self) -> None:
        super().__init__("show", "Show a label by name or REGION:ADDR")
        parser = argparse.ArgumentParser(prog="show", add_help=False)
        parser.add_argument("target", help="Label name or REGION:ADDR")
        self._parser = parser

    def run(self, ctx: LabelContext, argv: List[str]) -> int:
        try:
            args = self._parser.parse_args(argv)
        except SystemExit:
            return 1
        label = ctx.resolve_label(args.target)
        if label is None:
            emit_error(ctx, message=f"no label matches {args.target!r}")
            return 1
        if ctx.json_output:
            emit_result(ctx, message="label", data={"label": label.to_dict(), "line": encode_label(label)})
        else:
            render_label_detail(label)
        return 0
