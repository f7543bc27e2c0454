"""Remove a label."""

from __future__ import annotations

import argparse
from typing import List

from .base import Command
from ..codec import encode_label
from ..context import LabelContext
from ..output import emit_error, emit_result


class RemoveCommand(Command):
    def __init__(self) -> None:
        super().__init__("remove", "Remove a label by name or REGION:ADDR", aliases=("rm", "del"))
        parser = argparse.ArgumentParser(prog="remove", add_help=False)
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
        ctx.store.delete(label.region, label.address)
        line = encode_label(label)
        emit_result(ctx, message=f"Removed {line}", data={"removed": label.to_dict(), "line": line})
        return 0
