"""Add or replace a label."""

from __future__ import annotations

import argparse
from typing import List

from .base import Command, add_label_arguments, label_from_args
from ..codec import encode_label
from ..context import LabelContext
from ..errors import LabelStoreError
from ..output import emit_error, emit_result


class AddCommand(Command):
    def __init__(self) -> None:
        super().__init__("add", "Add or replace a label", aliases=("set",))
        parser = argparse.ArgumentParser(prog="add", add_help=False)
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
        try:
            change = ctx.store.set_label(label)
        except LabelStoreError as exc:
            emit_error(ctx, message=str(exc))
            return 1
        line = encode_label(label)
        emit_result(ctx, message=f"{change.kind.capitalize()} {line}", data={"change": change.kind, "label": label.to_dict(), "line": line})
        return 0
