"""Exit command."""

from __future__ import annotations

from typing import List

from .base import Command
from ..context import LabelContext
from ..output import emit_result


class ExitCommand(Command):
    def __init__(self) -> None:
        super().__init__("exit", "Leave the label shell (labels are not saved; run dump first)", aliases=("quit", "q"))

    def run(self, ctx: LabelContext, argv: List[str]) -> int:
        count = len(ctx.store)
        if count:
            emit_result(ctx, message=f"Discarding {count} label(s)", data={"discarded": count})
        raise SystemExit(0)
