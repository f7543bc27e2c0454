"""Command base class for the codelabel shell."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..context import LabelContext
from ..errors import LabelError
from ..output import emit_error
from ..record import CodeLabel


@dataclass
class Command:
    """Abstract command description."""

    name: str
    description: str
    aliases: Sequence[str] = field(default_factory=tuple)

    def run(self, ctx: LabelContext, argv: List[str]) -> int:
        raise NotImplementedError("Command must implement run()")

    def format_help(self) -> str:
        names = ", ".join([self.name, *self.aliases])
        return f"{names:<18} {self.description}"

    def format_usage(self) -> str:
        parser = getattr(self, "_parser", None)
        if parser is None:
            return ""
        return parser.format_usage().strip()


def add_label_arguments(parser: argparse.ArgumentParser) -> None:
    """Positional ``region span [name]`` plus ``--comment``."""
    parser.add_argument("region", help="Region tag (PRG, WORK, GBHRAM, ...)")
    parser.add_argument("span", help="Hex address or inclusive range, e.g. 8000 or 8000-800F")
    parser.add_argument("name", nargs="?", default="", help="Label name")
    parser.add_argument("--comment", default="", help="Comment text (use \\n for line breaks)")


def label_from_args(ctx: LabelContext, args: argparse.Namespace) -> Optional[CodeLabel]:
    """Build a label from :func:`add_label_arguments` output, reporting errors."""
    comment = args.comment.replace("\\n", "\n")
    try:
        return ctx.build_label(args.region, args.span, args.name, comment)
    except LabelError as exc:
        emit_error(ctx, message=str(exc))
        return None
