"""Output helpers for the codelabel shell."""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional, Sequence

from .context import LabelContext
from .record import CodeLabel
from .regions import tag_for_region


def _json_dump(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, indent=2, sort_keys=True)


def emit_result(ctx: LabelContext, *, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
    """Emit a successful command result."""
    if ctx.json_output:
        payload: Dict[str, Any] = {"status": "ok"}
        if data is not None:
            payload["result"] = data
        else:
            payload["message"] = message
        print(_json_dump(payload))
    else:
        print(message)


def emit_error(ctx: LabelContext, *, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
    """Emit an error message respecting JSON mode."""
    payload: Dict[str, Any] = {"status": "error", "error": message}
    if data:
        payload["details"] = dict(data)
    if ctx.json_output:
        print(_json_dump(payload))
    else:
        print(f"error: {message}")


def _first_line(text: str) -> str:
    lines = text.splitlines()
    if not lines:
        return ""
    return lines[0] + (" ..." if len(lines) > 1 else "")


def render_label_table(labels: Sequence[CodeLabel]) -> None:
    """Print one row per label."""
    if not labels:
        print("  labels: (none)")
        return
    header = "    Region  Address            Name                      Comment"
    print("  labels:")
    print(header)
    print("    " + "-" * (len(header) - 4))
    for label in labels:
        span = f"{label.address:04X}"
        if label.is_range:
            span += f"-{label.end_address:04X}"
        name = label.name or "-"
        print(f"    {tag_for_region(label.region):<6}  {span:<17}  {name:<24}  {_first_line(label.comment)}")


def render_label_detail(label: CodeLabel) -> None:
    """Render every field of a label."""
    print(f"  label {label.name or '(unnamed)'}")
    print(f"    region  : {tag_for_region(label.region)} ({label.region.name})")
    print(f"    cpu     : {label.region.cpu_type.value}")
    print(f"    address : 0x{label.address:08X}")
    if label.is_range:
        print(f"    end     : 0x{label.end_address:08X}")
    print(f"    length  : {label.length}")
    if label.flags:
        print(f"    flags   : {label.flags!r}")
    if label.comment:
        lines = label.comment.splitlines() or [""]
        print(f"    comment : {lines[0]}")
        for line in lines[1:]:
            print(f"              {line}")


__all__ = [
    "emit_result",
    "emit_error",
    "render_label_table",
    "render_label_detail",
]
