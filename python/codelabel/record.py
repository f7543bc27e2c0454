"""Code label value type."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import IntFlag
from typing import Any, Dict

from .errors import LabelError
from .regions import MemoryRegion, tag_for_region

U32_MAX = 0xFFFFFFFF


class CodeLabelFlags(IntFlag):
    NONE = 0
    AUTO_JUMP_LABEL = 1


@dataclass(frozen=True)
class CodeLabel:
    """A named annotation on ``length`` consecutive addresses of ``region``.

    Instances are plain values: they hold no reference to a debugger session
    and compare field by field.  Use :meth:`replace` to derive a modified copy.
    The name is not checked against the label grammar here; the decoder and
    :class:`~codelabel.store.LabelStore` do that.
    """

    address: int
    region: MemoryRegion
    name: str = ""
    comment: str = ""
    length: int = 1
    flags: CodeLabelFlags = CodeLabelFlags.NONE

    def __post_init__(self) -> None:
        if not isinstance(self.region, MemoryRegion):
            raise LabelError(f"region must be a MemoryRegion (got {self.region!r})")
        for field_name in ("address", "length"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise LabelError(f"{field_name} must be an integer (got {value!r})")
        if not 0 <= self.address <= U32_MAX:
            raise LabelError(f"address out of range: {self.address:#x}")
        if not 1 <= self.length <= U32_MAX:
            raise LabelError(f"length must be between 1 and {U32_MAX:#x} (got {self.length})")
        if self.address + self.length - 1 > U32_MAX:
            raise LabelError(
                f"range {self.address:#x}+{self.length} runs past the end of the address space"
            )
        if not isinstance(self.name, str) or not isinstance(self.comment, str):
            raise LabelError("name and comment must be strings")
        object.__setattr__(self, "flags", CodeLabelFlags(self.flags))

    @property
    def end_address(self) -> int:
        """Last address covered (inclusive)."""
        return self.address + self.length - 1

    @property
    def is_range(self) -> bool:
        return self.length > 1

    def contains(self, address: int) -> bool:
        return self.address <= address <= self.end_address

    def replace(self, **changes: Any) -> "CodeLabel":
        return dataclasses.replace(self, **changes)

    def describe(self) -> str:
        span = f"{self.address:04X}"
        if self.is_range:
            span += f"-{self.end_address:04X}"
        return f"{tag_for_region(self.region)}:{span}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "region": tag_for_region(self.region),
            "address": self.address,
            "end_address": self.end_address,
            "length": self.length,
            "name": self.name,
            "comment": self.comment,
            "flags": int(self.flags),
        }
