"""Shell context shared by all commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .errors import LabelError
from .record import U32_MAX, CodeLabel
from .regions import parse_region
from .store import LabelChange, LabelStore

LOGGER = logging.getLogger("codelabel.context")


def parse_address(text: str) -> int:
    """Parse a user-typed hex address (``8000``, ``$8000`` or ``0x8000``)."""
    value = text.strip()
    if value.startswith("$"):
        value = value[1:]
    elif value.lower().startswith("0x"):
        value = value[2:]
    try:
        number = int(value, 16)
    except ValueError:
        raise LabelError(f"invalid address: {text!r}") from None
    if number < 0 or number > U32_MAX:
        raise LabelError(f"address out of range: {text!r}")
    return number


def parse_span(text: str) -> Tuple[int, int]:
    """Parse ``start`` or ``start-end`` into ``(address, length)``."""
    if "-" not in text:
        return parse_address(text), 1
    start_text, end_text = text.split("-", 1)
    start = parse_address(start_text)
    end = parse_address(end_text)
    if end < start:
        raise LabelError(f"range end precedes start: {text!r}")
    return start, end - start + 1


@dataclass
class LabelContext:
    """Holds shared shell state."""

    json_output: bool = False
    store: LabelStore = field(default_factory=LabelStore)
    aliases: Dict[str, str] = field(default_factory=dict)
    _subscription: Optional[int] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self._subscription = self.store.subscribe(self._log_change)

    @staticmethod
    def _log_change(change: LabelChange) -> None:
        label = change.label or change.previous
        if label is None:
            LOGGER.debug("labels %s", change.kind)
            return
        LOGGER.debug("label %s: %s", change.kind, label.describe())

    def resolve_alias(self, name: str) -> str:
        return self.aliases.get(name, name)

    def set_alias(self, alias: str, command: str) -> None:
        if alias == command:
            self.aliases.pop(alias, None)
            return
        self.aliases[alias] = command

    def list_aliases(self) -> Dict[str, str]:
        return dict(self.aliases)

    def build_label(
        self,
        region: str,
        span: str,
        name: str = "",
        comment: str = "",
    ) -> CodeLabel:
        address, length = parse_span(span)
        return CodeLabel(
            address=address,
            region=parse_region(region),
            name=name or "",
            comment=comment or "",
            length=length,
        )

    def resolve_label(self, target: str) -> Optional[CodeLabel]:
        """Find a label by name or by ``REGION:ADDR``."""
        target = target.strip()
        if ":" in target:
            region_text, address_text = target.split(":", 1)
            try:
                region = parse_region(region_text)
                address = parse_address(address_text)
            except LabelError:
                return self.store.get_by_name(target)
            return self.store.find(region, address)
        return self.store.get_by_name(target)

    def label_names(self, prefix: str = "") -> List[str]:
        names = [label.name for label in self.store.labels() if label.name]
        if not prefix:
            return sorted(names)
        needle = prefix.lower()
        return sorted(name for name in names if name.lower().startswith(needle))
