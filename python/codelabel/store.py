"""In-memory label collection with change notification."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .codec import decode_lines, encode_lines
from .errors import LabelStoreError
from .naming import DEFAULT_NAME_VALIDATOR, NameValidator
from .record import CodeLabel
from .regions import CpuType, MemoryRegion
from .services import labels_for_processor

LOGGER = logging.getLogger("codelabel.store")

LabelKey = Tuple[MemoryRegion, int]

CHANGE_ADDED = "added"
CHANGE_UPDATED = "updated"
CHANGE_REMOVED = "removed"
CHANGE_CLEARED = "cleared"


@dataclass(frozen=True)
class LabelChange:
    kind: str
    label: Optional[CodeLabel] = None
    previous: Optional[CodeLabel] = None


ChangeHandler = Callable[[LabelChange], None]

_REGION_ORDER = {region: idx for idx, region in enumerate(MemoryRegion)}


def _sort_key(label: CodeLabel) -> Tuple[int, int]:
    return _REGION_ORDER[label.region], label.address


class LabelStore:
    """Labels keyed by ``(region, start address)`` with unique names.

    Subscribers registered with :meth:`subscribe` are called after every
    change, outside the internal lock, in subscription order.
    """

    def __init__(self, *, validator: NameValidator = DEFAULT_NAME_VALIDATOR) -> None:
        self.validator = validator
        self._labels: Dict[LabelKey, CodeLabel] = {}
        self._names: Dict[str, LabelKey] = {}
        self._handlers: Dict[int, ChangeHandler] = {}
        self._next_token = 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._labels)

    def __iter__(self) -> Iterator[CodeLabel]:
        return iter(self.labels())

    def __contains__(self, label: object) -> bool:
        if not isinstance(label, CodeLabel):
            return False
        with self._lock:
            stored = self._labels.get((label.region, label.address))
        return stored == label

    # -- observers -------------------------------------------------------

    def subscribe(self, handler: ChangeHandler) -> int:
        with self._lock:
            token = self._next_token
            self._next_token += 1
            self._handlers[token] = handler
            return token

    def unsubscribe(self, token: int) -> None:
        with self._lock:
            self._handlers.pop(token, None)

    def _notify(self, change: LabelChange) -> None:
        with self._lock:
            handlers = list(self._handlers.values())
        for handler in handlers:
            handler(change)

    # -- mutation --------------------------------------------------------

    def set_label(self, label: CodeLabel) -> LabelChange:
        if label.name and not self.validator.is_valid(label.name):
            raise LabelStoreError(f"invalid label name: {label.name!r}")
        key = (label.region, label.address)
        with self._lock:
            if label.name:
                owner = self._names.get(label.name)
                if owner is not None and owner != key:
                    existing = self._labels[owner]
                    raise LabelStoreError(f"label name {label.name!r} already used at {existing.describe()}")
            previous = self._labels.get(key)
            if previous is not None and previous.name:
                self._names.pop(previous.name, None)
            self._labels[key] = label
            if label.name:
                self._names[label.name] = key
        if previous is None:
            change = LabelChange(CHANGE_ADDED, label)
        else:
            change = LabelChange(CHANGE_UPDATED, label, previous)
        LOGGER.debug("%s label %s %r", change.kind, label.describe(), label.name)
        self._notify(change)
        return change

    def delete(self, region: MemoryRegion, address: int) -> Optional[CodeLabel]:
        with self._lock:
            removed = self._labels.pop((region, address), None)
            if removed is not None and removed.name:
                self._names.pop(removed.name, None)
        if removed is None:
            return None
        LOGGER.debug("removed label %s %r", removed.describe(), removed.name)
        self._notify(LabelChange(CHANGE_REMOVED, previous=removed))
        return removed

    def clear(self) -> None:
        with self._lock:
            self._labels.clear()
            self._names.clear()
        self._notify(LabelChange(CHANGE_CLEARED))

    # -- queries ---------------------------------------------------------

    def get(self, region: MemoryRegion, address: int) -> Optional[CodeLabel]:
        with self._lock:
            return self._labels.get((region, address))

    def find(self, region: MemoryRegion, address: int) -> Optional[CodeLabel]:
        """Return the label starting at or covering *address*."""
        exact = self.get(region, address)
        if exact is not None:
            return exact
        with self._lock:
            candidates = [label for label in self._labels.values() if label.region is region]
        for label in sorted(candidates, key=_sort_key):
            if label.contains(address):
                return label
        return None

    def get_by_name(self, name: str) -> Optional[CodeLabel]:
        with self._lock:
            key = self._names.get(name)
            return self._labels.get(key) if key is not None else None

    def labels(self, cpu_type: Optional[CpuType] = None) -> List[CodeLabel]:
        with self._lock:
            snapshot = list(self._labels.values())
        if cpu_type is not None:
            snapshot = list(labels_for_processor(snapshot, cpu_type))
        return sorted(snapshot, key=_sort_key)

    # -- line format -----------------------------------------------------

    def load_lines(self, lines: Union[str, Iterable[str]]) -> int:
        """Decode *lines* into the store; returns the number of labels added or updated.

        Undecodable lines are skipped.  A decoded label whose name collides with
        another label is skipped too, with a warning.
        """
        count = 0
        for label in decode_lines(lines, self.validator):
            try:
                self.set_label(label)
            except LabelStoreError as exc:
                LOGGER.warning("skipping label %s: %s", label.describe(), exc)
                continue
            count += 1
        return count

    def dump_lines(self) -> List[str]:
        return encode_lines(self.labels())
