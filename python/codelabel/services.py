"""Debugger-facing helpers for code labels.

Labels do not talk to an emulator themselves.  Address translation and live
memory reads are supplied by the caller through the small protocols below, so
the same label values work with a running debugger, a saved memory image, or a
test double.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Protocol

from .record import CodeLabel
from .regions import CpuType, MemoryRegion, is_register_space, region_matches_processor


@dataclass(frozen=True)
class AddressInfo:
    address: int
    region: MemoryRegion


class AddressTranslator(Protocol):
    def relative_address(self, info: AddressInfo, cpu_type: CpuType) -> AddressInfo:
        ...


class MemoryReader(Protocol):
    def read_byte(self, region: MemoryRegion, address: int) -> int:
        ...


def absolute_address(label: CodeLabel) -> AddressInfo:
    return AddressInfo(address=label.address, region=label.region)


def relative_address(label: CodeLabel, cpu_type: CpuType, translator: AddressTranslator) -> AddressInfo:
    """Map the label start into *cpu_type*'s view of memory.

    Register spaces are already processor-relative and are returned as-is.
    """
    info = absolute_address(label)
    if is_register_space(label.region):
        return info
    return translator.relative_address(info, cpu_type)


def label_value(label: CodeLabel, reader: MemoryReader) -> int:
    """Current byte at the label's start address."""
    return int(reader.read_byte(label.region, label.address)) & 0xFF


def labels_for_processor(labels: Iterable[CodeLabel], cpu_type: CpuType) -> Iterator[CodeLabel]:
    for label in labels:
        if region_matches_processor(label.region, cpu_type):
            yield label
