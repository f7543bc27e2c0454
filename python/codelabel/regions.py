"""Memory region vocabulary for code labels.

Each label lives in one of a fixed set of memory regions.  The persisted line
format identifies the region with a short uppercase tag; the mapping between
tags and :class:`MemoryRegion` members is bijective and never changes at
runtime, so it is exposed as read-only mappings built at import time.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .errors import LabelError


class CpuType(Enum):
    CPU = "cpu"
    SPC = "spc"
    NEC_DSP = "necdsp"
    SA1 = "sa1"
    GAMEBOY = "gameboy"

    @classmethod
    def from_any(cls, value: Any) -> "CpuType":
        if isinstance(value, CpuType):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key in (member.value, member.name.lower()):
                    return member
        raise LabelError(f"unknown cpu type: {value!r}")


class MemoryRegion(Enum):
    REGISTER = "register"
    PRG_ROM = "prg_rom"
    WORK_RAM = "work_ram"
    SAVE_RAM = "save_ram"
    SA1_INTERNAL_RAM = "sa1_iram"
    SPC_RAM = "spc_ram"
    SPC_ROM = "spc_rom"
    BSX_PSRAM = "bsx_psram"
    BSX_MEMORY_PACK = "bsx_mpack"
    DSP_PROGRAM_ROM = "dsp_prg_rom"
    GB_PRG_ROM = "gb_prg_rom"
    GB_WORK_RAM = "gb_work_ram"
    GB_CART_RAM = "gb_cart_ram"
    GB_HIGH_RAM = "gb_high_ram"
    GB_BOOT_ROM = "gb_boot_rom"
    GB_REGISTER = "gb_register"

    @property
    def tag(self) -> str:
        return tag_for_region(self)

    @property
    def cpu_type(self) -> CpuType:
        return cpu_type_for_region(self)


_TAGS: Dict[MemoryRegion, str] = {
    MemoryRegion.REGISTER: "REG",
    MemoryRegion.PRG_ROM: "PRG",
    MemoryRegion.WORK_RAM: "WORK",
    MemoryRegion.SAVE_RAM: "SAVE",
    MemoryRegion.SA1_INTERNAL_RAM: "IRAM",
    MemoryRegion.SPC_RAM: "SPCRAM",
    MemoryRegion.SPC_ROM: "SPCROM",
    MemoryRegion.BSX_PSRAM: "PSRAM",
    MemoryRegion.BSX_MEMORY_PACK: "MPACK",
    MemoryRegion.DSP_PROGRAM_ROM: "DSPPRG",
    MemoryRegion.GB_PRG_ROM: "GBPRG",
    MemoryRegion.GB_WORK_RAM: "GBWRAM",
    MemoryRegion.GB_CART_RAM: "GBSRAM",
    MemoryRegion.GB_HIGH_RAM: "GBHRAM",
    MemoryRegion.GB_BOOT_ROM: "GBBOOT",
    MemoryRegion.GB_REGISTER: "GBREG",
}

_CPU_TYPES: Dict[MemoryRegion, CpuType] = {
    MemoryRegion.REGISTER: CpuType.CPU,
    MemoryRegion.PRG_ROM: CpuType.CPU,
    MemoryRegion.WORK_RAM: CpuType.CPU,
    MemoryRegion.SAVE_RAM: CpuType.CPU,
    MemoryRegion.SA1_INTERNAL_RAM: CpuType.SA1,
    MemoryRegion.SPC_RAM: CpuType.SPC,
    MemoryRegion.SPC_ROM: CpuType.SPC,
    MemoryRegion.BSX_PSRAM: CpuType.CPU,
    MemoryRegion.BSX_MEMORY_PACK: CpuType.CPU,
    MemoryRegion.DSP_PROGRAM_ROM: CpuType.NEC_DSP,
    MemoryRegion.GB_PRG_ROM: CpuType.GAMEBOY,
    MemoryRegion.GB_WORK_RAM: CpuType.GAMEBOY,
    MemoryRegion.GB_CART_RAM: CpuType.GAMEBOY,
    MemoryRegion.GB_HIGH_RAM: CpuType.GAMEBOY,
    MemoryRegion.GB_BOOT_ROM: CpuType.GAMEBOY,
    MemoryRegion.GB_REGISTER: CpuType.GAMEBOY,
}

_REGISTER_SPACES = frozenset({MemoryRegion.REGISTER, MemoryRegion.GB_REGISTER})

REGION_TAGS: Mapping[MemoryRegion, str] = MappingProxyType(_TAGS)
TAG_REGIONS: Mapping[str, MemoryRegion] = MappingProxyType({tag: region for region, tag in _TAGS.items()})

# Table must be total over the enum and bijective.
assert set(REGION_TAGS) == set(MemoryRegion), "region tag table is not total"
assert len(TAG_REGIONS) == len(REGION_TAGS), "region tags are not unique"
assert set(_CPU_TYPES) == set(MemoryRegion), "cpu affinity table is not total"


def tag_for_region(region: MemoryRegion) -> str:
    """Return the canonical line-format tag for *region*."""
    return REGION_TAGS[region]


def region_for_tag(tag: str) -> Optional[MemoryRegion]:
    """Exact, case-sensitive tag lookup; ``None`` for unknown tags."""
    return TAG_REGIONS.get(tag)


def cpu_type_for_region(region: MemoryRegion) -> CpuType:
    return _CPU_TYPES[region]


def region_matches_processor(region: MemoryRegion, cpu_type: CpuType) -> bool:
    return cpu_type_for_region(region) is cpu_type


def is_register_space(region: MemoryRegion) -> bool:
    """Register spaces are addressed the same way the processor sees them."""
    return region in _REGISTER_SPACES


def parse_region(text: str) -> MemoryRegion:
    """Resolve user input (tag or member name, any case) to a region.

    Meant for interactive input only; the line codec uses
    :func:`region_for_tag`, which is strict.
    """
    if isinstance(text, MemoryRegion):
        return text
    key = str(text).strip()
    region = region_for_tag(key.upper())
    if region is not None:
        return region
    try:
        return MemoryRegion[key.upper()]
    except KeyError:
        pass
    for member in MemoryRegion:
        if member.value == key.lower():
            return member
    raise LabelError(f"unknown memory region: {text!r}")
