"""
codelabel - code labels for SNES / Game Boy debugging sessions.

A label names an address or inclusive address range in one of the emulated
machine's memory regions and may carry a free-form comment.  Labels persist
as one line of text each::

    PRG:8000-800F:reset_vector:entry point\\nruns after power on

    regions.py  → region tag table and processor affinity
    naming.py   → label name grammar
    record.py   → CodeLabel value type
    codec.py    → line encoder / decoder
    services.py → address translation and live-value hooks
    store.py    → label collection with change subscribers
    cli.py      → interactive shell (``python -m codelabel``)
"""

from .errors import LabelError, LabelStoreError  # noqa: F401
from .regions import (  # noqa: F401
    CpuType,
    MemoryRegion,
    REGION_TAGS,
    TAG_REGIONS,
    cpu_type_for_region,
    region_for_tag,
    region_matches_processor,
    tag_for_region,
)
from .naming import DEFAULT_NAME_VALIDATOR, LabelNameValidator, NameValidator  # noqa: F401
from .record import CodeLabel, CodeLabelFlags  # noqa: F401
from .codec import decode_label, decode_lines, encode_label, encode_lines  # noqa: F401
from .store import LabelChange, LabelStore  # noqa: F401

__all__ = [
    "LabelError",
    "LabelStoreError",
    "CpuType",
    "MemoryRegion",
    "REGION_TAGS",
    "TAG_REGIONS",
    "cpu_type_for_region",
    "region_for_tag",
    "region_matches_processor",
    "tag_for_region",
    "NameValidator",
    "LabelNameValidator",
    "DEFAULT_NAME_VALIDATOR",
    "CodeLabel",
    "CodeLabelFlags",
    "encode_label",
    "decode_label",
    "encode_lines",
    "decode_lines",
    "LabelStore",
    "LabelChange",
]

__version__ = "0.1.0"
