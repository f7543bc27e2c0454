"""Exception types shared across codelabel."""

from __future__ import annotations


class LabelError(ValueError):
    """Raised when a label value or user-supplied label field is invalid."""


class LabelStoreError(RuntimeError):
    """Raised when a change would leave the label store inconsistent."""
