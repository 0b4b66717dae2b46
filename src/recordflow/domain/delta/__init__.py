"""Attribute delta engine."""

from __future__ import annotations

from .engine import apply_delta, compute_delta, is_field_needed, reduce_to_delta

__all__ = [
    "apply_delta",
    "compute_delta",
    "is_field_needed",
    "reduce_to_delta",
]
