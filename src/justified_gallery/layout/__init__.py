"""
Justified-row layout split into core primitives, packing and orchestration.

The package exposes the most commonly used entry points directly so
callers rarely need the submodules.
"""

from __future__ import annotations

from . import core, engine, packing
from .core import (
    breakpoint_ratio,
    layout_row,
    normalize_dimensions,
    normalize_image,
    select_breakpoint,
    target_row_height,
)
from .engine import compute_layout
from .packing import pack_rows

__all__ = [
    "breakpoint_ratio",
    "compute_layout",
    "core",
    "engine",
    "layout_row",
    "normalize_dimensions",
    "normalize_image",
    "pack_rows",
    "packing",
    "select_breakpoint",
    "target_row_height",
]
