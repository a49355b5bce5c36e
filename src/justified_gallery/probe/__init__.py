"""Image header probing and best-effort prefix retrieval."""

from __future__ import annotations

from .fetch import (
    FetchError,
    fetch_dimensions,
    fetch_image_prefix,
    fill_missing_dimensions,
    probe_source,
    read_image_prefix,
)
from .headers import probe_image_header, read_uint24

__all__ = [
    "FetchError",
    "fetch_dimensions",
    "fetch_image_prefix",
    "fill_missing_dimensions",
    "probe_image_header",
    "probe_source",
    "read_image_prefix",
    "read_uint24",
]
