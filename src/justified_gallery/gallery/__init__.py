"""Public gallery API re-exports."""

from __future__ import annotations

from .api import (
    GalleryRenderOptions,
    load_image_list,
    parse_option_override,
    positive_float,
    render_gallery,
)
from .controller import Gallery

__all__ = [
    "Gallery",
    "GalleryRenderOptions",
    "load_image_list",
    "parse_option_override",
    "positive_float",
    "render_gallery",
]
