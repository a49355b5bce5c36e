"""Public package exports for the justified gallery."""

from __future__ import annotations

from .config import GalleryConfig, merge_options
from .gallery import Gallery, GalleryRenderOptions, render_gallery
from .layout import compute_layout
from .probe import probe_image_header
from .type_defs import GalleryLayout, ImageDescriptor, ProbeResult

__all__ = [
    "Gallery",
    "GalleryConfig",
    "GalleryLayout",
    "GalleryRenderOptions",
    "ImageDescriptor",
    "ProbeResult",
    "compute_layout",
    "merge_options",
    "probe_image_header",
    "render_gallery",
]
