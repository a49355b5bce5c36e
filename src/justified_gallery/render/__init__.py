"""Renderers that materialize a GalleryLayout as markup or an image."""

from __future__ import annotations

from .html import render_html, save_html
from .preview import PreviewParams, render_preview, save_preview

__all__ = [
    "PreviewParams",
    "render_html",
    "render_preview",
    "save_html",
    "save_preview",
]
