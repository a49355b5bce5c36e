"""Rasterized previews of a gallery layout built with Pillow."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING

from PIL import Image, ImageDraw, ImageFont, ImageOps

from justified_gallery.constants import (
    COLOR_BLACK,
    COLOR_PLACEHOLDER,
    COLOR_WHITE,
)
from justified_gallery.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from justified_gallery.type_defs import GalleryLayout, PlacedImage

_RGB = tuple[int, int, int]

_LABEL_FRACTION = 0.2             # label size relative to row height
_MIN_LABEL_PX = 10


@dataclass(frozen=True)
class PreviewParams:
    """Appearance configuration for a layout preview."""

    bg_color: _RGB = COLOR_WHITE
    placeholder_color: _RGB = COLOR_PLACEHOLDER
    outline_color: _RGB = COLOR_BLACK
    label_fill: _RGB = COLOR_BLACK
    show_labels: bool = True
    # Paste local image files into their boxes when Pillow can open them
    load_images: bool = False


@lru_cache(maxsize=8)
def _get_font(px: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Load a font at the given pixel size with fallback; cached."""
    try:
        return ImageFont.truetype("DejaVuSans.ttf", px)
    except OSError:
        return ImageFont.load_default()


def _box(x: float, y: float, w: float, h: float) -> tuple[int, int, int, int]:
    """Round a float rectangle to inclusive pixel bounds."""
    x0, y0 = round(x), round(y)
    x1 = max(x0, round(x + w) - 1)
    y1 = max(y0, round(y + h) - 1)
    return x0, y0, x1, y1


def _load_fitted(src: str, size: tuple[int, int]) -> Image.Image | None:
    """Open a local image and crop-fit it to ``size``; None on failure."""
    if not Path(src).is_file():
        return None
    try:
        with Image.open(src) as img:
            return ImageOps.fit(
                img.convert("RGB"),
                size,
                method=Image.Resampling.LANCZOS,
                centering=(0.5, 0.5),
            )
    except OSError as exc:
        logger.warning("Could not load preview image %s: %s", src, exc)
        return None


def _draw_item(  # noqa: PLR0913
    canvas: Image.Image,
    draw: ImageDraw.ImageDraw,
    placed: PlacedImage,
    bounds: tuple[int, int, int, int],
    label: str,
    params: PreviewParams,
) -> None:
    x0, y0, x1, y1 = bounds
    size = (x1 - x0 + 1, y1 - y0 + 1)
    picture = (
        _load_fitted(placed.image.src, size) if params.load_images else None
    )
    if picture is not None:
        canvas.paste(picture, (x0, y0))
        return

    draw.rectangle(
        bounds, fill=params.placeholder_color, outline=params.outline_color,
    )
    if params.show_labels:
        px = max(_MIN_LABEL_PX, int(size[1] * _LABEL_FRACTION))
        font = _get_font(px)
        text_box = draw.textbbox((0, 0), label, font=font)
        text_w = text_box[2] - text_box[0]
        text_h = text_box[3] - text_box[1]
        draw.text(
            (x0 + (size[0] - text_w) // 2, y0 + (size[1] - text_h) // 2),
            label,
            font=font,
            fill=params.label_fill,
        )


def render_preview(
    layout: GalleryLayout,
    params: PreviewParams | None = None,
) -> Image.Image:
    """
    Draw every placed image as a box at its layout position.

    Boxes are numbered in gallery order. The canvas spans the container
    width and the layout's total height, including gaps between rows.
    """
    params = params or PreviewParams()
    width = max(1, round(layout.container_width))
    height = max(1, round(layout.total_height))
    canvas = Image.new("RGB", (width, height), params.bg_color)
    draw = ImageDraw.Draw(canvas)

    number = 1
    y = 0.0
    for row in layout.rows:
        x = 0.0
        for placed in row.images:
            bounds = _box(x, y, placed.display_width, placed.display_height)
            _draw_item(canvas, draw, placed, bounds, str(number), params)
            x += placed.display_width + layout.gap
            number += 1
        y += row.height + layout.gap
    return canvas


def _ensure_png(path: Path) -> Path:
    """Return a path that ends with ``.png`` for output consistency."""
    return path if path.suffix.lower() == ".png" else path.with_suffix(".png")


def save_preview(
    layout: GalleryLayout,
    out_path: Path,
    params: PreviewParams | None = None,
) -> Path:
    """Render a preview and save it as PNG; return the saved path."""
    target = _ensure_png(Path(out_path))
    target.parent.mkdir(parents=True, exist_ok=True)
    render_preview(layout, params).save(target)
    return target
