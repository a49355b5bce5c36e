"""HTML markup for a gallery layout using percentage flex widths."""

from __future__ import annotations

from html import escape
from pathlib import Path
from typing import TYPE_CHECKING

from justified_gallery.constants import HTML_ITEM_CLASS, HTML_ROW_CLASS

if TYPE_CHECKING:  # pragma: no cover
    from justified_gallery.type_defs import (
        GalleryLayout,
        LaidOutRow,
        PlacedImage,
    )


def _number(value: float) -> str:
    """Format a float compactly for inline styles."""
    return f"{value:.6g}"


def _render_image(placed: PlacedImage) -> str:
    image = placed.image
    attrs = [
        f'src="{escape(image.preview)}"',
        'loading="lazy"',
        f'data-src="{escape(image.src)}"',
    ]
    if image.alt:
        attrs.append(f'alt="{escape(image.alt)}"')
    if image.title:
        attrs.append(f'title="{escape(image.title)}"')
    return f'<img {" ".join(attrs)}>'


def _render_item(
    placed: PlacedImage,
    container_width: float,
    gap: float,
    *,
    last_in_row: bool,
) -> str:
    percent = placed.display_width / container_width * 100
    styles = [f"flex: 0 1 {_number(percent)}%"]
    if not last_in_row:
        styles.append(f"margin-right: {_number(gap)}px")
    return (
        f'<div class="{HTML_ITEM_CLASS}" style="{"; ".join(styles)}">'
        f"{_render_image(placed)}</div>"
    )


def _render_row(
    row: LaidOutRow,
    layout: GalleryLayout,
    *,
    last_row: bool,
) -> str:
    styles = [
        "display: flex",
        f"aspect-ratio: {_number(layout.container_width / row.height)}",
    ]
    if not last_row:
        styles.append(f"margin-bottom: {_number(layout.gap)}px")
    items = "".join(
        _render_item(
            placed,
            layout.container_width,
            layout.gap,
            last_in_row=index == len(row.images) - 1,
        )
        for index, placed in enumerate(row.images)
    )
    style = "; ".join(styles)
    return f'<div class="{HTML_ROW_CLASS}" style="{style}">{items}</div>'


def render_html(layout: GalleryLayout) -> str:
    """
    Render ``layout`` as a sequence of row ``<div>`` elements.

    Item widths are percentages of the container so the markup scales
    with it; rows keep their shape through ``aspect-ratio``.
    """
    last_index = len(layout.rows) - 1
    return "\n".join(
        _render_row(row, layout, last_row=index == last_index)
        for index, row in enumerate(layout.rows)
    )


def save_html(layout: GalleryLayout, out_path: Path) -> Path:
    """Write the rendered markup to ``out_path`` and return it."""
    target = Path(out_path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(render_html(layout) + "\n", encoding="utf-8")
    return target
