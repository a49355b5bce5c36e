"""Layout orchestration: normalize, pick a breakpoint, pack and solve."""

from __future__ import annotations

from typing import TYPE_CHECKING

from justified_gallery.layout.core import (
    breakpoint_ratio,
    layout_row,
    normalize_image,
    select_breakpoint,
)
from justified_gallery.layout.packing import pack_rows
from justified_gallery.logging_utils import logger
from justified_gallery.runtime.validation import validate_container_width
from justified_gallery.type_defs import GalleryLayout

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from justified_gallery.config import GalleryConfig
    from justified_gallery.type_defs import ImageDescriptor


def compute_layout(
    images: Sequence[ImageDescriptor],
    container_width: float,
    config: GalleryConfig,
    *,
    observed_width: float | None = None,
) -> GalleryLayout:
    """
    Compute the full justified layout for ``images``.

    ``observed_width`` selects the breakpoint (window or container width,
    depending on the caller) and defaults to ``container_width``. Every
    call recomputes normalized sizes and rows from scratch.
    """
    validate_container_width(container_width)

    normalized = [normalize_image(image, config) for image in images]
    observed = container_width if observed_width is None else observed_width
    breakpoint_name = select_breakpoint(observed)
    row_height = breakpoint_ratio(config, breakpoint_name) * container_width

    rows = pack_rows(
        normalized,
        container_width,
        row_height,
        gap=config.gap,
        max_rows=config.max_rows,
        stretch_last_row=config.stretch_last_row,
    )
    last_index = len(rows) - 1
    laid_out = tuple(
        layout_row(
            row,
            container_width,
            gap=config.gap,
            is_last_row=index == last_index,
            stretch_last_row=config.stretch_last_row,
            target_row_height=row_height,
        )
        for index, row in enumerate(rows)
    )

    logger.debug(
        "Laid out %d images in %d rows (breakpoint %s, target height %.1f)",
        sum(len(row) for row in rows),
        len(rows),
        breakpoint_name,
        row_height,
    )
    return GalleryLayout(
        rows=laid_out,
        container_width=container_width,
        target_row_height=row_height,
        breakpoint=breakpoint_name,
        gap=config.gap,
    )
