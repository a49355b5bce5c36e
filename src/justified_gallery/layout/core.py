"""Core layout primitives: normalization, breakpoints and row solving."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from justified_gallery.constants import (
    BREAKPOINT_MD_MIN_WIDTH,
    BREAKPOINT_XL_MIN_WIDTH,
)
from justified_gallery.type_defs import (
    BreakpointName,
    ImageDescriptor,
    LaidOutRow,
    PlacedImage,
)

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from justified_gallery.config import GalleryConfig


def normalize_dimensions(
    raw_width: float,
    raw_height: float,
    config: GalleryConfig,
) -> tuple[float, float]:
    """
    Reconcile raw pixel sizes with fallbacks and the aspect clamp.

    A zero width or height is replaced independently by the configured
    fallback. The aspect ratio is then clamped into
    ``[min_image_ratio, max_image_ratio]`` by adjusting the width only.

    Raises:
        ValueError: If a raw dimension is negative or the resulting
            height is not positive.

    """
    if raw_width < 0 or raw_height < 0:
        msg = (
            "Image dimensions must be non-negative, "
            f"got {raw_width}x{raw_height}"
        )
        raise ValueError(msg)

    width = float(raw_width or config.fallback_image_width)
    height = float(raw_height or config.fallback_image_height)
    if height <= 0:
        msg = "Normalized image height must be positive"
        raise ValueError(msg)

    ratio = width / height
    if ratio > config.max_image_ratio:
        width = config.max_image_ratio * height
    elif ratio < config.min_image_ratio:
        width = config.min_image_ratio * height
    return width, height


def normalize_image(
    image: ImageDescriptor,
    config: GalleryConfig,
) -> ImageDescriptor:
    """Return a copy of ``image`` with freshly derived normalized size."""
    width, height = normalize_dimensions(
        image.raw_width, image.raw_height, config,
    )
    return replace(image, normalized_width=width, normalized_height=height)


def select_breakpoint(observed_width: float | None) -> BreakpointName:
    """Pick the breakpoint band for an observed width."""
    if observed_width is None:
        return "sm"
    if observed_width >= BREAKPOINT_XL_MIN_WIDTH:
        return "xl"
    if observed_width >= BREAKPOINT_MD_MIN_WIDTH:
        return "md"
    return "sm"


def breakpoint_ratio(config: GalleryConfig, name: BreakpointName) -> float:
    """Return the row-height ratio configured for ``name``."""
    if name == "xl":
        return config.row_height_xl
    if name == "md":
        return config.row_height_md
    return config.row_height_sm


def target_row_height(
    config: GalleryConfig,
    container_width: float,
    observed_width: float | None = None,
) -> float:
    """Target row height at the active breakpoint, in pixels."""
    observed = container_width if observed_width is None else observed_width
    ratio = breakpoint_ratio(config, select_breakpoint(observed))
    return ratio * container_width


def layout_row(  # noqa: PLR0913
    row: Sequence[ImageDescriptor],
    container_width: float,
    *,
    gap: float,
    is_last_row: bool,
    stretch_last_row: bool,
    target_row_height: float,
) -> LaidOutRow:
    """
    Solve one row's height and each member's display width.

    The row height makes the members plus inner gaps span the container.
    A stretched final row that would grow taller than the target is
    capped at the target by widening every member proportionally, so it
    still spans the container. A non-stretched final row is capped at the
    target and left under-filled.
    """
    available_width = container_width - (len(row) - 1) * gap
    ratios = [
        image.normalized_width / image.normalized_height for image in row
    ]
    row_height = available_width / sum(ratios)

    if is_last_row and stretch_last_row:
        if row_height > target_row_height:
            shrink_ratio = row_height / target_row_height
            ratios = [ratio * shrink_ratio for ratio in ratios]
            row_height = target_row_height
    elif is_last_row:
        row_height = min(row_height, target_row_height)

    return LaidOutRow(images=tuple(
        PlacedImage(
            image=image,
            display_width=ratio * row_height,
            display_height=row_height,
        )
        for image, ratio in zip(row, ratios, strict=True)
    ))
