"""Greedy partitioning of images into justified rows."""

from __future__ import annotations

from typing import TYPE_CHECKING

from justified_gallery.type_defs import ImageDescriptor, Row

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

_LONE_LEFTOVER = 1
_PAIR_LEFTOVER = 2


def _scaled_width(image: ImageDescriptor, target_row_height: float) -> float:
    """Width of ``image`` when drawn at the target row height."""
    return image.aspect_ratio * target_row_height


def pack_rows(  # noqa: PLR0913
    images: Sequence[ImageDescriptor],
    container_width: float,
    target_row_height: float,
    *,
    gap: float,
    max_rows: int = 0,
    stretch_last_row: bool = True,
) -> list[Row]:
    """
    Partition ``images`` into rows in a single left-to-right pass.

    An image joins the current row while the projected width stays under
    the container, or when overshooting the container by adding it is a
    smaller error than the gap left by closing the row without it. An
    empty row always accepts, so an oversized image gets a row of its own.
    Packing stops once ``max_rows`` rows are closed (0 means unlimited);
    the image that triggered the last closure is dropped with the rest.
    """
    rows: list[list[ImageDescriptor]] = []
    current: list[ImageDescriptor] = []
    current_width = 0.0

    for image in images:
        scaled = _scaled_width(image, target_row_height)
        projected = current_width + scaled + len(current) * gap

        fits = not current or projected < container_width
        overshoot_is_closer = (
            projected > container_width
            and projected - container_width < container_width - current_width
        )
        if fits or overshoot_is_closer:
            current.append(image)
            current_width += scaled
            continue

        rows.append(list(current))
        if max_rows > 0 and len(rows) >= max_rows:
            current = []
            break
        current = [image]
        current_width = scaled

    if current:
        if stretch_last_row:
            _redistribute_trailing_row(rows, current)
        else:
            rows.append(current)

    return [tuple(row) for row in rows]


def _redistribute_trailing_row(
    rows: list[list[ImageDescriptor]],
    trailing: list[ImageDescriptor],
) -> None:
    """
    Fold a short trailing row into the rows above it, in place.

    A single leftover joins the previous row. A leftover pair takes the
    last image of the previous row so the tail reads ``(k-1, 3)`` rather
    than ``(k, 2)``; this needs at least two closed rows and a previous
    row that keeps one image after giving one up. Three or more leftovers
    stay as their own row.
    """
    if len(trailing) == _LONE_LEFTOVER and rows:
        rows[-1].append(trailing[0])
        return

    if (
        len(trailing) == _PAIR_LEFTOVER
        and len(rows) >= _PAIR_LEFTOVER
        and len(rows[-1]) > 1
    ):
        rows.append([rows[-1].pop(), *trailing])
        return

    rows.append(list(trailing))
