"""
Defines shared types for the justified gallery.

Centralizes the plain-data records passed between the probe, the layout
engine and the renderers so every component speaks the same vocabulary.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ImageFormat = Literal["png", "jpeg", "webp", "unknown"]
BreakpointName = Literal["sm", "md", "xl"]


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """Pixel dimensions and container format recovered from header bytes."""

    width: int = 0
    height: int = 0
    format: ImageFormat = "unknown"

    @property
    def is_known(self) -> bool:
        """Return True when a supported header was recognized."""
        return self.format != "unknown"


UNKNOWN_PROBE_RESULT = ProbeResult()


@dataclass(frozen=True, slots=True)
class ImageDescriptor:
    """
    One gallery item.

    ``raw_width``/``raw_height`` are the supplied or probed pixel sizes
    (0 means unknown). ``normalized_width``/``normalized_height`` are
    derived on every layout pass and only drive packing.
    """

    src: str
    preview: str = ""
    raw_width: int = 0
    raw_height: int = 0
    normalized_width: float = 0.0
    normalized_height: float = 0.0
    alt: str | None = None
    title: str | None = None

    def __post_init__(self) -> None:
        """Default the preview URL to the full-resolution one."""
        if not self.preview:
            object.__setattr__(self, "preview", self.src)

    @property
    def aspect_ratio(self) -> float:
        """Normalized width over height, or 1 when height is unset."""
        if self.normalized_height <= 0:
            return 1.0
        return self.normalized_width / self.normalized_height


Row = tuple[ImageDescriptor, ...]


@dataclass(frozen=True, slots=True)
class PlacedImage:
    """An image with its resolved on-screen size."""

    image: ImageDescriptor
    display_width: float
    display_height: float


@dataclass(frozen=True, slots=True)
class LaidOutRow:
    """A packed row whose members share one display height."""

    images: tuple[PlacedImage, ...]

    @property
    def height(self) -> float:
        """Uniform display height of the row."""
        return self.images[0].display_height if self.images else 0.0

    def total_width(self, gap: float) -> float:
        """Return summed display widths plus inner gaps."""
        widths = sum(placed.display_width for placed in self.images)
        return widths + gap * max(0, len(self.images) - 1)


@dataclass(frozen=True, slots=True)
class GalleryLayout:
    """The full layout artifact handed to a renderer."""

    rows: tuple[LaidOutRow, ...]
    container_width: float
    target_row_height: float
    breakpoint: BreakpointName
    gap: float

    @property
    def image_count(self) -> int:
        """Number of images placed across all rows."""
        return sum(len(row.images) for row in self.rows)

    @property
    def total_height(self) -> float:
        """Summed row heights plus the gaps between rows."""
        heights = sum(row.height for row in self.rows)
        return heights + self.gap * max(0, len(self.rows) - 1)
