"""
Stateful gallery controller that re-renders on input changes.

The controller owns the current image list and configuration and hands
each freshly computed layout to a renderer callback. It recomputes the
whole layout on every change; width observations only trigger a render
when the active breakpoint changes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from justified_gallery.config import GalleryConfig, merge_options
from justified_gallery.layout import compute_layout, select_breakpoint
from justified_gallery.logging_utils import logger
from justified_gallery.probe import fill_missing_dimensions
from justified_gallery.random_utils import shuffle_images
from justified_gallery.sources import collect_images

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Mapping
    from typing import Any

    import numpy as np
    import requests

    from justified_gallery.sources import ImageSource
    from justified_gallery.type_defs import (
        BreakpointName,
        GalleryLayout,
        ImageDescriptor,
    )

    Renderer = Callable[[GalleryLayout], None]


class Gallery:
    """
    Holds images and options and produces layouts for a renderer.

    ``container_width`` is the width of the rendering surface; without it
    every operation is a no-op. ``window_width`` drives breakpoint
    selection when ``observe_window_width`` is enabled.
    """

    def __init__(  # noqa: PLR0913
        self,
        *,
        container_width: float | None,
        renderer: Renderer | None = None,
        config: GalleryConfig | None = None,
        window_width: float | None = None,
        session: requests.Session | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.container_width = container_width
        self.window_width = window_width
        self.renderer = renderer
        self.config = config or GalleryConfig()
        self.images: list[ImageDescriptor] = []
        self.layout: GalleryLayout | None = None
        self.last_breakpoint: BreakpointName | None = None
        self._session = session
        self._rng = rng

    @property
    def has_container(self) -> bool:
        """True when there is a surface to lay out into."""
        return self.container_width is not None and self.container_width > 0

    @property
    def observed_width(self) -> float | None:
        """Width used to pick the breakpoint."""
        if self.config.observe_window_width and self.window_width:
            return self.window_width
        return self.container_width

    def load(
        self,
        source: ImageSource,
        options: Mapping[str, Any] | None = None,
    ) -> GalleryLayout | None:
        """Merge ``options``, collect images and render the first layout."""
        if not self.has_container:
            logger.debug("No container to render into; skipping load")
            return None

        self.config = merge_options(self.config, options)
        self.images = self._collect(source)
        if self.config.shuffle_images:
            return self.shuffle()
        return self.render()

    def replace_images(self, source: ImageSource) -> GalleryLayout | None:
        """Swap in a new image list and re-render."""
        if not self.has_container:
            return None
        self.images = self._collect(source)
        return self.render()

    def shuffle(
        self,
        rng: np.random.Generator | None = None,
    ) -> GalleryLayout | None:
        """Randomly reorder the images and re-render."""
        if not self.has_container:
            return None
        self.images = shuffle_images(self.images, rng or self._rng)
        return self.render()

    def change_options(
        self,
        options: Mapping[str, Any],
    ) -> GalleryLayout | None:
        """Merge ``options`` into the current config and re-render."""
        if not self.has_container:
            return None
        self.config = merge_options(self.config, options)
        return self.render()

    def observe_width(
        self,
        *,
        window_width: float | None = None,
        container_width: float | None = None,
    ) -> GalleryLayout | None:
        """
        Record new widths; re-render if the breakpoint or container changed.

        Returns the new layout, or None when nothing was rendered.
        """
        if window_width is not None:
            self.window_width = window_width
        if container_width is not None:
            self.container_width = container_width
        if not self.has_container or not self.observed_width:
            return None

        same_container = (
            self.layout is not None
            and self.layout.container_width == self.container_width
        )
        if (
            same_container
            and select_breakpoint(self.observed_width) == self.last_breakpoint
        ):
            return None
        return self.render()

    def render(self) -> GalleryLayout | None:
        """Compute the layout from the current state and hand it over."""
        container_width = self.container_width
        if container_width is None or container_width <= 0:
            return None

        layout = compute_layout(
            self.images,
            container_width,
            self.config,
            observed_width=self.observed_width,
        )
        self.layout = layout
        self.last_breakpoint = layout.breakpoint
        if self.renderer is not None:
            self.renderer(layout)
        return layout

    def destroy(self) -> None:
        """Detach from the rendering surface; later calls do nothing."""
        self.container_width = None
        self.renderer = None
        self.layout = None

    def _collect(self, source: ImageSource) -> list[ImageDescriptor]:
        images = collect_images(source)
        if not self.config.retrieve_dimensions:
            return images
        return fill_missing_dimensions(
            images,
            session=self._session,
            timeout=self.config.probe_timeout,
            max_workers=self.config.probe_workers,
        )
