"""
Reusable gallery rendering API shared by the CLI and tests.

The module exposes a dataclass-based options object alongside helpers
for parsing CLI-style arguments and image list files. Layout work is
delegated to :mod:`justified_gallery.layout` and output to the
renderers in :mod:`justified_gallery.render`, so callers get a single
entry point regardless of which outputs they need.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomlkit
from tomlkit.exceptions import ParseError

from justified_gallery.config import GalleryConfig
from justified_gallery.layout import compute_layout
from justified_gallery.logging_utils import logger
from justified_gallery.probe import fill_missing_dimensions
from justified_gallery.random_utils import (
    current_numpy_seed,
    seed_numpy_rng,
    shuffle_images,
)
from justified_gallery.render import (
    PreviewParams,
    save_html,
    save_preview,
)
from justified_gallery.runtime import validate_image_list_path
from justified_gallery.sources import collect_images
from justified_gallery.type_defs import ImageDescriptor

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from justified_gallery.type_defs import GalleryLayout

_MARKUP_SUFFIXES = (".html", ".htm")
_TOML_SUFFIX = ".toml"
_OPTION_SEPARATOR = "="


@dataclass(slots=True)
class GalleryRenderOptions:
    """Configuration for a one-shot gallery render."""

    sources: list[Any] = field(default_factory=list)
    container_width: float = 1200.0
    observed_width: float | None = None
    config: GalleryConfig = field(default_factory=GalleryConfig)
    html_out: Path | None = None
    preview_out: Path | None = None
    load_preview_images: bool = False
    seed: int | None = None
    progress: bool = False


def positive_float(text: str) -> float:
    """Argparse-style validator that enforces a strictly positive number."""
    try:
        value = float(text)
    except ValueError as exc:
        msg = "must be a number"
        raise ValueError(msg) from exc
    if value <= 0:
        msg = "must be positive"
        raise ValueError(msg)
    return value


def parse_option_override(text: str) -> tuple[str, Any]:
    """
    Parse ``key=value`` into a key and a TOML-typed value.

    Values are read as TOML scalars (``4``, ``1.5``, ``true``); anything
    that is not valid TOML is kept as a plain string.
    """
    key, sep, raw = text.partition(_OPTION_SEPARATOR)
    key = key.strip()
    if not sep or not key:
        msg = "option must look like key=value, e.g., gap=8"
        raise ValueError(msg)
    try:
        value = tomlkit.parse(f"value = {raw.strip()}").unwrap()["value"]
    except ParseError:
        value = raw.strip()
    return key, value


def load_image_list(path: str | Path) -> list[Any]:
    """
    Read an image list file.

    ``.toml`` files hold ``[[images]]`` tables, ``.html`` files hold
    ``<img>`` markup, and anything else is one URL per line (blank lines
    and ``#`` comments skipped).
    """
    validate_image_list_path(path)
    list_path = Path(path)
    text = list_path.read_text(encoding="utf-8")
    suffix = list_path.suffix.lower()

    if suffix == _TOML_SUFFIX:
        doc = tomlkit.parse(text).unwrap()
        images = doc.get("images", [])
        if not isinstance(images, list):
            msg = f"'images' in {path} must be an array of tables"
            raise ValueError(msg)
        return images
    if suffix in _MARKUP_SUFFIXES:
        return [text]
    return [
        line.strip() for line in text.splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    ]


def _collect_sources(sources: Sequence[Any]) -> list[ImageDescriptor]:
    """Turn URLs, records, markup and descriptors into descriptors."""
    images: list[ImageDescriptor] = []
    for source in sources:
        if isinstance(source, ImageDescriptor):
            images.append(source)
        elif isinstance(source, str):
            images.extend(collect_images(source))
        else:
            images.extend(collect_images([source]))
    return images


def render_gallery(options: GalleryRenderOptions) -> GalleryLayout:
    """
    Lay out the images described by ``options`` and write any outputs.

    Dimensions are probed first when the config asks for it, then the
    images are shuffled if enabled (reproducibly when ``seed`` is set),
    laid out, and saved as HTML and/or a PNG preview. Returns the
    computed layout.
    """
    images = _collect_sources(options.sources)
    config = options.config

    if config.retrieve_dimensions:
        images = fill_missing_dimensions(
            images,
            timeout=config.probe_timeout,
            max_workers=config.probe_workers,
            progress=options.progress,
        )

    if config.shuffle_images:
        rng = None if options.seed is None else seed_numpy_rng(options.seed)
        images = shuffle_images(images, rng)
        logger.info(
            "Shuffled %d images (seed %s)", len(images), current_numpy_seed(),
        )

    layout = compute_layout(
        images,
        options.container_width,
        config,
        observed_width=options.observed_width,
    )
    logger.info(
        "Laid out %d images in %d rows at %s breakpoint",
        layout.image_count,
        len(layout.rows),
        layout.breakpoint,
    )

    if options.html_out is not None:
        saved = save_html(layout, options.html_out)
        logger.info("Gallery markup saved to: %s", saved)
    if options.preview_out is not None:
        saved = save_preview(
            layout,
            options.preview_out,
            PreviewParams(load_images=options.load_preview_images),
        )
        logger.info("Gallery preview saved to: %s", saved)
    return layout


__all__ = [
    "GalleryRenderOptions",
    "load_image_list",
    "parse_option_override",
    "positive_float",
    "render_gallery",
]
