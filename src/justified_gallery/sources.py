"""
Conversion of caller-supplied image lists into ImageDescriptor records.

Accepts literal records (mappings), bare URL strings, or HTML markup
whose ``<img>`` elements may carry ``data-preview``, ``data-src``,
``data-width`` and ``data-height`` overrides.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from html.parser import HTMLParser
from typing import Any

from justified_gallery.logging_utils import logger
from justified_gallery.type_defs import ImageDescriptor

__all__ = [
    "ImageSource",
    "collect_images",
    "descriptor_from_item",
    "images_from_markup",
    "parse_dimension",
]

ImageSource = str | Iterable[str | Mapping[str, Any]]

_MARKUP_HINT = "<img"


def parse_dimension(value: object) -> int:
    """
    Parse a width or height value, returning 0 when it is unusable.

    Accepts ints, floats and numeric strings; fractional values are
    truncated.
    """
    if value is None or value == "":
        return 0
    try:
        parsed = int(float(str(value).strip()))
    except (ValueError, OverflowError):
        logger.warning("Ignoring invalid image dimension: %r", value)
        return 0
    if parsed < 0:
        logger.warning("Ignoring negative image dimension: %r", value)
        return 0
    return parsed


def _optional_text(value: object) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text or None


def descriptor_from_item(
    item: str | Mapping[str, Any],
) -> ImageDescriptor | None:
    """
    Build a descriptor from a URL string or a record.

    ``url`` stands in for a missing ``src``; ``src`` and ``preview``
    default to each other. Items without any URL yield None.
    """
    if isinstance(item, str):
        url = item.strip()
        return ImageDescriptor(src=url) if url else None

    src = str(item.get("src") or item.get("url") or "")
    preview = str(item.get("preview") or "")
    src = src or preview
    if not src:
        return None
    return ImageDescriptor(
        src=src,
        preview=preview or src,
        raw_width=parse_dimension(item.get("width")),
        raw_height=parse_dimension(item.get("height")),
        alt=_optional_text(item.get("alt")),
        title=_optional_text(item.get("title")),
    )


class _ImageTagParser(HTMLParser):
    """Collects one record per ``<img>`` element."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.records: list[dict[str, str | None]] = []

    def handle_starttag(
        self,
        tag: str,
        attrs: list[tuple[str, str | None]],
    ) -> None:
        if tag != "img":
            return
        attributes = dict(attrs)
        src = attributes.get("src")
        self.records.append({
            "preview": attributes.get("data-preview") or src,
            "src": attributes.get("data-src") or src,
            "width": attributes.get("data-width") or attributes.get("width"),
            "height": (
                attributes.get("data-height") or attributes.get("height")
            ),
            "alt": attributes.get("alt"),
            "title": attributes.get("title"),
        })


def images_from_markup(markup: str) -> list[ImageDescriptor]:
    """Extract descriptors from every ``<img>`` element in ``markup``."""
    parser = _ImageTagParser()
    parser.feed(markup)
    parser.close()
    return collect_images(parser.records)


def collect_images(source: ImageSource) -> list[ImageDescriptor]:
    """
    Normalize any supported source into an ordered descriptor list.

    A string containing ``<img`` is treated as markup; any other string
    is a single URL. Unusable items are skipped with a warning.
    """
    if isinstance(source, str):
        if _MARKUP_HINT in source.lower():
            return images_from_markup(source)
        source = [source]

    images: list[ImageDescriptor] = []
    for index, item in enumerate(source):
        descriptor = descriptor_from_item(item)
        if descriptor is None:
            logger.warning("Skipping image %d without a source URL", index)
            continue
        images.append(descriptor)
    return images
