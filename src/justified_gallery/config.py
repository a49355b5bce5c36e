"""
Configuration schema and loader for the justified gallery.

Defines an immutable Pydantic model holding every layout option, a pure
merge function that applies user overrides on top of a base config, and
a TOML-based loader.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import tomlkit
from pydantic import BaseModel, ConfigDict, Field

from justified_gallery.config_defaults import (
    DEFAULT_FALLBACK_IMAGE_HEIGHT,
    DEFAULT_FALLBACK_IMAGE_WIDTH,
    DEFAULT_GAP,
    DEFAULT_MAX_IMAGE_RATIO,
    DEFAULT_MAX_ROWS,
    DEFAULT_MIN_IMAGE_RATIO,
    DEFAULT_OBSERVE_WINDOW_WIDTH,
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_PROBE_WORKERS,
    DEFAULT_RETRIEVE_DIMENSIONS,
    DEFAULT_ROW_HEIGHT_MD,
    DEFAULT_ROW_HEIGHT_SM,
    DEFAULT_ROW_HEIGHT_XL,
    DEFAULT_SHUFFLE_IMAGES,
    DEFAULT_STRETCH_LAST_ROW,
)
from justified_gallery.logging_utils import logger

# Convenience keys that set all three breakpoint row heights at once
ROW_HEIGHT_KEYS = ("rowHeight", "row_height")
CONFIG_SECTION = "gallery"


class GalleryConfig(BaseModel):
    """
    Layout options read by every component during a pass.

    Fields accept their snake_case names or the camelCase aliases used by
    front-end callers. Ratio ordering and gap sign are deliberately left
    unchecked; the layout arithmetic decides what they produce.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    row_height_sm: float = Field(
        DEFAULT_ROW_HEIGHT_SM, gt=0, alias="rowHeightSM",
    )
    row_height_md: float = Field(
        DEFAULT_ROW_HEIGHT_MD, gt=0, alias="rowHeightMD",
    )
    row_height_xl: float = Field(
        DEFAULT_ROW_HEIGHT_XL, gt=0, alias="rowHeightXL",
    )
    retrieve_dimensions: bool = Field(
        DEFAULT_RETRIEVE_DIMENSIONS, alias="shouldRetrieveWidthAndHeight",
    )
    fallback_image_width: float = Field(
        DEFAULT_FALLBACK_IMAGE_WIDTH, gt=0, alias="fallbackImageWidth",
    )
    fallback_image_height: float = Field(
        DEFAULT_FALLBACK_IMAGE_HEIGHT, gt=0, alias="fallbackImageHeight",
    )
    max_image_ratio: float = Field(
        DEFAULT_MAX_IMAGE_RATIO, gt=0, alias="maxImageRatio",
    )
    min_image_ratio: float = Field(
        DEFAULT_MIN_IMAGE_RATIO, gt=0, alias="minImageRatio",
    )
    max_rows: int = Field(DEFAULT_MAX_ROWS, ge=0, alias="maxRows")
    stretch_last_row: bool = Field(
        DEFAULT_STRETCH_LAST_ROW, alias="stretchLastRow",
    )
    shuffle_images: bool = Field(
        DEFAULT_SHUFFLE_IMAGES, alias="shuffleImages",
    )
    gap: float = DEFAULT_GAP
    observe_window_width: bool = Field(
        DEFAULT_OBSERVE_WINDOW_WIDTH, alias="observeWindowWidth",
    )
    probe_timeout: float = Field(
        DEFAULT_PROBE_TIMEOUT, gt=0, alias="probeTimeout",
    )
    probe_workers: int = Field(
        DEFAULT_PROBE_WORKERS, ge=1, alias="probeWorkers",
    )


def _option_names() -> dict[str, str]:
    """Map every accepted option key (name or alias) to its field name."""
    names: dict[str, str] = {}
    for field_name, field in GalleryConfig.model_fields.items():
        names[field_name] = field_name
        if field.alias:
            names[field.alias] = field_name
    return names


_OPTION_NAMES = _option_names()


def merge_options(
    defaults: GalleryConfig,
    overrides: Mapping[str, Any] | None = None,
) -> GalleryConfig:
    """
    Return a new config with ``overrides`` applied on top of ``defaults``.

    A single ``rowHeight`` (or ``row_height``) key expands into all three
    breakpoint row heights and wins over any per-breakpoint key given
    alongside it. Unrecognized keys are ignored. Neither argument is
    mutated.
    """
    data = defaults.model_dump()
    if not overrides:
        return GalleryConfig.model_validate(data)

    for key, value in overrides.items():
        if key in ROW_HEIGHT_KEYS:
            continue
        field_name = _OPTION_NAMES.get(key)
        if field_name is None:
            logger.debug("Ignoring unrecognized gallery option: %s", key)
            continue
        data[field_name] = value

    for key in ROW_HEIGHT_KEYS:
        row_height = overrides.get(key)
        if row_height:
            data["row_height_sm"] = row_height
            data["row_height_md"] = row_height
            data["row_height_xl"] = row_height

    return GalleryConfig.model_validate(data)


class ConfigLoader:
    """
    Loads a TOML configuration file into a GalleryConfig.

    Options live under a ``[gallery]`` table; missing keys keep their
    defaults.
    """

    @staticmethod
    def load(path: str | Path) -> GalleryConfig:
        """
        Load gallery options from a TOML file.

        Returns a validated GalleryConfig built by merging the file's
        ``[gallery]`` table over the defaults.
        """
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f).unwrap()

        section = doc.get(CONFIG_SECTION, {})
        if not isinstance(section, dict):
            msg = f"[{CONFIG_SECTION}] in {path} must be a table"
            raise ValueError(msg)
        return merge_options(GalleryConfig(), section)
