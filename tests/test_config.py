"""
Unit tests for the gallery config module.

Covers:
- Defaults and camelCase aliases
- merge_options override semantics, including the rowHeight shortcut
- Validation errors for out-of-range values
- Loading a [gallery] table from TOML
"""
import tempfile
from pathlib import Path
from typing import Any

import pytest
import tomlkit
from pydantic import ValidationError

import justified_gallery.config as jg_config
from justified_gallery.config_defaults import (
    DEFAULT_FALLBACK_IMAGE_HEIGHT,
    DEFAULT_FALLBACK_IMAGE_WIDTH,
    DEFAULT_GAP,
    DEFAULT_MAX_IMAGE_RATIO,
    DEFAULT_MAX_ROWS,
    DEFAULT_MIN_IMAGE_RATIO,
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_PROBE_WORKERS,
    DEFAULT_ROW_HEIGHT_MD,
    DEFAULT_ROW_HEIGHT_SM,
    DEFAULT_ROW_HEIGHT_XL,
)


def create_toml_file(data: dict[str, Any]) -> str:
    """Write a TOML string to a temporary file and return its path."""
    doc = tomlkit.document()
    doc.update(data)
    toml_str = tomlkit.dumps(doc)

    with tempfile.NamedTemporaryFile(
        delete=False,
        suffix=".toml",
        mode="w",
        encoding="utf-8",
    ) as temp:
        temp.write(toml_str)
        return temp.name


class TestGalleryConfig:
    def test_defaults(self) -> None:
        cfg = jg_config.GalleryConfig()
        assert cfg.row_height_sm == DEFAULT_ROW_HEIGHT_SM
        assert cfg.row_height_md == DEFAULT_ROW_HEIGHT_MD
        assert cfg.row_height_xl == DEFAULT_ROW_HEIGHT_XL
        assert cfg.fallback_image_width == DEFAULT_FALLBACK_IMAGE_WIDTH
        assert cfg.fallback_image_height == DEFAULT_FALLBACK_IMAGE_HEIGHT
        assert cfg.max_image_ratio == DEFAULT_MAX_IMAGE_RATIO
        assert cfg.min_image_ratio == DEFAULT_MIN_IMAGE_RATIO
        assert cfg.max_rows == DEFAULT_MAX_ROWS
        assert cfg.gap == DEFAULT_GAP
        assert cfg.probe_timeout == DEFAULT_PROBE_TIMEOUT
        assert cfg.probe_workers == DEFAULT_PROBE_WORKERS
        assert cfg.stretch_last_row is True
        assert cfg.retrieve_dimensions is False
        assert cfg.shuffle_images is False
        assert cfg.observe_window_width is True

    def test_aliases_and_field_names(self) -> None:
        by_alias = jg_config.GalleryConfig.model_validate(
            {"maxRows": 3, "shouldRetrieveWidthAndHeight": True},
        )
        by_name = jg_config.GalleryConfig.model_validate(
            {"max_rows": 3, "retrieve_dimensions": True},
        )
        assert by_alias == by_name
        assert by_alias.max_rows == 3  # noqa: PLR2004

    def test_frozen(self) -> None:
        cfg = jg_config.GalleryConfig()
        with pytest.raises(ValidationError):
            cfg.gap = 10  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("rowHeightSM", 0),
            ("fallbackImageWidth", -1),
            ("maxImageRatio", 0),
            ("maxRows", -1),
            ("probeWorkers", 0),
            ("probeTimeout", 0),
        ],
    )
    def test_out_of_range_rejected(self, key: str, value: float) -> None:
        with pytest.raises(ValidationError):
            jg_config.GalleryConfig.model_validate({key: value})

    def test_ratio_order_and_negative_gap_are_accepted(self) -> None:
        """Inverted ratio bounds and a negative gap pass validation."""
        cfg = jg_config.GalleryConfig.model_validate(
            {"minImageRatio": 2.0, "maxImageRatio": 1.0, "gap": -4},
        )
        assert cfg.min_image_ratio > cfg.max_image_ratio
        assert cfg.gap == -4  # noqa: PLR2004


class TestMergeOptions:
    def test_no_overrides_returns_equal_copy(self) -> None:
        base = jg_config.GalleryConfig(gap=8)
        merged = jg_config.merge_options(base)
        assert merged == base

    def test_overrides_win(self) -> None:
        merged = jg_config.merge_options(
            jg_config.GalleryConfig(),
            {"gap": 12, "stretchLastRow": False, "max_rows": 4},
        )
        assert merged.gap == 12  # noqa: PLR2004
        assert merged.stretch_last_row is False
        assert merged.max_rows == 4  # noqa: PLR2004

    def test_omitted_keys_keep_base_values(self) -> None:
        base = jg_config.GalleryConfig(gap=8, max_rows=2)
        merged = jg_config.merge_options(base, {"gap": 0})
        assert merged.max_rows == 2  # noqa: PLR2004
        assert merged.gap == 0

    def test_inputs_not_mutated(self) -> None:
        base = jg_config.GalleryConfig()
        overrides = {"rowHeight": 0.3, "gap": 1}
        jg_config.merge_options(base, overrides)
        assert base == jg_config.GalleryConfig()
        assert overrides == {"rowHeight": 0.3, "gap": 1}

    @pytest.mark.parametrize("key", ["rowHeight", "row_height"])
    def test_row_height_sets_all_breakpoints(self, key: str) -> None:
        merged = jg_config.merge_options(
            jg_config.GalleryConfig(), {key: 0.3, "rowHeightXL": 0.1},
        )
        assert merged.row_height_sm == 0.3  # noqa: PLR2004
        assert merged.row_height_md == 0.3  # noqa: PLR2004
        assert merged.row_height_xl == 0.3  # noqa: PLR2004

    def test_falsy_row_height_is_ignored(self) -> None:
        merged = jg_config.merge_options(
            jg_config.GalleryConfig(), {"rowHeight": 0, "rowHeightMD": 0.4},
        )
        assert merged.row_height_md == 0.4  # noqa: PLR2004
        assert merged.row_height_sm == DEFAULT_ROW_HEIGHT_SM

    def test_unknown_keys_ignored(self) -> None:
        merged = jg_config.merge_options(
            jg_config.GalleryConfig(), {"colour": "red", "gap": 2},
        )
        assert merged.gap == 2  # noqa: PLR2004

    def test_invalid_override_raises(self) -> None:
        with pytest.raises(ValidationError):
            jg_config.merge_options(jg_config.GalleryConfig(), {"maxRows": -2})


class TestConfigLoader:
    def test_load_valid_config(self) -> None:
        path = create_toml_file({
            "gallery": {
                "rowHeight": 0.22,
                "gap": 6,
                "maxRows": 3,
                "shouldRetrieveWidthAndHeight": True,
            },
        })
        cfg = jg_config.ConfigLoader.load(path)

        assert isinstance(cfg, jg_config.GalleryConfig)
        assert cfg.row_height_md == 0.22  # noqa: PLR2004
        assert cfg.gap == 6  # noqa: PLR2004
        assert cfg.max_rows == 3  # noqa: PLR2004
        assert cfg.retrieve_dimensions is True

    def test_missing_section_uses_defaults(self) -> None:
        path = create_toml_file({"other": {"gap": 100}})
        assert jg_config.ConfigLoader.load(path) == jg_config.GalleryConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            jg_config.ConfigLoader.load(tmp_path / "absent.toml")

    def test_section_must_be_table(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text('gallery = "nope"\n', encoding="utf-8")
        with pytest.raises(ValueError, match="must be a table"):
            jg_config.ConfigLoader.load(path)

    def test_invalid_value_in_file(self) -> None:
        path = create_toml_file({"gallery": {"probeWorkers": 0}})
        with pytest.raises(ValidationError):
            jg_config.ConfigLoader.load(path)
