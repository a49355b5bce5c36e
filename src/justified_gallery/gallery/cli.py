"""Command-line entry point for justified gallery rendering."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

from justified_gallery.config import ConfigLoader, GalleryConfig, merge_options
from justified_gallery.gallery.api import (
    GalleryRenderOptions,
    load_image_list,
    parse_option_override,
    positive_float,
    render_gallery,
)
from justified_gallery.logging_utils import logger
from justified_gallery.runtime import resolve_project_version

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Sequence

T = TypeVar("T")


def _wrap_validator(
    validator: Callable[[str], T],
    error_cls: type[argparse.ArgumentTypeError] = argparse.ArgumentTypeError,
) -> Callable[[str], T]:
    """Convert ``ValueError`` from a validator into ``ArgumentTypeError``."""

    def wrapper(text: str) -> T:
        try:
            return validator(text)
        except ValueError as exc:
            raise error_cls(str(exc)) from exc

    return wrapper


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser for the gallery tool."""
    parser = argparse.ArgumentParser(
        description=(
            "Arrange images into justified rows that span the container "
            "width, and write the layout as HTML or a PNG preview."
        ),
    )
    parser.add_argument(
        "sources",
        nargs="*",
        help="Image URLs or local paths, in gallery order.",
    )
    parser.add_argument(
        "--images",
        type=Path,
        default=None,
        help=(
            "Image list file: .toml with [[images]] tables, .html with "
            "<img> markup, or plain text with one URL per line."
        ),
    )
    parser.add_argument(
        "--container-width",
        type=_wrap_validator(positive_float),
        default=1200.0,
    )
    parser.add_argument(
        "--observed-width",
        type=_wrap_validator(positive_float),
        default=None,
        help="Width used to pick the breakpoint (defaults to container).",
    )
    parser.add_argument("--config", type=Path, default=None,
                        help="TOML file with a [gallery] table.")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        type=_wrap_validator(parse_option_override),
        metavar="KEY=VALUE",
        help="Override a gallery option, e.g. --set gap=8.",
    )
    parser.add_argument(
        "--retrieve-dimensions",
        action="store_true",
        help="Probe image headers for sizes missing from the list.",
    )
    parser.add_argument("--shuffle", action="store_true",
                        help="Randomize image order before layout.")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for reproducible shuffling.")
    parser.add_argument("--html-out", type=Path, default=None)
    parser.add_argument("--preview-out", type=Path, default=None)
    parser.add_argument(
        "--load-preview-images",
        action="store_true",
        help="Paste local image files into the PNG preview.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {resolve_project_version()}",
    )
    return parser


def _build_config(args: argparse.Namespace) -> GalleryConfig:
    """Load the config file and apply flag and ``--set`` overrides."""
    base = ConfigLoader.load(args.config) if args.config else GalleryConfig()
    overrides = dict(args.overrides)
    if args.retrieve_dimensions:
        overrides["retrieve_dimensions"] = True
    if args.shuffle:
        overrides["shuffle_images"] = True
    return merge_options(base, overrides)


def _build_options(args: argparse.Namespace) -> GalleryRenderOptions:
    """Map argparse namespace to :class:`GalleryRenderOptions`."""
    sources = list(args.sources)
    if args.images is not None:
        sources = load_image_list(args.images) + sources
    return GalleryRenderOptions(
        sources=sources,
        container_width=args.container_width,
        observed_width=args.observed_width,
        config=_build_config(args),
        html_out=args.html_out,
        preview_out=args.preview_out,
        load_preview_images=args.load_preview_images,
        seed=args.seed,
        progress=True,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Parse command-line arguments and render the gallery."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.sources and args.images is None:
        parser.error("provide image sources or --images")

    try:
        options = _build_options(args)
        layout = render_gallery(options)
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))

    for index, row in enumerate(layout.rows, start=1):
        logger.info(
            "Row %d: %d images, height %.1fpx",
            index,
            len(row.images),
            row.height,
        )
    return 0


__all__ = ["build_parser", "main"]
