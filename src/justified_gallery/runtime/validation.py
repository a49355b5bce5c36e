"""Input validation helpers for runtime configuration."""

from __future__ import annotations

from pathlib import Path


def validate_image_list_path(path: str | Path) -> None:
    """Ensure an image list file exists."""
    if not Path(path).is_file():
        msg = f"Image list not found: {path}"
        raise FileNotFoundError(msg)


def validate_container_width(container_width: float) -> None:
    """Validate that the container width can hold a layout."""
    if container_width <= 0:
        msg = f"Container width must be positive, got {container_width}"
        raise ValueError(msg)
