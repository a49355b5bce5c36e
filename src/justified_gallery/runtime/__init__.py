"""Runtime utilities for validation and version helpers."""

from .validation import validate_container_width, validate_image_list_path
from .version import resolve_project_version

__all__ = [
    "resolve_project_version",
    "validate_container_width",
    "validate_image_list_path",
]
