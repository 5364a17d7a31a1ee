"""
Shared utilities for imagedate.
"""

from .media_utils import (
    IMAGE_EXTENSIONS,
    collect_image_files,
    expand_image_paths,
    is_image_file,
    setup_logging,
)

__all__ = [
    "IMAGE_EXTENSIONS",
    "is_image_file",
    "collect_image_files",
    "expand_image_paths",
    "setup_logging",
]
