"""
Media file utilities for imagedate.

Image detection by extension, expansion of command line paths into image
files, and logging setup.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Set

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS: Set[str] = {
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".bmp",
    ".tiff",
    ".tif",
    ".webp",
    ".heic",
    ".heif",
    ".raw",
    ".cr2",
    ".nef",
    ".arw",
    ".dng",
    ".orf",
    ".rw2",
    ".pef",
    ".sr2",
    ".raf",
}


def is_image_file(file_path: Path) -> bool:
    """True if the extension is a known image extension (case-insensitive)."""
    return file_path.suffix.lower() in IMAGE_EXTENSIONS


def _is_hidden(name: str) -> bool:
    # Covers macOS "._IMG_0001.JPG" resource forks and ".thumbnails" caches
    return name.startswith(".")


def _scan(directory: Path, recursive: bool) -> Iterator[Path]:
    with os.scandir(directory) as entries:
        for entry in entries:
            if _is_hidden(entry.name):
                continue
            if entry.is_dir(follow_symlinks=False):
                if recursive:
                    try:
                        yield from _scan(Path(entry.path), recursive)
                    except PermissionError as e:
                        logger.warning(f"Skipping unreadable directory {entry.path}: {e}")
            elif entry.is_file() and is_image_file(Path(entry.name)):
                yield Path(entry.path)


def collect_image_files(directory: Path, recursive: bool = True) -> List[Path]:
    """
    Collect the image files below a directory.

    Hidden files and directories are skipped and symlinked directories are
    not descended into, so a link cycle cannot recurse forever.

    Args:
        directory: Directory to scan
        recursive: If True, scan subdirectories too

    Returns:
        Sorted list of image paths; empty if the directory cannot be read
    """
    if not directory.is_dir():
        logger.error(f"Not a directory: {directory}")
        return []

    try:
        image_files = sorted(_scan(directory, recursive))
    except PermissionError as e:
        logger.error(f"Permission denied accessing {directory}: {e}")
        return []

    logger.info(f"Found {len(image_files)} image files in {directory}")
    return image_files


def expand_image_paths(paths: Iterable[Path], recursive: bool = True) -> List[Path]:
    """
    Turn a mix of files and directories into the list of images to date.

    Directories are expanded with :func:`collect_image_files`. Files are kept
    when their extension is an image extension, whether or not they exist, so
    a missing image still gets reported by the caller. Other files are logged
    and dropped. Each path appears once, in first-seen order.
    """
    files: List[Path] = []
    seen: Set[Path] = set()
    for path in paths:
        if path.is_dir():
            candidates = collect_image_files(path, recursive=recursive)
        elif is_image_file(path):
            candidates = [path]
        else:
            logger.warning(f"Skipping non-image file: {path}")
            candidates = []

        for candidate in candidates:
            if candidate not in seen:
                seen.add(candidate)
                files.append(candidate)
    return files


def setup_logging(
    verbose: bool = False, quiet: bool = False, level: Optional[str] = None
) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: If True, set logging level to DEBUG
        quiet: If True, set logging level to WARNING
        level: Level name used when neither flag is set (default INFO)
    """
    if quiet:
        log_level = logging.WARNING
    elif verbose:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, (level or "INFO").upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
