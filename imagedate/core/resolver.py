"""
Resolve the best known date of an image.

EXIF dates are preferred. Filesystem attributes are consulted only when no
EXIF date could be extracted. When neither yields anything the result is
:class:`Unknown`, whose timestamp is the far-future ``UNKNOWN_TIMESTAMP``.
"""

import logging
import os
from pathlib import Path
from typing import Any, BinaryIO, Callable, Dict, Iterable, List, Optional, Union

from .embedded import extract_embedded_dates
from .exceptions import ImageOpenError, MetadataDecodeError
from .filesystem import extract_filesystem_dates
from .metadata import MetadataReader, TagMapping
from .types import Candidate, Resolution, Resolved, Unknown

logger = logging.getLogger(__name__)


def select_candidate(candidates: Iterable[Candidate]) -> Resolution:
    """Pick the candidate with the highest priority (lowest rank)."""
    best = min(candidates, key=lambda c: c.rank, default=None)
    if best is None:
        return Unknown()
    return Resolved(timestamp=best.timestamp, rank=best.rank)


class DateResolver:
    """Resolve image dates from EXIF metadata and filesystem attributes."""

    def __init__(
        self,
        reader: Optional[MetadataReader] = None,
        settings: Optional[Any] = None,
        stat: Callable[[int], Any] = os.fstat,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            reader: Metadata reader; defaults to the one configured in settings
            settings: Settings to build the reader from; defaults to the global
                settings
            stat: Function returning a stat result for a file descriptor
        """
        if reader is None:
            if settings is None:
                from ..config import settings as default_settings

                settings = default_settings
            reader = settings.create_reader()
        self.reader = reader
        self.stat = stat

    def __enter__(self) -> "DateResolver":
        """Context manager entry."""
        enter = getattr(self.reader, "__enter__", None)
        if enter is not None:
            enter()
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        exit_ = getattr(self.reader, "__exit__", None)
        if exit_ is not None:
            exit_(*args)

    def read_tags(self, handle: BinaryIO) -> TagMapping:
        """Decode metadata, treating an undecodable container as empty."""
        try:
            return self.reader.read(handle)
        except MetadataDecodeError as e:
            logger.debug(f"No metadata in {getattr(handle, 'name', handle)}: {e}")
            return TagMapping()

    def resolve(self, filename: Union[str, Path]) -> Resolution:
        """
        Resolve the best known date of a file.

        Args:
            filename: Path to the image file

        Returns:
            Resolved with the winning timestamp, or Unknown

        Raises:
            ImageOpenError: If the file cannot be opened
            HostClockError: If the host reports a file instant before the epoch
        """
        try:
            handle = open(filename, "rb")
        except OSError as e:
            logger.debug(f"Cannot open {filename}: {e}")
            raise ImageOpenError(str(filename)) from e

        with handle:
            candidates: List[Candidate] = extract_embedded_dates(self.read_tags(handle))
            if not candidates:
                # EXIF dates always win, so the filesystem is only a fallback
                candidates.extend(extract_filesystem_dates(handle, self.stat))

        resolution = select_candidate(candidates)
        logger.debug(f"{filename}: {resolution.timestamp} (from {resolution.source})")
        return resolution

    def get_image_date(self, filename: Union[str, Path]) -> int:
        """Resolve a file to seconds since the epoch, or UNKNOWN_TIMESTAMP."""
        return self.resolve(filename).timestamp

    def analyze_images(
        self, image_paths: Iterable[Path]
    ) -> Dict[Path, Optional[Resolution]]:
        """
        Resolve dates for multiple images.

        Args:
            image_paths: Paths to image files

        Returns:
            Dictionary mapping image paths to resolutions, None where the file
            could not be opened
        """
        results: Dict[Path, Optional[Resolution]] = {}

        for image_path in image_paths:
            try:
                results[image_path] = self.resolve(image_path)
            except ImageOpenError as e:
                logger.error(str(e))
                results[image_path] = None

        return results


def get_image_date(
    filename: Union[str, Path], reader: Optional[MetadataReader] = None
) -> int:
    """
    Resolve the best known date of a single image.

    Args:
        filename: Path to the image file
        reader: Metadata reader; defaults to the configured backend

    Returns:
        Seconds since the Unix epoch, or UNKNOWN_TIMESTAMP if no source
        produced a date

    Raises:
        ImageOpenError: If the file cannot be opened
    """
    with DateResolver(reader=reader) as resolver:
        return resolver.get_image_date(filename)
