"""
Date extraction from embedded EXIF metadata.

Tags are probed in priority order and the first one that is present in the
primary image and parses wins. Thumbnail tags are never consulted.
"""

import logging
from typing import List, Optional, Tuple

from .exceptions import DateParseError
from .metadata import ExifTag, IfdKind, TagMapping
from .types import Candidate, PriorityRank
from .value_parser import parse_display_datetime

logger = logging.getLogger(__name__)

# (rank, date tag, time zone offset tag), highest priority first
EMBEDDED_PROBES: List[Tuple[PriorityRank, ExifTag, ExifTag]] = [
    (
        PriorityRank.EXIF_DATE_TIME_ORIGINAL,
        ExifTag.DATE_TIME_ORIGINAL,
        ExifTag.OFFSET_TIME_ORIGINAL,
    ),
    (
        PriorityRank.EXIF_CREATE_DATE,
        ExifTag.DATE_TIME_DIGITIZED,
        ExifTag.OFFSET_TIME_DIGITIZED,
    ),
    (
        PriorityRank.EXIF_MODIFY_DATE,
        ExifTag.DATE_TIME,
        ExifTag.OFFSET_TIME,
    ),
]


def probe_tag(
    tags: TagMapping, rank: PriorityRank, date_tag: ExifTag, offset_tag: ExifTag
) -> Optional[Candidate]:
    """
    Try to build a candidate from one date tag.

    Returns:
        Candidate if the tag is present and parses, None otherwise
    """
    display = tags.get(date_tag, IfdKind.PRIMARY)
    if display is None:
        logger.debug(f"No {date_tag.exiftool_name} tag")
        return None

    try:
        timestamp = parse_display_datetime(display)
    except DateParseError as e:
        logger.debug(f"Skipping {date_tag.exiftool_name}: {e}")
        return None

    # The offset is kept alongside the candidate but not applied.
    offset = tags.get(offset_tag, IfdKind.PRIMARY) or None
    return Candidate(rank=rank, timestamp=timestamp, utc_offset=offset)


def extract_embedded_dates(tags: TagMapping) -> List[Candidate]:
    """
    Extract the highest priority EXIF date.

    Args:
        tags: Decoded metadata of the file

    Returns:
        List with at most one candidate
    """
    for rank, date_tag, offset_tag in EMBEDDED_PROBES:
        candidate = probe_tag(tags, rank, date_tag, offset_tag)
        if candidate is not None:
            logger.debug(f"Found EXIF date in {date_tag.exiftool_name}: {candidate.timestamp}")
            return [candidate]
    return []
