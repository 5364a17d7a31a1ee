"""
imagedate - resolve the best known creation timestamp of image files.

EXIF dates win over filesystem attributes; when nothing is known the
far-future ``UNKNOWN_TIMESTAMP`` is returned instead of an error.
"""

from .core.exceptions import (
    DateParseError,
    HostClockError,
    ImageDateError,
    ImageOpenError,
    MetadataDecodeError,
    ReaderNotStartedError,
)
from .core.resolver import DateResolver, get_image_date
from .core.types import (
    UNKNOWN_TIMESTAMP,
    Candidate,
    PriorityRank,
    Resolution,
    Resolved,
    Unknown,
)
from .version import __version__

__all__ = [
    "__version__",
    "DateResolver",
    "get_image_date",
    "UNKNOWN_TIMESTAMP",
    "Candidate",
    "PriorityRank",
    "Resolution",
    "Resolved",
    "Unknown",
    "ImageDateError",
    "ImageOpenError",
    "DateParseError",
    "MetadataDecodeError",
    "ReaderNotStartedError",
    "HostClockError",
]
