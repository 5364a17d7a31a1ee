"""
Type definitions for date resolution.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Union

# 2031-05-11 12:20 UTC. Returned when no date evidence exists at all, far
# enough in the future that downstream consumers can spot it.
UNKNOWN_TIMESTAMP = 1936268400


class PriorityRank(IntEnum):
    """Which source produced a candidate date. Lower wins."""

    EXIF_DATE_TIME_ORIGINAL = 1
    EXIF_CREATE_DATE = 2
    EXIF_MODIFY_DATE = 3
    SYS_CREATED = 4
    SYS_MODIFIED = 5
    SYS_ACCESSED = 6

    @property
    def tier(self) -> str:
        """Either 'embedded' (EXIF) or 'filesystem'."""
        if self <= PriorityRank.EXIF_MODIFY_DATE:
            return "embedded"
        return "filesystem"

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class Candidate:
    """A date produced by a single extraction attempt."""

    rank: PriorityRank
    timestamp: int  # seconds since the Unix epoch
    utc_offset: Optional[str] = None  # recorded, never applied


@dataclass(frozen=True)
class Resolved:
    """A date was found."""

    timestamp: int
    rank: PriorityRank

    @property
    def known(self) -> bool:
        return True

    @property
    def source(self) -> str:
        return self.rank.label


@dataclass(frozen=True)
class Unknown:
    """No source produced a date."""

    @property
    def timestamp(self) -> int:
        return UNKNOWN_TIMESTAMP

    @property
    def known(self) -> bool:
        return False

    @property
    def source(self) -> str:
        return "unknown"


Resolution = Union[Resolved, Unknown]
