"""
Date extraction from filesystem attributes.

Each attribute is a capability query: it returns the instant as a float of
seconds since the epoch, or None when the platform does not report it.
"""

import logging
import os
import sys
from typing import Any, BinaryIO, Callable, List, Optional, Tuple

import arrow

from .exceptions import HostClockError
from .types import Candidate, PriorityRank

logger = logging.getLogger(__name__)


def file_created(st: Any) -> Optional[float]:
    """
    Creation instant, where the platform keeps one.

    This is ``st_birthtime`` on macOS and the BSDs (and Windows from Python
    3.12) and ``st_ctime`` on older Windows. Linux ``stat`` does not expose it.
    """
    birthtime = getattr(st, "st_birthtime", None)
    if birthtime is not None:
        return birthtime
    if sys.platform == "win32":
        return getattr(st, "st_ctime", None)
    return None


def file_modified(st: Any) -> Optional[float]:
    """Last modification instant (``st_mtime``)."""
    return getattr(st, "st_mtime", None)


def file_accessed(st: Any) -> Optional[float]:
    """
    Last access instant (``st_atime``).

    Not every system keeps this current (noatime mounts, Windows with access
    updates disabled).
    """
    return getattr(st, "st_atime", None)


FILESYSTEM_PROBES: List[Tuple[PriorityRank, Callable[[Any], Optional[float]]]] = [
    (PriorityRank.SYS_CREATED, file_created),
    (PriorityRank.SYS_MODIFIED, file_modified),
    (PriorityRank.SYS_ACCESSED, file_accessed),
]


def to_epoch_seconds(instant: float) -> int:
    """
    Drop the sub-second part of an instant.

    Raises:
        HostClockError: If the instant lies before the Unix epoch
    """
    if instant < 0:
        raise HostClockError(f"File instant {instant} is before the Unix epoch")
    return arrow.get(instant).int_timestamp


def extract_filesystem_dates(
    handle: BinaryIO, stat: Callable[[int], Any] = os.fstat
) -> List[Candidate]:
    """
    Extract the highest priority filesystem date of an open file.

    Args:
        handle: Open file
        stat: Function returning a stat result for a file descriptor

    Returns:
        List with at most one candidate
    """
    try:
        st = stat(handle.fileno())
    except OSError as e:
        logger.debug(f"Could not stat {getattr(handle, 'name', handle)}: {e}")
        return []

    for rank, probe in FILESYSTEM_PROBES:
        instant = probe(st)
        if instant is None:
            logger.debug(f"{rank.label} not supported on this platform")
            continue
        timestamp = to_epoch_seconds(instant)
        logger.debug(f"Using filesystem date {rank.label}: {timestamp}")
        return [Candidate(rank=rank, timestamp=timestamp)]
    return []
