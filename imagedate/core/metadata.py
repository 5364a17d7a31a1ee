"""
Metadata readers.

A reader decodes the EXIF container of an open image file into a
:class:`TagMapping`, which answers "what does tag X display as in IFD Y".
Two readers are provided: one backed by Pillow (in-process, the default) and
one backed by ExifTool (through pyexiftool).
"""

import logging
import re
from enum import Enum
from typing import Any, BinaryIO, Dict, Optional, Protocol, Tuple

import exiftool
from exiftool.exceptions import ExifToolException
from PIL import ExifTags, Image, UnidentifiedImageError

from .exceptions import MetadataDecodeError, ReaderNotStartedError

logger = logging.getLogger(__name__)

# Register HEIC support for Pillow
try:
    from pillow_heif import register_heif_opener

    register_heif_opener()
    logger.debug("HEIC support registered")
except ImportError:
    logger.debug("pillow-heif not installed, HEIC files will not be decoded")


class IfdKind(Enum):
    """Which image a tag describes."""

    PRIMARY = "primary"
    THUMBNAIL = "thumbnail"


class ExifTag(Enum):
    """EXIF tags used for dating, as (tag id, ExifTool name)."""

    DATE_TIME = (0x0132, "ModifyDate")
    DATE_TIME_ORIGINAL = (0x9003, "DateTimeOriginal")
    DATE_TIME_DIGITIZED = (0x9004, "CreateDate")
    OFFSET_TIME = (0x9010, "OffsetTime")
    OFFSET_TIME_ORIGINAL = (0x9011, "OffsetTimeOriginal")
    OFFSET_TIME_DIGITIZED = (0x9012, "OffsetTimeDigitized")

    @property
    def tag_id(self) -> int:
        return self.value[0]

    @property
    def exiftool_name(self) -> str:
        return self.value[1]


DATE_TAGS = (ExifTag.DATE_TIME, ExifTag.DATE_TIME_ORIGINAL, ExifTag.DATE_TIME_DIGITIZED)

_TAGS_BY_ID: Dict[int, ExifTag] = {tag.tag_id: tag for tag in ExifTag}
_TAGS_BY_NAME: Dict[str, ExifTag] = {tag.exiftool_name: tag for tag in ExifTag}

# ExifTool -G1 group names
_EXIFTOOL_GROUPS: Dict[str, IfdKind] = {
    "IFD0": IfdKind.PRIMARY,
    "ExifIFD": IfdKind.PRIMARY,
    "IFD1": IfdKind.THUMBNAIL,
}

_EXIF_DATE_RE = re.compile(r"(\d{4}):(\d{2}):(\d{2}) (\d{2}:\d{2}:\d{2})")


def display_value(tag: ExifTag, raw: Any) -> str:
    """
    Render a raw tag value the way it is shown to users.

    EXIF stores dates as ``YYYY:MM:DD HH:MM:SS``; these are displayed as
    ``YYYY-MM-DD HH:MM:SS``. Values that do not look like a date are returned
    as stripped text.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("ascii", errors="replace")
    text = str(raw).strip("\x00 ")

    if tag in DATE_TAGS:
        match = _EXIF_DATE_RE.fullmatch(text)
        if match:
            year, month, day, clock = match.groups()
            return f"{year}-{month}-{day} {clock}"
    return text


class TagMapping:
    """Decoded tags of one file, keyed by (tag, IFD kind)."""

    def __init__(self, values: Optional[Dict[Tuple[ExifTag, IfdKind], Any]] = None) -> None:
        self._values: Dict[Tuple[ExifTag, IfdKind], Any] = dict(values or {})

    def get(self, tag: ExifTag, ifd: IfdKind = IfdKind.PRIMARY) -> Optional[str]:
        """Return the displayed value of a tag, or None if absent."""
        raw = self._values.get((tag, ifd))
        if raw is None:
            return None
        return display_value(tag, raw)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"TagMapping({len(self._values)} tags)"


class MetadataReader(Protocol):
    """Protocol for metadata container decoders."""

    def read(self, handle: BinaryIO) -> TagMapping:
        """Decode tags from an open binary file.

        Raises:
            MetadataDecodeError: If no container can be decoded.
        """
        ...


class PillowMetadataReader:
    """Decode EXIF tags in-process with Pillow."""

    def __enter__(self) -> "PillowMetadataReader":
        return self

    def __exit__(self, *args: Any) -> None:
        pass

    def read(self, handle: BinaryIO) -> TagMapping:
        handle.seek(0)
        try:
            with Image.open(handle) as img:
                exif = img.getexif()
                primary = dict(exif)
                primary.update(exif.get_ifd(ExifTags.IFD.Exif))
                thumbnail = dict(exif.get_ifd(ExifTags.IFD.IFD1))
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
            raise MetadataDecodeError(f"Cannot decode image metadata: {e}") from e

        values: Dict[Tuple[ExifTag, IfdKind], Any] = {}
        for ifd, tags in ((IfdKind.PRIMARY, primary), (IfdKind.THUMBNAIL, thumbnail)):
            for tag_id, raw in tags.items():
                tag = _TAGS_BY_ID.get(tag_id)
                if tag is not None:
                    values[(tag, ifd)] = raw
        return TagMapping(values)


class ExifToolMetadataReader:
    """Decode EXIF tags with an ExifTool process.

    Must be used as a context manager so the ExifTool process is started and
    stopped. Not safe to share between threads.
    """

    def __init__(self, executable: Optional[str] = None) -> None:
        self.executable = executable
        self.exif_tool: Optional[exiftool.ExifToolHelper] = None

    def __enter__(self) -> "ExifToolMetadataReader":
        """Context manager entry."""
        if self.executable:
            self.exif_tool = exiftool.ExifToolHelper(executable=self.executable)
        else:
            self.exif_tool = exiftool.ExifToolHelper()
        self.exif_tool.__enter__()
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        if self.exif_tool:
            self.exif_tool.__exit__(*args)
            self.exif_tool = None

    def read(self, handle: BinaryIO) -> TagMapping:
        if not self.exif_tool:
            raise ReaderNotStartedError("ExifTool not initialized, use as context manager")

        path = getattr(handle, "name", None)
        if not isinstance(path, str):
            raise MetadataDecodeError("ExifTool needs a file opened by path")

        try:
            metadata_list = self.exif_tool.get_tags(
                [path],
                tags=[tag.exiftool_name for tag in ExifTag],
                params=["-G1"],
            )
        except ExifToolException as e:
            raise MetadataDecodeError(f"ExifTool failed on {path}: {e}") from e

        if not metadata_list:
            raise MetadataDecodeError(f"No metadata returned for {path}")

        values: Dict[Tuple[ExifTag, IfdKind], Any] = {}
        for key, raw in metadata_list[0].items():
            group, _, name = key.partition(":")
            ifd = _EXIFTOOL_GROUPS.get(group)
            tag = _TAGS_BY_NAME.get(name)
            if ifd is not None and tag is not None:
                values[(tag, ifd)] = raw
        return TagMapping(values)
