"""
Pytest configuration and fixtures for imagedate tests.
"""

import tempfile
from pathlib import Path
from types import SimpleNamespace
from typing import Callable, Dict, Generator, Optional

import pytest
from PIL import ExifTags, Image

from imagedate.core.metadata import ExifTag, IfdKind, TagMapping

# Tag ids, for readability in fixtures
DATE_TIME = ExifTag.DATE_TIME.tag_id
DATE_TIME_ORIGINAL = ExifTag.DATE_TIME_ORIGINAL.tag_id
DATE_TIME_DIGITIZED = ExifTag.DATE_TIME_DIGITIZED.tag_id
OFFSET_TIME_ORIGINAL = ExifTag.OFFSET_TIME_ORIGINAL.tag_id


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def write_jpeg(
    path: Path,
    primary: Optional[Dict[int, str]] = None,
    exif_ifd: Optional[Dict[int, str]] = None,
) -> Path:
    """Write a small JPEG carrying the given IFD0 and Exif IFD tags."""
    exif = Image.Exif()
    for tag_id, value in (primary or {}).items():
        exif[tag_id] = value
    if exif_ifd:
        exif[ExifTags.IFD.Exif] = dict(exif_ifd)

    Image.new("RGB", (10, 10), color="red").save(path, "JPEG", exif=exif)
    return path


@pytest.fixture
def sample_image(temp_dir: Path) -> Path:
    """A JPEG without any EXIF data."""
    path = temp_dir / "sample.jpg"
    Image.new("RGB", (10, 10), color="blue").save(path, "JPEG")
    return path


@pytest.fixture
def exif_image(temp_dir: Path) -> Path:
    """A JPEG whose DateTimeOriginal is 2008-05-30 15:56:01."""
    return write_jpeg(
        temp_dir / "original.jpg",
        primary={DATE_TIME: "2011:01:01 00:00:00"},
        exif_ifd={
            DATE_TIME_ORIGINAL: "2008:05:30 15:56:01",
            DATE_TIME_DIGITIZED: "2009:06:01 12:00:00",
            OFFSET_TIME_ORIGINAL: "+02:00",
        },
    )


@pytest.fixture
def empty_file(temp_dir: Path) -> Path:
    """A zero-byte file."""
    path = temp_dir / "empty.jpg"
    path.touch()
    return path


@pytest.fixture
def make_tags() -> Callable[..., TagMapping]:
    """Build a TagMapping from ExifTag keyword values for the primary image."""

    def _make(thumbnail: Optional[Dict[ExifTag, str]] = None, **primary: str) -> TagMapping:
        values = {(ExifTag[name.upper()], IfdKind.PRIMARY): raw for name, raw in primary.items()}
        for tag, raw in (thumbnail or {}).items():
            values[(tag, IfdKind.THUMBNAIL)] = raw
        return TagMapping(values)

    return _make


@pytest.fixture
def fake_stat() -> Callable[..., Callable[[int], SimpleNamespace]]:
    """Build a stat function reporting only the given attributes."""

    def _make(**attrs: float) -> Callable[[int], SimpleNamespace]:
        result = SimpleNamespace(**attrs)
        return lambda fd: result

    return _make


class StaticReader:
    """A metadata reader returning fixed tags."""

    def __init__(self, tags: Optional[TagMapping] = None) -> None:
        self.tags = tags if tags is not None else TagMapping()
        self.calls = 0

    def read(self, handle) -> TagMapping:
        self.calls += 1
        return self.tags


@pytest.fixture
def static_reader() -> type:
    """The StaticReader class, for building readers with fixed tags."""
    return StaticReader


@pytest.fixture
def jpeg_writer() -> Callable[..., Path]:
    """The write_jpeg helper."""
    return write_jpeg
