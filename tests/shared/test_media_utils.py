"""
Tests for media_utils module.
"""

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from imagedate.shared.media_utils import (
    collect_image_files,
    expand_image_paths,
    is_image_file,
    setup_logging,
)


class TestIsImageFile:
    """Tests for is_image_file function."""

    def test_valid_image_extensions(self) -> None:
        """Test that common image extensions are recognized."""
        valid_files = [
            Path("photo.jpg"),
            Path("picture.JPEG"),
            Path("image.png"),
            Path("scan.TIF"),
            Path("phone.heic"),
            Path("raw.CR2"),
        ]

        for file_path in valid_files:
            assert is_image_file(file_path), f"{file_path} should be recognized as image"

    def test_invalid_extensions(self) -> None:
        """Test that non-image files are not recognized."""
        for name in ["document.txt", "clip.mp4", "data.json", "noext"]:
            assert not is_image_file(Path(name)), f"{name} should not be recognized as image"


class TestCollectImageFiles:
    """Tests for collect_image_files function."""

    def _populate(self, root: Path) -> None:
        (root / "sub").mkdir()
        (root / "a.jpg").touch()
        (root / "b.txt").touch()
        (root / "sub" / "c.PNG").touch()

    def test_recursive(self, temp_dir: Path) -> None:
        """Test recursive collection finds nested images only."""
        self._populate(temp_dir)

        files = collect_image_files(temp_dir, recursive=True)

        assert files == sorted([temp_dir / "a.jpg", temp_dir / "sub" / "c.PNG"])

    def test_non_recursive(self, temp_dir: Path) -> None:
        """Test non-recursive collection stays in the top directory."""
        self._populate(temp_dir)

        assert collect_image_files(temp_dir, recursive=False) == [temp_dir / "a.jpg"]

    def test_missing_directory(self, temp_dir: Path) -> None:
        """Test a missing directory yields nothing."""
        assert collect_image_files(temp_dir / "nope") == []

    def test_file_instead_of_directory(self, sample_image: Path) -> None:
        assert collect_image_files(sample_image) == []

    def test_hidden_entries_skipped(self, temp_dir: Path) -> None:
        """Test dot files and dot directories are ignored."""
        (temp_dir / ".thumbnails").mkdir()
        (temp_dir / ".thumbnails" / "t.jpg").touch()
        (temp_dir / "._IMG_0001.JPG").touch()
        (temp_dir / "IMG_0001.JPG").touch()

        assert collect_image_files(temp_dir) == [temp_dir / "IMG_0001.JPG"]

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlinked_directory_not_followed(self, temp_dir: Path) -> None:
        """Test a directory link back to the root does not recurse."""
        (temp_dir / "a.jpg").touch()
        try:
            (temp_dir / "loop").symlink_to(temp_dir, target_is_directory=True)
        except OSError:
            pytest.skip("cannot create symlinks here")

        assert collect_image_files(temp_dir) == [temp_dir / "a.jpg"]


class TestExpandImagePaths:
    """Tests for expand_image_paths function."""

    def test_mixed_files_and_directories(self, temp_dir: Path) -> None:
        """Test directories are expanded and explicit images kept in order."""
        album = temp_dir / "album"
        album.mkdir()
        (album / "b.jpg").touch()
        (album / "a.jpg").touch()
        single = temp_dir / "single.png"
        single.touch()

        files = expand_image_paths([single, album])

        assert files == [single, album / "a.jpg", album / "b.jpg"]

    def test_non_image_file_skipped(self, temp_dir: Path, caplog) -> None:
        """Test an explicit non-image file is dropped with a warning."""
        notes = temp_dir / "notes.txt"
        notes.write_text("not an image")

        with caplog.at_level(logging.WARNING):
            assert expand_image_paths([notes]) == []

        assert "Skipping non-image file" in caplog.text

    def test_missing_image_kept(self, temp_dir: Path) -> None:
        """Test a missing path with an image extension is passed through."""
        missing = temp_dir / "missing.jpg"

        assert expand_image_paths([missing]) == [missing]

    def test_duplicates_removed(self, temp_dir: Path) -> None:
        """Test a file named directly and via its directory appears once."""
        photo = temp_dir / "a.jpg"
        photo.touch()

        assert expand_image_paths([photo, temp_dir]) == [photo]


class TestSetupLogging:
    """Tests for setup_logging function."""

    @patch("imagedate.shared.media_utils.logging.basicConfig")
    def test_levels(self, mock_config) -> None:
        """Test flag precedence when choosing the level."""
        setup_logging(quiet=True, verbose=True)
        assert mock_config.call_args.kwargs["level"] == logging.WARNING

        setup_logging(verbose=True)
        assert mock_config.call_args.kwargs["level"] == logging.DEBUG

        setup_logging()
        assert mock_config.call_args.kwargs["level"] == logging.INFO

        setup_logging(level="error")
        assert mock_config.call_args.kwargs["level"] == logging.ERROR
