"""
Exceptions raised while resolving image dates.
"""


class ImageDateError(Exception):
    """Base class for all image date errors."""

    pass


class ImageOpenError(ImageDateError):
    """Raised when the image file cannot be opened."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"Failed to open file: {filename}")
        self.filename = filename


class DateParseError(ImageDateError, ValueError):
    """Raised when a metadata value is not a date in the expected layout."""

    pass


class MetadataDecodeError(ImageDateError):
    """Raised when no metadata container can be decoded from a file."""

    pass


class HostClockError(ImageDateError):
    """Raised when the host reports a file instant before the Unix epoch.

    This is never treated as missing data: it aborts the resolution.
    """

    pass


class ReaderNotStartedError(ImageDateError):
    """Raised when a metadata reader that needs a context manager was not entered.

    This is a usage error, not missing metadata, so the resolver lets it
    propagate.
    """

    pass
