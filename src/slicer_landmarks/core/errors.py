"""
Error types raised while extracting and reporting landmark coordinates.

Every error aborts the run. Each one keeps the offending file in ``source`` so
the message shown to the operator points at the file that has to be fixed.
"""

from typing import Optional


class SlicerLandmarksError(Exception):
    """Base class for all errors raised by the pipeline."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.message = message
        self.source = source
        super().__init__(message if source is None else f"{source}: {message}")


class ArchiveError(SlicerLandmarksError):
    """The container file is corrupt, truncated or otherwise unreadable."""


class FormatError(SlicerLandmarksError, ValueError):
    """A markup document is not valid JSON or does not match the schema."""


class CoordinateSystemError(SlicerLandmarksError, ValueError):
    """An axis code is not three letters or misses an anatomical axis."""

    def __init__(self, message: str, code: str, source: Optional[str] = None):
        self.code = code
        super().__init__(message, source)


class ConsistencyError(SlicerLandmarksError, ValueError):
    """More than one coordinate system was found where exactly one is required."""


class FileAccessError(SlicerLandmarksError, OSError):
    """A file could not be opened, read or created."""
