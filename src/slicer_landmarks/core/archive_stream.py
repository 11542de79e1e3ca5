"""
Streaming access to markup documents stored inside Slicer scene bundles.

A bundle (``.mrb``) is a ZIP container. ``iter_archive_events`` turns it into
a flat stream of entry events, delivering each member's payload in chunks of
arbitrary size. ``EntryBufferDecoder`` reassembles those chunks into one
complete buffer per entry and only hands a buffer out once the end-of-entry
marker has been seen.
"""

from __future__ import annotations

import enum
import logging
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Iterator, List, Optional, Tuple, Union

from .. import config
from .errors import ArchiveError, FileAccessError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartOfEntry:
    name: str


@dataclass(frozen=True)
class DataChunk:
    data: bytes


@dataclass(frozen=True)
class EndOfEntry:
    name: str


ArchiveEvent = Union[StartOfEntry, DataChunk, EndOfEntry]


class DecoderState(enum.Enum):
    AWAITING_ENTRY = "awaiting-entry"
    ACCUMULATING = "accumulating"
    ENTRY_COMPLETE = "entry-complete"


def iter_archive_events(
    source: BinaryIO,
    name_filter: Callable[[str], bool],
    *,
    archive_name: str = "<archive>",
    chunk_size: Optional[int] = None,
) -> Iterator[ArchiveEvent]:
    """
    Yield start/data/end events for every member of a ZIP container whose
    name passes ``name_filter``.

    Args:
        source: Seekable binary file object holding the container.
        name_filter: Predicate over member names.
        archive_name: Name used in error messages.
        chunk_size: Bytes per read; defaults to ``config.ARCHIVE_CHUNK_SIZE``.

    Raises:
        ArchiveError: If the container or one of its members is corrupt.
    """
    if chunk_size is None:
        chunk_size = config.ARCHIVE_CHUNK_SIZE

    try:
        with zipfile.ZipFile(source) as zf:
            for info in zf.infolist():
                if info.is_dir() or not name_filter(info.filename):
                    continue
                yield StartOfEntry(info.filename)
                with zf.open(info) as member:
                    while True:
                        chunk = member.read(chunk_size)
                        if not chunk:
                            break
                        yield DataChunk(chunk)
                yield EndOfEntry(info.filename)
    except (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error, EOFError) as e:
        raise ArchiveError(f"Failed to read archive data: {e}", archive_name) from e
    except NotImplementedError as e:
        # unsupported compression method
        raise ArchiveError(f"Failed to read archive data: {e}", archive_name) from e
    except RuntimeError as e:
        # encrypted member, no password
        raise ArchiveError(f"Failed to read archive data: {e}", archive_name) from e
    except (ValueError, OSError) as e:
        # header offsets pointing outside the file
        raise ArchiveError(f"Failed to read archive data: {e}", archive_name) from e


class EntryBufferDecoder:
    """
    Collects data chunks into complete entry buffers.

    States move AWAITING_ENTRY -> ACCUMULATING on a start marker and
    ACCUMULATING -> ENTRY_COMPLETE on the end marker; ``take()`` hands the
    buffer out and returns to AWAITING_ENTRY.
    """

    def __init__(self, archive_name: str = "<archive>"):
        self.archive_name = archive_name
        self.state = DecoderState.AWAITING_ENTRY
        self.entry_name: Optional[str] = None
        self._chunks: List[bytes] = []

    def feed(self, event: ArchiveEvent) -> bool:
        """Consume one event. Returns True once an entry is complete."""
        if self.state is DecoderState.ENTRY_COMPLETE:
            raise ArchiveError("Previous entry was not taken before new data", self.archive_name)

        if isinstance(event, StartOfEntry):
            # a new start discards anything from an entry that never ended
            self.entry_name = event.name
            self._chunks = []
            self.state = DecoderState.ACCUMULATING
            return False

        if self.state is not DecoderState.ACCUMULATING:
            raise ArchiveError(
                f"Received {type(event).__name__} outside of an entry", self.archive_name
            )

        if isinstance(event, DataChunk):
            self._chunks.append(event.data)
            return False

        if isinstance(event, EndOfEntry):
            self.state = DecoderState.ENTRY_COMPLETE
            return True

        raise ArchiveError(f"Unknown archive event: {event!r}", self.archive_name)

    def take(self) -> Tuple[str, bytes]:
        if self.state is not DecoderState.ENTRY_COMPLETE:
            raise ArchiveError("No complete entry available", self.archive_name)
        name, buffer = self.entry_name, b"".join(self._chunks)
        self.entry_name = None
        self._chunks = []
        self.state = DecoderState.AWAITING_ENTRY
        return name, buffer

    def finish(self) -> None:
        """Check that the stream did not stop in the middle of an entry."""
        if self.state is not DecoderState.AWAITING_ENTRY:
            raise ArchiveError(
                f"Archive ended inside entry '{self.entry_name}'", self.archive_name
            )


def iter_entry_buffers(
    events: Iterable[ArchiveEvent], archive_name: str = "<archive>"
) -> Iterator[Tuple[str, bytes]]:
    """Turn an event stream into ``(entry_name, payload)`` pairs."""
    decoder = EntryBufferDecoder(archive_name)
    for event in events:
        if decoder.feed(event):
            yield decoder.take()
    decoder.finish()


def iter_archive_entries(
    path: Union[str, Path], suffix: Optional[str] = None
) -> Iterator[Tuple[str, bytes]]:
    """
    Yield the complete payload of every member of ``path`` whose name ends
    with ``suffix`` (``config.MARKUP_SUFFIX`` by default).

    Raises:
        FileAccessError: If the archive cannot be opened.
        ArchiveError: If the archive is corrupt.
    """
    path = Path(path)
    if suffix is None:
        suffix = config.MARKUP_SUFFIX

    try:
        handle = open(path, "rb")
    except OSError as e:
        raise FileAccessError(f"Could not open file: {e.strerror or e}", path.name) from e

    with handle:
        events = iter_archive_events(
            handle, lambda name: name.endswith(suffix), archive_name=path.name
        )
        for name, payload in iter_entry_buffers(events, path.name):
            logger.debug(f"{path.name}: read entry {name} ({len(payload)} bytes)")
            yield name, payload
