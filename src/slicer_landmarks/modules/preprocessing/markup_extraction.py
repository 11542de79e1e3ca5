"""
Markup extraction module.

This module finds the source files of a run, reads their markup documents and
aggregates the control points into one RAS coordinate set per file.
"""

import enum
import logging
from contextlib import closing
from pathlib import Path
from typing import Iterator, List, Optional, Union

from ... import config
from ...core.aggregation import (
    CoordinateSystemTracker,
    FileCoordinateSet,
    LandmarkAggregation,
    aggregate_file,
)
from ...core.archive_stream import iter_archive_entries
from ...core.collation import NaturalCollator
from ...core.markup import MarkupDocument, load_markup_file, parse_markup_document
from ...core.utils import read_files

logger = logging.getLogger(__name__)


class DiscoveryMode(str, enum.Enum):
    ARCHIVE = "archive"  # markups inside .mrb scene bundles
    LOOSE = "loose"  # one .mrk.json file per sample

    @property
    def extension(self) -> str:
        if self is DiscoveryMode.ARCHIVE:
            return config.ARCHIVE_EXTENSION
        return config.MARKUP_SUFFIX


def iter_archive_documents(archive: Path) -> Iterator[MarkupDocument]:
    """Parse every markup entry of a scene bundle, in archive order."""
    for entry_name, payload in iter_archive_entries(archive, config.MARKUP_SUFFIX):
        yield parse_markup_document(payload, f"{archive.name}:{entry_name}")


def discover_sources(input_folder: Union[str, Path], mode: DiscoveryMode) -> List[Path]:
    files = read_files(input_folder, extension=mode.extension)
    logger.info(f"Found {len(files)} '{mode.extension}' files in {input_folder}")
    return files


def extract_file_coordinates(
    path: Path, mode: DiscoveryMode, tracker: Optional[CoordinateSystemTracker] = None
) -> FileCoordinateSet:
    """Read one source file completely and return its landmark map."""
    if mode is DiscoveryMode.ARCHIVE:
        with closing(iter_archive_documents(path)) as documents:
            return aggregate_file(path.name, documents, tracker)
    return aggregate_file(path.name, [load_markup_file(path)], tracker)


def run_markup_extraction(
    input_folder: Union[str, Path],
    mode: Union[DiscoveryMode, str] = DiscoveryMode.ARCHIVE,
    collator: Optional[NaturalCollator] = None,
) -> LandmarkAggregation:
    """Extract and aggregate landmark coordinates from every source file.

    Files are processed one at a time. Any error aborts the extraction, no
    file is skipped.

    Args:
        input_folder: Folder that is searched recursively for source files.
        mode: ``"archive"`` for ``.mrb`` bundles, ``"loose"`` for
            ``.mrk.json`` files. Loose mode requires one coordinate system
            for all files.
        collator: Ordering used for samples and landmarks.

    Returns:
        LandmarkAggregation with samples and landmarks in natural order.

    Raises:
        FileNotFoundError: If the input folder does not exist.
    """
    mode = DiscoveryMode(mode)
    input_folder = Path(input_folder)
    if not input_folder.exists():
        raise FileNotFoundError(f"Input folder does not exist: {input_folder}")

    files = discover_sources(input_folder, mode)
    if not files:
        logger.warning("No input files found. Reports will be empty.")

    tracker = CoordinateSystemTracker() if mode is DiscoveryMode.LOOSE else None

    file_sets = []
    for i, path in enumerate(files, 1):
        file_set = extract_file_coordinates(path, mode, tracker)
        file_sets.append(file_set)
        logger.info(f"[{i:03d}/{len(files)}] Processed {path.name}: {len(file_set)} landmarks")

    aggregation = LandmarkAggregation.build(file_sets, collator)
    logger.info(
        f"Collected {len(aggregation.landmarks)} distinct landmarks "
        f"from {len(aggregation.files)} files"
    )
    return aggregation
