"""
Aggregation of normalized landmark coordinates across source files.

Each source file yields one ``FileCoordinateSet`` mapping normalized labels to
RAS coordinates. Once every file has been read the sets are sealed into a
``LandmarkAggregation`` holding the files and the distinct landmarks, both in
natural order.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from .collation import NaturalCollator
from .coordinates import Coordinate, to_ras
from .errors import ConsistencyError
from .markup import MarkupDocument
from .utils import normalize_label

logger = logging.getLogger(__name__)


@dataclass
class FileCoordinateSet:
    file_name: str
    coordinates: Dict[str, Coordinate] = field(default_factory=dict)

    def add(self, label: str, coordinate: Coordinate) -> None:
        if label in self.coordinates:
            logger.debug(f"{self.file_name}: landmark '{label}' redefined, keeping the last one")
        self.coordinates[label] = coordinate

    def get(self, label: str) -> Optional[Coordinate]:
        return self.coordinates.get(label)

    def __len__(self) -> int:
        return len(self.coordinates)


class CoordinateSystemTracker:
    """Enforces a single coordinate system across all loose markup files."""

    def __init__(self):
        self.coordinate_system: Optional[str] = None
        self.first_source: Optional[str] = None

    def check(self, code: str, source: str) -> None:
        if self.coordinate_system is None:
            self.coordinate_system = code
            self.first_source = source
            return
        if code.upper() != self.coordinate_system.upper():
            raise ConsistencyError(
                "Multiple different coordinate systems found "
                f"('{self.coordinate_system}' in {self.first_source}, '{code}' here). "
                "Please make sure to only export using one type",
                source,
            )


def aggregate_file(
    file_name: str,
    documents: Iterable[MarkupDocument],
    tracker: Optional[CoordinateSystemTracker] = None,
) -> FileCoordinateSet:
    """
    Build the label -> RAS coordinate map for one source file.

    Args:
        file_name: Name the file is reported under.
        documents: Markup documents read from that file, in read order.
        tracker: When given, every markup's coordinate system must match the
            one seen first.

    Returns:
        FileCoordinateSet: Later points with the same label replace earlier ones.
    """
    file_set = FileCoordinateSet(file_name)
    for document in documents:
        for markup in document.markups:
            if tracker is not None:
                tracker.check(markup.coordinate_system, file_name)
            for point in markup.control_points:
                coordinate = to_ras(markup.coordinate_system, point.position, file_name)
                file_set.add(normalize_label(point.label), coordinate)
    return file_set


def collect_landmarks(file_sets: Iterable[FileCoordinateSet]) -> List[str]:
    """Distinct labels over all files, in order of first appearance."""
    seen: Dict[str, None] = {}
    for file_set in file_sets:
        for label in file_set.coordinates:
            seen.setdefault(label, None)
    return list(seen)


@dataclass(frozen=True)
class LandmarkAggregation:
    files: Sequence[FileCoordinateSet]
    landmarks: Sequence[str]

    @classmethod
    def build(
        cls, file_sets: Iterable[FileCoordinateSet], collator: Optional[NaturalCollator] = None
    ) -> "LandmarkAggregation":
        collator = collator or NaturalCollator()
        file_sets = list(file_sets)
        files = collator.sorted(file_sets, key=lambda fs: fs.file_name)
        landmarks = collator.sorted(collect_landmarks(file_sets))
        return cls(tuple(files), tuple(landmarks))

    def to_frame(self) -> pd.DataFrame:
        """Long-form table with one row per (sample, landmark) pair present."""
        rows = []
        for fs in self.files:
            for label in self.landmarks:
                coordinate = fs.get(label)
                if coordinate is not None:
                    rows.append((fs.file_name, label, coordinate.r, coordinate.a, coordinate.s))
        return pd.DataFrame(rows, columns=["sample", "landmark", "R", "A", "S"])
