"""
Coordinate listing module.

Lists the raw control points of all loose markup files below a folder, in the
single coordinate system they were exported with. Nothing is converted to
RAS here; the axis letters of that system become the column names.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Union

import pandas as pd

from ... import config
from ...core.aggregation import CoordinateSystemTracker
from ...core.errors import ConsistencyError
from ...core.markup import load_markup_file
from ...core.utils import read_files

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NamedPoint:
    name: str
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class CoordinateListing:
    axes: Tuple[str, str, str]
    points: Tuple[NamedPoint, ...]

    def to_frame(self) -> pd.DataFrame:
        rows = [(p.name, p.x, p.y, p.z) for p in self.points]
        return pd.DataFrame(rows, columns=["Name", *self.axes])


def collect_raw_coordinates(folder: Union[str, Path]) -> CoordinateListing:
    """Collect every control point from the loose markup files in ``folder``.

    Args:
        folder: Folder searched recursively for ``.mrk.json`` files.

    Returns:
        CoordinateListing with the shared axis letters and the points in
        file and document order.

    Raises:
        ConsistencyError: If the files use different coordinate systems, or
            no coordinate system is found at all.
    """
    tracker = CoordinateSystemTracker()
    points: List[NamedPoint] = []

    for path in read_files(folder, extension=config.MARKUP_SUFFIX):
        document = load_markup_file(path)
        for markup in document.markups:
            tracker.check(markup.coordinate_system, path.name)
            for point in markup.control_points:
                points.append(NamedPoint(point.label, *point.position))

    if tracker.coordinate_system is None:
        raise ConsistencyError("No coordinate system found", str(folder))

    axes = tuple(tracker.coordinate_system)
    logger.info(f"Listed {len(points)} points in coordinate system {tracker.coordinate_system}")
    return CoordinateListing(axes, tuple(points))
