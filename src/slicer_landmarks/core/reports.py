"""
CSV reports built from a ``LandmarkAggregation``.

Two layouts are written:

- ``main data.csv``: one row per landmark, a 4 column group per sample
  (label, R, A, S).
- ``statistics.csv``: one row per sample, an A and S column per landmark.

A landmark missing from a sample still fills its cells with empty strings so
every row has as many cells as the header.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from .. import config
from .aggregation import LandmarkAggregation
from .coordinates import Coordinate
from .errors import FileAccessError

logger = logging.getLogger(__name__)

MAIN_DATA_AXES = ("R", "A", "S")
STATISTICS_AXES = ("A", "S")


@dataclass(frozen=True)
class ReportResult:
    main_data_path: Path
    statistics_path: Path
    landmark_count: int
    sample_count: int


def format_value(value: float) -> str:
    """Shortest round-trip decimal text, without exponent or trailing '.0'."""
    return np.format_float_positional(value, trim="-")


def _coordinate_cells(coordinate: Optional[Coordinate], axes: Sequence[str]) -> List[str]:
    if coordinate is None:
        return [""] * len(axes)
    return [format_value(getattr(coordinate, axis.lower())) for axis in axes]


def build_main_data_table(aggregation: LandmarkAggregation) -> pd.DataFrame:
    """
    Landmark-major table: for every sample a group of four columns headed by
    the sample name and "R", "A", "S". Each group repeats the landmark label.
    """
    landmarks = list(aggregation.landmarks)
    blocks = []
    for file_set in aggregation.files:
        rows = [
            [label] + _coordinate_cells(file_set.get(label), MAIN_DATA_AXES) for label in landmarks
        ]
        blocks.append(pd.DataFrame(rows, columns=[file_set.file_name, *MAIN_DATA_AXES]))

    if not blocks:
        return pd.DataFrame(index=range(len(landmarks)))
    # sample groups share the "R", "A", "S" labels, so columns are not unique
    return pd.concat(blocks, axis=1)


def build_statistics_table(aggregation: LandmarkAggregation) -> pd.DataFrame:
    """Sample-major table: "Samples" then "<label>__A", "<label>__S" per landmark."""
    header = [config.SAMPLES_HEADER]
    for label in aggregation.landmarks:
        header.extend(f"{label}__{axis}" for axis in STATISTICS_AXES)

    rows = []
    for file_set in aggregation.files:
        row = [file_set.file_name]
        for label in aggregation.landmarks:
            row.extend(_coordinate_cells(file_set.get(label), STATISTICS_AXES))
        rows.append(row)
    return pd.DataFrame(rows, columns=header)


def save_table(table: pd.DataFrame, output_csv: Path) -> None:
    """Write a report table, header included, without the index column."""
    try:
        table.to_csv(output_csv, index=False, encoding="utf-8")
    except OSError as e:
        raise FileAccessError(f"Could not create file: {e.strerror or e}", str(output_csv)) from e


def write_reports(
    aggregation: LandmarkAggregation, output_folder: Union[str, Path]
) -> ReportResult:
    """
    Build both tables and write them into ``output_folder``.

    Args:
        aggregation: Sorted samples and landmarks to report.
        output_folder: Destination folder, created when missing.

    Returns:
        ReportResult: Paths of the written files and the table sizes.

    Raises:
        FileAccessError: If the folder or a file cannot be created.
    """
    output_folder = Path(output_folder)
    try:
        output_folder.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileAccessError(f"Could not create folder: {e.strerror or e}", str(output_folder)) from e

    main_data_path = output_folder / config.MAIN_DATA_FILENAME
    statistics_path = output_folder / config.STATISTICS_FILENAME

    main_data = build_main_data_table(aggregation)
    statistics = build_statistics_table(aggregation)

    save_table(main_data, main_data_path)
    print(f"Created main data file at: {main_data_path} ({len(main_data)} landmarks)")
    logger.info(f"Main data saved to: {main_data_path}")

    save_table(statistics, statistics_path)
    print(f"Created statistics file at: {statistics_path} ({len(statistics)} samples)")
    logger.info(f"Statistics saved to: {statistics_path}")

    return ReportResult(
        main_data_path=main_data_path,
        statistics_path=statistics_path,
        landmark_count=len(aggregation.landmarks),
        sample_count=len(aggregation.files),
    )
