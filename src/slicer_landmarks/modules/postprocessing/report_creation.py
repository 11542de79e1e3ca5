"""
Report creation module.

This module writes the landmark-major and sample-major CSV reports.
"""

import logging
from pathlib import Path
from typing import Union

from ...core.aggregation import LandmarkAggregation
from ...core.reports import ReportResult, write_reports

logger = logging.getLogger(__name__)


def run_report_creation(
    aggregation: LandmarkAggregation, output_folder: Union[str, Path]
) -> ReportResult:
    """Write ``main data.csv`` and ``statistics.csv`` for an aggregation.

    Args:
        aggregation: Sorted samples and landmarks from the extraction step.
        output_folder: Folder receiving both CSV files.

    Returns:
        ReportResult with both paths and the landmark and sample counts.
    """
    if not aggregation.landmarks:
        logger.warning("No landmarks found. Reports will only contain headers.")

    result = write_reports(aggregation, output_folder)
    logger.info(
        f"Reports written for {result.sample_count} samples "
        f"and {result.landmark_count} landmarks"
    )
    return result
