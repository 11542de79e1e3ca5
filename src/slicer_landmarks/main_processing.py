"""
Main script for the Slicer landmark pipeline.

This script orchestrates the complete workflow:
1. Discover the source files (scene bundles or loose markup files)
2. Extract the control points and normalize them to RAS per file
3. Sort samples and landmarks in natural order
4. Write "main data.csv" and "statistics.csv"

Configure the paths and parameters in the CONFIG section below, or pass them
on the command line.
"""

import argparse
import locale
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from . import config
from .core.aggregation import LandmarkAggregation
from .core.errors import SlicerLandmarksError
from .core.reports import ReportResult
from .modules.postprocessing.report_creation import run_report_creation
from .modules.preprocessing.coordinate_listing import collect_raw_coordinates
from .modules.preprocessing.markup_extraction import DiscoveryMode, run_markup_extraction

logger = logging.getLogger(__name__)

# =============================================================================
# CONFIG - Modify these paths and parameters for your run
# =============================================================================

INPUT_FOLDER: Optional[Path] = None  # Folder searched recursively for inputs
OUTPUT_FOLDER: Optional[Path] = None  # None writes the reports into INPUT_FOLDER
DISCOVERY_MODE = "archive"  # "archive" for .mrb bundles, "loose" for .mrk.json files

# =============================================================================


@dataclass(frozen=True)
class PipelineResult:
    aggregation: LandmarkAggregation
    reports: ReportResult


def run_pipeline(
    input_folder: Union[str, Path],
    output_folder: Optional[Union[str, Path]] = None,
    mode: Union[DiscoveryMode, str] = DiscoveryMode.ARCHIVE,
) -> PipelineResult:
    """Run extraction and report creation for one input folder.

    Args:
        input_folder: Folder searched recursively for source files.
        output_folder: Folder for the CSV reports, defaults to ``input_folder``.
        mode: Discovery mode, ``"archive"`` or ``"loose"``.

    Returns:
        PipelineResult with the aggregation and the written report paths.

    Raises:
        SlicerLandmarksError: On the first unreadable or invalid input.
        FileNotFoundError: If the input folder does not exist.
    """
    input_folder = Path(input_folder)
    output_folder = input_folder if output_folder is None else Path(output_folder)

    logger.info("Step 1: Extracting markups...")
    aggregation = run_markup_extraction(input_folder, mode)

    logger.info("Step 2: Creating reports...")
    reports = run_report_creation(aggregation, output_folder)

    return PipelineResult(aggregation, reports)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract Slicer markup landmarks into RAS coordinate reports."
    )
    parser.add_argument(
        "input_folder",
        nargs="?",
        type=Path,
        default=INPUT_FOLDER,
        help="Folder searched recursively for .mrb or .mrk.json files.",
    )
    parser.add_argument(
        "-o",
        "--output-folder",
        type=Path,
        help="Where to write the CSV reports (default: the input folder).",
    )
    parser.add_argument(
        "-m",
        "--mode",
        choices=[m.value for m in DiscoveryMode],
        help="Read markups from .mrb scene bundles or loose .mrk.json files "
        f"(default: {DISCOVERY_MODE}).",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the raw points of the loose .mrk.json files instead of writing "
        "reports. Cannot be combined with --output-folder or --mode.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)
    if args.input_folder is None:
        parser.error("an input folder is required (argument or INPUT_FOLDER in CONFIG)")
    if args.list and (args.output_folder is not None or args.mode is not None):
        parser.error("--list always reads loose files and writes no reports, "
                     "--output-folder and --mode do not apply")

    if args.output_folder is None:
        args.output_folder = OUTPUT_FOLDER
    if args.mode is None:
        args.mode = DISCOVERY_MODE
    return args


def main(argv: Optional[List[str]] = None) -> int:
    """Execute the complete landmark pipeline from the command line."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format=config.LOG_FORMAT,
        force=True,
    )
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning(f"Could not apply the system collation locale: {e}")

    logger.info("=" * 60)
    logger.info("Starting Slicer landmark pipeline")
    logger.info("=" * 60)

    try:
        if args.list:
            listing = collect_raw_coordinates(args.input_folder)
            print(listing.to_frame().to_string(index=False))
            return 0
        result = run_pipeline(args.input_folder, args.output_folder, args.mode)
    except (SlicerLandmarksError, OSError) as e:
        logger.error(f"Pipeline failed: {e}")
        return 1

    logger.info("=" * 60)
    logger.info("Slicer landmark pipeline complete!")
    logger.info("=" * 60)
    logger.info(f"  - Samples: {result.reports.sample_count}")
    logger.info(f"  - Landmarks: {result.reports.landmark_count}")
    logger.info(f"  - Main data: {result.reports.main_data_path}")
    logger.info(f"  - Statistics: {result.reports.statistics_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
