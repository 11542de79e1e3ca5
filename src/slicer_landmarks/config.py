"""
Default settings for the landmark extraction pipeline.

The values here are read by the core modules at call time, so scripts can
override them by assigning to the module attributes before running a step.
"""

import logging

# =============================================================================
# CONFIG - Input discovery
# =============================================================================

ARCHIVE_EXTENSION = ".mrb"  # Slicer scene bundles (ZIP containers)
MARKUP_SUFFIX = ".mrk.json"  # Markup documents, inside bundles or loose
ARCHIVE_CHUNK_SIZE = 64 * 1024  # Bytes read per chunk from an archive member

# =============================================================================
# CONFIG - Outputs
# =============================================================================

MAIN_DATA_FILENAME = "main data.csv"
STATISTICS_FILENAME = "statistics.csv"
SAMPLES_HEADER = "Samples"
DIAGNOSTICS_FILENAME = "markup_diagnostics.csv"

# =============================================================================
# CONFIG - Logging
# =============================================================================

LOG_LEVEL = logging.INFO
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
