"""
Scan a folder of markup sources and report which ones would stop the pipeline.

The pipeline aborts on the first bad input. This tool checks every file on its
own instead and writes one CSV line per file with the reasons it failed.
"""

import argparse
import csv
import logging
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import config
from .core.aggregation import aggregate_file
from .core.errors import (
    ArchiveError,
    ConsistencyError,
    CoordinateSystemError,
    FileAccessError,
    FormatError,
    SlicerLandmarksError,
)
from .core.markup import has_finite_positions, load_markup_file
from .core.utils import normalize_label, read_files
from .modules.preprocessing.markup_extraction import (
    DiscoveryMode,
    iter_archive_documents,
)

logger = logging.getLogger(__name__)

REASON_CODES = {
    ArchiveError: "archive_error",
    FormatError: "format_error",
    CoordinateSystemError: "coordinate_system_error",
    ConsistencyError: "consistency_error",
    FileAccessError: "file_access_error",
}


def _reason_code(error: SlicerLandmarksError) -> str:
    for kind, code in REASON_CODES.items():
        if isinstance(error, kind):
            return code
    return "error"


def analyze_markup_source(path: Path) -> Dict[str, Any]:
    """
    Return a dict with keys:
      file, ok, reasons (list), notes (list), documents, control_points,
      coordinate_systems (list)
    """
    info = {
        "file": str(path),
        "ok": False,
        "reasons": [],
        "notes": [],
        "documents": 0,
        "control_points": 0,
        "coordinate_systems": [],
    }

    is_archive = path.name.lower().endswith(config.ARCHIVE_EXTENSION)
    try:
        if is_archive:
            documents = list(iter_archive_documents(path))
        else:
            documents = [load_markup_file(path)]

        info["documents"] = len(documents)
        if not documents:
            info["notes"].append("no_markup_entries")

        labels = []
        for document in documents:
            info["control_points"] += document.control_point_count
            for markup in document.markups:
                if markup.coordinate_system not in info["coordinate_systems"]:
                    info["coordinate_systems"].append(markup.coordinate_system)
                labels.extend(normalize_label(p.label) for p in markup.control_points)
            if not has_finite_positions(document):
                info["notes"].append(f"non_finite_positions:{document.source}")

        duplicates = sorted(label for label, n in Counter(labels).items() if n > 1)
        if duplicates:
            info["notes"].append(f"duplicate_labels:{','.join(duplicates)}")
        if len({c.upper() for c in info["coordinate_systems"]}) > 1:
            info["notes"].append("mixed_coordinate_systems")

        # runs the RAS conversion so bad axis codes show up as failures
        aggregate_file(path.name, documents)

    except SlicerLandmarksError as e:
        logger.debug(f"{path.name}: {e}")
        info["reasons"].append(_reason_code(e))
        info["notes"].append(str(e))
        return info

    info["ok"] = True
    return info


def diagnose_folder(
    folder: Path, mode: DiscoveryMode = DiscoveryMode.ARCHIVE, output_csv: Optional[Path] = None
) -> List[Dict[str, Any]]:
    """Analyze every source file below ``folder`` and write a CSV summary."""
    files = read_files(folder, extension=DiscoveryMode(mode).extension)
    results = [analyze_markup_source(p) for p in files]

    reason_counter = Counter()
    ok_count = 0
    fail_count = 0
    for r in results:
        if r["ok"]:
            ok_count += 1
        else:
            fail_count += 1
        for reason in r["reasons"]:
            reason_counter[reason] += 1

    out_csv = output_csv or folder / config.DIAGNOSTICS_FILENAME
    with out_csv.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(
            ["file", "ok", "reasons", "notes", "documents", "control_points", "coordinate_systems"]
        )
        for r in results:
            w.writerow(
                [
                    r["file"],
                    "OK" if r["ok"] else "FAIL",
                    "|".join(r["reasons"]),
                    "|".join(r["notes"]),
                    r["documents"],
                    r["control_points"],
                    "|".join(r["coordinate_systems"]),
                ]
            )

    print(f"Scanned {len(results)} files -> OK: {ok_count}, FAIL: {fail_count}")
    if reason_counter:
        print("\nTop failure reasons:")
        for reason, n in reason_counter.most_common():
            print(f"  - {reason}: {n}")
    print(f"\nCSV report written to: {out_csv}")
    return results


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Check markup sources one file at a time.")
    parser.add_argument("folder", type=Path)
    parser.add_argument("-m", "--mode", choices=[m.value for m in DiscoveryMode], default="archive")
    parser.add_argument("-o", "--output-csv", type=Path, default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT, force=True)
    results = diagnose_folder(args.folder, DiscoveryMode(args.mode), args.output_csv)
    return 0 if all(r["ok"] for r in results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
