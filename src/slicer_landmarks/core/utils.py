import re
from pathlib import Path
from typing import List, Union

_WHITESPACE_RUN = re.compile(r"\s+")


def read_files(path: Union[str, Path], extension: str) -> List[Path]:
    """
    Recursively collect every file below ``path`` whose name ends with
    ``extension`` (case-insensitive).

    Args:
        path: Root folder to walk.
        extension: File name ending to select, e.g. ".mrb" or ".mrk.json".

    Returns:
        List[Path]: Matching files in walk order.

    Raises:
        FileNotFoundError: If the folder does not exist.
    """
    root = Path(path)
    if not root.is_dir():
        raise FileNotFoundError(f"Input folder does not exist: {root}")

    extension = extension.lower()
    return [
        p for p in sorted(root.rglob("*")) if p.is_file() and p.name.lower().endswith(extension)
    ]


def normalize_label(label: str) -> str:
    """Trim a label and collapse inner whitespace runs into single spaces."""
    return _WHITESPACE_RUN.sub(" ", label.strip())
