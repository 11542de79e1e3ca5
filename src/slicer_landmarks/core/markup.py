"""
Markup documents as written by 3D Slicer (``*.mrk.json``).

Only the parts needed for landmark extraction are decoded: each markup's
coordinate system and its control points. Everything else in the document is
ignored. Decoding is strict, a document either matches completely or raises
``FormatError``.
"""

from __future__ import annotations

import codecs
import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from .errors import CoordinateSystemError, FileAccessError, FormatError


@dataclass(frozen=True)
class ControlPoint:
    label: str
    position: Tuple[float, float, float]


@dataclass(frozen=True)
class Markup:
    coordinate_system: str
    control_points: Tuple[ControlPoint, ...]

    def __post_init__(self):
        if len(self.coordinate_system) != 3:
            raise CoordinateSystemError(
                "Invalid coordinate system. Should be 3 characters, "
                f"got '{self.coordinate_system}'",
                self.coordinate_system,
            )


@dataclass(frozen=True)
class MarkupDocument:
    markups: Tuple[Markup, ...]
    source: str = "<memory>"

    @property
    def control_point_count(self) -> int:
        return sum(len(m.control_points) for m in self.markups)


def _field_path(where: str, key: str) -> str:
    return f"{where}.{key}" if where else key


def _require(obj: Dict[str, Any], key: str, kind, where: str, source: str):
    path = _field_path(where, key)
    if key not in obj:
        raise FormatError(f"Missing required field '{path}'", source)
    value = obj[key]
    # bool is an int subclass but never a valid value here
    if not isinstance(value, kind) or isinstance(value, bool):
        raise FormatError(
            f"Field '{path}' should be {_kind_name(kind)}, got {type(value).__name__}", source
        )
    return value


def _kind_name(kind) -> str:
    names = {list: "a list", str: "a string", dict: "an object"}
    return names.get(kind, getattr(kind, "__name__", str(kind)))


def _decode_position(raw: List[Any], where: str, source: str) -> Tuple[float, float, float]:
    if len(raw) != 3:
        raise FormatError(f"'{where}' should have 3 components, got {len(raw)}", source)
    values = []
    for value in raw:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise FormatError(f"'{where}' should only contain numbers, got {value!r}", source)
        try:
            values.append(float(value))
        except OverflowError as e:
            raise FormatError(f"'{where}' has a number out of range: {e}", source) from e
    return values[0], values[1], values[2]


def _decode_markup(raw: Any, where: str, source: str) -> Markup:
    if not isinstance(raw, dict):
        raise FormatError(f"'{where}' should be an object", source)

    coordinate_system = _require(raw, "coordinateSystem", str, where, source)
    raw_points = _require(raw, "controlPoints", list, where, source)

    points = []
    for idx, raw_point in enumerate(raw_points):
        point_where = f"{where}.controlPoints[{idx}]"
        if not isinstance(raw_point, dict):
            raise FormatError(f"'{point_where}' should be an object", source)
        label = _require(raw_point, "label", str, point_where, source)
        position = _require(raw_point, "position", list, point_where, source)
        position = _decode_position(position, f"{point_where}.position", source)
        points.append(ControlPoint(label, position))

    try:
        return Markup(coordinate_system, tuple(points))
    except CoordinateSystemError as e:
        raise CoordinateSystemError(e.message, e.code, source) from None


def parse_markup_document(data: Union[bytes, str], source: str = "<memory>") -> MarkupDocument:
    """
    Decode one markup JSON document.

    Args:
        data: Raw document, as bytes (UTF-8, optional BOM) or text.
        source: Name of the file or archive entry, used in error messages.

    Returns:
        MarkupDocument: The decoded markups with their control points.

    Raises:
        FormatError: If the data is not JSON or misses a required field.
        CoordinateSystemError: If a coordinate system is not 3 characters.
    """
    if isinstance(data, bytes):
        if data.startswith(codecs.BOM_UTF8):
            data = data[len(codecs.BOM_UTF8):]
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FormatError(f"Failed to parse a json file: {e}", source) from e

    try:
        payload = json.loads(data)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, integer digit limit, nesting depth
        raise FormatError(f"Failed to parse a json file: {e}", source) from e

    if not isinstance(payload, dict):
        raise FormatError("Markup document should be a JSON object", source)

    raw_markups = _require(payload, "markups", list, "", source)
    markups = tuple(_decode_markup(m, f"markups[{i}]", source) for i, m in enumerate(raw_markups))
    return MarkupDocument(markups, source)


def load_markup_file(path: Union[str, Path]) -> MarkupDocument:
    """Read and decode a loose ``.mrk.json`` file."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise FileAccessError(f"Could not open file: {e.strerror or e}", path.name) from e
    return parse_markup_document(data, path.name)


def has_finite_positions(document: MarkupDocument) -> bool:
    return all(
        math.isfinite(v) for m in document.markups for p in m.control_points for v in p.position
    )
