"""
Conversion of raw control point positions into RAS coordinates.

Slicer stores each point in the coordinate system named by a three letter
axis code such as "LPS" or "RAS". Letter *i* names the direction that
component *i* of the position grows towards. For each anatomical axis the
component is taken from wherever the code names that axis, and negated when
the code uses the negative direction (L, P or I).
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from .errors import CoordinateSystemError

# (positive, negative) letter per canonical axis, in R, A, S order
AXIS_PAIRS: Tuple[Tuple[str, str], ...] = (("R", "L"), ("A", "P"), ("S", "I"))
VALID_AXIS_LETTERS = frozenset("RLAPSI")


@dataclass(frozen=True)
class Coordinate:
    r: float
    a: float
    s: float

    def as_array(self) -> np.ndarray:
        return np.array([self.r, self.a, self.s], dtype=float)


def axis_mapping(code: str, source: Optional[str] = None) -> Tuple[Tuple[int, float], ...]:
    """
    Resolve an axis code into one ``(component_index, sign)`` pair per RAS axis.

    Args:
        code: Three letter axis code, any case.
        source: File name used in error messages.

    Returns:
        Tuple of three ``(index, sign)`` pairs, for R, A and S.

    Raises:
        CoordinateSystemError: If the code is not three letters, contains a
            letter outside R/L/A/P/S/I, or does not name every axis.
    """
    if len(code) != 3:
        raise CoordinateSystemError(
            f"Invalid coordinate system '{code}'. Should be 3 characters", code, source
        )

    letters = code.upper()
    unknown = sorted(set(letters) - VALID_AXIS_LETTERS)
    if unknown:
        raise CoordinateSystemError(
            f"Invalid coordinate system '{code}'. Unknown axis letter(s): {', '.join(unknown)}",
            code,
            source,
        )

    mapping = []
    for positive, negative in AXIS_PAIRS:
        hits = [i for i, letter in enumerate(letters) if letter in (positive, negative)]
        if not hits:
            raise CoordinateSystemError(
                f"Could not find either {positive} or {negative} in coordinate system '{code}'",
                code,
                source,
            )
        # three axes over three letters: a repeated axis always leaves another one missing
        idx = hits[0]
        mapping.append((idx, -1.0 if letters[idx] == negative else 1.0))
    return tuple(mapping)


def to_ras(code: str, position: Sequence[float], source: Optional[str] = None) -> Coordinate:
    """Convert a position given in the ``code`` axis convention to RAS."""
    values = np.asarray(position, dtype=float)
    if values.shape != (3,):
        raise ValueError(f"Position should have 3 components, got shape {values.shape}")

    r, a, s = (sign * values[idx] for idx, sign in axis_mapping(code, source))
    return Coordinate(float(r), float(a), float(s))
