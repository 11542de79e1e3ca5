"""
Natural, locale aware ordering for landmark labels and file names.

Digit runs compare by value ("L2" < "L10"). Text runs compare through the
current ``LC_COLLATE`` locale after case folding and accent stripping, with
punctuation and whitespace ignored. Strings that tie on that comparison are
ordered by their raw text so the result is a total order.
"""

import locale
import re
import unicodedata
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar

T = TypeVar("T")

_DIGIT_RUN = re.compile(r"(\d+)")


def _strip_ignorable(text: str) -> str:
    """Drop punctuation, whitespace and combining marks, fold case."""
    decomposed = unicodedata.normalize("NFKD", text)
    kept = [
        ch
        for ch in decomposed
        if not unicodedata.category(ch).startswith(("P", "Z", "C", "M"))
    ]
    return "".join(kept).casefold()


class NaturalCollator:
    def __init__(self, transform: Optional[Callable[[str], str]] = None):
        # locale.strxfrm follows whatever LC_COLLATE is active when keys are built
        self.transform = transform or locale.strxfrm

    def primary_key(self, text: str) -> Tuple[Tuple[int, int, str], ...]:
        parts = []
        for idx, chunk in enumerate(_DIGIT_RUN.split(text)):
            if idx % 2:
                # digit runs sort before text at the same position
                parts.append((0, int(chunk), ""))
                continue
            folded = _strip_ignorable(chunk)
            if folded:
                parts.append((1, 0, self.transform(folded)))
        return tuple(parts)

    def sort_key(self, text: str):
        return self.primary_key(text), text

    def compare(self, lhs: str, rhs: str) -> int:
        left, right = self.sort_key(lhs), self.sort_key(rhs)
        return (left > right) - (left < right)

    def sorted(self, items: Iterable[T], key: Optional[Callable[[T], str]] = None) -> List[T]:
        if key is None:
            return sorted(items, key=self.sort_key)
        return sorted(items, key=lambda item: self.sort_key(key(item)))


def natural_sorted(items: Iterable[T], key: Optional[Callable[[T], str]] = None) -> List[T]:
    """Sort ``items`` in natural order, optionally through a ``key`` projection."""
    return NaturalCollator().sorted(items, key=key)
