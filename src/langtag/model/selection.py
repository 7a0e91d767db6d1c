"""
Selection helpers: half-open logical ranges and substring resolution.

Ranges are half-open intervals ``[start, end)`` over logical offsets, i.e.
character indexes into the concatenation of all segment texts. Touching
ranges therefore do not overlap.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import InvalidRangeError, SelectionNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TextRange:
    """
    Half-open interval of logical offsets.

    Offsets must be non-negative integers. An inverted range (``end < start``)
    is representable and counts as empty, so retagging with it is a no-op.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        for label in ("start", "end"):
            value = getattr(self, label)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidRangeError(
                    f"TextRange {label} must be an int, got {type(value).__name__}"
                )
            if value < 0:
                raise InvalidRangeError(
                    f"TextRange {label} must be non-negative", start=self.start, end=self.end
                )

    @property
    def length(self) -> int:
        return max(0, self.end - self.start)

    @property
    def is_empty(self) -> bool:
        """True for zero-width and inverted ranges."""
        return self.end <= self.start

    def overlaps(self, start: int, end: int) -> bool:
        """Return True if ``[start, end)`` shares at least one offset with this range."""
        return max(self.start, start) < min(self.end, end)

    def intersection(self, start: int, end: int) -> Optional[Tuple[int, int]]:
        """Overlap with ``[start, end)`` as a ``(lo, hi)`` pair, or None when disjoint."""
        lo = max(self.start, start)
        hi = min(self.end, end)
        if lo >= hi:
            return None
        return lo, hi

    def check_bounds(self, text_length: int) -> None:
        """
        Raise InvalidRangeError if the range reaches past the logical text.

        No clamping: an out-of-bounds range is a caller bug.
        """
        if self.start > text_length or self.end > text_length:
            raise InvalidRangeError(
                "Range is outside the logical text",
                start=self.start,
                end=self.end,
                length=text_length,
            )

    def to_tuple(self) -> Tuple[int, int]:
        return (self.start, self.end)

    def to_dict(self) -> Dict[str, int]:
        return {"start": self.start, "end": self.end}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TextRange:
        try:
            return cls(data["start"], data["end"])
        except KeyError as exc:
            raise InvalidRangeError(f"Range record is missing field {exc.args[0]!r}") from exc

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


def resolve_selection(full_text: str, substring: str) -> TextRange:
    """
    Resolve a selected substring to its logical range.

    Only the leftmost occurrence is addressed: when the selected text repeats,
    later occurrences cannot be reached this way.

    Args:
        full_text: Logical text of the document.
        substring: Text selected by the user.

    Returns:
        TextRange ``[start, start + len(substring))``.

    Raises:
        SelectionNotFoundError: If the substring is empty or does not occur
            in ``full_text`` (e.g. a stale selection after an edit).
    """
    if not substring:
        raise SelectionNotFoundError("Nothing selected", selection=substring)

    start = full_text.find(substring)
    if start == -1:
        logger.warning("Selection not found in text: %r", substring[:40])
        raise SelectionNotFoundError("Selection not found in text", selection=substring)

    selection = TextRange(start, start + len(substring))
    logger.debug("Resolved selection %r to %s", substring[:40], selection)
    return selection


def find_all_occurrences(
    full_text: str, substring: str, overlapping: bool = False
) -> List[TextRange]:
    """
    Every occurrence of ``substring``, left to right.

    Non-overlapping by default; with ``overlapping=True`` a match may start
    inside the previous one ("aa" occurs twice in "aaa"). Lets a caller
    detect that a selection is ambiguous before resolving it.
    """
    if not substring:
        return []

    step = 1 if overlapping else len(substring)
    ranges: List[TextRange] = []
    position = full_text.find(substring)
    while position != -1:
        ranges.append(TextRange(position, position + len(substring)))
        position = full_text.find(substring, position + step)
    return ranges
