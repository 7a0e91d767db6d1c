"""
Модель текстового сегмента (Segment) с единой языковой меткой.

A Segment is the minimal unit of a tagged document: a contiguous run of text
sharing one tag. Segments are immutable values; splitting, slicing, retagging
and merging all return new instances.

Module: src/langtag/model/segment.py
Project: langtag
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final, Iterable

from .exceptions import SegmentError

logger: Final = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Segment:
    """
    Represents a contiguous piece of text carrying one tag.

    Attributes:
        tag: Opaque tag label (a member of the document's TagSet).
        text: Text content. Non-empty in every canonical document.

    Example:
        >>> seg = Segment("inglés", "Hello world")
        >>> left, right = seg.split_at(5)
        >>> left.text, right.text
        ('Hello', ' world')
        >>> left.merge_with(right) == seg
        True
    """

    tag: str
    text: str

    def __post_init__(self) -> None:
        # Language members are str subclasses; keep the plain value so that
        # equality and serialization see one representation
        if isinstance(self.tag, Enum):
            object.__setattr__(self, "tag", self.tag.value)

    def validate(self) -> None:
        """
        Validate segment content.

        Raises:
            SegmentError: If the tag or text is not a string, or the text is empty.
        """
        if not isinstance(self.tag, str) or not self.tag:
            raise SegmentError(
                f"Segment tag must be a non-empty str, got {self.tag!r}",
                context={"tag_type": type(self.tag).__name__},
            )
        if not isinstance(self.text, str):
            raise SegmentError(
                f"Segment text must be str, got {type(self.text).__name__}",
                context={"tag": self.tag},
            )
        if not self.text:
            raise SegmentError("Segment text cannot be empty", context={"tag": self.tag})

    def can_merge_with(self, other: object) -> bool:
        """Segments merge only when both are Segments with the same tag."""
        return isinstance(other, Segment) and self.tag == other.tag

    def merge_with(self, other: "Segment") -> "Segment":
        """
        Merge this segment with the one that follows it.

        Returns:
            A new Segment with concatenated text.

        Raises:
            SegmentError: If the tags differ.
        """
        if not self.can_merge_with(other):
            raise SegmentError(
                "Cannot merge segments with different tags",
                context={"left": self.tag, "right": getattr(other, "tag", None)},
            )
        return Segment(self.tag, self.text + other.text)

    def split_at(self, position: int) -> tuple["Segment", "Segment"]:
        """
        Split this segment at a local offset into two non-empty segments.

        Raises:
            SegmentError: If position is not strictly inside the text.
        """
        if not (0 < position < len(self.text)):
            raise SegmentError(
                f"Split position {position} out of bounds for text length {len(self.text)}",
                context={"tag": self.tag},
            )
        return Segment(self.tag, self.text[:position]), Segment(self.tag, self.text[position:])

    def slice(self, lo: int, hi: int) -> "Segment":
        """Return the sub-segment covering local offsets [lo, hi) with the same tag."""
        if not (0 <= lo <= hi <= len(self.text)):
            raise SegmentError(
                f"Invalid slice [{lo}:{hi}] for text length {len(self.text)}",
                context={"tag": self.tag},
            )
        return Segment(self.tag, self.text[lo:hi])

    def retagged(self, tag: str) -> "Segment":
        """Same text, new tag."""
        return Segment(tag, self.text)

    def to_dict(self) -> dict[str, Any]:
        return {"tag": self.tag, "text": self.text}

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Segment":
        """
        Build a segment from a ``{"tag", "text"}`` record.

        Records written by the earlier editor format (``{"idioma", "texto"}``)
        are accepted as well.
        """
        if not isinstance(data, dict):
            raise SegmentError(f"Segment record must be a dict, got {type(data).__name__}")
        try:
            tag = data["tag"] if "tag" in data else data["idioma"]
            text = data["text"] if "text" in data else data["texto"]
        except KeyError as exc:
            raise SegmentError(
                f"Segment record is missing field {exc.args[0]!r}",
                context={"keys": ",".join(sorted(data))},
            ) from exc
        if not isinstance(tag, str) or not isinstance(text, str):
            raise SegmentError(
                "Segment record fields must be str",
                context={"tag_type": type(tag).__name__, "text_type": type(text).__name__},
            )
        return Segment(tag, text)

    def __len__(self) -> int:
        return len(self.text)

    def __repr__(self) -> str:
        text_preview = self.text[:20] + "..." if len(self.text) > 20 else self.text
        return f"Segment(tag={self.tag!r}, text={text_preview!r})"


def get_text(segments: Iterable[Segment]) -> str:
    """Logical text: the concatenation of every segment's text, in order."""
    return "".join(segment.text for segment in segments)


def merge_consecutive_segments(segments: Iterable[Segment]) -> list[Segment]:
    """
    Canonicalize a segment sequence.

    Single left-to-right pass with an accumulator: a segment whose tag equals the
    accumulator's is concatenated into it, otherwise the accumulator is flushed.
    The result has no empty segments and no two adjacent segments with the same tag.

    Raises:
        SegmentError: If a non-empty piece has a non-string tag or text.
    """
    merged: list[Segment] = []
    pending: list[str] = []
    current_tag: Any = None
    count = 0

    for segment in segments:
        count += 1
        if segment.text == "":
            # Transient empty pieces never reach a canonical document
            continue
        segment.validate()
        if pending and segment.tag == current_tag:
            pending.append(segment.text)
            continue
        if pending:
            merged.append(Segment(current_tag, "".join(pending)))
        current_tag = segment.tag
        pending = [segment.text]

    if pending:
        merged.append(Segment(current_tag, "".join(pending)))

    logger.debug(f"Merged {count} segments into {len(merged)} segments")
    return merged
