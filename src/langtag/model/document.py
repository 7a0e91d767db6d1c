"""
Tagged Document Model.

The document is an ordered, canonical sequence of Segments over a closed TagSet.
It is an immutable value: retagging a range returns a new document and leaves
the original untouched, so a failed retag never leaves a partial state.

Invariants held by every TaggedDocument:
    - every segment's text is non-empty;
    - no two consecutive segments share a tag;
    - retagging never changes the logical text (characters or their order).

Author: langtag developers
Project: langtag
License: MIT
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .enums import TagSet
from .exceptions import InvalidRangeError, SegmentError
from .segment import Segment, get_text, merge_consecutive_segments
from .selection import TextRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SegmentOverlap:
    """
    A segment touched by a range.

    Attributes:
        index: Position of the segment in the document.
        segment: The segment itself.
        offset: Logical offset where the segment starts.
        lo: Segment-local start of the overlap.
        hi: Segment-local end of the overlap (exclusive).
    """

    index: int
    segment: Segment
    offset: int
    lo: int
    hi: int

    @property
    def covers_segment(self) -> bool:
        return self.lo == 0 and self.hi == len(self.segment.text)


def iter_segment_spans(segments: Iterable[Segment]) -> Iterator[Tuple[int, Segment]]:
    """Yield ``(offset, segment)`` pairs, carrying a running logical offset."""
    offset = 0
    for segment in segments:
        yield offset, segment
        offset += len(segment.text)


def find_overlaps(segments: Sequence[Segment], text_range: TextRange) -> List[SegmentOverlap]:
    """Segments whose logical interval intersects ``text_range``, with local overlap bounds."""
    overlaps: List[SegmentOverlap] = []
    for index, (offset, segment) in enumerate(iter_segment_spans(segments)):
        if offset >= text_range.end:
            break
        hit = text_range.intersection(offset, offset + len(segment.text))
        if hit is None:
            continue
        overlaps.append(
            SegmentOverlap(
                index=index, segment=segment, offset=offset, lo=hit[0] - offset, hi=hit[1] - offset
            )
        )
    return overlaps


def split_and_overwrite(
    segments: Sequence[Segment], text_range: TextRange, tag: str
) -> List[Segment]:
    """
    Split the segments touched by ``text_range`` at its boundaries and give the
    covered pieces ``tag``.

    Untouched segments are copied in order. Leading and trailing pieces keep the
    original tag and are only emitted when non-empty. The result keeps the
    logical text intact but may hold adjacent segments with equal tags; pass it
    through merge_consecutive_segments to restore canonical form.
    """
    pieces: List[Segment] = []
    for offset, segment in iter_segment_spans(segments):
        hit = text_range.intersection(offset, offset + len(segment.text))
        if hit is None:
            pieces.append(segment)
            continue

        lo, hi = hit[0] - offset, hit[1] - offset
        if lo > 0:
            pieces.append(segment.slice(0, lo))
        pieces.append(Segment(tag, segment.text[lo:hi]))
        if hi < len(segment.text):
            pieces.append(segment.slice(hi, len(segment.text)))

    logger.debug(
        "Split %d segments into %d pieces for range %s", len(segments), len(pieces), text_range
    )
    return pieces


class TaggedDocument:
    """
    Ordered canonical sequence of tagged segments.

    Example:
        >>> doc = TaggedDocument.from_text("Hello world", TagSet.default_set())
        >>> doc = doc.retag(TextRange(0, 5), "inglés")
        >>> doc.export()
        [{'tag': 'inglés', 'text': 'Hello'}, {'tag': 'generico', 'text': ' world'}]
    """

    __slots__ = ("_segments", "_tag_set")

    def __init__(self, segments: Iterable[Segment] = (), tag_set: Optional[TagSet] = None) -> None:
        self._tag_set: TagSet = tag_set if tag_set is not None else TagSet.default_set()
        self._segments: Tuple[Segment, ...] = tuple(segments)
        self.validate()

    @classmethod
    def from_text(cls, text: str, tag_set: Optional[TagSet] = None) -> TaggedDocument:
        """Seed a document with one segment carrying the tag set's default tag."""
        tags = tag_set if tag_set is not None else TagSet.default_set()
        if not text:
            return cls((), tags)
        return cls((Segment(tags.default, text),), tags)

    @classmethod
    def from_export(
        cls, records: Iterable[Dict[str, Any]], tag_set: Optional[TagSet] = None
    ) -> TaggedDocument:
        """
        Rebuild a document from export records.

        Records are canonicalized first, so a non-canonical list (adjacent equal
        tags, empty texts) is accepted and normalized.
        """
        segments = [Segment.from_dict(record) for record in records]
        return cls(merge_consecutive_segments(segments), tag_set)

    def validate(self) -> None:
        """
        Check the document invariants.

        Raises:
            SegmentError: On an empty segment or adjacent segments sharing a tag.
            UnknownTagError: On a tag outside the tag set.
        """
        previous: Optional[Segment] = None
        for index, segment in enumerate(self._segments):
            if not isinstance(segment, Segment):
                raise SegmentError(
                    f"Document entries must be Segment, got {type(segment).__name__}",
                    context={"index": index},
                )
            segment.validate()
            self._tag_set.require(segment.tag)
            if previous is not None and previous.tag == segment.tag:
                raise SegmentError(
                    "Adjacent segments share a tag; document is not canonical",
                    context={"index": index, "tag": segment.tag},
                )
            previous = segment

    @property
    def segments(self) -> Tuple[Segment, ...]:
        return self._segments

    @property
    def tag_set(self) -> TagSet:
        return self._tag_set

    def get_text(self) -> str:
        return get_text(self._segments)

    def get_segment_count(self) -> int:
        return len(self._segments)

    def segment_spans(self) -> List[Tuple[int, Segment]]:
        return list(iter_segment_spans(self._segments))

    def segment_at(self, offset: int) -> Tuple[int, Segment]:
        """
        Return ``(index, segment)`` for the segment covering a logical offset.

        Raises:
            InvalidRangeError: If the offset is outside ``[0, len(document))``.
        """
        if offset >= 0:
            for index, (start, segment) in enumerate(iter_segment_spans(self._segments)):
                if start <= offset < start + len(segment.text):
                    return index, segment
        raise InvalidRangeError("Offset is outside the logical text", start=offset, length=len(self))

    def tag_at(self, offset: int) -> str:
        return self.segment_at(offset)[1].tag

    def affected_segments(self, text_range: TextRange) -> List[SegmentOverlap]:
        """Resolve a logical range to the segments it overlaps."""
        return find_overlaps(self._segments, text_range)

    def ranges_for_tag(self, tag: str) -> List[TextRange]:
        """Logical ranges covered by segments carrying ``tag``."""
        value = self._tag_set.require(tag)
        return [
            TextRange(offset, offset + len(segment.text))
            for offset, segment in iter_segment_spans(self._segments)
            if segment.tag == value
        ]

    def retag(self, text_range: TextRange, tag: str) -> TaggedDocument:
        return retag(self, text_range, tag)

    def export(self) -> List[Dict[str, Any]]:
        """Order-preserving ``{"tag", "text"}`` records, one per segment."""
        return [segment.to_dict() for segment in self._segments]

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.export(), ensure_ascii=False, indent=indent)

    def __len__(self) -> int:
        return sum(len(segment.text) for segment in self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaggedDocument):
            return NotImplemented
        return self._segments == other._segments and self._tag_set == other._tag_set

    def __hash__(self) -> int:
        return hash((self._segments, self._tag_set))

    def __repr__(self) -> str:
        title = self.get_text()[:20]
        return f"TaggedDocument(segments={len(self._segments)}, length={len(self)}, text='{title}...')"


def retag(document: TaggedDocument, text_range: TextRange, tag: str) -> TaggedDocument:
    """
    Give every character in ``text_range`` the tag ``tag``.

    A zero-width or inverted range is a no-op and returns ``document`` itself.

    Raises:
        InvalidRangeError: If the range reaches past the logical text.
        UnknownTagError: If ``tag`` is not in the document's tag set.
    """
    if text_range.is_empty:
        logger.debug("Empty range %s, retag skipped", text_range)
        return document

    text_range.check_bounds(len(document))
    value = document.tag_set.require(tag)

    pieces = split_and_overwrite(document.segments, text_range, value)
    result = TaggedDocument(merge_consecutive_segments(pieces), document.tag_set)

    logger.info(
        "Tag %r applied to range %s: %d -> %d segments",
        value,
        text_range,
        document.get_segment_count(),
        result.get_segment_count(),
    )
    return result


def export(document: TaggedDocument) -> List[Dict[str, Any]]:
    return document.export()
