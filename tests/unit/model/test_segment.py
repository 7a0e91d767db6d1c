"""
Tests for src/langtag/model/segment.py

Covers Segment construction, validation, split/slice/merge, serialization
and the canonicalizing merge pass.
"""

import dataclasses
import logging

import pytest

from langtag.model.enums import Language
from langtag.model.exceptions import SegmentError
from langtag.model.segment import Segment, get_text, merge_consecutive_segments


class TestSegmentConstruction:
    def test_fields(self) -> None:
        seg = Segment("inglés", "Hello")
        assert seg.tag == "inglés"
        assert seg.text == "Hello"
        assert len(seg) == 5

    def test_language_member_is_stored_as_value(self) -> None:
        seg = Segment(Language.FRENCH, "bonjour")
        assert seg.tag == "francés"
        assert type(seg.tag) is str
        assert seg == Segment("francés", "bonjour")

    def test_frozen(self) -> None:
        seg = Segment("generico", "abc")
        with pytest.raises(dataclasses.FrozenInstanceError):
            seg.text = "xyz"  # type: ignore[misc]

    def test_repr_truncates_long_text(self) -> None:
        seg = Segment("generico", "x" * 50)
        assert "..." in repr(seg)
        assert repr(Segment("generico", "ab")) == "Segment(tag='generico', text='ab')"


class TestSegmentValidation:
    def test_valid_segment(self) -> None:
        Segment("generico", "a").validate()

    def test_empty_text_rejected(self) -> None:
        with pytest.raises(SegmentError, match="cannot be empty"):
            Segment("generico", "").validate()

    def test_non_string_text_rejected(self) -> None:
        with pytest.raises(SegmentError):
            Segment("generico", 42).validate()  # type: ignore[arg-type]

    def test_empty_tag_rejected(self) -> None:
        with pytest.raises(SegmentError):
            Segment("", "abc").validate()


class TestSegmentSplitAndSlice:
    def test_split_at(self) -> None:
        left, right = Segment("inglés", "Hello world").split_at(5)
        assert left == Segment("inglés", "Hello")
        assert right == Segment("inglés", " world")

    @pytest.mark.parametrize("position", [0, 11, -1, 20])
    def test_split_at_out_of_bounds(self, position: int) -> None:
        with pytest.raises(SegmentError):
            Segment("inglés", "Hello world").split_at(position)

    def test_slice(self) -> None:
        seg = Segment("alemán", "Guten Tag")
        assert seg.slice(0, 5) == Segment("alemán", "Guten")
        assert seg.slice(6, 9) == Segment("alemán", "Tag")

    def test_slice_invalid(self) -> None:
        with pytest.raises(SegmentError):
            Segment("alemán", "abc").slice(2, 5)

    def test_retagged_keeps_text(self) -> None:
        seg = Segment("generico", "ciao").retagged("italiano")
        assert seg == Segment("italiano", "ciao")


class TestSegmentMerging:
    def test_can_merge_same_tag(self) -> None:
        assert Segment("inglés", "a").can_merge_with(Segment("inglés", "b")) is True

    def test_cannot_merge_different_tag(self) -> None:
        assert Segment("inglés", "a").can_merge_with(Segment("francés", "b")) is False

    def test_cannot_merge_non_segment(self) -> None:
        seg = Segment("inglés", "a")
        assert seg.can_merge_with("inglés") is False
        assert seg.can_merge_with(None) is False

    def test_merge_with(self) -> None:
        merged = Segment("francés", "abc").merge_with(Segment("francés", "def"))
        assert merged == Segment("francés", "abcdef")

    def test_merge_with_different_tag_raises(self) -> None:
        with pytest.raises(SegmentError, match="different tags"):
            Segment("francés", "abc").merge_with(Segment("generico", "def"))


class TestSegmentSerialization:
    def test_to_dict(self) -> None:
        assert Segment("inglés", "Hello").to_dict() == {"tag": "inglés", "text": "Hello"}

    def test_from_dict(self) -> None:
        assert Segment.from_dict({"tag": "inglés", "text": "Hello"}) == Segment("inglés", "Hello")

    def test_from_dict_accepts_legacy_field_names(self) -> None:
        seg = Segment.from_dict({"idioma": "generico", "texto": "Haz clic"})
        assert seg == Segment("generico", "Haz clic")

    def test_from_dict_missing_field(self) -> None:
        with pytest.raises(SegmentError, match="missing field"):
            Segment.from_dict({"tag": "inglés"})

    @pytest.mark.parametrize(
        "record",
        [{"tag": "inglés", "text": None}, {"tag": "inglés", "text": 5}, {"tag": 1, "text": "x"}],
    )
    def test_from_dict_rejects_non_string_fields(self, record: dict) -> None:
        with pytest.raises(SegmentError, match="must be str"):
            Segment.from_dict(record)

    def test_from_dict_not_a_dict(self) -> None:
        with pytest.raises(SegmentError):
            Segment.from_dict(["inglés", "Hello"])  # type: ignore[arg-type]


class TestMergeConsecutiveSegments:
    def test_empty_input(self) -> None:
        assert merge_consecutive_segments([]) == []

    def test_single_segment(self) -> None:
        assert merge_consecutive_segments([Segment("a", "x")]) == [Segment("a", "x")]

    def test_adjacent_equal_tags_merge(self) -> None:
        segments = [Segment("a", "1"), Segment("a", "2"), Segment("b", "3"), Segment("a", "4")]
        assert merge_consecutive_segments(segments) == [
            Segment("a", "12"),
            Segment("b", "3"),
            Segment("a", "4"),
        ]

    def test_long_run_collapses_to_one(self) -> None:
        segments = [Segment("a", ch) for ch in "abcdef"]
        assert merge_consecutive_segments(segments) == [Segment("a", "abcdef")]

    def test_empty_pieces_dropped(self) -> None:
        segments = [Segment("a", "x"), Segment("b", ""), Segment("a", "y")]
        assert merge_consecutive_segments(segments) == [Segment("a", "xy")]

    def test_result_is_canonical_and_preserves_text(self) -> None:
        segments = [
            Segment("a", "1"),
            Segment("b", "2"),
            Segment("b", "3"),
            Segment("c", ""),
            Segment("b", "4"),
            Segment("a", "5"),
            Segment("a", "6"),
        ]
        merged = merge_consecutive_segments(segments)
        assert get_text(merged) == get_text(segments)
        assert all(seg.text for seg in merged)
        assert all(left.tag != right.tag for left, right in zip(merged, merged[1:]))

    @pytest.mark.parametrize("bad_text", [None, 0, 5])
    def test_non_string_text_raises_segment_error(self, bad_text: object) -> None:
        segments = [Segment("a", "x"), Segment("a", bad_text)]  # type: ignore[arg-type]
        with pytest.raises(SegmentError):
            merge_consecutive_segments(segments)

    def test_input_untouched(self) -> None:
        segments = [Segment("a", "1"), Segment("a", "2")]
        merge_consecutive_segments(segments)
        assert segments == [Segment("a", "1"), Segment("a", "2")]

    def test_logging(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="langtag"):
            merge_consecutive_segments([Segment("a", "1"), Segment("a", "2")])
        assert any("Merged 2 segments into 1" in rec.message for rec in caplog.records)


def test_get_text() -> None:
    assert get_text([Segment("a", "Hello"), Segment("b", " world")]) == "Hello world"
    assert get_text([]) == ""
