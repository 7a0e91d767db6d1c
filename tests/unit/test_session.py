"""Tests for src/langtag/session.py"""

import logging

import pytest

from langtag.model.document import TaggedDocument
from langtag.model.enums import TagSet
from langtag.model.exceptions import InvalidRangeError, SelectionNotFoundError, UnknownTagError
from langtag.model.selection import TextRange
from langtag.session import TaggingSession


@pytest.fixture
def session() -> TaggingSession:
    return TaggingSession(TaggedDocument.from_text("Hello world", TagSet.default_set()))


class TestSelection:
    def test_initial_state(self, session: TaggingSession) -> None:
        assert session.selection is None
        assert session.can_apply is False
        assert session.status == ""

    def test_select_text(self, session: TaggingSession) -> None:
        assert session.select_text("world") == TextRange(6, 11)
        assert session.can_apply is True
        assert session.status == 'Selection: "world" (6-11)'

    def test_select_text_not_found(self, session: TaggingSession) -> None:
        session.select_text("world")
        with pytest.raises(SelectionNotFoundError):
            session.select_text("xyz")
        assert session.selection is None
        assert session.status == "Could not find the selection in the text"

    def test_select_nothing(self, session: TaggingSession) -> None:
        with pytest.raises(SelectionNotFoundError):
            session.select_text("")
        assert session.status == "No text selected"
        assert session.can_apply is False

    def test_ambiguous_selection_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        session = TaggingSession(TaggedDocument.from_text("la casa y la mesa"))
        with caplog.at_level(logging.INFO, logger="langtag"):
            assert session.select_text("la") == TextRange(0, 2)
        assert any("ambiguous" in rec.message for rec in caplog.records)

    def test_overlapping_repeat_logged_as_ambiguous(self, caplog: pytest.LogCaptureFixture) -> None:
        session = TaggingSession(TaggedDocument.from_text("aaa"))
        with caplog.at_level(logging.INFO, logger="langtag"):
            assert session.select_text("aa") == TextRange(0, 2)
        assert any("ambiguous" in rec.message for rec in caplog.records)

    def test_unique_selection_not_logged_as_ambiguous(
        self, session: TaggingSession, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="langtag"):
            session.select_text("world")
        assert not any("ambiguous" in rec.message for rec in caplog.records)

    def test_select_range(self, session: TaggingSession) -> None:
        assert session.select_range(0, 5) == TextRange(0, 5)
        assert session.can_apply is True

    def test_select_range_out_of_bounds(self, session: TaggingSession) -> None:
        with pytest.raises(InvalidRangeError):
            session.select_range(0, 50)
        assert session.selection is None

    def test_zero_width_range_disables_apply(self, session: TaggingSession) -> None:
        session.select_range(3, 3)
        assert session.can_apply is False

    def test_clear_selection(self, session: TaggingSession) -> None:
        session.select_text("Hello")
        session.clear_selection()
        assert session.can_apply is False


class TestApplyTag:
    def test_apply_tag(self, session: TaggingSession) -> None:
        session.select_text("Hello")
        doc = session.apply_tag("inglés")
        assert doc is session.document
        assert session.export() == [
            {"tag": "inglés", "text": "Hello"},
            {"tag": "generico", "text": " world"},
        ]
        assert session.selection is None
        assert session.status == 'Tag "inglés" applied to the selection (0-5)'

    def test_apply_twice_keeps_non_adjacent_segments(self, session: TaggingSession) -> None:
        session.select_text("Hello")
        session.apply_tag("inglés")
        session.select_text("world")
        session.apply_tag("inglés")
        assert [seg["text"] for seg in session.export()] == ["Hello", " ", "world"]

    def test_apply_without_selection_is_noop(self, session: TaggingSession) -> None:
        before = session.document
        assert session.apply_tag("inglés") is before

    def test_unknown_tag_keeps_state(self, session: TaggingSession) -> None:
        session.select_text("Hello")
        before = session.document
        with pytest.raises(UnknownTagError):
            session.apply_tag("klingon")
        assert session.document is before
        assert session.selection == TextRange(0, 5)

    def test_to_json(self, session: TaggingSession) -> None:
        assert '"tag": "generico"' in session.to_json()
        assert "\n" in session.to_json()
        assert "\n" not in session.to_json(indent=None)
