"""
Tagging session: the selection-then-apply workflow a UI drives.

A session owns one TaggedDocument, the pending selection and the last status
message shown to the user. Documents stay immutable; the session swaps in the
document returned by each retag. One caller owns a session at a time, so
apply_tag calls must be serialized by that caller.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .model.document import TaggedDocument, retag
from .model.exceptions import SelectionNotFoundError
from .model.selection import TextRange, resolve_selection

logger = logging.getLogger(__name__)


class TaggingSession:
    """
    Сессия разметки одного документа.

    Example:
        >>> session = TaggingSession(TaggedDocument.from_text("Hello world"))
        >>> session.select_text("world")
        TextRange(start=6, end=11)
        >>> session.apply_tag("inglés").export()
        [{'tag': 'generico', 'text': 'Hello '}, {'tag': 'inglés', 'text': 'world'}]
    """

    def __init__(self, document: TaggedDocument) -> None:
        self._document = document
        self._selection: Optional[TextRange] = None
        self.status: str = ""

    @property
    def document(self) -> TaggedDocument:
        return self._document

    @property
    def selection(self) -> Optional[TextRange]:
        return self._selection

    @property
    def can_apply(self) -> bool:
        """Tag controls are enabled only while a non-empty selection is pending."""
        return self._selection is not None and not self._selection.is_empty

    def select_text(self, substring: str) -> TextRange:
        """
        Resolve selected text against the current document and remember the range.

        Raises:
            SelectionNotFoundError: If nothing is selected or the text is not found.
        """
        if not substring:
            self._selection = None
            self.status = "No text selected"
            raise SelectionNotFoundError("Nothing selected", selection=substring)

        full_text = self._document.get_text()
        try:
            selection = resolve_selection(full_text, substring)
        except SelectionNotFoundError:
            self._selection = None
            self.status = "Could not find the selection in the text"
            raise

        if full_text.find(substring, selection.start + 1) != -1:
            logger.info("Selection %r is ambiguous, using first occurrence", substring[:40])

        self._selection = selection
        self.status = f'Selection: "{substring}" ({selection})'
        return selection

    def select_range(self, start: int, end: int) -> TextRange:
        """Remember an explicit logical range (bounds-checked, never clamped)."""
        selection = TextRange(start, end)
        selection.check_bounds(len(self._document))
        self._selection = selection
        self.status = f"Selection: ({selection})"
        return selection

    def clear_selection(self) -> None:
        self._selection = None

    def apply_tag(self, tag: str) -> TaggedDocument:
        """
        Retag the pending selection and reset it.

        Without a pending selection this is a no-op returning the current document.
        """
        if not self.can_apply:
            logger.debug("apply_tag(%r) ignored: no pending selection", tag)
            return self._document

        assert self._selection is not None  # для mypy
        selection = self._selection
        self._document = retag(self._document, selection, tag)
        self._selection = None
        self.status = f'Tag "{tag}" applied to the selection ({selection})'
        return self._document

    def export(self) -> List[Dict[str, Any]]:
        return self._document.export()

    def to_json(self, indent: Optional[int] = 2) -> str:
        return self._document.to_json(indent=indent)
