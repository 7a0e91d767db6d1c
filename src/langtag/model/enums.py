"""
model/enums.py

(Краткое RU: Перечисление языков и закрытый набор меток для сегментов документа.)

EN: Language labels for tagged segments and the closed TagSet the document model
validates against. Tags are opaque, equality-comparable strings; the only tag with
a role is the set's default, used to seed new documents.

- Language: the built-in label list (generic + six languages).
- TagSet: fixed, ordered, closed set supplied at construction time (configuration).
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Final, Iterable, Iterator, Literal, Mapping, Optional, Tuple

from .exceptions import UnknownTagError

_logger: Final[logging.Logger] = logging.getLogger(__name__)


class Language(str, Enum):
    GENERIC = "generico"
    SPANISH = "español"
    ENGLISH = "inglés"
    FRENCH = "francés"
    GERMAN = "alemán"
    ITALIAN = "italiano"
    PORTUGUESE = "portugués"

    @property
    def is_generic(self) -> bool:
        return self is Language.GENERIC

    def localized_name(self, lang: Literal["es", "en"] = "es") -> str:
        names_es = {
            Language.GENERIC: "Genérico",
            Language.SPANISH: "Español",
            Language.ENGLISH: "Inglés",
            Language.FRENCH: "Francés",
            Language.GERMAN: "Alemán",
            Language.ITALIAN: "Italiano",
            Language.PORTUGUESE: "Portugués",
        }
        names_en = {
            Language.GENERIC: "Generic",
            Language.SPANISH: "Spanish",
            Language.ENGLISH: "English",
            Language.FRENCH: "French",
            Language.GERMAN: "German",
            Language.ITALIAN: "Italian",
            Language.PORTUGUESE: "Portuguese",
        }
        return names_es[self] if lang == "es" else names_en[self]


DEFAULT_TAGS: Final[Tuple[str, ...]] = tuple(language.value for language in Language)
DEFAULT_TAG: Final[str] = Language.GENERIC.value


class TagSet:
    """
    Closed, ordered set of tags supplied at construction time.

    Order is preserved because collaborators render one control per tag
    in this order.

    Example:
        >>> tags = TagSet(["generico", "inglés"], default="generico")
        >>> "inglés" in tags
        True
        >>> tags.require("klingon")  # raises UnknownTagError
    """

    __slots__ = ("_tags", "_default")

    def __init__(self, tags: Iterable[str], default: Optional[str] = None) -> None:
        normalized = tuple(_normalize_tag(tag) for tag in tags)
        if not normalized:
            raise ValueError("TagSet requires at least one tag")

        seen: set[str] = set()
        duplicates: list[str] = []
        for tag in normalized:
            if tag in seen:
                duplicates.append(tag)
            seen.add(tag)
        if duplicates:
            raise ValueError(f"Duplicate tags in TagSet: {', '.join(duplicates)}")

        default_tag = normalized[0] if default is None else _normalize_tag(default)
        if default_tag not in seen:
            raise ValueError(f"Default tag {default_tag!r} is not part of the TagSet")

        self._tags: Tuple[str, ...] = normalized
        self._default: str = default_tag

    @classmethod
    def default_set(cls) -> TagSet:
        """Build the set from the built-in Language labels."""
        return cls(DEFAULT_TAGS, default=DEFAULT_TAG)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> TagSet:
        """Build the set from the ``tags`` and ``default_tag`` configuration keys."""
        tags = config.get("tags") or DEFAULT_TAGS
        default = config.get("default_tag")
        if isinstance(tags, str):
            raise ValueError("Configuration key 'tags' must be a list of strings")
        tag_set = cls(tags, default=default)
        _logger.debug("TagSet built from config: %s (default=%s)", tag_set.tags, tag_set.default)
        return tag_set

    @property
    def tags(self) -> Tuple[str, ...]:
        return self._tags

    @property
    def default(self) -> str:
        return self._default

    def require(self, tag: Any) -> str:
        """Return the tag as a string or raise UnknownTagError if it is not a member."""
        value = tag.value if isinstance(tag, Enum) else tag
        if not isinstance(value, str) or value not in self._tags:
            raise UnknownTagError(tag, allowed=list(self._tags))
        return value

    def __contains__(self, tag: object) -> bool:
        value = tag.value if isinstance(tag, Enum) else tag
        return isinstance(value, str) and value in self._tags

    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TagSet):
            return NotImplemented
        return self._tags == other._tags and self._default == other._default

    def __hash__(self) -> int:
        return hash((self._tags, self._default))

    def __repr__(self) -> str:
        return f"TagSet(tags={list(self._tags)!r}, default={self._default!r})"


def _normalize_tag(tag: Any) -> str:
    value = tag.value if isinstance(tag, Enum) else tag
    if not isinstance(value, str) or not value:
        raise ValueError(f"Tag must be a non-empty string, got {tag!r}")
    return value
