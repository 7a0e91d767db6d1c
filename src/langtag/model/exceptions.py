"""
Исключения модели документа с языковой разметкой.

Typed exception hierarchy for the segment model. Every error is local and
recoverable: the document that raised it is left unchanged.

Иерархия:
    LangTagError (базовое)
    ├── InvalidRangeError
    ├── SelectionNotFoundError
    ├── UnknownTagError
    └── SegmentError

Example:
    >>> from langtag.model.exceptions import LangTagError
    >>> try:
    ...     document = document.retag(TextRange(0, 500), "inglés")
    ... except LangTagError as e:
    ...     logger.warning(f"Retag rejected: {e}")
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__: list[str] = [
    "LangTagError",
    "InvalidRangeError",
    "SelectionNotFoundError",
    "UnknownTagError",
    "SegmentError",
]


class LangTagError(Exception):
    """
    Базовое исключение для всех ошибок модели.

    Attributes:
        message: Человекочитаемое сообщение об ошибке
        context: Дополнительный контекст для отладки (опционально)
    """

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """
        Строковое представление исключения.

        Example:
            >>> str(InvalidRangeError("Range out of bounds", context={"end": 12}))
            'InvalidRangeError: Range out of bounds (end=12)'
        """
        parts = [self.__class__.__name__, ": ", self.message]

        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f" ({ctx_str})")

        return "".join(parts)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


class InvalidRangeError(LangTagError):
    """
    Диапазон выходит за границы логического текста или содержит
    некорректные смещения (отрицательные, не целые).

    Raised instead of silently clamping so that caller bugs surface.
    """

    def __init__(
        self,
        message: str,
        *,
        start: Optional[int] = None,
        end: Optional[int] = None,
        length: Optional[int] = None,
    ) -> None:
        context: Dict[str, Any] = {}
        if start is not None:
            context["start"] = start
        if end is not None:
            context["end"] = end
        if length is not None:
            context["length"] = length
        super().__init__(message, context=context)
        self.start = start
        self.end = end
        self.length = length


class SelectionNotFoundError(LangTagError):
    """Выделенный текст не найден в текущем логическом тексте (устаревшее выделение)."""

    def __init__(self, message: str, *, selection: Optional[str] = None) -> None:
        context: Dict[str, Any] = {}
        if selection is not None:
            # Long selections only clutter the log line
            context["selection"] = selection if len(selection) <= 40 else selection[:40] + "..."
        super().__init__(message, context=context)
        self.selection = selection


class UnknownTagError(LangTagError):
    """Метка не входит в настроенный закрытый набор меток."""

    def __init__(self, tag: Any, *, allowed: Optional[list[str]] = None) -> None:
        context: Dict[str, Any] = {}
        if allowed is not None:
            context["allowed"] = "|".join(allowed)
        super().__init__(f"Unknown tag {tag!r}", context=context)
        self.tag = tag
        self.allowed = allowed or []


class SegmentError(LangTagError):
    """
    Нарушение инвариантов сегментов: пустой текст, соседние сегменты
    с одинаковой меткой, некорректное разбиение или слияние.
    """

    pass
