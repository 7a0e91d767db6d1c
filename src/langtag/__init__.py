"""
Пакет langtag
=============

Language tagging for text documents: a document is an ordered sequence of
segments, each carrying a language label, and any character range of its
logical text can be re-tagged.

Этот пакет предоставляет:
    - Модель сегментов с инвариантами (непустые сегменты, каноническая форма)
    - Перемаркировку произвольного диапазона: разбиение, перезапись, слияние
    - Разрешение выделенного текста в логический диапазон
    - Экспорт в упорядоченный список записей {tag, text}
    - Сессию разметки для UI-слоя (выделение -> применение метки)

Пример базового использования:
    >>> from langtag import TaggedDocument, TextRange, get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> doc = TaggedDocument.from_text("Hello world")
    >>> doc = doc.retag(TextRange(0, 5), "inglés")
    >>> doc.export()
    [{'tag': 'inglés', 'text': 'Hello'}, {'tag': 'generico', 'text': ' world'}]

Управление конфигурацией:
    >>> import os
    >>> os.environ['LANGTAG_LOG_LEVEL'] = 'DEBUG'
    >>>
    >>> from langtag import load_config, create_document
    >>>
    >>> config = load_config()
    >>> doc = create_document(config)

Версия: 0.1.0
Лицензия: MIT
Python: 3.10+
"""

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__author__ = "langtag developers"
__description__ = "Language tagging of text segments with range retagging"
__license__ = "MIT"
__python_requires__ = ">=3.10"

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

if sys.version_info < (3, 10):
    raise RuntimeError(
        f"langtag требует Python 3.10 или выше. "
        f"Текущая версия: {sys.version_info.major}."
        f"{sys.version_info.minor}.{sys.version_info.micro}"
    )

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================

_LOG_LEVELS: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _setup_logging() -> None:
    """
    Инициализировать общепакетную конфигурацию логирования.

    Настраивает логгер пакета 'langtag' с:
    - Консольным обработчиком (stderr) для WARNING и выше
    - Ротирующим файловым обработчиком для настроенного уровня
    - Форматом с временной меткой, уровнем, модулем и сообщением

    Уровень задаётся переменной окружения LANGTAG_LOG_LEVEL
    (DEBUG, INFO, WARNING, ERROR, CRITICAL), каталог логов -
    LANGTAG_LOG_DIR (по умолчанию "logs").

    Функция идемпотентна - повторные вызовы не имеют эффекта.
    """
    log_level_str = os.environ.get("LANGTAG_LOG_LEVEL", "INFO").upper()
    log_level = _LOG_LEVELS.get(log_level_str, logging.INFO)

    package_logger = logging.getLogger("langtag")
    if package_logger.handlers:
        return

    package_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    try:
        log_dir = Path(os.environ.get("LANGTAG_LOG_DIR", "logs"))
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_dir / "langtag.log",
            maxBytes=10 * 1024 * 1024,  # 10 МБ
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)
    except OSError as e:
        package_logger.warning(
            f"Не удалось инициализировать файловое логирование: {e}. Используется только консоль."
        )


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер в пространстве имён 'langtag'.

    Аргументы:
        module_name: Обычно `__name__` вызывающего модуля.

    Пример:
        >>> logger = get_logger("ui.editor")
        >>> logger.name
        'langtag.ui.editor'
    """
    if module_name == "langtag" or module_name.startswith("langtag."):
        return logging.getLogger(module_name)
    if module_name == "__main__":
        return logging.getLogger("langtag.main")
    return logging.getLogger(f"langtag.{module_name.lstrip('.')}")


# =============================================================================
# УПРАВЛЕНИЕ КОНФИГУРАЦИЕЙ
# =============================================================================

from .model.enums import DEFAULT_TAG, DEFAULT_TAGS, Language, TagSet  # noqa: E402

_DEFAULT_CONFIG: Dict[str, Any] = {
    "tags": list(DEFAULT_TAGS),
    "default_tag": DEFAULT_TAG,
    "seed_text": (
        "Haz clic en cualquier parte de este texto y selecciona un idioma para etiquetarlo."
    ),
    "log_level": "INFO",
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Загрузить конфигурацию из langtag.json или вернуть значения по умолчанию.

    Ключи конфигурации:
        - tags: list[str] - закрытый набор меток, в порядке отображения
        - default_tag: str - метка для новых документов
        - seed_text: str - начальный текст документа
        - log_level: str - уровень логирования

    Недопустимый JSON, ошибка чтения или JSON не-объект приводят к
    предупреждению в логе и конфигурации по умолчанию.
    """
    logger = get_logger(__name__)

    if config_path is None:
        config_path = Path("langtag.json")

    config = _DEFAULT_CONFIG.copy()
    config["tags"] = list(_DEFAULT_CONFIG["tags"])

    if not config_path.exists():
        logger.info(f"Файл конфигурации {config_path} не найден. Используется конфигурация по умолчанию.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = json.load(f)

        if not isinstance(user_config, dict):
            raise ValueError(
                f"Файл конфигурации должен содержать JSON-объект, "
                f"получен {type(user_config).__name__}"
            )

        config.update(user_config)
        logger.info(f"Конфигурация загружена из {config_path}")
        logger.debug(f"Конфигурация: {config}")

    except json.JSONDecodeError as e:
        logger.warning(
            f"Не удалось разобрать {config_path}: Недопустимый JSON "
            f"в строке {e.lineno}, столбце {e.colno}. Используется конфигурация по умолчанию."
        )
    except OSError as e:
        logger.warning(f"Не удалось прочитать {config_path}: {e}. Используется конфигурация по умолчанию.")
    except ValueError as e:
        logger.warning(f"Недопустимый формат конфигурации: {e}. Используется конфигурация по умолчанию.")

    return config


# =============================================================================
# ИМПОРТЫ СЛОЯ МОДЕЛИ
# =============================================================================

from .model.document import SegmentOverlap, TaggedDocument, export, retag  # noqa: E402
from .model.exceptions import (  # noqa: E402
    InvalidRangeError,
    LangTagError,
    SegmentError,
    SelectionNotFoundError,
    UnknownTagError,
)
from .model.segment import Segment, merge_consecutive_segments  # noqa: E402
from .model.selection import TextRange, find_all_occurrences, resolve_selection  # noqa: E402
from .session import TaggingSession  # noqa: E402


def create_document(config: Optional[Dict[str, Any]] = None) -> TaggedDocument:
    """Build a TaggedDocument seeded with ``seed_text`` under the configured TagSet."""
    if config is None:
        config = load_config()
    tag_set = TagSet.from_config(config)
    return TaggedDocument.from_text(config.get("seed_text", ""), tag_set)


# =============================================================================
# ОПРЕДЕЛЕНИЕ ПУБЛИЧНОГО API
# =============================================================================

__all__ = [
    # Метаданные версии
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    # Утилиты
    "get_logger",
    "load_config",
    "create_document",
    # Модель
    "Language",
    "TagSet",
    "Segment",
    "SegmentOverlap",
    "TaggedDocument",
    "TextRange",
    "TaggingSession",
    # Операции
    "resolve_selection",
    "find_all_occurrences",
    "retag",
    "export",
    "merge_consecutive_segments",
    # Исключения
    "LangTagError",
    "InvalidRangeError",
    "SelectionNotFoundError",
    "UnknownTagError",
    "SegmentError",
]

# =============================================================================
# ИНИЦИАЛИЗАЦИЯ ПАКЕТА
# =============================================================================

_setup_logging()

_logger = get_logger(__name__)
_logger.debug(f"langtag v{__version__} инициализирован (Python {sys.version.split()[0]})")
