"""
Элемент-функции для полей "метка → значение".

Значение берётся из остатка строки-якоря ("REF.: AB123")
или из следующей строки ("Ziegler Ref" / "ZR123456").
Все обращения к строкам идут через NormalizedLines.get() - за концом документа None.
"""

import re
from typing import Callable, Optional, Union
from loguru import logger

from ..normalization.line_normalizer import NormalizedLines


Predicate = Union[str, Callable[[str], bool]]


def _as_predicate(predicate: Predicate) -> Callable[[str], bool]:
    if callable(predicate):
        return predicate
    regex = re.compile(predicate)
    return lambda line: regex.search(line) is not None


def find_line(lines: NormalizedLines, predicate: Predicate, start: int = 0) -> int:
    """
    Индекс первой подходящей строки начиная со start, иначе -1.

    Args:
        predicate: Функция от строки или regex (search)
    """
    return lines.find(_as_predicate(predicate), start)


def value_after_label(line: Optional[str], label: str) -> str:
    """
    Остаток строки после метки без ведущих ":" и пробелов.

    >>> value_after_label("VAT NUM: GB123", "VAT NUM:")
    'GB123'
    """
    if not line or label not in line:
        return ""
    _, _, rest = line.partition(label)
    return rest.strip().lstrip(":").strip()


def labeled_value(lines: NormalizedLines, pattern: str, next_line: bool = False) -> Optional[str]:
    """
    Значение поля по строке-якорю.

    Args:
        lines: Нормализованные строки
        pattern: Regex строки-якоря. Если есть группа 1 - значение из неё
        next_line: Значение в следующей строке, а не в якоре
                (без флага следующая строка берётся, только если в якоре значения нет)

    Returns:
        Значение или None, если якоря нет (или за якорем конец документа)
    """
    regex = re.compile(pattern)
    for index, line in enumerate(lines):
        match = regex.search(line)
        if not match:
            continue

        if next_line:
            value = lines.get(index + 1)
        else:
            if regex.groups:
                value = match.group(1)
            else:
                value = line[match.end():].strip().lstrip(":").strip()
            if not value:
                # Пустая метка ("REF.:") - значение в следующей строке
                value = lines.get(index + 1)

        logger.debug(f"[FieldRules] '{pattern}' найден в строке {index} → {value!r}")
        return value or None

    logger.debug(f"[FieldRules] Якорь '{pattern}' не найден")
    return None
