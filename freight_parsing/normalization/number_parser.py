"""
Элемент-функция: нормализация чисел с учётом локали отправителя.

Один и тот же "1,250" у разных отправителей означает 1.25 или 1250.
Поэтому разделители всегда задаются явно через NumberLocale,
а не угадываются в каждом месте вызова.
"""

import re
from dataclasses import dataclass
from typing import Optional
from loguru import logger

from ..domain.exceptions import MalformedNumericToken


_SPACES = re.compile(r"\s+")
_TOKEN = re.compile(r"-?\d[\d.,]*")


@dataclass(frozen=True)
class NumberLocale:
    """Разделители чисел отправителя."""
    decimal_separator: str = "."
    thousands_separator: str = ","

    def __post_init__(self):
        if self.decimal_separator not in (",", "."):
            raise ValueError(f'decimal_separator должен быть "," или ".", получено: {self.decimal_separator}')
        if self.thousands_separator not in (",", ".", " "):
            raise ValueError(f'thousands_separator должен быть одним из [",", ".", " "], получено: {self.thousands_separator}')


DOT_DECIMAL = NumberLocale(decimal_separator=".", thousands_separator=",")
COMMA_DECIMAL = NumberLocale(decimal_separator=",", thousands_separator=" ")


def parse_number(text: Optional[str], locale: NumberLocale = DOT_DECIMAL) -> float:
    """
    Строгий разбор числа.

    Правила:
    - пробелы (в т.ч. неразрывные) внутри числа - разделитель тысяч
    - есть и "." и "," → правый из них десятичный
    - одиночный десятичный разделитель локали - десятичный
    - другой разделитель - тысячи, только если все группы после него по 3 цифры

    Raises:
        MalformedNumericToken: Если текст не является числом
    """
    if text is None:
        raise MalformedNumericToken("пустое значение", component="NumberParser")

    token = _SPACES.sub("", text).rstrip(".,")
    if not _TOKEN.fullmatch(token):
        raise MalformedNumericToken(f"не число: {text!r}", component="NumberParser")

    has_dot = "." in token
    has_comma = "," in token

    if has_dot and has_comma:
        decimal = "." if token.rfind(".") > token.rfind(",") else ","
        thousands = "," if decimal == "." else "."
        if token.count(decimal) > 1:
            raise MalformedNumericToken(f"несколько десятичных разделителей: {text!r}", component="NumberParser")
        token = token.replace(thousands, "").replace(decimal, ".")
    elif has_dot or has_comma:
        sep = "." if has_dot else ","
        groups = token.split(sep)
        three_digit_groups = all(len(g) == 3 for g in groups[1:])

        if sep == locale.decimal_separator and len(groups) == 2:
            token = token.replace(sep, ".")
        elif three_digit_groups:
            token = token.replace(sep, "")
        elif len(groups) == 2:
            # Разделитель не по локали, но на тысячи не похож
            token = token.replace(sep, ".")
        else:
            raise MalformedNumericToken(f"неоднозначные разделители: {text!r}", component="NumberParser")

    try:
        return float(token)
    except ValueError as e:
        raise MalformedNumericToken(f"не число: {text!r}", component="NumberParser", original_error=e)


def to_number(text: Optional[str], locale: NumberLocale = DOT_DECIMAL, default: float = 0.0) -> float:
    """
    Мягкий разбор: невалидное число → default (0.0), без исключения.
    """
    try:
        return parse_number(text, locale)
    except MalformedNumericToken as e:
        logger.trace(f"[NumberParser] {e.message} → {default}")
        return default
