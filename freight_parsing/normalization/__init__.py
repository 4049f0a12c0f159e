"""
Нормализация входа: строки документа и числа.
"""

from .line_normalizer import LineNormalizer, NormalizedLines
from .number_parser import NumberLocale, DOT_DECIMAL, COMMA_DECIMAL, parse_number, to_number

__all__ = [
    "LineNormalizer",
    "NormalizedLines",
    "NumberLocale",
    "DOT_DECIMAL",
    "COMMA_DECIMAL",
    "parse_number",
    "to_number",
]
