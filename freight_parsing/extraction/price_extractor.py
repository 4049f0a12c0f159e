"""
Price Extractor

ЦКП: Стоимость перевозки и валюта.

Поиск:
1. Строка-якорь по label_pattern ("SHIPPING PRICE", "Rate")
2. Сумма inline в якоре (inline_pattern) или в строке по смещению
3. Валюта - из группы currency, иначе ISO-код или символ (€ £ $) в строке значения / якоре
"""

import re
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING
from loguru import logger

from config.settings import CURRENCY_SYMBOLS, DEFAULT_CURRENCY, KNOWN_CURRENCY_CODES
from ..domain.exceptions import report_degradation
from ..normalization.line_normalizer import NormalizedLines
from ..normalization.number_parser import NumberLocale, DOT_DECIMAL, to_number

if TYPE_CHECKING:
    from ..vendors.vendor_config import PriceConfig


_CURRENCY_CODE = re.compile(r"\b(" + "|".join(KNOWN_CURRENCY_CODES) + r")\b")


@dataclass
class PriceResult:
    """Результат поиска цены."""
    amount: float = 0.0
    currency: str = DEFAULT_CURRENCY
    text: str = ""


def detect_currency(text: Optional[str]) -> Optional[str]:
    """ISO-код валюты по коду или символу в строке."""
    if not text:
        return None
    match = _CURRENCY_CODE.search(text)
    if match:
        return match.group(1)
    for symbol, code in CURRENCY_SYMBOLS.items():
        if symbol in text:
            return code
    return None


class PriceExtractor:
    """Цена по правилам отправителя."""

    def __init__(self, rules: "PriceConfig", number_locale: NumberLocale = DOT_DECIMAL):
        self.rules = rules
        self.number_locale = number_locale
        self._label = re.compile(rules.label_pattern)
        self._inline = re.compile(rules.inline_pattern) if rules.inline_pattern else None
        self._value = re.compile(rules.value_pattern)

    def extract(self, lines: NormalizedLines) -> PriceResult:
        default_currency = self.rules.default_currency

        anchor = lines.find(lambda line: self._label.search(line) is not None)
        if anchor < 0:
            report_degradation("PriceExtractor", f"якорь цены '{self.rules.label_pattern}' не найден, 0.0")
            return PriceResult(currency=default_currency)

        anchor_line = lines[anchor]
        value_line = lines.get(anchor + self.rules.offset)

        match = None
        if self._inline:
            match = self._inline.search(anchor_line)
            if match is None and value_line:
                match = self._inline.search(value_line)
        if match is None and value_line:
            match = self._value.search(value_line)

        if match is None:
            report_degradation("PriceExtractor", f"сумма рядом с '{anchor_line}' не найдена, 0.0")
            return PriceResult(currency=detect_currency(anchor_line) or default_currency)

        amount = max(0.0, to_number(match.group("amount"), self.number_locale))

        currency = None
        if "currency" in match.groupdict() and match.group("currency") in KNOWN_CURRENCY_CODES:
            currency = match.group("currency")
        currency = currency or detect_currency(value_line) or detect_currency(anchor_line) or default_currency

        logger.debug(f"[PriceExtractor] '{match.group(0).strip()}' → {amount} {currency}")
        return PriceResult(amount=amount, currency=currency, text=match.group(0).strip())
