"""
Набор экстракторов, собранный из VendorConfig.

Адаптеры не наследуют друг от друга правила: каждый получает свой
VendorToolkit и сам решает, в каком порядке и какие секции извлекать.
"""

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, TYPE_CHECKING

from ..extraction.address_parser import AddressParser
from ..extraction.cargo_extractor import CargoExtractor
from ..extraction.country_resolver import StaticCountryResolver
from ..extraction.datetime_parser import DateTimeParser
from ..extraction.location_extractor import LocationExtractor
from ..extraction.party_extractor import PartyExtractor
from ..extraction.price_extractor import PriceExtractor
from ..normalization.line_normalizer import NormalizedLines
from ..normalization.number_parser import NumberLocale

if TYPE_CHECKING:
    from ..domain.interfaces import ICountryResolver
    from ..vendors.vendor_config import DetectionConfig, VendorConfig


def matches_detection(lines: NormalizedLines, rules: "DetectionConfig") -> bool:
    """
    Проверка якорей формата. Только подстроки, без тяжёлого разбора.
    """
    if len(lines) < rules.min_lines:
        return False
    if rules.first_line_contains and rules.first_line_contains not in (lines.get(0) or ""):
        return False
    if rules.second_line_contains and rules.second_line_contains not in (lines.get(1) or ""):
        return False
    for needle in rules.any_line_contains:
        if lines.find(lambda line, needle=needle: needle in line) < 0:
            return False
    for exact in rules.any_line_equals:
        if lines.find(lambda line, exact=exact: line == exact) < 0:
            return False
    return True


@dataclass
class VendorToolkit:
    """Сконфигурированные под отправителя экстракторы."""
    config: "VendorConfig"
    datetime_parser: DateTimeParser
    address_parser: AddressParser
    locations: LocationExtractor
    cargo: CargoExtractor
    price: PriceExtractor
    party: PartyExtractor

    @classmethod
    def build(
        cls,
        config: "VendorConfig",
        country_resolver: Optional["ICountryResolver"] = None,
        today: Optional[Callable[[], date]] = None,
    ) -> "VendorToolkit":
        """
        Args:
            config: Конфигурация отправителя
            country_resolver: Справочник стран (по умолчанию countries.yaml)
            today: Провайдер текущей даты для дефолтных окон
        """
        if country_resolver is None:
            country_resolver = StaticCountryResolver()

        number_locale = NumberLocale(
            decimal_separator=config.numbers.decimal_separator,
            thousands_separator=config.numbers.thousands_separator,
        )
        datetime_parser = DateTimeParser.from_config(config.dates, today=today)
        address_parser = AddressParser(config.address, country_resolver=country_resolver)

        return cls(
            config=config,
            datetime_parser=datetime_parser,
            address_parser=address_parser,
            locations=LocationExtractor(config.location, address_parser, datetime_parser),
            cargo=CargoExtractor(config.cargo, number_locale),
            price=PriceExtractor(config.price, number_locale),
            party=PartyExtractor(config.party),
        )
