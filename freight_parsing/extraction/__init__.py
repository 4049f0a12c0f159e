"""
Экстракторы полей заказа: адрес, дата/окно, груз, точки, цена, реквизиты.
"""

from .address_parser import AddressParser, AddressGrammar, PartialAddress, GRAMMARS, GRAMMAR_NAMES, normalize_uk_postcode
from .cargo_extractor import CargoExtractor, classify_shipment
from .country_resolver import StaticCountryResolver
from .datetime_parser import DateTimeParser
from .field_rules import find_line, labeled_value, value_after_label
from .location_extractor import LocationExtractor, SectionScan
from .party_extractor import PartyExtractor
from .price_extractor import PriceExtractor, PriceResult, detect_currency

__all__ = [
    "AddressParser",
    "AddressGrammar",
    "PartialAddress",
    "GRAMMARS",
    "GRAMMAR_NAMES",
    "normalize_uk_postcode",
    "CargoExtractor",
    "classify_shipment",
    "StaticCountryResolver",
    "DateTimeParser",
    "find_line",
    "labeled_value",
    "value_after_label",
    "LocationExtractor",
    "SectionScan",
    "PartyExtractor",
    "PriceExtractor",
    "PriceResult",
    "detect_currency",
]
