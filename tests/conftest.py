"""
Общие фикстуры: эталонные документы отправителей и фиксированная "сегодняшняя" дата.

Строки документов приходят "как из конвертера": с пробелами по краям и пустыми строками.
"""

from datetime import date

import pytest

from freight_parsing.adapters.transalliance import TransallianceAdapter
from freight_parsing.adapters.ziegler import ZieglerAdapter
from freight_parsing.normalization.line_normalizer import LineNormalizer
from freight_parsing.vendors.config_loader import VendorConfigLoader


FIXED_TODAY = date(2025, 9, 15)


TRANSALLIANCE_DOCUMENT = [
    "Date/Time : 15/09/25 10:32",
    "TRANSALLIANCE TS LTD",
    "SUITE 8/9 FARADAY COURT",
    "CENTRUM 100",
    "Tel : +44 1283 500 500",
    "VAT NUM: GB712051433",
    "",
    "CHARTERING CONFIRMATION",
    "REF.: AB123",
    "Contact: JOHN SMITH",
    "   ",
    "Loading",
    "ON:",
    "17/09/25",
    "8h00 – 15h00",
    "KNAUF INSULATION",
    "BAKEWELL RD GB-PE2 6DP PETERBOROUGH",
    "Contact: LOADING DESK Tel : 01733 555 555",
    "Weight . : 9000,00",
    "LM . . . : 6,80",
    "M. nature: PACKAGING",
    "OT : 111111",
    "",
    "Delivery",
    "ON:",
    "18/09/25",
    "8h00 – 12h00",
    "SAICA PACK",
    "10 RTE DES INDUSTRIES -37530 POCE-SUR-CISSE",
    "Contact: RECEPTION",
    "Weight . : 24000,00",
    "LM . . . : 13,60",
    "M. nature: PAPER ROLLS",
    "OT : 456789",
    "",
    "SHIPPING PRICE",
    "  1234,50 EUR  ",
]


ZIEGLER_DOCUMENT = [
    "ZIEGLER UK LTD",
    "LONDON GATEWAY LOGISTICS PARK, NORTH 4, NORTH SEA CROSSING",
    "STANFORD LE HOPE SS17 9FJ",
    "",
    "Booking Instructions",
    "Ziegler Ref",
    "ZR123456",
    "Rate",
    "€ 1,250.00",
    "",
    "Collection",
    "KNAUF INSULATION",
    "UNIT 4 LINK 200",
    "LEIGHTON BUZZARD",
    "LU7 4UH",
    "REF",
    "COL-7781",
    "17/09/2025",
    "0800-1600",
    "66 PALLETS",
    "",
    "Delivery",
    "SAICA PACK UK",
    "WATERBROOK AVENUE",
    "TN25 6GE Ashford",
    "REF",
    "DEL-9921",
    "18/09/2025",
    "0900-1500",
    "Delivery slot must be booked 24h in advance",
    "Clearance",
    "CUSTOMS AGENT LTD",
    "ZONE INDUSTRIELLE",
    "ENNERY",
    "FR-57365",
    "19/09/2025",
    "- Please note: all business is transacted under BIFA terms",
    "Please find below our payment terms",
]


@pytest.fixture
def fixed_today():
    return lambda: FIXED_TODAY


@pytest.fixture
def normalizer():
    return LineNormalizer()


@pytest.fixture
def transalliance_lines(normalizer):
    return normalizer.normalize(TRANSALLIANCE_DOCUMENT)


@pytest.fixture
def ziegler_lines(normalizer):
    return normalizer.normalize(ZIEGLER_DOCUMENT)


@pytest.fixture
def transalliance_config():
    return VendorConfigLoader().load("transalliance")


@pytest.fixture
def ziegler_config():
    return VendorConfigLoader().load("ziegler")


@pytest.fixture
def transalliance_adapter(transalliance_config, fixed_today):
    return TransallianceAdapter(config=transalliance_config, today=fixed_today)


@pytest.fixture
def ziegler_adapter(ziegler_config, fixed_today):
    return ZieglerAdapter(config=ziegler_config, today=fixed_today)
