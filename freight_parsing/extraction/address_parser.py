"""
Address Parser

ЦКП: street / city / postal_code / country из свободной строки адреса.

Грамматики применяются строго по порядку (самая специфичная первой),
первая совпавшая побеждает. Порядок - часть поведения: на неоднозначном
входе перестановка меняет победителя.

Если ни одна грамматика не подошла - fallback:
последний токен = город, страна по маркерам (префикс "FR-", 5-значный индекс),
затем по таблице городов-якорей, затем дефолт отправителя.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Pattern, TYPE_CHECKING
from loguru import logger

from config.settings import DEFAULT_CITY, MIN_CITY_LENGTH
from contracts.shipment_order_dto import PartyDetails
from ..domain.exceptions import report_degradation

if TYPE_CHECKING:
    from ..domain.interfaces import ICountryResolver
    from ..vendors.vendor_config import AddressConfig


UK_POSTCODE = r"[A-Z]{1,2}\d{1,2}[A-Z]?\s*\d[A-Z]{2}"
CITY = r"[A-Za-z][A-Za-z'.\- ]*?"

_STRIP_CHARS = " ,-;"
_COUNTRY_PREFIX = re.compile(r"(?<![A-Za-z])([A-Z]{2})(?:-\d|\d{5}(?!\d))")
_FR_POSTCODE = re.compile(r"(?<!\d)(\d{5})(?!\d)")


def normalize_uk_postcode(postal_code: str) -> str:
    """LU74UH / lu7  4uh → LU7 4UH (один пробел перед inward-кодом)."""
    compact = re.sub(r"\s+", "", postal_code).upper()
    if len(compact) < 5:
        return compact
    return f"{compact[:-3]} {compact[-3:]}"


def _clean(value: Optional[str]) -> str:
    if not value:
        return ""
    return re.sub(r"\s+", " ", value).strip(_STRIP_CHARS)


@dataclass
class PartialAddress:
    """Результат разбора адреса."""
    street_address: str = ""
    city: str = ""
    postal_code: str = ""
    country: str = ""
    grammar: Optional[str] = None

    def to_party(self, company: str = "", **extra) -> PartyDetails:
        return PartyDetails(
            company=company,
            street_address=self.street_address,
            city=self.city,
            postal_code=self.postal_code,
            country=self.country,
            **extra,
        )


@dataclass(frozen=True)
class AddressGrammar:
    """
    Одна грамматика: regex по всей строке + правило страны.

    Группы: street (опц.), city, postal, country (опц. токен страны).
    country_code задаёт страну жёстко; иначе токен country идёт в резолвер.
    """
    name: str
    pattern: Pattern
    country_code: Optional[str] = None
    uk_postcode: bool = False
    example: str = field(default="", compare=False)


GRAMMARS: List[AddressGrammar] = [
    AddressGrammar(
        name="gb_prefixed",
        pattern=re.compile(
            rf"^(?P<street>.*?)[,\s]*(?<![A-Za-z])GB-(?P<postal>{UK_POSTCODE})[,\s]+(?P<city>{CITY})$"
        ),
        country_code="GB",
        uk_postcode=True,
        example="BAKEWELL RD GB-PE2 6DP PETERBOROUGH",
    ),
    AddressGrammar(
        name="fr_dash_postcode",
        pattern=re.compile(
            rf"^(?P<street>.*?)[,\s]*(?:(?<=[,\s])|^)(?P<country>[A-Z]{{2}})?-(?P<postal>\d{{5}})\s+(?P<city>{CITY})$"
        ),
        country_code="FR",
        example="10 RTE DES INDUSTRIES -37530 POCE-SUR-CISSE",
    ),
    AddressGrammar(
        name="prefixed_postcode_last",
        pattern=re.compile(
            r"^(?:(?P<street>.*),\s*)?(?P<city>[^,\d]+?)[,\s]+(?P<country>[A-Z]{2,3})-?(?P<postal>\d{4,5})$"
        ),
        example="ZONE INDUSTRIELLE, ENNERY, FR-57365",
    ),
    AddressGrammar(
        name="gb_postcode_last",
        pattern=re.compile(
            rf"^(?:(?P<street>.*),\s*)?(?P<city>[^,\d]+?),?\s+(?<![A-Za-z\d])(?P<postal>{UK_POSTCODE})$"
        ),
        country_code="GB",
        uk_postcode=True,
        example="UNIT 4 LINK 200, LEIGHTON BUZZARD, LU7 4UH",
    ),
    AddressGrammar(
        name="gb_postcode_middle",
        pattern=re.compile(
            rf"^(?:(?P<street>.*?)[,\s]+)?(?<![A-Za-z\d])(?P<postal>{UK_POSTCODE})[,\s]+(?P<city>[A-Za-z][A-Za-z'.\- ]*)$"
        ),
        country_code="GB",
        uk_postcode=True,
        example="WATERBROOK AVENUE, TN25 6GE Ashford",
    ),
    AddressGrammar(
        name="fr_postcode_city",
        pattern=re.compile(
            r"^(?:(?P<street>.*?)[,\s]+)?(?P<postal>\d{5})\s+(?P<city>[A-Za-z][^,\d]*)$"
        ),
        country_code="FR",
        example="ZI DES GAILLETROUS, 41260 LA CHAUSSEE SAINT VICTOR",
    ),
    AddressGrammar(
        name="fr_postcode_last",
        pattern=re.compile(
            r"^(?:(?P<street>.*),\s*)?(?P<city>[^,\d]+?),?\s+(?P<postal>\d{5})$"
        ),
        country_code="FR",
        example="RUE DE LA GARE, STIRING WENDEL, 57350",
    ),
]

GRAMMAR_NAMES = [g.name for g in GRAMMARS]


class AddressParser:
    """
    Разбор свободной строки адреса по упорядоченным грамматикам.

    Чистая функция от (text, hint): без состояния между вызовами.
    """

    def __init__(
        self,
        config: "AddressConfig",
        country_resolver: Optional["ICountryResolver"] = None,
    ):
        """
        Args:
            config: Правила адресов отправителя (дефолты по типам секций, города-якоря)
            country_resolver: Справочник стран для токенов вида "FR", "FRA", "FRANCE"
        """
        self.config = config
        self.country_resolver = country_resolver

        if config.grammars is None:
            self.grammars = list(GRAMMARS)
        else:
            unknown = set(config.grammars) - set(GRAMMAR_NAMES)
            if unknown:
                raise ValueError(f"Неизвестные грамматики адреса: {sorted(unknown)}")
            # Подмножество, но всегда в каноническом порядке
            self.grammars = [g for g in GRAMMARS if g.name in config.grammars]

        self._anchor_cities = [
            (re.compile(rf"\b{re.escape(city)}\b", re.IGNORECASE), country)
            for city, country in config.anchor_cities.items()
        ]

    def kind_defaults(self, hint: Optional[str]) -> Dict[str, str]:
        """Дефолты country / city / postal_code для типа секции."""
        defaults = self.config.kinds.get(hint) if hint else None
        if defaults is None:
            return {"country": self.config.default_country, "city": DEFAULT_CITY, "postal_code": ""}
        return {"country": defaults.country, "city": defaults.city, "postal_code": defaults.postal_code}

    def parse(self, text: Optional[str], hint: Optional[str] = None) -> PartialAddress:
        """
        Разбирает адрес.

        Args:
            text: Строка адреса (строки секции, склеенные разделителем)
            hint: Тип секции (loading / delivery), задаёт дефолты

        Returns:
            PartialAddress с заполненной страной (всегда 2 буквы)
        """
        defaults = self.kind_defaults(hint)
        text = _clean(text)

        if not text:
            return PartialAddress(
                city=defaults["city"], postal_code=defaults["postal_code"], country=defaults["country"]
            )

        for grammar in self.grammars:
            match = grammar.pattern.match(text)
            if not match:
                continue

            country = self._grammar_country(grammar, match)
            if country is None:
                logger.trace(f"[AddressParser] {grammar.name}: токен страны не распознан, дальше")
                continue

            postal = match.group("postal")
            postal = normalize_uk_postcode(postal) if grammar.uk_postcode else postal.strip()

            result = PartialAddress(
                street_address=_clean(match.group("street")),
                city=_clean(match.group("city")),
                postal_code=postal,
                country=country,
                grammar=grammar.name,
            )
            logger.debug(f"[AddressParser] '{text}' → {grammar.name}: {result.city} {result.postal_code} {result.country}")
            return self._ensure_city(result, defaults)

        return self._ensure_city(self._fallback(text, defaults), defaults)

    def _grammar_country(self, grammar: AddressGrammar, match) -> Optional[str]:
        token = match.groupdict().get("country")
        if not token:
            return grammar.country_code
        if self.country_resolver is not None:
            resolved = self.country_resolver.resolve(token)
        else:
            resolved = token if re.fullmatch(r"[A-Z]{2}", token) else None
        return resolved or grammar.country_code

    def _fallback(self, text: str, defaults: Dict[str, str]) -> PartialAddress:
        """Последний токен = город, страна по маркерам → городам-якорям → дефолту."""
        tokens = text.split()
        city = _clean(tokens[-1])
        street = _clean(" ".join(tokens[:-1]))
        postal = ""

        country = None
        for prefix in _COUNTRY_PREFIX.findall(text):
            country = self.country_resolver.resolve(prefix) if self.country_resolver else None
            if country:
                break

        fr_postcode = _FR_POSTCODE.search(text)
        if fr_postcode:
            postal = fr_postcode.group(1)
            country = country or "FR"

        if country is None:
            country = self._anchor_city_country(text)

        if country is None:
            country = defaults["country"]

        report_degradation("AddressParser", f"ни одна грамматика не подошла для '{text}', страна {country}")
        return PartialAddress(street_address=street, city=city, postal_code=postal, country=country)

    def _anchor_city_country(self, text: str) -> Optional[str]:
        for pattern, country in self._anchor_cities:
            if pattern.search(text):
                return country
        return None

    def _ensure_city(self, result: PartialAddress, defaults: Dict[str, str]) -> PartialAddress:
        if len(result.city) < MIN_CITY_LENGTH:
            logger.debug(f"[AddressParser] Город '{result.city}' слишком короткий → {defaults['city']}")
            result.city = defaults["city"]
        return result
