"""
DTO для конфигурации отправителя.

Содержит все специфичные для отправителя правила:
- Детекция формата (якоря в первых строках)
- Разделители чисел
- Форматы дат и временных окон
- Правила секций (якоря, терминаторы, маркеры)
- Грамматики адресов и дефолты по типу секции
- Правила груза, цены, референса и статичный блок реквизитов

Использует Pydantic для валидации структуры конфигурации.
"""

import re
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from config.settings import (
    ADDRESS_SEPARATOR,
    CARGO_BLOCK_MAX_GAP,
    DEFAULT_CARGO_TITLE,
    DEFAULT_CITY,
    DEFAULT_CURRENCY,
    LOCATION_MAX_ADDRESS_LINES,
    LOCATION_MAX_LINES,
    LOCATION_SCAN_WINDOW,
)
from contracts.shipment_order_dto import PackageType


def _validate_regex(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    try:
        re.compile(v)
    except re.error as e:
        raise ValueError(f"Невалидное регулярное выражение {v!r}: {e}")
    return v


def _validate_country(v: str) -> str:
    if not re.fullmatch(r"[A-Z]{2}", v):
        raise ValueError(f"Код страны должен быть ISO alpha-2 (GB, FR), получено: {v}")
    return v


class DetectionConfig(BaseModel):
    """Якоря для detect(): только стабильные подстроки."""
    min_lines: int = Field(6, ge=1, description="Минимум строк в документе")
    first_line_contains: Optional[str] = Field(None, description="Подстрока в строке 0")
    second_line_contains: Optional[str] = Field(None, description="Подстрока в строке 1")
    any_line_contains: List[str] = Field(default_factory=list, description="Каждая должна встретиться в какой-то строке")
    any_line_equals: List[str] = Field(default_factory=list, description="Каждая должна быть отдельной строкой")


class NumberFormatConfig(BaseModel):
    """Разделители чисел отправителя."""
    decimal_separator: str = Field(".", description='Разделитель дроби ("," или ".")')
    thousands_separator: str = Field(",", description='Разделитель тысяч (".", ",", пробел)')

    @field_validator("decimal_separator", "thousands_separator")
    @classmethod
    def validate_separators(cls, v):
        if v not in [",", ".", " "]:
            raise ValueError(f'Разделитель должен быть одним из [",", ".", " "], получено: {v}')
        return v


class DateTimeConfig(BaseModel):
    """Форматы дат (DD/MM/YY, DD/MM/YYYY) и регулярки временных окон (группы h1 m1 h2 m2)."""
    date_formats: List[str] = Field(default_factory=list)
    time_range_patterns: List[str] = Field(default_factory=list)
    match_mode: Literal["search", "fullmatch"] = "search"

    @field_validator("date_formats")
    @classmethod
    def validate_formats(cls, v):
        if not v:
            raise ValueError("date_formats не может быть пустым")
        for fmt in v:
            if "DD" not in fmt or "MM" not in fmt or "YY" not in fmt:
                raise ValueError(f"Формат даты должен содержать DD, MM и YY/YYYY, получено: {fmt}")
        return v

    @field_validator("time_range_patterns")
    @classmethod
    def validate_time_patterns(cls, v):
        for pattern in v:
            _validate_regex(pattern)
            groups = re.compile(pattern).groupindex
            missing = {"h1", "m1", "h2", "m2"} - set(groups)
            if missing:
                raise ValueError(f"В паттерне времени нет групп {sorted(missing)}: {pattern}")
        return v


class KindDefaults(BaseModel):
    """Дефолты адреса для типа секции (loading / delivery)."""
    country: str
    city: str = DEFAULT_CITY
    postal_code: str = ""

    @field_validator("country")
    @classmethod
    def validate_country(cls, v):
        return _validate_country(v)


class AddressConfig(BaseModel):
    """Правила AddressParser для отправителя."""
    default_country: str = Field(..., description="Самая частая страна отправителя")
    kinds: Dict[str, KindDefaults] = Field(default_factory=dict)
    grammars: Optional[List[str]] = Field(None, description="Имена грамматик по порядку (None = все)")
    anchor_cities: Dict[str, str] = Field(default_factory=dict, description="Подстрока города → страна")

    @field_validator("default_country")
    @classmethod
    def validate_default_country(cls, v):
        return _validate_country(v)

    @field_validator("anchor_cities")
    @classmethod
    def validate_anchor_cities(cls, v):
        return {key.upper(): _validate_country(country) for key, country in v.items()}


class SectionConfig(BaseModel):
    """Якоря одного типа секции."""
    anchors: List[str] = Field(..., min_length=1, description="Точные строки, открывающие секцию")
    multiple: bool = Field(False, description="Собирать все вхождения (иначе только первое)")


class LocationConfig(BaseModel):
    """Правила LocationExtractor."""
    sections: Dict[str, SectionConfig]
    hard_stop_prefixes: List[str] = Field(default_factory=list)
    address_terminators: List[str] = Field(default_factory=list)
    ignore_patterns: List[str] = Field(default_factory=list)
    reference_label: Optional[str] = None
    introduced_by: Optional[str] = None
    introduced_by_window: int = Field(5, ge=1)
    company_pattern: str = r"^\D"
    window: int = Field(LOCATION_SCAN_WINDOW, ge=1)
    max_lines: int = Field(LOCATION_MAX_LINES, ge=1)
    max_address_lines: int = Field(LOCATION_MAX_ADDRESS_LINES, ge=0)
    address_separator: str = ADDRESS_SEPARATOR

    @field_validator("ignore_patterns")
    @classmethod
    def validate_patterns(cls, v):
        return [_validate_regex(p) for p in v]

    @field_validator("company_pattern")
    @classmethod
    def validate_company_pattern(cls, v):
        return _validate_regex(v)

    @property
    def all_anchors(self) -> List[str]:
        return [anchor for section in self.sections.values() for anchor in section.anchors]


class CargoConfig(BaseModel):
    """Правила CargoExtractor."""
    strategies: List[Literal["labeled", "counted"]] = Field(default_factory=lambda: ["labeled"])
    weight_pattern: Optional[str] = None
    ldm_pattern: Optional[str] = None
    nature_pattern: Optional[str] = None
    number_label: Optional[str] = None
    count_pattern: Optional[str] = None
    package_types: Dict[str, str] = Field(default_factory=dict)
    case_insensitive_types: bool = False
    labeled_occurrence: Literal["first", "last"] = "first"
    block_max_gap: int = Field(CARGO_BLOCK_MAX_GAP, ge=0, description="Макс. разрыв между строками одного блока груза")
    default_title: str = DEFAULT_CARGO_TITLE

    @field_validator("weight_pattern", "ldm_pattern", "nature_pattern", "count_pattern")
    @classmethod
    def validate_patterns(cls, v):
        return _validate_regex(v)

    @field_validator("package_types")
    @classmethod
    def validate_package_types(cls, v):
        allowed = {t.value for t in PackageType}
        for text, package_type in v.items():
            if package_type not in allowed:
                raise ValueError(f"Неизвестный тип упаковки {package_type!r} для {text!r}, допустимы: {sorted(allowed)}")
        return v

    @model_validator(mode="after")
    def validate_strategy_patterns(self):
        if "counted" in self.strategies and not self.count_pattern:
            raise ValueError("Стратегия counted требует count_pattern")
        if self.count_pattern and not {"count", "unit"} <= set(re.compile(self.count_pattern).groupindex):
            raise ValueError("count_pattern должен содержать группы count и unit")
        for pattern in (self.weight_pattern, self.ldm_pattern, self.nature_pattern):
            if pattern and "value" not in re.compile(pattern).groupindex:
                raise ValueError(f"В паттерне {pattern!r} нет группы value")
        return self


class ReferenceConfig(BaseModel):
    """Правило номера заказа: строка-якорь + значение в ней или в следующей строке."""
    pattern: str = Field(..., description="Regex строки-якоря; группа 1 - значение (если inline)")
    next_line: bool = Field(False, description="Значение в следующей строке")

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v):
        return _validate_regex(v)


class PriceConfig(BaseModel):
    """Правило цены перевозки."""
    label_pattern: str = Field(..., description="Regex строки-якоря с ценой")
    inline_pattern: Optional[str] = Field(None, description="Regex цены в строке-якоре (группа amount)")
    value_pattern: str = Field(r"(?P<amount>\d[\d\s.,]*)", description="Regex цены в строке по смещению")
    offset: int = Field(1, ge=0, description="Смещение строки со значением от якоря")
    default_currency: str = DEFAULT_CURRENCY

    @field_validator("label_pattern", "inline_pattern", "value_pattern")
    @classmethod
    def validate_patterns(cls, v):
        return _validate_regex(v)

    @field_validator("inline_pattern", "value_pattern")
    @classmethod
    def validate_amount_group(cls, v):
        if v is not None and "amount" not in re.compile(v).groupindex:
            raise ValueError(f"В паттерне цены {v!r} нет группы amount")
        return v


class PartyConfig(BaseModel):
    """Статичный блок реквизитов отправителя + необязательные якоря для скрейпинга."""
    company: str
    street_address: str = ""
    city: str = ""
    postal_code: str = ""
    country: str
    vat_code: str = ""
    contact_person: str = ""
    email: str = ""

    vat_label: Optional[str] = None
    contact_label: Optional[str] = None
    contact_exclude: Optional[str] = None
    address_anchor: Optional[str] = None
    address_max_lines: int = Field(3, ge=0)
    address_stop: List[str] = Field(default_factory=list)

    @field_validator("country")
    @classmethod
    def validate_country(cls, v):
        return _validate_country(v)


class VendorConfig(BaseModel):
    """
    Полная конфигурация отправителя.

    Загружается из YAML файла и используется адаптером и всеми экстракторами.
    Валидируется через Pydantic для обеспечения целостности структуры.
    """
    name: str = Field(..., description="Имя отправителя (transalliance, ziegler)")
    display_name: str = Field("", description="Человеко-читаемое имя")

    detection: DetectionConfig
    numbers: NumberFormatConfig = Field(default_factory=NumberFormatConfig)
    dates: DateTimeConfig
    address: AddressConfig
    location: LocationConfig
    cargo: CargoConfig = Field(default_factory=CargoConfig)
    reference: ReferenceConfig
    price: PriceConfig
    party: PartyConfig
    lowercase_attachment: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not re.fullmatch(r"[a-z][a-z0-9_]*", v):
            raise ValueError(f"name должен быть snake_case, получено: {v}")
        return v

    @model_validator(mode="after")
    def validate_kinds(self):
        missing = set(self.location.sections) - set(self.address.kinds)
        if missing:
            raise ValueError(f"Нет address.kinds для секций: {sorted(missing)}")
        return self
