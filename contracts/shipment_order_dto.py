"""
DTO контракт: Freight Parsing -> внешний сервис создания заказов

Каноническая запись заказа на перевозку.
Одинаковая для всех отправителей, адаптеры заполняют её каждый по своим правилам.

ВАЖНО: Имена полей - часть внешнего контракта (customer.side, cargos[].type и т.д.).
Не переименовывать без согласования с потребителем.
"""

import re
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CustomerSide(str, Enum):
    """Сторона заказчика в перевозке."""
    SENDER = "sender"
    RECIPIENT = "recipient"
    NONE = "none"


class PackageType(str, Enum):
    """Нормализованный тип упаковки."""
    PALLET = "pallet"
    CARTON = "carton"
    CRATE = "crate"
    DRUM = "drum"
    ROLL = "roll"
    BAG = "bag"
    OTHER = "other"


class ShipmentType(str, Enum):
    """Full Truck Load / Less than Truck Load."""
    FTL = "FTL"
    LTL = "LTL"


class PartyDetails(BaseModel):
    """Реквизиты стороны: компания и её почтовый адрес."""

    company: str = Field("", description="Название компании")
    street_address: str = Field("", description="Улица, дом, доп. строки адреса")
    city: str = Field("", description="Город")
    postal_code: str = Field("", description="Почтовый индекс (формат зависит от страны)")
    country: str = Field(..., description="ISO 3166-1 alpha-2")
    vat_code: str = Field("", description="VAT номер")
    contact_person: str = Field("", description="Контактное лицо")
    email: str = Field("", description="Email")

    model_config = ConfigDict(frozen=True)

    @field_validator("country")
    @classmethod
    def validate_country(cls, v: str) -> str:
        if not re.fullmatch(r"[A-Z]{2}", v or ""):
            raise ValueError(f"country должен быть ISO alpha-2 кодом, получено: {v!r}")
        return v


class TimeWindow(BaseModel):
    """Временное окно загрузки/выгрузки."""

    datetime_from: datetime = Field(..., description="Начало окна")
    datetime_to: Optional[datetime] = Field(None, description="Конец окна (только если явно указан)")

    model_config = ConfigDict(frozen=True)


class Location(BaseModel):
    """Точка загрузки или выгрузки."""

    company_address: PartyDetails
    time: TimeWindow
    comment: Optional[str] = Field(None, description="Например, booking reference точки")

    model_config = ConfigDict(frozen=True)


class Cargo(BaseModel):
    """Грузовое место (или группа одинаковых мест)."""

    title: str = Field(..., description="Описание груза")
    package_count: int = Field(1, ge=1, description="Количество мест")
    package_type: PackageType = Field(PackageType.OTHER, description="Тип упаковки")
    weight: float = Field(0.0, ge=0, description="Вес, кг")
    ldm: float = Field(0.0, ge=0, description="Погрузочные метры")
    number: str = Field("", description="Номер отправки (OT и т.п.)")
    shipment_type: ShipmentType = Field(ShipmentType.LTL, alias="type")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Customer(BaseModel):
    """Заказчик перевозки."""

    side: CustomerSide = CustomerSide.NONE
    details: PartyDetails

    model_config = ConfigDict(frozen=True)


class ShipmentOrder(BaseModel):
    """
    Каноническая запись заказа.

    Это output слоя извлечения.
    Передается во внешний сервис, который создаёт бизнес-заказ.
    """

    order_reference: str = Field("", description="Номер заказа отправителя")
    customer: Customer
    loading_locations: List[Location] = Field(..., min_length=1)
    destination_locations: List[Location] = Field(..., min_length=1)
    cargos: List[Cargo] = Field(..., min_length=1)
    freight_price: float = Field(0.0, ge=0, description="Стоимость перевозки")
    freight_currency: str = Field("EUR", description="ISO 4217")
    attachment_filenames: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @field_validator("freight_currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        if not re.fullmatch(r"[A-Z]{3}", v or ""):
            raise ValueError(f"freight_currency должен быть ISO 4217 кодом, получено: {v!r}")
        return v

    def to_dict(self) -> dict:
        """Вложенная key-value структура для внешнего сервиса (JSON-совместимая)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
