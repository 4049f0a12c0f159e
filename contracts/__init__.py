"""
Контракты DTO на границах проекта Freight Order Parsing.

Все выходные контракты используют Pydantic v2 для валидации.

Контракты:
- Внешний конвертер -> Parsing: RawDocument (raw_document_dto.py)
- Parsing -> сервис заказов: ShipmentOrder (shipment_order_dto.py)
"""

# Вход
from .raw_document_dto import RawDocument

# Выход
from .shipment_order_dto import (
    ShipmentOrder,
    Customer,
    CustomerSide,
    PartyDetails,
    Location,
    TimeWindow,
    Cargo,
    PackageType,
    ShipmentType,
)

__all__ = [
    # Вход
    "RawDocument",
    # Выход
    "ShipmentOrder",
    "Customer",
    "CustomerSide",
    "PartyDetails",
    "Location",
    "TimeWindow",
    "Cargo",
    "PackageType",
    "ShipmentType",
]
