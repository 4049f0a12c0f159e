"""
Правила отправителей: YAML-таблицы + валидированная загрузка.
"""

from .vendor_config import (
    VendorConfig,
    DetectionConfig,
    NumberFormatConfig,
    DateTimeConfig,
    AddressConfig,
    KindDefaults,
    LocationConfig,
    SectionConfig,
    CargoConfig,
    ReferenceConfig,
    PriceConfig,
    PartyConfig,
)
from .config_loader import VendorConfigLoader

__all__ = [
    "VendorConfig",
    "DetectionConfig",
    "NumberFormatConfig",
    "DateTimeConfig",
    "AddressConfig",
    "KindDefaults",
    "LocationConfig",
    "SectionConfig",
    "CargoConfig",
    "ReferenceConfig",
    "PriceConfig",
    "PartyConfig",
    "VendorConfigLoader",
]
