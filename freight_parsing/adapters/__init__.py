"""
Адаптеры отправителей и реестр в порядке опроса detect().
"""

from typing import List, Type

from ..domain.interfaces import IVendorAdapter
from .toolkit import VendorToolkit, matches_detection
from .transalliance import TransallianceAdapter
from .ziegler import ZieglerAdapter

# Порядок фиксирован: Dispatcher опрашивает адаптеры именно так
VENDOR_ADAPTERS: List[Type[IVendorAdapter]] = [
    TransallianceAdapter,
    ZieglerAdapter,
]

__all__ = [
    "VENDOR_ADAPTERS",
    "VendorToolkit",
    "matches_detection",
    "TransallianceAdapter",
    "ZieglerAdapter",
]
