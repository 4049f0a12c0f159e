"""
Domain слой Freight Parsing.

Содержит интерфейсы (абстрактные классы) и исключения домена.
"""

from .interfaces import (
    IVendorAdapter,
    ICountryResolver,
    IExtractionPipeline,
)

from .exceptions import (
    ExtractionError,
    UnrecognizedFormatError,
    DegradedExtractionWarning,
    MalformedNumericToken,
    VendorConfigurationError,
    report_degradation,
)

__all__ = [
    # Интерфейсы
    "IVendorAdapter",
    "ICountryResolver",
    "IExtractionPipeline",

    # Исключения
    "ExtractionError",
    "UnrecognizedFormatError",
    "DegradedExtractionWarning",
    "MalformedNumericToken",
    "VendorConfigurationError",
    "report_degradation",
]
