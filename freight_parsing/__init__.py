"""
Freight Parsing: извлечение заказов на перевозку из текстовых строк документов.

Пайплайн:
1. LineNormalizer - trim + удаление пустых строк (индексы без дыр)
2. Dispatcher - выбор адаптера отправителя по detect()
3. VendorAdapter.extract - секции, груз, цена, референс → ShipmentOrder

Вход: contracts.RawDocument (строки от внешнего конвертера PDF→текст)
Выход: contracts.ShipmentOrder (для сервиса создания заказов)
"""

from freight_parsing.application.extraction_pipeline import ExtractionPipeline, PipelineResult
from freight_parsing.application.dispatcher import VendorDispatcher
from freight_parsing.application.factory import ExtractionComponentFactory
from freight_parsing.domain.exceptions import UnrecognizedFormatError
from freight_parsing.normalization.line_normalizer import LineNormalizer, NormalizedLines

__all__ = [
    "ExtractionPipeline",
    "PipelineResult",
    "VendorDispatcher",
    "ExtractionComponentFactory",
    "UnrecognizedFormatError",
    "LineNormalizer",
    "NormalizedLines",
]
