"""
Extraction Pipeline - оркестратор извлечения заказа.

Координирует этапы в строгом порядке:
1. LineNormalizer → 2. VendorDispatcher.route → 3. VendorAdapter.extract

Возвращает ShipmentOrder (контракт для сервиса создания заказов)
вместе с отладочными данными.
"""

import time
from dataclasses import dataclass
from typing import Optional, Sequence
from loguru import logger

from contracts.raw_document_dto import RawDocument
from contracts.shipment_order_dto import ShipmentOrder
from ..domain.interfaces import IExtractionPipeline
from ..normalization.line_normalizer import LineNormalizer
from .dispatcher import VendorDispatcher


@dataclass
class PipelineResult:
    """
    Результат пайплайна с промежуточными данными.

    Используется для отладки и анализа.
    """
    order: ShipmentOrder
    vendor: str = ""
    raw_line_count: int = 0
    normalized_line_count: int = 0
    processing_time_ms: float = 0.0

    def to_dict(self) -> dict:
        return {
            "order": self.order.to_dict() if self.order else None,
            "vendor": self.vendor,
            "raw_line_count": self.raw_line_count,
            "normalized_line_count": self.normalized_line_count,
            "processing_time_ms": self.processing_time_ms,
        }


class ExtractionPipeline(IExtractionPipeline):
    """
    Пайплайн извлечения заказа из строк документа.

    ЦКП: Структурно полный ShipmentOrder либо UnrecognizedFormatError.
    """

    def __init__(self, dispatcher: VendorDispatcher, normalizer: Optional[LineNormalizer] = None):
        """
        Args:
            dispatcher: Диспетчер с зарегистрированными адаптерами
            normalizer: Нормализатор строк (по умолчанию LineNormalizer)
        """
        self.dispatcher = dispatcher
        self.normalizer = normalizer or LineNormalizer()
        logger.info(f"[ExtractionPipeline] Инициализирован ({len(dispatcher.adapters)} адаптеров)")

    def process(self, raw_lines: Sequence[str], attachment_filename: Optional[str] = None) -> PipelineResult:
        start_time = time.time()
        raw_lines = list(raw_lines)

        lines = self.normalizer.normalize(raw_lines)
        adapter = self.dispatcher.route(lines)
        order = adapter.extract(lines, attachment_filename)

        result = PipelineResult(
            order=order,
            vendor=adapter.name,
            raw_line_count=len(raw_lines),
            normalized_line_count=len(lines),
            processing_time_ms=(time.time() - start_time) * 1000,
        )
        logger.info(
            f"[ExtractionPipeline] Готово: {adapter.name}, заказ {order.order_reference or '<без номера>'}, "
            f"{result.processing_time_ms:.1f} мс"
        )
        return result

    def process_document(self, document: RawDocument) -> PipelineResult:
        return self.process(document.lines, document.attachment_filename)
