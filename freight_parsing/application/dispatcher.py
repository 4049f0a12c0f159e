"""
Vendor Dispatcher

ЦКП: Адаптер отправителя для документа.

Опрашивает detect() адаптеров в порядке регистрации, первый положительный побеждает.
Единственная жёсткая ошибка всего пайплайна - UnrecognizedFormatError.
"""

from typing import List, Optional, Sequence
from loguru import logger

from contracts.shipment_order_dto import ShipmentOrder
from ..domain.exceptions import UnrecognizedFormatError
from ..domain.interfaces import IVendorAdapter
from ..normalization.line_normalizer import NormalizedLines


class VendorDispatcher:
    """Маршрутизация документа к адаптеру отправителя."""

    def __init__(self, adapters: Sequence[IVendorAdapter]):
        """
        Args:
            adapters: Экземпляры адаптеров в порядке опроса
        """
        self.adapters: List[IVendorAdapter] = list(adapters)
        logger.debug(f"[VendorDispatcher] Адаптеры: {[a.name for a in self.adapters]}")

    def route(self, lines: NormalizedLines) -> IVendorAdapter:
        """
        Args:
            lines: Нормализованные строки

        Returns:
            Первый адаптер, чей detect() вернул True

        Raises:
            UnrecognizedFormatError: Ни один адаптер не узнал документ
        """
        for adapter in self.adapters:
            if adapter.detect(lines):
                logger.info(f"[VendorDispatcher] Формат: {adapter.name}")
                return adapter
            logger.trace(f"[VendorDispatcher] {adapter.name}: не наш формат")

        first_line = lines.get(0) or "<пусто>"
        raise UnrecognizedFormatError(
            f"ни один из {len(self.adapters)} адаптеров не узнал документ ({len(lines)} строк, первая: {first_line!r})",
            component="VendorDispatcher",
        )

    def dispatch(self, lines: NormalizedLines, filename: Optional[str] = None) -> ShipmentOrder:
        """route() + extract() выбранного адаптера."""
        return self.route(lines).extract(lines, filename)
