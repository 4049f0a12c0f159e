"""
Фабрика для создания компонентов Freight Parsing.

Предоставляет удобные методы для создания и конфигурации
адаптеров, диспетчера и пайплайна через единый интерфейс.
"""

from datetime import date
from pathlib import Path
from typing import Callable, List, Optional, Sequence
from loguru import logger

from ..adapters import VENDOR_ADAPTERS
from ..domain.interfaces import ICountryResolver, IVendorAdapter
from ..extraction.country_resolver import StaticCountryResolver
from ..normalization.line_normalizer import LineNormalizer
from ..vendors.config_loader import VendorConfigLoader
from .dispatcher import VendorDispatcher
from .extraction_pipeline import ExtractionPipeline


class ExtractionComponentFactory:
    """
    Фабрика для создания компонентов Freight Parsing.

    Любой компонент можно подменить, остальные создаются по умолчанию.
    """

    @staticmethod
    def create_country_resolver(table_path: Optional[Path] = None) -> ICountryResolver:
        logger.debug("[Factory] Создание справочника стран")
        return StaticCountryResolver(table_path)

    @staticmethod
    def create_adapters(
        config_dir: Optional[Path] = None,
        country_resolver: Optional[ICountryResolver] = None,
        today: Optional[Callable[[], date]] = None,
    ) -> List[IVendorAdapter]:
        """
        Создает адаптеры всех зарегистрированных отправителей в порядке реестра.

        Args:
            config_dir: Директория YAML-конфигов (по умолчанию из settings)
            country_resolver: Справочник стран (общий для всех адаптеров)
            today: Провайдер текущей даты

        Returns:
            Список адаптеров в порядке опроса
        """
        loader = VendorConfigLoader(config_dir)
        if country_resolver is None:
            country_resolver = ExtractionComponentFactory.create_country_resolver()

        adapters = [
            adapter_cls(config=loader.load(adapter_cls.name), country_resolver=country_resolver, today=today)
            for adapter_cls in VENDOR_ADAPTERS
        ]
        logger.debug(f"[Factory] Создано адаптеров: {len(adapters)}")
        return adapters

    @staticmethod
    def create_dispatcher(adapters: Optional[Sequence[IVendorAdapter]] = None) -> VendorDispatcher:
        if adapters is None:
            adapters = ExtractionComponentFactory.create_adapters()
        return VendorDispatcher(adapters)

    @staticmethod
    def create_pipeline(
        dispatcher: Optional[VendorDispatcher] = None,
        normalizer: Optional[LineNormalizer] = None,
        today: Optional[Callable[[], date]] = None,
    ) -> ExtractionPipeline:
        """
        Создает пайплайн извлечения.

        Args:
            dispatcher: Диспетчер (опционально)
            normalizer: Нормализатор строк (опционально)
            today: Провайдер текущей даты (используется, если диспетчер не передан)

        Returns:
            Пайплайн, реализующий интерфейс IExtractionPipeline
        """
        if dispatcher is None:
            dispatcher = ExtractionComponentFactory.create_dispatcher(
                ExtractionComponentFactory.create_adapters(today=today)
            )
        return ExtractionPipeline(dispatcher=dispatcher, normalizer=normalizer)

    @staticmethod
    def create_default_pipeline() -> ExtractionPipeline:
        logger.info("[Factory] Создание пайплайна с настройками по умолчанию")
        return ExtractionComponentFactory.create_pipeline()
