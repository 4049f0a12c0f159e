"""
Config Loader для правил отправителей.

ЦКП: Загрузка валидированной VendorConfig по имени отправителя.

Архитектурный принцип:
- Таблицы правил (якоря, метки, карты упаковок, дефолты) - в YAML
- Поток извлечения (какие секции, в каком порядке) - в адаптере
- Новая ревизия макета отправителя = правка YAML, а не кода
"""

from pathlib import Path
from typing import ClassVar, Dict, List, Optional

import yaml
from loguru import logger
from pydantic import ValidationError

from config.settings import VENDOR_CONFIG_DIR
from ..domain.exceptions import VendorConfigurationError
from .vendor_config import VendorConfig


class VendorConfigLoader:
    """
    Загружает конфигурацию отправителя из YAML с валидацией через Pydantic.

    Конфиги неизменяемы после загрузки, поэтому кешируются на уровне класса
    и разделяются между всеми вызовами.
    """

    _cache: ClassVar[Dict[str, VendorConfig]] = {}

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Args:
            config_dir: Директория с YAML (по умолчанию freight_parsing/vendors/configs/)
        """
        self.config_dir = Path(config_dir) if config_dir is not None else VENDOR_CONFIG_DIR

    def load(self, vendor_name: str) -> VendorConfig:
        """
        Загружает конфигурацию отправителя.

        Args:
            vendor_name: Имя отправителя (transalliance, ziegler)

        Returns:
            VendorConfig: Валидированная конфигурация

        Raises:
            VendorConfigurationError: Если файла нет или структура невалидна
        """
        cache_key = f"{self.config_dir}:{vendor_name}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        config_file = self.config_dir / f"{vendor_name}.yaml"
        if not config_file.exists():
            raise VendorConfigurationError(
                f"Конфиг для {vendor_name} не найден: {config_file} (доступны: {self.available()})",
                component="VendorConfigLoader",
            )

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise VendorConfigurationError(
                f"Не удалось прочитать YAML {config_file.name}",
                component="VendorConfigLoader",
                original_error=e,
            )

        try:
            config = VendorConfig(**config_data)
        except ValidationError as e:
            raise VendorConfigurationError(
                f"Невалидный конфиг {config_file.name}",
                component="VendorConfigLoader",
                original_error=e,
            )

        if config.name != vendor_name:
            raise VendorConfigurationError(
                f"Имя в {config_file.name} ({config.name}) не совпадает с именем файла",
                component="VendorConfigLoader",
            )

        self._cache[cache_key] = config
        logger.debug(
            f"[VendorConfigLoader] Загружен конфиг {vendor_name}: "
            f"{len(config.location.sections)} типов секций, "
            f"{len(config.cargo.package_types)} типов упаковки"
        )
        return config

    def available(self) -> List[str]:
        """Имена отправителей, для которых есть YAML."""
        if not self.config_dir.exists():
            return []
        return sorted(
            p.stem for p in self.config_dir.glob("*.yaml") if p.stem != "countries"
        )

    @classmethod
    def clear_cache(cls) -> None:
        cls._cache.clear()
