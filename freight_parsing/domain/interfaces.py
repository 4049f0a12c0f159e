"""
Интерфейсы (абстрактные классы) для домена Freight Parsing.

Домен отвечает за:
1. Нормализацию строк документа
2. Определение формата отправителя
3. Извлечение секций, груза, цены и референса
4. Сборку канонического ShipmentOrder
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from contracts.raw_document_dto import RawDocument
    from contracts.shipment_order_dto import ShipmentOrder
    from ..normalization.line_normalizer import NormalizedLines


class IVendorAdapter(ABC):
    """
    Интерфейс адаптера отправителя.

    Каждый отправитель - отдельный вариант со своими правилами.
    Наследования правил между отправителями нет: общие части подключаются композицией.
    """

    #: Уникальное имя отправителя (совпадает с именем YAML-конфига)
    name: str = ""

    @abstractmethod
    def detect(self, lines: "NormalizedLines") -> bool:
        """
        Быстрая проверка: это документ нашего отправителя?

        Должна быть дешёвой, без побочных эффектов и опираться только
        на стабильные якоря (название компании в первой строке, заголовок секции).

        Args:
            lines: Нормализованные строки документа

        Returns:
            True если адаптер берётся за документ
        """
        pass

    @abstractmethod
    def extract(self, lines: "NormalizedLines", filename: Optional[str] = None) -> "ShipmentOrder":
        """
        Извлекает заказ. Не бросает исключений: недостающие данные → дефолты.

        Args:
            lines: Нормализованные строки документа
            filename: Имя вложения (опционально)

        Returns:
            Структурно полный ShipmentOrder
        """
        pass


class ICountryResolver(ABC):
    """Интерфейс внешнего справочника стран: название/префикс → ISO alpha-2."""

    @abstractmethod
    def resolve(self, token: str) -> Optional[str]:
        """
        Args:
            token: Название страны, alpha-2/alpha-3 код или алиас (UK, France, FRA)

        Returns:
            ISO 3166-1 alpha-2 код или None если страна не известна
        """
        pass


class IExtractionPipeline(ABC):
    """Интерфейс пайплайна извлечения заказов."""

    @abstractmethod
    def process(self, raw_lines: Sequence[str], attachment_filename: Optional[str] = None):
        """
        Обрабатывает сырые строки документа через весь пайплайн.

        Args:
            raw_lines: Сырые строки (до нормализации)
            attachment_filename: Имя вложения

        Returns:
            PipelineResult с заказом и отладочными данными

        Raises:
            UnrecognizedFormatError: Если формат не узнан
        """
        pass

    @abstractmethod
    def process_document(self, document: "RawDocument"):
        """
        Обрабатывает RawDocument (контракт входа).

        Args:
            document: Сырой документ

        Returns:
            PipelineResult
        """
        pass
