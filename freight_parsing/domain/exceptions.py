"""
Исключения для домена Freight Parsing.

Наружу пробрасывается только UnrecognizedFormatError.
Всё остальное либо логируется как деградация, либо превращается в дефолт.
"""

from loguru import logger


class ExtractionError(Exception):
    """Базовое исключение для ошибок домена Freight Parsing."""

    def __init__(self, message: str, component: str = None, original_error: Exception = None):
        self.message = message
        self.component = component
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Extraction Error: {self.message}"
        if self.component:
            msg += f" (Component: {self.component})"
        if self.original_error:
            msg += f" [Original: {type(self.original_error).__name__}: {str(self.original_error)}]"
        return msg


class UnrecognizedFormatError(ExtractionError):
    """Ни один адаптер отправителя не узнал документ. Фатально, частичного результата нет."""
    pass


class DegradedExtractionWarning(ExtractionError):
    """
    Подпарсер откатился на дефолт (нет даты, адрес не разобран, нет груза).

    Никогда не пробрасывается наружу: создаётся и логируется через report_degradation().
    """
    pass


class MalformedNumericToken(ExtractionError, ValueError):
    """Текст числового поля не удалось разобрать как число. Вызывающий код подставляет 0."""
    pass


class VendorConfigurationError(ExtractionError):
    """Ошибка YAML-правил отправителя (нет файла, невалидная структура)."""
    pass


def report_degradation(component: str, message: str) -> DegradedExtractionWarning:
    """
    Фиксирует деградацию извлечения в логе и возвращает её объект.

    Args:
        component: Имя компонента (AddressParser, DateTimeParser, ...)
        message: Что именно откатилось на дефолт

    Returns:
        DegradedExtractionWarning: Для вызывающего кода, если нужно накопить
    """
    degradation = DegradedExtractionWarning(message, component=component)
    logger.warning(f"[{component}] Деградация: {message}")
    return degradation
