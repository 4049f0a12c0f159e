"""
Line Normalizer

ЦКП: Упорядоченные непустые строки без дыр в индексах.

Input: сырые строки от конвертера PDF→текст
Output: NormalizedLines - система координат для всех якорных поисков

Все "N строк после якоря" в адаптерах считаются именно в этих индексах,
поэтому пустые строки удаляются ДО любого поиска.
"""

from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, Union
from loguru import logger


@dataclass(frozen=True)
class NormalizedLines:
    """
    Неизменяемая последовательность нормализованных строк.

    Все методы доступа проверяют границы: чтение за концом даёт None / -1,
    а не IndexError.
    """
    lines: Tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self.lines)

    def __getitem__(self, index: Union[int, slice]):
        return self.lines[index]

    def get(self, index: Optional[int]) -> Optional[str]:
        """Строка по индексу или None, если индекс вне диапазона."""
        if index is None or index < 0 or index >= len(self.lines):
            return None
        return self.lines[index]

    def find(self, predicate: Callable[[str], bool], start: int = 0) -> int:
        """Индекс первой строки (начиная со start), для которой predicate истинен, иначе -1."""
        for i in range(max(0, start), len(self.lines)):
            if predicate(self.lines[i]):
                return i
        return -1

    def find_all(self, predicate: Callable[[str], bool]) -> List[int]:
        """Индексы всех подходящих строк по порядку."""
        return [i for i, line in enumerate(self.lines) if predicate(line)]

    def window(self, start: int, size: int) -> range:
        """Диапазон индексов [start, start + size), обрезанный по длине документа."""
        start = max(0, start)
        return range(start, min(start + max(0, size), len(self.lines)))

    @property
    def full_text(self) -> str:
        """Полный текст (все строки через перенос)."""
        return "\n".join(self.lines)


class LineNormalizer:
    """
    Trim каждой строки + удаление пустых.

    Ошибок нет: пустой вход даёт пустой NormalizedLines.
    """

    def normalize(self, raw_lines: Sequence[str]) -> NormalizedLines:
        """
        Args:
            raw_lines: Сырые строки (None внутри списка трактуется как пустая строка)

        Returns:
            NormalizedLines с сохранённым порядком и сжатыми индексами
        """
        raw_lines = list(raw_lines)
        cleaned = tuple(
            line.strip() for line in (raw or "" for raw in raw_lines) if line.strip()
        )
        logger.debug(
            f"[LineNormalizer] {len(raw_lines)} сырых строк → {len(cleaned)} непустых"
        )
        return NormalizedLines(lines=cleaned)
