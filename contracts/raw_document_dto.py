"""
DTO контракт: внешний конвертер PDF→текст -> Freight Parsing

Документ уже сведён к упорядоченному списку строк.
Конвертация PDF в строки - не наша зона, мы только потребители.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class RawDocument:
    """
    Сырой документ отправителя.

    Строки приходят как есть: с пробелами по краям и пустыми строками.
    Нормализация выполняется уже внутри пайплайна.
    """
    lines: List[str] = field(default_factory=list)   # Сырые строки текста
    attachment_filename: Optional[str] = None        # Имя исходного вложения (если есть)

    @classmethod
    def from_text(cls, text: str, attachment_filename: Optional[str] = None) -> "RawDocument":
        """Создаёт документ из цельного текста (строки через перенос)."""
        return cls(lines=text.splitlines(), attachment_filename=attachment_filename)

    def to_dict(self) -> dict:
        return {
            "lines": list(self.lines),
            "attachment_filename": self.attachment_filename,
        }
