"""
Cargo Extractor

ЦКП: Список грузовых мест (никогда не пустой).

Две стратегии, порядок задаётся в конфиге отправителя:
- labeled: поля по меткам ("Weight . :", "LM . . . :", "M. nature:", "OT :") из одного блока
- counted: строка вида "<число> <единица>" ("66 PALLETS"), берётся первая

Если ни одна стратегия ничего не нашла - один синтетический груз.
"""

import re
from typing import List, Optional, Set, TYPE_CHECKING
from loguru import logger

from config.settings import FTL_PACKAGE_COUNT_THRESHOLD, FTL_WEIGHT_THRESHOLD_KG
from contracts.shipment_order_dto import Cargo, PackageType, ShipmentType
from ..domain.exceptions import report_degradation
from ..normalization.line_normalizer import NormalizedLines
from ..normalization.number_parser import NumberLocale, DOT_DECIMAL, to_number
from .field_rules import value_after_label

if TYPE_CHECKING:
    from ..vendors.vendor_config import CargoConfig


def classify_shipment(weight: float, package_count: Optional[int] = None) -> ShipmentType:
    """
    FTL если вес > 10000 кг или (для счётной стратегии) мест > 10.

    Обе границы исключительные: ровно 10000 кг - ещё LTL.
    """
    if weight > FTL_WEIGHT_THRESHOLD_KG:
        return ShipmentType.FTL
    if package_count is not None and package_count > FTL_PACKAGE_COUNT_THRESHOLD:
        return ShipmentType.FTL
    return ShipmentType.LTL


class CargoExtractor:
    """Извлечение груза по правилам отправителя."""

    def __init__(self, rules: "CargoConfig", number_locale: NumberLocale = DOT_DECIMAL):
        self.rules = rules
        self.number_locale = number_locale

        self._weight = re.compile(rules.weight_pattern) if rules.weight_pattern else None
        self._ldm = re.compile(rules.ldm_pattern) if rules.ldm_pattern else None
        self._nature = re.compile(rules.nature_pattern) if rules.nature_pattern else None
        self._count = re.compile(rules.count_pattern) if rules.count_pattern else None

        if rules.case_insensitive_types:
            self._package_types = {k.strip().upper(): v for k, v in rules.package_types.items()}
        else:
            self._package_types = {k.strip(): v for k, v in rules.package_types.items()}

    def map_package_type(self, text: Optional[str]) -> PackageType:
        """Свободный текст упаковки → PackageType. Нет в таблице → other."""
        if not text:
            return PackageType.OTHER
        key = text.strip().upper() if self.rules.case_insensitive_types else text.strip()
        mapped = self._package_types.get(key)
        if mapped is None:
            logger.trace(f"[CargoExtractor] Тип упаковки '{text}' не в таблице → other")
            return PackageType.OTHER
        return PackageType(mapped)

    def extract(self, lines: NormalizedLines) -> List[Cargo]:
        """
        Args:
            lines: Нормализованные строки документа

        Returns:
            List[Cargo]: минимум один элемент
        """
        for strategy in self.rules.strategies:
            if strategy == "labeled":
                cargo = self._extract_labeled(lines)
            else:
                cargo = self._extract_counted(lines)

            if cargo is not None:
                logger.debug(
                    f"[CargoExtractor] {strategy}: {cargo.package_count} x {cargo.package_type.value}, "
                    f"{cargo.weight} кг, {cargo.ldm} LDM → {cargo.shipment_type.value}"
                )
                return [cargo]

        report_degradation("CargoExtractor", "груз не найден, синтетический груз по умолчанию")
        return [self.default_cargo()]

    def default_cargo(self) -> Cargo:
        return Cargo(
            title=self.rules.default_title,
            package_count=1,
            package_type=PackageType.OTHER,
            shipment_type=ShipmentType.LTL,
        )

    def _label_kinds(self, line: str) -> Set[str]:
        kinds = set()
        for kind, regex in (("weight", self._weight), ("ldm", self._ldm), ("nature", self._nature)):
            if regex is not None and regex.search(line):
                kinds.add(kind)
        if self.rules.number_label and self.rules.number_label in line:
            kinds.add("number")
        return kinds

    def labeled_blocks(self, lines: NormalizedLines) -> List[range]:
        """
        Блоки груза: соседние строки с метками (Weight, LM, M. nature, OT).

        Новый блок начинается, если разрыв больше block_max_gap строк
        или метка уже встречалась в текущем блоке.
        Блок из одного номера (OT) без веса, LM и описания не считается.
        """
        blocks: List[range] = []
        start = end = None
        seen: Set[str] = set()

        def close():
            if start is not None and seen - {"number"}:
                blocks.append(range(start, end + 1))

        for index, line in enumerate(lines):
            kinds = self._label_kinds(line)
            if not kinds:
                continue
            if start is None or index - end > self.rules.block_max_gap + 1 or kinds & seen:
                close()
                start, seen = index, set()
            end = index
            seen |= kinds

        close()
        return blocks

    @staticmethod
    def _first_match(block_lines: List[str], regex: Optional[re.Pattern]) -> Optional[re.Match]:
        if regex is None:
            return None
        return next((m for m in (regex.search(line) for line in block_lines) if m), None)

    def _labeled_number(self, match: Optional[re.Match]) -> float:
        if match is None:
            return 0.0
        return max(0.0, to_number(match.group("value"), self.number_locale))

    def _extract_labeled(self, lines: NormalizedLines) -> Optional[Cargo]:
        blocks = self.labeled_blocks(lines)
        if not blocks:
            return None

        # Все поля - из одного блока, выбранного по labeled_occurrence
        block = blocks[-1] if self.rules.labeled_occurrence == "last" else blocks[0]
        block_lines = [lines[i] for i in block]
        logger.trace(f"[CargoExtractor] Блоков груза: {len(blocks)}, взят {block.start}-{block.stop - 1}")

        weight_match = self._first_match(block_lines, self._weight)
        ldm_match = self._first_match(block_lines, self._ldm)
        nature_match = self._first_match(block_lines, self._nature)

        if weight_match is None and ldm_match is None and nature_match is None:
            return None

        weight = self._labeled_number(weight_match)
        ldm = self._labeled_number(ldm_match)

        title = self.rules.default_title
        package_type = PackageType.OTHER
        if nature_match:
            nature = nature_match.group("value").strip()
            if nature:
                title = nature
                package_type = self.map_package_type(nature)

        number = ""
        label = self.rules.number_label
        if label:
            number_line = next((line for line in block_lines if label in line), None)
            number = value_after_label(number_line, label)

        return Cargo(
            title=title,
            package_count=1,
            package_type=package_type,
            weight=weight,
            ldm=ldm,
            number=number,
            shipment_type=classify_shipment(weight),
        )

    def _extract_counted(self, lines: NormalizedLines) -> Optional[Cargo]:
        for line in lines:
            match = self._count.search(line)
            if not match:
                continue

            try:
                count = max(1, int(match.group("count")))
            except ValueError:
                report_degradation("CargoExtractor", f"количество в '{line[:40]}' не разобрано, строка пропущена")
                continue

            package_type = self.map_package_type(match.group("unit"))
            logger.trace(f"[CargoExtractor] Счётная строка: '{line}'")
            return Cargo(
                title=self.rules.default_title,
                package_count=count,
                package_type=package_type,
                shipment_type=classify_shipment(0.0, count),
            )
        return None
