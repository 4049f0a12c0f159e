"""
Location Extractor

ЦКП: Location (компания, адрес, окно времени, комментарий) для секции документа.

Input: NormalizedLines + индекс якоря секции ("Loading", "Collection", "Delivery")
Output: Location

Алгоритм (ограниченное окно вперёд от якоря):
1. Жёсткий стоп: другой якорь секции или hard_stop_prefixes
2. Классификация строки по порядку: маркер компании (ON:) → дата/окно → REF → мусор → компания → адрес
3. Мягкий терминатор (Contact:, Instructions) закрывает адрес, но не окно:
   дата и окно после него ещё подхватываются
4. Адрес → AddressParser, дата + окно → DateTimeParser
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, TYPE_CHECKING
from loguru import logger

from config.settings import DEFAULT_CITY
from contracts.shipment_order_dto import Location, PartyDetails, TimeWindow
from ..domain.exceptions import report_degradation
from ..normalization.line_normalizer import NormalizedLines
from .address_parser import AddressParser
from .datetime_parser import DateTimeParser
from .field_rules import value_after_label

if TYPE_CHECKING:
    from ..vendors.vendor_config import LocationConfig


@dataclass
class SectionScan:
    """Промежуточный результат сканирования секции (для отладки)."""
    anchor_index: int
    company: str = ""
    address_lines: List[str] = field(default_factory=list)
    date_token: Optional[str] = None
    time_token: Optional[str] = None
    comment: Optional[str] = None
    inspected: int = 0


class LocationExtractor:
    """
    Извлечение точек загрузки/выгрузки.

    Все правила (якоря, стоп-строки, маркеры, окно) - из LocationConfig отправителя.
    Сканирование никогда не выходит за конец документа и за окно.
    """

    def __init__(
        self,
        rules: "LocationConfig",
        address_parser: AddressParser,
        datetime_parser: DateTimeParser,
    ):
        self.rules = rules
        self.address_parser = address_parser
        self.datetime_parser = datetime_parser

        self._anchors = set(rules.all_anchors)
        self._ignore = [re.compile(p) for p in rules.ignore_patterns]
        self._company = re.compile(rules.company_pattern)

    # ------------------------------------------------------------------
    # Якоря
    # ------------------------------------------------------------------

    def anchor_indices(self, lines: NormalizedLines, kind: str) -> List[int]:
        """
        Индексы якорей секции по порядку якорей в конфиге.

        Для multiple=False - только первое вхождение (или пусто).
        """
        section = self.rules.sections.get(kind)
        if section is None:
            return []

        indices: List[int] = []
        for anchor in section.anchors:
            indices.extend(lines.find_all(lambda line, anchor=anchor: line == anchor))

        if not section.multiple:
            indices = sorted(indices)[:1]

        logger.debug(f"[LocationExtractor] Якоря '{kind}': {indices}")
        return indices

    def extract_all(self, lines: NormalizedLines, kind: str) -> List[Location]:
        """Все секции типа kind. Нет ни одной - одна дефолтная Location."""
        indices = self.anchor_indices(lines, kind)
        if not indices:
            return [self.extract_section(lines, None, kind)]
        return [self.extract_section(lines, index, kind) for index in indices]

    # ------------------------------------------------------------------
    # Секция
    # ------------------------------------------------------------------

    def extract_section(self, lines: NormalizedLines, anchor_index: Optional[int], kind: str) -> Location:
        """
        Args:
            lines: Нормализованные строки
            anchor_index: Индекс якоря секции (None / -1 / вне диапазона = секции нет)
            kind: Тип секции (loading / delivery), задаёт дефолты

        Returns:
            Location (всегда структурно полная)
        """
        if lines.get(anchor_index) is None:
            return self.empty_location(kind)

        scan = self.scan(lines, anchor_index)

        address_text = self.rules.address_separator.join(scan.address_lines)
        address = self.address_parser.parse(address_text, hint=kind)
        time_window = self.datetime_parser.parse(scan.date_token, scan.time_token)

        logger.debug(
            f"[LocationExtractor] {kind}@{anchor_index}: '{scan.company}' | {address.city} "
            f"{address.postal_code} {address.country} | {time_window.datetime_from}"
        )
        return Location(
            company_address=address.to_party(company=scan.company),
            time=time_window,
            comment=scan.comment,
        )

    def empty_location(self, kind: str) -> Location:
        """Секция не найдена: пустая компания и улица, страна по типу секции, начало дня."""
        defaults = self.address_parser.kind_defaults(kind)
        report_degradation("LocationExtractor", f"секция '{kind}' не найдена, дефолты ({defaults['country']})")
        return Location(
            company_address=PartyDetails(
                company="",
                street_address="",
                city=DEFAULT_CITY,
                postal_code="",
                country=defaults["country"],
            ),
            time=TimeWindow(datetime_from=self.datetime_parser.start_of_today()),
        )

    def scan(self, lines: NormalizedLines, anchor_index: int) -> SectionScan:
        """Классифицирует строки окна после якоря."""
        rules = self.rules
        scan = SectionScan(anchor_index=anchor_index)
        window = lines.window(anchor_index + 1, rules.window)

        marker_index = self._find_marker(lines, window)
        marker_seen = False
        awaiting_reference = False
        address_closed = False

        for index in window:
            if scan.inspected >= rules.max_lines:
                break

            line = lines[index]
            if self._is_hard_stop(line):
                logger.trace(f"[LocationExtractor] Стоп на строке {index}: '{line}'")
                break
            scan.inspected += 1

            # Ждём значение REF: следующая строка, которая сама не метка
            if awaiting_reference and not self._is_reference(line):
                scan.comment = line
                awaiting_reference = False
                continue

            if index == marker_index:
                marker_seen = True
                # Маркер может нести дату/окно в той же строке ("ON: 17/09/25 8h00 – 15h00")
                self._take_datetime(scan, value_after_label(line, rules.introduced_by))
                continue

            if self._take_datetime(scan, line):
                continue

            if rules.reference_label and self._is_reference(line):
                value = value_after_label(line, rules.reference_label)
                if value:
                    scan.comment = value
                else:
                    awaiting_reference = True
                continue

            if self._is_ignored(line):
                logger.trace(f"[LocationExtractor] Пропуск: '{line}'")
                continue

            if not scan.company:
                if marker_index is not None:
                    if marker_seen and index - marker_index <= rules.introduced_by_window:
                        scan.company = line
                elif self._company.search(line):
                    scan.company = line
                continue

            if address_closed:
                continue

            if self._is_terminator(line):
                address_closed = True
                continue

            if len(scan.address_lines) < rules.max_address_lines:
                scan.address_lines.append(line)

        if not scan.company:
            logger.debug(f"[LocationExtractor] Компания для якоря {anchor_index} не найдена")
        return scan

    def _find_marker(self, lines: NormalizedLines, window: range) -> Optional[int]:
        """Индекс маркера компании (ON:) в окне до первого жёсткого стопа."""
        marker = self.rules.introduced_by
        if not marker:
            return None
        for index in window:
            line = lines[index]
            if self._is_hard_stop(line):
                return None
            if line == marker or line.startswith(marker + " "):
                return index
        return None

    def _take_datetime(self, scan: SectionScan, line: str) -> bool:
        """Забирает дату и окно из строки. True, если строка что-то дала."""
        taken = False
        if scan.date_token is None:
            date_token = self.datetime_parser.find_date(line)
            if date_token:
                scan.date_token = date_token
                taken = True
        if scan.time_token is None:
            time_token = self.datetime_parser.find_time(line)
            if time_token:
                scan.time_token = time_token
                taken = True
        return taken

    def _is_hard_stop(self, line: str) -> bool:
        if line in self._anchors:
            return True
        return any(line.startswith(prefix) for prefix in self.rules.hard_stop_prefixes)

    def _is_reference(self, line: str) -> bool:
        label = self.rules.reference_label
        return line == label or line.startswith(label + ":") or line.startswith(label + " ")

    def _is_ignored(self, line: str) -> bool:
        return any(pattern.search(line) for pattern in self._ignore)

    def _is_terminator(self, line: str) -> bool:
        return any(terminator in line for terminator in self.rules.address_terminators)
