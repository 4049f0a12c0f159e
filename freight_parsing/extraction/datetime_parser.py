"""
DateTime Parser

ЦКП: TimeWindow из токенов даты и временного окна отправителя.

Форматы дат задаются в нотации DD/MM/YY, DD/MM/YYYY (как в конфигах локалей)
и компилируются одновременно в regex для поиска и в формат strptime.
Окна времени - regex с именованными группами h1 m1 h2 m2.

Ошибок нет: нет даты → начало текущего дня, нет окна → только datetime_from.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Callable, List, Optional, Pattern, Sequence, Tuple, TYPE_CHECKING
from loguru import logger

from contracts.shipment_order_dto import TimeWindow
from ..domain.exceptions import report_degradation

if TYPE_CHECKING:
    from ..vendors.vendor_config import DateTimeConfig


# Компоненты формата даты → (regex, strptime). YYYY раньше YY.
_DATE_COMPONENTS = {
    "YYYY": (r"(?P<year>\d{4})", "%Y"),
    "YY": (r"(?P<year>\d{2})", "%y"),
    "DD": (r"(?P<day>\d{1,2})", "%d"),
    "MM": (r"(?P<month>\d{1,2})", "%m"),
}
_COMPONENT_SPLIT = re.compile(r"(YYYY|YY|DD|MM)")

DEFAULT_DATE_FORMATS = ["DD/MM/YYYY", "DD/MM/YY"]
DEFAULT_TIME_PATTERNS = [
    r"(?P<h1>\d{1,2})[:h](?P<m1>\d{2})\s*[–-]\s*(?P<h2>\d{1,2})[:h](?P<m2>\d{2})",
]


@dataclass(frozen=True)
class DateFormat:
    """Скомпилированный формат даты."""
    notation: str
    regex: Pattern
    strptime_format: str


class DateTimeParser:
    """
    Парсер дат и временных окон отправителя.

    match_mode:
    - "search": токен может стоять в любом месте строки ("ON: 17/09/25 8h00 – 15h00")
    - "fullmatch": строка целиком является токеном ("17/09/2025", "0800-1600")
    """

    def __init__(
        self,
        date_formats: Optional[Sequence[str]] = None,
        time_patterns: Optional[Sequence[str]] = None,
        match_mode: str = "search",
        today: Optional[Callable[[], date]] = None,
    ):
        """
        Args:
            date_formats: Форматы дат в нотации DD/MM/YY (по умолчанию DD/MM/YYYY и DD/MM/YY)
            time_patterns: Regex окон времени с группами h1 m1 h2 m2
            match_mode: "search" или "fullmatch"
            today: Провайдер текущей даты (для детерминированных тестов)
        """
        if match_mode not in ("search", "fullmatch"):
            raise ValueError(f"match_mode должен быть search или fullmatch, получено: {match_mode}")

        self.match_mode = match_mode
        self.date_formats = self._build_formats(date_formats or DEFAULT_DATE_FORMATS)
        self.time_patterns = [re.compile(p) for p in (time_patterns or DEFAULT_TIME_PATTERNS)]
        self._today = today or date.today

    @classmethod
    def from_config(cls, config: "DateTimeConfig", today: Optional[Callable[[], date]] = None) -> "DateTimeParser":
        return cls(
            date_formats=config.date_formats,
            time_patterns=config.time_range_patterns or None,
            match_mode=config.match_mode,
            today=today,
        )

    def _build_formats(self, notations: Sequence[str]) -> List[DateFormat]:
        """
        Строит regex и strptime из нотации формата.

        Пример: "DD/MM/YY" → r"(?P<day>\\d{1,2})/(?P<month>\\d{1,2})/(?P<year>\\d{2})" и "%d/%m/%y"
        """
        formats = []
        for notation in notations:
            notation = notation.strip()
            regex_parts = []
            strptime_parts = []
            for part in _COMPONENT_SPLIT.split(notation):
                if not part:
                    continue
                if part in _DATE_COMPONENTS:
                    regex_part, strptime_part = _DATE_COMPONENTS[part]
                    regex_parts.append(regex_part)
                    strptime_parts.append(strptime_part)
                else:
                    regex_parts.append(re.escape(part))
                    strptime_parts.append(part.replace("%", "%%"))

            # Цифры по краям не должны "прилипать" к токену (17/09/2025 ≠ 17/09/20)
            pattern = r"(?<!\d)" + "".join(regex_parts) + r"(?!\d)"
            formats.append(DateFormat(notation, re.compile(pattern), "".join(strptime_parts)))

        logger.debug(f"[DateTimeParser] Форматы дат: {[f.notation for f in formats]}")
        return formats

    def _match(self, regex: Pattern, line: str):
        if self.match_mode == "fullmatch":
            return regex.fullmatch(line.strip())
        return regex.search(line)

    def start_of_today(self) -> datetime:
        """Начало текущего дня (00:00)."""
        return datetime.combine(self._today(), time(0, 0))

    def find_date(self, line: Optional[str]) -> Optional[str]:
        """Токен даты в строке или None."""
        if not line:
            return None
        for fmt in self.date_formats:
            match = self._match(fmt.regex, line)
            if match:
                return match.group(0)
        return None

    def find_time(self, line: Optional[str]) -> Optional[str]:
        """Токен временного окна в строке или None."""
        if not line:
            return None
        for pattern in self.time_patterns:
            match = self._match(pattern, line)
            if match:
                return match.group(0)
        return None

    def parse_date(self, token: Optional[str]) -> Optional[date]:
        """Дата из токена по первому подходящему формату. Невалидная дата (31/02) → None."""
        if not token:
            return None
        for fmt in self.date_formats:
            match = fmt.regex.search(token)
            if not match:
                continue
            try:
                return datetime.strptime(match.group(0), fmt.strptime_format).date()
            except ValueError as e:
                logger.trace(f"[DateTimeParser] '{token}' не разобран как {fmt.notation}: {e}")
        return None

    def parse_time_range(self, token: Optional[str]) -> Optional[Tuple[time, time]]:
        """(начало, конец) окна или None."""
        if not token:
            return None
        for pattern in self.time_patterns:
            match = pattern.search(token)
            if not match:
                continue
            try:
                start = time(int(match.group("h1")), int(match.group("m1")))
                end = time(int(match.group("h2")), int(match.group("m2")))
            except ValueError as e:
                logger.trace(f"[DateTimeParser] Окно '{token}' вне диапазона: {e}")
                continue
            return start, end
        return None

    def parse(self, date_token: Optional[str], time_token: Optional[str] = None) -> TimeWindow:
        """
        Собирает TimeWindow.

        Args:
            date_token: Токен даты ("17/09/25")
            time_token: Токен окна ("8h00 – 15h00")

        Returns:
            TimeWindow: datetime_to только если окно явно разобрано
        """
        parsed_date = self.parse_date(date_token)
        if parsed_date is None:
            report_degradation("DateTimeParser", f"дата не разобрана ({date_token!r}), начало текущего дня")
            return TimeWindow(datetime_from=self.start_of_today())

        time_range = self.parse_time_range(time_token)
        if time_range is None:
            if time_token:
                logger.debug(f"[DateTimeParser] Окно времени не разобрано: {time_token!r}")
            return TimeWindow(datetime_from=datetime.combine(parsed_date, time(0, 0)))

        start, end = time_range
        window = TimeWindow(
            datetime_from=datetime.combine(parsed_date, start),
            datetime_to=datetime.combine(parsed_date, end),
        )
        logger.debug(f"[DateTimeParser] {date_token} {time_token} → {window.datetime_from} - {window.datetime_to}")
        return window
