"""
Unit-тесты для DateTimeParser.

ЦКП: TimeWindow из токенов отправителя, мягкие дефолты.
"""

from datetime import date, datetime

import pytest

from freight_parsing.extraction.datetime_parser import DateTimeParser


TODAY = date(2025, 9, 15)


@pytest.fixture
def transalliance_parser():
    return DateTimeParser(
        date_formats=["DD/MM/YY"],
        time_patterns=[r"(?P<h1>\d{1,2})h(?P<m1>\d{2})\s*[–-]\s*(?P<h2>\d{1,2})h(?P<m2>\d{2})"],
        match_mode="search",
        today=lambda: TODAY,
    )


@pytest.fixture
def ziegler_parser():
    return DateTimeParser(
        date_formats=["DD/MM/YYYY"],
        time_patterns=[r"(?P<h1>\d{2})(?P<m1>\d{2})-(?P<h2>\d{2})(?P<m2>\d{2})"],
        match_mode="fullmatch",
        today=lambda: TODAY,
    )


def test_date_and_time_range(transalliance_parser):
    """17/09/25 + 8h00 – 15h00 → окно 08:00-15:00."""
    window = transalliance_parser.parse("17/09/25", "8h00 – 15h00")
    assert window.datetime_from == datetime(2025, 9, 17, 8, 0)
    assert window.datetime_to == datetime(2025, 9, 17, 15, 0)


def test_four_digit_year(ziegler_parser):
    window = ziegler_parser.parse("17/09/2025", "0800-1600")
    assert window.datetime_from == datetime(2025, 9, 17, 8, 0)
    assert window.datetime_to == datetime(2025, 9, 17, 16, 0)


def test_no_time_gives_midnight_without_end(transalliance_parser):
    window = transalliance_parser.parse("17/09/25", None)
    assert window.datetime_from == datetime(2025, 9, 17, 0, 0)
    assert window.datetime_to is None


def test_bad_time_gives_midnight_without_end(transalliance_parser):
    window = transalliance_parser.parse("17/09/25", "25h00 – 26h00")
    assert window.datetime_from == datetime(2025, 9, 17, 0, 0)
    assert window.datetime_to is None


@pytest.mark.parametrize("token", [None, "", "31/02/25", "hello"])
def test_bad_date_gives_start_of_today(transalliance_parser, token):
    window = transalliance_parser.parse(token, "8h00 – 15h00")
    assert window.datetime_from == datetime(2025, 9, 15, 0, 0)
    assert window.datetime_to is None


def test_find_date_search_mode(transalliance_parser):
    """В режиме search дата ищется внутри строки."""
    assert transalliance_parser.find_date("ON: 17/09/25 8h00 – 15h00") == "17/09/25"
    assert transalliance_parser.find_time("ON: 17/09/25 8h00 – 15h00") == "8h00 – 15h00"


def test_date_digits_do_not_stick(transalliance_parser):
    """17/09/2025 не должен читаться как 17/09/20."""
    assert transalliance_parser.find_date("17/09/2025") is None


def test_find_fullmatch_mode(ziegler_parser):
    """В режиме fullmatch строка целиком - токен."""
    assert ziegler_parser.find_date("17/09/2025") == "17/09/2025"
    assert ziegler_parser.find_date("Booked 17/09/2025") is None
    assert ziegler_parser.find_time("0800-1600") == "0800-1600"
    assert ziegler_parser.find_time("Call 0800-1600") is None


def test_find_on_empty(ziegler_parser):
    assert ziegler_parser.find_date(None) is None
    assert ziegler_parser.find_time("") is None


def test_default_formats():
    parser = DateTimeParser(today=lambda: TODAY)
    assert parser.parse_date("17/09/2025") == date(2025, 9, 17)
    assert parser.parse_date("17/09/25") == date(2025, 9, 17)
    assert parser.parse_time_range("08:00-16:30") is not None


def test_start_of_today_uses_provider(ziegler_parser):
    assert ziegler_parser.start_of_today() == datetime(2025, 9, 15, 0, 0)


def test_invalid_match_mode():
    with pytest.raises(ValueError):
        DateTimeParser(match_mode="anywhere")
