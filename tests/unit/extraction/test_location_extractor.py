"""
Unit-тесты для LocationExtractor.

ЦКП: Location из окна после якоря; секции нет - дефолты без исключений.
"""

from datetime import datetime

import pytest

from freight_parsing.extraction.address_parser import AddressParser
from freight_parsing.extraction.country_resolver import StaticCountryResolver
from freight_parsing.extraction.datetime_parser import DateTimeParser
from freight_parsing.extraction.location_extractor import LocationExtractor
from freight_parsing.normalization.line_normalizer import LineNormalizer


def make_lines(*lines):
    return LineNormalizer().normalize(lines)


def build_extractor(config, fixed_today):
    return LocationExtractor(
        config.location,
        AddressParser(config.address, country_resolver=StaticCountryResolver()),
        DateTimeParser.from_config(config.dates, today=fixed_today),
    )


@pytest.fixture
def transalliance_locations(transalliance_config, fixed_today):
    return build_extractor(transalliance_config, fixed_today)


@pytest.fixture
def ziegler_locations(ziegler_config, fixed_today):
    return build_extractor(ziegler_config, fixed_today)


class TestMarkerIntroducedCompany:
    """Компания после маркера ON:."""

    def test_date_two_lines_after_anchor(self, transalliance_locations):
        lines = make_lines(
            "Loading", "ON:", "17/09/25", "8h00 – 15h00",
            "KNAUF INSULATION", "BAKEWELL RD GB-PE2 6DP PETERBOROUGH",
            "Contact: DESK Tel : 01733",
        )
        location = transalliance_locations.extract_section(lines, 0, "loading")

        assert location.time.datetime_from == datetime(2025, 9, 17, 8, 0)
        assert location.time.datetime_to == datetime(2025, 9, 17, 15, 0)
        assert location.company_address.company == "KNAUF INSULATION"
        assert location.company_address.street_address == "BAKEWELL RD"
        assert location.company_address.city == "PETERBOROUGH"
        assert location.company_address.postal_code == "PE2 6DP"
        assert location.company_address.country == "GB"

    def test_date_and_time_on_marker_line(self, transalliance_locations):
        lines = make_lines("Loading", "ON: 17/09/25 8h00 – 15h00", "KNAUF INSULATION")
        location = transalliance_locations.extract_section(lines, 0, "loading")
        assert location.company_address.company == "KNAUF INSULATION"
        assert location.time.datetime_to == datetime(2025, 9, 17, 15, 0)

    def test_lines_before_marker_are_not_company(self, transalliance_locations):
        lines = make_lines("Loading", "REFERENCE : X1", "SOME HEADER", "ON:", "SAICA PACK")
        location = transalliance_locations.extract_section(lines, 0, "loading")
        assert location.company_address.company == "SAICA PACK"

    def test_company_pattern_without_marker(self, transalliance_locations):
        """Без маркера компания - первая строка по company_pattern."""
        lines = make_lines("Loading", "17/09/25", "12345", "KNAUF INSULATION", "ZI NORD, 37530 POCE")
        location = transalliance_locations.extract_section(lines, 0, "loading")
        assert location.company_address.company == "KNAUF INSULATION"
        assert location.company_address.postal_code == "37530"


class TestSectionScan:

    def test_terminator_closes_address_not_window(self, transalliance_locations):
        """После Contact: адрес закрыт, но дата ещё подхватывается."""
        lines = make_lines(
            "Loading", "ON:", "KNAUF INSULATION", "BAKEWELL RD GB-PE2 6DP PETERBOROUGH",
            "Contact: DESK", "SOMETHING ELSE", "17/09/25",
        )
        scan = transalliance_locations.scan(lines, 0)
        assert scan.address_lines == ["BAKEWELL RD GB-PE2 6DP PETERBOROUGH"]
        assert scan.date_token == "17/09/25"

    def test_hard_stop_on_next_anchor(self, transalliance_locations):
        lines = make_lines("Loading", "ON:", "KNAUF", "Delivery", "ON:", "17/09/25")
        scan = transalliance_locations.scan(lines, 0)
        assert scan.date_token is None
        assert scan.inspected == 2

    def test_reference_label_next_line(self, ziegler_locations):
        lines = make_lines("Collection", "KNAUF INSULATION", "REF", "COL-7781", "17/09/2025")
        location = ziegler_locations.extract_section(lines, 0, "loading")
        assert location.comment == "COL-7781"
        assert location.company_address.company == "KNAUF INSULATION"

    def test_repeated_reference_label_skipped(self, ziegler_locations):
        """REF, за которым снова REF: комментарий - первая строка без метки."""
        lines = make_lines("Collection", "KNAUF INSULATION", "REF", "REF", "COL-7781", "17/09/2025")
        location = ziegler_locations.extract_section(lines, 0, "loading")
        assert location.comment == "COL-7781"
        assert location.time.datetime_from == datetime(2025, 9, 17, 0, 0)

    def test_boilerplate_and_cargo_lines_ignored(self, ziegler_locations):
        lines = make_lines(
            "Delivery", "Please call before arrival", "66 PALLETS", "SAICA PACK UK",
            "WATERBROOK AVENUE", "TN25 6GE Ashford",
        )
        location = ziegler_locations.extract_section(lines, 0, "delivery")
        assert location.company_address.company == "SAICA PACK UK"
        assert location.company_address.postal_code == "TN25 6GE"
        assert location.company_address.city == "Ashford"

    def test_hard_stop_prefix(self, ziegler_locations):
        lines = make_lines("Collection", "KNAUF", "- Terms apply", "LEIGHTON BUZZARD, LU7 4UH")
        scan = ziegler_locations.scan(lines, 0)
        assert scan.address_lines == []

    def test_company_only_section(self, ziegler_locations):
        """Секция может быть только с компанией."""
        lines = make_lines("Collection", "KNAUF INSULATION")
        location = ziegler_locations.extract_section(lines, 0, "loading")
        assert location.company_address.company == "KNAUF INSULATION"
        assert location.company_address.street_address == ""
        assert location.company_address.country == "GB"

    def test_window_never_reads_past_end(self, ziegler_locations):
        lines = make_lines("Collection")
        location = ziegler_locations.extract_section(lines, 0, "loading")
        assert location.company_address.company == ""

    def test_max_lines_bound(self, ziegler_locations):
        """Ziegler: обрабатывается не больше 10 строк окна."""
        body = [f"LINE {i}" for i in range(12)]
        lines = make_lines("Collection", *body, "17/09/2025")
        scan = ziegler_locations.scan(lines, 0)
        assert scan.inspected == 10
        assert scan.date_token is None


class TestMissingSection:

    @pytest.mark.parametrize("anchor", [None, -1, 99])
    def test_absent_anchor_defaults(self, transalliance_locations, anchor):
        lines = make_lines("Loading", "ON:", "KNAUF")
        location = transalliance_locations.extract_section(lines, anchor, "delivery")
        assert location.company_address.company == ""
        assert location.company_address.street_address == ""
        assert location.company_address.country == "FR"
        assert location.company_address.city == "Unknown"
        assert location.time.datetime_from == datetime(2025, 9, 15, 0, 0)
        assert location.time.datetime_to is None


class TestAnchors:

    def test_multiple_anchor_order(self, ziegler_locations):
        """Сначала все Delivery, потом все Clearance."""
        lines = make_lines("Clearance", "A", "Delivery", "B", "Delivery", "C")
        assert ziegler_locations.anchor_indices(lines, "delivery") == [2, 4, 0]

    def test_single_anchor_takes_first(self, transalliance_locations):
        lines = make_lines("Loading", "A", "Loading", "B")
        assert transalliance_locations.anchor_indices(lines, "loading") == [0]

    def test_anchor_is_exact_line(self, ziegler_locations):
        lines = make_lines("Delivery slot must be booked", "Collection")
        assert ziegler_locations.anchor_indices(lines, "delivery") == []

    def test_extract_all_without_anchor(self, ziegler_locations):
        lines = make_lines("nothing")
        locations = ziegler_locations.extract_all(lines, "delivery")
        assert len(locations) == 1
        assert locations[0].company_address.country == "GB"
