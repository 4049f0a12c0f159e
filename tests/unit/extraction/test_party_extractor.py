"""
Unit-тесты для реквизитов отправителя.
"""

from freight_parsing.extraction.party_extractor import PartyExtractor
from freight_parsing.normalization.line_normalizer import LineNormalizer


def make_lines(*lines):
    return LineNormalizer().normalize(lines)


def test_scraped_fields(transalliance_config, transalliance_lines):
    party = PartyExtractor(transalliance_config.party).extract(transalliance_lines)
    assert party.company == "TRANSALLIANCE TS LTD"
    assert party.street_address == "SUITE 8/9 FARADAY COURT, CENTRUM 100"
    assert party.city == "BURTON UPON TRENT"
    assert party.postal_code == "DE14 2WX"
    assert party.country == "GB"
    assert party.vat_code == "GB712051433"
    assert party.contact_person == "JOHN SMITH"
    assert party.email == "invoice.ts@transalliance.eu"


def test_contact_with_phone_skipped(transalliance_config):
    lines = make_lines("TRANSALLIANCE TS LTD", "Contact: DESK Tel : 0123", "Contact: JANE DOE")
    party = PartyExtractor(transalliance_config.party).extract(lines)
    assert party.contact_person == "JANE DOE"


def test_missing_anchors_keep_static_block(transalliance_config):
    party = PartyExtractor(transalliance_config.party).extract(make_lines("nothing"))
    assert party.vat_code == ""
    assert party.contact_person == ""
    assert party.street_address == ""
    assert party.country == "GB"


def test_static_party(ziegler_config, ziegler_lines):
    party = PartyExtractor(ziegler_config.party).extract(ziegler_lines)
    assert party.company == "ZIEGLER UK LTD"
    assert party.street_address == "LONDON GATEWAY LOGISTICS PARK, NORTH 4, NORTH SEA CROSSING"
    assert party.city == "STANFORD LE HOPE"
    assert party.postal_code == "SS17 9FJ"
