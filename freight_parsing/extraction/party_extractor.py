"""
Party Extractor

ЦКП: Реквизиты самого отправителя (customer.details).

Блок в основном статичный (из YAML). Если в конфиге заданы якоря,
VAT, контакт и строки адреса подтягиваются из документа.
"""

from typing import List, TYPE_CHECKING
from loguru import logger

from contracts.shipment_order_dto import PartyDetails
from ..normalization.line_normalizer import NormalizedLines
from .field_rules import value_after_label

if TYPE_CHECKING:
    from ..vendors.vendor_config import PartyConfig


class PartyExtractor:
    """Статичные реквизиты + скрейпинг по меткам."""

    def __init__(self, rules: "PartyConfig"):
        self.rules = rules

    def extract(self, lines: NormalizedLines) -> PartyDetails:
        rules = self.rules

        vat_code = rules.vat_code
        if rules.vat_label:
            vat_line = lines.get(lines.find(lambda line: rules.vat_label in line))
            vat_code = value_after_label(vat_line, rules.vat_label) or vat_code

        contact_person = rules.contact_person
        if rules.contact_label:
            contact_line = lines.get(lines.find(self._is_contact_line))
            contact_person = value_after_label(contact_line, rules.contact_label) or contact_person

        street_address = rules.street_address
        scraped = self._address_lines(lines)
        if scraped:
            street_address = ", ".join(scraped)

        logger.debug(f"[PartyExtractor] {rules.company}: VAT={vat_code!r}, контакт={contact_person!r}")
        return PartyDetails(
            company=rules.company,
            street_address=street_address,
            city=rules.city,
            postal_code=rules.postal_code,
            country=rules.country,
            vat_code=vat_code,
            contact_person=contact_person,
            email=rules.email,
        )

    def _is_contact_line(self, line: str) -> bool:
        if self.rules.contact_label not in line:
            return False
        return not (self.rules.contact_exclude and self.rules.contact_exclude in line)

    def _address_lines(self, lines: NormalizedLines) -> List[str]:
        """До address_max_lines строк после якоря, до первой стоп-метки."""
        if not self.rules.address_anchor:
            return []

        anchor = lines.find(lambda line: self.rules.address_anchor in line)
        if anchor < 0:
            return []

        collected = []
        for index in lines.window(anchor + 1, self.rules.address_max_lines):
            line = lines[index]
            if any(stop in line for stop in self.rules.address_stop):
                break
            collected.append(line)
        return collected
