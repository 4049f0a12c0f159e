"""
Transalliance Adapter

ЦКП: ShipmentOrder из CHARTERING CONFIRMATION Transalliance TS Ltd.

Макет:
- строка 0: "Date/Time : ..."
- "REF.: <номер>" - номер заказа
- одна секция "Loading" и одна "Delivery", компания после маркера "ON:"
- блок груза по меткам, повторяется по плечам (актуальный - последний)
- "SHIPPING PRICE" + сумма с EUR в той же или следующей строке
"""

from datetime import date
from typing import Callable, Optional, TYPE_CHECKING
from loguru import logger

from contracts.shipment_order_dto import Customer, CustomerSide, ShipmentOrder
from ..domain.interfaces import IVendorAdapter
from ..extraction.field_rules import labeled_value
from ..normalization.line_normalizer import NormalizedLines
from ..vendors.config_loader import VendorConfigLoader
from .toolkit import VendorToolkit, matches_detection

if TYPE_CHECKING:
    from ..domain.interfaces import ICountryResolver
    from ..vendors.vendor_config import VendorConfig


class TransallianceAdapter(IVendorAdapter):
    """Адаптер Transalliance: одна точка загрузки, одна точка выгрузки."""

    name = "transalliance"

    def __init__(
        self,
        config: Optional["VendorConfig"] = None,
        country_resolver: Optional["ICountryResolver"] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self.config = config or VendorConfigLoader().load(self.name)
        self.toolkit = VendorToolkit.build(self.config, country_resolver=country_resolver, today=today)

    def detect(self, lines: NormalizedLines) -> bool:
        return matches_detection(lines, self.config.detection)

    def extract(self, lines: NormalizedLines, filename: Optional[str] = None) -> ShipmentOrder:
        toolkit = self.toolkit
        rules = self.config

        order_reference = labeled_value(lines, rules.reference.pattern, next_line=rules.reference.next_line) or ""
        price = toolkit.price.extract(lines)

        loading = toolkit.locations.anchor_indices(lines, "loading")
        delivery = toolkit.locations.anchor_indices(lines, "delivery")
        loading_location = toolkit.locations.extract_section(lines, loading[0] if loading else None, "loading")
        delivery_location = toolkit.locations.extract_section(lines, delivery[0] if delivery else None, "delivery")

        attachment_filenames = []
        if filename:
            attachment_filenames.append(filename.lower() if rules.lowercase_attachment else filename)

        order = ShipmentOrder(
            order_reference=order_reference,
            customer=Customer(side=CustomerSide.NONE, details=toolkit.party.extract(lines)),
            loading_locations=[loading_location],
            destination_locations=[delivery_location],
            cargos=toolkit.cargo.extract(lines),
            freight_price=price.amount,
            freight_currency=price.currency,
            attachment_filenames=attachment_filenames,
        )
        logger.info(f"[TransallianceAdapter] Заказ {order_reference or '<без номера>'}: {price.amount} {price.currency}")
        return order
