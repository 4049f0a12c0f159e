"""
Ziegler Adapter

ЦКП: ShipmentOrder из booking instructions Ziegler UK Ltd.

Макет:
- строки 0-1: "ZIEGLER UK LTD" / "LONDON GATEWAY LOGISTICS PARK ..."
- "Ziegler Ref" и номер в следующей строке
- "Rate" и сумма (€ 1,250.00) в следующей строке
- несколько секций "Collection" (загрузка), "Delivery" и "Clearance" (выгрузка)
- груз строкой "<число> PALLETS|CARTONS|BOXES"
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


class ZieglerAdapter(IVendorAdapter):
    """Адаптер Ziegler: каждая секция документа - отдельная точка."""

    name = "ziegler"

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

        # Collection → загрузка; Delivery, затем Clearance → выгрузка
        loading_locations = toolkit.locations.extract_all(lines, "loading")
        destination_locations = toolkit.locations.extract_all(lines, "delivery")

        order = ShipmentOrder(
            order_reference=order_reference,
            customer=Customer(side=CustomerSide.NONE, details=toolkit.party.extract(lines)),
            loading_locations=loading_locations,
            destination_locations=destination_locations,
            cargos=toolkit.cargo.extract(lines),
            freight_price=price.amount,
            freight_currency=price.currency,
            attachment_filenames=[filename] if filename else [],
        )
        logger.info(
            f"[ZieglerAdapter] Заказ {order_reference or '<без номера>'}: "
            f"{len(loading_locations)} загрузок, {len(destination_locations)} выгрузок, {price.amount} {price.currency}"
        )
        return order
