# catalog_app/ledger.py
import logging
from typing import Any, Dict, Iterable

from .core import DEFAULT_CURRENCY, to_quantity
from .models import CartSummary, Product

logger = logging.getLogger("catalog_browser.ledger")


class CartLedger:
    """
    sku -> quantity mapping for the cart.

    Keys are only ever added (by initialize or set_quantity), never removed;
    clear() zeroes every entry instead.
    """

    def __init__(self):
        self.qty_by_sku: Dict[str, int] = {}

    def initialize(self, catalog: Iterable[Product]) -> None:
        for p in catalog:
            if p.sku not in self.qty_by_sku:
                self.qty_by_sku[p.sku] = to_quantity(p.qty)

    def get(self, sku: str) -> int:
        return self.qty_by_sku.get(sku, 0)

    def set_quantity(self, sku: str, raw: Any) -> int:
        qty = to_quantity(raw)
        self.qty_by_sku[sku] = qty
        logger.debug("qty %s -> %d", sku, qty)
        return qty

    def clear(self) -> None:
        for sku in self.qty_by_sku:
            self.qty_by_sku[sku] = 0

    def aggregate(self, catalog: Iterable[Product]) -> CartSummary:
        # walks the catalog, so quantities for unknown skus never count
        count = 0
        subtotal = 0.0
        currency = DEFAULT_CURRENCY

        for p in catalog:
            qty = self.get(p.sku)
            if qty > 0:
                count += qty
                subtotal += qty * p.price_ex_vat
                currency = p.currency or currency

        return CartSummary(count=count, subtotal=subtotal, currency=currency)

    def __len__(self) -> int:
        return len(self.qty_by_sku)

    def __contains__(self, sku) -> bool:
        return sku in self.qty_by_sku
