# catalog_app/render.py
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from .config import config
from .core import ALL_CATEGORIES, format_money
from .ledger import CartLedger
from .models import Product
from .state import AppState
from .view import derive_view, get_categories

logger = logging.getLogger("catalog_browser.render")

FALLBACK_IMAGE = config.FALLBACK_IMAGE

# ---------------------------
# Surface elements
# ---------------------------
class Control:
    """A named input. Handlers run synchronously, in attach order, on every input."""

    def __init__(self, element_id: str, value: str = ""):
        self.id = element_id
        self.value = value
        self._handlers: List[Callable] = []

    def on_input(self, handler: Callable) -> None:
        self._handlers.append(handler)

    def input(self, value) -> None:
        self.value = "" if value is None else str(value)
        for h in list(self._handlers):
            h(self)

    @property
    def wired(self) -> bool:
        return bool(self._handlers)


class SelectControl(Control):
    def __init__(self, element_id: str, value: str, options: Optional[List[Tuple[str, str]]] = None):
        super().__init__(element_id, value)
        self.options: List[Tuple[str, str]] = list(options or [])

    def add_option(self, value: str, label: str) -> None:
        self.options.append((value, label))

    @property
    def option_values(self) -> List[str]:
        return [v for v, _ in self.options]


class Button(Control):
    def on_click(self, handler: Callable) -> None:
        self.on_input(handler)

    def click(self) -> None:
        for h in list(self._handlers):
            h(self)


class QtyField(Control):
    def __init__(self, sku: str, value: int):
        super().__init__(f"qty-{sku}", str(value))
        self.sku = sku


class ImageSlot:
    def __init__(self, src: str, alt: str = ""):
        self.src = src
        self.alt = alt
        self._error_handlers: List[Callable] = []

    def on_error(self, handler: Callable) -> None:
        # once-only: dropped as soon as they fire
        self._error_handlers.append(handler)

    def fail(self) -> None:
        handlers, self._error_handlers = self._error_handlers, []
        for h in handlers:
            h(self)


@dataclass
class Card:
    sku: str
    title: str
    image: ImageSlot
    badges: List[str]
    description: str
    price: str
    qty_field: QtyField
    vat_note: str = "(excl vat)"


@dataclass
class ErrorNotice:
    message: str
    hint: str


class Surface:
    """The regions the coordinator writes and the controls the controller reads."""

    def __init__(self):
        self.results_meta = ""
        self.cart_count = "0"
        self.cart_subtotal = format_money(0)
        self.items_grid: Union[List[Card], ErrorNotice] = []

        self.search_input = Control("searchInput")
        self.category_select = SelectControl("categorySelect", ALL_CATEGORIES, [(ALL_CATEGORIES, "All categories")])
        self.sort_select = SelectControl("sortSelect", "name-asc", [
            ("name-asc", "Name (A-Z)"),
            ("name-desc", "Name (Z-A)"),
            ("price-asc", "Price (low-high)"),
            ("price-desc", "Price (high-low)"),
            ("sku-asc", "SKU (A-Z)"),
            ("sku-desc", "SKU (Z-A)"),
        ])
        self.clear_cart_btn = Button("clearCartBtn")

    @property
    def cards(self) -> List[Card]:
        return self.items_grid if isinstance(self.items_grid, list) else []

    def get_element(self, element_id: str) -> Optional[Control]:
        for card in self.cards:
            if card.qty_field.id == element_id:
                return card.qty_field
        for ctl in (self.search_input, self.category_select, self.sort_select, self.clear_cart_btn):
            if ctl.id == element_id:
                return ctl
        return None

    def images(self) -> List[ImageSlot]:
        return [card.image for card in self.cards]


# ---------------------------
# Card rendering
# ---------------------------
def _swap_to_fallback(img: ImageSlot) -> None:
    logger.debug("image %s failed, using fallback", img.src)
    img.src = FALLBACK_IMAGE

def render_card(p: Product, ledger: CartLedger) -> Card:
    # blank image url goes straight to the fallback
    src = p.image_url if p.image_url.strip() else FALLBACK_IMAGE

    badges = [f"SKU: {p.sku}"]
    if p.brand:
        badges.append(p.brand)
    if p.category:
        badges.append(p.category)

    return Card(
        sku=p.sku,
        title=p.name,
        image=ImageSlot(src, alt=p.name),
        badges=badges,
        description=p.description,
        price=f"Price: {format_money(p.price_ex_vat, p.display_currency)}",
        qty_field=QtyField(p.sku, ledger.get(p.sku)),
    )


class RenderCoordinator:
    def __init__(self, state: AppState, surface: Surface, on_qty_input: Optional[Callable] = None):
        self.state = state
        self.surface = surface
        self.on_qty_input = on_qty_input
        self.render_count = 0

    def render(self) -> List[Product]:
        state, surface = self.state, self.surface
        products = derive_view(state.catalog, state.view)
        summary = state.ledger.aggregate(state.catalog)

        surface.cart_count = str(summary.count)
        surface.cart_subtotal = format_money(summary.subtotal, summary.currency)
        surface.results_meta = f"{len(products)} product(s) shown"

        surface.items_grid = [render_card(p, state.ledger) for p in products]
        self.wire_events(products)

        self.render_count += 1
        return products

    def wire_events(self, rendered: List[Product]) -> None:
        # fresh elements every render, so every handler is attached again
        if self.on_qty_input is not None:
            for p in rendered:
                field = self.surface.get_element(f"qty-{p.sku}")
                if field is None:
                    continue
                field.on_input(self.on_qty_input)

        for img in self.surface.images():
            img.on_error(_swap_to_fallback)

    def populate_categories(self, catalog) -> None:
        for c in get_categories(catalog):
            self.surface.category_select.add_option(c, c)

    def render_error(self, err) -> None:
        self.surface.results_meta = "Could not load products."
        self.surface.items_grid = ErrorNotice(
            message=getattr(err, "message", str(err)),
            hint=getattr(err, "hint", ""),
        )
