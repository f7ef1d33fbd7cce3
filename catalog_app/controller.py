# catalog_app/controller.py
import logging
from typing import Optional

from catalog_sdk.catalog_client import CatalogClient, LoadError

from .core import to_quantity
from .render import Control, QtyField, RenderCoordinator, Surface
from .state import AppState

logger = logging.getLogger("catalog_browser.controller")


class InteractionController:
    """
    Owns every state mutation. Each handler applies exactly one change and
    then runs exactly one full render before returning.
    """

    def __init__(self, state: AppState, surface: Surface):
        self.state = state
        self.surface = surface
        self.coordinator = RenderCoordinator(state, surface, on_qty_input=self.on_qty_input)

    def render(self):
        return self.coordinator.render()

    # ---------------------------
    # Header controls
    # ---------------------------
    def on_search(self, ctl: Control) -> None:
        self.state.view.query = ctl.value
        self.render()

    def on_category(self, ctl: Control) -> None:
        self.state.view.category = ctl.value
        self.render()

    def on_sort(self, ctl: Control) -> None:
        self.state.view.sort = ctl.value
        self.render()

    def on_clear(self, _ctl: Optional[Control] = None) -> None:
        self.state.ledger.clear()
        logger.info("Cart cleared")
        self.render()

    # ---------------------------
    # Card controls
    # ---------------------------
    def on_qty_input(self, field: QtyField) -> None:
        nxt = to_quantity(field.value or 0)
        self.state.ledger.set_quantity(field.sku, nxt)

        # no negatives or decimals left in the field
        if field.value != str(nxt):
            field.value = str(nxt)

        self.render()

    def wire_controls(self) -> None:
        s = self.surface
        s.search_input.on_input(self.on_search)
        s.category_select.on_input(self.on_category)
        s.sort_select.on_input(self.on_sort)
        s.clear_cart_btn.on_click(self.on_clear)


# ---------------------------
# Bootstrap
# ---------------------------
def _start(products, surface: Surface) -> InteractionController:
    state = AppState(catalog=tuple(products))
    state.ledger.initialize(state.catalog)

    controller = InteractionController(state, surface)
    controller.coordinator.populate_categories(state.catalog)
    controller.wire_controls()
    controller.render()
    return controller

def _fail(err: LoadError, surface: Surface) -> None:
    logger.error("Could not load products: %s", err)
    RenderCoordinator(AppState(), surface).render_error(err)

def init(client: CatalogClient, surface: Surface) -> Optional[InteractionController]:
    """
    Load the catalog and bring the surface up. Returns None after rendering the
    error state if the load fails; nothing is wired in that case.
    """
    try:
        products = client.load()
    except LoadError as e:
        _fail(e, surface)
        return None
    return _start(products, surface)

async def init_async(client: CatalogClient, surface: Surface, transport=None) -> Optional[InteractionController]:
    try:
        products = await client.load_async(transport=transport)
    except LoadError as e:
        _fail(e, surface)
        return None
    return _start(products, surface)
