# catalog_app/state.py
from dataclasses import dataclass, field
from typing import Tuple

from .ledger import CartLedger
from .models import Product, ViewState

# The whole mutable state of a browsing session. One instance per session,
# mutated by the InteractionController and read by the RenderCoordinator.

@dataclass
class AppState:
    catalog: Tuple[Product, ...] = ()
    view: ViewState = field(default_factory=ViewState)
    ledger: CartLedger = field(default_factory=CartLedger)
