"""Shopping cart lines, quantities and the running total.

Lines are keyed by the product's color and name, lowercased with spaces
removed, so the same guitar added twice shares one line. Checkout here is
display-only: placing an order clears the cart and nothing is sent to the
server.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..models import Product
from .catalog import ProductCard, format_price, make_card

logger = logging.getLogger(__name__)

LOADING_TIME = 3.0


def cart_key(product: Product) -> str:
    return product.display_name.lower().replace(" ", "")


@dataclass
class CartLine:
    """One distinct product in the cart, with a copy of its display fields."""

    key: str
    card: ProductCard
    unit_price: Decimal
    quantity: int = 1

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


def coerce_quantity(value) -> int:
    """Quantities stay at least 1; anything non-positive or unreadable becomes 1."""
    try:
        quantity = int(value)
    except (TypeError, ValueError):
        return 1
    return quantity if quantity > 0 else 1


class CartAggregator:
    """Cart state plus the flags the cart view renders from."""

    def __init__(self, timers, loading_time: float = LOADING_TIME):
        self._timers = timers
        self._loading_time = loading_time
        self._lines: OrderedDict[str, CartLine] = OrderedDict()
        self._added_timer = None

        self.total = Decimal("0")
        self.checkout_enabled = False
        self.empty_notice = True
        self.added_notice = False
        self.order_placed_notice = False
        self.summary_visible = True

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    @property
    def total_text(self) -> str:
        return format_price(self.total)

    def get(self, key: str) -> Optional[CartLine]:
        return self._lines.get(key)

    def add(self, product: Product) -> CartLine:
        """Add one of ``product``, creating its line on first add."""
        key = cart_key(product)
        line = self._lines.get(key)
        if line is not None:
            line.quantity += 1
        else:
            line = CartLine(
                key=key,
                card=make_card(product),
                unit_price=Decimal(str(product.price)),
            )
            self._lines[key] = line
        logger.debug(f"Cart line {key} now at quantity {line.quantity}")
        self.recompute_total()
        self._show_added_notice()
        return line

    def change_quantity(self, key: str, value) -> int:
        """Set a line's quantity, coercing non-positive input to 1."""
        line = self._lines[key]
        line.quantity = coerce_quantity(value)
        self.recompute_total()
        return line.quantity

    def remove(self, key: str) -> None:
        del self._lines[key]
        self.recompute_total()

    def recompute_total(self) -> Decimal:
        self.total = sum((line.subtotal for line in self._lines.values()), Decimal("0"))
        if self.total == 0:
            self.checkout_enabled = False
            self.empty_notice = True
        else:
            self.checkout_enabled = True
            self.empty_notice = False
        return self.total

    def submit_order(self) -> bool:
        """Place the order: show the notice, clear the lines, reset the view later.

        The total and checkout button keep their values until the reset runs.
        """
        if not self.checkout_enabled:
            return False
        self.summary_visible = False
        self.order_placed_notice = True
        self._lines.clear()
        self._timers.call_later(self._loading_time, self._reset_after_order)
        logger.info("Order placed")
        return True

    def _reset_after_order(self) -> None:
        self.summary_visible = True
        self.order_placed_notice = False
        self.recompute_total()

    def _show_added_notice(self) -> None:
        self._timers.cancel(self._added_timer)
        self.added_notice = True
        self._added_timer = self._timers.call_later(self._loading_time, self._hide_added_notice)

    def _hide_added_notice(self) -> None:
        self.added_notice = False
        self._added_timer = None
