"""Catalog projections: listing grid and product detail."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..models import Product
from .views import View, ViewStateMachine

logger = logging.getLogger(__name__)

ITEMS_PER_ROW = 3


def format_price(amount) -> str:
    return f"${Decimal(str(amount)):.2f}"


@dataclass(frozen=True)
class ProductCard:
    """Container shown for a product in the listing and in the cart."""

    product_id: int
    category: str
    name: str
    price_text: str
    image: str
    alt: str


def make_card(product: Product) -> ProductCard:
    """Build the shared product container: image, display name and price."""
    return ProductCard(
        product_id=product.product_id,
        category=product.category,
        name=product.display_name,
        price_text=format_price(product.price),
        image=product.img,
        alt=product.display_name,
    )


def build_rows(products: list[Product], per_row: int = ITEMS_PER_ROW) -> list[list[ProductCard]]:
    """Place product cards into rows of at most ``per_row`` items."""
    cards = [make_card(product) for product in products]
    return [cards[i:i + per_row] for i in range(0, len(cards), per_row)]


@dataclass(frozen=True)
class ProductDetail:
    """The single product view, holding the snapshot the add-to-cart control adds."""

    product: Product
    name: str
    price_text: str
    image: str
    features: list[str]


class CatalogRenderer:
    """Holds the rendered listing and detail and decides when a fetch is needed."""

    def __init__(self, views: ViewStateMachine, items_per_row: int = ITEMS_PER_ROW):
        self._views = views
        self._items_per_row = items_per_row
        self.rows: list[list[ProductCard]] = []
        self.detail: Optional[ProductDetail] = None
        views.on_exit(View.PRODUCT, self.clear_listing)

    @property
    def cards(self) -> list[ProductCard]:
        return [card for row in self.rows for card in row]

    def clear_listing(self) -> None:
        """Discard the listing so the next visit fetches again."""
        self.rows = []

    def needs_listing_fetch(self, category: str) -> bool:
        """False only when the listing on screen already shows exactly ``category``."""
        cards = self.cards
        if not cards or category == "all":
            return True
        return any(card.category != category for card in cards)

    def is_detail_cached(self, product_id: int) -> bool:
        return self.detail is not None and self.detail.product.product_id == product_id

    def render_listing(self, products: list[Product]) -> None:
        # Entering clears whatever listing was showing
        self._views.enter(View.PRODUCT)
        self.rows = build_rows(products, self._items_per_row)

    def render_detail(self, product: Product) -> None:
        """Replace the detail with ``product`` and show it."""
        self.detail = ProductDetail(
            product=product,
            name=product.display_name,
            price_text=format_price(product.price),
            image=product.img,
            features=product.description.split("\n"),
        )
        self._views.enter(View.BUY)
