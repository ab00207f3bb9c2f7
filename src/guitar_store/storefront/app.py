"""Storefront: the user actions of the store page wired to its state.

Every fetch captures the navigation counter before it starts and only applies
its result if no navigation happened in between. Any request failure puts
the page into the terminal error state.
"""

import logging
from typing import Optional

import httpx

from ..config import AppConfig, StorefrontConfig
from ..models import FAQEntry
from .api_client import StoreApiClient, StorefrontRequestError
from .cart import CartAggregator
from .catalog import CatalogRenderer
from .forms import DIYForm, FormSubmissionFlow
from .timers import Timers
from .views import View, ViewStateMachine

logger = logging.getLogger(__name__)

# Tabs that open a view directly rather than a product category
VIEW_TABS = {"featured": View.FEATURED, "diy": View.DIY, "faq": View.FAQ}


class Storefront:
    """Explicit model of the store page.

    Notices and form resets are scheduled on the running event loop, so the
    page must be driven from inside one, including the synchronous cart
    actions ``add_to_cart`` and ``submit_order``. Pass ``timers`` bound to an
    explicit loop to use it elsewhere.
    """

    def __init__(self, api: StoreApiClient, config: StorefrontConfig, timers: Optional[Timers] = None):
        self.api = api
        self.timers = timers or Timers()
        self.views = ViewStateMachine()
        self.catalog = CatalogRenderer(self.views, config.items_per_row)
        self.cart = CartAggregator(self.timers, config.loading_time)
        self.diy_form = DIYForm(api.post_diy, self.views, self.timers, config.loading_time)
        self.feedback_form = FormSubmissionFlow(
            "feedback", api.post_feedback, self.views, self.timers, config.loading_time
        )
        self.faq: list[FAQEntry] = []

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timers: Optional[Timers] = None,
    ) -> "Storefront":
        """Build a storefront talking to the API at the configured base URL and prefix."""
        api = StoreApiClient(config.storefront.base_url, config.server.api_base, transport=transport)
        return cls(api, config.storefront, timers)

    @property
    def error_message(self) -> Optional[str]:
        return self.views.error_message

    def _fail(self, error: StorefrontRequestError) -> None:
        logger.warning(f"Request failed: {error}")
        self.views.fail(str(error))

    def _stale(self, navigation: int, what: str) -> bool:
        if self.views.is_current(navigation):
            return False
        logger.debug(f"Dropping stale {what} response")
        return True

    # --- Navigation ---

    async def click_tab(self, tab: str) -> None:
        """Navigation tab: view tabs switch immediately, others are categories."""
        self.views.select_tab(tab)
        view = VIEW_TABS.get(tab)
        if view is View.FAQ:
            await self.open_faq()
        elif view is not None:
            self.views.enter(view)
        else:
            await self.open_category(tab)

    def click_logo(self) -> None:
        self.views.enter(View.FEATURED)
        self.views.select_tab("featured")

    async def open_category(self, category: str) -> None:
        if not self.catalog.needs_listing_fetch(category):
            return
        navigation = self.views.navigation
        try:
            products = await self.api.get_category(category)
        except StorefrontRequestError as e:
            self._fail(e)
            return
        if self._stale(navigation, f"category {category}"):
            return
        self.catalog.render_listing(products)

    async def open_product(self, product_id: int) -> None:
        """Product card click: show the detail, fetching it only if not cached."""
        if self.catalog.is_detail_cached(product_id):
            self.views.enter(View.BUY)
            return
        navigation = self.views.navigation
        try:
            product = await self.api.get_product(product_id)
        except StorefrontRequestError as e:
            self._fail(e)
            return
        if self._stale(navigation, f"product {product_id}"):
            return
        self.catalog.render_detail(product)

    def open_cart(self) -> None:
        self.views.enter(View.CART)

    def open_diy(self) -> None:
        self.views.enter(View.DIY)

    async def open_faq(self) -> None:
        """Show the FAQ, fetching the entries the first time only."""
        self.views.enter(View.FAQ)
        if self.faq:
            return
        navigation = self.views.navigation
        try:
            entries = await self.api.get_faq()
        except StorefrontRequestError as e:
            self._fail(e)
            return
        if self._stale(navigation, "faq"):
            return
        self.faq = entries

    def faq_lines(self) -> list[tuple[str, str]]:
        return [(f"Q: {entry.q}", f"A: {entry.a}") for entry in self.faq]

    # --- Cart ---

    def add_to_cart(self):
        """Add the product shown in the detail view."""
        if self.catalog.detail is None:
            raise RuntimeError("No product detail is showing")
        return self.cart.add(self.catalog.detail.product)

    def change_quantity(self, key: str, value) -> int:
        return self.cart.change_quantity(key, value)

    def remove_line(self, key: str) -> None:
        self.cart.remove(key)

    def submit_order(self) -> bool:
        return self.cart.submit_order()

    # --- Forms ---

    async def submit_diy(self, fields=None) -> bool:
        return await self.diy_form.submit(fields)

    async def submit_feedback(self, fields=None) -> bool:
        return await self.feedback_form.submit(fields)

    async def close(self) -> None:
        self.timers.cancel_all()
        await self.api.close()
