"""Storefront client: page state for catalog, cart, FAQ and forms."""

from guitar_store.storefront.api_client import StoreApiClient, StorefrontRequestError
from guitar_store.storefront.app import Storefront
from guitar_store.storefront.cart import CartAggregator, CartLine, cart_key
from guitar_store.storefront.catalog import CatalogRenderer, ProductCard, ProductDetail, build_rows, make_card
from guitar_store.storefront.forms import DIYForm, FormSubmissionFlow
from guitar_store.storefront.timers import Timers
from guitar_store.storefront.views import View, ViewStateMachine

__all__ = [
    "CartAggregator",
    "CartLine",
    "CatalogRenderer",
    "DIYForm",
    "FormSubmissionFlow",
    "ProductCard",
    "ProductDetail",
    "StoreApiClient",
    "Storefront",
    "StorefrontRequestError",
    "Timers",
    "View",
    "ViewStateMachine",
    "build_rows",
    "cart_key",
    "make_card",
]
