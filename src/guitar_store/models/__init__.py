"""Data models module."""

from guitar_store.models.faq import FAQEntry
from guitar_store.models.product import Product
from guitar_store.models.submissions import DIYOrder, Feedback

__all__ = ["DIYOrder", "FAQEntry", "Feedback", "Product"]
