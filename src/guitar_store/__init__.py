"""BF Guitars storefront: catalog/FAQ/DIY/feedback API and its client model."""

__version__ = "1.0.0"
