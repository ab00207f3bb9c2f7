"""API controllers."""

from guitar_store.api.controller.guitar_controller import create_guitar_router

__all__ = ["create_guitar_router"]
