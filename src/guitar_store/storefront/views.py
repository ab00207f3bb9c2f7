"""Which panel of the storefront is showing.

Exactly one view is active at a time and exactly one navigation tab carries
the active marker. The two are tracked separately: the product detail view,
for instance, has no tab of its own.
"""

import logging
from collections import defaultdict
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class View(str, Enum):
    FEATURED = "featured"
    PRODUCT = "product"  # category listing
    BUY = "buy"  # single product detail
    CART = "cart"
    DIY = "diy"
    FAQ = "faq"


class ViewStateMachine:
    """Active view, active tab and the page-level error state."""

    def __init__(self, initial: View = View.FEATURED, initial_tab: str = "featured"):
        self._active = initial
        self._active_tab = initial_tab
        self._navigation = 0
        self._exit_hooks: dict[View, list[Callable[[], None]]] = defaultdict(list)
        self.error_message: Optional[str] = None

    @property
    def active(self) -> View:
        return self._active

    @property
    def active_tab(self) -> str:
        return self._active_tab

    @property
    def failed(self) -> bool:
        return self.error_message is not None

    @property
    def main_visible(self) -> bool:
        return not self.failed

    @property
    def navigation(self) -> int:
        """Counter bumped by every transition and tab change."""
        return self._navigation

    def on_exit(self, view: View, hook: Callable[[], None]) -> None:
        """Run ``hook`` whenever ``view`` stops being the active view."""
        self._exit_hooks[view].append(hook)

    def enter(self, view: View) -> None:
        """Make ``view`` the only visible view."""
        if self.failed:
            logger.debug(f"Ignoring transition to {view.value}: page is in the error state")
            return
        previous = self._active
        for hook in self._exit_hooks[previous]:
            hook()
        self._active = view
        self._navigation += 1
        logger.debug(f"View {previous.value} -> {view.value}")

    def select_tab(self, tab: str) -> None:
        if self.failed:
            return
        self._active_tab = tab
        self._navigation += 1

    def is_current(self, navigation: int) -> bool:
        """Whether nothing has navigated since ``navigation`` was read."""
        return not self.failed and navigation == self._navigation

    def is_visible(self, view: View) -> bool:
        return self.main_visible and view is self._active

    def visibility(self) -> dict[View, bool]:
        """Visible flag per view; at most one is True."""
        return {view: self.is_visible(view) for view in View}

    def fail(self, reason: str) -> None:
        """Enter the terminal error state: main content hidden, reason shown."""
        if self.failed:
            return
        self.error_message = f"{reason}. Please refresh the page!"
        logger.warning(f"Storefront failed: {reason}")
