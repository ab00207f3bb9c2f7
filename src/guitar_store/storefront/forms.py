"""DIY and feedback form submission."""

import logging
from typing import Awaitable, Callable, Mapping, Optional

from .api_client import StorefrontRequestError
from .views import ViewStateMachine

logger = logging.getLogger(__name__)

LOADING_TIME = 3.0

Poster = Callable[[Mapping[str, str]], Awaitable[str]]


class FormSubmissionFlow:
    """A form that posts its fields, shows the reply, then resets itself."""

    def __init__(
        self,
        name: str,
        post: Poster,
        views: ViewStateMachine,
        timers,
        reset_delay: float = LOADING_TIME,
    ):
        self.name = name
        self._post = post
        self._views = views
        self._timers = timers
        self._reset_delay = reset_delay

        self.fields: dict[str, str] = {}
        self.form_visible = True
        self.message: Optional[str] = None

    def fill(self, **fields: str) -> None:
        self.fields.update(fields)

    async def submit(self, fields: Optional[Mapping[str, str]] = None) -> bool:
        """Post the form; returns True when the server accepted it."""
        if fields is not None:
            self.fields = dict(fields)
        try:
            reply = await self._post(dict(self.fields))
        except StorefrontRequestError as e:
            logger.warning(f"{self.name} form submission failed: {e}")
            self._views.fail(str(e))
            return False

        self.form_visible = False
        self.message = reply
        self._timers.call_later(self._reset_delay, self.reset)
        return True

    def reset(self) -> None:
        self.fields = {}
        self.message = None
        self.form_visible = True


class DIYForm(FormSubmissionFlow):
    """DIY order form; the engraving text field depends on the engrave choice."""

    def __init__(self, post: Poster, views: ViewStateMachine, timers, reset_delay: float = LOADING_TIME):
        super().__init__("diy", post, views, timers, reset_delay)
        self.engraving_text_visible = False
        self.engraving_text_required = False

    def choose_engrave(self, value: str) -> None:
        """Show and require the engraving text only when engraving is "1"."""
        self.fields["engrave"] = value
        wanted = value == "1"
        self.engraving_text_visible = wanted
        self.engraving_text_required = wanted

    def reset(self) -> None:
        super().reset()
        self.engraving_text_visible = False
        self.engraving_text_required = False
