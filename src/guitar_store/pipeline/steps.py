"""Step results and the dispatcher that runs a request pipeline.

A step takes the value produced by the previous step and returns either
``Continue(value)`` to hand a new value forward or ``Fail(status, message)``
to stop. Steps may be plain functions or coroutines.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Sequence, Union

from fastapi import Response
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)

# Status codes used by the service
PARAMS_ERROR_CODE = 400
SERVER_ERROR_CODE = 500

# Response texts
SERVER_ERROR = "Something went wrong on the server... please try again later."
ITEMS_NOT_AVAIL = "No items available."
MISSING_PARAM = "Missing one or more required parameters."
INVALID_PARAM = "Invalid parameter, please provide a positive integer number."
FEEDBACK_MSG = "Thank you, we have received your feedback and will keep improving!"
DIY_MSG = "DIY request successful! We will make your DIY guitar soon!"


@dataclass(frozen=True)
class Continue:
    """Advance to the next step with ``value``."""

    value: Any


@dataclass(frozen=True)
class Fail:
    """Stop the pipeline and report ``message`` with HTTP ``status``."""

    status: int
    message: str


StepResult = Union[Continue, Fail]
Step = Callable[[Any], Union[StepResult, Awaitable[StepResult]]]


def bad_request(message: str) -> Fail:
    return Fail(PARAMS_ERROR_CODE, message)


def server_error() -> Fail:
    return Fail(SERVER_ERROR_CODE, SERVER_ERROR)


async def run_steps(steps: Sequence[Step], initial: Any) -> StepResult:
    """Run ``steps`` in order, stopping at the first ``Fail``.

    Args:
        steps: Ordered step callables.
        initial: Value handed to the first step.

    Returns:
        The first ``Fail`` produced, or ``Continue`` with the last value.
    """
    value = initial
    for step in steps:
        result = step(value)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, Fail):
            return result
        value = result.value
    return Continue(value)


class Pipeline:
    """An endpoint's ordered steps plus the response emitted on success."""

    def __init__(self, name: str, steps: Sequence[Step], respond: Callable[[Any], Response]):
        self.name = name
        self.steps = list(steps)
        self.respond = respond

    async def handle(self, initial: Any = None) -> Response:
        """Run the pipeline and turn its outcome into an HTTP response."""
        result = await run_steps(self.steps, initial)
        if isinstance(result, Fail):
            if result.status >= SERVER_ERROR_CODE:
                logger.error(f"{self.name} failed with {result.status}")
            else:
                logger.info(f"{self.name} rejected with {result.status}: {result.message}")
            return PlainTextResponse(result.message, status_code=result.status)
        return self.respond(result.value)
