"""Parameter validation and query construction for each endpoint.

Validators return either the validated value wrapped in ``Continue`` or a
400 ``Fail``. Builders never fail; they return a ``Query`` that the execute
steps run later.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from ..models import DIYOrder, Feedback
from .steps import INVALID_PARAM, ITEMS_NOT_AVAIL, MISSING_PARAM, Continue, StepResult, bad_request

ALL_CATEGORIES = "all"

_DIGITS = re.compile(r"[0-9]+")

# Largest value an SQLite INTEGER column can hold
MAX_ROW_ID = 2**63 - 1


@dataclass(frozen=True)
class Query:
    """A parameterized SQL statement and its ordered parameters."""

    template: str
    params: tuple = field(default_factory=tuple)


# --- Validators ---


def validate_product_id(raw: Union[str, int, None]) -> StepResult:
    """Accept a positive integer id, given as an int or a decimal string."""
    if isinstance(raw, bool):
        return bad_request(INVALID_PARAM)
    if isinstance(raw, int):
        product_id = raw
    elif isinstance(raw, str) and _DIGITS.fullmatch(raw.strip()):
        product_id = int(raw.strip())
    else:
        return bad_request(INVALID_PARAM)

    if product_id <= 0:
        return bad_request(INVALID_PARAM)
    if product_id > MAX_ROW_ID:
        return bad_request(ITEMS_NOT_AVAIL)
    return Continue(product_id)


def normalize_category(raw: str) -> StepResult:
    """Map the ``all`` sentinel to ``None`` (no filter)."""
    return Continue(None if raw == ALL_CATEGORIES else raw)


def _parse_flag(raw: Any) -> Optional[int]:
    if raw is None:
        return None
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


def validate_diy(form: Mapping[str, Any]) -> StepResult:
    """Validate the DIY order form fields."""
    type_ = form.get("type")
    neck = form.get("neck")
    body = form.get("body")
    color = form.get("color")
    engraving = _parse_flag(form.get("engrave"))

    if not (type_ and neck and body and color) or engraving not in (0, 1):
        return bad_request(MISSING_PARAM)

    engraving_text = None
    if engraving == 1:
        engraving_text = form.get("engrave-text")
        if not engraving_text:
            return bad_request(MISSING_PARAM)

    return Continue(DIYOrder(
        type=type_,
        neck=neck,
        body=body,
        color=color,
        engraving=engraving,
        engraving_text=engraving_text,
    ))


def validate_feedback(form: Mapping[str, Any]) -> StepResult:
    """Validate the feedback form fields."""
    name = form.get("name")
    feedback = form.get("feedback")
    if not (name and feedback):
        return bad_request(MISSING_PARAM)
    return Continue(Feedback(name=name, feedback=feedback))


# --- Builders ---


def select_product_by_id(product_id: int) -> Query:
    return Query("SELECT * FROM products WHERE product_id=?", (product_id,))


def select_products(category: Optional[str]) -> Query:
    if category is None:
        return Query("SELECT * FROM products")
    return Query("SELECT * FROM products WHERE category=?", (category,))


def insert_diy_order(order: DIYOrder) -> Query:
    return Query(
        "INSERT INTO diy_orders(type, n_material, b_material, color, engraving, "
        "engraving_text) VALUES (?, ?, ?, ?, ?, ?)",
        (order.type, order.neck, order.body, order.color, order.engraving, order.engraving_text),
    )


def insert_feedback(feedback: Feedback) -> Query:
    return Query(
        "INSERT INTO feedbacks(name, feedback) VALUES (?, ?)",
        (feedback.name, feedback.feedback),
    )
