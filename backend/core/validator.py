"""Field rules for candidate inventory records.

Rules run in a fixed order and ``validate`` reports only the first failure,
so a form always shows the most basic problem first.
"""

import math
from typing import Callable, List, Optional

from core.exceptions import ValidationError
from core.models import LIMITS, ItemPayload

REQUIRED_MESSAGE = "Fill in all required fields."
NUMERIC_MESSAGE = "Quantity, minimum stock and price must be numeric values."
INTEGER_MESSAGE = "Quantity and minimum stock must be whole numbers."
NEGATIVE_MESSAGE = "Negative values are not allowed."

_LENGTH_LABELS = (
    ("name", "Name"),
    ("sku", "SKU"),
    ("category", "Category"),
)


def _check_required(payload: ItemPayload) -> Optional[str]:
    if not payload.name or not payload.sku or not payload.category:
        return REQUIRED_MESSAGE
    return None


def _check_lengths(payload: ItemPayload) -> Optional[str]:
    for field, label in _LENGTH_LABELS:
        limit = LIMITS[field]
        if len(getattr(payload, field)) > limit:
            return f"{label} cannot exceed {limit} characters."
    return None


def _check_numeric(payload: ItemPayload) -> Optional[str]:
    values = (payload.quantity, payload.min_stock, payload.price)
    if any(not isinstance(v, (int, float)) or not math.isfinite(v) for v in values):
        return NUMERIC_MESSAGE
    return None


def _check_integer(payload: ItemPayload) -> Optional[str]:
    if not float(payload.quantity).is_integer() or not float(payload.min_stock).is_integer():
        return INTEGER_MESSAGE
    return None


def _check_sign(payload: ItemPayload) -> Optional[str]:
    if payload.quantity < 0 or payload.min_stock < 0 or payload.price < 0:
        return NEGATIVE_MESSAGE
    return None


RULES: List[Callable[[ItemPayload], Optional[str]]] = [
    _check_required,
    _check_lengths,
    _check_numeric,
    _check_integer,
    _check_sign,
]


def validate(payload: ItemPayload) -> str:
    """Return the first failing rule's message, or ``""`` when the payload is clean."""
    for rule in RULES:
        message = rule(payload)
        if message:
            return message
    return ""


def validate_all(payload: ItemPayload) -> List[str]:
    """Every failing rule's message, in rule order.

    Rules that depend on numbers being well-formed are skipped once the
    numeric rule has failed.
    """
    messages = []
    for rule in RULES:
        if NUMERIC_MESSAGE in messages and rule in (_check_integer, _check_sign):
            continue
        message = rule(payload)
        if message:
            messages.append(message)
    return messages


def ensure_valid(payload: ItemPayload) -> ItemPayload:
    """Like ``validate`` but raises ``ValidationError`` for scripted callers."""
    message = validate(payload)
    if message:
        raise ValidationError(message)
    return payload
