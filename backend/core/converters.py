"""Coercion helpers shared by the form normalizer and the load-time sanitizer."""

import math
import re
import time
import uuid
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

_WHITESPACE = re.compile(r"\s+")
_CENTS = Decimal("0.01")


def create_id() -> str:
    return str(uuid.uuid4())


def now_ms() -> int:
    """Current time as integer milliseconds since the epoch."""
    return int(time.time() * 1000)


def normalize_text(value: Any) -> str:
    """Trim and collapse internal whitespace; ``None`` becomes ``""``."""
    if value is None:
        return ""
    return _WHITESPACE.sub(" ", str(value).strip())


def to_number(value: Any) -> float:
    """Best-effort numeric conversion; anything unusable becomes NaN.

    Numbers pass through, numeric strings are parsed. Blank strings,
    booleans, ``None`` and containers are not numbers.
    """
    if isinstance(value, bool) or value is None:
        return math.nan
    if isinstance(value, (int, float, Decimal)):
        try:
            return float(value)
        except OverflowError:
            # integers beyond float range
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return math.nan
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def round_price(value: float) -> float:
    # Decimal via str() so 9.995 rounds the way it reads; enough precision
    # to quantize any finite float to cents
    with localcontext() as ctx:
        ctx.prec = 400
        return float(Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP))


def sanitize_integer(value: Any) -> int:
    """Floor to a non-negative integer; non-finite or negative gives 0."""
    parsed = to_number(value)
    if not math.isfinite(parsed) or parsed < 0:
        return 0
    return math.floor(parsed)


def sanitize_price(value: Any) -> float:
    """Non-negative amount rounded to cents; non-finite or negative gives 0."""
    parsed = to_number(value)
    if not math.isfinite(parsed) or parsed <= 0:
        return 0.0
    return round_price(parsed)


def sanitize_timestamp(value: Any, fallback: int) -> int:
    """Keep any finite non-zero number; zero or unusable gives ``fallback``."""
    parsed = to_number(value)
    if not math.isfinite(parsed) or parsed == 0:
        return fallback
    return int(parsed)
