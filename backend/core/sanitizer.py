"""Load-time repair of previously persisted inventory data.

Whatever was stored (by an older version, by hand, or half-written) is
coerced into well-formed ``InventoryItem`` records. Records that cannot be
repaired are dropped; this module never raises for bad input.
"""

from typing import Any, Callable, List, Mapping, Optional

import structlog

from core.converters import (
    create_id,
    normalize_text,
    now_ms,
    sanitize_integer,
    sanitize_price,
    sanitize_timestamp,
)
from core.models import LIMITS, InventoryItem

logger = structlog.get_logger(__name__)


def _text(value: Any, limit: int) -> str:
    # trim again after truncating so a cut never leaves a trailing space
    return normalize_text(value)[:limit].rstrip()


def _coerce(raw: Mapping[str, Any], now: int, id_factory: Callable[[], str]) -> Optional[InventoryItem]:
    name = _text(raw.get("name"), LIMITS["name"])
    sku = _text(normalize_text(raw.get("sku")).upper(), LIMITS["sku"])
    category = _text(raw.get("category"), LIMITS["category"])
    if not name or not sku or not category:
        return None

    raw_id = raw.get("id")
    item_id = normalize_text(raw_id) if raw_id is not None else ""

    created_at = sanitize_timestamp(raw.get("createdAt"), now)
    updated_at = max(sanitize_timestamp(raw.get("updatedAt"), now), created_at)

    return InventoryItem(
        id=item_id or id_factory(),
        name=name,
        sku=sku,
        category=category,
        quantity=sanitize_integer(raw.get("quantity")),
        min_stock=sanitize_integer(raw.get("minStock")),
        price=sanitize_price(raw.get("price")),
        created_at=created_at,
        updated_at=updated_at,
    )


def sanitize(
    raw_value: Any,
    *,
    clock: Callable[[], int] = now_ms,
    id_factory: Callable[[], str] = create_id,
) -> List[InventoryItem]:
    """Turn a decoded blob of unknown shape into a list of valid items.

    Non-list input yields ``[]``. A record whose name, SKU or category is
    empty after coercion is dropped, as is any later record repeating an
    SKU already seen. A repeated id is replaced by a fresh one.
    """
    if not isinstance(raw_value, list):
        if raw_value is not None:
            logger.warning("inventory.sanitize.not_a_list", type=type(raw_value).__name__)
        return []

    now = clock()
    items: List[InventoryItem] = []
    seen_ids = set()
    seen_skus = set()
    dropped = 0

    for entry in raw_value:
        item = _coerce(entry if isinstance(entry, Mapping) else {}, now, id_factory)
        if item is None or item.sku in seen_skus:
            dropped += 1
            continue
        if item.id in seen_ids:
            item = item.model_copy(update={"id": id_factory()})
        seen_ids.add(item.id)
        seen_skus.add(item.sku)
        items.append(item)

    if dropped:
        logger.warning("inventory.sanitize.dropped", dropped=dropped, kept=len(items))
    return items
