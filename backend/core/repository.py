"""The single owner of the in-memory item collection.

Every mutation goes through ``InventoryRepository``; after each successful
one the whole collection is written to the store before the call returns.
Callers only ever receive frozen items or tuple snapshots.
"""

from typing import Callable, Iterable, Iterator, List, Optional, Protocol, Sequence, Tuple

import structlog

from core.converters import create_id, now_ms, round_price
from core.exceptions import DuplicateSkuError, NotFoundError
from core.models import InventoryItem, ItemPayload

logger = structlog.get_logger(__name__)


class ItemStore(Protocol):
    def save(self, records: Sequence[dict]) -> None: ...


class InventoryRepository:
    def __init__(
        self,
        items: Iterable[InventoryItem] = (),
        *,
        store: Optional[ItemStore] = None,
        clock: Callable[[], int] = now_ms,
        id_factory: Callable[[], str] = create_id,
    ):
        self._items: List[InventoryItem] = list(items)
        self.store = store
        self.clock = clock
        self.id_factory = id_factory

    @property
    def items(self) -> Tuple[InventoryItem, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[InventoryItem]:
        return iter(self.items)

    def __contains__(self, item_id: object) -> bool:
        return self._index_of(item_id) is not None

    def find(self, item_id: str) -> Optional[InventoryItem]:
        index = self._index_of(item_id)
        return self._items[index] if index is not None else None

    def get(self, item_id: str) -> InventoryItem:
        item = self.find(item_id)
        if item is None:
            raise NotFoundError(item_id)
        return item

    def is_duplicated_sku(self, sku: str, editing_id: Optional[str] = None) -> bool:
        """True when an item other than ``editing_id`` already uses ``sku``."""
        return any(item.sku == sku and item.id != editing_id for item in self._items)

    def create(self, payload: ItemPayload) -> InventoryItem:
        """Append a new item built from a validator-clean payload."""
        if self.is_duplicated_sku(payload.sku):
            raise DuplicateSkuError(payload.sku)

        now = self.clock()
        item = InventoryItem(
            id=self.id_factory(),
            created_at=now,
            updated_at=now,
            **self._fields(payload),
        )
        self._items.append(item)
        self._persist()
        logger.info("inventory.item.created", item_id=item.id, sku=item.sku)
        return item

    def update(self, item_id: str, payload: ItemPayload) -> InventoryItem:
        """Replace every field but ``id``/``created_at`` of an existing item."""
        index = self._index_of(item_id)
        if index is None:
            raise NotFoundError(item_id)
        if self.is_duplicated_sku(payload.sku, editing_id=item_id):
            raise DuplicateSkuError(payload.sku)

        current = self._items[index]
        item = current.model_copy(
            update={**self._fields(payload), "updated_at": max(self.clock(), current.created_at)}
        )
        self._items[index] = item
        self._persist()
        logger.info("inventory.item.updated", item_id=item.id, sku=item.sku)
        return item

    def remove(self, item_id: str) -> Optional[InventoryItem]:
        """Delete an item; returns it, or ``None`` when it was already gone.

        Callers are expected to have obtained the user's confirmation first.
        """
        index = self._index_of(item_id)
        if index is None:
            return None

        item = self._items.pop(index)
        self._persist()
        logger.info("inventory.item.removed", item_id=item.id, sku=item.sku)
        return item

    def adjust_quantity(self, item_id: str, delta: int) -> Optional[InventoryItem]:
        """Add ``delta`` to the quantity.

        Returns ``None`` and leaves everything untouched (no write) when the
        result would be negative.
        """
        index = self._index_of(item_id)
        if index is None:
            raise NotFoundError(item_id)

        current = self._items[index]
        quantity = current.quantity + int(delta)
        if quantity < 0:
            logger.debug(
                "inventory.item.adjust_rejected",
                item_id=item_id,
                quantity=current.quantity,
                delta=delta,
            )
            return None

        item = current.model_copy(
            update={"quantity": quantity, "updated_at": max(self.clock(), current.created_at)}
        )
        self._items[index] = item
        self._persist()
        logger.info("inventory.item.adjusted", item_id=item_id, quantity=quantity, delta=delta)
        return item

    def _index_of(self, item_id: object) -> Optional[int]:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        return None

    @staticmethod
    def _fields(payload: ItemPayload) -> dict:
        return {
            "name": payload.name,
            "sku": payload.sku,
            "category": payload.category,
            "quantity": int(payload.quantity),
            "min_stock": int(payload.min_stock),
            "price": round_price(payload.price),
        }

    def _persist(self) -> None:
        if self.store is not None:
            self.store.save([item.to_record() for item in self._items])
