"""Filtered, name-ordered views over a snapshot of items."""

import unicodedata
from dataclasses import dataclass
from typing import Iterable, List

from core.converters import normalize_text
from core.models import InventoryItem, Status

STATUSES = (Status.ALL, Status.OK, Status.LOW)


@dataclass(frozen=True)
class InventoryFilter:
    search: str = ""
    status: str = Status.ALL

    def __post_init__(self):
        object.__setattr__(self, "search", normalize_text(self.search).lower())
        if self.status not in STATUSES:
            raise ValueError(f"status must be one of {', '.join(STATUSES)}")

    def matches(self, item: InventoryItem) -> bool:
        if self.search and not any(
            self.search in value.lower() for value in (item.name, item.sku, item.category)
        ):
            return False
        return self.status == Status.ALL or self.status == item.status


def collation_key(text: str) -> str:
    """Accent- and case-insensitive sort key (``"Álamo"`` sorts with ``"alamo"``)."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def query(items: Iterable[InventoryItem], filters: InventoryFilter = InventoryFilter()) -> List[InventoryItem]:
    """Items matching ``filters``, sorted by name; the input is not modified."""
    matched = [item for item in items if filters.matches(item)]
    # sorted() is stable, so equal names keep their input order
    return sorted(matched, key=lambda item: collation_key(item.name))
