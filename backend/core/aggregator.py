from dataclasses import dataclass
from typing import Iterable

from core.models import InventoryItem, Status


@dataclass(frozen=True)
class InventorySummary:
    count: int = 0
    total_units: int = 0
    low_stock_count: int = 0
    total_value: float = 0.0

    @property
    def feedback(self) -> str:
        """One-line status shown above the table."""
        if self.count == 0:
            return "No products registered."
        if self.low_stock_count > 0:
            return f"There are {self.low_stock_count} product(s) with low stock."
        return "Inventory is up to date."


def summarize(items: Iterable[InventoryItem]) -> InventorySummary:
    count = 0
    total_units = 0
    low_stock_count = 0
    total_value = 0.0

    for item in items:
        count += 1
        total_units += item.quantity
        if item.status == Status.LOW:
            low_stock_count += 1
        total_value += item.total_value

    return InventorySummary(
        count=count,
        total_units=total_units,
        low_stock_count=low_stock_count,
        total_value=round(total_value, 2),
    )
