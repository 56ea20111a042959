from dataclasses import dataclass
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.converters import normalize_text, to_number


LIMITS = {
    "name": 80,
    "sku": 30,
    "category": 40,
}


class Status:
    ALL = "all"
    OK = "ok"
    LOW = "low"


class InventoryItem(BaseModel):
    """One stored catalog record.

    Instances are frozen: the repository replaces them instead of mutating,
    so snapshots handed to readers never change underneath them. Aliases are
    the camelCase keys used in the persisted blob.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str = Field(min_length=1, max_length=LIMITS["name"])
    sku: str = Field(min_length=1, max_length=LIMITS["sku"])
    category: str = Field(min_length=1, max_length=LIMITS["category"])
    quantity: int = Field(ge=0)
    min_stock: int = Field(ge=0, alias="minStock")
    price: float = Field(ge=0)
    created_at: int = Field(alias="createdAt")
    updated_at: int = Field(alias="updatedAt")

    @model_validator(mode="after")
    def _timestamps_ordered(self):
        if self.updated_at < self.created_at:
            raise ValueError("updatedAt cannot be earlier than createdAt")
        return self

    @property
    def status(self) -> str:
        return Status.LOW if self.quantity <= self.min_stock else Status.OK

    @property
    def total_value(self) -> float:
        return self.quantity * self.price

    def to_record(self) -> Dict[str, Any]:
        """Persisted shape: primitive values under camelCase keys."""
        return self.model_dump(by_alias=True)


@dataclass(frozen=True)
class ItemPayload:
    """Normalized candidate record, as submitted from a form or API call.

    Numeric fields may be NaN; it is the validator's job to reject them.
    """

    name: str
    sku: str
    category: str
    quantity: float
    min_stock: float
    price: float

    @classmethod
    def from_input(cls, raw: Mapping[str, Any]) -> "ItemPayload":
        def pick(*keys):
            for key in keys:
                if key in raw:
                    return raw[key]
            return None

        return cls(
            name=normalize_text(pick("name")),
            sku=normalize_text(pick("sku")).upper(),
            category=normalize_text(pick("category")),
            quantity=to_number(pick("quantity")),
            min_stock=to_number(pick("min_stock", "minStock")),
            price=to_number(pick("price")),
        )
