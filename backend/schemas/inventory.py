from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt


InventoryStatus = Literal["all", "ok", "low"]
InventoryActionKind = Literal["edit", "delete", "increase", "decrease"]

# Raw form values: validated by the core, not here
RawNumber = Optional[Union[StrictInt, StrictFloat, StrictBool, str]]


class InventoryItemIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    sku: Optional[str] = None
    category: Optional[str] = None
    quantity: RawNumber = None
    min_stock: RawNumber = Field(default=None, alias="minStock")
    price: RawNumber = None


class InventoryItemOut(BaseModel):
    id: str
    name: str
    sku: str
    category: str
    quantity: int
    min_stock: int
    price: float
    created_at: int
    updated_at: int
    status: Literal["ok", "low"]
    total_value: float

    class Config:
        from_attributes = True


class InventoryAdjustRequest(BaseModel):
    delta: int


class InventoryActionRequest(BaseModel):
    kind: InventoryActionKind
    id: str
    confirmed: bool = False


class InventoryActionOut(BaseModel):
    ok: bool
    item: Optional[InventoryItemOut] = None
    error: str = ""
    hint: str = ""
    reason: str = ""


class InventorySummaryOut(BaseModel):
    count: int
    total_units: int
    low_stock_count: int
    total_value: float
    feedback: str

    class Config:
        from_attributes = True


class InventoryViewOut(BaseModel):
    items: List[InventoryItemOut]
    summary: InventorySummaryOut
    empty_message: str = ""
