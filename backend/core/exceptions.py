"""Errors raised by the inventory core.

None of them is fatal: the service layer turns them into results and the
HTTP layer into status codes.
"""


class InventoryError(Exception):
    """Base class for every inventory error."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(InventoryError):
    """A candidate payload broke one of the field rules."""


class DuplicateSkuError(InventoryError):
    def __init__(self, sku: str):
        super().__init__("SKU already exists. Use a different value.")
        self.sku = sku


class NotFoundError(InventoryError):
    """The target id is no longer in the collection (stale reference)."""

    def __init__(self, item_id: str):
        super().__init__(f"Item {item_id} not found")
        self.item_id = item_id


class PersistenceReadError(InventoryError):
    """Stored data could not be decoded."""

    def __init__(self, key: str, reason: str = ""):
        detail = f": {reason}" if reason else ""
        super().__init__(f"Could not read stored inventory '{key}'{detail}")
        self.key = key
