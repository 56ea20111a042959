"""Entry points the presentation layer calls with raw, unvalidated input.

Validation and duplicate-SKU failures come back as ``MutationResult.error``
rather than as exceptions, next to a separate informational ``hint``.
Stale ids (the item vanished since the view was rendered) are silent no-ops.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional

import structlog

from core.aggregator import InventorySummary, summarize
from core.exceptions import DuplicateSkuError, NotFoundError
from core.models import InventoryItem, ItemPayload
from core.query import InventoryFilter, query
from core.repository import InventoryRepository
from core.validator import validate

logger = structlog.get_logger(__name__)


class ActionKind(str, Enum):
    EDIT = "edit"
    DELETE = "delete"
    INCREASE = "increase"
    DECREASE = "decrease"


@dataclass(frozen=True)
class InventoryAction:
    kind: ActionKind
    id: str


@dataclass(frozen=True)
class MutationResult:
    ok: bool
    item: Optional[InventoryItem] = None
    error: str = ""
    hint: str = ""
    # why a mutation did not happen: validation, duplicate_sku, not_found,
    # unconfirmed or rejected
    reason: str = ""


@dataclass(frozen=True)
class InventoryView:
    items: List[InventoryItem] = field(default_factory=list)
    summary: InventorySummary = field(default_factory=InventorySummary)
    empty_message: str = ""


class InventoryService:
    def __init__(self, repository: InventoryRepository):
        self.repository = repository

    def submit(self, raw: Mapping[str, Any], editing_id: Optional[str] = None) -> MutationResult:
        """Create a new item, or update ``editing_id`` when one is given."""
        payload = ItemPayload.from_input(raw)
        error = validate(payload)
        if error:
            return MutationResult(ok=False, error=error, reason="validation")

        try:
            if editing_id:
                item = self.repository.update(editing_id, payload)
                return MutationResult(ok=True, item=item, hint="Product updated.")
            item = self.repository.create(payload)
            return MutationResult(ok=True, item=item, hint="Product registered.")
        except DuplicateSkuError as e:
            return MutationResult(ok=False, error=e.message, reason="duplicate_sku")
        except NotFoundError:
            logger.debug("inventory.submit.stale", item_id=editing_id)
            return MutationResult(ok=False, reason="not_found")

    def confirmation_message(self, item_id: str) -> Optional[str]:
        """Question to put to the user before removing, or ``None`` if nothing to remove."""
        item = self.repository.find(item_id)
        if item is None:
            return None
        return f'"{item.name}" will be deleted. Continue?'

    def remove(self, item_id: str, confirmed: bool) -> MutationResult:
        if not confirmed:
            return MutationResult(ok=False, reason="unconfirmed")
        item = self.repository.remove(item_id)
        if item is None:
            return MutationResult(ok=False, reason="not_found")
        return MutationResult(ok=True, item=item, hint=f'Product "{item.name}" deleted.')

    def adjust(self, item_id: str, delta: int) -> MutationResult:
        try:
            item = self.repository.adjust_quantity(item_id, delta)
        except NotFoundError:
            return MutationResult(ok=False, reason="not_found")
        if item is None:
            return MutationResult(ok=False, item=self.repository.find(item_id), reason="rejected")
        return MutationResult(ok=True, item=item)

    def dispatch(self, action: InventoryAction, confirmed: bool = False) -> MutationResult:
        """Run a row action decoded at the presentation boundary."""
        if action.kind == ActionKind.EDIT:
            item = self.repository.find(action.id)
            if item is None:
                return MutationResult(ok=False, reason="not_found")
            return MutationResult(ok=True, item=item, hint="Edit mode active.")
        if action.kind == ActionKind.DELETE:
            return self.remove(action.id, confirmed)
        if action.kind == ActionKind.INCREASE:
            return self.adjust(action.id, 1)
        return self.adjust(action.id, -1)

    def view(self, filters: InventoryFilter = InventoryFilter()) -> InventoryView:
        snapshot = self.repository.items
        visible = query(snapshot, filters)
        empty_message = ""
        if not visible:
            empty_message = (
                "No products registered yet." if not snapshot else "No results for the current filter."
            )
        return InventoryView(items=visible, summary=summarize(snapshot), empty_message=empty_message)
