"""Tests for the presentation-facing entry points."""

from core.models import Status
from core.query import InventoryFilter
from core.service import ActionKind, InventoryAction
from core.validator import NUMERIC_MESSAGE, REQUIRED_MESSAGE


def _raw(**overrides):
    raw = {
        "name": "Widget",
        "sku": "wd-1",
        "category": "Tools",
        "quantity": "5",
        "minStock": "10",
        "price": "9.999",
    }
    raw.update(overrides)
    return raw


class TestSubmit:
    def test_create(self, service):
        result = service.submit(_raw())
        assert result.ok
        assert result.hint == "Product registered."
        assert result.item.sku == "WD-1"
        assert result.item.price == 10.0
        assert result.item.status == Status.LOW

    def test_validation_error_is_a_result(self, service):
        result = service.submit(_raw(name="  "))
        assert not result.ok
        assert result.error == REQUIRED_MESSAGE
        assert result.reason == "validation"
        assert result.hint == ""
        assert len(service.repository) == 0

    def test_huge_price_is_accepted(self, service):
        result = service.submit(_raw(price=1e26))
        assert result.ok
        assert result.item.price == 1e26

    def test_out_of_range_integer_is_not_numeric(self, service):
        result = service.submit(_raw(quantity=10**400))
        assert result.reason == "validation"
        assert result.error == NUMERIC_MESSAGE

    def test_duplicate_sku_is_a_result(self, service):
        service.submit(_raw(sku="A-1"))
        result = service.submit(_raw(sku="a-1"))
        assert not result.ok
        assert result.reason == "duplicate_sku"
        assert result.error == "SKU already exists. Use a different value."
        assert len(service.repository) == 1

    def test_update(self, service):
        item = service.submit(_raw()).item
        result = service.submit(_raw(name="Gadget"), editing_id=item.id)
        assert result.ok
        assert result.hint == "Product updated."
        assert service.repository.get(item.id).name == "Gadget"

    def test_update_of_vanished_item_is_silent(self, service):
        result = service.submit(_raw(), editing_id="gone")
        assert not result.ok
        assert result.error == ""
        assert result.reason == "not_found"
        assert len(service.repository) == 0


class TestRemove:
    def test_confirmation_message(self, service):
        item = service.submit(_raw()).item
        assert service.confirmation_message(item.id) == '"Widget" will be deleted. Continue?'
        assert service.confirmation_message("missing") is None

    def test_remove_requires_confirmation(self, service):
        item = service.submit(_raw()).item
        result = service.remove(item.id, confirmed=False)
        assert not result.ok
        assert result.reason == "unconfirmed"
        assert item.id in service.repository

    def test_confirmed_remove(self, service):
        item = service.submit(_raw()).item
        result = service.remove(item.id, confirmed=True)
        assert result.ok
        assert result.hint == 'Product "Widget" deleted.'
        assert item.id not in service.repository

    def test_remove_unknown_is_silent(self, service):
        result = service.remove("missing", confirmed=True)
        assert not result.ok
        assert result.error == ""


class TestDispatch:
    def test_increase_and_decrease(self, service):
        item = service.submit(_raw(quantity="1")).item
        assert service.dispatch(InventoryAction(ActionKind.INCREASE, item.id)).item.quantity == 2
        assert service.dispatch(InventoryAction(ActionKind.DECREASE, item.id)).item.quantity == 1
        assert service.dispatch(InventoryAction(ActionKind.DECREASE, item.id)).item.quantity == 0

    def test_decrease_at_zero_is_rejected(self, service):
        item = service.submit(_raw(quantity="0")).item
        result = service.dispatch(InventoryAction(ActionKind.DECREASE, item.id))
        assert not result.ok
        assert result.reason == "rejected"
        assert result.item.quantity == 0

    def test_edit_does_not_mutate(self, service):
        item = service.submit(_raw()).item
        result = service.dispatch(InventoryAction(ActionKind.EDIT, item.id))
        assert result.ok
        assert result.item == item
        assert result.hint == "Edit mode active."

    def test_delete_needs_confirmation(self, service):
        item = service.submit(_raw()).item
        assert not service.dispatch(InventoryAction(ActionKind.DELETE, item.id)).ok
        assert service.dispatch(InventoryAction(ActionKind.DELETE, item.id), confirmed=True).ok
        assert len(service.repository) == 0

    def test_unknown_id(self, service):
        for kind in ActionKind:
            assert service.dispatch(InventoryAction(kind, "missing"), confirmed=True).reason == "not_found"


class TestView:
    def test_empty_catalog(self, service):
        view = service.view()
        assert view.items == []
        assert view.empty_message == "No products registered yet."
        assert view.summary.count == 0

    def test_no_matches(self, service):
        service.submit(_raw())
        view = service.view(InventoryFilter(search="nothing"))
        assert view.items == []
        assert view.empty_message == "No results for the current filter."
        assert view.summary.count == 1

    def test_filtered_items_with_full_summary(self, service):
        service.submit(_raw(name="Widget", sku="w", quantity="5", minStock="10"))
        service.submit(_raw(name="Anvil", sku="a", quantity="20", minStock="1", price="2"))
        view = service.view(InventoryFilter(status=Status.OK))
        assert [item.name for item in view.items] == ["Anvil"]
        assert view.empty_message == ""
        assert view.summary.count == 2
        assert view.summary.low_stock_count == 1
        assert view.summary.total_units == 25
        assert view.summary.total_value == 90.0
