"""Tests for the InventoryLedger domain service.

Covers the stock and price flows end to end against in-memory fakes:
validation before I/O, NoOp detection, write-then-log ordering and
idempotent history appends.
"""

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from ims.domain.exceptions import (
    ConcurrentModificationError,
    EntityNotFoundError,
    InsufficientStockError,
    StoreError,
    ValidationError,
)
from ims.domain.model.change_record import ChangeType, HistoryStream, StockChange
from ims.domain.model.value_objects import Money
from ims.domain.service.inventory_ledger import Applied, InventoryLedger, NoOp
from tests.fakes import (
    FakeChangeLogRepository,
    FakeProductRepository,
    FixedClock,
    make_product,
)


def _setup(
    quantity: int = 10, price: str = "250.00"
) -> tuple[InventoryLedger, FakeProductRepository, FakeChangeLogRepository, FixedClock]:
    products = FakeProductRepository([
        make_product(variations=[
            ("Red Shirt", "RS-01", price, quantity),
            ("Blue Shirt", "BS-01", "260.00", 4),
        ])
    ])
    changes = FakeChangeLogRepository()
    clock = FixedClock()
    return InventoryLedger(products, changes, clock=clock), products, changes, clock


class TestApplyQuantityChange:

    def test_decrease_is_sold_and_logged(self):
        ledger, products, changes, clock = _setup()

        result = ledger.apply_quantity_change("P1", "RS-01", "7", actor="Alice")

        assert result == Applied(10, 7, ChangeType.SOLD, result.record_key)
        assert products.quantity_of("P1", "RS-01") == 7
        [record] = changes.all()
        assert record.previous_stock == 10
        assert record.current_stock == 7
        assert record.quantity_changed == 3
        assert record.change_type == ChangeType.SOLD
        assert record.first_name == "Alice"
        assert record.product_name == "Red Shirt"
        assert record.change_date == clock.now

    def test_increase_is_added(self):
        ledger, products, changes, _ = _setup()

        result = ledger.apply_quantity_change("P1", "RS-01", 15, actor="Alice")

        assert isinstance(result, Applied)
        assert result.change_type == ChangeType.ADDED
        assert products.quantity_of("P1", "RS-01") == 15
        assert changes.all()[0].quantity_changed == 5

    def test_same_quantity_is_noop(self):
        ledger, products, changes, _ = _setup()

        result = ledger.apply_quantity_change("P1", "RS-01", "10", actor="Bob")

        assert result == NoOp(current=10)
        assert products.quantity_writes == []
        assert changes.append_attempts == 0

    def test_drop_to_zero(self):
        ledger, products, _, _ = _setup()
        ledger.apply_quantity_change("P1", "RS-01", 0)
        assert products.quantity_of("P1", "RS-01") == 0

    def test_missing_actor_is_unknown(self):
        ledger, _, changes, _ = _setup()
        ledger.apply_quantity_change("P1", "RS-01", 8)
        assert changes.all()[0].first_name == "Unknown"

    def test_only_target_variation_changes(self):
        ledger, products, _, _ = _setup()
        ledger.apply_quantity_change("P1", "RS-01", 3)
        assert products.quantity_of("P1", "BS-01") == 4

    @pytest.mark.parametrize("raw", ["abc", "-5", "2.5", "", -1, None, True])
    def test_invalid_input_touches_nothing(self, raw):
        ledger, products, changes, _ = _setup()

        with pytest.raises(ValidationError, match="invalid quantity"):
            ledger.apply_quantity_change("P1", "RS-01", raw)

        assert products.quantity_of("P1", "RS-01") == 10
        assert products.quantity_writes == []
        assert changes.append_attempts == 0

    def test_unknown_product(self):
        ledger, _, changes, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="P9"):
            ledger.apply_quantity_change("P9", "RS-01", 5)
        assert changes.append_attempts == 0

    def test_unknown_variation(self):
        ledger, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="XX-99"):
            ledger.apply_quantity_change("P1", "XX-99", 5)

    def test_failed_write_leaves_no_history(self):
        ledger, products, changes, _ = _setup()
        products.failing_variations.add("P1-RS-01")

        with pytest.raises(StoreError):
            ledger.apply_quantity_change("P1", "RS-01", 4)

        assert products.quantity_of("P1", "RS-01") == 10
        assert changes.all() == []

    def test_failed_append_restores_quantity(self):
        ledger, products, changes, _ = _setup()
        changes.failing_attempts.add(1)

        with pytest.raises(StoreError, match="append"):
            ledger.apply_quantity_change("P1", "RS-01", 7, actor="Alice")

        assert products.quantity_of("P1", "RS-01") == 10
        assert products.quantity_writes == [("P1", "P1-RS-01", 7), ("P1", "P1-RS-01", 10)]
        assert changes.all() == []

    def test_stale_read_is_rejected(self, monkeypatch):
        ledger, products, changes, _ = _setup()
        real_get = products.get_by_id

        def get_then_race(product_id):
            product = real_get(product_id)
            # another writer lands between our read and our write
            products.set_variation_quantity("P1", "P1-RS-01", 10, 9)
            return product

        monkeypatch.setattr(products, "get_by_id", get_then_race)

        with pytest.raises(ConcurrentModificationError):
            ledger.apply_quantity_change("P1", "RS-01", 7)

        assert products.quantity_of("P1", "RS-01") == 9
        assert changes.all() == []

    def test_identical_resubmission_is_logged_once(self, caplog):
        ledger, products, changes, _ = _setup()
        first = ledger.apply_quantity_change("P1", "RS-01", 7, actor="Alice")
        # restore the level without going through the ledger
        products.set_variation_quantity("P1", "P1-RS-01", 7, 10)

        with caplog.at_level(logging.WARNING, logger="ims"):
            second = ledger.apply_quantity_change("P1", "RS-01", 7, actor="Alice")

        assert second.record_key == first.record_key
        assert first.logged is True
        assert second.logged is False
        assert len(changes.all()) == 1
        assert "change_duplicate_suppressed" in caplog.messages

    def test_changes_at_different_times_are_both_logged(self):
        ledger, _, changes, clock = _setup()
        ledger.apply_quantity_change("P1", "RS-01", 7)
        clock.advance()
        ledger.apply_quantity_change("P1", "RS-01", 10)
        assert [r.change_type for r in changes.all()] == [ChangeType.SOLD, ChangeType.ADDED]

    def test_applied_event_is_logged(self, caplog):
        ledger, _, _, _ = _setup()
        with caplog.at_level(logging.INFO, logger="ims"):
            ledger.apply_quantity_change("P1", "RS-01", 7, actor="Alice")
        [record] = [r for r in caplog.records if r.message == "stock_change_applied"]
        assert record.previous == 10
        assert record.current == 7
        assert record.actor == "Alice"


class TestApplyStockDelta:

    def test_sells_relative_to_stored_value(self):
        ledger, products, changes, _ = _setup()
        ledger.apply_stock_delta("P1", "RS-01", -3, ChangeType.SOLD, actor="Alice")
        assert products.quantity_of("P1", "RS-01") == 7
        assert changes.all()[0].change_type == ChangeType.SOLD

    def test_cannot_go_below_zero(self):
        ledger, products, changes, _ = _setup(quantity=2)
        with pytest.raises(InsufficientStockError) as exc_info:
            ledger.apply_stock_delta("P1", "RS-01", -3, ChangeType.SOLD)
        assert exc_info.value.requested == 3
        assert exc_info.value.available == 2
        assert products.quantity_writes == []
        assert changes.all() == []


class TestApplyPriceChange:

    def test_revision_is_logged(self):
        ledger, products, changes, _ = _setup()

        result = ledger.apply_price_change("P1", "RS-01", "199.50", actor="Alice")

        assert isinstance(result, Applied)
        assert result.previous == Decimal("250.00")
        assert result.new == Decimal("199.50")
        assert products.get_by_id("P1").find_variation("RS-01").price == Money.of("199.50")
        [record] = changes.all(HistoryStream.PRICE)
        assert record.change_type == ChangeType.PRICE_REVISION
        assert record.previous_price == Decimal("250.00")
        assert record.current_price == Decimal("199.50")
        assert record.first_name == "Alice"

    def test_price_history_is_separate_from_stock(self):
        ledger, _, changes, _ = _setup()
        ledger.apply_price_change("P1", "RS-01", "100")
        assert changes.all(HistoryStream.STOCK) == []

    def test_equal_price_is_noop(self):
        ledger, products, changes, _ = _setup()

        result = ledger.apply_price_change("P1", "RS-01", "250")

        assert result == NoOp(current=Decimal("250.00"))
        assert products.price_writes == []
        assert changes.append_attempts == 0

    @pytest.mark.parametrize("raw", ["abc", "-1", "", None])
    def test_invalid_price_touches_nothing(self, raw):
        ledger, products, changes, _ = _setup()

        with pytest.raises(ValidationError):
            ledger.apply_price_change("P1", "RS-01", raw)

        assert products.price_writes == []
        assert changes.append_attempts == 0

    def test_unknown_product(self):
        ledger, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            ledger.apply_price_change("P9", "RS-01", "10")

    def test_failed_write_leaves_no_history(self):
        ledger, products, changes, _ = _setup()
        products.failing_variations.add("P1-RS-01")
        with pytest.raises(StoreError):
            ledger.apply_price_change("P1", "RS-01", "10")
        assert changes.all(HistoryStream.PRICE) == []


    def test_failed_append_restores_price(self):
        ledger, products, changes, _ = _setup()
        changes.failing_attempts.add(1)

        with pytest.raises(StoreError):
            ledger.apply_price_change("P1", "RS-01", "10")

        assert products.get_by_id("P1").find_variation("RS-01").price == Money.of("250.00")
        assert changes.all(HistoryStream.PRICE) == []


class TestRecordKey:

    def _change(self, when):
        return StockChange("P1", "RS-01", "Red Shirt", 10, 7, ChangeType.SOLD, when)

    def test_same_content_same_key(self):
        when = datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc)
        assert self._change(when).record_key == self._change(when).record_key

    def test_keys_differ_by_a_microsecond(self):
        when = datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc)
        later = when + timedelta(microseconds=1)
        assert self._change(when).record_key != self._change(later).record_key


class TestListHistory:

    def test_filters_by_product(self):
        products = FakeProductRepository([
            make_product("P1"),
            make_product("P2", variations=[("Mug", "MG-01", "80", 5)]),
        ])
        changes = FakeChangeLogRepository()
        ledger = InventoryLedger(products, changes, clock=FixedClock())
        ledger.apply_quantity_change("P1", "RS-01", 9)
        ledger.apply_quantity_change("P2", "MG-01", 6)

        view = ledger.list_history(HistoryStream.STOCK, "P2")

        assert [r.variation_code for r in view] == ["MG-01"]
        assert len(list(ledger.list_history(HistoryStream.STOCK))) == 2

    def test_view_is_reiterable_and_live(self):
        ledger, _, _, clock = _setup()
        view = ledger.list_history(HistoryStream.STOCK)
        assert list(view) == []

        ledger.apply_quantity_change("P1", "RS-01", 9)
        clock.advance()
        ledger.apply_quantity_change("P1", "RS-01", 8)

        assert len(list(view)) == 2
        assert [r.current_stock for r in view] == [9, 8]
