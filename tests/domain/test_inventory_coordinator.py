"""Unit tests for the InventoryCoordinator domain service."""

import pytest

from storeops.domain.exceptions import (
    BackendUnavailableError,
    PartialApplyError,
    ProductNotFoundError,
    ValidationError,
)
from storeops.domain.model.stock_adjustment import AdjustmentReason
from storeops.domain.service.inventory_coordinator import InventoryCoordinator
from storeops.domain.service.stock_ledger import StockLevel
from tests.fakes import (
    FakeProductRepository,
    FakeStockAdjustmentRepository,
    make_product,
    run,
)


def _setup(stock: int = 50, threshold: int = 10):
    products = FakeProductRepository([make_product(1, "Widget", stock=stock, threshold=threshold)])
    adjustments = FakeStockAdjustmentRepository()
    return InventoryCoordinator(products, adjustments), products, adjustments


class TestApplyAdjustment:

    def test_damage_brings_stock_low(self):
        coordinator, products, adjustments = _setup(stock=50, threshold=10)

        result = run(coordinator.apply_adjustment(1, -45, "damage"))

        assert result.product.stock == 5
        assert result.previous_stock == 50
        assert result.stock_level is StockLevel.LOW
        assert run(products.get_by_id(1)).stock == 5

        recorded = run(adjustments.get_all())
        assert len(recorded) == 1
        assert recorded[0].quantity == -45
        assert recorded[0].reason is AdjustmentReason.DAMAGE
        assert recorded[0].product_id == 1

    def test_restock_increases_stock(self):
        coordinator, products, _ = _setup(stock=5)
        result = run(coordinator.apply_adjustment(1, 20, AdjustmentReason.RESTOCK))
        assert result.product.stock == 25
        assert not result.stock_went_negative

    def test_stock_may_go_negative(self):
        coordinator, products, _ = _setup(stock=3)
        result = run(coordinator.apply_adjustment(1, -5, "correction"))
        assert result.product.stock == -2
        assert result.stock_went_negative
        assert run(products.get_by_id(1)).stock == -2

    def test_returned_product_has_refreshed_updated_at(self):
        coordinator, products, _ = _setup()
        before = run(products.get_by_id(1)).updated_at
        result = run(coordinator.apply_adjustment(1, 1, "return"))
        assert result.product.updated_at > before


class TestApplyAdjustmentValidation:

    def test_zero_quantity_rejected_without_side_effects(self):
        coordinator, products, adjustments = _setup()
        with pytest.raises(ValidationError, match="cannot be zero"):
            run(coordinator.apply_adjustment(1, 0, "restock"))
        assert adjustments.create_calls == 0
        assert products.update_calls == 0
        assert run(products.get_by_id(1)).stock == 50

    def test_unknown_reason_rejected_without_side_effects(self):
        coordinator, products, adjustments = _setup()
        with pytest.raises(ValidationError, match="Unknown adjustment reason"):
            run(coordinator.apply_adjustment(1, 5, "misplaced"))
        assert adjustments.create_calls == 0
        assert products.update_calls == 0

    def test_unknown_product_rejected_without_side_effects(self):
        coordinator, products, adjustments = _setup()
        with pytest.raises(ProductNotFoundError):
            run(coordinator.apply_adjustment(42, 5, "restock"))
        assert adjustments.create_calls == 0

    def test_backend_down_before_any_write_propagates(self):
        coordinator, products, adjustments = _setup()
        products.unavailable = True
        with pytest.raises(BackendUnavailableError):
            run(coordinator.apply_adjustment(1, 5, "restock"))
        assert adjustments.create_calls == 0


class TestPartialApply:

    def test_failed_stock_write_reports_orphaned_adjustment(self):
        coordinator, products, adjustments = _setup(stock=50)
        products.fail_updates = 1

        with pytest.raises(PartialApplyError) as excinfo:
            run(coordinator.apply_adjustment(1, -10, "theft"))

        err = excinfo.value
        recorded = run(adjustments.get_all())
        assert len(recorded) == 1
        assert err.adjustment_id == recorded[0].id
        assert err.product_id == 1
        assert err.delta == -10
        assert isinstance(err.cause, BackendUnavailableError)
        assert run(products.get_by_id(1)).stock == 50

    def test_retry_applies_stock_without_new_adjustment(self):
        coordinator, products, adjustments = _setup(stock=50)
        products.fail_updates = 1
        with pytest.raises(PartialApplyError) as excinfo:
            run(coordinator.apply_adjustment(1, -10, "theft"))

        result = run(coordinator.retry_stock_write(excinfo.value))

        assert result.product.stock == 40
        assert result.adjustment.id == excinfo.value.adjustment_id
        assert adjustments.create_calls == 1
        assert len(run(adjustments.get_all())) == 1

    def test_retry_failing_again_keeps_same_adjustment(self):
        coordinator, products, adjustments = _setup(stock=50)
        products.fail_updates = 2
        with pytest.raises(PartialApplyError) as first:
            run(coordinator.apply_adjustment(1, 7, "restock"))
        with pytest.raises(PartialApplyError) as second:
            run(coordinator.retry_stock_write(first.value))
        assert second.value.adjustment_id == first.value.adjustment_id
        assert adjustments.create_calls == 1

    def test_retry_with_mismatched_error_rejected(self):
        coordinator, products, adjustments = _setup(stock=50)
        products.fail_updates = 1
        with pytest.raises(PartialApplyError) as excinfo:
            run(coordinator.apply_adjustment(1, 7, "restock"))
        bogus = PartialApplyError(excinfo.value.adjustment_id, product_id=1, delta=70)
        with pytest.raises(ValidationError, match="does not match"):
            run(coordinator.retry_stock_write(bogus))
        assert run(products.get_by_id(1)).stock == 50

    def test_second_retry_of_same_error_rejected(self):
        coordinator, products, adjustments = _setup(stock=50)
        products.fail_updates = 1
        with pytest.raises(PartialApplyError) as excinfo:
            run(coordinator.apply_adjustment(1, -10, "theft"))

        run(coordinator.retry_stock_write(excinfo.value))
        with pytest.raises(ValidationError, match="already applied"):
            run(coordinator.retry_stock_write(excinfo.value))

        assert run(products.get_by_id(1)).stock == 40

    def test_retry_of_fully_applied_adjustment_rejected(self):
        coordinator, products, adjustments = _setup(stock=50)
        result = run(coordinator.apply_adjustment(1, 5, "restock"))
        err = PartialApplyError(result.adjustment.id, product_id=1, delta=5)

        with pytest.raises(ValidationError, match="already applied"):
            run(coordinator.retry_stock_write(err))
        assert run(products.get_by_id(1)).stock == 55


class TestAppliedMarker:

    def test_set_after_stock_write(self):
        coordinator, _, adjustments = _setup()
        result = run(coordinator.apply_adjustment(1, 5, "restock"))
        assert result.adjustment.stock_applied
        assert run(adjustments.get_by_id(result.adjustment.id)).stock_applied

    def test_left_unset_when_stock_write_fails(self):
        coordinator, products, adjustments = _setup()
        products.fail_updates = 1
        with pytest.raises(PartialApplyError) as excinfo:
            run(coordinator.apply_adjustment(1, 5, "restock"))
        assert not run(adjustments.get_by_id(excinfo.value.adjustment_id)).stock_applied

    def test_marker_failure_keeps_stock_result(self, caplog):
        coordinator, products, adjustments = _setup(stock=50)
        adjustments.fail_marks = 1

        result = run(coordinator.apply_adjustment(1, 5, "restock"))

        assert result.product.stock == 55
        assert not result.adjustment.stock_applied
        assert "still marked pending" in caplog.text


class TestAdjustmentHistory:

    def test_newest_first_for_one_product(self):
        products = FakeProductRepository([make_product(1), make_product(2, "Gadget")])
        adjustments = FakeStockAdjustmentRepository()
        coordinator = InventoryCoordinator(products, adjustments)

        run(coordinator.apply_adjustment(1, 5, "restock"))
        run(coordinator.apply_adjustment(2, 3, "restock"))
        run(coordinator.apply_adjustment(1, -2, "damage"))

        history = run(coordinator.adjustment_history(1))
        assert [a.quantity for a in history] == [-2, 5]
