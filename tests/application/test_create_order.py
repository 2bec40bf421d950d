"""CreateOrderHandler against fake repositories."""

import pytest

from storeops.application.create_order import CreateOrderHandler
from storeops.domain.exceptions import (
    BackendUnavailableError,
    ProductNotFoundError,
    ValidationError,
)
from storeops.domain.model.value_objects import Money
from storeops.domain.service.order_composer import ItemRequest
from tests.fakes import FakeOrderRepository, FakeProductRepository, make_product, run


def _setup(products=None):
    if products is None:
        products = [
            make_product(1, "Widget", price="9.99"),
            make_product(2, "Gadget", price="25.00"),
        ]
    order_repo = FakeOrderRepository()
    product_repo = FakeProductRepository(products)
    handler = CreateOrderHandler(order_repo, product_repo)
    return handler, order_repo, product_repo


class TestPricingAndNumbering:

    def test_total_from_unit_price_and_quantity(self):
        handler, _, _ = _setup()
        dto = run(handler.handle("Alice", "1 Main St", [ItemRequest(1, 3)]))
        assert dto.total == "$29.97"
        assert dto.items[0].subtotal == "$29.97"
        assert dto.status == "pending"
        assert dto.next_statuses == ["processing", "shipped", "delivered"]

    def test_assigns_id_and_order_number(self):
        handler, _, _ = _setup()
        dto = run(handler.handle("Alice", "1 Main St", [ItemRequest(1, 1)]))
        assert dto.id == 1
        assert dto.order_number == "ORD-0001"

    def test_persists_order(self):
        handler, order_repo, _ = _setup()
        dto = run(handler.handle("Alice", "1 Main St", [ItemRequest(2, 2)]))
        saved = run(order_repo.get_by_id(dto.id))
        assert saved.customer_address == "1 Main St"
        assert saved.total_amount == Money.of("50.00")

    def test_ids_and_numbers_increase(self):
        handler, _, _ = _setup()
        dto1 = run(handler.handle("Alice", "1 Main St", [ItemRequest(1, 1)]))
        dto2 = run(handler.handle("Bob", "2 Side St", [ItemRequest(2, 1)]))
        assert dto2.id == dto1.id + 1
        assert dto2.order_number == "ORD-0002"

    def test_does_not_consume_stock(self):
        handler, _, product_repo = _setup()
        run(handler.handle("Alice", "1 Main St", [ItemRequest(1, 5)]))
        assert run(product_repo.get_by_id(1)).stock == 50


class TestPriceSnapshot:

    def test_later_price_change_does_not_reprice(self):
        handler, order_repo, product_repo = _setup()
        dto = run(handler.handle("Alice", "1 Main St", [ItemRequest(1, 1)]))

        run(product_repo.update(1, {"price": Money.of("99.99")}))

        saved = run(order_repo.get_by_id(dto.id))
        assert str(saved.total_amount) == "$9.99"


class TestRejectedOrders:

    def test_unknown_product_rejected_and_nothing_stored(self):
        handler, order_repo, _ = _setup()
        with pytest.raises(ProductNotFoundError, match="Product with Id 7 not found"):
            run(handler.handle("Alice", "1 Main St", [ItemRequest(1, 1), ItemRequest(7, 1)]))
        assert run(order_repo.get_all()) == []

    def test_missing_address_rejected(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="address is required"):
            run(handler.handle("Alice", "", [ItemRequest(1, 1)]))

    def test_catalog_outage_is_reported_as_outage(self):
        handler, order_repo, product_repo = _setup()
        product_repo.unavailable = True
        with pytest.raises(BackendUnavailableError):
            run(handler.handle("Alice", "1 Main St", [ItemRequest(1, 1)]))
        assert run(order_repo.get_all()) == []

    def test_repeated_product_is_priced_on_every_line(self):
        handler, _, _ = _setup()
        dto = run(handler.handle("Alice", "1 Main St", [ItemRequest(1, 1), ItemRequest(1, 2)]))
        assert dto.total == "$29.97"
