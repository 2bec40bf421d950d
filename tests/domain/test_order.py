"""Unit tests for the Order aggregate."""

import pytest

from storeops.domain.exceptions import ValidationError
from storeops.domain.model.order import OrderStatus, format_order_number
from storeops.domain.service.order_composer import ItemRequest, compose_order
from tests.fakes import make_product


class TestOrderNumber:

    def test_padded_to_four_digits(self):
        assert format_order_number(7) == "ORD-0007"

    def test_long_ids_are_not_truncated(self):
        assert format_order_number(12345) == "ORD-12345"

    def test_assign_id_sets_number(self):
        order = compose_order("Alice", "1 Main St", [ItemRequest(1, 1)], [make_product(1)])
        order.assign_id(7)
        assert order.id == 7
        assert order.order_number == "ORD-0007"

    def test_assign_id_only_once(self):
        order = compose_order("Alice", "1 Main St", [ItemRequest(1, 1)], [make_product(1)])
        order.assign_id(7)
        with pytest.raises(ValidationError, match="already has Id 7"):
            order.assign_id(8)
        assert order.order_number == "ORD-0007"


class TestOrderStatusParse:

    def test_parses_case_insensitively(self):
        assert OrderStatus.parse("Shipped") is OrderStatus.SHIPPED

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError, match="Unknown order status"):
            OrderStatus.parse("lost")
