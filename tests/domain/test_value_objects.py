from decimal import Decimal

import pytest

from storeops.domain.exceptions import ValidationError
from storeops.domain.model.value_objects import Money, Quantity


class TestMoneyPrecision:

    def test_held_at_cents(self):
        assert Money(Decimal("10.5")).amount == Decimal("10.50")

    @pytest.mark.parametrize("raw, cents", [
        ("2.345", "2.35"),
        ("2.344", "2.34"),
        ("0.005", "0.01"),
    ])
    def test_half_up(self, raw, cents):
        assert Money(Decimal(raw)).amount == Decimal(cents)

    def test_price_times_quantity(self):
        assert Money.of("9.99") * 3 == Money.of("29.97")

    def test_total_matches_sum_of_lines(self):
        lines = [Money.of("9.99") * 3, Money.of("0.10") * 7, Money.of("19.95")]
        assert Money.total(lines) == Money.of("50.62")

    def test_total_of_nothing(self):
        assert Money.total([]) == Money.zero()
        assert str(Money.zero()) == "$0.00"


class TestMoneyParsing:

    @pytest.mark.parametrize("raw", ["25.99", 25.99, Decimal("25.99"), " 25.99 "])
    def test_accepted_inputs(self, raw):
        assert Money.of(raw).amount == Decimal("25.99")

    @pytest.mark.parametrize("raw", ["ten dollars", "", True])
    def test_garbage(self, raw):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of(raw)

    def test_not_a_number(self):
        with pytest.raises(ValidationError, match="finite"):
            Money.of("NaN")

    def test_negative(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money.of("-0.01")

    def test_negative_zero_is_zero(self):
        assert Money(Decimal("-0")) == Money.zero()

    def test_plain_int_is_not_money(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10)  # type: ignore[arg-type]

    def test_scaling_by_fraction(self):
        with pytest.raises(TypeError):
            Money.of("1") * 1.5  # type: ignore[operator]

    def test_display(self):
        assert str(Money.of("1250")) == "$1250.00"
        assert str(Money.of(".5")) == "$0.50"

    def test_ordering(self):
        assert sorted([Money.of("3"), Money.of("1")]) == [Money.of("1"), Money.of("3")]


class TestQuantity:

    def test_one_is_the_minimum(self):
        assert Quantity(1).value == 1
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_negative(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(-3)

    @pytest.mark.parametrize("raw", [True, 2.0, "2"])
    def test_must_be_int(self, raw):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(raw)
