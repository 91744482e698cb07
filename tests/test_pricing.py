"""
Order total calculator tests
"""

import pytest

from viandas.domain.services.pricing import (
    OrderTotals,
    PriceTable,
    calculate_order_total,
    coerce_amount,
    parse_amount,
)
from viandas.domain.value_objects.order_type import OrderType

PRICES = PriceTable(single=9800, pack5=49000, pack10=92000, delivery=3300)


class TestFixedPriceOrders:
    """Bundle prices come from the table"""

    @pytest.mark.parametrize(
        "order_type,price",
        [(OrderType.SINGLE, 9800), (OrderType.PACK5, 49000), (OrderType.PACK10, 92000)],
    )
    @pytest.mark.parametrize("delivery", [True, False])
    def test_total_is_table_price_plus_optional_delivery(self, order_type, price, delivery):
        totals = calculate_order_total(order_type, delivery, PRICES)

        assert totals.subtotal == price
        assert totals.delivery_fee == (3300 if delivery else 0)
        assert totals.total == price + (3300 if delivery else 0)

    def test_manual_price_is_ignored_for_bundles(self):
        totals = calculate_order_total(OrderType.PACK5, False, PRICES, manual_subtotal=1)
        assert totals.subtotal == 49000

    def test_accepts_plain_string_type(self):
        assert calculate_order_total("single", False, PRICES).total == 9800


class TestManualPriceOrders:
    """'other' orders use the amount typed by staff"""

    def test_manual_subtotal_with_delivery(self):
        prices = PriceTable(single=9000, pack5=42000, pack10=82000, delivery=3500)
        totals = calculate_order_total(OrderType.OTHER, True, prices, manual_subtotal=15000)
        assert totals == OrderTotals(subtotal=15000, delivery_fee=3500, total=18500)

    @pytest.mark.parametrize("raw", [None, "", "abc", -50, float("nan"), float("inf"), True])
    def test_malformed_amount_degrades_to_zero(self, raw):
        totals = calculate_order_total(OrderType.OTHER, False, PRICES, manual_subtotal=raw)
        assert totals.subtotal == 0
        assert totals.total == 0

    def test_comma_decimal_string(self):
        totals = calculate_order_total(OrderType.OTHER, False, PRICES, manual_subtotal="1500,5")
        assert totals.subtotal == 1500.5


class TestAmountParsing:
    def test_parse_amount(self):
        assert parse_amount("  12.5 ") == 12.5
        assert parse_amount(7) == 7.0
        assert parse_amount("-3") == -3.0
        assert parse_amount("x") is None
        assert parse_amount([1]) is None

    def test_coerce_amount_never_negative(self):
        assert coerce_amount("-3") == 0.0
        assert coerce_amount("3") == 3.0


def test_price_table_has_no_price_for_other():
    with pytest.raises(KeyError):
        PRICES.price_for(OrderType.OTHER)
