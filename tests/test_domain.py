"""
Domain entity and value object tests
"""

import ast
from datetime import timedelta
from pathlib import Path

import pytest

import viandas.domain
from viandas.domain.entities.customer_entity import Customer
from viandas.domain.entities.meal_entity import Meal
from viandas.domain.entities.order_entity import Order, OrderLineItem
from viandas.domain.entities.profile_entity import Profile, Role
from viandas.domain.repositories.errors import RepositoryError
from viandas.domain.value_objects.customer_name import CustomerName
from viandas.domain.value_objects.order_type import OrderStatus, OrderType
from viandas.infrastructure.utilities.exceptions import StoreOperationError


class TestCustomerName:
    def test_whitespace_is_collapsed(self):
        name = CustomerName("  María   José  Ruiz ")
        assert name.value == "María José Ruiz"
        assert str(name) == "María José Ruiz"

    @pytest.mark.parametrize("raw", ["", "   ", None, "x" * 101])
    def test_invalid(self, raw):
        with pytest.raises(ValueError):
            CustomerName(raw)

    def test_limit_is_inclusive(self):
        assert len(CustomerName("x" * 100).value) == 100


class TestOrderType:
    def test_packs(self):
        assert OrderType.PACK5.is_pack and OrderType.PACK10.is_pack
        assert not OrderType.SINGLE.is_pack
        assert not OrderType.OTHER.is_pack
        assert not OrderType.OTHER.has_fixed_price

    def test_status_moves_forward_only(self):
        assert OrderStatus.PENDING.can_transition_to(OrderStatus.PAID)
        assert OrderStatus.PENDING.can_transition_to("delivered")
        assert OrderStatus.PAID.can_transition_to(OrderStatus.DELIVERED)
        assert not OrderStatus.PAID.can_transition_to(OrderStatus.PENDING)
        assert not any(OrderStatus.DELIVERED.can_transition_to(s) for s in OrderStatus)


class TestCustomer:
    def test_record_order(self, now):
        customer = Customer(id="c1", full_name="Ana")
        assert not customer.has_ordered()

        customer.record_order(9800, now - timedelta(days=3))
        customer.record_order(49000, now)

        assert customer.orders_count == 2
        assert customer.total_spent == 58800
        assert customer.last_order_at == now
        assert customer.is_repeat_buyer()

    def test_matches_name_or_phone(self):
        customer = Customer(id="c1", full_name="Ana Ruiz", phone="1122223333")
        assert customer.matches("ruiz")
        assert customer.matches("2222")
        assert not customer.matches("pedro")


class TestOrder:
    def test_matches_and_pack(self):
        order = Order(
            id="o1",
            customer_name="Ana Ruiz",
            phone="",
            order_type=OrderType.PACK10,
            subtotal=1,
            delivery_fee=0,
            total=1,
            created_by=None,
        )
        assert order.is_pack
        assert order.matches("ANA")
        assert not order.matches("555")

    def test_line_item_meal_name(self):
        item = OrderLineItem(id=None, order_id=None, meal_id="m1", qty=1, meal=Meal(id="m1", name="Guiso"))
        assert item.meal_name == "Guiso"
        assert OrderLineItem(id=None, order_id=None, meal_id="m1", qty=1).meal_name is None


def test_profile_roles():
    assert Profile(id="1", email="a@b.c", role=Role.ADMIN).is_admin
    assert not Profile(id="2", email="d@e.f").is_admin


def test_store_errors_honour_the_repository_contract():
    assert isinstance(StoreOperationError("orders.list", "down"), RepositoryError)


def test_domain_does_not_import_infrastructure():
    offenders = []
    for path in Path(viandas.domain.__file__).parent.rglob("*.py"):
        for node in ast.walk(ast.parse(path.read_text(encoding="utf-8"))):
            if isinstance(node, ast.ImportFrom):
                modules = [node.module or ""]
            elif isinstance(node, ast.Import):
                modules = [alias.name for alias in node.names]
            else:
                continue
            offenders += [
                f"{path.name}: {module}"
                for module in modules
                if module.startswith("viandas.infrastructure")
            ]
    assert offenders == []
