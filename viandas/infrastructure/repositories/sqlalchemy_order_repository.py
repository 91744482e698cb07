"""
SQLAlchemy Order Repository

Concrete implementation of OrderRepository using SQLAlchemy ORM.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from viandas.domain.entities.meal_entity import Meal as DomainMeal
from viandas.domain.entities.order_entity import Order as DomainOrder
from viandas.domain.entities.order_entity import OrderLineItem
from viandas.domain.repositories.order_repository import OrderRepository
from viandas.domain.value_objects.order_type import OrderStatus, OrderType
from viandas.infrastructure.database.models import Order, OrderItem
from viandas.infrastructure.repositories.session_handler import SQLAlchemyRepository
from viandas.infrastructure.utilities.exceptions import StoreOperationError


class SQLAlchemyOrderRepository(SQLAlchemyRepository, OrderRepository):
    """SQLAlchemy implementation of OrderRepository"""

    async def create_order(self, order: DomainOrder) -> DomainOrder:
        """Insert the order row"""
        self._logger.info(
            "📝 CREATE ORDER: %s (%s)", order.customer_name, order.order_type.value
        )

        with self._session("orders.insert") as session:
            sql_order = Order(
                customer_name=order.customer_name,
                phone=order.phone or "",
                customer_id=order.customer_id,
                order_type=OrderType(order.order_type).value,
                other_label=order.other_label,
                delivery=order.delivery,
                status=OrderStatus(order.status).value,
                subtotal=order.subtotal,
                delivery_fee=order.delivery_fee,
                total=order.total,
                notes=order.notes or "",
                item_count=order.item_count,
                channel=order.channel,
                order_date=order.order_date,
                created_by=order.created_by,
            )
            if order.created_at is not None:
                sql_order.created_at = order.created_at
            session.add(sql_order)
            session.flush()
            session.refresh(sql_order)

            self._logger.info("✅ ORDER CREATED: ID=%s", sql_order.id)
            return self._map_to_domain(sql_order, include_items=False)

    async def add_items(
        self, order_id: str, items: List[OrderLineItem]
    ) -> List[OrderLineItem]:
        """Bulk insert line items in one statement batch"""
        with self._session("order_items.insert") as session:
            sql_items = [
                OrderItem(
                    order_id=order_id, meal_id=item.meal_id, qty=item.qty, position=index
                )
                for index, item in enumerate(items)
            ]
            session.add_all(sql_items)
            session.flush()

            self._logger.info("🧾 %d ITEMS ADDED to order %s", len(sql_items), order_id)
            return [self._map_item(sql_item) for sql_item in sql_items]

    async def get_order_by_id(self, order_id: str) -> Optional[DomainOrder]:
        """Get order by ID"""
        with self._session("orders.get") as session:
            query = (
                select(Order)
                .where(Order.id == order_id)
                .options(selectinload(Order.items).selectinload(OrderItem.meal))
            )
            sql_order = session.scalars(query).first()
            if not sql_order:
                self._logger.info("📭 ORDER NOT FOUND: ID %s", order_id)
                return None
            return self._map_to_domain(sql_order)

    async def get_all_orders(self, status: Optional[OrderStatus] = None) -> List[DomainOrder]:
        """Orders newest first with items and their meals"""
        with self._session("orders.list") as session:
            query = (
                select(Order)
                .options(selectinload(Order.items).selectinload(OrderItem.meal))
                .order_by(Order.created_at.desc())
            )
            if status is not None:
                query = query.where(Order.status == OrderStatus(status).value)
            return [self._map_to_domain(row) for row in session.scalars(query)]

    async def update_order_status(self, order_id: str, status: OrderStatus) -> bool:
        """Update order status"""
        with self._session("orders.update") as session:
            sql_order = session.get(Order, order_id)
            if not sql_order:
                return False
            sql_order.status = OrderStatus(status).value
            self._logger.info("🔄 ORDER %s STATUS -> %s", order_id, sql_order.status)
            return True

    async def delete_order(self, order_id: str) -> bool:
        """Delete an order; its items go with it"""
        with self._session("orders.delete") as session:
            sql_order = session.get(Order, order_id)
            if not sql_order:
                return False
            session.delete(sql_order)
            self._logger.info("🗑️ ORDER DELETED: %s", order_id)
            return True

    def _map_to_domain(self, sql_order: Order, include_items: bool = True) -> DomainOrder:
        try:
            order_type = OrderType(sql_order.order_type)
            status = OrderStatus(sql_order.status)
        except ValueError as e:
            raise StoreOperationError("orders.decode", str(e)) from e

        items = []
        if include_items:
            items = [self._map_item(item) for item in sql_order.items]

        return DomainOrder(
            id=sql_order.id,
            customer_name=sql_order.customer_name,
            phone=sql_order.phone or "",
            customer_id=sql_order.customer_id,
            order_type=order_type,
            other_label=sql_order.other_label,
            delivery=bool(sql_order.delivery),
            status=status,
            subtotal=sql_order.subtotal,
            delivery_fee=sql_order.delivery_fee,
            total=sql_order.total,
            notes=sql_order.notes or "",
            item_count=sql_order.item_count or 0,
            order_date=sql_order.order_date,
            created_at=sql_order.created_at,
            created_by=sql_order.created_by,
            channel=sql_order.channel,
            items=items,
        )

    @staticmethod
    def _map_item(item: OrderItem) -> OrderLineItem:
        """Line item with its meal, or no meal if it was deleted since"""
        meal = item.meal
        return OrderLineItem(
            id=item.id,
            order_id=item.order_id,
            meal_id=item.meal_id,
            qty=item.qty,
            meal=(
                DomainMeal(id=meal.id, name=meal.name, created_at=meal.created_at)
                if meal is not None
                else None
            ),
        )
