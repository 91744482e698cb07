"""
SQLAlchemy implementation of CustomerRepository
"""

from typing import List, Optional

from sqlalchemy import select

from viandas.domain.entities.customer_entity import Customer as DomainCustomer
from viandas.domain.repositories.customer_repository import CustomerRepository
from viandas.domain.value_objects.customer_status import CustomerStatus
from viandas.infrastructure.database.models import Customer as SQLCustomer
from viandas.infrastructure.repositories.session_handler import SQLAlchemyRepository
from viandas.infrastructure.utilities.exceptions import StoreOperationError


class SQLAlchemyCustomerRepository(SQLAlchemyRepository, CustomerRepository):
    """SQLAlchemy implementation of customer repository"""

    async def find_all(self) -> List[DomainCustomer]:
        """Customers by last order, most recent first, never-ordered last"""
        with self._session("customers.list") as session:
            query = select(SQLCustomer).order_by(
                SQLCustomer.last_order_at.desc().nulls_last(),
                SQLCustomer.created_at.desc(),
            )
            return [self._map_to_domain(row) for row in session.scalars(query)]

    async def find_by_id(self, customer_id: str) -> Optional[DomainCustomer]:
        with self._session("customers.get") as session:
            sql_customer = session.get(SQLCustomer, customer_id)
            return self._map_to_domain(sql_customer) if sql_customer else None

    async def create(self, customer: DomainCustomer) -> DomainCustomer:
        """Insert a customer"""
        with self._session("customers.insert") as session:
            sql_customer = SQLCustomer()
            self._copy_fields(customer, sql_customer)
            if customer.created_at is not None:
                sql_customer.created_at = customer.created_at
            session.add(sql_customer)
            session.flush()
            session.refresh(sql_customer)
            self._logger.info(
                "🆕 CUSTOMER CREATED: %s (%s)", sql_customer.full_name, sql_customer.id
            )
            return self._map_to_domain(sql_customer)

    async def update(self, customer: DomainCustomer) -> DomainCustomer:
        """Overwrite a customer's fields"""
        with self._session("customers.update") as session:
            sql_customer = session.get(SQLCustomer, customer.id)
            if not sql_customer:
                raise StoreOperationError(
                    "customers.update", f"Customer with ID {customer.id} not found"
                )
            self._copy_fields(customer, sql_customer)
            session.flush()
            session.refresh(sql_customer)
            return self._map_to_domain(sql_customer)

    async def delete(self, customer_id: str) -> bool:
        """Delete customer by ID"""
        with self._session("customers.delete") as session:
            sql_customer = session.get(SQLCustomer, customer_id)
            if not sql_customer:
                return False
            session.delete(sql_customer)
            return True

    @staticmethod
    def _copy_fields(customer: DomainCustomer, sql_customer: SQLCustomer) -> None:
        sql_customer.full_name = customer.full_name
        sql_customer.phone = customer.phone or ""
        sql_customer.status = CustomerStatus(customer.status).value
        sql_customer.total_spent = customer.total_spent
        sql_customer.orders_count = customer.orders_count
        sql_customer.last_order_at = customer.last_order_at
        sql_customer.notes = customer.notes

    @staticmethod
    def _map_to_domain(sql_customer: SQLCustomer) -> DomainCustomer:
        return DomainCustomer(
            id=sql_customer.id,
            full_name=sql_customer.full_name,
            phone=sql_customer.phone or "",
            status=CustomerStatus(sql_customer.status),
            total_spent=sql_customer.total_spent or 0.0,
            orders_count=sql_customer.orders_count or 0,
            created_at=sql_customer.created_at,
            last_order_at=sql_customer.last_order_at,
            notes=sql_customer.notes,
        )
