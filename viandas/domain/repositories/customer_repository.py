"""
Customer Repository interface

Defines the contract for customer data access operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.customer_entity import Customer


class CustomerRepository(ABC):
    """
    Abstract repository interface for Customer entities

    Infrastructure layer provides concrete implementations.
    """

    @abstractmethod
    async def find_all(self) -> List[Customer]:
        """
        Find all customers

        Returns:
            Customers ordered by last order, most recent first, customers
            without orders last
        """
        pass

    @abstractmethod
    async def find_by_id(self, customer_id: str) -> Optional[Customer]:
        """
        Find a customer by their ID

        Args:
            customer_id: The customer's unique identifier

        Returns:
            The customer if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, customer: Customer) -> Customer:
        """
        Insert a new customer

        Returns:
            The stored customer with its generated ID and timestamps
        """
        pass

    @abstractmethod
    async def update(self, customer: Customer) -> Customer:
        """
        Overwrite an existing customer (last write wins)

        Raises:
            StoreOperationError: if the customer does not exist or the store fails
        """
        pass

    @abstractmethod
    async def delete(self, customer_id: str) -> bool:
        """
        Delete a customer

        Orders keep their soft reference to the deleted customer.
        """
        pass
