"""In-memory customer store.

Mirrors the catalog store: unknown ids make update/remove a no-op that
returns False.
"""

import logging
from collections import Counter
from collections.abc import Iterable

from restaurant_pos.errors import ValidationError
from restaurant_pos.models.catalog_models import Customer
from restaurant_pos.models.order_models import Order, OrderStatusEnum
from restaurant_pos.repositories.order_repository import OrderLedger

logger = logging.getLogger(__name__)


class CustomerStore:
    """Store of customer records keyed by id, kept in insertion order."""

    def __init__(self, customers: Iterable[Customer] = ()) -> None:
        """Initialize the store.

        Args:
            customers: Initial customers, e.g. from a persisted snapshot
        """
        self._customers: dict[str, Customer] = {}
        for customer in customers:
            self.add(customer)

    def __len__(self) -> int:
        return len(self._customers)

    def __contains__(self, customer_id: object) -> bool:
        return customer_id in self._customers

    def add(self, customer: Customer) -> Customer:
        """Add a new customer.

        Raises:
            ValidationError: If the id is already in use
        """
        if customer.id in self._customers:
            raise ValidationError(f"Customer id '{customer.id}' already exists", field="id")
        self._customers[customer.id] = customer
        return customer

    def update(self, customer: Customer) -> bool:
        """Replace an existing customer by id.

        The stored creation instant is kept regardless of the value supplied.

        Args:
            customer: New version of the customer

        Returns:
            bool: True if replaced, False if the id is unknown
        """
        existing = self._customers.get(customer.id)
        if existing is None:
            logger.info(f"Ignoring update of unknown customer {customer.id}")
            return False
        self._customers[customer.id] = customer.model_copy(
            update={"created_at": existing.created_at}
        )
        return True

    def remove(self, customer_id: str) -> bool:
        """Delete a customer, False if the id is unknown."""
        if self._customers.pop(customer_id, None) is None:
            logger.info(f"Ignoring delete of unknown customer {customer_id}")
            return False
        return True

    def get(self, customer_id: str) -> Customer | None:
        """Retrieve a customer by id, None if absent."""
        return self._customers.get(customer_id)

    def list_customers(self) -> list[Customer]:
        """List all customers in insertion order."""
        return list(self._customers.values())

    def search(self, term: str) -> list[Customer]:
        """Filter customers by name, contact number or email.

        Name and email match case-insensitively; the contact number matches
        as a plain substring.
        """
        needle = term.strip()
        if not needle:
            return self.list_customers()
        lowered = needle.lower()
        return [
            customer
            for customer in self._customers.values()
            if lowered in customer.name.lower()
            or needle in customer.contact_number
            or (customer.email is not None and lowered in customer.email.lower())
        ]

    def orders_for(self, customer_id: str, ledger: OrderLedger) -> list[Order]:
        """Order history of a customer, delegated to the ledger."""
        return ledger.by_customer(customer_id)

    def increment_order_count(self, customer_id: str) -> Customer | None:
        """Add one completed order to a customer's counter.

        Args:
            customer_id: Customer identifier

        Returns:
            Customer: The updated record, or None if the id is unknown
        """
        customer = self._customers.get(customer_id)
        if customer is None:
            return None
        updated = customer.model_copy(update={"total_orders": customer.total_orders + 1})
        self._customers[customer_id] = updated
        return updated

    def reconcile_order_counts(self, ledger: OrderLedger) -> dict[str, int]:
        """Reset every order counter to the number of completed ledger orders.

        Args:
            ledger: Ledger holding the order history

        Returns:
            dict: Corrected counts for the customers whose counter changed
        """
        completed = Counter(
            order.customer_id
            for order in ledger.list_orders()
            if order.status == OrderStatusEnum.COMPLETED
        )
        corrected: dict[str, int] = {}
        for customer_id, customer in self._customers.items():
            count = completed.get(customer_id, 0)
            if customer.total_orders != count:
                self._customers[customer_id] = customer.model_copy(update={"total_orders": count})
                corrected[customer_id] = count
        if corrected:
            logger.warning(f"Reconciled order counts for {len(corrected)} customers")
        return corrected
