"""Customer service layer (Use Cases).

Orchestrates business logic for the Customer aggregate, delegating
persistence to the injected ``ICustomerRepository``.

Business rules enforced here:
- The tax identifier (CPF) is unique across all customers.
- The surrogate ID and the tax identifier never change on update.
- Updates overwrite ``name`` and ``birth_date`` but merge the address
  field by field, and only when an address is supplied.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import structlog
from django.db import transaction

from modules.customers.entities import Customer
from modules.customers.exceptions import CustomerAlreadyExists, CustomerNotFound

if TYPE_CHECKING:
    from modules.customers.entities import Address
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``ICustomerRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def register_customer(self, candidate: Customer) -> Customer:
        """Register a new customer after enforcing tax-id uniqueness.

        Raises:
            ValueError: if the candidate has no tax identifier or already
                carries an ID.
            CustomerAlreadyExists: if the tax identifier is already taken.
        """
        if not candidate.tax_id:
            raise ValueError("A tax identifier is required to register a customer.")
        if candidate.id is not None:
            raise ValueError("A new customer must not carry an ID.")

        log = logger.bind(tax_id=candidate.masked_tax_id)

        if self._repo.get_by_tax_id(candidate.tax_id):
            log.warning("customer.duplicate_tax_id")
            raise CustomerAlreadyExists("CPF already registered.")

        customer = self._repo.save(candidate)
        log.info("customer.registered", customer_id=customer.id)
        return customer

    @transaction.atomic
    def update_customer(self, id, changes: Customer) -> Customer:
        """Apply ``changes`` to the customer identified by ``id``.

        ``name`` and ``birth_date`` are replaced as given (``None``
        included).  The address is merged, see ``_merge_address``.  The
        ID and tax identifier carried by ``changes`` are ignored.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        existing = self._repo.get_by_id(id)
        if not existing:
            raise CustomerNotFound(f"Customer {id} not found.")

        merged = Customer(
            id=existing.id,
            tax_id=existing.tax_id,
            name=changes.name,
            birth_date=changes.birth_date,
            address=self._merge_address(existing.address, changes.address),
        )
        customer = self._repo.update(merged)
        logger.info(
            "customer.updated",
            customer_id=customer.id,
            address_changed=changes.address is not None,
        )
        return customer

    @staticmethod
    def _merge_address(
        current: Optional[Address], incoming: Optional[Address]
    ) -> Optional[Address]:
        """Keep ``current`` when nothing is supplied, adopt ``incoming``
        when there is nothing to merge into, otherwise overwrite only the
        fields ``incoming`` supplies."""
        if incoming is None:
            return current
        if current is None:
            return incoming
        return current.merge(incoming)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_by_tax_id(self, tax_id: str) -> Optional[Customer]:
        """Return the customer holding ``tax_id``, or ``None``."""
        return self._repo.get_by_tax_id(tax_id)

    def list_customers(self) -> List[Customer]:
        """Return every customer, in storage order."""
        return self._repo.list()

    def get_customer(self, id) -> Customer:
        """Retrieve a single customer by ID.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(f"Customer {id} not found.")
        return customer
