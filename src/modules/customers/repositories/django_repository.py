"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` using Django's QuerySet API and maps
``CustomerModel`` rows to ``Customer`` entities.  Missing rows are
reported as ``None``; the Service Layer decides how to translate a
missing entity into an error.

The two race windows left open by the service's check-then-act sequences
are closed here: the unique constraint on ``tax_id`` turns a concurrent
duplicate insert into ``CustomerAlreadyExists``, and ``update`` is a
conditional write that raises ``CustomerNotFound`` when the row is gone.
Every other database error propagates unchanged.
"""

from __future__ import annotations

from typing import List, Optional

import structlog
from django.db import IntegrityError, transaction
from django.utils import timezone

from modules.customers.entities import Customer
from modules.customers.exceptions import CustomerAlreadyExists, CustomerNotFound
from modules.customers.models import CustomerModel
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def get_by_id(self, id) -> Optional[Customer]:
        """Retrieve a customer by primary key.

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            row = CustomerModel.objects.filter(pk=id).first()
        except (ValueError, TypeError):
            return None
        return row.to_entity() if row else None

    def get_by_tax_id(self, tax_id: str) -> Optional[Customer]:
        row = CustomerModel.objects.filter(tax_id=tax_id).first()
        return row.to_entity() if row else None

    def list(self) -> List[Customer]:
        """Every customer, ordered by ascending ID."""
        return [row.to_entity() for row in CustomerModel.objects.order_by("id")]

    def save(self, entity: Customer) -> Customer:
        """Insert a new customer and return it with its ID assigned."""
        row = CustomerModel(**CustomerModel.fields_from_entity(entity))
        try:
            with transaction.atomic():
                row.save(force_insert=True)
        except IntegrityError as exc:
            if self._tax_id_taken(entity.tax_id):
                logger.warning(
                    "customer.duplicate_tax_id_on_insert",
                    tax_id=entity.masked_tax_id,
                )
                raise CustomerAlreadyExists("CPF already registered.") from exc
            raise
        logger.info("customer.saved", customer_id=row.pk, is_new=True)
        return row.to_entity()

    @transaction.atomic
    def update(self, entity: Customer) -> Customer:
        """Write every mutable column of an existing customer.

        ``tax_id`` is never written: the stored natural key is authoritative.
        """
        values = CustomerModel.fields_from_entity(entity)
        values.pop("tax_id")
        affected = CustomerModel.objects.filter(pk=entity.id).update(
            **values, updated_at=timezone.now()
        )
        if not affected:
            raise CustomerNotFound(f"Customer {entity.id} not found.")
        logger.info("customer.saved", customer_id=entity.id, is_new=False)
        return CustomerModel.objects.get(pk=entity.id).to_entity()

    @staticmethod
    def _tax_id_taken(tax_id: Optional[str]) -> bool:
        return CustomerModel.objects.filter(tax_id=tax_id).exists()
