"""Customer persistence model.

The address is an embedded value: its columns live on the ``customers``
row and it has no table, key or lifecycle of its own.  A row whose
address columns are all NULL has no address.  ``tax_id`` carries
a unique constraint so the database rejects duplicates even when two
registrations race past the service-level check.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel
from modules.customers.entities import Address, Customer

ADDRESS_COLUMNS = {
    "street": "address_street",
    "number": "address_number",
    "postal_code": "address_postal_code",
    "city": "address_city",
    "state": "address_state",
}


class CustomerModel(BaseModel):
    """ORM row for the Customer aggregate."""

    name = models.CharField(max_length=255, null=True, blank=True)  # noqa: DJ01
    tax_id = models.CharField(max_length=14, unique=True)
    birth_date = models.DateField(null=True, blank=True)

    address_street = models.CharField(max_length=255, null=True, blank=True)  # noqa: DJ01
    address_number = models.CharField(max_length=20, null=True, blank=True)  # noqa: DJ01
    address_postal_code = models.CharField(max_length=20, null=True, blank=True)  # noqa: DJ01
    address_city = models.CharField(max_length=120, null=True, blank=True)  # noqa: DJ01
    address_state = models.CharField(max_length=60, null=True, blank=True)  # noqa: DJ01

    class Meta:
        db_table = "customers"
        ordering = ["id"]

    # ------------------------------------------------------------------
    # Entity mapping
    # ------------------------------------------------------------------

    @staticmethod
    def fields_from_entity(customer: Customer) -> dict:
        """Column values for ``customer`` (everything except the primary key)."""
        address = customer.address
        values = {
            "name": customer.name,
            "tax_id": customer.tax_id,
            "birth_date": customer.birth_date,
        }
        for attr, column in ADDRESS_COLUMNS.items():
            values[column] = getattr(address, attr) if address is not None else None
        return values

    def to_entity(self) -> Customer:
        address = Address(
            **{attr: getattr(self, column) for attr, column in ADDRESS_COLUMNS.items()}
        )
        return Customer(
            id=self.pk,
            name=self.name,
            tax_id=self.tax_id,
            birth_date=self.birth_date,
            address=None if address.is_empty else address,
        )

    def __str__(self) -> str:
        suffix = self.tax_id[-4:] if self.tax_id else "????"
        return f"{self.name} (CPF: ***{suffix})"
