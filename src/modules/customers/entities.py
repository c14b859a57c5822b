"""Customer domain entities.

Plain dataclasses, independent of Django, exchanged between the service
layer and the repositories.  ``None`` on any optional field means the value
is absent (or, on an update, not supplied); an empty string is a value.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date
from typing import Optional


@dataclass
class Address:
    """Postal address owned by a single customer (no identity of its own)."""

    street: Optional[str] = None
    number: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None

    def merge(self, incoming: Address) -> Address:
        """Return a copy with every field supplied on ``incoming`` applied."""
        merged = Address(**{f.name: getattr(self, f.name) for f in fields(self)})
        for f in fields(incoming):
            value = getattr(incoming, f.name)
            if value is not None:
                setattr(merged, f.name, value)
        return merged

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


@dataclass
class Customer:
    """Customer aggregate root.

    ``id`` is the surrogate identifier assigned by storage on first insert.
    ``tax_id`` (CPF) is the natural key: unique and immutable once set.
    """

    tax_id: Optional[str] = None
    name: Optional[str] = None
    birth_date: Optional[date] = None
    address: Optional[Address] = None
    id: Optional[int] = None

    @property
    def masked_tax_id(self) -> str:
        suffix = self.tax_id[-4:] if self.tax_id else "????"
        return f"***{suffix}"
