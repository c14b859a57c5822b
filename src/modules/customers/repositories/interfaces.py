"""Customer repository interface.

Extends ``IRepository[Customer]`` with the natural-key look-up required
by the tax-identifier uniqueness rule.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.entities import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for the Customer aggregate."""

    @abstractmethod
    def get_by_tax_id(self, tax_id: str) -> Optional[Customer]:
        """Retrieve a customer by tax identifier (CPF), or ``None``."""
