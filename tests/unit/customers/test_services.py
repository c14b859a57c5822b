"""Unit tests for CustomerService.

Covers:
- register_customer: happy path, duplicate tax id, input constraints,
  storage failure propagation.
- update_customer: scalar overwrite, address merge rules, identity
  preservation, not found.
- queries: get_by_tax_id, list_customers, get_customer.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from unittest.mock import MagicMock

import pytest

from modules.customers.entities import Address, Customer
from modules.customers.exceptions import CustomerAlreadyExists, CustomerNotFound
from modules.customers.services import CustomerService

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    repo = MagicMock()
    repo.save.side_effect = lambda c: replace(c, id=1)
    repo.update.side_effect = lambda c: c
    return repo


@pytest.fixture()
def service(mock_repo):
    return CustomerService(repository=mock_repo)


def _full_address() -> Address:
    return Address(street="A", number="1", postal_code="P1", city="C1", state="S1")


def _make_customer(**overrides) -> Customer:
    defaults = {
        "id": 1,
        "name": "Jane Roe",
        "tax_id": "111",
        "birth_date": date(1990, 1, 15),
        "address": _full_address(),
    }
    defaults.update(overrides)
    return Customer(**defaults)


# ===========================================================================
# register_customer
# ===========================================================================


class TestRegisterCustomer:
    def test_success_returns_persisted_customer(self, service, mock_repo):
        mock_repo.get_by_tax_id.return_value = None

        candidate = Customer(name="Jane Roe", tax_id="111", birth_date=date(1990, 1, 15))
        customer = service.register_customer(candidate)

        assert customer.id == 1
        assert customer.name == "Jane Roe"
        assert customer.tax_id == "111"
        assert customer.birth_date == date(1990, 1, 15)
        mock_repo.get_by_tax_id.assert_called_once_with("111")
        mock_repo.save.assert_called_once_with(candidate)

    def test_duplicate_tax_id_raises(self, service, mock_repo):
        mock_repo.get_by_tax_id.return_value = _make_customer()

        with pytest.raises(CustomerAlreadyExists, match="CPF"):
            service.register_customer(Customer(name="Other", tax_id="111"))

        mock_repo.save.assert_not_called()

    def test_missing_tax_id_raises(self, service, mock_repo):
        with pytest.raises(ValueError, match="tax identifier"):
            service.register_customer(Customer(name="No CPF"))

        mock_repo.get_by_tax_id.assert_not_called()
        mock_repo.save.assert_not_called()

    def test_candidate_with_id_raises(self, service, mock_repo):
        with pytest.raises(ValueError, match="must not carry an ID"):
            service.register_customer(Customer(id=7, name="Jane", tax_id="111"))

        mock_repo.save.assert_not_called()

    def test_keeps_address(self, service, mock_repo):
        mock_repo.get_by_tax_id.return_value = None

        customer = service.register_customer(
            Customer(name="Jane", tax_id="111", address=_full_address())
        )

        assert customer.address == _full_address()

    def test_storage_failure_propagates(self, service, mock_repo):
        mock_repo.get_by_tax_id.return_value = None
        mock_repo.save.side_effect = RuntimeError("database is gone")

        with pytest.raises(RuntimeError, match="database is gone"):
            service.register_customer(Customer(name="Jane", tax_id="111"))


# ===========================================================================
# update_customer
# ===========================================================================


class TestUpdateCustomerScalars:
    def test_overwrites_name_and_birth_date(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_customer()

        customer = service.update_customer(
            1, Customer(name="Jane R. Doe", birth_date=date(1991, 2, 3))
        )

        assert customer.name == "Jane R. Doe"
        assert customer.birth_date == date(1991, 2, 3)
        mock_repo.update.assert_called_once()

    def test_absent_scalars_are_cleared(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_customer()

        customer = service.update_customer(1, Customer())

        assert customer.name is None
        assert customer.birth_date is None

    def test_identity_preserved(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_customer()

        customer = service.update_customer(
            1, Customer(id=99, tax_id="999", name="Someone Else")
        )

        assert customer.id == 1
        assert customer.tax_id == "111"
        persisted = mock_repo.update.call_args.args[0]
        assert persisted.id == 1
        assert persisted.tax_id == "111"

    def test_not_found_raises_without_persisting(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        with pytest.raises(CustomerNotFound):
            service.update_customer(404, Customer(name="Ghost"))

        mock_repo.update.assert_not_called()
        mock_repo.save.assert_not_called()

    def test_storage_failure_propagates(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_customer()
        mock_repo.update.side_effect = RuntimeError("write failed")

        with pytest.raises(RuntimeError, match="write failed"):
            service.update_customer(1, Customer(name="Jane"))


class TestUpdateCustomerAddress:
    def test_absent_address_leaves_existing_untouched(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_customer()

        customer = service.update_customer(1, Customer(name="Jane", address=None))

        assert customer.address == _full_address()

    def test_single_field_merged(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_customer()

        customer = service.update_customer(
            1, Customer(name="Jane", address=Address(street="B"))
        )

        assert customer.address == Address(
            street="B", number="1", postal_code="P1", city="C1", state="S1"
        )

    def test_all_fields_replaced(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_customer()
        incoming = Address(
            street="Rua Augusta", number="1000", postal_code="01305-100",
            city="São Paulo", state="SP",
        )

        customer = service.update_customer(1, Customer(name="Jane", address=incoming))

        assert customer.address == incoming

    def test_empty_string_is_a_supplied_value(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_customer()

        customer = service.update_customer(
            1, Customer(name="Jane", address=Address(number=""))
        )

        assert customer.address.number == ""
        assert customer.address.street == "A"

    def test_adopts_incoming_when_no_existing_address(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_customer(address=None)

        customer = service.update_customer(
            1, Customer(name="Jane R. Doe", address=Address(city="Springfield"))
        )

        assert customer.address == Address(city="Springfield")

    def test_existing_address_not_mutated_in_place(self, service, mock_repo):
        existing = _make_customer()
        mock_repo.get_by_id.return_value = existing

        service.update_customer(1, Customer(name="Jane", address=Address(street="B")))

        assert existing.address.street == "A"


# ===========================================================================
# Queries
# ===========================================================================


class TestQueries:
    def test_get_by_tax_id_found(self, service, mock_repo):
        existing = _make_customer()
        mock_repo.get_by_tax_id.return_value = existing

        assert service.get_by_tax_id("111") is existing

    def test_get_by_tax_id_absent_returns_none(self, service, mock_repo):
        mock_repo.get_by_tax_id.return_value = None

        assert service.get_by_tax_id("000") is None

    def test_list_customers(self, service, mock_repo):
        mock_repo.list.return_value = [_make_customer(), _make_customer(id=2, tax_id="222")]

        result = service.list_customers()

        assert [c.id for c in result] == [1, 2]

    def test_list_customers_empty(self, service, mock_repo):
        mock_repo.list.return_value = []

        assert service.list_customers() == []

    def test_get_customer_success(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_customer()

        assert service.get_customer(1).id == 1

    def test_get_customer_not_found_raises(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        with pytest.raises(CustomerNotFound):
            service.get_customer(404)
