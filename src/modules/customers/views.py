"""Customer API views.

Exposes the ``CustomerService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into appropriate
HTTP status codes; anything else propagates to the project
exception handler (``modules.core.exceptions``).
"""

from __future__ import annotations

import re

from django.conf import settings
from drf_spectacular.utils import extend_schema
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO
from modules.customers.exceptions import CustomerAlreadyExists, CustomerNotFound
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.serializers import (
    CreateCustomerInputSerializer,
    CustomerInputSerializer,
    CustomerSerializer,
)
from modules.customers.services import CustomerService

NOT_FOUND = {"detail": "Customer not found."}


def _validation_context() -> dict:
    return {"validate_tax_id": settings.CUSTOMERS_VALIDATE_TAX_ID}


def _errors(exc: PydanticValidationError) -> list:
    return exc.errors(include_url=False, include_context=False)


class CustomerViewSet(ViewSet):
    """ViewSet for Customer registration, queries and updates.

    Uses ``CustomerService`` with ``CustomerDjangoRepository`` (DIP).
    There is no destroy action: customers are never deleted.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CustomerService(repository=CustomerDjangoRepository())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @extend_schema(responses=CustomerSerializer(many=True))
    def list(self, request: Request) -> Response:
        """GET /api/v1/customers/"""
        customers = self._service.list_customers()
        return Response(CustomerSerializer(customers, many=True).data)

    @extend_schema(responses={200: CustomerSerializer, 404: None})
    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/"""
        try:
            customer = self._service.get_customer(pk)
        except CustomerNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(CustomerSerializer(customer).data)

    @extend_schema(responses={200: CustomerSerializer, 404: None})
    @action(detail=False, methods=["get"], url_path=r"tax-id/(?P<tax_id>[^/]+)")
    def by_tax_id(self, request: Request, tax_id: str) -> Response:
        """GET /api/v1/customers/tax-id/{tax_id}/"""
        customer = self._service.get_by_tax_id(re.sub(r"\D", "", tax_id))
        if customer is None:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(CustomerSerializer(customer).data)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @extend_schema(
        request=CreateCustomerInputSerializer,
        responses={201: CustomerSerializer, 400: None, 409: None},
    )
    def create(self, request: Request) -> Response:
        """POST /api/v1/customers/"""
        try:
            dto = CreateCustomerDTO.model_validate(
                request.data, context=_validation_context()
            )
        except PydanticValidationError as exc:
            return Response({"detail": _errors(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            customer = self._service.register_customer(dto.to_entity())
        except CustomerAlreadyExists as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)

        return Response(CustomerSerializer(customer).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=CustomerInputSerializer,
        responses={200: CustomerSerializer, 400: None, 404: None},
    )
    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/customers/{pk}/"""
        try:
            dto = UpdateCustomerDTO.model_validate(
                request.data, context=_validation_context()
            )
        except PydanticValidationError as exc:
            return Response({"detail": _errors(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            customer = self._service.update_customer(pk, dto.to_entity())
        except CustomerNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)

        return Response(CustomerSerializer(customer).data)

    @extend_schema(
        request=CustomerInputSerializer,
        responses={200: CustomerSerializer, 400: None, 404: None},
    )
    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/customers/{pk}/"""
        return self.update(request, pk)
