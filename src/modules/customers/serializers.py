"""Customer DRF serializers for API output.

Render domain ``Customer`` entities (plain dataclasses) into the outbound
JSON shape and describe that shape to drf-spectacular.  Input parsing is
handled by the Pydantic DTOs in ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers


class AddressSerializer(serializers.Serializer):
    street = serializers.CharField(allow_null=True)
    number = serializers.CharField(allow_null=True)
    postal_code = serializers.CharField(allow_null=True)
    city = serializers.CharField(allow_null=True)
    state = serializers.CharField(allow_null=True)


class CustomerSerializer(serializers.Serializer):
    """Read-only serializer for the Customer resource."""

    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(allow_null=True)
    tax_id = serializers.CharField()
    birth_date = serializers.DateField(allow_null=True)
    address = AddressSerializer(allow_null=True)


class AddressInputSerializer(AddressSerializer):
    """Request schema for the nested address (OpenAPI only)."""

    street = serializers.CharField(required=False, allow_null=True)
    number = serializers.CharField(required=False, allow_null=True)
    postal_code = serializers.CharField(required=False, allow_null=True)
    city = serializers.CharField(required=False, allow_null=True)
    state = serializers.CharField(required=False, allow_null=True)


class CustomerInputSerializer(serializers.Serializer):
    """Request schema for update (OpenAPI only).

    Validation is done by ``UpdateCustomerDTO``.
    """

    name = serializers.CharField(required=False, allow_null=True)
    tax_id = serializers.CharField(required=False)
    birth_date = serializers.DateField(required=False, allow_null=True)
    address = AddressInputSerializer(required=False, allow_null=True)


class CreateCustomerInputSerializer(CustomerInputSerializer):
    """Request schema for registration (OpenAPI only): name and tax_id are required."""

    name = serializers.CharField(max_length=255)
    tax_id = serializers.CharField(max_length=14)
