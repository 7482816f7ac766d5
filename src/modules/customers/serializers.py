"""Customer DRF serializers for API output.

Input is validated by the Pydantic DTOs in ``dtos.py``; this module only
renders persisted customers with the API's camelCase field names.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.customers.models import Customer


class CustomerSerializer(serializers.ModelSerializer):
    """Read serializer for the Customer resource."""

    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Customer
        fields = [
            "id",
            "name",
            "email",
            "phone",
            "address",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields
