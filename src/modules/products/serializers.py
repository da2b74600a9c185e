"""Product DRF serializers for API output.

The serializer operates at the Interface layer (API Views) and only
renders ``Product`` dataclasses.  Input goes through the Pydantic DTOs
in ``dtos.py`` before reaching the Service Layer.
"""

from __future__ import annotations

from rest_framework import serializers


class ProductSerializer(serializers.Serializer):
    """Read-only serializer for the Product resource."""

    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True)
    price = serializers.FloatField(read_only=True)
    category = serializers.CharField(read_only=True)
    sku = serializers.CharField(read_only=True)
    stock = serializers.IntegerField(read_only=True)
    is_active = serializers.BooleanField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)
