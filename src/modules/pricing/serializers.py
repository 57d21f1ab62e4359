"""Special price DRF serializers for API output.

Input is validated by the Pydantic DTOs inside ``SpecialPriceService``;
these serializers only render model instances.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.pricing.models import SpecialPrice


class SpecialPriceSerializer(serializers.ModelSerializer):
    """Read serializer for the SpecialPrice resource."""

    class Meta:
        model = SpecialPrice
        fields = [
            "id",
            "user_id",
            "user_name",
            "email",
            "product_id",
            "product_name",
            "special_price",
            "discount",
            "is_active",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
