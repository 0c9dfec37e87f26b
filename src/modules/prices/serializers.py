"""Price DRF serializer for API output.

The serializer operates at the Interface layer (API views) and renders
the external camelCase field names.  Input is validated by the Pydantic
DTOs in ``dtos.py``, not here.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.prices.models import Price


class PriceSerializer(serializers.ModelSerializer):
    """Read serializer for the Price resource."""

    brandId = serializers.IntegerField(source="brand_id", read_only=True)
    startDate = serializers.DateTimeField(source="start_date", read_only=True)
    endDate = serializers.DateTimeField(source="end_date", read_only=True)
    priceList = serializers.IntegerField(source="price_list", read_only=True)
    productId = serializers.IntegerField(source="product_id", read_only=True)

    class Meta:
        model = Price
        fields = [
            "id",
            "brandId",
            "startDate",
            "endDate",
            "priceList",
            "productId",
            "priority",
            "price",
            "currency",
        ]
        read_only_fields = ["id", "priority", "price", "currency"]
