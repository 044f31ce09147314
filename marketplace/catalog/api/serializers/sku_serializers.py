from rest_framework import serializers

from marketplace.catalog.domain.models import License, ProductSku


class ProductSkuSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductSku
        fields = ["id", "sku_name", "price", "validity", "lifetime", "stripe_price_id", "sku_code", "created_at"]
        read_only_fields = ["id", "sku_code", "created_at"]


class SkuEntrySerializer(serializers.Serializer):
    """One entry of an add-SKUs batch."""

    sku_name = serializers.CharField(max_length=200)
    price = serializers.IntegerField(min_value=1)
    validity = serializers.IntegerField(min_value=0, required=False, default=0)
    lifetime = serializers.BooleanField(required=False, default=False)
    stripe_price_id = serializers.CharField(max_length=255, required=False, allow_blank=True)


class SkuBatchSerializer(serializers.Serializer):
    sku_details = SkuEntrySerializer(many=True, allow_empty=False)


class SkuUpdateSerializer(serializers.Serializer):
    """Partial SKU patch. Only the keys present in the request are kept."""

    sku_name = serializers.CharField(max_length=200, required=False)
    price = serializers.IntegerField(min_value=1, required=False)
    validity = serializers.IntegerField(min_value=0, required=False)
    lifetime = serializers.BooleanField(required=False)
    stripe_price_id = serializers.CharField(max_length=255, required=False, allow_blank=True)


class LicenseSerializer(serializers.ModelSerializer):
    product = serializers.PrimaryKeyRelatedField(read_only=True)
    product_sku = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta:
        model = License
        fields = ["id", "product", "product_sku", "license_key", "is_sold", "order_id", "created_at", "updated_at"]
        read_only_fields = fields


class LicenseKeySerializer(serializers.Serializer):
    license_key = serializers.CharField(max_length=500)
