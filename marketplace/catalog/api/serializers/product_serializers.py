import json
import logging

from rest_framework import serializers

from marketplace.catalog.domain.models import Product

from .review_serializers import ProductFeedbackSerializer
from .sku_serializers import ProductSkuSerializer


logger = logging.getLogger(__name__)


class FlexibleJSONField(serializers.Field):
    """Accepts a JSON list either as a list or as a JSON-encoded string (multipart forms)."""

    def to_internal_value(self, data):
        if isinstance(data, str):
            try:
                data = json.loads(data) if data.strip() else []
            except ValueError as e:
                raise serializers.ValidationError("Expected a JSON list") from e
        if data is None:
            return []
        if not isinstance(data, list):
            raise serializers.ValidationError("Expected a list")
        return data

    def to_representation(self, value):
        return value if value is not None else []


class ProductSerializer(serializers.ModelSerializer):
    """
    Full product representation with SKUs and feedback.

    Pass ``fields=[...]`` to restrict the output to a projection.
    """

    sku_details = ProductSkuSerializer(many=True, read_only=True)
    feedback_details = ProductFeedbackSerializer(many=True, read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "product_name",
            "description",
            "category",
            "platform_type",
            "base_type",
            "product_url",
            "download_url",
            "requirement_specification",
            "highlights",
            "image",
            "image_details",
            "avg_rating",
            "stripe_product_id",
            "stripe_sync_pending",
            "sku_details",
            "feedback_details",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def __init__(self, *args, **kwargs):
        projection = kwargs.pop("fields", None)
        super().__init__(*args, **kwargs)

        if projection:
            for name in set(self.fields) - set(projection):
                self.fields.pop(name)


class ProductWriteSerializer(serializers.ModelSerializer):
    """Validates create and update bodies; the service performs the write."""

    requirement_specification = FlexibleJSONField(required=False)
    highlights = FlexibleJSONField(required=False)

    class Meta:
        model = Product
        fields = [
            "product_name",
            "description",
            "category",
            "platform_type",
            "base_type",
            "product_url",
            "download_url",
            "requirement_specification",
            "highlights",
            "stripe_product_id",
        ]
        extra_kwargs = {"stripe_product_id": {"required": False, "allow_blank": False}}

    def validate_requirement_specification(self, value):
        if any(not isinstance(item, dict) for item in value):
            raise serializers.ValidationError("Each requirement must be an object")
        return value

    def validate_highlights(self, value):
        if any(not isinstance(item, str) for item in value):
            raise serializers.ValidationError("Each highlight must be a string")
        return value


class ProductImageUploadSerializer(serializers.Serializer):
    product_image = serializers.ImageField()
