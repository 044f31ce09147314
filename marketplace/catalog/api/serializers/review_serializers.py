from rest_framework import serializers

from marketplace.catalog.domain.models import ProductFeedback


class ProductFeedbackSerializer(serializers.ModelSerializer):
    customer = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta:
        model = ProductFeedback
        fields = ["id", "customer", "customer_name", "rating", "feedback_msg", "created_at"]
        read_only_fields = fields


class ReviewCreateSerializer(serializers.Serializer):
    """Request body for adding a review. Ratings have a lower bound only."""

    rating = serializers.IntegerField(min_value=1)
    review = serializers.CharField(required=False, allow_blank=True, default="")
