from .product_serializers import ProductImageUploadSerializer, ProductSerializer, ProductWriteSerializer
from .review_serializers import ProductFeedbackSerializer, ReviewCreateSerializer
from .sku_serializers import (
    LicenseKeySerializer,
    LicenseSerializer,
    ProductSkuSerializer,
    SkuBatchSerializer,
    SkuUpdateSerializer,
)


__all__ = [
    "LicenseKeySerializer",
    "LicenseSerializer",
    "ProductFeedbackSerializer",
    "ProductImageUploadSerializer",
    "ProductSerializer",
    "ProductSkuSerializer",
    "ProductWriteSerializer",
    "ReviewCreateSerializer",
    "SkuBatchSerializer",
    "SkuUpdateSerializer",
]
