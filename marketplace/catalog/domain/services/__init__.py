from .base import BaseService, ServiceResponse, service_failure, service_response
from .product_query import ProductQuery
from .product_service import ProductService, is_truthy
from .review_service import ReviewService, average_rating
from .sku_service import SkuService


__all__ = [
    "BaseService",
    "ServiceResponse",
    "service_failure",
    "service_response",
    "ProductQuery",
    "ProductService",
    "is_truthy",
    "ReviewService",
    "average_rating",
    "SkuService",
]
