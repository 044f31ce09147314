from marketplace.catalog.domain.models import License, Product, ProductFeedback, ProductSku
from marketplace.ordering.domain.models import Order, OrderItem


__all__ = [
    "Product",
    "ProductSku",
    "License",
    "ProductFeedback",
    "Order",
    "OrderItem",
]
