from .catalog import Product, ProductSku
from .interaction import ProductFeedback
from .license import License


__all__ = [
    "Product",
    "ProductSku",
    "License",
    "ProductFeedback",
]
