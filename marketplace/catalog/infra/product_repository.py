"""
ProductRepository - ORM access for the catalog

Wraps every query the catalog services issue against products, SKUs,
licenses and feedback so the services never build querysets themselves.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from django.core.exceptions import ValidationError
from django.db.models import FloatField, Q, QuerySet
from django.db.models.functions import Cast

from marketplace.catalog.domain.models import License, Product, ProductFeedback, ProductSku
from utils.logging_utils import mask_value


logger = logging.getLogger(__name__)

# avg_rating is stored as a decimal string; numeric ordering goes through this annotation
RATING_VALUE = "rating_value"

PRODUCT_FIELDS = (
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
    "image",
    "image_details",
)

SKU_FIELDS = ("sku_name", "price", "validity", "lifetime", "stripe_price_id", "sku_code")


class ProductRepository:
    """
    Django ORM repository for Product and its child records.

    Lookups by id return None for unknown or malformed ids.
    """

    # Products

    def _products(self) -> QuerySet:
        return Product.objects.prefetch_related("sku_details", "feedback_details").annotate(
            **{RATING_VALUE: Cast("avg_rating", FloatField())}
        )

    def add(self, data: Dict[str, Any]) -> Product:
        product = Product.objects.create(**{key: value for key, value in data.items() if key in PRODUCT_FIELDS})
        logger.info(f"Created product {product.id}: {product.product_name}")
        return product

    def get(self, product_id) -> Optional[Product]:
        try:
            return self._products().get(id=product_id)
        except (Product.DoesNotExist, ValidationError, ValueError):
            return None

    def find(
        self,
        filters: Dict[str, Any],
        search: Optional[str] = None,
        sort: Optional[List[str]] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Product]:
        queryset = self._filtered(filters, search)

        if sort:
            queryset = queryset.order_by(*[self._order_expression(expression) for expression in sort])

        end = skip + limit if limit else None
        return list(queryset[skip:end])

    def count(self, filters: Dict[str, Any], search: Optional[str] = None) -> int:
        return self._filtered(filters, search).count()

    def latest(self, count: int) -> List[Product]:
        return list(self._products().order_by("-created_at")[:count])

    def top_rated(self, count: int) -> List[Product]:
        return list(self._products().order_by(f"-{RATING_VALUE}", "-created_at")[:count])

    def related(self, product: Product) -> List[Product]:
        return list(self._products().filter(category=product.category).exclude(id=product.id))

    def update(self, product: Product, data: Dict[str, Any]) -> Product:
        changed = [key for key in data if key in PRODUCT_FIELDS]
        for key in changed:
            setattr(product, key, data[key])
        if changed:
            product.save(update_fields=changed + ["updated_at"])
        return self.refresh(product)

    def refresh(self, product: Product) -> Product:
        return self.get(product.id)

    def remove(self, product: Product) -> None:
        product_id = product.id
        product.delete()
        logger.info(f"Deleted product {product_id}")

    def set_sync_pending(self, product: Product, pending: bool) -> None:
        Product.objects.filter(id=product.id).update(stripe_sync_pending=pending)
        product.stripe_sync_pending = pending

    def sync_pending(self) -> QuerySet:
        return Product.objects.filter(stripe_sync_pending=True).order_by("created_at")

    def set_avg_rating(self, product: Product, avg_rating: str) -> None:
        Product.objects.filter(id=product.id).update(avg_rating=avg_rating)
        product.avg_rating = avg_rating

    # SKUs

    def add_skus(self, product: Product, entries: Iterable[Dict[str, Any]]) -> List[ProductSku]:
        skus = [
            ProductSku.objects.create(
                product=product, **{key: value for key, value in entry.items() if key in SKU_FIELDS}
            )
            for entry in entries
        ]
        logger.info(f"Added {len(skus)} SKU(s) to product {product.id}")
        return skus

    def get_sku(self, product: Product, sku_id) -> Optional[ProductSku]:
        try:
            return ProductSku.objects.get(id=sku_id, product=product)
        except (ProductSku.DoesNotExist, ValidationError, ValueError):
            return None

    def update_sku(self, sku: ProductSku, data: Dict[str, Any]) -> ProductSku:
        changed = [key for key in data if key in SKU_FIELDS]
        for key in changed:
            setattr(sku, key, data[key])
        if changed:
            sku.save(update_fields=changed)
        return sku

    def remove_sku(self, sku: ProductSku) -> None:
        sku_id = sku.id
        sku.delete()
        logger.info(f"Deleted SKU {sku_id}")

    # Licenses

    def add_license(self, product: Product, sku: ProductSku, license_key: str) -> License:
        license = License.objects.create(product=product, product_sku=sku, license_key=license_key)
        logger.info(f"Added license {mask_value(license_key)} to SKU {sku.id}")
        return license

    def find_licenses(self, product: Product, sku: ProductSku) -> List[License]:
        return list(License.objects.filter(product=product, product_sku=sku))

    def update_license_key(self, license_id, license_key: str) -> Optional[License]:
        try:
            license = License.objects.get(id=license_id)
        except (License.DoesNotExist, ValidationError, ValueError):
            return None

        license.license_key = license_key
        license.save(update_fields=["license_key", "updated_at"])
        logger.info(f"Updated license {license_id} key to {mask_value(license_key)}")
        return license

    def remove_license(self, license_id) -> int:
        try:
            deleted, _ = License.objects.filter(id=license_id).delete()
        except (ValidationError, ValueError):
            return 0
        return deleted

    def remove_licenses(self, product: Product, sku: ProductSku) -> int:
        deleted, _ = License.objects.filter(product=product, product_sku=sku).delete()
        return deleted

    # Feedback

    def has_feedback(self, product: Product, customer) -> bool:
        return ProductFeedback.objects.filter(product=product, customer=customer).exists()

    def get_feedback(self, product: Product, feedback_id) -> Optional[ProductFeedback]:
        try:
            return ProductFeedback.objects.get(id=feedback_id, product=product)
        except (ProductFeedback.DoesNotExist, ValidationError, ValueError):
            return None

    def add_feedback(self, product: Product, customer, rating: int, feedback_msg: str) -> ProductFeedback:
        return ProductFeedback.objects.create(
            product=product,
            customer=customer,
            customer_name=customer.get_full_name() or customer.get_username(),
            rating=rating,
            feedback_msg=feedback_msg,
        )

    def remove_feedback(self, feedback: ProductFeedback) -> None:
        feedback.delete()

    def ratings(self, product: Product) -> List[int]:
        return list(ProductFeedback.objects.filter(product=product).values_list("rating", flat=True))

    # Helpers

    def _filtered(self, filters: Dict[str, Any], search: Optional[str]) -> QuerySet:
        queryset = self._products()
        try:
            queryset = queryset.filter(**filters)
        except (ValidationError, ValueError):
            # A malformed value (e.g. a bad UUID) matches nothing
            return queryset.none()
        if search:
            queryset = queryset.filter(Q(product_name__icontains=search))
        return queryset

    def _order_expression(self, expression: str) -> str:
        descending = expression.startswith("-")
        name = expression.lstrip("-")
        if name == "avg_rating":
            name = RATING_VALUE
        return f"-{name}" if descending else name
