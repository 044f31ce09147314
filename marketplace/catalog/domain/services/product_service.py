"""
ProductService - Product CRUD, listing and image pipeline

Every product is mirrored by a ledger product at the payment provider.
Local writes and ledger calls are not atomic: a ledger failure after the
local write leaves the product flagged with ``stripe_sync_pending`` for the
reconcile_stripe_products command.
"""

import logging
import os
from typing import Any, Dict, List, Mapping, Optional

from django.conf import settings

from infrastructure.container import container
from infrastructure.media.interface import MediaHostInterface
from infrastructure.payments.interface import PaymentException, PaymentProviderInterface
from marketplace.catalog.domain.exceptions import ProductNotFound
from marketplace.catalog.domain.models import Product
from marketplace.catalog.infra.product_repository import ProductRepository

from .base import BaseService, ServiceResponse, service_response
from .identifiers import generate_public_id
from .product_query import ProductQuery


logger = logging.getLogger(__name__)

HOMEPAGE_LATEST_COUNT = 4
HOMEPAGE_TOP_RATED_COUNT = 8

DEFAULT_MEDIA_HOST = {
    "FOLDER": "digistore/products",
    "PUBLIC_ID_PREFIX": "digistore-product-",
    "BIG_SIZE": "400x420",
}


def media_host_setting(key: str) -> Any:
    return getattr(settings, "MEDIA_HOST", {}).get(key, DEFAULT_MEDIA_HOST.get(key))


def parse_size(size: str) -> Dict[str, int]:
    """'400x420' -> {'width': 400, 'height': 420}"""
    width, _, height = str(size).lower().partition("x")
    return {"width": int(width), "height": int(height or width)}


def is_truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false", "no", "off")
    return bool(value)


class ProductService(BaseService):
    """
    Service for managing the product catalog.

    Responsibilities:
    - Create, update and delete products, mirrored in the payment ledger
    - Homepage and search listings
    - Product detail with related products
    - Upload and replace the product image on the media host

    Dependencies:
    - PaymentProviderInterface: ledger products
    - MediaHostInterface: product images
    - ProductRepository: ORM access
    """

    def __init__(
        self,
        payment: Optional[PaymentProviderInterface] = None,
        media_host: Optional[MediaHostInterface] = None,
        repository: Optional[ProductRepository] = None,
    ):
        super().__init__()
        self.payment = payment or container.payment()
        self.media_host = media_host or container.media_host()
        self.repository = repository or ProductRepository()

    @BaseService.log_performance
    def create_product(self, data: Dict[str, Any]) -> ServiceResponse:
        """
        Create a product, creating its ledger product first when no ledger id is given.

        A ledger failure leaves nothing written locally. A local failure after
        the ledger call leaves an orphan ledger product.
        """
        data = dict(data)

        if not data.get("stripe_product_id"):
            ledger_product = self.payment.create_product(
                name=data.get("product_name"), description=data.get("description")
            )
            data["stripe_product_id"] = ledger_product.product_id

        product = self.repository.add(data)
        return service_response("Product created successfully", self.repository.refresh(product))

    @BaseService.log_performance
    def find_all_products(self, query: Optional[Mapping[str, Any]] = None, base_url: str = "") -> ServiceResponse:
        """
        List products.

        With a truthy ``homepage`` key the result is grouped into the newest and
        the best rated products, without metadata. Otherwise the remaining keys
        are translated by ProductQuery and the result carries paging metadata.

        Args:
            query: Flat query parameters
            base_url: Path used to build pagination links
        """
        params = dict(query or {})
        homepage = params.pop("homepage", None)

        if homepage is not None and is_truthy(homepage):
            latest = self.repository.latest(HOMEPAGE_LATEST_COUNT)
            top_rated = self.repository.top_rated(HOMEPAGE_TOP_RATED_COUNT)
            return service_response(
                "Products fetched successfully" if latest or top_rated else "No products found",
                {"latest_products": latest, "top_rated_products": top_rated},
            )

        return self.search_products(ProductQuery.from_params(params), base_url=base_url)

    @BaseService.log_performance
    def search_products(self, product_query: ProductQuery, base_url: str = "") -> ServiceResponse:
        """Run a translated listing query; the result carries paging metadata."""
        total = self.repository.count(product_query.filters, search=product_query.search)
        products = self.repository.find(product_query.filters, **product_query.options)

        return service_response(
            "Products fetched successfully" if products else "No products found",
            {"metadata": product_query.metadata(base_url, total), "products": products},
        )

    @BaseService.log_performance
    def find_one_product(self, product_id) -> ServiceResponse:
        """Return the product and every other product of the same category."""
        product = self._get_product(product_id)
        related_products = self.repository.related(product)

        return service_response(
            "Product fetched successfully",
            {"product": product, "related_products": related_products},
        )

    @BaseService.log_performance
    def update_product(self, product_id, data: Dict[str, Any]) -> ServiceResponse:
        """
        Apply a patch to a product.

        Name and description are pushed to the ledger unless the patch itself
        carries a ledger id. A blank ledger id never replaces the stored one.
        """
        product = self._get_product(product_id)
        data = dict(data)
        if "stripe_product_id" in data and not data["stripe_product_id"]:
            data.pop("stripe_product_id")

        product = self.repository.update(product, data)

        if not data.get("stripe_product_id"):
            self._push_to_ledger(product, name=product.product_name, description=product.description)

        return service_response("Product updated successfully", product)

    @BaseService.log_performance
    def remove_product(self, product_id) -> ServiceResponse:
        """Delete the product locally, then its ledger product. No rollback."""
        product = self._get_product(product_id)
        stripe_product_id = product.stripe_product_id

        self.repository.remove(product)

        if stripe_product_id:
            self.payment.delete_product(stripe_product_id)
        else:
            self.logger.warning(f"Product {product_id} had no ledger product to delete")

        return service_response("Product deleted successfully", {"id": str(product_id)})

    @BaseService.log_performance
    def upload_product_image(self, product_id, file_path: str) -> ServiceResponse:
        """
        Replace the product image.

        The previous asset is destroyed before the new one is uploaded. The
        local file is removed whatever the outcome of the upload.

        Args:
            product_id: Product UUID
            file_path: Path of the uploaded file on local disk

        Returns:
            ServiceResponse with the secure url of the new image
        """
        try:
            product = self._get_product(product_id)

            old_public_id = (product.image_details or {}).get("public_id")
            if old_public_id:
                self.media_host.destroy(old_public_id, invalidate=True)

            transformation = [
                dict(parse_size(media_host_setting("BIG_SIZE")), crop="fill"),
                {"quality": "auto"},
            ]
            asset = self.media_host.upload(
                file_path,
                folder=media_host_setting("FOLDER"),
                public_id=generate_public_id(media_host_setting("PUBLIC_ID_PREFIX")),
                transformation=transformation,
            )
        finally:
            self._remove_local_file(file_path)

        product = self.repository.update(product, {"image": asset.secure_url, "image_details": asset.to_dict()})
        self._push_to_ledger(product, images=[asset.secure_url])

        return service_response("Product image uploaded successfully", asset.secure_url)

    def sync_to_ledger(self, product: Product) -> None:
        """
        Push name, description and image of a product to the ledger and clear
        the pending flag. Used by the reconcile_stripe_products command.

        Raises:
            PaymentException: If the ledger rejects the update
        """
        images: List[str] = [product.image] if product.image else []
        self.payment.update_product(
            product.stripe_product_id,
            name=product.product_name,
            description=product.description,
            images=images,
        )
        self.repository.set_sync_pending(product, False)

    def _get_product(self, product_id) -> Product:
        product = self.repository.get(product_id)
        if product is None:
            raise ProductNotFound()
        return product

    def _push_to_ledger(self, product: Product, **fields) -> None:
        if not product.stripe_product_id:
            self.logger.warning(f"Product {product.id} has no ledger product, skipping ledger update")
            return

        try:
            self.payment.update_product(product.stripe_product_id, **fields)
        except PaymentException:
            self.logger.error(f"Ledger update failed for product {product.id}, marking for reconciliation")
            self.repository.set_sync_pending(product, True)
            raise

    def _remove_local_file(self, file_path: str) -> None:
        if file_path and os.path.exists(file_path):
            os.remove(file_path)
            self.logger.debug(f"Removed local upload {file_path}")
