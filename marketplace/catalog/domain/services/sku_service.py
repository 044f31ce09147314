"""
SkuService - SKU and license key lifecycle

Each SKU is backed by a ledger price. Ledger prices are append-only: a price
change mints a new price and leaves the old one active; deleting the SKU
deactivates its current price.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

from django.conf import settings
from django.db import transaction

from infrastructure.container import container
from infrastructure.payments.interface import LedgerPrice, PaymentProviderInterface
from marketplace.catalog.domain.exceptions import ProductNotFound, SkuNotFound
from marketplace.catalog.domain.models import Product, ProductSku
from marketplace.catalog.infra.product_repository import ProductRepository
from utils.logging_utils import mask_value

from .base import BaseService, ServiceResponse, service_response
from .identifiers import generate_sku_code


logger = logging.getLogger(__name__)


class SkuService(BaseService):
    """
    Service for product SKUs and their license keys.

    Dependencies:
    - PaymentProviderInterface: ledger prices
    - ProductRepository: ORM access
    """

    def __init__(
        self,
        payment: Optional[PaymentProviderInterface] = None,
        repository: Optional[ProductRepository] = None,
    ):
        super().__init__()
        self.payment = payment or container.payment()
        self.repository = repository or ProductRepository()

    @property
    def currency(self) -> str:
        return getattr(settings, "LEDGER_CURRENCY", "inr")

    @BaseService.log_performance
    def add_product_skus(self, product_id, sku_details: Iterable[Dict[str, Any]]) -> ServiceResponse:
        """
        Append a batch of SKUs to a product.

        The whole batch shares one sku_code. Entries without a ledger price id
        get a new ledger price; the calls are issued one after the other.
        """
        product = self._get_product(product_id)
        sku_code = generate_sku_code()

        entries = []
        for detail in sku_details:
            entry = dict(detail)
            if not entry.get("stripe_price_id"):
                ledger_price = self._create_ledger_price(
                    product, price=entry["price"], lifetime=entry.get("lifetime", False), sku_code=sku_code
                )
                entry["stripe_price_id"] = ledger_price.price_id
            entry["sku_code"] = sku_code
            entries.append(entry)

        self.repository.add_skus(product, entries)

        return service_response("Product SKUs added successfully", self.repository.refresh(product))

    @BaseService.log_performance
    def update_product_sku_by_id(self, product_id, sku_id, data: Dict[str, Any]) -> ServiceResponse:
        """
        Patch a SKU. A changed price mints a new ledger price for the SKU.

        Returns:
            ServiceResponse with the refreshed product
        """
        product, sku = self._get_product_and_sku(product_id, sku_id)
        patch = dict(data)

        if patch.get("price") is not None and int(patch["price"]) != sku.price:
            ledger_price = self._create_ledger_price(
                product,
                price=int(patch["price"]),
                lifetime=patch.get("lifetime", sku.lifetime),
                sku_code=sku.sku_code,
            )
            patch["stripe_price_id"] = ledger_price.price_id
            self.logger.info(f"SKU {sku.id} price {sku.price} -> {patch['price']}, new price {ledger_price.price_id}")

        self.repository.update_sku(sku, patch)

        return service_response("Product SKU updated successfully", self.repository.refresh(product))

    @BaseService.log_performance
    def delete_product_sku_by_id(self, product_id, sku_id) -> ServiceResponse:
        """Deactivate the SKU's ledger price, then delete the SKU and its licenses."""
        product, sku = self._get_product_and_sku(product_id, sku_id)

        if sku.stripe_price_id:
            self.payment.update_price(sku.stripe_price_id, active=False)

        with transaction.atomic():
            removed_licenses = self.repository.remove_licenses(product, sku)
            self.repository.remove_sku(sku)

        self.logger.info(f"Deleted SKU {sku_id} of product {product_id} with {removed_licenses} license(s)")

        return service_response("Product SKU deleted successfully", {"id": str(product_id), "sku_id": str(sku_id)})

    @BaseService.log_performance
    def add_product_sku_license(self, product_id, sku_id, license_key: str) -> ServiceResponse:
        product, sku = self._get_product_and_sku(product_id, sku_id)
        license = self.repository.add_license(product, sku, license_key)
        return service_response("License key added successfully", license)

    @BaseService.log_performance
    def remove_product_sku_license(self, license_id) -> ServiceResponse:
        """Delete a license by id. An unknown id is not an error."""
        deleted = self.repository.remove_license(license_id)
        if not deleted:
            self.logger.info(f"License {license_id} not found, nothing removed")
        return service_response("License key removed successfully", {"deleted": deleted})

    @BaseService.log_performance
    def get_product_sku_licenses(self, product_id, sku_id) -> ServiceResponse:
        product, sku = self._get_product_and_sku(product_id, sku_id)
        licenses = self.repository.find_licenses(product, sku)
        return service_response("License keys fetched successfully", licenses)

    @BaseService.log_performance
    def update_product_sku_license(self, product_id, sku_id, license_id, license_key: str) -> ServiceResponse:
        """
        Change the key of a license.

        Product and SKU are checked for existence; the license itself is
        addressed by its id alone.
        """
        self._get_product_and_sku(product_id, sku_id)
        license = self.repository.update_license_key(license_id, license_key)
        if license is None:
            self.logger.info(f"License {license_id} not found, key {mask_value(license_key)} not stored")
        return service_response("License key updated successfully", license)

    def _create_ledger_price(self, product: Product, price: int, lifetime: bool, sku_code: str) -> LedgerPrice:
        return self.payment.create_price(
            product.stripe_product_id,
            unit_amount=int(price) * 100,
            currency=self.currency,
            metadata={
                "sku_code": sku_code,
                "lifetime": str(bool(lifetime)).lower(),
                "product_id": str(product.id),
                "price": price,
                "product_name": product.product_name,
                "product_image": product.image,
            },
        )

    def _get_product(self, product_id) -> Product:
        product = self.repository.get(product_id)
        if product is None:
            raise ProductNotFound()
        return product

    def _get_product_and_sku(self, product_id, sku_id) -> Tuple[Product, ProductSku]:
        product = self._get_product(product_id)
        sku = self.repository.get_sku(product, sku_id)
        if sku is None:
            raise SkuNotFound()
        return product, sku
