"""
Stripe Payment Provider
========================

Concrete implementation of PaymentProviderInterface using Stripe products and prices.
"""

import logging
from typing import Any, Dict, List, Optional

import stripe
from django.conf import settings

from .interface import LedgerPrice, LedgerProduct, PaymentException, PaymentProviderInterface

logger = logging.getLogger(__name__)


class StripeProvider(PaymentProviderInterface):
    """
    Stripe ledger implementation.

    Configuration (in settings.py):
        STRIPE_SECRET_KEY: Stripe secret API key

    Every call is issued once; provider errors are wrapped in PaymentException.
    """

    def __init__(self):
        """Initialize Stripe provider with API credentials."""
        stripe.api_key = getattr(settings, "STRIPE_SECRET_KEY", "")

        if not stripe.api_key:
            logger.warning("STRIPE_SECRET_KEY not configured")

    def create_product(self, name: str, description: Optional[str] = None) -> LedgerProduct:
        """
        Create a Stripe product.

        Args:
            name: Product name
            description: Product description

        Returns:
            LedgerProduct

        Raises:
            PaymentException: If Stripe rejects the request
        """
        try:
            params: Dict[str, Any] = {"name": name}
            if description:
                params["description"] = description

            product = stripe.Product.create(**params)

            logger.info(f"Created Stripe product: {product.id}")

            return self._to_ledger_product(product)

        except stripe.StripeError as e:
            logger.error(f"Stripe product creation failed: {str(e)}")
            raise PaymentException(f"Failed to create product: {str(e)}") from e

    def update_product(
        self,
        product_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        images: Optional[List[str]] = None,
    ) -> LedgerProduct:
        """
        Modify a Stripe product.

        Args:
            product_id: Stripe product ID
            name: New name
            description: New description
            images: Replacement image URLs

        Returns:
            Updated LedgerProduct

        Raises:
            PaymentException: If Stripe rejects the request
        """
        try:
            params: Dict[str, Any] = {}
            if name is not None:
                params["name"] = name
            if description is not None:
                params["description"] = description
            if images is not None:
                params["images"] = images

            product = stripe.Product.modify(product_id, **params)

            logger.info(f"Updated Stripe product: {product_id} fields={sorted(params)}")

            return self._to_ledger_product(product)

        except stripe.StripeError as e:
            logger.error(f"Stripe product update failed for {product_id}: {str(e)}")
            raise PaymentException(f"Failed to update product: {str(e)}") from e

    def delete_product(self, product_id: str) -> bool:
        """
        Delete a Stripe product.

        Args:
            product_id: Stripe product ID

        Returns:
            True if Stripe reports the product as deleted

        Raises:
            PaymentException: If Stripe rejects the request
        """
        try:
            deleted = stripe.Product.delete(product_id)

            logger.info(f"Deleted Stripe product: {product_id}")

            return bool(deleted.get("deleted", False))

        except stripe.StripeError as e:
            logger.error(f"Stripe product deletion failed for {product_id}: {str(e)}")
            raise PaymentException(f"Failed to delete product: {str(e)}") from e

    def create_price(
        self,
        product_id: str,
        unit_amount: int,
        currency: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> LedgerPrice:
        """
        Create a Stripe price.

        Args:
            product_id: Stripe product ID
            unit_amount: Amount in the smallest currency unit
            currency: ISO currency code
            metadata: Custom metadata

        Returns:
            LedgerPrice

        Raises:
            PaymentException: If Stripe rejects the request
        """
        try:
            params: Dict[str, Any] = {
                "unit_amount": unit_amount,
                "currency": currency.lower(),
                "product": product_id,
            }

            if metadata:
                # Stripe metadata values are strings
                params["metadata"] = {key: "" if value is None else str(value) for key, value in metadata.items()}

            price = stripe.Price.create(**params)

            logger.info(f"Created Stripe price: {price.id} for product {product_id} ({unit_amount} {currency})")

            return self._to_ledger_price(price)

        except stripe.StripeError as e:
            logger.error(f"Stripe price creation failed for product {product_id}: {str(e)}")
            raise PaymentException(f"Failed to create price: {str(e)}") from e

    def update_price(self, price_id: str, active: bool) -> LedgerPrice:
        """
        Activate or deactivate a Stripe price.

        Args:
            price_id: Stripe price ID
            active: New active flag

        Returns:
            Updated LedgerPrice

        Raises:
            PaymentException: If Stripe rejects the request
        """
        try:
            price = stripe.Price.modify(price_id, active=active)

            logger.info(f"Updated Stripe price: {price_id} active={active}")

            return self._to_ledger_price(price)

        except stripe.StripeError as e:
            logger.error(f"Stripe price update failed for {price_id}: {str(e)}")
            raise PaymentException(f"Failed to update price: {str(e)}") from e

    def _to_ledger_product(self, product) -> LedgerProduct:
        """
        Map a Stripe product object to LedgerProduct.

        Args:
            product: Stripe Product object

        Returns:
            LedgerProduct
        """
        return LedgerProduct(
            product_id=product.id,
            name=product.name,
            description=product.get("description"),
            images=list(product.get("images") or []),
            active=product.get("active", True),
        )

    def _to_ledger_price(self, price) -> LedgerPrice:
        """
        Map a Stripe price object to LedgerPrice.

        Args:
            price: Stripe Price object

        Returns:
            LedgerPrice
        """
        return LedgerPrice(
            price_id=price.id,
            product_id=price.product,
            unit_amount=price.unit_amount,
            currency=price.currency,
            active=price.get("active", True),
            metadata=dict(price.get("metadata") or {}),
        )
