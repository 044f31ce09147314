"""
Payment Ledger Interface
========================

Abstract base class defining the contract for the payment ledger.
Local products and SKUs are mirrored 1:1 as ledger products and prices.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class LedgerProduct:
    """
    Represents a product record held by the payment provider.

    Attributes:
        product_id: Provider product identifier (e.g. 'prod_...')
        name: Product name
        description: Product description
        images: Image URLs attached to the product
        active: Whether the product can be sold
    """

    product_id: str
    name: str
    description: Optional[str] = None
    images: List[str] = field(default_factory=list)
    active: bool = True


@dataclass
class LedgerPrice:
    """
    Represents a price record held by the payment provider.

    Prices are append-only: a new amount means a new price record.

    Attributes:
        price_id: Provider price identifier (e.g. 'price_...')
        product_id: Provider product the price belongs to
        unit_amount: Amount in the smallest currency unit
        currency: ISO currency code
        active: Whether the price can be used for new purchases
        metadata: Additional custom data
    """

    price_id: str
    product_id: str
    unit_amount: int
    currency: str
    active: bool = True
    metadata: Dict[str, Any] = field(default_factory=dict)


class PaymentProviderInterface(ABC):
    """
    Abstract interface for payment ledger operations.

    Concrete implementations:
        - StripeProvider: Stripe products and prices
    """

    @abstractmethod
    def create_product(self, name: str, description: Optional[str] = None) -> LedgerProduct:
        """
        Create a product in the ledger.

        Args:
            name: Product name
            description: Product description

        Returns:
            LedgerProduct with the provider identifier

        Raises:
            PaymentException: If creation fails
        """
        pass

    @abstractmethod
    def update_product(
        self,
        product_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        images: Optional[List[str]] = None,
    ) -> LedgerProduct:
        """
        Update an existing ledger product. Only the given fields are sent.

        Args:
            product_id: Provider product identifier
            name: New name
            description: New description
            images: Replacement list of image URLs

        Returns:
            Updated LedgerProduct

        Raises:
            PaymentException: If the update fails
        """
        pass

    @abstractmethod
    def delete_product(self, product_id: str) -> bool:
        """
        Delete a ledger product.

        Args:
            product_id: Provider product identifier

        Returns:
            True if the provider reports the product as deleted

        Raises:
            PaymentException: If deletion fails
        """
        pass

    @abstractmethod
    def create_price(
        self,
        product_id: str,
        unit_amount: int,
        currency: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> LedgerPrice:
        """
        Create a new price for a ledger product.

        Args:
            product_id: Provider product identifier
            unit_amount: Amount in the smallest currency unit
            currency: ISO currency code
            metadata: Custom data to attach to the price

        Returns:
            LedgerPrice with the provider identifier

        Raises:
            PaymentException: If creation fails
        """
        pass

    @abstractmethod
    def update_price(self, price_id: str, active: bool) -> LedgerPrice:
        """
        Activate or deactivate a ledger price.

        Args:
            price_id: Provider price identifier
            active: New active flag

        Returns:
            Updated LedgerPrice

        Raises:
            PaymentException: If the update fails
        """
        pass


class PaymentException(Exception):
    """Base exception for payment ledger operations."""

    pass
