"""
Payment Infrastructure Tests
==============================

Unit tests for the payment ledger abstraction layer.
"""

from unittest.mock import MagicMock, patch

import stripe
from django.test import TestCase, override_settings

from infrastructure.payments import (
    LedgerPrice,
    LedgerProduct,
    PaymentException,
    PaymentFactory,
    PaymentProviderInterface,
    StripeProvider,
)


def stripe_object(**values):
    """Stripe objects support both attribute and .get() access."""
    obj = MagicMock()
    for key, value in values.items():
        setattr(obj, key, value)
    obj.get.side_effect = lambda key, default=None: values.get(key, default)
    return obj


class PaymentInterfaceTest(TestCase):
    """Test PaymentProviderInterface contract."""

    def test_interface_is_abstract(self):
        """PaymentProviderInterface should not be instantiable."""
        with self.assertRaises(TypeError):
            PaymentProviderInterface()


@override_settings(STRIPE_SECRET_KEY="sk_test_fake")
class StripeProviderTest(TestCase):
    """Test StripeProvider implementation."""

    def setUp(self):
        self.provider = StripeProvider()

    def test_sets_api_key(self):
        self.assertEqual(stripe.api_key, "sk_test_fake")

    @patch("stripe.Product.create")
    def test_create_product_success(self, mock_create):
        mock_create.return_value = stripe_object(
            id="prod_123", name="Office Suite", description="Docs", images=[], active=True
        )

        result = self.provider.create_product(name="Office Suite", description="Docs")

        self.assertIsInstance(result, LedgerProduct)
        self.assertEqual(result.product_id, "prod_123")
        mock_create.assert_called_once_with(name="Office Suite", description="Docs")

    @patch("stripe.Product.create")
    def test_create_product_without_description(self, mock_create):
        mock_create.return_value = stripe_object(id="prod_123", name="Office Suite")

        self.provider.create_product(name="Office Suite")

        mock_create.assert_called_once_with(name="Office Suite")

    @patch("stripe.Product.create")
    def test_create_product_stripe_error(self, mock_create):
        mock_create.side_effect = stripe.StripeError("API error")

        with self.assertRaises(PaymentException) as ctx:
            self.provider.create_product(name="Office Suite")

        self.assertIn("Failed to create product", str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, stripe.StripeError)
        self.assertEqual(mock_create.call_count, 1)

    @patch("stripe.Product.modify")
    def test_update_product_sends_given_fields_only(self, mock_modify):
        mock_modify.return_value = stripe_object(
            id="prod_123", name="Office Suite", images=["https://cdn.example.com/a.jpg"]
        )

        result = self.provider.update_product("prod_123", images=["https://cdn.example.com/a.jpg"])

        mock_modify.assert_called_once_with("prod_123", images=["https://cdn.example.com/a.jpg"])
        self.assertEqual(result.images, ["https://cdn.example.com/a.jpg"])

    @patch("stripe.Product.modify")
    def test_update_product_stripe_error(self, mock_modify):
        mock_modify.side_effect = stripe.StripeError("No such product")

        with self.assertRaises(PaymentException):
            self.provider.update_product("prod_missing", name="x")

    @patch("stripe.Product.delete")
    def test_delete_product(self, mock_delete):
        mock_delete.return_value = {"id": "prod_123", "deleted": True}

        self.assertTrue(self.provider.delete_product("prod_123"))
        mock_delete.assert_called_once_with("prod_123")

    @patch("stripe.Price.create")
    def test_create_price_stringifies_metadata(self, mock_create):
        mock_create.return_value = stripe_object(
            id="price_123",
            product="prod_123",
            unit_amount=99900,
            currency="inr",
            active=True,
            metadata={"sku_code": "abc", "price": "999"},
        )

        result = self.provider.create_price(
            "prod_123",
            unit_amount=99900,
            currency="INR",
            metadata={"sku_code": "abc", "price": 999, "product_image": None},
        )

        self.assertIsInstance(result, LedgerPrice)
        self.assertEqual(result.price_id, "price_123")
        mock_create.assert_called_once_with(
            unit_amount=99900,
            currency="inr",
            product="prod_123",
            metadata={"sku_code": "abc", "price": "999", "product_image": ""},
        )

    @patch("stripe.Price.modify")
    def test_deactivate_price(self, mock_modify):
        mock_modify.return_value = stripe_object(
            id="price_123", product="prod_123", unit_amount=100, currency="inr", active=False
        )

        result = self.provider.update_price("price_123", active=False)

        self.assertFalse(result.active)
        mock_modify.assert_called_once_with("price_123", active=False)

    @patch("stripe.Price.modify")
    def test_update_price_stripe_error(self, mock_modify):
        mock_modify.side_effect = stripe.StripeError("No such price")

        with self.assertRaises(PaymentException):
            self.provider.update_price("price_missing", active=False)


class PaymentFactoryTest(TestCase):
    """Test PaymentFactory."""

    @override_settings(PAYMENT_PROVIDER="stripe")
    def test_create_stripe_provider(self):
        self.assertIsInstance(PaymentFactory.create(), StripeProvider)

    def test_create_with_explicit_backend(self):
        self.assertIsInstance(PaymentFactory.create("stripe"), StripeProvider)

    def test_create_invalid_backend(self):
        with self.assertRaises(ValueError):
            PaymentFactory.create("paypal")
