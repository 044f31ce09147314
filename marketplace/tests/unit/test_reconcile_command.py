from io import StringIO
from unittest.mock import MagicMock, patch

import pytest
from django.core.management import call_command

from infrastructure.payments.interface import PaymentException
from marketplace.catalog.domain.services import ProductService
from marketplace.tests.factories import ProductFactory


@pytest.fixture
def mock_payment():
    return MagicMock()


@pytest.fixture
def product_service(mock_payment):
    service = ProductService(payment=mock_payment, media_host=MagicMock())
    with patch("marketplace.management.commands.reconcile_stripe_products.container") as mock_container:
        mock_container.product_service.return_value = service
        yield service


def run_command(*args):
    out = StringIO()
    call_command("reconcile_stripe_products", *args, stdout=out)
    return out.getvalue()


@pytest.mark.unit
@pytest.mark.django_db
class TestReconcileStripeProducts:
    def test_syncs_pending_products(self, product_service, mock_payment):
        pending = ProductFactory(stripe_sync_pending=True, stripe_product_id="prod_pending")
        ProductFactory()

        output = run_command()

        pending.refresh_from_db()
        assert pending.stripe_sync_pending is False
        mock_payment.update_product.assert_called_once()
        assert mock_payment.update_product.call_args.args == ("prod_pending",)
        assert "Synced successfully: 1" in output

    def test_dry_run_changes_nothing(self, product_service, mock_payment):
        pending = ProductFactory(stripe_sync_pending=True)

        output = run_command("--dry-run")

        pending.refresh_from_db()
        assert pending.stripe_sync_pending is True
        mock_payment.update_product.assert_not_called()
        assert "Would sync" in output

    def test_failures_are_counted_not_raised(self, product_service, mock_payment):
        failing = ProductFactory(stripe_sync_pending=True)
        mock_payment.update_product.side_effect = PaymentException("Stripe down")

        output = run_command()

        failing.refresh_from_db()
        assert failing.stripe_sync_pending is True
        assert "Errors encountered: 1" in output

    def test_skips_products_without_ledger_id(self, product_service, mock_payment):
        ProductFactory(stripe_sync_pending=True, stripe_product_id="")

        output = run_command()

        mock_payment.update_product.assert_not_called()
        assert "Skipped: 1" in output
