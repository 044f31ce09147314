import logging

from django.core.management.base import BaseCommand

from infrastructure.container import container
from infrastructure.payments.interface import PaymentException


logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Re-pushes name, description and image of products flagged stripe_sync_pending to Stripe."

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="List the products that would be synced without calling Stripe",
        )

    def handle(self, *args, **options):
        self.stdout.write(self.style.SUCCESS("Starting product reconciliation with Stripe..."))

        service = container.product_service()
        pending = service.repository.sync_pending()

        total_products = pending.count()
        self.stdout.write(f"Found {total_products} products pending ledger sync.")

        synced_count = 0
        skipped_count = 0
        error_count = 0

        for product in pending:
            if not product.stripe_product_id:
                self.stdout.write(self.style.WARNING(f"  Skipping product {product.id}: No Stripe product ID."))
                skipped_count += 1
                continue

            if options["dry_run"]:
                self.stdout.write(f"  Would sync product {product.id} -> {product.stripe_product_id}")
                continue

            try:
                service.sync_to_ledger(product)
                synced_count += 1
                self.stdout.write(self.style.SUCCESS(f"  Synced product {product.id}"))
            except PaymentException as e:
                error_count += 1
                logger.error(f"Ledger sync failed for product {product.id}: {e}")
                self.stdout.write(self.style.ERROR(f"  Failed to sync product {product.id}: {e}"))

        self.stdout.write(self.style.SUCCESS("--- Reconciliation Summary ---"))
        self.stdout.write(f"Pending products: {total_products}")
        self.stdout.write(self.style.SUCCESS(f"Synced successfully: {synced_count}"))
        self.stdout.write(self.style.WARNING(f"Skipped: {skipped_count}"))
        self.stdout.write(self.style.ERROR(f"Errors encountered: {error_count}"))
