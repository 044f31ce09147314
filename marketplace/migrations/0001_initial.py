import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import marketplace.catalog.domain.models.catalog


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("product_name", models.CharField(max_length=200)),
                ("description", models.TextField()),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("Operating System", "Operating System"),
                            ("Application Software", "Application Software"),
                        ],
                        max_length=50,
                    ),
                ),
                (
                    "platform_type",
                    models.CharField(
                        choices=[
                            ("Windows", "Windows"),
                            ("Mac", "Mac"),
                            ("Linux", "Linux"),
                            ("Android", "Android"),
                            ("iOS", "iOS"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "base_type",
                    models.CharField(choices=[("Computer", "Computer"), ("Mobile", "Mobile")], max_length=20),
                ),
                ("product_url", models.URLField(max_length=500)),
                ("download_url", models.URLField(max_length=500)),
                (
                    "requirement_specification",
                    models.JSONField(blank=True, default=list, help_text="List of {key: value} specs"),
                ),
                ("highlights", models.JSONField(blank=True, default=list, help_text="Bullet point highlights")),
                (
                    "image",
                    models.URLField(
                        default=marketplace.catalog.domain.models.catalog.default_product_image, max_length=500
                    ),
                ),
                (
                    "image_details",
                    models.JSONField(blank=True, default=dict, help_text="Media host public id and metadata"),
                ),
                ("avg_rating", models.CharField(default="0", max_length=10)),
                ("stripe_product_id", models.CharField(blank=True, default="", max_length=255)),
                (
                    "stripe_sync_pending",
                    models.BooleanField(
                        default=False,
                        help_text="A ledger update failed after the local write and must be replayed",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["category"], name="mkt_product_category_idx"),
                    models.Index(fields=["-created_at"], name="mkt_product_created_idx"),
                    models.Index(fields=["platform_type", "base_type"], name="mkt_product_platform_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProductSku",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("sku_name", models.CharField(max_length=200)),
                (
                    "price",
                    models.PositiveIntegerField(
                        help_text="Price in major currency unit",
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                ("validity", models.PositiveIntegerField(default=0, help_text="Validity in days")),
                ("lifetime", models.BooleanField(default=False)),
                ("stripe_price_id", models.CharField(blank=True, default="", max_length=255)),
                ("sku_code", models.CharField(blank=True, default="", max_length=64)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sku_details",
                        to="marketplace.product",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
                "indexes": [models.Index(fields=["sku_code"], name="mkt_sku_code_idx")],
            },
        ),
        migrations.CreateModel(
            name="License",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("license_key", models.CharField(max_length=500)),
                ("is_sold", models.BooleanField(default=False)),
                ("order_id", models.CharField(blank=True, default="", max_length=64)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="licenses",
                        to="marketplace.product",
                    ),
                ),
                (
                    "product_sku",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="licenses",
                        to="marketplace.productsku",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
                "indexes": [
                    models.Index(fields=["product", "product_sku"], name="mkt_license_product_sku_idx"),
                    models.Index(fields=["product_sku", "is_sold"], name="mkt_license_sku_sold_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProductFeedback",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("customer_name", models.CharField(blank=True, default="", max_length=150)),
                (
                    "rating",
                    models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)]),
                ),
                ("feedback_msg", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="feedbacks",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="feedback_details",
                        to="marketplace.product",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
                "constraints": [
                    models.UniqueConstraint(fields=("product", "customer"), name="unique_product_customer_feedback")
                ],
            },
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("customer_email", models.EmailField(blank=True, default="", max_length=254)),
                (
                    "order_status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("completed", "Completed"), ("cancelled", "Cancelled")],
                        default="pending",
                        max_length=20,
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("paid", "Paid"),
                            ("failed", "Failed"),
                            ("refunded", "Refunded"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("total_amount", models.PositiveIntegerField(default=0, help_text="Total in major currency unit")),
                ("checkout_session_id", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("product_name", models.CharField(blank=True, default="", max_length=200)),
                ("quantity", models.PositiveIntegerField(default=1)),
                ("price", models.PositiveIntegerField(default=0)),
                ("lifetime", models.BooleanField(default=False)),
                ("license_keys", models.JSONField(blank=True, default=list)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="ordered_items",
                        to="marketplace.order",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="order_items",
                        to="marketplace.product",
                    ),
                ),
                (
                    "sku",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="order_items",
                        to="marketplace.productsku",
                    ),
                ),
            ],
            options={
                "indexes": [models.Index(fields=["product"], name="mkt_orderitem_product_idx")],
            },
        ),
    ]
