import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


def default_product_image():
    return getattr(settings, "DEFAULT_PRODUCT_IMAGE", "")


class Product(models.Model):
    CATEGORY_CHOICES = [
        ("Operating System", "Operating System"),
        ("Application Software", "Application Software"),
    ]

    PLATFORM_CHOICES = [
        ("Windows", "Windows"),
        ("Mac", "Mac"),
        ("Linux", "Linux"),
        ("Android", "Android"),
        ("iOS", "iOS"),
    ]

    BASE_TYPE_CHOICES = [
        ("Computer", "Computer"),
        ("Mobile", "Mobile"),
    ]

    # Basic Information
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product_name = models.CharField(max_length=200)
    description = models.TextField()
    category = models.CharField(max_length=50, choices=CATEGORY_CHOICES)
    platform_type = models.CharField(max_length=20, choices=PLATFORM_CHOICES)
    base_type = models.CharField(max_length=20, choices=BASE_TYPE_CHOICES)
    product_url = models.URLField(max_length=500)
    download_url = models.URLField(max_length=500)

    # Product Attributes
    requirement_specification = models.JSONField(default=list, blank=True, help_text="List of {key: value} specs")
    highlights = models.JSONField(default=list, blank=True, help_text="Bullet point highlights")

    # Image (media host)
    image = models.URLField(max_length=500, default=default_product_image)
    image_details = models.JSONField(default=dict, blank=True, help_text="Media host public id and metadata")

    # Ratings
    avg_rating = models.CharField(max_length=10, default="0")

    # Payment ledger
    stripe_product_id = models.CharField(max_length=255, blank=True, default="")
    stripe_sync_pending = models.BooleanField(
        default=False, help_text="A ledger update failed after the local write and must be replayed"
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["category"], name="mkt_product_category_idx"),
            models.Index(fields=["-created_at"], name="mkt_product_created_idx"),
            models.Index(fields=["platform_type", "base_type"], name="mkt_product_platform_idx"),
        ]

    def __str__(self):
        return self.product_name


class ProductSku(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="sku_details")
    sku_name = models.CharField(max_length=200)
    price = models.PositiveIntegerField(validators=[MinValueValidator(1)], help_text="Price in major currency unit")
    validity = models.PositiveIntegerField(default=0, help_text="Validity in days")
    lifetime = models.BooleanField(default=False)
    stripe_price_id = models.CharField(max_length=255, blank=True, default="")
    sku_code = models.CharField(max_length=64, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["sku_code"], name="mkt_sku_code_idx"),
        ]

    def __str__(self):
        return f"{self.sku_name} ({self.product.product_name})"
