import uuid

from django.conf import settings
from django.db import models

from marketplace.catalog.domain.models.catalog import Product, ProductSku


class Order(models.Model):
    ORDER_STATUS_CHOICES = [
        ("pending", "Pending"),
        ("completed", "Completed"),
        ("cancelled", "Cancelled"),
    ]

    PAYMENT_STATUS_CHOICES = [
        ("pending", "Pending"),
        ("paid", "Paid"),
        ("failed", "Failed"),
        ("refunded", "Refunded"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    customer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="orders")
    customer_email = models.EmailField(blank=True, default="")

    order_status = models.CharField(max_length=20, choices=ORDER_STATUS_CHOICES, default="pending")
    payment_status = models.CharField(max_length=20, choices=PAYMENT_STATUS_CHOICES, default="pending")
    total_amount = models.PositiveIntegerField(default=0, help_text="Total in major currency unit")
    checkout_session_id = models.CharField(max_length=255, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"

    def __str__(self):
        return f"Order {str(self.id)[:8]} by {self.customer_id}"


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="ordered_items")
    # Kept when the catalog entry goes away so purchase history survives
    product = models.ForeignKey(Product, on_delete=models.SET_NULL, null=True, related_name="order_items")
    sku = models.ForeignKey(ProductSku, on_delete=models.SET_NULL, null=True, blank=True, related_name="order_items")
    product_name = models.CharField(max_length=200, blank=True, default="")
    quantity = models.PositiveIntegerField(default=1)
    price = models.PositiveIntegerField(default=0)
    lifetime = models.BooleanField(default=False)
    license_keys = models.JSONField(default=list, blank=True)

    class Meta:
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["product"], name="mkt_orderitem_product_idx"),
        ]

    def __str__(self):
        return f"{self.quantity}x {self.product_name} in order {str(self.order_id)[:8]}"
