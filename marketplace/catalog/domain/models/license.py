import uuid

from django.db import models

from .catalog import Product, ProductSku


class License(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="licenses")
    product_sku = models.ForeignKey(ProductSku, on_delete=models.CASCADE, related_name="licenses")
    license_key = models.CharField(max_length=500)
    # Written by order fulfilment, never by the catalog
    is_sold = models.BooleanField(default=False)
    order_id = models.CharField(max_length=64, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["product", "product_sku"], name="mkt_license_product_sku_idx"),
            models.Index(fields=["product_sku", "is_sold"], name="mkt_license_sku_sold_idx"),
        ]

    def __str__(self):
        return f"License for {self.product_sku_id}"
