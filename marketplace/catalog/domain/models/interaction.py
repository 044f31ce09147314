import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from .catalog import Product


class ProductFeedback(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="feedback_details")
    customer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="feedbacks")
    # Stored so the review keeps a display name if the customer renames
    customer_name = models.CharField(max_length=150, blank=True, default="")
    rating = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    feedback_msg = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["product", "customer"], name="unique_product_customer_feedback"),
        ]
        ordering = ["created_at"]
        app_label = "marketplace"

    def __str__(self):
        return f"Feedback by {self.customer_name or self.customer_id} for {self.product.product_name}"
