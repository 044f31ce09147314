from typing import Optional

from marketplace.ordering.domain.models import Order


class OrderRepository:
    """Read-only access to orders for the catalog."""

    def find_one(self, customer_id, product_id) -> Optional[Order]:
        """Return an order of the customer that contains the product, if any."""
        return Order.objects.filter(customer_id=customer_id, ordered_items__product_id=product_id).first()
