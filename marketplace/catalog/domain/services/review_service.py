"""
ReviewService - Product review management

A customer may review a product once, and only after buying it. The
product's avg_rating is recomputed from the stored ratings in the same
transaction as every insert or delete.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from django.db import IntegrityError, transaction

from marketplace.catalog.domain.exceptions import (
    DuplicateReview,
    ProductNotFound,
    ProductNotPurchased,
    ReviewNotFound,
    ReviewPermissionDenied,
)
from marketplace.catalog.domain.models import Product
from marketplace.catalog.infra.product_repository import ProductRepository
from marketplace.ordering.infra.order_repository import OrderRepository

from .base import BaseService, ServiceResponse, service_response


logger = logging.getLogger(__name__)

NO_RATING = "0"


def average_rating(ratings: List[int]) -> str:
    """Arithmetic mean with two decimals, or "0" when there are no ratings."""
    if not ratings:
        return NO_RATING
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return str(mean.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class ReviewService(BaseService):
    """
    Service for managing product reviews.

    Responsibilities:
    - Add a review (purchase and duplicate checks)
    - Remove a review
    - Keep Product.avg_rating in step with the stored ratings
    """

    def __init__(
        self,
        repository: Optional[ProductRepository] = None,
        order_repository: Optional[OrderRepository] = None,
    ):
        super().__init__()
        self.repository = repository or ProductRepository()
        self.order_repository = order_repository or OrderRepository()

    @BaseService.log_performance
    def add_product_review(self, product_id, rating: int, review: str, user) -> ServiceResponse:
        """
        Add a review by ``user``.

        Raises:
            ProductNotFound: Unknown product
            DuplicateReview: The user already reviewed the product
            ProductNotPurchased: No order of the user contains the product
        """
        product = self._get_product(product_id)

        if self.repository.has_feedback(product, user):
            raise DuplicateReview()

        if self.order_repository.find_one(user.pk, product.id) is None:
            raise ProductNotPurchased()

        try:
            with transaction.atomic():
                self.repository.add_feedback(product, user, rating=rating, feedback_msg=review)
                self.repository.set_avg_rating(product, average_rating(self.repository.ratings(product)))
        except IntegrityError as e:
            # Concurrent insert for the same (product, customer)
            raise DuplicateReview() from e

        self.logger.info(f"User {user.pk} rated product {product.id} {rating}, average now {product.avg_rating}")

        return service_response("Review added successfully", self.repository.refresh(product))

    @BaseService.log_performance
    def remove_product_review(self, product_id, review_id, user=None) -> ServiceResponse:
        """
        Remove a review of the product and recompute the average.

        When ``user`` is given it must be the author or a staff member.
        """
        product = self._get_product(product_id)

        feedback = self.repository.get_feedback(product, review_id)
        if feedback is None:
            raise ReviewNotFound()

        if user is not None and not user.is_staff and feedback.customer_id != user.pk:
            raise ReviewPermissionDenied()

        with transaction.atomic():
            self.repository.remove_feedback(feedback)
            self.repository.set_avg_rating(product, average_rating(self.repository.ratings(product)))

        return service_response("Review removed successfully", self.repository.refresh(product))

    def _get_product(self, product_id) -> Product:
        product = self.repository.get(product_id)
        if product is None:
            raise ProductNotFound()
        return product
