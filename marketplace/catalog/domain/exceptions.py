class CatalogError(Exception):
    """Base class for catalog exceptions."""

    message = "Catalog operation failed"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class NotFoundError(CatalogError):
    """Raised when an addressed catalog record does not exist."""

    message = "Not found"


class ProductNotFound(NotFoundError):
    message = "Product not found"


class SkuNotFound(NotFoundError):
    message = "Product SKU not found"


class ReviewNotFound(NotFoundError):
    message = "Review not found"


class ClientError(CatalogError):
    """Raised when the request is valid but not allowed in the current state."""

    pass


class DuplicateReview(ClientError):
    message = "You have already reviewed this product"


class ProductNotPurchased(ClientError):
    message = "You can only review products you have purchased"


class InvalidQuery(ClientError):
    message = "Invalid query parameters"


class ReviewPermissionDenied(CatalogError):
    message = "You can only remove your own reviews"
