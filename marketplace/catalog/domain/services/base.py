"""
Base classes for the catalog service layer.

Every catalog operation answers with a ServiceResponse envelope
({"message", "success", "result"}); failures are raised as exceptions and
mapped to the failure envelope at the HTTP boundary.
"""

import logging
import time
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Optional

from marketplace.catalog.domain.exceptions import CatalogError


@dataclass
class ServiceResponse:
    """
    Uniform response envelope returned by catalog services.

    Attributes:
        message: Human-readable outcome
        success: True for completed operations
        result: Operation payload (model instance, dict, list or None)

    Examples:
        >>> response = service_response("Product fetched successfully", product)
        >>> response.to_dict()
        {'message': 'Product fetched successfully', 'success': True, 'result': <Product ...>}
    """

    message: str
    success: bool = True
    result: Optional[Any] = None

    def to_dict(self) -> dict:
        return {"message": self.message, "success": self.success, "result": self.result}


def service_response(message: str, result: Any = None) -> ServiceResponse:
    """Create a successful ServiceResponse."""
    return ServiceResponse(message=message, success=True, result=result)


def service_failure(message: str) -> ServiceResponse:
    """Create a failed ServiceResponse (used by the HTTP boundary)."""
    return ServiceResponse(message=message, success=False, result=None)


class BaseService:
    """
    Base class for all catalog services providing common functionality.

    Provides:
    - Logging with class name
    - Performance timing decorator

    Usage:
        class ProductService(BaseService):
            def __init__(self, payment):
                super().__init__()
                self.payment = payment

            @BaseService.log_performance
            def find_one_product(self, product_id):
                ...
    """

    def __init__(self):
        """Initialize base service with logger."""
        self.logger = logging.getLogger(self.__class__.__module__ + "." + self.__class__.__name__)

    @staticmethod
    def log_performance(func: Callable) -> Callable:
        """
        Decorator to log performance of service methods.

        Logs execution time and any errors that occur, then re-raises.

        Args:
            func: The service method to wrap

        Returns:
            Wrapped function with performance logging
        """

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            start_time = time.time()
            method_name = f"{self.__class__.__name__}.{func.__name__}"

            try:
                self.logger.debug(f"{method_name} started")
                result = func(self, *args, **kwargs)
                elapsed_time = (time.time() - start_time) * 1000  # Convert to ms

                if isinstance(result, ServiceResponse):
                    self.logger.info(f"{method_name} completed in {elapsed_time:.2f}ms: {result.message}")
                else:
                    self.logger.info(f"{method_name} completed in {elapsed_time:.2f}ms")

                return result

            except CatalogError as e:
                elapsed_time = (time.time() - start_time) * 1000
                self.logger.warning(f"{method_name} rejected after {elapsed_time:.2f}ms: {e.message}")
                raise

            except Exception as e:
                elapsed_time = (time.time() - start_time) * 1000
                self.logger.error(
                    f"{method_name} raised {type(e).__name__} after {elapsed_time:.2f}ms: {str(e)}",
                    exc_info=True,
                )
                raise

        return wrapper
