"""
Base classes and utilities for the service layer.

Services never raise for expected failures. They return a ``ServiceResult``
built with ``service_ok`` or ``service_err`` and the API layer maps the error
code onto an HTTP status.
"""

import logging
import time
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Outcome of a service operation.

    Attributes:
        ok: True if operation succeeded, False otherwise
        value: The success value (present if ok=True)
        error: Error code from ``ErrorCodes`` (present if ok=False)
        error_detail: Human-readable error message (present if ok=False)

    Examples:
        >>> result = service_ok(order)
        >>> if result.ok:
        ...     return Response(OrderSerializer(result.value).data, 201)
        >>> return Response({"detail": result.error_detail}, 400)
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_detail: Optional[str] = None


def service_ok(value: T) -> ServiceResult[T]:
    """Create a successful ServiceResult wrapping ``value``."""
    return ServiceResult(ok=True, value=value)


def service_err(error: str, error_detail: str = "") -> ServiceResult:
    """
    Create a failed ServiceResult.

    Args:
        error: Error code (e.g., "cart_empty", "insufficient_stock")
        error_detail: Human-readable error message, defaults to the code

    Example:
        >>> return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")
    """
    return ServiceResult(ok=False, error=error, error_detail=error_detail or error)


class BaseService:
    """
    Base class for all services.

    Provides a logger named after the concrete class and a timing decorator.

    Usage:
        class CategoryService(BaseService):
            @BaseService.log_performance
            def list_categories(self):
                self.logger.info("Listing categories")
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__module__ + "." + self.__class__.__name__)

    @staticmethod
    def log_performance(func: Callable) -> Callable:
        """
        Decorator logging the execution time of a service method.

        Successful results are logged at info level, failed ``ServiceResult``
        values at warning level and exceptions at error level before being
        re-raised.
        """

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            start_time = time.time()
            method_name = f"{self.__class__.__name__}.{func.__name__}"

            try:
                self.logger.debug(f"{method_name} started")
                result = func(self, *args, **kwargs)
                elapsed_time = (time.time() - start_time) * 1000  # ms

                if isinstance(result, ServiceResult) and not result.ok:
                    self.logger.warning(f"{method_name} failed with error '{result.error}' in {elapsed_time:.2f}ms")
                else:
                    self.logger.info(f"{method_name} completed in {elapsed_time:.2f}ms")

                return result

            except Exception as e:
                elapsed_time = (time.time() - start_time) * 1000
                self.logger.error(
                    f"{method_name} raised exception after {elapsed_time:.2f}ms: {str(e)}",
                    exc_info=True,
                )
                raise

        return wrapper


class ErrorCodes:
    """Standard error codes used across services."""

    # User errors
    USER_NOT_FOUND = "user_not_found"
    EMAIL_TAKEN = "email_taken"
    USER_HAS_ORDERS = "user_has_orders"

    # Catalog errors
    CATEGORY_NOT_FOUND = "category_not_found"
    CATEGORY_NAME_TAKEN = "category_name_taken"
    CATEGORY_IN_USE = "category_in_use"
    PRODUCT_NOT_FOUND = "product_not_found"
    PRODUCT_CODE_TAKEN = "product_code_taken"
    PRODUCT_IN_USE = "product_in_use"

    # Cart errors
    CART_EMPTY = "cart_empty"
    INVALID_QUANTITY = "invalid_quantity"
    ITEM_NOT_IN_CART = "item_not_in_cart"
    NOT_A_CUSTOMER = "not_a_customer"

    # Order errors
    ORDER_NOT_FOUND = "order_not_found"
    ORDER_ALREADY_PAID = "order_already_paid"
    INVALID_ORDER_STATE = "invalid_order_state"

    # Payment errors
    INVALID_PAYMENT_METHOD = "invalid_payment_method"
    AMOUNT_MISMATCH = "amount_mismatch"
    PAYMENT_PROVIDER_ERROR = "payment_provider_error"

    # Shipping errors
    SHIPMENT_NOT_FOUND = "shipment_not_found"
    WEIGHT_LIMIT_EXCEEDED = "weight_limit_exceeded"

    # Inventory errors
    INSUFFICIENT_STOCK = "insufficient_stock"

    # Permission errors
    PERMISSION_DENIED = "permission_denied"

    # Validation errors
    VALIDATION_ERROR = "validation_error"
    INVALID_INPUT = "invalid_input"

    # Internal errors
    INTERNAL_ERROR = "internal_error"
