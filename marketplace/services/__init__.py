"""
Service layer primitives shared by every app.

Domain services live next to their models (``marketplace/<subdomain>/domain/services``)
and are obtained through ``infrastructure.container.container``.

Usage:
    from marketplace.services import ErrorCodes, service_ok, service_err

    result = container.cart_service().add_to_cart(user, product_id, 2)
    if not result.ok and result.error == ErrorCodes.INSUFFICIENT_STOCK:
        ...
"""

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

__all__ = [
    "BaseService",
    "ServiceResult",
    "service_ok",
    "service_err",
    "ErrorCodes",
]
