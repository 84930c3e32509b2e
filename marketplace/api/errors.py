"""
Mapping from service error codes to HTTP responses.

Every view returns failed ``ServiceResult`` values through ``error_response``
so the same code always yields the same status and a ``{"detail": ...}`` body.
"""

from rest_framework import status
from rest_framework.response import Response

from marketplace.services.base import ErrorCodes, ServiceResult

ERROR_STATUS = {
    # 404
    ErrorCodes.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.CATEGORY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.PRODUCT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.ITEM_NOT_IN_CART: status.HTTP_404_NOT_FOUND,
    ErrorCodes.ORDER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.SHIPMENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 403
    ErrorCodes.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCodes.NOT_A_CUSTOMER: status.HTTP_403_FORBIDDEN,
    # 409
    ErrorCodes.EMAIL_TAKEN: status.HTTP_409_CONFLICT,
    ErrorCodes.CATEGORY_NAME_TAKEN: status.HTTP_409_CONFLICT,
    ErrorCodes.PRODUCT_CODE_TAKEN: status.HTTP_409_CONFLICT,
    ErrorCodes.CATEGORY_IN_USE: status.HTTP_409_CONFLICT,
    ErrorCodes.PRODUCT_IN_USE: status.HTTP_409_CONFLICT,
    ErrorCodes.USER_HAS_ORDERS: status.HTTP_409_CONFLICT,
    ErrorCodes.ORDER_ALREADY_PAID: status.HTTP_409_CONFLICT,
    # 400
    ErrorCodes.CART_EMPTY: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INSUFFICIENT_STOCK: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INVALID_QUANTITY: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INVALID_ORDER_STATE: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INVALID_PAYMENT_METHOD: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.AMOUNT_MISMATCH: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.WEIGHT_LIMIT_EXCEEDED: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
}


def error_status(error: str) -> int:
    return ERROR_STATUS.get(error, status.HTTP_500_INTERNAL_SERVER_ERROR)


def error_response(result: ServiceResult) -> Response:
    return Response({"detail": result.error_detail}, status=error_status(result.error))
