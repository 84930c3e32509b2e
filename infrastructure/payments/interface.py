"""
Payment Provider Interface
===========================

Abstract base class defining the contract for charging orders.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional


class PaymentStatus(str, Enum):
    """Payment status enumeration."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class PaymentCharge:
    """
    Represents a charge accepted by the provider.

    Attributes:
        transaction_id: Provider transaction identifier
        payment_url: URL where the customer completes or reviews the payment
        amount: Charged amount in major currency units
        payment_method: Method the customer chose (credit_card, bank_transfer, ...)
        status: SUCCEEDED when captured immediately, PENDING when the provider
            waits for an offline action such as a bank transfer
        metadata: Additional custom data
    """

    transaction_id: str
    payment_url: str
    amount: Decimal
    payment_method: str
    status: PaymentStatus
    metadata: Dict[str, Any] = field(default_factory=dict)


class PaymentProviderInterface(ABC):
    """
    Abstract interface for payment provider operations.

    Concrete implementations:
        - SimulatedGatewayProvider: in-process gateway used by default and in tests
    """

    @abstractmethod
    def charge(
        self,
        amount: Decimal,
        payment_method: str,
        reference: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> PaymentCharge:
        """
        Charge an amount for an order.

        Args:
            amount: Payment amount in major currency units
            payment_method: Method selected by the customer
            reference: Merchant reference, usually the order id
            metadata: Custom data to attach to the charge

        Returns:
            PaymentCharge describing the transaction

        Raises:
            PaymentException: If the provider cannot process the charge
        """
        pass

    @abstractmethod
    def get_payment_url(self, transaction_id: str) -> str:
        """Return the customer-facing URL for a transaction."""
        pass


class PaymentException(Exception):
    """Base exception for payment operations."""

    pass
