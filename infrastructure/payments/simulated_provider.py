"""
Simulated Payment Gateway
=========================

Concrete implementation of PaymentProviderInterface that accepts every charge
without contacting an external service.
"""

import logging
import random
import string
import time
from decimal import Decimal
from typing import Any, Dict, Optional

from django.conf import settings

from .interface import PaymentCharge, PaymentProviderInterface, PaymentStatus

logger = logging.getLogger(__name__)

# Methods settled later by an offline action; the charge stays pending
DEFERRED_METHODS = {"bank_transfer"}


class SimulatedGatewayProvider(PaymentProviderInterface):
    """
    Gateway stand-in issuing ``TXN<epoch ms><5 random chars>`` transaction ids.

    Configuration (in settings.py):
        PAYMENT_GATEWAY_URL: Base URL for customer payment pages
    """

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = (base_url or getattr(settings, "PAYMENT_GATEWAY_URL", "https://payment-gateway.com/pay")).rstrip(
            "/"
        )

    @staticmethod
    def generate_transaction_id() -> str:
        suffix = "".join(random.choices(string.ascii_uppercase + string.digits, k=5))
        return f"TXN{int(time.time() * 1000)}{suffix}"

    def get_payment_url(self, transaction_id: str) -> str:
        return f"{self.base_url}/{transaction_id}"

    def charge(
        self,
        amount: Decimal,
        payment_method: str,
        reference: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> PaymentCharge:
        transaction_id = self.generate_transaction_id()
        status = PaymentStatus.PENDING if payment_method in DEFERRED_METHODS else PaymentStatus.SUCCEEDED

        logger.info(
            f"Simulated charge {transaction_id}: reference={reference}, amount={amount}, "
            f"method={payment_method}, status={status.value}"
        )

        return PaymentCharge(
            transaction_id=transaction_id,
            payment_url=self.get_payment_url(transaction_id),
            amount=amount,
            payment_method=payment_method,
            status=status,
            metadata=metadata or {},
        )
