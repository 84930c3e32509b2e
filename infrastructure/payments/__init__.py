"""
Payment Service Abstraction Layer
==================================

Provides a unified interface for charging orders across payment providers.
"""

from .factory import PaymentFactory
from .interface import PaymentCharge, PaymentException, PaymentProviderInterface, PaymentStatus
from .simulated_provider import SimulatedGatewayProvider

__all__ = [
    "PaymentProviderInterface",
    "PaymentCharge",
    "PaymentStatus",
    "PaymentException",
    "SimulatedGatewayProvider",
    "PaymentFactory",
]
