"""
Payment Gateway Factory
Builds the gateway named by PAYMENT_GATEWAY
"""
import os
from typing import Dict, Any, Optional, Type

from app.services.payment.gateways.base import BasePaymentGateway
from app.services.payment.gateways.stripe import StripeGateway


class PaymentGatewayFactory:
    """Registry of gateway classes keyed by gateway id"""

    _gateways: Dict[str, Type[BasePaymentGateway]] = {
        "stripe": StripeGateway,
    }

    @classmethod
    def get_gateway(
        cls,
        gateway_id: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None
    ) -> BasePaymentGateway:
        """
        Build a payment gateway instance.

        Raises:
            ValueError: unknown gateway id, or the gateway's config is incomplete
        """
        gateway_id = gateway_id or os.getenv("PAYMENT_GATEWAY", "stripe")

        if gateway_id not in cls._gateways:
            raise ValueError(f"Unknown payment gateway: {gateway_id}. Available: {list(cls._gateways)}")

        return cls._gateways[gateway_id](config)
