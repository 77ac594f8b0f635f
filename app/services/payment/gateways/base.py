"""
Base Payment Gateway
Abstract class defining the interface for all payment gateways
"""
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
from dataclasses import dataclass


@dataclass
class PaymentIntentResult:
    """Result of creating a payment intent"""
    success: bool
    amount: int
    currency: str
    client_secret: Optional[str] = None
    gateway_intent_id: Optional[str] = None
    error_message: Optional[str] = None
    raw_response: Optional[Dict[str, Any]] = None


class BasePaymentGateway(ABC):
    """
    Abstract base class for payment gateways.
    All payment gateways must implement these methods.
    """

    gateway_id: str = "base"
    gateway_name: str = "Base Gateway"

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize gateway with configuration.

        Args:
            config: Gateway configuration including API keys, endpoints, etc.
        """
        self.config = config
        self.currency = config.get("currency", "usd")
        self._validate_config()

    @abstractmethod
    def _validate_config(self):
        """Validate required configuration parameters"""
        pass

    @abstractmethod
    async def create_payment_intent(
        self,
        amount: int,
        currency: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> PaymentIntentResult:
        """
        Create a payment intent the client confirms on its side.

        Args:
            amount: Amount in the currency's minor unit (cents)
            currency: Currency code, gateway default when omitted
            metadata: Additional metadata

        Returns:
            PaymentIntentResult with the client secret
        """
        pass

    def get_api_url(self, endpoint: str) -> str:
        """Get full API URL for endpoint"""
        base_url = self.config.get("api_url", "")
        return f"{base_url}/{endpoint.lstrip('/')}"
