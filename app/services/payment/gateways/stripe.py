"""
Stripe Payment Gateway Implementation
Implements the BasePaymentGateway for Stripe PaymentIntents
"""
import os
import logging
import httpx
from typing import Dict, Any, Optional
from dotenv import load_dotenv

from app.services.payment.gateways.base import BasePaymentGateway, PaymentIntentResult

load_dotenv()

logger = logging.getLogger(__name__)


class StripeGateway(BasePaymentGateway):
    """
    Stripe Payment Gateway

    Only creates PaymentIntents; confirmation happens client-side and the
    client reports the result to POST /payments.
    """

    gateway_id = "stripe"
    gateway_name = "Stripe"

    API_URL = "https://api.stripe.com/v1"
    TIMEOUT_SECONDS = 30.0

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize Stripe gateway"""
        env_config = self._load_config_from_env()

        if config is not None:
            env_config.update({k: v for k, v in config.items() if v is not None})

        env_config.setdefault("api_url", self.API_URL)
        super().__init__(env_config)

        self.secret_key = self.config.get("secret_key")
        # httpx transport override, e.g. a MockTransport
        self.transport = self.config.get("transport")

    def _load_config_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables"""
        secret_key = os.getenv("STRIPE_SECRET_KEY")
        if not secret_key:
            logger.warning("STRIPE_SECRET_KEY not found in environment")

        return {
            "secret_key": secret_key,
            "currency": os.getenv("STRIPE_CURRENCY", "usd"),
            "api_url": os.getenv("STRIPE_API_URL", self.API_URL)
        }

    def _validate_config(self):
        """Validate required Stripe configuration"""
        if not self.config.get("secret_key"):
            raise ValueError("STRIPE_SECRET_KEY is required")

    def _get_headers(self) -> Dict[str, str]:
        """Get headers for Stripe API requests"""
        return {
            "Authorization": f"Bearer {self.secret_key}",
            "Content-Type": "application/x-www-form-urlencoded"
        }

    async def create_payment_intent(
        self,
        amount: int,
        currency: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> PaymentIntentResult:
        """
        Create a Stripe PaymentIntent.

        Stripe takes form-encoded bodies; metadata is flattened to
        metadata[key]=value pairs.
        """
        currency = currency or self.currency
        payload = {
            "amount": str(amount),
            "currency": currency,
            "payment_method_types[]": "card"
        }
        for key, value in (metadata or {}).items():
            payload[f"metadata[{key}]"] = str(value)

        try:
            async with httpx.AsyncClient(timeout=self.TIMEOUT_SECONDS, transport=self.transport) as client:
                response = await client.post(
                    self.get_api_url("payment_intents"),
                    data=payload,
                    headers=self._get_headers()
                )
            response_data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Stripe request failed: {e}")
            return PaymentIntentResult(
                success=False,
                amount=amount,
                currency=currency,
                error_message=f"Stripe request failed: {e}"
            )

        if response.status_code != 200:
            error_message = response_data.get("error", {}).get("message", "Unknown Stripe error")
            logger.error(f"Stripe rejected payment intent ({response.status_code}): {error_message}")
            return PaymentIntentResult(
                success=False,
                amount=amount,
                currency=currency,
                error_message=error_message,
                raw_response=response_data
            )

        return PaymentIntentResult(
            success=True,
            amount=amount,
            currency=currency,
            client_secret=response_data.get("client_secret"),
            gateway_intent_id=response_data.get("id"),
            raw_response=response_data
        )
