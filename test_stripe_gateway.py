"""
Stripe PaymentIntent requests, run against an in-process httpx transport
"""
from urllib.parse import parse_qs

import httpx

from app.routes.auth.dependencies import get_payment_gateway
from app.services.payment.gateways.stripe import StripeGateway
from conftest import run


def make_gateway(handler):
    return StripeGateway({
        "secret_key": "sk_test_123",
        "currency": "usd",
        "transport": httpx.MockTransport(handler)
    })


def test_create_payment_intent_sends_form_payload():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["form"] = parse_qs(request.content.decode())
        return httpx.Response(200, json={"id": "pi_42", "client_secret": "pi_42_secret_abc"})

    result = run(make_gateway(handler).create_payment_intent(1250, metadata={"email": "ana@example.com"}))

    assert result.success is True
    assert result.client_secret == "pi_42_secret_abc"
    assert result.gateway_intent_id == "pi_42"
    assert result.amount == 1250
    assert seen["url"] == "https://api.stripe.com/v1/payment_intents"
    assert seen["auth"] == "Bearer sk_test_123"
    assert seen["form"]["amount"] == ["1250"]
    assert seen["form"]["currency"] == ["usd"]
    assert seen["form"]["metadata[email]"] == ["ana@example.com"]


def test_create_payment_intent_reports_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(402, json={"error": {"message": "Your card was declined."}})

    result = run(make_gateway(handler).create_payment_intent(500))

    assert result.success is False
    assert result.error_message == "Your card was declined."
    assert result.client_secret is None


def test_create_payment_intent_reports_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = run(make_gateway(handler).create_payment_intent(500))

    assert result.success is False
    assert "Stripe request failed" in result.error_message


def test_gateway_unavailable_without_secret_key(monkeypatch):
    monkeypatch.delenv("STRIPE_SECRET_KEY", raising=False)
    monkeypatch.setenv("PAYMENT_GATEWAY", "stripe")

    assert run(get_payment_gateway()) is None


def test_gateway_built_from_environment(monkeypatch):
    monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_env")
    monkeypatch.setenv("PAYMENT_GATEWAY", "stripe")

    gateway = run(get_payment_gateway())

    assert isinstance(gateway, StripeGateway)
    assert gateway.secret_key == "sk_test_env"
