from __future__ import annotations

from dataclasses import replace

import pytest
import stripe
from fastapi.testclient import TestClient

from conftest import bearer, register

from realtalk_backend.api.server import create_app


@pytest.fixture
def stripe_calls(monkeypatch):
    calls = []

    def fake_create(**params):
        calls.append(params)
        return {"id": "cs_test_123", "url": "https://checkout.stripe.com/c/pay/cs_test_123"}

    monkeypatch.setattr(stripe.checkout.Session, "create", fake_create)
    return calls


@pytest.fixture
def billing_client(cfg):
    app = create_app(replace(cfg, STRIPE_SECRET_KEY="sk_test_dummy"))
    with TestClient(app) as c:
        yield c


def test_checkout_requires_token(billing_client):
    resp = billing_client.post("/api/billing/create-checkout-session", json={"price_id": "price_123"})
    assert resp.status_code == 401
    assert resp.json() == {"detail": "access_token_required"}


def test_checkout_without_stripe_key_is_501(client):
    token = register(client).json()["token"]
    resp = client.post(
        "/api/billing/create-checkout-session",
        json={"price_id": "price_123"},
        headers=bearer(token),
    )
    assert resp.status_code == 501
    assert resp.json() == {"detail": "stripe_secret_key_missing"}


def test_checkout_creates_subscription_session(billing_client, cfg, stripe_calls):
    reg = register(billing_client).json()
    resp = billing_client.post(
        "/api/billing/create-checkout-session",
        json={"price_id": "price_123"},
        headers=bearer(reg["token"]),
    )
    assert resp.status_code == 200
    assert resp.json() == {
        "session_id": "cs_test_123",
        "url": "https://checkout.stripe.com/c/pay/cs_test_123",
    }

    [params] = stripe_calls
    assert params["mode"] == "subscription"
    assert params["payment_method_types"] == ["card"]
    assert params["line_items"] == [{"price": "price_123", "quantity": 1}]
    assert params["client_reference_id"] == str(reg["user"]["user_id"])
    assert params["success_url"] == cfg.BILLING_SUCCESS_URL
    assert params["cancel_url"] == cfg.BILLING_CANCEL_URL


def test_checkout_honours_explicit_urls(billing_client, stripe_calls):
    token = register(billing_client).json()["token"]
    billing_client.post(
        "/api/billing/create-checkout-session",
        json={
            "price_id": "price_123",
            "success_url": "https://app.realtalk.io/ok",
            "cancel_url": "https://app.realtalk.io/cancel",
        },
        headers=bearer(token),
    )
    [params] = stripe_calls
    assert params["success_url"] == "https://app.realtalk.io/ok"
    assert params["cancel_url"] == "https://app.realtalk.io/cancel"


def test_checkout_requires_price_id(billing_client, stripe_calls):
    token = register(billing_client).json()["token"]
    resp = billing_client.post("/api/billing/create-checkout-session", json={}, headers=bearer(token))
    assert resp.status_code == 400
    assert [e["field"] for e in resp.json()["errors"]] == ["price_id"]
    assert stripe_calls == []


def test_checkout_stripe_failure_is_generic_500(billing_client, monkeypatch):
    def failing_create(**params):
        raise ValueError("No such price: 'price_missing'")

    monkeypatch.setattr(stripe.checkout.Session, "create", failing_create)
    token = register(billing_client).json()["token"]
    resp = billing_client.post(
        "/api/billing/create-checkout-session",
        json={"price_id": "price_missing"},
        headers=bearer(token),
    )
    assert resp.status_code == 500
    assert resp.json() == {"detail": "billing_error"}


def test_checkout_session_without_id_is_billing_error_not_501(billing_client, monkeypatch):
    monkeypatch.setattr(stripe.checkout.Session, "create", lambda **params: {"url": None})
    token = register(billing_client).json()["token"]
    resp = billing_client.post(
        "/api/billing/create-checkout-session",
        json={"price_id": "price_123"},
        headers=bearer(token),
    )
    assert resp.status_code == 500
    assert resp.json() == {"detail": "billing_error"}


def test_checkout_failure_in_development_adds_message(cfg, monkeypatch):
    def failing_create(**params):
        raise ValueError("No such price: 'price_missing'")

    monkeypatch.setattr(stripe.checkout.Session, "create", failing_create)
    app = create_app(replace(cfg, APP_ENV="development", STRIPE_SECRET_KEY="sk_test_dummy"))
    with TestClient(app) as c:
        token = register(c).json()["token"]
        resp = c.post(
            "/api/billing/create-checkout-session",
            json={"price_id": "price_missing"},
            headers=bearer(token),
        )
    assert resp.status_code == 500
    assert resp.json() == {"detail": "billing_error", "message": "No such price: 'price_missing'"}
