from __future__ import annotations

from typing import Any, Dict

from realtalk_backend.config import Config


def _get_stripe(cfg: Config):
    try:
        import stripe  # type: ignore
    except Exception as e:
        raise RuntimeError(
            "Stripe selected but the 'stripe' package is not installed. Install stripe and try again."
        ) from e

    if not cfg.STRIPE_SECRET_KEY:
        raise RuntimeError("stripe_secret_key_missing")

    stripe.api_key = cfg.STRIPE_SECRET_KEY
    return stripe


def create_checkout_session(
    cfg: Config,
    *,
    user_id: int,
    price_id: str,
    success_url: str | None = None,
    cancel_url: str | None = None,
) -> Dict[str, Any]:
    """Create a subscription Checkout Session and return its id + hosted URL.

    Raises RuntimeError when Stripe is not installed or not configured, and
    ValueError when the created session comes back without an id. Any
    stripe.StripeError from the API call propagates unchanged.
    """
    stripe = _get_stripe(cfg)

    params: Dict[str, Any] = {
        "mode": "subscription",
        "payment_method_types": ["card"],
        "line_items": [{"price": price_id, "quantity": 1}],
        "success_url": success_url or cfg.BILLING_SUCCESS_URL,
        "cancel_url": cancel_url or cfg.BILLING_CANCEL_URL,
        # Lets webhooks map the session back to the user.
        "client_reference_id": str(user_id),
    }

    session = stripe.checkout.Session.create(**params)
    session_id = session.get("id")
    if not session_id:
        raise ValueError("stripe_session_id_missing")
    return {"session_id": str(session_id), "url": session.get("url")}
