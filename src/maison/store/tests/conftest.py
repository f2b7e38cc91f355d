"""Fixtures for store tests."""

import hashlib
import hmac
import json
import time

import pytest

from maison.store.models import Address, Cart, CartItem

CART_COOKIE = "maison_aurele_cart"
WISHLIST_COOKIE = "maison_aurele_wishlist"


@pytest.fixture
def anonymous_cart(db, variant):
    """A cookie cart holding two units of the 38 variant."""
    cart = Cart.objects.create(session_key="anon-cart-key")
    CartItem.objects.create(cart=cart, variant=variant, quantity=2)
    return cart


@pytest.fixture
def address(customer):
    return Address.objects.create(
        user=customer,
        label="Maison",
        first_name="Claire",
        last_name="Dumas",
        line1="12 rue du Faubourg Saint-Honoré",
        city="Paris",
        postal_code="75008",
        country="FR",
        is_default=True,
    )


def sign_stripe_payload(payload, secret, timestamp=None):
    """Build a ``Stripe-Signature`` header for ``payload``."""
    timestamp = timestamp or int(time.time())
    signed = f"{timestamp}.{payload}".encode("utf-8")
    signature = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


@pytest.fixture
def post_webhook(client, settings):
    """POST a signed Stripe event to the webhook endpoint."""

    def post(event, secret=None):
        payload = json.dumps(event)
        header = sign_stripe_payload(payload, secret or settings.STRIPE_WEBHOOK_SECRET)
        return client.post(
            "/api/webhooks/stripe/",
            data=payload,
            content_type="application/json",
            HTTP_STRIPE_SIGNATURE=header,
        )

    return post
