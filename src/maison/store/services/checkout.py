"""Stripe Checkout session creation.

Usage:
    from maison.store.services.checkout import start_checkout

    result = start_checkout(request, "fr", shipping_address_id=address.pk)
    return redirect(result.checkout_url)
"""

import logging
from dataclasses import dataclass

import stripe
from django.conf import settings

from maison.core.conf import get_app_base_url, get_setting
from maison.core.i18n import localized
from maison.core.models import Locale

from ..exceptions import CheckoutError
from .addresses import get_address
from .cart import get_cart_snapshot
from .session import current_user

logger = logging.getLogger(__name__)

WHITE_GLOVE_MIN_DAYS = 3
WHITE_GLOVE_MAX_DAYS = 7


@dataclass
class CheckoutResult:
    checkout_url: str
    session_id: str | None = None


def resolve_image_url(url, base_url):
    """Stripe only accepts absolute image URLs."""
    if not url:
        return None
    if url.startswith("http"):
        return url
    if url.startswith("//"):
        return f"https:{url}"
    return f"{base_url}{url if url.startswith('/') else '/' + url}"


def build_line_items(snapshot, base_url):
    currency = snapshot.currency.lower()
    line_items = []
    for line in snapshot.items:
        product_data = {
            "name": line.product_name,
            "metadata": {
                "productSlug": line.product_slug,
                "variantId": str(line.variant_id),
            },
        }
        image = resolve_image_url(line.hero_image, base_url)
        if image:
            product_data["images"] = [image]
        line_items.append({
            "quantity": line.quantity,
            "price_data": {
                "currency": currency,
                "unit_amount": line.price_cents,
                "product_data": product_data,
            },
        })
    return line_items


def build_session_params(snapshot, locale, user=None, shipping_address=None, shipping_address_id=None):
    """Parameters for ``stripe.checkout.Session.create``."""
    base_url = get_app_base_url()
    currency = snapshot.currency.lower()

    params = {
        "mode": "payment",
        "locale": "fr" if locale == Locale.FR else "auto",
        "allow_promotion_codes": True,
        "success_url": f"{base_url}/{locale}/cart/?checkout=success&session_id={{CHECKOUT_SESSION_ID}}",
        "cancel_url": f"{base_url}/{locale}/cart/?checkout=cancelled",
        "line_items": build_line_items(snapshot, base_url),
        "metadata": {
            "cartId": snapshot.cart_id,
            "locale": locale,
            "userId": str(user.pk) if user is not None else "",
            "shippingAddressId": str(shipping_address_id or ""),
        },
    }
    if user is not None and user.email:
        params["customer_email"] = user.email

    if shipping_address is None:
        params["shipping_address_collection"] = {
            "allowed_countries": list(get_setting("SHIPPING_COUNTRIES")),
        }
    else:
        params["shipping_options"] = [
            {
                "shipping_rate_data": {
                    "type": "fixed_amount",
                    "fixed_amount": {"amount": 0, "currency": currency},
                    "display_name": localized(locale, "Livraison White Glove", "White Glove Delivery"),
                    "delivery_estimate": {
                        "minimum": {"unit": "business_day", "value": WHITE_GLOVE_MIN_DAYS},
                        "maximum": {"unit": "business_day", "value": WHITE_GLOVE_MAX_DAYS},
                    },
                },
            },
        ]
    return params


def start_checkout(request, locale, shipping_address_id=None):
    """Open a Stripe Checkout session for the cart of this request.

    Args:
        request: The current request
        locale: Storefront locale of the customer
        shipping_address_id: Saved address to ship to; only honoured when it
            belongs to the signed-in customer

    Returns:
        CheckoutResult with the hosted checkout URL

    Raises:
        CheckoutError: If the cart is empty or Stripe cannot open a session
    """
    snapshot = get_cart_snapshot(request, locale)
    if snapshot.item_count == 0:
        raise CheckoutError(localized(locale, "Panier vide", "Your cart is empty"), code="empty_cart")
    if not snapshot.cart_id:
        raise CheckoutError(
            localized(locale, "Impossible de récupérer votre panier.", "Unable to load your cart."),
            code="cart_unavailable",
        )

    user = current_user(request)
    shipping_address = None
    if shipping_address_id and user is not None:
        shipping_address = get_address(user, shipping_address_id)

    if not settings.STRIPE_SECRET_KEY:
        logger.error("Checkout attempted without STRIPE_SECRET_KEY")
        raise CheckoutError(
            localized(locale, "Session de paiement indisponible.", "Unable to start checkout."),
            code="not_configured",
        )

    params = build_session_params(
        snapshot,
        locale,
        user=user,
        shipping_address=shipping_address,
        shipping_address_id=shipping_address_id if shipping_address is not None else None,
    )

    try:
        session = stripe.checkout.Session.create(
            api_key=settings.STRIPE_SECRET_KEY,
            stripe_version=settings.STRIPE_API_VERSION,
            **params,
        )
    except stripe.StripeError:
        logger.exception("Stripe refused checkout session for cart %s", snapshot.cart_id)
        raise CheckoutError(
            localized(locale, "Session de paiement indisponible.", "Unable to start checkout."),
            code="provider_error",
        )

    url = getattr(session, "url", None)
    if not url:
        raise CheckoutError(
            localized(locale, "Session de paiement indisponible.", "Unable to start checkout."),
            code="no_session_url",
        )

    logger.info("Opened checkout session %s for cart %s", getattr(session, "id", None), snapshot.cart_id)
    return CheckoutResult(checkout_url=url, session_id=getattr(session, "id", None))
