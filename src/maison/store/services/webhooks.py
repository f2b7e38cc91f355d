"""Stripe webhook handling: turning a completed checkout into an order.

Order intake is idempotent on the provider transaction id (the session's
payment intent, or the session id when there is none). The order, its lines,
its payment record and the removal of the cart happen in one transaction;
the confirmation email is sent after it commits and can never undo it.
"""

import json
import logging
import random

import stripe
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import Prefetch
from django.utils import timezone

from maison.catalog.data import localized_product_name, localized_translations, ordered_media
from maison.catalog.models import ProductTranslation, VariantMedia
from maison.core.conf import get_setting
from maison.core.i18n import localized
from maison.core.models import Locale

from ..models import (
    Cart,
    CartItem,
    FulfillmentStatus,
    Order,
    OrderItem,
    OrderStatus,
    PaymentRecord,
    PaymentStatus,
)
from .emails import EmailAddress, EmailLine, OrderConfirmation, send_order_confirmation

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"
SIGNATURE_TOLERANCE = 300
ORDER_NUMBER_ATTEMPTS = 5


class WebhookError(Exception):
    """The webhook request could not be authenticated or parsed."""


def construct_event(payload, signature, secret):
    """Verify the Stripe signature of ``payload`` and decode the event.

    Args:
        payload: Raw request body (bytes)
        signature: Value of the Stripe-Signature header
        secret: Webhook endpoint signing secret

    Returns:
        The event as a plain dict

    Raises:
        WebhookError: If the signature or the payload is invalid
    """
    try:
        text = payload.decode("utf-8") if isinstance(payload, bytes) else payload
    except UnicodeDecodeError as exc:
        raise WebhookError("Invalid payload") from exc
    try:
        stripe.WebhookSignature.verify_header(text, signature, secret, tolerance=SIGNATURE_TOLERANCE)
    except stripe.SignatureVerificationError as exc:
        raise WebhookError(str(exc)) from exc

    try:
        event = json.loads(text)
    except ValueError as exc:
        raise WebhookError("Invalid payload") from exc
    if not isinstance(event, dict):
        raise WebhookError("Invalid payload")
    return event


def handle_event(event):
    """Dispatch a verified event. Unknown event types are ignored."""
    event_type = event.get("type")
    if event_type == CHECKOUT_COMPLETED:
        session = (event.get("data") or {}).get("object") or {}
        return handle_checkout_completed(session)

    logger.debug("Ignoring Stripe event %s", event_type)
    return None


def event_locale(metadata):
    value = (metadata or {}).get("locale")
    if value and str(value).strip().lower() == Locale.FR:
        return Locale.FR
    return Locale.EN


def _object_id(value):
    """Stripe expands some references into objects; both forms carry an id."""
    if isinstance(value, dict):
        return value.get("id")
    return value or None


def provider_transaction_id(session):
    return _object_id(session.get("payment_intent")) or session.get("id")


def generate_order_number(today=None):
    """``MA-YYYYMMDD-NNNNN`` with a random five digit suffix."""
    today = today or timezone.localdate()
    prefix = get_setting("ORDER_NUMBER_PREFIX")
    return f"{prefix}-{today:%Y%m%d}-{random.randint(10000, 99999)}"


def unique_order_number():
    for _ in range(ORDER_NUMBER_ATTEMPTS):
        number = generate_order_number()
        if not Order.objects.filter(number=number).exists():
            return number
    raise RuntimeError("Could not allocate a unique order number")


def load_cart_for_order(cart_id, locale):
    try:
        cart = Cart.objects.select_related("user").filter(pk=cart_id).first()
    except (TypeError, ValueError, ValidationError):
        return None, []
    if cart is None:
        return None, []

    items = list(
        CartItem.objects.filter(cart=cart)
        .select_related("variant__product")
        .prefetch_related(
            localized_translations("variant__product__translations", ProductTranslation, locale),
            ordered_media("variant__product__media"),
            Prefetch(
                "variant__media",
                queryset=VariantMedia.objects.select_related("asset").order_by("sort_order", "id"),
            ),
        )
        .order_by("created_at", "id")
    )
    return cart, items


def resolve_order_user(cart, metadata):
    if cart.user_id:
        return cart.user
    user_id = (metadata or {}).get("userId")
    if not user_id:
        return None
    try:
        return get_user_model().objects.filter(pk=user_id).first()
    except (TypeError, ValueError, ValidationError):
        return None


def _first_asset_url(media):
    for item in media:
        if item.asset_id:
            return item.asset.url
    return None


def handle_checkout_completed(session):
    """Create the order for a completed Checkout session.

    Returns:
        The created Order, or None when the event was ignored or already
        processed
    """
    metadata = session.get("metadata") or {}
    cart_id = metadata.get("cartId")
    if not cart_id:
        logger.info("Checkout session %s has no cartId, ignoring", session.get("id"))
        return None

    provider_id = provider_transaction_id(session)
    if PaymentRecord.objects.filter(provider_id=provider_id).exists():
        logger.info("Payment %s already recorded, ignoring duplicate event", provider_id)
        return None

    locale = event_locale(metadata)
    cart, items = load_cart_for_order(cart_id, locale)
    if cart is None or not items:
        logger.warning("Cart %s missing or empty for payment %s", cart_id, provider_id)
        return None

    subtotal_cents = sum(item.variant.price_cents * item.quantity for item in items)
    amount_total = session.get("amount_total")
    total_cents = amount_total if amount_total is not None else subtotal_cents

    try:
        with transaction.atomic():
            order = Order.objects.create(
                number=unique_order_number(),
                user=resolve_order_user(cart, metadata),
                currency=cart.currency,
                subtotal_cents=subtotal_cents,
                tax_cents=0,
                shipping_cents=0,
                total_cents=total_cents,
                status=OrderStatus.CONFIRMED,
                payment_status=PaymentStatus.PAID,
                fulfillment_status=FulfillmentStatus.NOT_STARTED,
            )
            OrderItem.objects.bulk_create([
                OrderItem(
                    order=order,
                    variant=item.variant,
                    product_name=localized_product_name(item.variant.product),
                    locale=locale,
                    unit_price_cents=item.variant.price_cents,
                    quantity=item.quantity,
                )
                for item in items
            ])
            PaymentRecord.objects.create(
                order=order,
                provider="stripe",
                provider_id=provider_id,
                amount_cents=total_cents,
                currency=cart.currency,
                status=PaymentStatus.PAID,
                data={
                    "sessionId": session.get("id"),
                    "customerId": _object_id(session.get("customer")),
                    "metadata": metadata,
                },
            )
            CartItem.objects.filter(cart=cart).delete()
            cart.delete()
    except IntegrityError:
        # A concurrent delivery of the same event won the race
        if PaymentRecord.objects.filter(provider_id=provider_id).exists():
            logger.info("Payment %s recorded concurrently, ignoring", provider_id)
            return None
        raise

    logger.info("Created order %s from payment %s", order.number, provider_id)

    notify_customer(order, session, items, locale, subtotal_cents, total_cents)
    return order


def notify_customer(order, session, items, locale, subtotal_cents, total_cents):
    """Send the confirmation email when the session carries enough details."""
    customer_details = session.get("customer_details") or {}
    email = customer_details.get("email") or session.get("customer_email")
    address = (session.get("shipping_details") or {}).get("address") or customer_details.get("address")

    if not email or not address:
        logger.info("Order %s has no email or shipping address, no confirmation sent", order.number)
        return None

    lines = []
    for item in items:
        variant = item.variant
        product = variant.product
        lines.append(
            EmailLine(
                product_name=localized_product_name(product),
                variant_name=localized(locale, f"Taille : {variant.size}", f"Size: {variant.size}")
                if variant.size else None,
                quantity=item.quantity,
                price_cents=variant.price_cents,
                image_url=_first_asset_url(variant.media.all()) or _first_asset_url(product.media.all()),
            )
        )

    return send_order_confirmation(
        OrderConfirmation(
            order_number=order.number,
            customer_name=customer_details.get("name") or localized(locale, "Cher client", "Valued Customer"),
            customer_email=email,
            items=lines,
            subtotal_cents=subtotal_cents,
            shipping_cents=0,
            tax_cents=0,
            total_cents=total_cents,
            currency=order.currency,
            shipping_address=EmailAddress(
                line1=address.get("line1") or "",
                line2=address.get("line2") or None,
                city=address.get("city") or "",
                postal_code=address.get("postal_code") or "",
                country=address.get("country") or "",
            ),
            locale=locale,
        )
    )
