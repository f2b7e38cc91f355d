"""Transactional emails: order confirmation and shipping update.

Bodies are rendered from ``store/emails/*.html`` and ``*.txt`` templates and
sent through Django's email framework. When email is disabled in the
``MAISON`` settings the send is skipped and reported as a success.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string

from maison.core.conf import get_app_base_url, get_setting
from maison.core.i18n import localized
from maison.core.models import Locale

logger = logging.getLogger(__name__)

CURRENCY_SYMBOLS = {"EUR": "€", "USD": "$", "GBP": "£"}


@dataclass
class EmailResult:
    success: bool
    error: str | None = None


@dataclass
class EmailLine:
    product_name: str
    quantity: int
    price_cents: int
    variant_name: str | None = None
    image_url: str | None = None


@dataclass
class EmailAddress:
    line1: str
    city: str
    postal_code: str
    country: str
    line2: str | None = None


@dataclass
class OrderConfirmation:
    order_number: str
    customer_name: str
    customer_email: str
    items: list[EmailLine]
    subtotal_cents: int
    total_cents: int
    shipping_address: EmailAddress
    shipping_cents: int = 0
    tax_cents: int = 0
    currency: str = "EUR"
    locale: str = Locale.EN


@dataclass
class ShippingUpdate:
    order_number: str
    customer_name: str
    customer_email: str
    tracking_number: str | None = None
    tracking_url: str | None = None
    carrier: str | None = None
    estimated_delivery: str | None = None
    locale: str = Locale.EN


def format_money(cents, currency="EUR", locale=Locale.EN):
    """Format an amount in cents the way the storefront shows prices."""
    amount = (Decimal(cents or 0) / 100).quantize(Decimal("0.01"))
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    if locale == Locale.FR:
        whole, cents_part = f"{amount:,.2f}".split(".")
        return f"{whole.replace(',', ' ')},{cents_part} {symbol}"
    return f"{symbol}{amount:,.2f}"


def order_confirmation_subject(order_number, locale):
    return localized(locale, f"Confirmation de commande {order_number}", f"Order Confirmation {order_number}")


def shipping_update_subject(order_number, locale):
    return localized(
        locale,
        f"Votre commande {order_number} est en route",
        f"Your order {order_number} is on its way",
    )


def _send(template, subject, to, context):
    text_body = render_to_string(f"store/emails/{template}.txt", context)
    html_body = render_to_string(f"store/emails/{template}.html", context)

    reply_to = get_setting("EMAIL_REPLY_TO")
    message = EmailMultiAlternatives(
        subject=subject,
        body=text_body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[to],
        reply_to=[reply_to] if reply_to else None,
    )
    message.attach_alternative(html_body, "text/html")
    message.send()


def send_order_confirmation(order):
    """Send the order confirmation email.

    Args:
        order: OrderConfirmation payload

    Returns:
        EmailResult; failures are logged and never raised
    """
    if not get_setting("EMAIL_ENABLED"):
        logger.info("Email not configured, skipping order confirmation for %s", order.order_number)
        return EmailResult(success=True)

    def money(cents):
        return format_money(cents, order.currency, order.locale)

    context = {
        "order": order,
        "locale": order.locale,
        "brand_name": get_setting("BRAND_NAME"),
        "base_url": get_app_base_url(),
        "lines": [
            {"item": item, "total": money(item.price_cents * item.quantity)}
            for item in order.items
        ],
        "subtotal": money(order.subtotal_cents),
        "shipping": money(order.shipping_cents),
        "tax": money(order.tax_cents),
        "total": money(order.total_cents),
    }

    try:
        _send(
            "order_confirmation",
            order_confirmation_subject(order.order_number, order.locale),
            order.customer_email,
            context,
        )
    except Exception as exc:
        logger.exception("Failed to send order confirmation for %s", order.order_number)
        return EmailResult(success=False, error=str(exc))

    logger.info("Order confirmation for %s sent", order.order_number)
    return EmailResult(success=True)


def send_shipping_update(update):
    """Send the "your order is on its way" email."""
    if not get_setting("EMAIL_ENABLED"):
        logger.info("Email not configured, skipping shipping update for %s", update.order_number)
        return EmailResult(success=True)

    context = {
        "update": update,
        "locale": update.locale,
        "brand_name": get_setting("BRAND_NAME"),
        "base_url": get_app_base_url(),
    }

    try:
        _send(
            "shipping_update",
            shipping_update_subject(update.order_number, update.locale),
            update.customer_email,
            context,
        )
    except Exception as exc:
        logger.exception("Failed to send shipping update for %s", update.order_number)
        return EmailResult(success=False, error=str(exc))

    logger.info("Shipping update for %s sent", update.order_number)
    return EmailResult(success=True)
