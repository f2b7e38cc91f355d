"""Tests for the Stripe webhook and order intake."""

import re
from unittest.mock import patch

import pytest
from django.core import mail

from maison.store.models import Cart, CartItem, FulfillmentStatus, Order, OrderStatus, PaymentRecord, PaymentStatus
from maison.store.services.emails import ShippingUpdate, format_money, send_shipping_update
from maison.store.services.webhooks import generate_order_number, handle_checkout_completed, handle_event


def completed_event(cart, **session):
    data = {
        "id": "cs_test_nocturne",
        "payment_intent": "pi_nocturne",
        "amount_total": 840000,
        "metadata": {"cartId": str(cart.pk), "locale": "fr", "userId": ""},
        "customer_details": {
            "email": "claire@example.com",
            "name": "Claire Dumas",
            "address": {
                "line1": "12 rue du Faubourg Saint-Honoré",
                "city": "Paris",
                "postal_code": "75008",
                "country": "FR",
            },
        },
    }
    data.update(session)
    return {"id": "evt_test", "type": "checkout.session.completed", "data": {"object": data}}


@pytest.mark.django_db
class TestStripeWebhook:
    def test_creates_order_from_cart(self, post_webhook, anonymous_cart, variant):
        response = post_webhook(completed_event(anonymous_cart))

        assert response.status_code == 200
        assert response.json() == {"received": True}

        order = Order.objects.get()
        assert re.fullmatch(r"MA-\d{8}-\d{5}", order.number)
        assert order.status == OrderStatus.CONFIRMED
        assert order.payment_status == PaymentStatus.PAID
        assert order.fulfillment_status == FulfillmentStatus.NOT_STARTED
        assert order.subtotal_cents == 840000
        assert order.total_cents == 840000

        [item] = order.items.all()
        assert item.variant == variant
        assert item.product_name == "Robe Nocturne"
        assert item.locale == "fr"
        assert item.quantity == 2
        assert item.unit_price_cents == 420000

        payment = PaymentRecord.objects.get()
        assert payment.order == order
        assert payment.provider_id == "pi_nocturne"
        assert payment.data["sessionId"] == "cs_test_nocturne"

        assert not Cart.objects.exists()

    def test_sends_confirmation_email(self, post_webhook, anonymous_cart):
        post_webhook(completed_event(anonymous_cart))

        order = Order.objects.get()
        [message] = mail.outbox
        assert message.subject == f"Confirmation de commande {order.number}"
        assert message.to == ["claire@example.com"]
        assert "Robe Nocturne" in message.body
        assert "8 400,00 €" in message.body
        assert message.alternatives[0][1] == "text/html"

    def test_replay_is_idempotent(self, post_webhook, anonymous_cart):
        event = completed_event(anonymous_cart)

        post_webhook(event)
        response = post_webhook(event)

        assert response.status_code == 200
        assert Order.objects.count() == 1
        assert len(mail.outbox) == 1

    def test_session_id_used_without_payment_intent(self, post_webhook, anonymous_cart):
        post_webhook(completed_event(anonymous_cart, payment_intent=None))

        assert PaymentRecord.objects.get().provider_id == "cs_test_nocturne"

    def test_order_user_from_metadata(self, post_webhook, anonymous_cart, customer):
        event = completed_event(anonymous_cart, metadata={"cartId": str(anonymous_cart.pk), "userId": str(customer.pk)})

        post_webhook(event)

        order = Order.objects.get()
        assert order.user == customer
        assert order.items.get().locale == "en"
        assert mail.outbox[0].subject == f"Order Confirmation {order.number}"

    def test_no_email_without_address(self, post_webhook, anonymous_cart):
        post_webhook(completed_event(anonymous_cart, customer_details={"email": "claire@example.com"}))

        assert Order.objects.count() == 1
        assert mail.outbox == []

    def test_missing_cart_id_is_ignored(self, post_webhook, anonymous_cart):
        response = post_webhook(completed_event(anonymous_cart, metadata={}))

        assert response.status_code == 200
        assert not Order.objects.exists()

    def test_unknown_cart_is_ignored(self, post_webhook, anonymous_cart):
        event = completed_event(anonymous_cart, metadata={"cartId": "00000000-0000-0000-0000-000000000000"})

        post_webhook(event)

        assert not Order.objects.exists()

    def test_other_event_types_are_acknowledged(self, post_webhook, db):
        response = post_webhook({"id": "evt_other", "type": "payment_intent.created", "data": {"object": {}}})

        assert response.status_code == 200
        assert response.json() == {"received": True}

    def test_bad_signature(self, post_webhook, anonymous_cart):
        response = post_webhook(completed_event(anonymous_cart), secret="whsec_wrong")

        assert response.status_code == 400
        assert response.content.startswith(b"Webhook Error:")
        assert not Order.objects.exists()

    def test_missing_signature_header(self, client, db):
        response = client.post("/api/webhooks/stripe/", data="{}", content_type="application/json")

        assert response.status_code == 400
        assert response.content == b"Webhook signature misconfigured"

    def test_missing_secret(self, post_webhook, settings, anonymous_cart):
        event = completed_event(anonymous_cart)
        settings.STRIPE_WEBHOOK_SECRET = ""

        response = post_webhook(event, secret="whsec_test_maison")

        assert response.status_code == 400

    def test_email_disabled_still_creates_order(self, post_webhook, anonymous_cart, settings):
        settings.MAISON = {**settings.MAISON, "EMAIL_ENABLED": False}

        post_webhook(completed_event(anonymous_cart))

        assert Order.objects.count() == 1
        assert mail.outbox == []

    def test_total_falls_back_to_subtotal(self, post_webhook, anonymous_cart):
        event = completed_event(anonymous_cart)
        del event["data"]["object"]["amount_total"]

        post_webhook(event)

        order = Order.objects.get()
        assert order.total_cents == order.subtotal_cents == 840000
        assert PaymentRecord.objects.get().amount_cents == 840000

    def test_expanded_payment_intent(self, post_webhook, anonymous_cart):
        post_webhook(completed_event(anonymous_cart, payment_intent={"id": "pi_expanded", "object": "payment_intent"}))

        assert PaymentRecord.objects.get().provider_id == "pi_expanded"

    def test_empty_cart_is_ignored(self, post_webhook, anonymous_cart):
        CartItem.objects.filter(cart=anonymous_cart).delete()

        response = post_webhook(completed_event(anonymous_cart))

        assert response.status_code == 200
        assert not Order.objects.exists()
        assert not PaymentRecord.objects.exists()
        assert Cart.objects.filter(pk=anonymous_cart.pk).exists()

    def test_email_and_address_fallbacks(self, post_webhook, anonymous_cart):
        event = completed_event(
            anonymous_cart,
            customer_details={},
            customer_email="julien@example.com",
            shipping_details={
                "name": "Julien Moreau",
                "address": {"line1": "3 place Vendôme", "city": "Paris", "postal_code": "75001", "country": "FR"},
            },
        )

        post_webhook(event)

        [message] = mail.outbox
        assert message.to == ["julien@example.com"]
        assert "3 place Vendôme" in message.body

    def test_failed_email_keeps_order(self, post_webhook, anonymous_cart):
        with patch(
            "maison.store.services.emails.EmailMultiAlternatives.send",
            side_effect=ConnectionRefusedError("smtp down"),
        ):
            response = post_webhook(completed_event(anonymous_cart))

        assert response.status_code == 200
        assert Order.objects.count() == 1
        assert PaymentRecord.objects.count() == 1
        assert mail.outbox == []

    def test_non_utf8_body(self, client, db):
        response = client.post(
            "/api/webhooks/stripe/",
            data=b"\xff\xfe{}",
            content_type="application/json",
            HTTP_STRIPE_SIGNATURE="t=1,v1=abc",
        )

        assert response.status_code == 400
        assert response.content == b"Webhook Error: Invalid payload"


@pytest.mark.django_db
def test_failure_inside_transaction_keeps_cart(anonymous_cart):
    session = completed_event(anonymous_cart)["data"]["object"]

    with patch.object(PaymentRecord.objects, "create", side_effect=RuntimeError("database went away")):
        with pytest.raises(RuntimeError):
            handle_checkout_completed(session)

    assert not Order.objects.exists()
    assert Cart.objects.filter(pk=anonymous_cart.pk).exists()
    assert anonymous_cart.items.get().quantity == 2


@pytest.mark.django_db
def test_handle_event_ignores_unknown_types():
    assert handle_event({"type": "charge.refunded"}) is None


def test_generate_order_number():
    from datetime import date

    number = generate_order_number(date(2026, 3, 14))

    assert re.fullmatch(r"MA-20260314-\d{5}", number)


@pytest.mark.parametrize(
    "cents,currency,locale,expected",
    [
        (420000, "EUR", "fr", "4 200,00 €"),
        (420000, "EUR", "en", "€4,200.00"),
        (38000, "USD", "en", "$380.00"),
        (None, "EUR", "en", "€0.00"),
    ],
)
def test_format_money(cents, currency, locale, expected):
    assert format_money(cents, currency, locale) == expected


def test_shipping_update_email():
    result = send_shipping_update(
        ShippingUpdate(
            order_number="MA-20260314-12345",
            customer_name="Claire",
            customer_email="claire@example.com",
            tracking_number="1Z999",
            locale="fr",
        )
    )

    assert result.success is True
    assert mail.outbox[0].subject == "Votre commande MA-20260314-12345 est en route"
