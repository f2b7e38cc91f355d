"""Fixtures for back-office tests."""

from datetime import timedelta

import pytest
from django.utils import timezone

from maison.catalog.models import LimitedDrop
from maison.core.models import Locale, PublicationStatus
from maison.editorial.models import EditorialPost, EditorialPostTranslation
from maison.store.models import (
    Appointment,
    FulfillmentStatus,
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
    Promotion,
)


@pytest.fixture
def editor_client(client, editor):
    client.force_login(editor)
    return client


@pytest.fixture
def order(customer, variant):
    """A paid order for one Robe Nocturne, placed in French."""
    order = Order.objects.create(
        number="MA-20260314-12345",
        user=customer,
        subtotal_cents=420000,
        total_cents=420000,
        status=OrderStatus.CONFIRMED,
        payment_status=PaymentStatus.PAID,
        fulfillment_status=FulfillmentStatus.NOT_STARTED,
    )
    OrderItem.objects.create(
        order=order,
        variant=variant,
        product_name="Robe Nocturne",
        locale=Locale.FR,
        unit_price_cents=420000,
        quantity=1,
    )
    return order


@pytest.fixture
def drop(collection):
    return LimitedDrop.objects.create(
        collection=collection,
        title="Nuit Blanche",
        starts_at=timezone.now() - timedelta(days=1),
        waitlist_open=True,
    )


@pytest.fixture
def promotion(db):
    return Promotion.objects.create(code="AURORE10", discount_value=10, starts_at=timezone.now() - timedelta(days=1))


@pytest.fixture
def appointment(customer):
    return Appointment.objects.create(
        user=customer,
        boutique="Paris Saint-Honoré",
        appointment_at=timezone.now() + timedelta(days=2),
    )


@pytest.fixture
def draft_post(db):
    post = EditorialPost.objects.create(slug="atelier-nuit", status=PublicationStatus.DRAFT)
    EditorialPostTranslation.objects.create(post=post, locale=Locale.FR, title="L'atelier la nuit")
    return post
