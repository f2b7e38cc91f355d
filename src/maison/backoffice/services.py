"""Back-office command layer.

Clean domain logic for console mutations. Views parse the submitted form and
call these functions; every mutation drops the cache tags of the storefront
pages it affects.
"""

import logging
import re
import uuid
from datetime import datetime, time

from django.db import transaction
from django.db.models import Max
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from maison.catalog.models import Collection, CollectionItem, CollectionTranslation, LimitedDrop, Product
from maison.core.cache import CacheTags, invalidate_tags
from maison.core.models import Locale, PublicationStatus
from maison.editorial.models import EditorialPost
from maison.store.models import (
    Appointment,
    AppointmentStatus,
    DiscountType,
    FulfillmentStatus,
    Order,
    OrderStatus,
    PaymentRecord,
    PaymentStatus,
    Promotion,
)
from maison.store.services.emails import ShippingUpdate, send_shipping_update

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Form value helpers
# ---------------------------------------------------------------------------


def normalize_code(value):
    """Promotion codes are upper-case letters, digits and dashes."""
    return re.sub(r"[^A-Z0-9-]+", "", (value or "").strip().upper())


def normalize_slug(value):
    slug = re.sub(r"[^a-z0-9-]+", "-", (value or "").strip().lower())
    return slug.strip("-")


def parse_when(value):
    """Parse a date or datetime form value into an aware datetime."""
    if not value:
        return None
    if isinstance(value, datetime):
        moment = value
    else:
        moment = parse_datetime(str(value))
        if moment is None:
            day = parse_date(str(value))
            if day is None:
                raise ValueError(f"Invalid date: {value}")
            moment = datetime.combine(day, time.min)
    if timezone.is_naive(moment):
        moment = timezone.make_aware(moment)
    return moment


def int_or_zero(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def int_or_none(value):
    if value in (None, ""):
        return None
    return int(value)


def form_locale(value):
    """Optional locale from a form: "FR"/"EN" in any case, otherwise all locales."""
    value = (value or "").strip().lower()
    return value if value in Locale.values else None


def form_flag(value):
    return value in (True, "on", "true", "1", 1)


def _check_choice(value, choices, label):
    if value not in choices.values:
        raise ValueError(f"Invalid {label}: {value}. Must be one of {list(choices.values)}")


# ---------------------------------------------------------------------------
# Limited drops
# ---------------------------------------------------------------------------


def _invalidate_drops():
    invalidate_tags(CacheTags.COLLECTIONS, CacheTags.HOMEPAGE)


def create_drop(data):
    """Create a limited drop.

    Args:
        data: Mapping with title, collection_id, starts_at, ends_at, locale,
            waitlist_open

    Returns:
        The created LimitedDrop

    Raises:
        ValueError: If title or collection is missing
    """
    title = (data.get("title") or "").strip()
    if not title:
        raise ValueError("Title is required")
    collection_id = data.get("collection_id")
    if not collection_id:
        raise ValueError("Collection is required")
    collection = get_object_or_404(Collection, pk=collection_id)

    drop = LimitedDrop.objects.create(
        collection=collection,
        title=title,
        starts_at=parse_when(data.get("starts_at")) or timezone.now(),
        ends_at=parse_when(data.get("ends_at")),
        locale=form_locale(data.get("locale")),
        waitlist_open=form_flag(data.get("waitlist_open")),
    )
    _invalidate_drops()
    logger.info("Created drop %s", drop.pk)
    return drop


def update_drop(drop_id, data):
    drop = get_object_or_404(LimitedDrop, pk=drop_id)
    title = (data.get("title") or "").strip()
    if not title:
        raise ValueError("Title is required")

    drop.title = title
    if data.get("collection_id"):
        drop.collection = get_object_or_404(Collection, pk=data["collection_id"])
    starts_at = parse_when(data.get("starts_at"))
    if starts_at:
        drop.starts_at = starts_at
    drop.ends_at = parse_when(data.get("ends_at"))
    drop.locale = form_locale(data.get("locale"))
    drop.waitlist_open = form_flag(data.get("waitlist_open"))
    drop.save()

    _invalidate_drops()
    return drop


def delete_drop(drop_id):
    get_object_or_404(LimitedDrop, pk=drop_id).delete()
    _invalidate_drops()


def close_drop(drop_id):
    """End a drop now."""
    drop = get_object_or_404(LimitedDrop, pk=drop_id)
    drop.ends_at = timezone.now()
    drop.save(update_fields=["ends_at", "updated_at"])
    _invalidate_drops()
    return drop


# ---------------------------------------------------------------------------
# Promotions
# ---------------------------------------------------------------------------


def _promotion_fields(data):
    code = normalize_code(data.get("code"))
    if not code:
        raise ValueError("Code is required")
    discount_type = data.get("discount_type") or DiscountType.PERCENTAGE
    _check_choice(discount_type, DiscountType, "discount type")
    return {
        "code": code,
        "description": data.get("description") or None,
        "discount_type": discount_type,
        "discount_value": int_or_zero(data.get("discount_value")),
        "ends_at": parse_when(data.get("ends_at")),
        "usage_limit": int_or_none(data.get("usage_limit")),
        "locale": form_locale(data.get("locale")),
        "limited_edition_only": form_flag(data.get("limited_edition_only")),
    }


def create_promotion(data):
    fields = _promotion_fields(data)
    promotion = Promotion.objects.create(starts_at=parse_when(data.get("starts_at")) or timezone.now(), **fields)
    logger.info("Created promotion %s", promotion.code)
    return promotion


def update_promotion(promotion_id, data):
    promotion = get_object_or_404(Promotion, pk=promotion_id)
    for name, value in _promotion_fields(data).items():
        setattr(promotion, name, value)
    starts_at = parse_when(data.get("starts_at"))
    if starts_at:
        promotion.starts_at = starts_at
    promotion.save()
    return promotion


def delete_promotion(promotion_id):
    get_object_or_404(Promotion, pk=promotion_id).delete()


def toggle_promotion(promotion_id):
    """Deactivate an active promotion by ending it now, or reopen an ended one."""
    promotion = get_object_or_404(Promotion, pk=promotion_id)
    now = timezone.now()
    is_active = promotion.ends_at is None or promotion.ends_at > now
    promotion.ends_at = now if is_active else None
    promotion.save(update_fields=["ends_at", "updated_at"])
    return promotion


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------


def _create_ops_note(order, note):
    return PaymentRecord.objects.create(
        order=order,
        provider=PaymentRecord.OPS_NOTE_PROVIDER,
        provider_id=f"note-{uuid.uuid4().hex}",
        amount_cents=0,
        currency=order.currency,
        status=PaymentStatus.UNPAID,
        data={"note": note},
    )


def update_order_state(order_id, status=None, fulfillment_status=None, payment_status=None, note=None):
    """Update the three status fields of an order, with an optional note.

    Moving fulfillment to SHIPPED emails the customer once the update
    commits.

    Raises:
        ValueError: If a status value is not recognised
        Http404: If the order does not exist
    """
    status = status or OrderStatus.PENDING
    fulfillment_status = fulfillment_status or FulfillmentStatus.NOT_STARTED
    payment_status = payment_status or PaymentStatus.UNPAID
    _check_choice(status, OrderStatus, "order status")
    _check_choice(fulfillment_status, FulfillmentStatus, "fulfillment status")
    _check_choice(payment_status, PaymentStatus, "payment status")
    note = (note or "").strip()

    with transaction.atomic():
        order = get_object_or_404(Order.objects.select_for_update().select_related("user"), pk=order_id)
        shipped_now = (
            fulfillment_status == FulfillmentStatus.SHIPPED
            and order.fulfillment_status != FulfillmentStatus.SHIPPED
        )

        order.status = status
        order.fulfillment_status = fulfillment_status
        order.payment_status = payment_status
        order.save(update_fields=["status", "fulfillment_status", "payment_status", "updated_at"])

        if note:
            _create_ops_note(order, note)

        if shipped_now and order.user is not None:
            transaction.on_commit(lambda: notify_shipped(order))

    logger.info("Order %s now %s/%s/%s", order.number, status, fulfillment_status, payment_status)
    return order


def notify_shipped(order):
    user = order.user
    locale = order.items.values_list("locale", flat=True).first() or user.locale
    return send_shipping_update(
        ShippingUpdate(
            order_number=order.number,
            customer_name=user.get_display_name(),
            customer_email=user.email,
            locale=locale,
        )
    )


def add_order_note(order_id, note):
    """Attach an operations note to an order. Blank notes are ignored."""
    order = get_object_or_404(Order, pk=order_id)
    note = (note or "").strip()
    if not note:
        return None
    return _create_ops_note(order, note)


# ---------------------------------------------------------------------------
# Appointments
# ---------------------------------------------------------------------------


def update_appointment_status(appointment_id, status):
    if not status:
        raise ValueError("Status is required")
    _check_choice(status, AppointmentStatus, "appointment status")
    appointment = get_object_or_404(Appointment, pk=appointment_id)
    appointment.status = status
    appointment.save(update_fields=["status", "updated_at"])
    return appointment


def confirm_appointment(appointment_id):
    return update_appointment_status(appointment_id, AppointmentStatus.CONFIRMED)


def complete_appointment(appointment_id):
    return update_appointment_status(appointment_id, AppointmentStatus.COMPLETED)


def cancel_appointment(appointment_id):
    return update_appointment_status(appointment_id, AppointmentStatus.CANCELLED)


def reschedule_appointment(appointment_id, appointment_at):
    when = parse_when(appointment_at)
    if when is None:
        raise ValueError("New date is required")
    appointment = get_object_or_404(Appointment, pk=appointment_id)
    appointment.appointment_at = when
    appointment.status = AppointmentStatus.RESCHEDULED
    appointment.save(update_fields=["appointment_at", "status", "updated_at"])
    return appointment


def add_appointment_note(appointment_id, notes):
    appointment = get_object_or_404(Appointment, pk=appointment_id)
    appointment.notes = notes or None
    appointment.save(update_fields=["notes", "updated_at"])
    return appointment


def assign_concierge(appointment_id, concierge):
    appointment = get_object_or_404(Appointment, pk=appointment_id)
    appointment.concierge = concierge or None
    appointment.save(update_fields=["concierge", "updated_at"])
    return appointment


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------


def _invalidate_collections():
    invalidate_tags(CacheTags.COLLECTIONS, CacheTags.PRODUCTS, CacheTags.HOMEPAGE)


def _collection_fields(data):
    slug = normalize_slug(data.get("slug"))
    if not slug:
        raise ValueError("Slug is required")
    status = data.get("status") or PublicationStatus.DRAFT
    _check_choice(status, PublicationStatus, "status")
    return slug, status, parse_when(data.get("release_date"))


def _save_collection_translations(collection, data):
    title_fr = data.get("title_fr") or ""
    title_en = data.get("title_en") or ""
    for locale, title, subtitle in (
        (Locale.FR, title_fr or title_en, data.get("subtitle_fr") or None),
        (Locale.EN, title_en or title_fr, data.get("subtitle_en") or None),
    ):
        CollectionTranslation.objects.update_or_create(
            collection=collection,
            locale=locale,
            defaults={"title": title, "subtitle": subtitle},
        )


@transaction.atomic
def create_collection(data):
    slug, status, release_date = _collection_fields(data)
    collection = Collection.objects.create(slug=slug, status=status, release_date=release_date)
    _save_collection_translations(collection, data)
    transaction.on_commit(_invalidate_collections)
    return collection


@transaction.atomic
def update_collection(collection_id, data):
    collection = get_object_or_404(Collection, pk=collection_id)
    collection.slug, collection.status, collection.release_date = _collection_fields(data)
    collection.save()
    _save_collection_translations(collection, data)
    transaction.on_commit(_invalidate_collections)
    return collection


def delete_collection(collection_id):
    get_object_or_404(Collection, pk=collection_id).delete()
    _invalidate_collections()


def add_product_to_collection(collection_id, product_id):
    """Append a product to a collection; adding it twice is a no-op."""
    if not collection_id or not product_id:
        raise ValueError("Collection and Product IDs are required")
    collection = get_object_or_404(Collection, pk=collection_id)
    product = get_object_or_404(Product, pk=product_id)

    existing = CollectionItem.objects.filter(collection=collection, product=product).first()
    if existing is not None:
        return existing

    last = collection.items.aggregate(last=Max("sort_order"))["last"] or 0
    item = CollectionItem.objects.create(collection=collection, product=product, sort_order=last + 1)
    _invalidate_collections()
    return item


def remove_product_from_collection(collection_id, product_id):
    if not collection_id or not product_id:
        raise ValueError("Collection and Product IDs are required")
    CollectionItem.objects.filter(collection_id=collection_id, product_id=product_id).delete()
    _invalidate_collections()


def toggle_product_highlight(collection_id, product_id):
    if not collection_id or not product_id:
        raise ValueError("Collection and Product IDs are required")
    item = get_object_or_404(CollectionItem, collection_id=collection_id, product_id=product_id)
    item.highlighted = not item.highlighted
    item.save(update_fields=["highlighted"])
    _invalidate_collections()
    return item


def update_collection_item_order(item_id, sort_order):
    if not item_id:
        raise ValueError("Item ID is required")
    item = get_object_or_404(CollectionItem, pk=item_id)
    item.sort_order = max(0, int_or_zero(sort_order))
    item.save(update_fields=["sort_order"])
    _invalidate_collections()
    return item


# ---------------------------------------------------------------------------
# Editorial
# ---------------------------------------------------------------------------


def publish_post(post_id):
    """Make a journal post public, stamping its publication date if unset."""
    post = get_object_or_404(EditorialPost, pk=post_id)
    post.status = PublicationStatus.ACTIVE
    if post.published_at is None:
        post.published_at = timezone.now()
    post.save(update_fields=["status", "published_at", "updated_at"])
    invalidate_tags(CacheTags.JOURNAL, CacheTags.HOMEPAGE)
    return post


def unpublish_post(post_id):
    post = get_object_or_404(EditorialPost, pk=post_id)
    post.status = PublicationStatus.DRAFT
    post.save(update_fields=["status", "updated_at"])
    invalidate_tags(CacheTags.JOURNAL, CacheTags.HOMEPAGE)
    return post
