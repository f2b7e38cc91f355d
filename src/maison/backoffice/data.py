"""Back-office read models.

Rows are shaped for plain server-rendered tables. English is the working
language of the console, so titles prefer the English translation and fall
back to any translation, then to the slug.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from django.core.exceptions import ValidationError
from django.db.models import Count, Prefetch
from django.utils import timezone

from maison.catalog.models import Collection, Inventory, LimitedDrop, Product, WaitlistEntry
from maison.core.conf import get_setting
from maison.core.models import Locale, PublicationStatus
from maison.editorial.models import EditorialPost, HomepageModule
from maison.store.models import Appointment, Order, PaymentRecord, Promotion

PRODUCT_ROWS = 50
COLLECTION_ROWS = 30
HOMEPAGE_ROWS = 100
EDITORIAL_ROWS = 50
ORDER_ROWS = 30
DROP_ROWS = 20
APPOINTMENT_ROWS = 30
PROMOTION_ROWS = 20

NO_ISSUES = "—"


@dataclass
class Overview:
    products: int
    drops: int
    appointments: int
    approvals: int


@dataclass
class ProductRow:
    id: int
    slug: str
    name: str
    status: str
    locales: list[str]
    issues: list[str]


@dataclass
class CollectionRow:
    id: int
    slug: str
    title: str
    status: str
    release_date: object
    locales: list[str]
    drop_title: str | None


@dataclass
class HomepageModuleRow:
    id: int
    slug: str
    type: str
    locale: str
    status: str
    sort_order: int
    config: dict | None = None
    active_from: datetime | None = None
    active_to: datetime | None = None


@dataclass
class EditorialRow:
    id: int
    slug: str
    title: str
    status: str
    locales: list[str]
    scheduled: datetime | None


@dataclass
class OrderRow:
    id: str
    number: str
    status: str
    fulfillment_status: str
    customer: str | None
    total_cents: int


@dataclass
class OrderLine:
    id: int
    name: str
    sku: str
    quantity: int
    unit_price_cents: int
    monogram: str | None
    personalization_notes: str | None
    color: str | None
    size: str | None


@dataclass
class OrderEvent:
    id: str
    created_at: datetime
    type: str
    title: str
    detail: str | None


@dataclass
class OrderDetail:
    id: str
    number: str
    status: str
    fulfillment_status: str
    payment_status: str
    customer: str | None
    currency: str
    placed_at: datetime
    subtotal_cents: int
    shipping_cents: int
    tax_cents: int
    duties_cents: int
    personalization_fee_cents: int
    total_cents: int
    white_glove: bool
    shipping_address: object = None
    billing_address: object = None
    items: list[OrderLine] = field(default_factory=list)
    events: list[OrderEvent] = field(default_factory=list)


@dataclass
class DropRow:
    id: int
    title: str
    window: str
    waitlist: int
    locale: str | None
    status: str


@dataclass
class AppointmentRow:
    id: int
    guest: str
    when: datetime
    boutique: str
    status: str


@dataclass
class PromotionRow:
    id: int
    code: str
    description: str | None
    discount_type: str
    discount_value: int
    starts_at: datetime
    ends_at: datetime | None
    usage_limit: int | None
    limited_edition_only: bool
    locale_label: str
    is_active: bool


@dataclass
class OpsSignals:
    low_stock: int
    waitlist: int
    scheduled_drops: int


def locale_coverage(translations):
    seen = []
    for translation in translations:
        if translation.locale not in seen:
            seen.append(translation.locale)
    return seen


def preferred_text(translations, attr, fallback):
    translations = list(translations)
    for translation in translations:
        if translation.locale == Locale.EN:
            return getattr(translation, attr)
    if translations:
        return getattr(translations[0], attr)
    return fallback


def schedule_status(active_from, active_to, now=None):
    """Active, Scheduled or Ended for a homepage module window."""
    now = now or timezone.now()
    if active_from and active_from > now:
        return "Scheduled"
    if active_to and active_to < now:
        return "Ended"
    return "Active"


def drop_status(drop, now=None):
    now = now or timezone.now()
    if drop.starts_at > now:
        return "Scheduled"
    if drop.ends_at and drop.ends_at < now:
        return "Draft"
    return "Live"


def drop_window(drop):
    start = timezone.localtime(drop.starts_at).date().isoformat()
    if drop.ends_at:
        return f"{start} – {timezone.localtime(drop.ends_at).date().isoformat()}"
    return start


def customer_label(user):
    if user is None:
        return None
    return user.first_name or user.email


def get_overview():
    now = timezone.now()
    return Overview(
        products=Product.objects.filter(status=PublicationStatus.ACTIVE).count(),
        drops=LimitedDrop.objects.count(),
        appointments=Appointment.objects.filter(appointment_at__gte=now).count(),
        approvals=Product.objects.filter(status=PublicationStatus.DRAFT).count(),
    )


def get_product_rows():
    products = Product.objects.prefetch_related("translations", "media").order_by("-updated_at")[:PRODUCT_ROWS]

    rows = []
    for product in products:
        translations = list(product.translations.all())
        locales = locale_coverage(translations)
        missing = [locale for locale in (Locale.EN, Locale.FR) if locale not in locales]

        issues = []
        if missing:
            issues.append(f"Missing {' & '.join(locale.upper() for locale in missing)}")
        if not product.media.all():
            issues.append("No media uploaded")
        if not issues:
            issues.append(NO_ISSUES)

        rows.append(
            ProductRow(
                id=product.pk,
                slug=product.slug,
                name=preferred_text(translations, "name", product.slug),
                status=product.status,
                locales=locales,
                issues=issues,
            )
        )
    return rows


def get_collection_rows():
    collections = (
        Collection.objects.prefetch_related(
            "translations",
            Prefetch("drops", queryset=LimitedDrop.objects.order_by("-starts_at")),
        )
        .order_by("-release_date")[:COLLECTION_ROWS]
    )

    rows = []
    for collection in collections:
        translations = list(collection.translations.all())
        drops = list(collection.drops.all())
        rows.append(
            CollectionRow(
                id=collection.pk,
                slug=collection.slug,
                title=preferred_text(translations, "title", collection.slug),
                status=collection.status,
                release_date=collection.release_date,
                locales=locale_coverage(translations),
                drop_title=drops[0].title if drops else None,
            )
        )
    return rows


def _homepage_row(module, now, detailed=False):
    row = HomepageModuleRow(
        id=module.pk,
        slug=module.slug,
        type=module.type,
        locale=module.locale,
        status=schedule_status(module.active_from, module.active_to, now),
        sort_order=module.sort_order,
    )
    if detailed:
        row.config = module.config
        row.active_from = module.active_from
        row.active_to = module.active_to
    return row


def get_homepage_module_rows():
    now = timezone.now()
    modules = HomepageModule.objects.order_by("sort_order", "id")[:HOMEPAGE_ROWS]
    return [_homepage_row(module, now) for module in modules]


def get_homepage_module(module_id):
    module = HomepageModule.objects.filter(pk=module_id).first()
    if module is None:
        return None
    return _homepage_row(module, timezone.now(), detailed=True)


def get_editorial_rows():
    posts = EditorialPost.objects.prefetch_related("translations").order_by("-published_at", "slug")[:EDITORIAL_ROWS]

    rows = []
    for post in posts:
        translations = list(post.translations.all())
        rows.append(
            EditorialRow(
                id=post.pk,
                slug=post.slug,
                title=preferred_text(translations, "title", post.slug),
                status=post.status,
                locales=locale_coverage(translations),
                scheduled=post.published_at,
            )
        )
    return rows


def get_order_rows():
    orders = Order.objects.select_related("user").order_by("-placed_at")[:ORDER_ROWS]
    return [
        OrderRow(
            id=str(order.pk),
            number=order.number,
            status=order.status,
            fulfillment_status=order.fulfillment_status,
            customer=customer_label(order.user),
            total_cents=order.total_cents,
        )
        for order in orders
    ]


def payment_event(payment):
    if payment.is_ops_note:
        return OrderEvent(
            id=str(payment.pk),
            created_at=payment.created_at,
            type="note",
            title="Operations note",
            detail=(payment.data or {}).get("note"),
        )
    return OrderEvent(
        id=str(payment.pk),
        created_at=payment.created_at,
        type="payment",
        title=f"{payment.provider} {payment.status}",
        detail=f"{payment.amount_cents / 100:.2f} {payment.currency}",
    )


def get_order_detail(order_id):
    """Order with its lines and an event timeline, or None."""
    try:
        order = (
            Order.objects.select_related("user", "shipping_address", "billing_address")
            .prefetch_related(
                "items__variant",
                Prefetch("payments", queryset=PaymentRecord.objects.order_by("-created_at", "-id")),
            )
            .filter(pk=order_id)
            .first()
        )
    except (TypeError, ValueError, ValidationError):
        return None
    if order is None:
        return None

    items = [
        OrderLine(
            id=item.pk,
            name=item.product_name,
            sku=item.variant.sku,
            quantity=item.quantity,
            unit_price_cents=item.unit_price_cents,
            monogram=item.monogram,
            personalization_notes=item.personalization_notes,
            color=item.variant.color,
            size=item.variant.size,
        )
        for item in order.items.all()
    ]

    events = [
        OrderEvent(
            id=f"placed-{order.pk}",
            created_at=order.placed_at,
            type="note",
            title="Order placed",
            detail=order.number,
        )
    ]
    events.extend(payment_event(payment) for payment in order.payments.all())

    return OrderDetail(
        id=str(order.pk),
        number=order.number,
        status=order.status,
        fulfillment_status=order.fulfillment_status,
        payment_status=order.payment_status,
        customer=customer_label(order.user),
        currency=order.currency,
        placed_at=order.placed_at,
        subtotal_cents=order.subtotal_cents,
        shipping_cents=order.shipping_cents,
        tax_cents=order.tax_cents,
        duties_cents=order.duties_cents or 0,
        personalization_fee_cents=order.personalization_fee_cents or 0,
        total_cents=order.total_cents,
        white_glove=order.white_glove,
        shipping_address=order.shipping_address,
        billing_address=order.billing_address,
        items=items,
        events=events,
    )


def get_drop_rows():
    now = timezone.now()
    drops = LimitedDrop.objects.annotate(waitlist_count=Count("waitlist_entries")).order_by("-starts_at")[:DROP_ROWS]
    return [
        DropRow(
            id=drop.pk,
            title=drop.title,
            window=drop_window(drop),
            waitlist=drop.waitlist_count,
            locale=drop.locale or None,
            status=drop_status(drop, now),
        )
        for drop in drops
    ]


def get_appointment_rows():
    since = timezone.now() - timedelta(days=1)
    appointments = Appointment.objects.filter(appointment_at__gte=since).order_by("appointment_at")[:APPOINTMENT_ROWS]
    return [
        AppointmentRow(
            id=appointment.pk,
            guest=appointment.notes or appointment.concierge or (str(appointment.user_id) if appointment.user_id else "Client"),
            when=appointment.appointment_at,
            boutique=appointment.boutique,
            status=appointment.status,
        )
        for appointment in appointments
    ]


def get_promotion_rows():
    now = timezone.now()
    promotions = Promotion.objects.order_by("-starts_at")[:PROMOTION_ROWS]
    return [
        PromotionRow(
            id=promotion.pk,
            code=promotion.code,
            description=promotion.description,
            discount_type=promotion.discount_type,
            discount_value=promotion.discount_value,
            starts_at=promotion.starts_at,
            ends_at=promotion.ends_at,
            usage_limit=promotion.usage_limit,
            limited_edition_only=promotion.limited_edition_only,
            locale_label=promotion.locale.upper() if promotion.locale else "All",
            is_active=promotion.ends_at is None or promotion.ends_at > now,
        )
        for promotion in promotions
    ]


def get_ops_signals():
    return OpsSignals(
        low_stock=Inventory.objects.filter(quantity__lte=get_setting("LOW_STOCK_THRESHOLD")).count(),
        waitlist=WaitlistEntry.objects.filter(status="pending").count(),
        scheduled_drops=LimitedDrop.objects.filter(starts_at__gt=timezone.now()).count(),
    )
