# Initial store schema: carts, orders, payments and clienteling

import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

LOCALE_CHOICES = [("fr", "Français"), ("en", "English")]
CURRENCY_CHOICES = [("EUR", "Euro"), ("USD", "US dollar"), ("GBP", "Pound sterling")]
PAYMENT_STATUS_CHOICES = [("UNPAID", "Unpaid"), ("PAID", "Paid"), ("REFUNDED", "Refunded"), ("FAILED", "Failed")]


def big_id():
    return models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")


def uuid_id():
    return models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)


def timestamps():
    return [
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Cart",
            fields=[
                *timestamps(),
                ("id", uuid_id()),
                ("session_key", models.CharField(blank=True, max_length=64, null=True, unique=True)),
                ("currency", models.CharField(choices=CURRENCY_CHOICES, default="EUR", max_length=3)),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="carts",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="CartItem",
            fields=[
                ("id", big_id()),
                *timestamps(),
                ("quantity", models.PositiveIntegerField(default=1)),
                (
                    "cart",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="store.cart",
                    ),
                ),
                (
                    "variant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="catalog.productvariant",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at", "id"],
                "constraints": [
                    models.UniqueConstraint(fields=("cart", "variant"), name="uniq_cart_item_variant"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Wishlist",
            fields=[
                *timestamps(),
                ("id", uuid_id()),
                ("session_key", models.CharField(blank=True, max_length=64, null=True, unique=True)),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="wishlists",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="WishlistItem",
            fields=[
                ("id", big_id()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="catalog.product",
                    ),
                ),
                (
                    "wishlist",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="store.wishlist",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "constraints": [
                    models.UniqueConstraint(fields=("wishlist", "product"), name="uniq_wishlist_item_product"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Address",
            fields=[
                ("id", big_id()),
                *timestamps(),
                ("label", models.CharField(blank=True, default="", max_length=100)),
                ("first_name", models.CharField(max_length=100)),
                ("last_name", models.CharField(max_length=100)),
                ("line1", models.CharField(max_length=255)),
                ("line2", models.CharField(blank=True, max_length=255, null=True)),
                ("city", models.CharField(max_length=100)),
                ("region", models.CharField(blank=True, max_length=100, null=True)),
                ("postal_code", models.CharField(max_length=20)),
                ("country", models.CharField(max_length=2)),
                ("phone", models.CharField(blank=True, max_length=30, null=True)),
                ("is_default", models.BooleanField(default=False)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="addresses",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "addresses",
                "ordering": ["-is_default", "label", "created_at"],
            },
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", uuid_id()),
                ("number", models.CharField(max_length=32, unique=True)),
                ("currency", models.CharField(choices=CURRENCY_CHOICES, default="EUR", max_length=3)),
                ("subtotal_cents", models.PositiveIntegerField(default=0)),
                ("tax_cents", models.PositiveIntegerField(default=0)),
                ("shipping_cents", models.PositiveIntegerField(default=0)),
                ("duties_cents", models.PositiveIntegerField(default=0)),
                ("personalization_fee_cents", models.PositiveIntegerField(default=0)),
                ("total_cents", models.PositiveIntegerField(default=0)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("CONFIRMED", "Confirmed"),
                            ("IN_PRODUCTION", "In production"),
                            ("SHIPPED", "Shipped"),
                            ("DELIVERED", "Delivered"),
                            ("CANCELLED", "Cancelled"),
                        ],
                        default="PENDING",
                        max_length=20,
                    ),
                ),
                ("payment_status", models.CharField(choices=PAYMENT_STATUS_CHOICES, default="UNPAID", max_length=20)),
                (
                    "fulfillment_status",
                    models.CharField(
                        choices=[
                            ("NOT_STARTED", "Not started"),
                            ("IN_PROGRESS", "In progress"),
                            ("SHIPPED", "Shipped"),
                            ("DELIVERED", "Delivered"),
                        ],
                        default="NOT_STARTED",
                        max_length=20,
                    ),
                ),
                ("white_glove", models.BooleanField(default=False)),
                ("placed_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "billing_address",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="store.address",
                    ),
                ),
                (
                    "shipping_address",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="store.address",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-placed_at"],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", big_id()),
                ("product_name", models.CharField(max_length=255)),
                ("locale", models.CharField(choices=LOCALE_CHOICES, default="en", max_length=2)),
                ("unit_price_cents", models.PositiveIntegerField()),
                ("quantity", models.PositiveIntegerField(default=1)),
                ("monogram", models.CharField(blank=True, max_length=10, null=True)),
                ("personalization_notes", models.TextField(blank=True, null=True)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="store.order",
                    ),
                ),
                (
                    "variant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="catalog.productvariant",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="PaymentRecord",
            fields=[
                ("id", big_id()),
                ("provider", models.CharField(default="stripe", max_length=30)),
                ("provider_id", models.CharField(max_length=255, unique=True)),
                ("amount_cents", models.PositiveIntegerField(default=0)),
                ("currency", models.CharField(choices=CURRENCY_CHOICES, default="EUR", max_length=3)),
                ("status", models.CharField(choices=PAYMENT_STATUS_CHOICES, default="UNPAID", max_length=20)),
                ("data", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="payments",
                        to="store.order",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="Promotion",
            fields=[
                ("id", big_id()),
                *timestamps(),
                ("code", models.CharField(max_length=40, unique=True)),
                ("description", models.TextField(blank=True, null=True)),
                (
                    "discount_type",
                    models.CharField(
                        choices=[
                            ("percentage", "Percentage"),
                            ("amount", "Fixed amount"),
                            ("shipping", "Free shipping"),
                        ],
                        default="percentage",
                        max_length=20,
                    ),
                ),
                ("discount_value", models.IntegerField(default=0)),
                ("starts_at", models.DateTimeField()),
                ("ends_at", models.DateTimeField(blank=True, null=True)),
                ("usage_limit", models.PositiveIntegerField(blank=True, null=True)),
                ("locale", models.CharField(blank=True, choices=LOCALE_CHOICES, max_length=2, null=True)),
                ("limited_edition_only", models.BooleanField(default=False)),
            ],
            options={
                "ordering": ["-starts_at"],
            },
        ),
        migrations.CreateModel(
            name="Appointment",
            fields=[
                ("id", big_id()),
                *timestamps(),
                ("locale", models.CharField(choices=LOCALE_CHOICES, default="fr", max_length=2)),
                ("boutique", models.CharField(max_length=120)),
                ("appointment_at", models.DateTimeField()),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("requested", "Requested"),
                            ("confirmed", "Confirmed"),
                            ("rescheduled", "Rescheduled"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="requested",
                        max_length=20,
                    ),
                ),
                ("services", models.TextField(blank=True, default="")),
                ("notes", models.TextField(blank=True, null=True)),
                ("concierge", models.CharField(blank=True, max_length=120, null=True)),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="appointments",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["appointment_at"],
            },
        ),
    ]
