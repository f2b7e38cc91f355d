# Initial catalog schema: products, collections and limited drops

import django.db.models.deletion
from django.db import migrations, models

LOCALE_CHOICES = [("fr", "Français"), ("en", "English")]
STATUS_CHOICES = [("DRAFT", "Draft"), ("ACTIVE", "Active"), ("ARCHIVED", "Archived")]


def big_id():
    return models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")


def timestamps():
    return [
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="MediaAsset",
            fields=[
                ("id", big_id()),
                *timestamps(),
                (
                    "type",
                    models.CharField(choices=[("IMAGE", "Image"), ("VIDEO", "Video")], default="IMAGE", max_length=10),
                ),
                ("url", models.URLField(max_length=500)),
                ("alt", models.CharField(blank=True, max_length=255)),
            ],
            options={
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Material",
            fields=[
                ("id", big_id()),
                ("name", models.CharField(max_length=100, unique=True)),
            ],
        ),
        migrations.CreateModel(
            name="Category",
            fields=[
                ("id", big_id()),
                *timestamps(),
                ("slug", models.SlugField(unique=True)),
                (
                    "parent",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="children",
                        to="catalog.category",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "categories",
                "ordering": ["slug"],
            },
        ),
        migrations.CreateModel(
            name="CategoryTranslation",
            fields=[
                ("id", big_id()),
                ("locale", models.CharField(choices=LOCALE_CHOICES, max_length=2)),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True, null=True)),
                (
                    "category",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="translations",
                        to="catalog.category",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("category", "locale"), name="uniq_category_translation_locale"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", big_id()),
                *timestamps(),
                ("slug", models.SlugField(unique=True)),
                ("status", models.CharField(choices=STATUS_CHOICES, default="DRAFT", max_length=10)),
                ("limited_edition", models.BooleanField(default=False)),
                ("heritage_tag", models.CharField(blank=True, max_length=100, null=True)),
                ("origin_country", models.CharField(blank=True, max_length=100, null=True)),
                ("atelier_notes", models.TextField(blank=True, null=True)),
                ("care_instructions", models.JSONField(blank=True, null=True)),
                (
                    "category",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="products",
                        to="catalog.category",
                    ),
                ),
                (
                    "materials",
                    models.ManyToManyField(blank=True, related_name="products", to="catalog.material"),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="ProductTranslation",
            fields=[
                ("id", big_id()),
                ("locale", models.CharField(choices=LOCALE_CHOICES, max_length=2)),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True, null=True)),
                ("craft_story", models.TextField(blank=True, null=True)),
                ("materials_text", models.TextField(blank=True, null=True)),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="translations",
                        to="catalog.product",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("product", "locale"), name="uniq_product_translation_locale"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProductMedia",
            fields=[
                ("id", big_id()),
                ("placement", models.CharField(default="gallery", max_length=30)),
                ("sort_order", models.PositiveIntegerField(default=0)),
                (
                    "asset",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="product_media",
                        to="catalog.mediaasset",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="media",
                        to="catalog.product",
                    ),
                ),
            ],
            options={
                "ordering": ["sort_order", "id"],
            },
        ),
        migrations.CreateModel(
            name="ProductVariant",
            fields=[
                ("id", big_id()),
                *timestamps(),
                ("sku", models.CharField(max_length=64, unique=True)),
                ("size", models.CharField(blank=True, max_length=30, null=True)),
                ("color", models.CharField(blank=True, max_length=50, null=True)),
                ("price_cents", models.PositiveIntegerField()),
                ("personalization_allowed", models.BooleanField(default=False)),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="variants",
                        to="catalog.product",
                    ),
                ),
            ],
            options={
                "ordering": ["price_cents", "id"],
            },
        ),
        migrations.CreateModel(
            name="VariantMedia",
            fields=[
                ("id", big_id()),
                ("sort_order", models.PositiveIntegerField(default=0)),
                (
                    "asset",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="variant_media",
                        to="catalog.mediaasset",
                    ),
                ),
                (
                    "variant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="media",
                        to="catalog.productvariant",
                    ),
                ),
            ],
            options={
                "ordering": ["sort_order", "id"],
            },
        ),
        migrations.CreateModel(
            name="Inventory",
            fields=[
                ("id", big_id()),
                ("quantity", models.IntegerField(default=0)),
                (
                    "variant",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="inventory",
                        to="catalog.productvariant",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "inventory",
            },
        ),
        migrations.CreateModel(
            name="Collection",
            fields=[
                ("id", big_id()),
                *timestamps(),
                ("slug", models.SlugField(unique=True)),
                ("status", models.CharField(choices=STATUS_CHOICES, default="DRAFT", max_length=10)),
                ("release_date", models.DateTimeField(blank=True, null=True)),
                (
                    "hero_asset",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="catalog.mediaasset",
                    ),
                ),
            ],
            options={
                "ordering": ["-release_date"],
            },
        ),
        migrations.CreateModel(
            name="CollectionTranslation",
            fields=[
                ("id", big_id()),
                ("locale", models.CharField(choices=LOCALE_CHOICES, max_length=2)),
                ("title", models.CharField(max_length=200)),
                ("subtitle", models.CharField(blank=True, max_length=255, null=True)),
                ("manifesto", models.TextField(blank=True, null=True)),
                ("description", models.TextField(blank=True, null=True)),
                (
                    "collection",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="translations",
                        to="catalog.collection",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(
                        fields=("collection", "locale"), name="uniq_collection_translation_locale"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="CollectionItem",
            fields=[
                ("id", big_id()),
                ("sort_order", models.PositiveIntegerField(default=0)),
                ("highlighted", models.BooleanField(default=False)),
                (
                    "collection",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="catalog.collection",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="collection_items",
                        to="catalog.product",
                    ),
                ),
            ],
            options={
                "ordering": ["sort_order", "id"],
                "constraints": [
                    models.UniqueConstraint(fields=("collection", "product"), name="uniq_collection_product"),
                ],
            },
        ),
        migrations.CreateModel(
            name="CollectionSection",
            fields=[
                ("id", big_id()),
                ("layout", models.CharField(default="text", max_length=30)),
                ("sort_order", models.PositiveIntegerField(default=0)),
                (
                    "asset",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="catalog.mediaasset",
                    ),
                ),
                (
                    "collection",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sections",
                        to="catalog.collection",
                    ),
                ),
            ],
            options={
                "ordering": ["sort_order", "id"],
            },
        ),
        migrations.CreateModel(
            name="CollectionSectionTranslation",
            fields=[
                ("id", big_id()),
                ("locale", models.CharField(choices=LOCALE_CHOICES, max_length=2)),
                ("heading", models.CharField(blank=True, max_length=255)),
                ("body", models.TextField(blank=True, null=True)),
                ("caption", models.CharField(blank=True, max_length=255, null=True)),
                (
                    "section",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="translations",
                        to="catalog.collectionsection",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("section", "locale"), name="uniq_section_translation_locale"),
                ],
            },
        ),
        migrations.CreateModel(
            name="LookbookSlide",
            fields=[
                ("id", big_id()),
                ("sort_order", models.PositiveIntegerField(default=0)),
                (
                    "asset",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="catalog.mediaasset",
                    ),
                ),
                (
                    "collection",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="lookbook_slides",
                        to="catalog.collection",
                    ),
                ),
                (
                    "hotspot_product",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="catalog.product",
                    ),
                ),
            ],
            options={
                "ordering": ["sort_order", "id"],
            },
        ),
        migrations.CreateModel(
            name="LookbookSlideTranslation",
            fields=[
                ("id", big_id()),
                ("locale", models.CharField(choices=LOCALE_CHOICES, max_length=2)),
                ("title", models.CharField(blank=True, max_length=255)),
                ("body", models.TextField(blank=True, null=True)),
                ("caption", models.CharField(blank=True, max_length=255, null=True)),
                (
                    "slide",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="translations",
                        to="catalog.lookbookslide",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("slide", "locale"), name="uniq_slide_translation_locale"),
                ],
            },
        ),
        migrations.CreateModel(
            name="LimitedDrop",
            fields=[
                ("id", big_id()),
                *timestamps(),
                ("title", models.CharField(max_length=255)),
                ("starts_at", models.DateTimeField()),
                ("ends_at", models.DateTimeField(blank=True, null=True)),
                ("waitlist_open", models.BooleanField(default=False)),
                ("locale", models.CharField(blank=True, choices=LOCALE_CHOICES, max_length=2, null=True)),
                (
                    "collection",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="drops",
                        to="catalog.collection",
                    ),
                ),
            ],
            options={
                "ordering": ["-starts_at"],
            },
        ),
        migrations.CreateModel(
            name="WaitlistEntry",
            fields=[
                ("id", big_id()),
                *timestamps(),
                ("email", models.EmailField(max_length=254)),
                ("status", models.CharField(default="pending", max_length=20)),
                (
                    "drop",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="waitlist_entries",
                        to="catalog.limiteddrop",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "waitlist entries",
            },
        ),
    ]
