"""Catalog models: products, variants, collections and limited drops.

Every customer-facing text lives in a ``*Translation`` row keyed by locale so
the storefront can render French and English from the same product.
"""

from django.db import models

from maison.core.models import Locale, PublicationStatus, TimeStampedModel


class MediaType(models.TextChoices):
    IMAGE = "IMAGE", "Image"
    VIDEO = "VIDEO", "Video"


class MediaAsset(TimeStampedModel):
    """A hosted image or video."""

    type = models.CharField(max_length=10, choices=MediaType.choices, default=MediaType.IMAGE)
    url = models.URLField(max_length=500)
    alt = models.CharField(max_length=255, blank=True)

    def __str__(self):
        return self.url


class Material(models.Model):
    name = models.CharField(max_length=100, unique=True)

    def __str__(self):
        return self.name


class Category(TimeStampedModel):
    """Product category. Top-level categories act as shop groups."""

    slug = models.SlugField(unique=True)
    parent = models.ForeignKey(
        "self",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="children",
    )

    class Meta:
        verbose_name_plural = "categories"
        ordering = ["slug"]

    def __str__(self):
        return self.slug


class CategoryTranslation(models.Model):
    category = models.ForeignKey(Category, on_delete=models.CASCADE, related_name="translations")
    locale = models.CharField(max_length=2, choices=Locale.choices)
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["category", "locale"], name="uniq_category_translation_locale"),
        ]


class Product(TimeStampedModel):
    slug = models.SlugField(unique=True)
    status = models.CharField(
        max_length=10,
        choices=PublicationStatus.choices,
        default=PublicationStatus.DRAFT,
    )
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )
    materials = models.ManyToManyField(Material, blank=True, related_name="products")
    limited_edition = models.BooleanField(default=False)
    heritage_tag = models.CharField(max_length=100, blank=True, null=True)
    origin_country = models.CharField(max_length=100, blank=True, null=True)
    atelier_notes = models.TextField(blank=True, null=True)
    care_instructions = models.JSONField(blank=True, null=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.slug


class ProductTranslation(models.Model):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="translations")
    locale = models.CharField(max_length=2, choices=Locale.choices)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)
    craft_story = models.TextField(blank=True, null=True)
    materials_text = models.TextField(blank=True, null=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["product", "locale"], name="uniq_product_translation_locale"),
        ]

    def __str__(self):
        return f"{self.name} ({self.locale})"


class ProductMedia(models.Model):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="media")
    asset = models.ForeignKey(MediaAsset, on_delete=models.CASCADE, related_name="product_media")
    placement = models.CharField(max_length=30, default="gallery")
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["sort_order", "id"]


class ProductVariant(TimeStampedModel):
    """A purchasable SKU (size/colour combination) with its own price."""

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="variants")
    sku = models.CharField(max_length=64, unique=True)
    size = models.CharField(max_length=30, blank=True, null=True)
    color = models.CharField(max_length=50, blank=True, null=True)
    price_cents = models.PositiveIntegerField()
    personalization_allowed = models.BooleanField(default=False)

    class Meta:
        ordering = ["price_cents", "id"]

    def __str__(self):
        return self.sku


class VariantMedia(models.Model):
    variant = models.ForeignKey(ProductVariant, on_delete=models.CASCADE, related_name="media")
    asset = models.ForeignKey(MediaAsset, on_delete=models.CASCADE, related_name="variant_media")
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["sort_order", "id"]


class Inventory(models.Model):
    variant = models.OneToOneField(ProductVariant, on_delete=models.CASCADE, related_name="inventory")
    quantity = models.IntegerField(default=0)

    class Meta:
        verbose_name_plural = "inventory"


class Collection(TimeStampedModel):
    slug = models.SlugField(unique=True)
    status = models.CharField(
        max_length=10,
        choices=PublicationStatus.choices,
        default=PublicationStatus.DRAFT,
    )
    release_date = models.DateTimeField(blank=True, null=True)
    hero_asset = models.ForeignKey(
        MediaAsset,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )

    class Meta:
        ordering = ["-release_date"]

    def __str__(self):
        return self.slug


class CollectionTranslation(models.Model):
    collection = models.ForeignKey(Collection, on_delete=models.CASCADE, related_name="translations")
    locale = models.CharField(max_length=2, choices=Locale.choices)
    title = models.CharField(max_length=200)
    subtitle = models.CharField(max_length=255, blank=True, null=True)
    manifesto = models.TextField(blank=True, null=True)
    description = models.TextField(blank=True, null=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["collection", "locale"], name="uniq_collection_translation_locale"),
        ]


class CollectionItem(models.Model):
    collection = models.ForeignKey(Collection, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="collection_items")
    sort_order = models.PositiveIntegerField(default=0)
    highlighted = models.BooleanField(default=False)

    class Meta:
        ordering = ["sort_order", "id"]
        constraints = [
            models.UniqueConstraint(fields=["collection", "product"], name="uniq_collection_product"),
        ]


class CollectionSection(models.Model):
    collection = models.ForeignKey(Collection, on_delete=models.CASCADE, related_name="sections")
    layout = models.CharField(max_length=30, default="text")
    sort_order = models.PositiveIntegerField(default=0)
    asset = models.ForeignKey(MediaAsset, on_delete=models.SET_NULL, null=True, blank=True, related_name="+")

    class Meta:
        ordering = ["sort_order", "id"]


class CollectionSectionTranslation(models.Model):
    section = models.ForeignKey(CollectionSection, on_delete=models.CASCADE, related_name="translations")
    locale = models.CharField(max_length=2, choices=Locale.choices)
    heading = models.CharField(max_length=255, blank=True)
    body = models.TextField(blank=True, null=True)
    caption = models.CharField(max_length=255, blank=True, null=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["section", "locale"], name="uniq_section_translation_locale"),
        ]


class LookbookSlide(models.Model):
    collection = models.ForeignKey(Collection, on_delete=models.CASCADE, related_name="lookbook_slides")
    asset = models.ForeignKey(MediaAsset, on_delete=models.CASCADE, related_name="+")
    sort_order = models.PositiveIntegerField(default=0)
    hotspot_product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )

    class Meta:
        ordering = ["sort_order", "id"]


class LookbookSlideTranslation(models.Model):
    slide = models.ForeignKey(LookbookSlide, on_delete=models.CASCADE, related_name="translations")
    locale = models.CharField(max_length=2, choices=Locale.choices)
    title = models.CharField(max_length=255, blank=True)
    body = models.TextField(blank=True, null=True)
    caption = models.CharField(max_length=255, blank=True, null=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["slide", "locale"], name="uniq_slide_translation_locale"),
        ]


class LimitedDrop(TimeStampedModel):
    """A time-boxed limited release tied to a collection."""

    collection = models.ForeignKey(Collection, on_delete=models.CASCADE, related_name="drops")
    title = models.CharField(max_length=255)
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField(blank=True, null=True)
    waitlist_open = models.BooleanField(default=False)
    locale = models.CharField(max_length=2, choices=Locale.choices, blank=True, null=True)

    class Meta:
        ordering = ["-starts_at"]

    def __str__(self):
        return self.title


class WaitlistEntry(TimeStampedModel):
    drop = models.ForeignKey(LimitedDrop, on_delete=models.CASCADE, related_name="waitlist_entries")
    email = models.EmailField()
    status = models.CharField(max_length=20, default="pending")

    class Meta:
        verbose_name_plural = "waitlist entries"
