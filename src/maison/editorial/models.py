"""Editorial models: journal posts and homepage modules."""

from django.db import models

from maison.core.models import Locale, PublicationStatus, TimeStampedModel


class EditorialCategory(models.TextChoices):
    JOURNAL = "JOURNAL", "Journal"
    CAMPAIGN = "CAMPAIGN", "Campaign"
    ATELIER = "ATELIER", "Atelier"
    INTERVIEW = "INTERVIEW", "Interview"


class EditorialPost(TimeStampedModel):
    slug = models.SlugField(unique=True)
    category = models.CharField(
        max_length=20,
        choices=EditorialCategory.choices,
        default=EditorialCategory.JOURNAL,
    )
    status = models.CharField(
        max_length=10,
        choices=PublicationStatus.choices,
        default=PublicationStatus.DRAFT,
    )
    published_at = models.DateTimeField(blank=True, null=True)
    hero_asset = models.ForeignKey(
        "catalog.MediaAsset",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )

    class Meta:
        ordering = ["-published_at"]

    def __str__(self):
        return self.slug


class EditorialPostTranslation(models.Model):
    post = models.ForeignKey(EditorialPost, on_delete=models.CASCADE, related_name="translations")
    locale = models.CharField(max_length=2, choices=Locale.choices)
    title = models.CharField(max_length=255)
    standfirst = models.TextField(blank=True, null=True)
    # List of {"type": "paragraph", "children": [{"text": ...}]}
    body_rich_text = models.JSONField(blank=True, null=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["post", "locale"], name="uniq_post_translation_locale"),
        ]


class EditorialBlock(models.Model):
    post = models.ForeignKey(EditorialPost, on_delete=models.CASCADE, related_name="blocks")
    type = models.CharField(max_length=30, default="story")
    asset = models.ForeignKey(
        "catalog.MediaAsset",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    data = models.JSONField(blank=True, null=True)
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["sort_order", "id"]


class EditorialBlockTranslation(models.Model):
    block = models.ForeignKey(EditorialBlock, on_delete=models.CASCADE, related_name="translations")
    locale = models.CharField(max_length=2, choices=Locale.choices)
    headline = models.CharField(max_length=255, blank=True, null=True)
    body = models.TextField(blank=True, null=True)
    caption = models.CharField(max_length=255, blank=True, null=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["block", "locale"], name="uniq_block_translation_locale"),
        ]


class EditorialFeature(models.Model):
    """A product featured alongside a journal post."""

    post = models.ForeignKey(EditorialPost, on_delete=models.CASCADE, related_name="featured_products")
    product = models.ForeignKey("catalog.Product", on_delete=models.CASCADE, related_name="+")
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["sort_order", "id"]


class HomepageModuleType(models.TextChoices):
    HERO_SCENE = "hero_scene", "Hero scene"
    ARTISAN_MARQUEE = "artisan_marquee", "Artisan marquee"
    GALLERY_SCROLL_SCENE = "gallery_scroll_scene", "Gallery scroll scene"
    STORY_PANELS = "story_panels", "Story panels"
    ATELIER_DIPTYCH = "atelier_diptych", "Atelier diptych"
    LOOKBOOK_CAROUSEL = "lookbook_carousel", "Lookbook carousel"
    SCULPTED_QUOTES = "sculpted_quotes", "Sculpted quotes"
    EDITORIAL_TEASER = "editorial_teaser", "Editorial teaser"
    MAISON_TIMELINE = "maison_timeline", "Maison timeline"
    LIMITED_DROP_BANNER = "limited_drop_banner", "Limited drop banner"


class HomepageModule(TimeStampedModel):
    """One configurable block of the homepage for one locale."""

    slug = models.SlugField()
    type = models.CharField(max_length=40, choices=HomepageModuleType.choices)
    locale = models.CharField(max_length=2, choices=Locale.choices)
    sort_order = models.PositiveIntegerField(default=0)
    config = models.JSONField(default=dict)
    active_from = models.DateTimeField(blank=True, null=True)
    active_to = models.DateTimeField(blank=True, null=True)

    class Meta:
        ordering = ["sort_order", "id"]
        constraints = [
            models.UniqueConstraint(fields=["slug", "locale"], name="uniq_homepage_module_slug_locale"),
        ]

    def __str__(self):
        return f"{self.type} ({self.locale})"
