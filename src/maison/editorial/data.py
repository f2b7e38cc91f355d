"""Editorial data loaders: the journal and the homepage.

The homepage is assembled from ten configurable modules per locale. Story
panels and the lookbook carousel pull their content from collections; both
may point at the same collection, so collection loads go through a
request-scoped loader and hit the database once per render.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from django.db.models import Prefetch

from maison.catalog.data import (
    asset_url,
    localized_translations,
    pick_hero,
    ordered_media,
    translation_of,
    localized_product_name,
)
from maison.catalog.models import (
    Collection,
    CollectionSection,
    CollectionSectionTranslation,
    LimitedDrop,
    LookbookSlide,
    LookbookSlideTranslation,
    ProductTranslation,
)
from maison.core.cache import CACHE_DURATIONS, CacheTags, RequestScopedLoader, cached_loader
from maison.core.models import PublicationStatus

from .exceptions import HomepageIncomplete
from .models import (
    EditorialBlock,
    EditorialBlockTranslation,
    EditorialFeature,
    EditorialPost,
    EditorialPostTranslation,
    HomepageModule,
    HomepageModuleType,
)

logger = logging.getLogger(__name__)

EDITORIAL_FALLBACK_IMAGE = (
    "https://images.unsplash.com/photo-1509631179647-0177331693ae?auto=format&fit=crop&w=1400&q=80"
)
DEFAULT_STORY_PANEL_LIMIT = 3


@dataclass
class JournalCard:
    id: int
    slug: str
    title: str
    standfirst: str | None
    hero_image: str | None
    published_at: datetime | None
    category: str


@dataclass
class JournalFeature:
    id: int
    name: str
    slug: str
    hero_image: str | None


@dataclass
class JournalBlock:
    id: int
    type: str
    headline: str | None
    body: str | None
    caption: str | None
    image: str | None


@dataclass
class JournalEntry:
    id: int
    slug: str
    title: str
    standfirst: str | None
    hero_image: str | None
    published_at: datetime | None
    category: str
    body_paragraphs: list[str] = field(default_factory=list)
    blocks: list[JournalBlock] = field(default_factory=list)
    features: list[JournalFeature] = field(default_factory=list)


@dataclass
class HomepageContent:
    hero: dict
    marquee: dict
    gallery: dict
    story_panels: dict
    diptych: dict
    lookbook: dict
    quotes: dict
    editorial: dict
    timeline: dict
    limited_drop: dict


# ---------------------------------------------------------------------------
# Journal
# ---------------------------------------------------------------------------


def flatten_rich_text(rich_text):
    """Join the text children of each paragraph, dropping empty ones."""
    paragraphs = []
    for paragraph in rich_text or []:
        if not isinstance(paragraph, dict):
            continue
        children = paragraph.get("children") or []
        text = "".join(str(child.get("text", "")) for child in children if isinstance(child, dict))
        if text:
            paragraphs.append(text)
    return paragraphs


def load_journal_entries(locale):
    posts = (
        EditorialPost.objects.filter(status=PublicationStatus.ACTIVE)
        .select_related("hero_asset")
        .prefetch_related(localized_translations("translations", EditorialPostTranslation, locale))
        .order_by("-published_at", "slug")
    )

    cards = []
    for post in posts:
        translation = translation_of(post)
        cards.append(
            JournalCard(
                id=post.pk,
                slug=post.slug,
                title=translation.title if translation else post.slug,
                standfirst=translation.standfirst if translation else None,
                hero_image=post.hero_asset.url if post.hero_asset else None,
                published_at=post.published_at,
                category=post.category,
            )
        )
    return cards


def load_journal_entry(locale, slug):
    post = (
        EditorialPost.objects.filter(slug=slug, status=PublicationStatus.ACTIVE)
        .select_related("hero_asset")
        .prefetch_related(
            localized_translations("translations", EditorialPostTranslation, locale),
            Prefetch(
                "blocks",
                queryset=EditorialBlock.objects.select_related("asset")
                .prefetch_related(localized_translations("translations", EditorialBlockTranslation, locale))
                .order_by("sort_order", "id"),
            ),
            Prefetch(
                "featured_products",
                queryset=EditorialFeature.objects.select_related("product")
                .prefetch_related(
                    localized_translations("product__translations", ProductTranslation, locale),
                    ordered_media("product__media"),
                )
                .order_by("sort_order", "id"),
            ),
        )
        .first()
    )
    if post is None:
        return None

    translation = translation_of(post)

    blocks = []
    for block in post.blocks.all():
        block_translation = translation_of(block)
        blocks.append(
            JournalBlock(
                id=block.pk,
                type=block.type,
                headline=block_translation.headline if block_translation else None,
                body=block_translation.body if block_translation else None,
                caption=block_translation.caption if block_translation else None,
                image=asset_url(block),
            )
        )

    features = []
    for feature in post.featured_products.all():
        product = feature.product
        features.append(
            JournalFeature(
                id=product.pk,
                name=localized_product_name(product),
                slug=product.slug,
                hero_image=asset_url(pick_hero(product.media.all())),
            )
        )

    return JournalEntry(
        id=post.pk,
        slug=post.slug,
        title=translation.title if translation else post.slug,
        standfirst=translation.standfirst if translation else None,
        hero_image=post.hero_asset.url if post.hero_asset else None,
        published_at=post.published_at,
        category=post.category,
        body_paragraphs=flatten_rich_text(translation.body_rich_text if translation else None),
        blocks=blocks,
        features=features,
    )


get_journal_entries = cached_loader(
    ["journal", "index"], timeout=CACHE_DURATIONS["long"], tags=[CacheTags.JOURNAL],
)(load_journal_entries)

get_journal_entry = cached_loader(
    ["journal", "detail"], timeout=CACHE_DURATIONS["long"], tags=[CacheTags.JOURNAL],
)(load_journal_entry)


def get_journal_categories(locale):
    """Distinct categories of the published journal, in publication order."""
    categories = []
    for entry in get_journal_entries(locale):
        if entry.category and entry.category not in categories:
            categories.append(entry.category)
    return categories


# ---------------------------------------------------------------------------
# Homepage
# ---------------------------------------------------------------------------


def load_collection_narrative(slug, locale):
    """Sections and lookbook slides of a collection, for homepage modules."""
    return (
        Collection.objects.filter(slug=slug)
        .prefetch_related(
            Prefetch(
                "sections",
                queryset=CollectionSection.objects.select_related("asset")
                .prefetch_related(localized_translations("translations", CollectionSectionTranslation, locale))
                .order_by("sort_order", "id"),
            ),
            Prefetch(
                "lookbook_slides",
                queryset=LookbookSlide.objects.select_related("asset")
                .prefetch_related(localized_translations("translations", LookbookSlideTranslation, locale))
                .order_by("sort_order", "id"),
            ),
        )
        .first()
    )


def map_story_panels(config, collection):
    limit = config.get("limit") or DEFAULT_STORY_PANEL_LIMIT
    sections = list(collection.sections.all())[:limit] if collection else []

    panels = []
    for section in sections:
        translation = translation_of(section)
        panels.append({
            "title": translation.heading if translation else "",
            "body": (translation.body if translation else None) or "",
            "tag": (translation.caption if translation else None) or "",
            "image": asset_url(section) or "",
        })

    return {
        "kicker": config.get("kicker", ""),
        "heading": config.get("heading", ""),
        "description": config.get("description", ""),
        "panels": panels,
        "collection_slug": config.get("collection_slug"),
    }


def map_lookbook(config, collection):
    slides = []
    for slide in collection.lookbook_slides.all() if collection else []:
        translation = translation_of(slide)
        slides.append({
            "title": translation.title if translation else "",
            "body": (translation.body if translation else None) or "",
            "image": asset_url(slide) or "",
        })

    return {
        "kicker": config.get("kicker", ""),
        "title": config.get("title", ""),
        "description": config.get("description", ""),
        "slides": slides,
        "collection_slug": config.get("collection_slug"),
    }


def build_editorial(config, locale):
    post_slug = config.get("post_slug")
    post = None
    if post_slug:
        post = (
            EditorialPost.objects.filter(slug=post_slug)
            .select_related("hero_asset")
            .prefetch_related(localized_translations("translations", EditorialPostTranslation, locale))
            .first()
        )
    translation = translation_of(post)

    return {
        "title": translation.title if translation else (post_slug or ""),
        "body": (translation.standfirst if translation else None) or "",
        "highlights": config.get("highlights", []),
        "cta_label": config.get("cta_label", ""),
        "cta_href": config.get("cta_href", ""),
        "hero_image": post.hero_asset.url if post and post.hero_asset else EDITORIAL_FALLBACK_IMAGE,
        "badge_label": config.get("badge_label"),
    }


def build_limited_drop(config):
    drop_id = config.get("drop_id")
    drop = LimitedDrop.objects.filter(pk=drop_id).first() if drop_id else None

    body = config.get("body", "")
    if drop is not None:
        body = f"{body} ({drop.title})"

    return {
        "title": config.get("title", ""),
        "body": body,
        "cta_label": config.get("cta_label", ""),
        "cta_href": config.get("cta_href", ""),
    }


def load_homepage_content(locale):
    logger.info("Loading homepage content for %s from the database", locale)

    modules = {
        module.type: module.config or {}
        for module in HomepageModule.objects.filter(locale=locale).order_by("sort_order", "id")
    }
    missing = [value for value in HomepageModuleType.values if value not in modules]
    if missing:
        raise HomepageIncomplete(locale, missing)

    collections = RequestScopedLoader(lambda slug: load_collection_narrative(slug, locale))

    def collection_for(config):
        slug = config.get("collection_slug")
        return collections.get(slug) if slug else None

    story_config = modules[HomepageModuleType.STORY_PANELS]
    lookbook_config = modules[HomepageModuleType.LOOKBOOK_CAROUSEL]

    return HomepageContent(
        hero=modules[HomepageModuleType.HERO_SCENE],
        marquee=modules[HomepageModuleType.ARTISAN_MARQUEE],
        gallery=modules[HomepageModuleType.GALLERY_SCROLL_SCENE],
        story_panels=map_story_panels(story_config, collection_for(story_config)),
        diptych=modules[HomepageModuleType.ATELIER_DIPTYCH],
        lookbook=map_lookbook(lookbook_config, collection_for(lookbook_config)),
        quotes=modules[HomepageModuleType.SCULPTED_QUOTES],
        editorial=build_editorial(modules[HomepageModuleType.EDITORIAL_TEASER], locale),
        timeline=modules[HomepageModuleType.MAISON_TIMELINE],
        limited_drop=build_limited_drop(modules[HomepageModuleType.LIMITED_DROP_BANNER]),
    )


get_homepage_content = cached_loader(
    ["homepage-content"], timeout=CACHE_DURATIONS["long"], tags=[CacheTags.HOMEPAGE],
)(load_homepage_content)
