"""Catalog data loaders.

Each loader reads the relational catalog for one locale and shapes it into
plain view models for the templates. Loaders are cached under the
``products``, ``collections``, ``categories`` and ``search`` tags; the
back-office invalidates those tags when it edits the catalog.

Missing translations never break a page: names and titles fall back to the
slug of the row.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from django.core.exceptions import ObjectDoesNotExist
from django.db.models import Count, F, Prefetch, Q

from maison.core.cache import CACHE_DURATIONS, CacheTags, cached_loader
from maison.core.models import PublicationStatus

from .models import (
    Category,
    CategoryTranslation,
    Collection,
    CollectionItem,
    CollectionSection,
    CollectionSectionTranslation,
    CollectionTranslation,
    LookbookSlide,
    LookbookSlideTranslation,
    Product,
    ProductMedia,
    ProductTranslation,
    ProductVariant,
)

logger = logging.getLogger(__name__)

LOCALIZED = "localized_translations"

# Fallback images for categories without products
CATEGORY_FALLBACK_IMAGES = {
    "jewelry": "https://images.unsplash.com/photo-1515562141207-7a88fb7ce338?auto=format&fit=crop&w=1200&q=80",
    "leather-goods": "https://images.unsplash.com/photo-1548036328-c9fa89d128fa?auto=format&fit=crop&w=1200&q=80",
    "bags": "https://images.unsplash.com/photo-1584917865442-de89df76afd3?auto=format&fit=crop&w=1200&q=80",
    "scarves": "https://images.unsplash.com/photo-1601924994987-69e26d50dc26?auto=format&fit=crop&w=1200&q=80",
}

QUICK_CATEGORY_TOKENS = [
    ("women", "femme", "her"),
    ("men", "homme", "him"),
]
QUICK_CATEGORY_LIMIT = 4


@dataclass
class LinkRef:
    slug: str
    title: str


@dataclass
class DropWindow:
    title: str
    starts_at: datetime
    ends_at: datetime | None


@dataclass
class ProductListCard:
    id: int
    slug: str
    name: str
    description: str | None
    hero_image: str | None
    images: list[str]
    price_cents: int | None
    default_variant_id: int | None
    limited_edition: bool
    heritage_tag: str | None
    colors: list[str]
    sizes: list[str]
    materials: list[str]
    collections: list[LinkRef]
    category: LinkRef | None
    category_group: LinkRef | None


@dataclass
class ProductTeaser:
    id: int
    slug: str
    name: str
    hero_image: str | None
    images: list[str]
    price_cents: int | None


@dataclass
class VariantOption:
    id: int
    sku: str
    size: str | None
    color: str | None
    price_cents: int
    personalization_allowed: bool
    availability: int | None


@dataclass
class ProductCollection:
    slug: str
    title: str
    hero_image: str | None
    products: list[ProductTeaser]


@dataclass
class ProductDetail:
    id: int
    slug: str
    name: str
    description: str | None
    craft_story: str | None
    materials_text: str | None
    care_instructions: object
    hero_image: str | None
    gallery: list[str]
    limited_edition: bool
    heritage_tag: str | None
    origin_country: str | None
    atelier_notes: str | None
    variants: list[VariantOption]
    collection: ProductCollection | None


@dataclass
class CollectionOverviewCard:
    id: int
    slug: str
    title: str
    subtitle: str | None
    description: str | None
    hero_image: str | None
    release_date: datetime | None
    product_count: int
    drop_window: DropWindow | None


@dataclass
class CollectionSectionView:
    id: int
    heading: str
    body: str | None
    caption: str | None
    layout: str | None
    image: str | None


@dataclass
class LookbookSlideView:
    id: int
    title: str
    body: str | None
    image: str | None


@dataclass
class CollectionProduct:
    id: int
    slug: str
    name: str
    description: str | None
    hero_image: str | None
    price_cents: int | None
    limited_edition: bool


@dataclass
class CollectionDetail:
    id: int
    slug: str
    title: str
    subtitle: str | None
    manifesto: str | None
    description: str | None
    hero_image: str | None
    release_date: datetime | None
    sections: list[CollectionSectionView] = field(default_factory=list)
    lookbook: list[LookbookSlideView] = field(default_factory=list)
    products: list[CollectionProduct] = field(default_factory=list)
    drop_window: DropWindow | None = None


@dataclass
class ShopCategory:
    id: int
    slug: str
    title: str
    description: str | None
    hero_image: str | None
    secondary_image: str | None


@dataclass
class ShopCategoryGroup:
    id: int
    slug: str
    title: str
    description: str | None
    categories: list[ShopCategory]


@dataclass
class ShopData:
    groups: list[ShopCategoryGroup]
    quick_categories: list[ShopCategory]


@dataclass
class SearchResult:
    id: int
    slug: str
    name: str
    hero_image: str | None
    price_cents: int | None
    category: str | None


# ---------------------------------------------------------------------------
# Query helpers
# ---------------------------------------------------------------------------


def localized_translations(lookup, model, locale):
    """Prefetch only the translation rows of ``locale``."""
    return Prefetch(lookup, queryset=model.objects.filter(locale=locale), to_attr=LOCALIZED)


def translation_of(obj):
    """The prefetched translation of ``obj`` for the requested locale, if any."""
    if obj is None:
        return None
    rows = getattr(obj, LOCALIZED, None) or []
    return rows[0] if rows else None


def ordered_media(lookup="media"):
    return Prefetch(lookup, queryset=ProductMedia.objects.select_related("asset").order_by("sort_order", "id"))


def ordered_variants(lookup="variants"):
    return Prefetch(lookup, queryset=ProductVariant.objects.order_by("price_cents", "id"))


def pick_hero(media):
    """Hero placement wins, otherwise the first media item."""
    media = list(media)
    for item in media:
        if item.placement == "hero":
            return item
    return media[0] if media else None


def asset_url(item):
    asset = getattr(item, "asset", None) if item is not None else None
    return asset.url if asset is not None else None


def media_urls(media):
    return [url for url in (asset_url(item) for item in media) if url]


def unique_values(values):
    """Distinct non-empty values in first-seen order."""
    seen = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return seen


def inventory_quantity(variant):
    try:
        return variant.inventory.quantity
    except ObjectDoesNotExist:
        return None


def localized_product_name(product):
    translation = translation_of(product)
    return translation.name if translation else product.slug


def category_ref(category):
    if category is None:
        return None
    translation = translation_of(category)
    return LinkRef(slug=category.slug, title=translation.title if translation else category.slug)


def drop_window_of(collection):
    drops = list(collection.drops.all())
    if not drops:
        return None
    drop = drops[0]
    return DropWindow(title=drop.title, starts_at=drop.starts_at, ends_at=drop.ends_at)


def product_teaser(product):
    media = list(product.media.all())
    variants = list(product.variants.all())
    return ProductTeaser(
        id=product.pk,
        slug=product.slug,
        name=localized_product_name(product),
        hero_image=asset_url(pick_hero(media)),
        images=media_urls(media),
        price_cents=variants[0].price_cents if variants else None,
    )


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


def load_products_overview(locale):
    logger.info("Loading products overview for %s from the database", locale)

    products = (
        Product.objects.filter(status=PublicationStatus.ACTIVE)
        .order_by("-created_at", "-id")
        .select_related("category", "category__parent")
        .prefetch_related(
            localized_translations("translations", ProductTranslation, locale),
            ordered_media(),
            "materials",
            Prefetch(
                "collection_items",
                queryset=CollectionItem.objects.select_related("collection")
                .prefetch_related(localized_translations("collection__translations", CollectionTranslation, locale))
                .order_by("sort_order", "id"),
            ),
            localized_translations("category__translations", CategoryTranslation, locale),
            localized_translations("category__parent__translations", CategoryTranslation, locale),
            ordered_variants(),
        )
    )

    cards = []
    for product in products:
        translation = translation_of(product)
        media = list(product.media.all())
        variants = list(product.variants.all())
        cheapest = variants[0] if variants else None
        category = product.category

        cards.append(
            ProductListCard(
                id=product.pk,
                slug=product.slug,
                name=translation.name if translation else product.slug,
                description=translation.description if translation else None,
                hero_image=asset_url(pick_hero(media)),
                images=media_urls(media),
                price_cents=cheapest.price_cents if cheapest else None,
                default_variant_id=cheapest.pk if cheapest else None,
                limited_edition=product.limited_edition,
                heritage_tag=product.heritage_tag,
                colors=unique_values(variant.color for variant in variants),
                sizes=unique_values(variant.size for variant in variants),
                materials=[material.name for material in product.materials.all()],
                collections=[
                    LinkRef(
                        slug=item.collection.slug,
                        title=(translation_of(item.collection).title
                               if translation_of(item.collection) else item.collection.slug),
                    )
                    for item in product.collection_items.all()
                ],
                category=category_ref(category),
                category_group=category_ref(category.parent if category else None),
            )
        )
    return cards


def load_product_detail(locale, slug):
    product = (
        Product.objects.filter(slug=slug)
        .prefetch_related(
            localized_translations("translations", ProductTranslation, locale),
            ordered_media(),
            Prefetch(
                "variants",
                queryset=ProductVariant.objects.select_related("inventory").order_by("price_cents", "id"),
            ),
        )
        .first()
    )
    if product is None:
        return None

    translation = translation_of(product)
    media = list(product.media.all())
    hero = pick_hero(media)

    primary_item = (
        product.collection_items.select_related("collection", "collection__hero_asset")
        .prefetch_related(localized_translations("collection__translations", CollectionTranslation, locale))
        .order_by("sort_order", "id")
        .first()
    )
    collection_data = None
    if primary_item is not None:
        collection = primary_item.collection
        collection_translation = translation_of(collection)
        siblings = (
            CollectionItem.objects.filter(collection=collection)
            .select_related("product")
            .prefetch_related(
                localized_translations("product__translations", ProductTranslation, locale),
                ordered_media("product__media"),
                ordered_variants("product__variants"),
            )
            .order_by("sort_order", "id")
        )
        collection_data = ProductCollection(
            slug=collection.slug,
            title=collection_translation.title if collection_translation else collection.slug,
            hero_image=(collection.hero_asset.url if collection.hero_asset else None) or asset_url(hero),
            products=[product_teaser(item.product) for item in siblings],
        )

    return ProductDetail(
        id=product.pk,
        slug=product.slug,
        name=translation.name if translation else product.slug,
        description=translation.description if translation else None,
        craft_story=translation.craft_story if translation else None,
        materials_text=translation.materials_text if translation else None,
        care_instructions=product.care_instructions,
        hero_image=asset_url(hero),
        gallery=media_urls(media),
        limited_edition=product.limited_edition,
        heritage_tag=product.heritage_tag,
        origin_country=product.origin_country,
        atelier_notes=product.atelier_notes,
        variants=[
            VariantOption(
                id=variant.pk,
                sku=variant.sku,
                size=variant.size,
                color=variant.color,
                price_cents=variant.price_cents,
                personalization_allowed=variant.personalization_allowed,
                availability=inventory_quantity(variant),
            )
            for variant in product.variants.all()
        ],
        collection=collection_data,
    )


get_products_overview = cached_loader(
    ["products", "overview"], timeout=1800, tags=[CacheTags.PRODUCTS],
)(load_products_overview)

get_product_detail = cached_loader(
    ["products", "detail"], timeout=1800, tags=[CacheTags.PRODUCTS],
)(load_product_detail)


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------


def load_collections_overview(locale):
    collections = (
        Collection.objects.select_related("hero_asset")
        .annotate(product_count=Count("items", distinct=True))
        .prefetch_related(
            localized_translations("translations", CollectionTranslation, locale),
            "drops",
        )
        .order_by(F("release_date").desc(nulls_last=True), "slug")
    )

    cards = []
    for collection in collections:
        translation = translation_of(collection)
        cards.append(
            CollectionOverviewCard(
                id=collection.pk,
                slug=collection.slug,
                title=translation.title if translation else collection.slug,
                subtitle=translation.subtitle if translation else None,
                description=translation.description if translation else None,
                hero_image=collection.hero_asset.url if collection.hero_asset else None,
                release_date=collection.release_date,
                product_count=collection.product_count,
                drop_window=drop_window_of(collection),
            )
        )
    return cards


def load_collection_detail(locale, slug):
    collection = (
        Collection.objects.filter(slug=slug)
        .select_related("hero_asset")
        .prefetch_related(
            localized_translations("translations", CollectionTranslation, locale),
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
            "drops",
            Prefetch(
                "items",
                queryset=CollectionItem.objects.select_related("product")
                .prefetch_related(
                    localized_translations("product__translations", ProductTranslation, locale),
                    ordered_media("product__media"),
                    ordered_variants("product__variants"),
                )
                .order_by("sort_order", "id"),
            ),
        )
        .first()
    )
    if collection is None:
        return None

    translation = translation_of(collection)

    sections = []
    for section in collection.sections.all():
        section_translation = translation_of(section)
        sections.append(
            CollectionSectionView(
                id=section.pk,
                heading=section_translation.heading if section_translation else "",
                body=section_translation.body if section_translation else None,
                caption=section_translation.caption if section_translation else None,
                layout=section.layout,
                image=asset_url(section),
            )
        )

    lookbook = []
    for slide in collection.lookbook_slides.all():
        slide_translation = translation_of(slide)
        lookbook.append(
            LookbookSlideView(
                id=slide.pk,
                title=slide_translation.title if slide_translation else "",
                body=slide_translation.body if slide_translation else None,
                image=asset_url(slide),
            )
        )

    products = []
    for item in collection.items.all():
        product = item.product
        product_translation = translation_of(product)
        variants = list(product.variants.all())
        products.append(
            CollectionProduct(
                id=product.pk,
                slug=product.slug,
                name=product_translation.name if product_translation else product.slug,
                description=product_translation.description if product_translation else None,
                hero_image=asset_url(pick_hero(product.media.all())),
                price_cents=variants[0].price_cents if variants else None,
                limited_edition=product.limited_edition,
            )
        )

    return CollectionDetail(
        id=collection.pk,
        slug=collection.slug,
        title=translation.title if translation else collection.slug,
        subtitle=translation.subtitle if translation else None,
        manifesto=translation.manifesto if translation else None,
        description=translation.description if translation else None,
        hero_image=collection.hero_asset.url if collection.hero_asset else None,
        release_date=collection.release_date,
        sections=sections,
        lookbook=lookbook,
        products=products,
        drop_window=drop_window_of(collection),
    )


get_collections_overview = cached_loader(
    ["collections", "overview"], timeout=CACHE_DURATIONS["long"], tags=[CacheTags.COLLECTIONS],
)(load_collections_overview)

get_collection_detail = cached_loader(
    ["collections", "detail"], timeout=CACHE_DURATIONS["long"], tags=[CacheTags.COLLECTIONS],
)(load_collection_detail)


# ---------------------------------------------------------------------------
# Shop landing
# ---------------------------------------------------------------------------


def load_shop_data(locale):
    groups_qs = (
        Category.objects.filter(parent__isnull=True)
        .order_by("slug")
        .prefetch_related(
            localized_translations("translations", CategoryTranslation, locale),
            Prefetch(
                "children",
                queryset=Category.objects.order_by("slug").prefetch_related(
                    localized_translations("translations", CategoryTranslation, locale),
                ),
            ),
        )
    )
    groups_qs = list(groups_qs)

    child_ids = [child.pk for group in groups_qs for child in group.children.all()]
    newest_by_category = {}
    products = (
        Product.objects.filter(status=PublicationStatus.ACTIVE, category_id__in=child_ids)
        .order_by("-created_at", "-id")
        .prefetch_related(ordered_media())
    )
    for product in products:
        newest_by_category.setdefault(product.category_id, product)

    groups = []
    for group in groups_qs:
        categories = []
        for child in group.children.all():
            child_translation = translation_of(child)
            product = newest_by_category.get(child.pk)
            media = list(product.media.all()) if product else []
            hero = pick_hero(media)
            secondary = next((item for item in media if item is not hero), None)

            hero_image = asset_url(hero) or CATEGORY_FALLBACK_IMAGES.get(child.slug)
            categories.append(
                ShopCategory(
                    id=child.pk,
                    slug=child.slug,
                    title=child_translation.title if child_translation else child.slug,
                    description=child_translation.description if child_translation else None,
                    hero_image=hero_image,
                    secondary_image=asset_url(secondary) or hero_image,
                )
            )

        if not categories:
            continue

        group_translation = translation_of(group)
        groups.append(
            ShopCategoryGroup(
                id=group.pk,
                slug=group.slug,
                title=group_translation.title if group_translation else group.slug,
                description=group_translation.description if group_translation else None,
                categories=categories,
            )
        )

    return ShopData(groups=groups, quick_categories=select_quick_categories(groups))


def select_quick_categories(groups):
    """Up to four categories, women's and men's first when they exist."""
    all_categories = [category for group in groups for category in group.categories]
    if not all_categories:
        return []

    selected = []
    for tokens in QUICK_CATEGORY_TOKENS:
        match = next(
            (
                c for c in all_categories
                if c not in selected and any(token in c.slug.lower() for token in tokens)
            ),
            None,
        )
        if match is not None:
            selected.append(match)

    for category in all_categories:
        if len(selected) >= QUICK_CATEGORY_LIMIT:
            break
        if all(item.id != category.id for item in selected):
            selected.append(category)

    return selected[:QUICK_CATEGORY_LIMIT]


get_shop_data = cached_loader(
    ["shop-data"], timeout=CACHE_DURATIONS["long"], tags=[CacheTags.CATEGORIES, CacheTags.PRODUCTS],
)(load_shop_data)


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


def load_search_results(query, locale, limit):
    matches = (
        Q(translations__locale=locale, translations__name__icontains=query)
        | Q(translations__locale=locale, translations__description__icontains=query)
        | Q(category__translations__locale=locale, category__translations__title__icontains=query)
    )
    match_ids = (
        Product.objects.filter(status=PublicationStatus.ACTIVE)
        .filter(matches)
        .values_list("pk", flat=True)
        .distinct()
    )
    products = (
        Product.objects.filter(pk__in=list(match_ids))
        .order_by("-created_at", "-id")
        .select_related("category")
        .prefetch_related(
            localized_translations("translations", ProductTranslation, locale),
            ordered_media(),
            ordered_variants(),
            localized_translations("category__translations", CategoryTranslation, locale),
        )[:limit]
    )

    results = []
    for product in products:
        variants = list(product.variants.all())
        category = category_ref(product.category)
        results.append(
            SearchResult(
                id=product.pk,
                slug=product.slug,
                name=localized_product_name(product),
                hero_image=asset_url(pick_hero(product.media.all())),
                price_cents=variants[0].price_cents if variants else None,
                category=category.title if category else None,
            )
        )
    return results


_search_cached = cached_loader(
    ["search", "products"], timeout=CACHE_DURATIONS["short"], tags=[CacheTags.SEARCH, CacheTags.PRODUCTS],
)(load_search_results)


def search_products(query, locale, limit=8):
    """Search active products by translated name, description or category."""
    trimmed = (query or "").strip()
    if not trimmed:
        return []
    return _search_cached(trimmed, locale, limit)
