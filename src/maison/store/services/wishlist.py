"""Wishlist service layer.

Snapshots are cached per owner under ``wishlist-user-<id>`` or
``wishlist-session-<key>`` so a toggle only invalidates its own owner.
"""

import logging
import uuid
from dataclasses import dataclass, field

from django.core.exceptions import ValidationError
from django.db.models import Prefetch

from maison.catalog.data import (
    asset_url,
    localized_product_name,
    localized_translations,
    ordered_media,
    ordered_variants,
    pick_hero,
    translation_of,
)
from maison.catalog.models import CategoryTranslation, Product, ProductTranslation
from maison.core.cache import CACHE_DURATIONS, CacheTags, get_or_load, invalidate_tags

from ..models import Wishlist, WishlistItem
from .session import current_user, persist_wishlist_session, read_session_key, wishlist_cookie_name

logger = logging.getLogger(__name__)


@dataclass
class WishlistEntry:
    product_id: int
    slug: str
    name: str
    hero_image: str | None = None
    price_cents: int | None = None
    category_title: str | None = None


@dataclass
class WishlistSnapshot:
    item_ids: list[int] = field(default_factory=list)
    items: list[WishlistEntry] = field(default_factory=list)
    wishlist_id: str | None = None
    owned: bool = False


def wishlist_tag(user_id=None, session_key=None):
    if user_id:
        return f"wishlist-user-{user_id}"
    return f"wishlist-session-{session_key}"


def owner_tag(request, session_key=None):
    user = current_user(request)
    if user is not None:
        return wishlist_tag(user_id=user.pk)
    return wishlist_tag(session_key=session_key or read_session_key(request, wishlist_cookie_name()))


def find_existing_wishlist(request):
    user = current_user(request)

    if user is not None:
        wishlist = Wishlist.objects.filter(user=user).order_by("-updated_at").first()
        if wishlist is not None:
            return wishlist

    session_key = read_session_key(request, wishlist_cookie_name())
    if not session_key:
        return None

    wishlist = Wishlist.objects.filter(session_key=session_key).first()
    if wishlist is None:
        return None

    if wishlist.user_id is not None and (user is None or wishlist.user_id != user.pk):
        return None

    if user is not None and wishlist.user_id is None:
        wishlist.user = user
        wishlist.save(update_fields=["user", "updated_at"])
        invalidate_tags(wishlist_tag(session_key=session_key), wishlist_tag(user_id=user.pk))

    return wishlist


def ensure_wishlist(request):
    wishlist = find_existing_wishlist(request)
    if wishlist is not None:
        return wishlist

    session_key = str(uuid.uuid4())
    wishlist = Wishlist.objects.create(session_key=session_key, user=current_user(request))
    persist_wishlist_session(request, session_key)
    return wishlist


def load_wishlist(user_id, session_key, locale):
    """Read the wishlist of an owner from the database as a snapshot."""
    items_prefetch = Prefetch(
        "items",
        queryset=WishlistItem.objects.select_related("product__category")
        .prefetch_related(
            localized_translations("product__translations", ProductTranslation, locale),
            ordered_media("product__media"),
            ordered_variants("product__variants"),
            localized_translations("product__category__translations", CategoryTranslation, locale),
        )
        .order_by("-created_at", "-id"),
    )

    wishlist = None
    if user_id:
        wishlist = (
            Wishlist.objects.filter(user_id=user_id)
            .prefetch_related(items_prefetch)
            .order_by("-updated_at")
            .first()
        )
    if wishlist is None and session_key:
        wishlist = Wishlist.objects.filter(session_key=session_key).prefetch_related(items_prefetch).first()
        if wishlist is not None and wishlist.user_id is not None and str(wishlist.user_id) != user_id:
            wishlist = None
    if wishlist is None:
        return WishlistSnapshot()

    entries = []
    for item in wishlist.items.all():
        product = item.product
        variants = list(product.variants.all())
        category = product.category
        category_translation = translation_of(category)
        entries.append(
            WishlistEntry(
                product_id=product.pk,
                slug=product.slug,
                name=localized_product_name(product),
                hero_image=asset_url(pick_hero(product.media.all())),
                price_cents=variants[0].price_cents if variants else None,
                category_title=(
                    category_translation.title if category_translation
                    else category.slug if category else None
                ),
            )
        )

    return WishlistSnapshot(
        item_ids=[entry.product_id for entry in entries],
        items=entries,
        wishlist_id=str(wishlist.pk),
        owned=wishlist.user_id is not None,
    )


def get_wishlist_snapshot(request, locale):
    user = current_user(request)
    session_key = read_session_key(request, wishlist_cookie_name())
    if user is None and not session_key:
        return WishlistSnapshot()

    user_id = str(user.pk) if user is not None else None
    tag = wishlist_tag(user_id=user_id, session_key=session_key)
    snapshot = get_or_load(
        ["wishlist", user_id or "anon", session_key or "none", locale],
        (user_id, session_key, locale),
        load_wishlist,
        timeout=CACHE_DURATIONS["long"],
        tags=[tag, CacheTags.WISHLIST],
    )

    # A signed-in customer claims the cookie wishlist it is browsing with
    if user is not None and snapshot.wishlist_id and not snapshot.owned:
        updated = Wishlist.objects.filter(pk=snapshot.wishlist_id, user__isnull=True).update(user=user)
        if updated:
            logger.info("Wishlist %s claimed by user %s", snapshot.wishlist_id, user.pk)
            invalidate_tags(wishlist_tag(session_key=session_key), wishlist_tag(user_id=user_id))
        snapshot.owned = True

    return snapshot


def _get_product(product_id):
    try:
        return Product.objects.filter(pk=product_id).first()
    except (TypeError, ValueError, ValidationError):
        return None


def toggle_wishlist_item(request, product_id, locale):
    """Add the product to the wishlist, or remove it when already there.

    An unknown product leaves the wishlist untouched.

    Returns:
        The updated WishlistSnapshot
    """
    product = _get_product(product_id)
    if product is None:
        return get_wishlist_snapshot(request, locale)

    wishlist = ensure_wishlist(request)

    deleted, _ = WishlistItem.objects.filter(wishlist=wishlist, product=product).delete()
    if not deleted:
        WishlistItem.objects.create(wishlist=wishlist, product=product)
    wishlist.save(update_fields=["updated_at"])

    invalidate_tags(owner_tag(request, wishlist.session_key))
    return get_wishlist_snapshot(request, locale)


def remove_wishlist_item(request, product_id, locale):
    wishlist = find_existing_wishlist(request)
    if wishlist is None:
        return get_wishlist_snapshot(request, locale)

    try:
        WishlistItem.objects.filter(wishlist=wishlist, product_id=product_id).delete()
    except (TypeError, ValueError, ValidationError):
        return get_wishlist_snapshot(request, locale)

    invalidate_tags(owner_tag(request, wishlist.session_key))
    return get_wishlist_snapshot(request, locale)
