"""Merging an anonymous cart and wishlist into a customer's on sign-in."""

import logging
from dataclasses import dataclass

from django.db import transaction

from maison.core.cache import invalidate_tags

from ..models import Cart, Wishlist, WishlistItem
from .wishlist import wishlist_tag

logger = logging.getLogger(__name__)


@dataclass
class MergeResult:
    cart: Cart | None = None
    cart_action: str = "none"
    wishlist: Wishlist | None = None
    wishlist_action: str = "none"


@transaction.atomic
def merge_cart(user, session_key):
    """Fold the cookie cart identified by ``session_key`` into ``user``'s cart.

    Args:
        user: The customer who just signed in
        session_key: Value of the cart cookie, if any

    Returns:
        (cart, action) where action is "none", "claimed" or "merged". The
        cart is the one the customer should keep using.
    """
    if not session_key:
        return None, "none"

    anonymous = Cart.objects.select_for_update().filter(session_key=session_key).first()
    if anonymous is None:
        return None, "none"
    if anonymous.user_id == user.pk:
        return anonymous, "none"
    if anonymous.user_id is not None:
        # Somebody else's cart; leave it alone
        return None, "none"

    target = (
        Cart.objects.select_for_update()
        .filter(user=user)
        .exclude(pk=anonymous.pk)
        .order_by("-updated_at")
        .first()
    )
    if target is None:
        anonymous.user = user
        anonymous.save(update_fields=["user", "updated_at"])
        return anonymous, "claimed"

    existing = {item.variant_id: item for item in target.items.select_for_update()}
    for item in anonymous.items.all():
        match = existing.get(item.variant_id)
        if match is not None:
            match.quantity += item.quantity
            match.save(update_fields=["quantity", "updated_at"])
            item.delete()
        else:
            item.cart = target
            item.save(update_fields=["cart", "updated_at"])

    anonymous.delete()
    target.save(update_fields=["updated_at"])
    return target, "merged"


@transaction.atomic
def merge_wishlist(user, session_key):
    """Union the cookie wishlist identified by ``session_key`` into ``user``'s.

    Returns:
        (wishlist, action) as for ``merge_cart``.
    """
    if not session_key:
        return None, "none"

    anonymous = Wishlist.objects.select_for_update().filter(session_key=session_key).first()
    if anonymous is None:
        return None, "none"
    if anonymous.user_id == user.pk:
        return anonymous, "none"
    if anonymous.user_id is not None:
        return None, "none"

    target = (
        Wishlist.objects.select_for_update()
        .filter(user=user)
        .exclude(pk=anonymous.pk)
        .order_by("-updated_at")
        .first()
    )
    if target is None:
        anonymous.user = user
        anonymous.save(update_fields=["user", "updated_at"])
        action, result = "claimed", anonymous
    else:
        owned = set(target.items.values_list("product_id", flat=True))
        WishlistItem.objects.bulk_create([
            WishlistItem(wishlist=target, product_id=product_id)
            for product_id in anonymous.items.values_list("product_id", flat=True)
            if product_id not in owned
        ])
        anonymous.delete()
        target.save(update_fields=["updated_at"])
        action, result = "merged", target

    transaction.on_commit(
        lambda: invalidate_tags(wishlist_tag(user_id=user.pk), wishlist_tag(session_key=session_key))
    )
    return result, action


def merge_anonymous_session(user, cart_session_key=None, wishlist_session_key=None):
    """Merge both the cart and the wishlist of an anonymous visitor into ``user``."""
    with transaction.atomic():
        cart, cart_action = merge_cart(user, cart_session_key)
        wishlist, wishlist_action = merge_wishlist(user, wishlist_session_key)

    if cart_action != "none" or wishlist_action != "none":
        logger.info(
            "Merged anonymous session into user %s (cart: %s, wishlist: %s)",
            user.pk,
            cart_action,
            wishlist_action,
        )
    return MergeResult(cart=cart, cart_action=cart_action, wishlist=wishlist, wishlist_action=wishlist_action)
