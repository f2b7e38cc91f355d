"""Store signal handlers."""

import logging

from django.contrib.auth.signals import user_logged_in
from django.dispatch import receiver

from .services.merge import merge_anonymous_session
from .services.session import (
    cart_cookie_name,
    clear_session_key,
    persist_cart_session,
    persist_wishlist_session,
    read_session_key,
    wishlist_cookie_name,
)

logger = logging.getLogger(__name__)


@receiver(user_logged_in)
def merge_session_on_login(sender, request, user, **kwargs):
    """Carry the anonymous cart and wishlist over to the customer who signed in."""
    if request is None:
        return

    cart_key = read_session_key(request, cart_cookie_name())
    wishlist_key = read_session_key(request, wishlist_cookie_name())
    if not cart_key and not wishlist_key:
        return

    result = merge_anonymous_session(user, cart_session_key=cart_key, wishlist_session_key=wishlist_key)

    # Point the cookies at whatever survived the merge
    if result.cart_action == "merged":
        if result.cart.session_key:
            persist_cart_session(request, result.cart.session_key)
        else:
            clear_session_key(request, cart_cookie_name())
    if result.wishlist_action == "merged":
        if result.wishlist.session_key:
            persist_wishlist_session(request, result.wishlist.session_key)
        else:
            clear_session_key(request, wishlist_cookie_name())
