"""Anonymous session cookies for carts and wishlists.

Services run before a response exists, so cookie writes are queued on the
request and applied by ``StoreCookieMiddleware`` on the way out. Queued
values are also mirrored into ``request.COOKIES`` so later reads in the same
request see them.
"""

from django.conf import settings

from maison.core.conf import get_setting

PENDING_ATTR = "_maison_pending_cookies"


def cart_cookie_name():
    return get_setting("CART_COOKIE_NAME")


def wishlist_cookie_name():
    return get_setting("WISHLIST_COOKIE_NAME")


def read_session_key(request, cookie_name):
    if request is None:
        return None
    return request.COOKIES.get(cookie_name) or None


def _pending(request):
    pending = getattr(request, PENDING_ATTR, None)
    if pending is None:
        pending = {}
        setattr(request, PENDING_ATTR, pending)
    return pending


def persist_session_key(request, cookie_name, session_key, max_age):
    """Queue a session cookie for the response."""
    request.COOKIES[cookie_name] = session_key
    _pending(request)[cookie_name] = (session_key, max_age)


def clear_session_key(request, cookie_name):
    """Queue the deletion of a session cookie."""
    request.COOKIES.pop(cookie_name, None)
    _pending(request)[cookie_name] = (None, 0)


def persist_cart_session(request, session_key):
    persist_session_key(request, cart_cookie_name(), session_key, get_setting("CART_COOKIE_MAX_AGE"))


def persist_wishlist_session(request, session_key):
    persist_session_key(request, wishlist_cookie_name(), session_key, get_setting("WISHLIST_COOKIE_MAX_AGE"))


def apply_session_cookies(request, response):
    """Write queued cookie changes onto ``response``."""
    for name, (value, max_age) in getattr(request, PENDING_ATTR, {}).items():
        if value is None:
            response.delete_cookie(name, path="/", samesite="Lax")
        else:
            response.set_cookie(
                name,
                value,
                max_age=max_age,
                path="/",
                httponly=True,
                samesite="Lax",
                secure=not settings.DEBUG,
            )
    return response


def current_user(request):
    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        return user
    return None
