"""Context processors for the store."""

from django.utils.functional import SimpleLazyObject

from .services.cart import get_cart_summary


def cart_context(request):
    """Expose the cart badge count; the query only runs when a template reads it."""
    return {
        "cart_summary": SimpleLazyObject(lambda: get_cart_summary(request)),
    }
