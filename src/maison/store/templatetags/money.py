"""Price formatting for storefront and email templates."""

from django import template

from maison.core.i18n import get_request_locale

from ..services.emails import format_money

register = template.Library()


@register.filter
def money(cents, currency="EUR"):
    """``{{ line.price_cents|money:cart.currency }}`` in the active locale."""
    if cents is None:
        return ""
    return format_money(cents, currency or "EUR", get_request_locale())
