"""Context processors for Maison Aurèle core."""

from .conf import get_setting
from .i18n import LOCALE_LABELS, get_request_locale


def locale_context(request):
    """Add the active locale and the locale switcher to templates."""
    locale = get_request_locale(request)
    return {
        "locale": locale,
        "locale_labels": LOCALE_LABELS,
        "brand_name": get_setting("BRAND_NAME"),
    }
