"""Locale helpers shared by the storefront and the webhook handlers."""

from django.utils import translation

from .models import Locale

LOCALES = tuple(Locale.values)
DEFAULT_LOCALE = Locale.FR

LOCALE_LABELS = {
    Locale.FR: "FR",
    Locale.EN: "EN",
}


def is_locale(value) -> bool:
    return bool(value) and value in LOCALES


def normalize_locale(value) -> str:
    """Map any incoming locale string to a storefront locale.

    Only French is recognised explicitly; everything else is English.
    """
    if not value:
        return Locale.EN
    return Locale.FR if str(value).strip().lower().startswith("fr") else Locale.EN


def get_request_locale(request=None) -> str:
    """Locale of the current request, falling back to the house default."""
    language = getattr(request, "LANGUAGE_CODE", None) or translation.get_language()
    if language and language[:2] in LOCALES:
        return language[:2]
    return DEFAULT_LOCALE


def localized(locale, fr: str, en: str) -> str:
    """Pick the French or English variant of a message."""
    return fr if locale == Locale.FR else en
