"""Storefront configuration."""

from django.conf import settings


def get_config():
    """Get storefront configuration from settings."""
    defaults = {
        # Branding
        "BRAND_NAME": "Maison Aurèle",
        "APP_BASE_URL": "http://localhost:8000",

        # Anonymous session cookies
        "CART_COOKIE_NAME": "maison_aurele_cart",
        "CART_COOKIE_MAX_AGE": 60 * 60 * 24 * 60,  # 60 days
        "WISHLIST_COOKIE_NAME": "maison_aurele_wishlist",
        "WISHLIST_COOKIE_MAX_AGE": 60 * 60 * 24 * 90,  # 90 days

        # Checkout
        "DEFAULT_CURRENCY": "EUR",
        "SHIPPING_COUNTRIES": [
            "FR", "US", "GB", "DE", "IT", "ES", "CH", "BE", "NL",
            "JP", "CN", "AE", "SG", "AU", "CA", "AT", "PT", "IE",
        ],
        "ORDER_NUMBER_PREFIX": "MA",

        # Email
        "EMAIL_ENABLED": False,
        "EMAIL_REPLY_TO": "",

        # Back-office
        "LOW_STOCK_THRESHOLD": 2,
    }

    user_config = getattr(settings, "MAISON", {})
    return {**defaults, **user_config}


def get_setting(name, default=None):
    """Get a specific storefront setting."""
    config = get_config()
    return config.get(name, default)


def get_app_base_url():
    """Public origin of the storefront, without a trailing slash."""
    origin = get_setting("APP_BASE_URL") or "http://localhost:8000"
    return origin[:-1] if origin.endswith("/") else origin
