"""Tests for locale helpers and locale routing."""

import pytest
from django.test import RequestFactory

from maison.core.i18n import get_request_locale, is_locale, localized, normalize_locale
from maison.core.middleware import canonical_backoffice_path


class TestNormalizeLocale:
    @pytest.mark.parametrize("value", ["fr", "FR", "fr-CA", " fr "])
    def test_french_variants(self, value):
        assert normalize_locale(value) == "fr"

    @pytest.mark.parametrize("value", [None, "", "en", "de", "es-ES"])
    def test_everything_else_is_english(self, value):
        assert normalize_locale(value) == "en"


def test_is_locale():
    assert is_locale("fr")
    assert is_locale("en")
    assert not is_locale("de")
    assert not is_locale("")


def test_localized_picks_message():
    assert localized("fr", "Bonjour", "Hello") == "Bonjour"
    assert localized("en", "Bonjour", "Hello") == "Hello"


def test_request_locale_falls_back_to_french():
    request = RequestFactory().get("/")
    request.LANGUAGE_CODE = "de"

    assert get_request_locale(request) == "fr"


class TestCanonicalBackofficePath:
    def test_prefixed_paths(self):
        assert canonical_backoffice_path("/fr/admin/orders/") == "/admin/orders/"
        assert canonical_backoffice_path("/en/admin") == "/admin"

    def test_other_paths(self):
        assert canonical_backoffice_path("/admin/") is None
        assert canonical_backoffice_path("/fr/administration/") is None
        assert canonical_backoffice_path("/fr/cart/") is None


@pytest.mark.django_db
class TestLocaleRouting:
    def test_locale_prefixed_backoffice_redirects(self, client):
        response = client.get("/fr/admin/orders/?page=2")

        assert response.status_code == 302
        assert response["Location"] == "/admin/orders/?page=2"

    def test_root_redirects_to_a_locale(self, client):
        response = client.get("/")

        assert response.status_code == 302
        assert response["Location"].startswith("/fr/") or response["Location"].startswith("/en/")
