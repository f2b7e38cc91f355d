"""Core middleware for Maison Aurèle."""

from django.http import HttpResponseRedirect

from .i18n import LOCALES


class BackofficeLocaleRedirectMiddleware:
    """Redirect locale-prefixed back-office paths to the canonical /admin/.

    ``/fr/admin/orders/`` and ``/en/admin`` both end up under ``/admin/`` so
    the console is never rendered inside a storefront locale.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        target = canonical_backoffice_path(request.path)
        if target is not None:
            query = request.META.get("QUERY_STRING", "")
            return HttpResponseRedirect(f"{target}?{query}" if query else target)

        response = self.get_response(request)
        return response


def canonical_backoffice_path(path):
    """Return the un-prefixed back-office path, or None when not applicable."""
    for locale in LOCALES:
        prefix = f"/{locale}/admin"
        if path == prefix or path.startswith(f"{prefix}/"):
            return path[len(locale) + 1:]
    return None
