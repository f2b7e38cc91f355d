"""Store middleware."""

from .services.session import apply_session_cookies


class StoreCookieMiddleware:
    """Apply cart and wishlist cookies queued by the store services."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)
        return apply_session_cookies(request, response)
