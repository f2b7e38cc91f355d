"""Store views: cart, wishlist, address book, checkout and the Stripe webhook."""

import json
import logging
from dataclasses import asdict

from django.conf import settings
from django.contrib.auth.mixins import LoginRequiredMixin
from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST
from django.views.generic import TemplateView

from maison.core.i18n import get_request_locale, localized

from .exceptions import AddressError, CartItemNotFound, CheckoutError, VariantNotFound
from .services import addresses, cart, checkout, wishlist, webhooks
from .services.session import current_user

logger = logging.getLogger(__name__)


def request_payload(request):
    """Form fields or a JSON object body, whichever the client sent."""
    if request.content_type == "application/json":
        try:
            data = json.loads(request.body or b"{}")
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}
    return request.POST.dict()


def _flag(value):
    return value in (True, "true", "on", "1", 1)


class CartView(TemplateView):
    template_name = "store/cart.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        locale = get_request_locale(self.request)
        user = current_user(self.request)
        context["cart"] = cart.get_cart_snapshot(self.request, locale)
        context["addresses"] = addresses.list_addresses(user) if user is not None else []
        context["checkout_status"] = self.request.GET.get("checkout")
        return context

    def get(self, request, *args, **kwargs):
        # Stripe sends the customer back here once paid; the cart is gone
        if request.GET.get("checkout") == "success":
            cart.clear_cart_session(request)
        return super().get(request, *args, **kwargs)


class WishlistView(TemplateView):
    template_name = "store/wishlist.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["wishlist"] = wishlist.get_wishlist_snapshot(self.request, get_request_locale(self.request))
        return context


@require_POST
def cart_add(request):
    locale = get_request_locale(request)
    data = request_payload(request)
    try:
        snapshot = cart.add_to_cart(request, data.get("variant_id"), data.get("quantity", 1), locale)
    except VariantNotFound:
        return JsonResponse(
            {"success": False, "error": localized(locale, "Article introuvable", "Variant not found"), "itemCount": 0},
            status=404,
        )
    return JsonResponse({"success": True, "itemCount": snapshot.item_count, "cart": asdict(snapshot)})


@require_POST
def cart_update(request):
    locale = get_request_locale(request)
    data = request_payload(request)
    try:
        quantity = int(data.get("quantity", 0))
    except (TypeError, ValueError):
        return JsonResponse(
            {
                "success": False,
                "error": localized(locale, "Quantité invalide", "Invalid quantity"),
                "cart": asdict(cart.get_cart_snapshot(request, locale)),
            },
            status=400,
        )
    try:
        snapshot = cart.update_cart_item_quantity(request, data.get("item_id"), quantity, locale)
    except CartItemNotFound:
        return JsonResponse(
            {
                "success": False,
                "error": localized(locale, "Article introuvable", "Item not found"),
                "cart": asdict(cart.get_cart_snapshot(request, locale)),
            },
            status=404,
        )
    return JsonResponse({"success": True, "cart": asdict(snapshot)})


@require_POST
def cart_remove(request):
    locale = get_request_locale(request)
    data = request_payload(request)
    try:
        snapshot = cart.remove_cart_item(request, data.get("item_id"), locale)
    except CartItemNotFound:
        return JsonResponse(
            {
                "success": False,
                "error": localized(locale, "Article introuvable", "Item not found"),
                "cart": asdict(cart.get_cart_snapshot(request, locale)),
            },
            status=404,
        )
    return JsonResponse({"success": True, "cart": asdict(snapshot)})


@require_POST
def cart_clear_session(request):
    cart.clear_cart_session(request)
    return JsonResponse({"ok": True})


@require_POST
def wishlist_toggle(request):
    locale = get_request_locale(request)
    snapshot = wishlist.toggle_wishlist_item(request, request_payload(request).get("product_id"), locale)
    return JsonResponse(asdict(snapshot))


@require_POST
def wishlist_remove(request):
    locale = get_request_locale(request)
    snapshot = wishlist.remove_wishlist_item(request, request_payload(request).get("product_id"), locale)
    return JsonResponse(asdict(snapshot))


@require_POST
def start_checkout(request):
    locale = get_request_locale(request)
    data = request_payload(request)
    try:
        result = checkout.start_checkout(request, locale, shipping_address_id=data.get("shipping_address_id") or None)
    except CheckoutError as exc:
        return JsonResponse({"ok": False, "error": str(exc), "code": exc.code}, status=400)
    return JsonResponse({"ok": True, "checkoutUrl": result.checkout_url})


class AddressBookView(LoginRequiredMixin, TemplateView):
    template_name = "store/addresses.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["addresses"] = addresses.list_addresses(self.request.user)
        return context


def _address_error(exc):
    status = {"auth_required": 401, "not_found": 404}.get(exc.code, 400)
    return JsonResponse({"ok": False, "error": str(exc), "code": exc.code}, status=status)


@require_POST
def address_create(request):
    locale = get_request_locale(request)
    data = request_payload(request)
    try:
        address = addresses.create_address(
            current_user(request), data, locale, is_default=_flag(data.get("is_default"))
        )
    except AddressError as exc:
        return _address_error(exc)
    return JsonResponse({"ok": True, "data": {"id": address.pk}}, status=201)


@require_POST
def address_update(request, pk):
    locale = get_request_locale(request)
    data = request_payload(request)
    is_default = _flag(data["is_default"]) if "is_default" in data else None
    try:
        addresses.update_address(current_user(request), pk, data, locale, is_default=is_default)
    except AddressError as exc:
        return _address_error(exc)
    return JsonResponse({"ok": True})


@require_POST
def address_delete(request, pk):
    try:
        addresses.delete_address(current_user(request), pk, get_request_locale(request))
    except AddressError as exc:
        return _address_error(exc)
    return JsonResponse({"ok": True})


@require_POST
def address_set_default(request, pk):
    try:
        addresses.set_default_address(current_user(request), pk, get_request_locale(request))
    except AddressError as exc:
        return _address_error(exc)
    return JsonResponse({"ok": True})


@csrf_exempt
@require_POST
def stripe_webhook(request):
    """Stripe webhook endpoint.

    Answers 400 only when the request cannot be authenticated; every
    verified event is acknowledged with 200.
    """
    signature = request.headers.get("Stripe-Signature")
    secret = settings.STRIPE_WEBHOOK_SECRET
    if not signature or not secret:
        logger.warning("Stripe webhook rejected: signature header or secret missing")
        return HttpResponse("Webhook signature misconfigured", status=400)

    try:
        event = webhooks.construct_event(request.body, signature, secret)
    except webhooks.WebhookError as exc:
        logger.warning("Stripe webhook rejected: %s", exc)
        return HttpResponse(f"Webhook Error: {exc}", status=400)

    webhooks.handle_event(event)
    return JsonResponse({"received": True})
