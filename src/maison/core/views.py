"""Core views for Maison Aurèle."""

import logging

from django.contrib.auth import authenticate, get_user_model, login
from django.contrib.auth.mixins import LoginRequiredMixin
from django.db import connection
from django.http import JsonResponse
from django.shortcuts import redirect
from django.views.generic import TemplateView

from .i18n import get_request_locale, localized

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def health_check(request):
    """Health check endpoint for container orchestration."""
    try:
        # Check database connection
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")

        return JsonResponse({"status": "healthy", "database": "connected"})
    except Exception as e:
        logger.exception("Health check failed")
        return JsonResponse(
            {"status": "unhealthy", "error": str(e)},
            status=503,
        )


def register_account(email, password, locale, first_name="", last_name=""):
    """Create a customer account.

    Returns:
        (user, None) on success, (None, error message) otherwise.
    """
    User = get_user_model()

    email = (email or "").strip().lower()
    password = (password or "").strip()

    if not email or not password:
        return None, localized(locale, "L'email et le mot de passe sont requis.", "Email and password are required.")

    if len(password) < MIN_PASSWORD_LENGTH:
        return None, localized(
            locale,
            "Le mot de passe doit contenir au moins 8 caractères.",
            "Password must be at least 8 characters.",
        )

    if User.objects.filter(email=email).exists():
        return None, localized(
            locale,
            "Un compte existe déjà pour cet email.",
            "An account already exists for this email.",
        )

    user = User.objects.create_user(
        email=email,
        password=password,
        first_name=(first_name or "").strip(),
        last_name=(last_name or "").strip(),
        locale=locale,
    )
    logger.info("Registered account %s", user.pk)
    return user, None


class RegisterView(TemplateView):
    """Customer registration."""

    template_name = "account/register.html"

    def post(self, request, *args, **kwargs):
        locale = get_request_locale(request)
        user, error = register_account(
            request.POST.get("email"),
            request.POST.get("password"),
            locale,
            first_name=request.POST.get("first_name", ""),
            last_name=request.POST.get("last_name", ""),
        )
        if error:
            return self.render_to_response(self.get_context_data(error=error), status=400)

        user = authenticate(request, email=user.email, password=request.POST.get("password", "").strip())
        if user is not None:
            login(request, user)
        return redirect(f"/{locale}/account/")


class AccountView(LoginRequiredMixin, TemplateView):
    """Account page showing the customer's addresses and orders."""

    template_name = "account/account.html"

    def get_context_data(self, **kwargs):
        from maison.store.services.addresses import list_addresses

        context = super().get_context_data(**kwargs)
        user = self.request.user
        context.update({
            "user": user,
            "addresses": list_addresses(user),
            "orders": user.orders.order_by("-placed_at")[:20],
        })
        return context
