"""Core mixins for view access control."""

from django.contrib.auth.mixins import AccessMixin
from django.shortcuts import redirect

from .i18n import DEFAULT_LOCALE
from .models import UserRole

BACKOFFICE_ROLES = frozenset({UserRole.ADMIN, UserRole.EDITOR, UserRole.MERCHANDISER})


def has_backoffice_access(user):
    """Back-office access requires one of the editorial or admin roles."""
    if not user.is_authenticated:
        return False
    if user.is_superuser:
        return True
    return user.role in BACKOFFICE_ROLES


class BackofficeRequiredMixin(AccessMixin):
    """Mixin for back-office views.

    Anyone without a back-office role is sent to the account page of the
    default locale rather than shown a 403.
    """

    required_roles = BACKOFFICE_ROLES

    def dispatch(self, request, *args, **kwargs):
        user = request.user
        allowed = has_backoffice_access(user) and (
            user.is_superuser or user.role in self.required_roles
        )
        if not allowed:
            return redirect(f"/{DEFAULT_LOCALE}/account/")
        return super().dispatch(request, *args, **kwargs)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["is_backoffice"] = True
        return context
