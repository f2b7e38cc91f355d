"""URL configuration for the Maison Aurèle storefront."""

from django.conf import settings
from django.conf.urls.i18n import i18n_patterns
from django.conf.urls.static import static
from django.contrib import admin
from django.contrib.auth import views as auth_views
from django.urls import include, path

from maison.core.views import AccountView, RegisterView, health_check
from maison.store.views import stripe_webhook

# Customer account pages
account_urlpatterns = [
    path("", AccountView.as_view(), name="account"),
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", auth_views.LoginView.as_view(template_name="account/login.html"), name="login"),
    path("logout/", auth_views.LogoutView.as_view(), name="logout"),
]

urlpatterns = [
    # Health check
    path("health/", health_check, name="health_check"),

    # Payment provider callbacks (never locale-prefixed)
    path("api/webhooks/stripe/", stripe_webhook, name="stripe-webhook"),

    # Back-office console
    path("admin/", include("maison.backoffice.urls", namespace="backoffice")),

    # Django admin
    path("django-admin/", admin.site.urls),
]

# Storefront, under /fr/ and /en/
urlpatterns += i18n_patterns(
    path("account/", include(account_urlpatterns)),
    path("", include("maison.store.urls", namespace="store")),
    path("", include("maison.catalog.urls", namespace="catalog")),
    path("", include("maison.editorial.urls", namespace="editorial")),
    prefix_default_language=True,
)

# Serve media files in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
